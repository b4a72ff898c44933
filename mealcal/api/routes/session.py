"""Calendar session routes: week navigation and editor intents for /api/meals and /api/workouts."""
from datetime import date

from fastapi import APIRouter, HTTPException, Query, Request

from mealcal.utilities.constants import MEAL_KIND, WORKOUT_KIND
from mealcal.utilities.validators import EditorOpenInput

router = APIRouter(tags=["session"])

SESSION_PATHS = {"meals": MEAL_KIND, "workouts": WORKOUT_KIND}


def _session(request: Request, kind: str):
    if kind not in SESSION_PATHS:
        raise HTTPException(status_code=404, detail=f"Unknown calendar: {kind}")
    return request.app.state.sessions[SESSION_PATHS[kind]]


@router.get("/api/{kind}/session")
def get_session(request: Request, kind: str):
    return _session(request, kind).to_dict()


@router.post("/api/{kind}/session/next")
def next_week(request: Request, kind: str):
    session = _session(request, kind)
    session.next_week()
    return session.to_dict()


@router.post("/api/{kind}/session/previous")
def previous_week(request: Request, kind: str):
    session = _session(request, kind)
    session.previous_week()
    return session.to_dict()


@router.post("/api/{kind}/session/today")
def go_to_today(request: Request, kind: str):
    session = _session(request, kind)
    session.go_to_today()
    return session.to_dict()


@router.post("/api/{kind}/session/select")
def select_date(request: Request, kind: str, day: date = Query(...)):
    session = _session(request, kind)
    session.select_date(day)
    return session.to_dict()


@router.post("/api/{kind}/session/editor")
def open_editor(request: Request, kind: str, payload: EditorOpenInput):
    session = _session(request, kind)
    target = None
    if payload.record_id:
        target = session.repository.get(payload.record_id)
        if target is None:
            raise HTTPException(status_code=404, detail="Record not found")
    try:
        session.open_editor(payload.date, payload.type, target)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return session.to_dict()


@router.delete("/api/{kind}/session/editor")
def close_editor(request: Request, kind: str):
    session = _session(request, kind)
    session.cancel()
    return session.to_dict()
