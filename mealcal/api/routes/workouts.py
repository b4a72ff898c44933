from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request

from mealcal.domain.Workout import Workout
from mealcal.utilities.constants import WORKOUT_KIND
from mealcal.utilities.validators import WorkoutInput

router = APIRouter(prefix="/api/workouts", tags=["workouts"])


def _session(request: Request):
    return request.app.state.sessions[WORKOUT_KIND]


@router.get("")
def list_workouts(request: Request, day: date = Query(..., description="YYYY-MM-DD"),
                  type: Optional[str] = Query(default=None)):
    try:
        workouts = _session(request).records_for_day(day, type)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"day": day.isoformat(), "count": len(workouts), "workouts": [w.to_dict() for w in workouts]}


@router.get("/{workout_id}")
def get_workout(request: Request, workout_id: str):
    workout = _session(request).repository.get(workout_id)
    if workout is None:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout.to_dict()


@router.post("")
def save_workout(request: Request, payload: WorkoutInput):
    try:
        workout = Workout(id=payload.id, type=payload.type, date=payload.date,
                          distance=payload.distance, duration=payload.duration, notes=payload.notes)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    result = _session(request).save(workout)
    if not result:
        raise HTTPException(status_code=500, detail=f"Could not save workout: {result.error}")
    return workout.to_dict()


@router.delete("/{workout_id}")
def delete_workout(request: Request, workout_id: str):
    result = _session(request).delete(workout_id)
    if not result:
        raise HTTPException(status_code=500, detail=f"Could not delete workout: {result.error}")
    return {"id": workout_id, "removed": result.value}
