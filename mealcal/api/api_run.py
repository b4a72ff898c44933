from fastapi import FastAPI, Query, Request, Response
from pathlib import Path
from datetime import date
from typing import Optional
import logging

from mealcal.events.Event_Bus import EventBus
from mealcal.events.web_observers import EventLog
from mealcal.domain.Week import Week
from mealcal.infra.Record_Store import RecordStore, JsonRecordStore
from mealcal.infra.Meal_Repository import MealRepository
from mealcal.infra.Workout_Repository import WorkoutRepository
from mealcal.infra.Legacy_Import import LegacyDefaults, LegacyImporter
from mealcal.infra.Frequent_Meals_Repository import FrequentMealsRepository
from mealcal.infra.pdf_utils import generate_pdf_for_week
from mealcal.infra.paths import STORE_FILE, LEGACY_FILE, FREQUENT_MEALS_FILE
from mealcal.logic.reporting.summary import compute_week_summary
from mealcal.logic.session.calendar_session import CalendarSession
from mealcal.utilities.config import CLEAR_LEGACY_AFTER_IMPORT, FIRST_WEEKDAY
from mealcal.utilities.constants import MEAL_KIND, WORKOUT_KIND
from mealcal.utilities.validators import FrequentMealInput

# Routers
from mealcal.api.routes import meals, workouts, session

# Logging
logger = logging.getLogger("mealcal_app")


def create_app(store: Optional[RecordStore] = None,
               legacy: Optional[LegacyDefaults] = None,
               bus: Optional[EventBus] = None,
               frequent_meals_file: Optional[Path] = None,
               clear_legacy: bool = CLEAR_LEGACY_AFTER_IMPORT,
               first_weekday: int = FIRST_WEEKDAY) -> FastAPI:
    """Wire store, repositories, sessions and routes into a FastAPI app.

    Legacy records are reconciled into the store before the app is returned,
    so no query can run against a store that is still waiting for its import.
    """
    store = store if store is not None else JsonRecordStore(STORE_FILE)
    legacy = legacy if legacy is not None else LegacyDefaults(LEGACY_FILE)
    bus = bus if bus is not None else EventBus()

    event_log = EventLog()
    event_log.start(bus)

    reports = LegacyImporter(store, legacy, bus=bus, clear_after_import=clear_legacy).import_all()
    for report in reports.values():
        logger.info("Legacy import %s", report)

    meal_repo = MealRepository(store, bus=bus)
    workout_repo = WorkoutRepository(store, bus=bus)

    app = FastAPI(title="Meal & Workout Calendar API")
    app.state.store = store
    app.state.bus = bus
    app.state.event_log = event_log
    app.state.first_weekday = first_weekday
    app.state.sessions = {
        MEAL_KIND: CalendarSession(meal_repo, bus=bus, first_weekday=first_weekday),
        WORKOUT_KIND: CalendarSession(workout_repo, bus=bus, first_weekday=first_weekday),
    }
    app.state.frequent_meals = FrequentMealsRepository(frequent_meals_file or FREQUENT_MEALS_FILE)
    app.state.frequent_meals.import_legacy(legacy)

    # Include routers
    # Session routes first: /api/meals/session must not be read as a meal id
    app.include_router(session.router)
    app.include_router(meals.router)
    app.include_router(workouts.router)

    @app.get("/api/week")
    def get_week(request: Request, start: Optional[date] = Query(default=None, description="Any date of the week")):
        """Week window containing ``start`` (defaults to the meal session's current week)."""
        if start is None:
            return request.app.state.sessions[MEAL_KIND].current_week.to_dict()
        return Week.containing(start, request.app.state.first_weekday).to_dict()

    def _summary(request: Request, start: Optional[date]):
        sessions = request.app.state.sessions
        if start is None:
            week = sessions[MEAL_KIND].current_week
        else:
            week = Week.containing(start, request.app.state.first_weekday)
        return compute_week_summary(week.start_date,
                                    sessions[MEAL_KIND].repository,
                                    sessions[WORKOUT_KIND].repository)

    @app.get("/api/summary")
    def api_summary(request: Request, start: Optional[date] = Query(default=None)):
        return _summary(request, start)

    @app.get("/export_pdf")
    def export_pdf(request: Request, start: Optional[date] = Query(default=None)):
        summary = _summary(request, start)
        pdf_bytes = generate_pdf_for_week(summary)
        filename = f"week_summary_{summary['start']}.pdf"
        return Response(
            content=pdf_bytes,
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.get("/api/frequent-meals")
    def list_frequent_meals(request: Request):
        names = request.app.state.frequent_meals.list_all()
        return {"count": len(names), "meals": names}

    @app.post("/api/frequent-meals")
    def add_frequent_meal(request: Request, payload: FrequentMealInput):
        added = request.app.state.frequent_meals.add(payload.name)
        return {"added": added, "meals": request.app.state.frequent_meals.list_all()}

    @app.get("/api/events")
    def api_events(request: Request, since: Optional[int] = Query(default=None)):
        return request.app.state.event_log.get_events(since)

    return app
