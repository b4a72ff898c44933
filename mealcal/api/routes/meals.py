from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request

from mealcal.domain.Meal import Meal
from mealcal.utilities.constants import MEAL_KIND
from mealcal.utilities.validators import MealInput

router = APIRouter(prefix="/api/meals", tags=["meals"])


def _session(request: Request):
    return request.app.state.sessions[MEAL_KIND]


@router.get("")
def list_meals(request: Request, day: date = Query(..., description="YYYY-MM-DD"),
               type: Optional[str] = Query(default=None)):
    """Meals of one day, breakfast first."""
    try:
        meals = _session(request).records_for_day(day, type)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"day": day.isoformat(), "count": len(meals), "meals": [m.to_dict() for m in meals]}


@router.get("/{meal_id}")
def get_meal(request: Request, meal_id: str):
    meal = _session(request).repository.get(meal_id)
    if meal is None:
        raise HTTPException(status_code=404, detail="Meal not found")
    return meal.to_dict()


@router.post("")
def save_meal(request: Request, payload: MealInput):
    try:
        meal = Meal(id=payload.id, name=payload.name, type=payload.type,
                    date=payload.date, notes=payload.notes)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    result = _session(request).save(meal)
    if not result:
        raise HTTPException(status_code=500, detail=f"Could not save meal: {result.error}")
    return meal.to_dict()


@router.delete("/{meal_id}")
def delete_meal(request: Request, meal_id: str):
    result = _session(request).delete(meal_id)
    if not result:
        raise HTTPException(status_code=500, detail=f"Could not delete meal: {result.error}")
    return {"id": meal_id, "removed": result.value}
