from mealcal.domain.Meal import Meal, MealType
from mealcal.infra.Record_Repository import RecordRepository
from mealcal.utilities.constants import MEAL_KIND


class MealRepository(RecordRepository):
    """Meals ordered by meal type (breakfast first), then name, then id."""
    kind = MEAL_KIND
    record_class = Meal
    type_enum = MealType

    def sort_key(self, meal: Meal) -> tuple:
        return (meal.type.order, meal.name, meal.id)
