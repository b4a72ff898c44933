from datetime import datetime, timezone
from typing import Final

# Entity kinds (store partitions)
MEAL_KIND: Final[str] = "meal"
WORKOUT_KIND: Final[str] = "workout"
ENTITY_KINDS: Final[tuple] = (MEAL_KIND, WORKOUT_KIND)

# Keys used by the legacy key-value file
LEGACY_MEALS_KEY: Final[str] = "savedMeals"
LEGACY_WORKOUTS_KEY: Final[str] = "savedWorkouts"
FREQUENT_MEALS_KEY: Final[str] = "frequentMeals"

# Numeric legacy timestamps count seconds from this instant
LEGACY_REFERENCE_DATE: Final[datetime] = datetime(2001, 1, 1, tzinfo=timezone.utc)

BASE_FREQUENT_MEALS: Final[tuple] = (
    "Coffee", "Toast", "Yogurt", "Omelette", "Pasta", "Rice", "Salad",
    "Chicken", "Fish", "Soup", "Fruit", "Smoothie",
)
