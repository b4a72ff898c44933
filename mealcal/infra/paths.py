from mealcal.utilities.config import DATA_DIR, STORE_FILE, LEGACY_FILE

# Centralized paths for data files (single source of truth)
FREQUENT_MEALS_FILE = DATA_DIR / 'frequent_meals.json'

__all__ = ['DATA_DIR', 'STORE_FILE', 'LEGACY_FILE', 'FREQUENT_MEALS_FILE']
