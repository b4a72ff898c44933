"""Frequent meals: fixed suggestions plus the user's own favourites (file persistence)."""

import json
import logging
from pathlib import Path
from typing import List

from mealcal.infra.Record_Store import atomic_write_json
from mealcal.utilities.constants import BASE_FREQUENT_MEALS, FREQUENT_MEALS_KEY
from mealcal.utilities.errors import DecodeError

logger = logging.getLogger(__name__)


def _unique(names):
    seen = set()
    return [n for n in names if not (n in seen or seen.add(n))]


class FrequentMealsRepository:
    def __init__(self, path: Path):
        self.path = Path(path)

    def user_meals(self) -> List[str]:
        """Read user favourites with graceful error handling."""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in frequent meals file: {e}")
            return []
        except OSError as e:
            logger.error(f"Error reading frequent meals: {e}")
            return []
        if not isinstance(data, list):
            return []
        return [n for n in data if isinstance(n, str) and n.strip()]

    def list_all(self) -> List[str]:
        """Base suggestions followed by user favourites, without duplicates."""
        return _unique(list(BASE_FREQUENT_MEALS) + self.user_meals())

    def _save(self, names: List[str]) -> bool:
        try:
            atomic_write_json(self.path, names, prefix=".frequent_")
        except OSError as e:
            logger.error(f"Error saving frequent meals: {e}")
            return False
        return True

    def add(self, name: str) -> bool:
        """Add a favourite; returns False for blank names or names already suggested."""
        name = (name or '').strip()
        if not name or name in self.list_all():
            return False
        return self._save(self.user_meals() + [name])

    def import_legacy(self, legacy) -> int:
        """Seed the favourites file from the legacy ``frequentMeals`` key.

        Only runs while the file does not exist yet; returns how many names were copied.
        """
        if self.path.exists():
            return 0
        try:
            raw = legacy.get(FREQUENT_MEALS_KEY)
        except DecodeError as e:
            logger.error(f"Legacy frequent meals ignored: {e}")
            return 0
        if not isinstance(raw, list):
            return 0
        names = _unique(n.strip() for n in raw if isinstance(n, str) and n.strip())
        if not names or not self._save(names):
            return 0
        logger.info(f"Imported {len(names)} legacy frequent meals")
        return len(names)
