"""Meal domain entity: id, name, meal type, date and free-text notes."""
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import uuid4


class MealType(str, Enum):
    # Declaration order is the display/sort order within a day
    breakfast = "breakfast"
    lunch = "lunch"
    meal = "meal"
    snack = "snack"
    dinner = "dinner"

    @property
    def order(self) -> int:
        return list(MealType).index(self)

    @property
    def label(self) -> str:
        return MEAL_TYPE_LABELS[self]

    @property
    def icon(self) -> str:
        return MEAL_TYPE_ICONS[self]

    @classmethod
    def parse(cls, raw) -> "MealType":
        """Accept canonical names as well as the labels older app versions stored."""
        if isinstance(raw, MealType):
            return raw
        key = str(raw or "").strip()
        try:
            return cls(key.lower())
        except ValueError:
            pass
        if key in LEGACY_MEAL_LABELS:
            return LEGACY_MEAL_LABELS[key]
        raise ValueError(f"Unknown meal type: {raw!r}")


MEAL_TYPE_LABELS = {
    MealType.breakfast: "Breakfast",
    MealType.lunch: "Lunch",
    MealType.meal: "Meal",
    MealType.snack: "Snack",
    MealType.dinner: "Dinner",
}

MEAL_TYPE_ICONS = {
    MealType.breakfast: "☕",
    MealType.lunch: "🥪",
    MealType.meal: "🍲",
    MealType.snack: "🍎",
    MealType.dinner: "🍽️",
}

LEGACY_MEAL_LABELS = {
    "Desayuno": MealType.breakfast,
    "Almuerzo": MealType.lunch,
    "Comida": MealType.meal,
    "Merienda": MealType.snack,
    "Cena": MealType.dinner,
}


class Meal:
    def __init__(self, name: str = "", type: MealType = MealType.meal, date: Optional[datetime] = None,
                 notes: str = "", id: Optional[str] = None):
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Meal name cannot be empty")
        self._id = str(id) if id else str(uuid4())
        self.name = name
        self.type = MealType.parse(type)
        self.date = date if date is not None else datetime.now()
        self.notes = notes or ""

    @property
    def id(self) -> str:
        return self._id

    def __str__(self) -> str:
        parts = [f"{self.type.label}: {self.name}", self.date.strftime("%Y-%m-%d %H:%M")]
        if self.notes:
            parts.append(f"Notes: {self.notes}")
        return " - ".join(parts)

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, Meal):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None

    def copy_with(self, **changes) -> "Meal":
        """Return an edited copy that keeps the same id."""
        data = {"name": self.name, "type": self.type, "date": self.date, "notes": self.notes}
        data.update(changes)
        data.pop("id", None)
        return Meal(id=self.id, **data)

    @staticmethod
    def from_dict(data):
        '''Creates a Meal from its stored dictionary form. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        raw_date = d.get("date")
        if isinstance(raw_date, str):
            raw_date = datetime.fromisoformat(raw_date)
        return Meal(
            name=d.get("name", ""),
            type=d.get("type", MealType.meal),
            date=raw_date,
            notes=d.get("notes") or "",
            id=d.get("id"),
        )

    def to_dict(self):
        '''Converts the Meal to a dictionary for JSON persistence.'''
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "date": self.date.isoformat(),
            "notes": self.notes,
        }
