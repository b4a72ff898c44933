"""Workout domain entity: id, activity type, date, optional distance (km) and duration (minutes)."""
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import uuid4


class WorkoutType(str, Enum):
    running = "running"
    walking = "walking"
    cycling = "cycling"
    gym = "gym"
    yoga = "yoga"
    swimming = "swimming"
    other = "other"

    @property
    def order(self) -> int:
        return list(WorkoutType).index(self)

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def icon(self) -> str:
        return WORKOUT_TYPE_ICONS[self]

    @classmethod
    def parse(cls, raw) -> "WorkoutType":
        if isinstance(raw, WorkoutType):
            return raw
        key = str(raw or "").strip()
        try:
            return cls(key.lower())
        except ValueError:
            pass
        if key in LEGACY_WORKOUT_LABELS:
            return LEGACY_WORKOUT_LABELS[key]
        raise ValueError(f"Unknown workout type: {raw!r}")


WORKOUT_TYPE_ICONS = {
    WorkoutType.running: "🏃‍♀️",
    WorkoutType.walking: "🚶‍♀️",
    WorkoutType.cycling: "🚴‍♀️",
    WorkoutType.gym: "🏋️‍♂️",
    WorkoutType.yoga: "🧘‍♀️",
    WorkoutType.swimming: "🏊‍♀️",
    WorkoutType.other: "⚡️",
}

LEGACY_WORKOUT_LABELS = {
    "Correr": WorkoutType.running,
    "Caminar": WorkoutType.walking,
    "Ciclismo": WorkoutType.cycling,
    "Gimnasio": WorkoutType.gym,
    "Yoga": WorkoutType.yoga,
    "Natación": WorkoutType.swimming,
    "Otro": WorkoutType.other,
}


def _non_negative(value, field: str) -> Optional[float]:
    if value is None:
        return None
    value = float(value)
    if value < 0:
        raise ValueError(f"Workout {field} cannot be negative")
    return value


class Workout:
    def __init__(self, type: WorkoutType = WorkoutType.other, date: Optional[datetime] = None,
                 distance: Optional[float] = None, duration: Optional[float] = None,
                 notes: str = "", id: Optional[str] = None):
        self._id = str(id) if id else str(uuid4())
        self.type = WorkoutType.parse(type)
        self.date = date if date is not None else datetime.now()
        self.distance = _non_negative(distance, "distance")
        self.duration = _non_negative(duration, "duration")
        self.notes = notes or ""

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self.type.label

    def summary_text(self) -> str:
        """Short one-line text: type plus whichever of distance / duration is known."""
        parts = [self.type.label]
        if self.distance is not None:
            parts.append(f"{self.distance:.2f} km")
        if self.duration is not None:
            parts.append(f"{self.duration:.0f} min")
        return " · ".join(parts)

    def __str__(self) -> str:
        text = f"{self.summary_text()} - {self.date.strftime('%Y-%m-%d %H:%M')}"
        return f"{text} - Notes: {self.notes}" if self.notes else text

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, Workout):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None

    def copy_with(self, **changes) -> "Workout":
        data = {"type": self.type, "date": self.date, "distance": self.distance,
                "duration": self.duration, "notes": self.notes}
        data.update(changes)
        data.pop("id", None)
        return Workout(id=self.id, **data)

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        raw_date = d.get("date")
        if isinstance(raw_date, str):
            raw_date = datetime.fromisoformat(raw_date)
        return Workout(
            type=d.get("type", WorkoutType.other),
            date=raw_date,
            distance=d.get("distance"),
            duration=d.get("duration"),
            notes=d.get("notes") or "",
            id=d.get("id"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "type": self.type.value,
            "date": self.date.isoformat(),
            "distance": self.distance,
            "duration": self.duration,
            "notes": self.notes,
        }
