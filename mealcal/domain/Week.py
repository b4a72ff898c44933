"""Week value object: start date plus its seven ordered days (derived, never stored)."""
from datetime import date, datetime
from typing import Optional

from mealcal.logic.calendar.week import week_start, week_days, shift_week


class Week:
    def __init__(self, start_date: date):
        self.start_date = start_date
        self.days = week_days(start_date)

    @classmethod
    def containing(cls, value, first_weekday: Optional[int] = None) -> "Week":
        return cls(week_start(value, first_weekday))

    @property
    def end_date(self) -> date:
        return self.days[-1]

    def shifted(self, weeks: int) -> "Week":
        return Week(shift_week(self.start_date, weeks))

    def __contains__(self, value) -> bool:
        d = value.date() if isinstance(value, datetime) else value
        return self.start_date <= d <= self.end_date

    def __eq__(self, other):
        if not isinstance(other, Week):
            return NotImplemented
        return self.start_date == other.start_date

    __hash__ = None

    def __str__(self) -> str:
        return f"Week {self.start_date.isoformat()} - {self.end_date.isoformat()}"

    __repr__ = __str__

    def to_dict(self):
        return {
            "start": self.start_date.isoformat(),
            "end": self.end_date.isoformat(),
            "days": [d.isoformat() for d in self.days],
        }
