"""Week arithmetic: week boundaries, day sequences and local-time day intervals.

All functions are pure. Week start follows a fixed convention given by
``first_weekday`` (0 = Monday ... 6 = Sunday), defaulting to the configured
FIRST_WEEKDAY.
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple

from mealcal.utilities.config import FIRST_WEEKDAY

DAYS_PER_WEEK = 7


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return to_local(value).date()
    return value


def week_start(value, first_weekday: Optional[int] = None) -> date:
    """Return the first day of the week containing ``value`` (date or datetime)."""
    if first_weekday is None:
        first_weekday = FIRST_WEEKDAY
    d = _as_date(value)
    offset = (d.weekday() - first_weekday) % DAYS_PER_WEEK
    return d - timedelta(days=offset)


def week_days(start: date) -> List[date]:
    """Seven consecutive dates beginning at ``start``."""
    start = _as_date(start)
    return [start + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def shift_week(start: date, weeks: int) -> date:
    return _as_date(start) + timedelta(days=DAYS_PER_WEEK * weeks)


def to_local(value: datetime) -> datetime:
    """Aware datetime in the local time zone (naive values are taken as local time)."""
    return value.astimezone()


def start_of_day(value) -> datetime:
    return datetime.combine(_as_date(value), time.min).astimezone()


def day_bounds(value) -> Tuple[datetime, datetime]:
    """Half-open local-time interval [start of day, start of next day).

    The end is computed from the next calendar date rather than start + 24h so
    that days spanning a DST change keep their real length.
    """
    d = _as_date(value)
    return start_of_day(d), start_of_day(d + timedelta(days=1))


def is_same_day(a: datetime, b) -> bool:
    start, end = day_bounds(b)
    return start <= to_local(a) < end


__all__ = [
    'DAYS_PER_WEEK', 'week_start', 'week_days', 'shift_week',
    'to_local', 'start_of_day', 'day_bounds', 'is_same_day',
]
