"""Calendar session: transient navigation and editor state for one calendar (meals or workouts).

The session is the editor-intent surface the presentation layer talks to. It
holds the displayed week, the selected date and the editor sheet state, and
forwards record writes and day queries to its repository. Every state change
is announced on the event bus instead of through UI-bound properties.

States:
  browsing -> open_editor() -> editing
  editing  -> close_editor() / cancel() / save() / delete() -> browsing
Week navigation is valid in both states and leaves the editor untouched.
Nothing here is persisted.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

from mealcal.domain.Result import Result
from mealcal.domain.Week import Week
from mealcal.events.Event_Bus import EventBus
from mealcal.events.event_helpers import (
    publish_week_changed, publish_date_selected, publish_editor_opened, publish_editor_closed,
)
from mealcal.infra.Record_Repository import RecordRepository

logger = logging.getLogger(__name__)

BROWSING = "browsing"
EDITING = "editing"


def _day(value) -> date:
    return value.date() if isinstance(value, datetime) else value


class CalendarSession:
    def __init__(self, repository: RecordRepository, bus: Optional[EventBus] = None,
                 today: Optional[Callable[[], date]] = None, first_weekday: Optional[int] = None):
        self.repository = repository
        self.kind = repository.kind
        self.bus = bus if bus is not None else repository.bus
        self.first_weekday = first_weekday
        self._today = today or date.today

        now = self._today()
        self.current_week = Week.containing(now, first_weekday)
        self.selected_date: date = now
        self.editor_open = False
        self.editing_target: Any = None
        self.editing_date: date = now
        self.editing_type = next(iter(repository.type_enum))

    @property
    def state(self) -> str:
        return EDITING if self.editor_open else BROWSING

    # --- week navigation ---
    def _set_week(self, week: Week) -> None:
        self.current_week = week
        publish_week_changed(self.kind, week.start_date, bus=self.bus)

    def next_week(self) -> Week:
        self._set_week(self.current_week.shifted(1))
        return self.current_week

    def previous_week(self) -> Week:
        self._set_week(self.current_week.shifted(-1))
        return self.current_week

    def go_to_today(self) -> Week:
        now = self._today()
        self._set_week(Week.containing(now, self.first_weekday))
        self.select_date(now)
        return self.current_week

    def select_date(self, day) -> None:
        self.selected_date = _day(day)
        publish_date_selected(self.kind, self.selected_date, bus=self.bus)

    # --- editor ---
    def open_editor(self, day, record_type=None, target=None) -> None:
        """Open the editor for ``day``; ``target`` is an existing record to edit or None for a new one.

        Opening while already editing re-targets the editor.
        """
        if record_type is None and target is not None:
            record_type = target.type
        self.editing_date = _day(day)
        if record_type is not None:
            self.editing_type = self.repository.type_enum.parse(record_type)
        self.editing_target = target
        self.editor_open = True
        logger.debug("Editor opened for %s on %s (%s)", self.kind, self.editing_date,
                     "edit" if target is not None else "new")
        publish_editor_opened(self.kind, self.editing_date, self.editing_type.value, target, bus=self.bus)

    def close_editor(self, reason: str = "close") -> None:
        if not self.editor_open:
            return
        self.editor_open = False
        self.editing_target = None
        publish_editor_closed(self.kind, reason, bus=self.bus)

    def cancel(self) -> None:
        self.close_editor("cancel")

    # --- record intents ---
    def save(self, record) -> Result:
        result = self.repository.save(record)
        self.close_editor("save")
        return result

    def delete(self, record) -> Result:
        result = self.repository.delete(record)
        self.close_editor("delete")
        return result

    def records_for_day(self, day, record_type=None) -> List:
        return self.repository.records_for_day(day, record_type)

    def week_records(self) -> Dict[date, List]:
        return self.repository.records_for_week(self.current_week.start_date)

    def to_dict(self) -> Dict[str, Any]:
        target = self.editing_target
        return {
            "kind": self.kind,
            "state": self.state,
            "week": self.current_week.to_dict(),
            "selected_date": self.selected_date.isoformat(),
            "editor_open": self.editor_open,
            "editing_date": self.editing_date.isoformat(),
            "editing_type": self.editing_type.value,
            "editing_target": target.to_dict() if target is not None else None,
        }


__all__ = ['CalendarSession', 'BROWSING', 'EDITING']
