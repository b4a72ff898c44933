"""Simple Event Bus / Observer implementation for record and calendar session changes.

Event names:
  record.saved          -> payload {"kind": str, "record": Meal | Workout}
  record.deleted        -> payload {"kind": str, "record_id": str, "removed": int}
  storage.error         -> payload {"kind": str, "operation": str, "error": str}
  legacy.imported       -> payload {"kind": str, "imported": int, "cleared": bool}
  session.week_changed  -> payload {"kind": str, "start": date}
  session.date_selected -> payload {"kind": str, "date": date}
  session.editor_opened -> payload {"kind": str, "date": date, "type": str | None, "target": record | None}
  session.editor_closed -> payload {"kind": str, "reason": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
from collections import defaultdict
from typing import Callable, Any, Dict, List
import logging

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
RECORD_SAVED = "record.saved"
RECORD_DELETED = "record.deleted"
STORAGE_ERROR = "storage.error"
LEGACY_IMPORTED = "legacy.imported"
SESSION_WEEK_CHANGED = "session.week_changed"
SESSION_DATE_SELECTED = "session.date_selected"
SESSION_EDITOR_OPENED = "session.editor_opened"
SESSION_EDITOR_CLOSED = "session.editor_closed"

ALL_EVENTS = (
	RECORD_SAVED, RECORD_DELETED, STORAGE_ERROR, LEGACY_IMPORTED,
	SESSION_WEEK_CHANGED, SESSION_DATE_SELECTED, SESSION_EDITOR_OPENED, SESSION_EDITOR_CLOSED,
)


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def subscribe_all(self, callback: Callable[[str, Any], None]):
		for event_name in ALL_EVENTS:
			self.subscribe(event_name, callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:  # a failing observer must not break the publisher
				logger.exception("[EventBus] Error delivering %s to %r", event_name, cb)


# Default bus for callers that do not inject their own
GLOBAL_EVENT_BUS = EventBus()


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'ALL_EVENTS',
	'RECORD_SAVED', 'RECORD_DELETED', 'STORAGE_ERROR', 'LEGACY_IMPORTED',
	'SESSION_WEEK_CHANGED', 'SESSION_DATE_SELECTED', 'SESSION_EDITOR_OPENED', 'SESSION_EDITOR_CLOSED',
]
