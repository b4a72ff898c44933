"""Web-facing observer for record and session events.

An EventLog subscribes to every event on a bus and keeps a lightweight
in-memory ring buffer that the HTTP layer exposes for polling, so a client can
refresh its calendar after a change without reloading everything.

Design:
  * Each event stored with an auto-increment integer id (cursor) so clients
    can request only newer events (since=<last_id_seen>).
  * Thread-safety with a simple Lock (uvicorn may call handlers from a
    worker thread pool).
  * A max_events cap prevents unbounded memory growth.
"""
from __future__ import annotations
from typing import List, Dict, Any, Optional
from threading import Lock
from datetime import date, datetime, timezone
import logging

from .Event_Bus import EventBus, GLOBAL_EVENT_BUS

logger = logging.getLogger(__name__)

MAX_EVENTS = 300  # keep a few hundred recent events


def _plain(value: Any) -> Any:
    """Reduce payload values to JSON-friendly data."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    return value


class EventLog:
    def __init__(self, max_events: int = MAX_EVENTS):
        self._lock = Lock()
        self._events: List[Dict[str, Any]] = []
        self._next_id = 1
        self.max_events = max_events
        self._bus: Optional[EventBus] = None

    def record(self, event_name: str, payload: Any):  # signature expected by EventBus
        with self._lock:
            evt = {
                'id': self._next_id,
                'type': event_name,
                'ts': datetime.now(timezone.utc).isoformat(),
            }
            if isinstance(payload, dict):
                for k, v in payload.items():
                    evt[k] = _plain(v)
            self._events.append(evt)
            self._next_id += 1
            # Trim buffer
            if len(self._events) > self.max_events:
                del self._events[: len(self._events) - self.max_events]

    def start(self, bus: Optional[EventBus] = None):
        """Idempotent start: subscribe to every event once."""
        if self._bus is not None:
            return
        self._bus = bus if bus is not None else GLOBAL_EVENT_BUS
        self._bus.subscribe_all(self.record)
        logger.info("Event log subscribed to calendar events")

    def get_events(self, since: int | None = None) -> Dict[str, Any]:
        """Return events newer than 'since' (exclusive).

        If since is None, returns the last N (up to max_events) events.
        Response includes next_cursor (largest id) so client can poll with since=next_cursor.
        """
        with self._lock:
            if since is None:
                data = list(self._events)
            else:
                data = [e for e in self._events if e['id'] > since]
            next_cursor = self._events[-1]['id'] if self._events else since or 0
        return {'events': data, 'next_cursor': next_cursor}


__all__ = ['EventLog', 'MAX_EVENTS']
