"""Event helper utilities.

Thin functions that build the payloads documented in Event_Bus and publish
them on a given bus (the global one when none is passed).

Quick import:
    from mealcal.events.event_helpers import (
        publish_record_saved, publish_record_deleted, publish_storage_error,
    )
"""
from __future__ import annotations
from typing import Any, Optional
from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    RECORD_SAVED, RECORD_DELETED, STORAGE_ERROR, LEGACY_IMPORTED,
    SESSION_WEEK_CHANGED, SESSION_DATE_SELECTED, SESSION_EDITOR_OPENED, SESSION_EDITOR_CLOSED,
)

__all__ = [
    'publish_record_saved', 'publish_record_deleted', 'publish_storage_error',
    'publish_legacy_imported', 'publish_week_changed', 'publish_date_selected',
    'publish_editor_opened', 'publish_editor_closed',
]


def _bus(bus: Optional[EventBus]) -> EventBus:
    return bus if bus is not None else GLOBAL_EVENT_BUS


def publish_record_saved(kind: str, record: Any, bus: Optional[EventBus] = None):
    _bus(bus).publish(RECORD_SAVED, {'kind': kind, 'record': record})


def publish_record_deleted(kind: str, record_id: str, removed: int, bus: Optional[EventBus] = None):
    _bus(bus).publish(RECORD_DELETED, {'kind': kind, 'record_id': record_id, 'removed': removed})


def publish_storage_error(kind: str, operation: str, error: Exception, bus: Optional[EventBus] = None):
    """Publish a storage.error event so the presentation layer may surface the failure."""
    _bus(bus).publish(STORAGE_ERROR, {
        'kind': kind,
        'operation': operation,
        'error': str(error),
    })


def publish_legacy_imported(kind: str, imported: int, cleared: bool, bus: Optional[EventBus] = None):
    _bus(bus).publish(LEGACY_IMPORTED, {'kind': kind, 'imported': imported, 'cleared': cleared})


def publish_week_changed(kind: str, start, bus: Optional[EventBus] = None):
    _bus(bus).publish(SESSION_WEEK_CHANGED, {'kind': kind, 'start': start})


def publish_date_selected(kind: str, day, bus: Optional[EventBus] = None):
    _bus(bus).publish(SESSION_DATE_SELECTED, {'kind': kind, 'date': day})


def publish_editor_opened(kind: str, day, record_type: Optional[str], target: Any, bus: Optional[EventBus] = None):
    _bus(bus).publish(SESSION_EDITOR_OPENED, {
        'kind': kind,
        'date': day,
        'type': record_type,
        'target': target,
    })


def publish_editor_closed(kind: str, reason: str, bus: Optional[EventBus] = None):
    _bus(bus).publish(SESSION_EDITOR_CLOSED, {'kind': kind, 'reason': reason})
