"""Generic repository over one entity kind of the record store.

The repository is the typed mapping layer between domain records (Meal,
Workout) and the dictionaries the store persists. It never raises storage
failures to its caller: writes return a Result, reads return an empty list,
and every failure is logged and published as a storage.error event.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from mealcal.domain.Result import Result
from mealcal.events.Event_Bus import EventBus
from mealcal.events.event_helpers import (
    publish_record_saved, publish_record_deleted, publish_storage_error,
)
from mealcal.infra.Record_Store import RecordStore
from mealcal.logic.calendar.week import day_bounds, week_days
from mealcal.utilities.errors import StorageError

logger = logging.getLogger(__name__)


class RecordRepository:
    kind: str = ""
    record_class: Any = None
    type_enum: Any = None

    def __init__(self, store: RecordStore, bus: Optional[EventBus] = None):
        self.store = store
        self.bus = bus

    # --- policy hooks ---
    def sort_key(self, record) -> tuple:
        raise NotImplementedError

    def _from_store(self, data: dict):
        try:
            return self.record_class.from_dict(data)
        except (TypeError, ValueError) as e:
            logger.warning("Skipping unreadable %s record %s: %s", self.kind, data.get("id"), e)
            return None

    def _failed(self, operation: str, error: Exception) -> Result:
        logger.error("Error during %s of %s record: %s", operation, self.kind, error)
        publish_storage_error(self.kind, operation, error, bus=self.bus)
        return Result.failure(error)

    # --- writes ---
    def save(self, record) -> Result:
        """Insert or replace (by id) the given record."""
        if not isinstance(record, self.record_class):
            return self._failed("save", TypeError(f"Expected {self.record_class.__name__}, got {type(record).__name__}"))
        try:
            self.store.upsert(self.kind, record.to_dict())
        except StorageError as e:
            return self._failed("save", e)
        logger.debug("Saved %s %s", self.kind, record.id)
        publish_record_saved(self.kind, record, bus=self.bus)
        return Result.success(record)

    def delete(self, record) -> Result:
        """Remove the record (or record id); absent records are a no-op."""
        record_id = record if isinstance(record, str) else getattr(record, "id", None)
        if not record_id:
            return self._failed("delete", ValueError("Cannot delete a record without id"))
        try:
            removed = self.store.delete(self.kind, record_id)
        except StorageError as e:
            return self._failed("delete", e)
        if removed:
            logger.debug("Deleted %s %s", self.kind, record_id)
            publish_record_deleted(self.kind, record_id, removed, bus=self.bus)
        return Result.success(removed)

    # --- reads ---
    def records_for_day(self, day, record_type=None) -> List:
        """Records dated inside the local-time day containing ``day``, in display order.

        With ``record_type`` the same ordered list is filtered to that type.
        Storage failures give an empty list; an unknown ``record_type`` is a
        caller error and raises ValueError before the store is read.
        """
        wanted = self.type_enum.parse(record_type) if record_type is not None else None
        start, end = day_bounds(day)
        try:
            rows = self.store.fetch_where(self.kind, start, end)
        except StorageError as e:
            self._failed("read", e)
            return []
        records = [r for r in (self._from_store(row) for row in rows) if r is not None]
        records.sort(key=self.sort_key)
        if wanted is not None:
            records = [r for r in records if r.type == wanted]
        return records

    def records_for_week(self, start: date) -> Dict[date, List]:
        return {day: self.records_for_day(day) for day in week_days(start)}

    def get(self, record_id: str):
        try:
            rows = self.store.fetch_all(self.kind)
        except StorageError as e:
            self._failed("read", e)
            return None
        for row in rows:
            if str(row.get("id")) == str(record_id):
                return self._from_store(row)
        return None

    def count(self) -> int:
        try:
            return self.store.count(self.kind)
        except StorageError as e:
            self._failed("read", e)
            return 0
