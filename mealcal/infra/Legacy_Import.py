"""Legacy import: one-time migration of records kept in the old flat key-value file.

Older versions of the app stored every meal under a single key of a
key-value file as ``{grouping key: [meal, ...]}`` (grouped by day) and every
workout keyed by its id. A mapping with UUID keys was encoded as a flat
``[key, value, key, value, ...]`` array, so both shapes are accepted.
On startup the importer copies those records into the record store, keeping
their ids, dates and fields verbatim, but only while the store's partition
for that kind is still empty.

The migration is best effort: missing or undecodable legacy data is logged
and ignored, and a store failure stops the remaining batch without rolling
back what was already written.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from mealcal.domain.Meal import Meal
from mealcal.domain.Workout import Workout
from mealcal.events.Event_Bus import EventBus
from mealcal.events.event_helpers import publish_legacy_imported, publish_storage_error
from mealcal.infra.Record_Store import RecordStore, atomic_write_json
from mealcal.utilities.config import CLEAR_LEGACY_AFTER_IMPORT
from mealcal.utilities.constants import (
    MEAL_KIND, WORKOUT_KIND, LEGACY_MEALS_KEY, LEGACY_WORKOUTS_KEY, LEGACY_REFERENCE_DATE,
)
from mealcal.utilities.errors import DecodeError, StorageError
from mealcal.utilities.validators import LegacyMealRecord, LegacyWorkoutRecord

logger = logging.getLogger(__name__)


class LegacyDefaults:
    """Flat key-value JSON file ({key: value}) written by older app versions."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            raise DecodeError(f"Cannot read legacy file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise DecodeError(f"Legacy file {self.path} is not a JSON object")
        return data

    def get(self, key: str) -> Any:
        """Value stored under ``key`` (None when absent). String values holding JSON are decoded."""
        value = self._read().get(key)
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError as e:
                raise DecodeError(f"Legacy key {key!r} does not hold JSON: {e}") from e
        return value

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def _write(self, data: Dict[str, Any]) -> None:
        atomic_write_json(self.path, data, prefix=".legacy_")


class ImportReport:
    def __init__(self, kind: str):
        self.kind = kind
        self.imported = 0
        self.skipped = False
        self.cleared = False
        self.error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        if self.skipped:
            return f"{self.kind}: store not empty, import skipped"
        status = "ok" if self.ok else f"error={self.error}"
        return f"{self.kind}: imported={self.imported} cleared={self.cleared} {status}"

    __repr__ = __str__


def parse_legacy_date(raw) -> datetime:
    """Numbers are seconds since the legacy reference date; strings are ISO-8601."""
    if isinstance(raw, (int, float)):
        return (LEGACY_REFERENCE_DATE + timedelta(seconds=float(raw))).astimezone()
    text = str(raw).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _pairs_to_mapping(raw: list) -> Dict[str, Any]:
    """``[key, value, key, value, ...]`` as a mapping (non-string keys encode this way)."""
    if len(raw) % 2:
        raise DecodeError(f"Legacy key/value array has an odd length ({len(raw)})")
    keys, values = raw[0::2], raw[1::2]
    if not all(isinstance(k, str) for k in keys):
        raise DecodeError("Legacy key/value array holds a non-string key")
    return dict(zip(keys, values))


def _flatten(raw: Any) -> List[dict]:
    """Records of every group; a group is a list of records or a single record object."""
    if raw is None:
        return []
    if isinstance(raw, list):
        raw = _pairs_to_mapping(raw)
    if not isinstance(raw, dict):
        raise DecodeError(f"Legacy data must be a mapping, got {type(raw).__name__}")
    items: List[dict] = []
    for group_key, group in raw.items():
        if isinstance(group, dict):
            items.append(group)
        elif isinstance(group, list):
            items.extend(group)
        else:
            raise DecodeError(f"Legacy group {group_key!r} is neither a record nor a list")
    return items


def decode_legacy_meals(raw: Any) -> List[Meal]:
    meals = []
    try:
        for item in _flatten(raw):
            rec = LegacyMealRecord.model_validate(item)
            meals.append(Meal(id=rec.id, name=rec.name, type=rec.type,
                              date=parse_legacy_date(rec.date), notes=rec.notes))
    except (ValidationError, TypeError, ValueError) as e:
        raise DecodeError(f"Invalid legacy meal data: {e}") from e
    return meals


def decode_legacy_workouts(raw: Any) -> List[Workout]:
    workouts = []
    try:
        for item in _flatten(raw):
            rec = LegacyWorkoutRecord.model_validate(item)
            workouts.append(Workout(id=rec.id, type=rec.type, date=parse_legacy_date(rec.date),
                                    distance=rec.distance, duration=rec.duration, notes=rec.notes))
    except (ValidationError, TypeError, ValueError) as e:
        raise DecodeError(f"Invalid legacy workout data: {e}") from e
    return workouts


class LegacyImporter:
    def __init__(self, store: RecordStore, legacy: LegacyDefaults, bus: Optional[EventBus] = None,
                 clear_after_import: bool = CLEAR_LEGACY_AFTER_IMPORT):
        self.store = store
        self.legacy = legacy
        self.bus = bus
        self.clear_after_import = clear_after_import

    def import_meals(self) -> ImportReport:
        return self._import(MEAL_KIND, LEGACY_MEALS_KEY, decode_legacy_meals)

    def import_workouts(self) -> ImportReport:
        return self._import(WORKOUT_KIND, LEGACY_WORKOUTS_KEY, decode_legacy_workouts)

    def import_all(self) -> Dict[str, ImportReport]:
        return {MEAL_KIND: self.import_meals(), WORKOUT_KIND: self.import_workouts()}

    def _import(self, kind: str, key: str, decode: Callable[[Any], list]) -> ImportReport:
        report = ImportReport(kind)
        try:
            if self.store.count(kind) > 0:
                report.skipped = True
                return report
        except StorageError as e:
            # Upserts are keyed by id, so importing over an unknown state cannot duplicate records
            logger.error("Error checking %s store before legacy import: %s", kind, e)

        try:
            records = decode(self.legacy.get(key))
        except DecodeError as e:
            logger.error("Legacy %s data ignored: %s", kind, e)
            report.error = e
            return report
        if not records:
            return report

        for record in records:
            try:
                self.store.upsert(kind, record.to_dict())
            except StorageError as e:
                logger.error("Legacy %s import stopped after %d records: %s", kind, report.imported, e)
                publish_storage_error(kind, "legacy_import", e, bus=self.bus)
                report.error = e
                return report
            report.imported += 1

        if self.clear_after_import:
            try:
                self.legacy.remove(key)
                report.cleared = True
            except (OSError, DecodeError) as e:
                logger.warning("Could not clear legacy %s key %r: %s", kind, key, e)

        logger.info("Imported %d legacy %s records", report.imported, kind)
        publish_legacy_imported(kind, report.imported, report.cleared, bus=self.bus)
        return report


__all__ = [
    'LegacyDefaults', 'LegacyImporter', 'ImportReport',
    'decode_legacy_meals', 'decode_legacy_workouts', 'parse_legacy_date',
]
