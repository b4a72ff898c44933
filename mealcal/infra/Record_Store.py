"""Record store: persistence boundary for meal and workout records.

Records cross this boundary as plain dictionaries (the JSON form produced by
``Meal.to_dict`` / ``Workout.to_dict``), partitioned by entity kind and keyed
by id. Two backends:

  * InMemoryRecordStore: process-lifetime dictionaries, used as a test double.
  * JsonRecordStore: the same structure persisted to one JSON file.

Writes are serialized with a lock and applied copy-on-write: a new snapshot is
built, persisted, and only then swapped in, so readers never see a partially
written record and a failed write leaves the previous state untouched.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from threading import RLock
from typing import Dict, List

from mealcal.logic.calendar.week import to_local
from mealcal.utilities.constants import ENTITY_KINDS
from mealcal.utilities.errors import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)

Snapshot = Dict[str, Dict[str, dict]]


class RecordStore:
    """Minimal persistence interface the repositories depend on."""

    def fetch_all(self, kind: str) -> List[dict]:
        raise NotImplementedError

    def fetch_where(self, kind: str, start: datetime, end: datetime) -> List[dict]:
        """Records of ``kind`` whose date lies in the half-open interval [start, end)."""
        raise NotImplementedError

    def upsert(self, kind: str, record: dict) -> None:
        raise NotImplementedError

    def delete(self, kind: str, record_id: str) -> int:
        """Remove every record with ``record_id``; returns how many were removed."""
        raise NotImplementedError

    def count(self, kind: str) -> int:
        return len(self.fetch_all(kind))


def atomic_write_json(path: Path, data, prefix: str = ".tmp_") -> None:
    """Write ``data`` as JSON to a temp file beside ``path``, then swap it in.

    Raises OSError; the previous file content survives any failure.
    """
    path = Path(path)
    tmp_path = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=prefix, suffix=".json")
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            json.dump(data, tmp, indent=2, ensure_ascii=False)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_path, path)
        tmp_path = None
    finally:
        if tmp_path and os.path.exists(tmp_path):
            try:
                os.remove(tmp_path)
            except OSError:
                logger.warning("Could not remove temporary file %s", tmp_path)


def _record_date(record: dict) -> datetime:
    raw = record.get("date")
    if isinstance(raw, str):
        raw = datetime.fromisoformat(raw)
    return to_local(raw)


class InMemoryRecordStore(RecordStore):
    def __init__(self):
        self._lock = RLock()
        self._data: Snapshot = {kind: {} for kind in ENTITY_KINDS}

    # --- hooks overridden by persistent backends ---
    def _records(self) -> Snapshot:
        return self._data

    def _persist(self, snapshot: Snapshot) -> None:
        pass

    # --- helpers ---
    @staticmethod
    def _check_kind(kind: str) -> None:
        if kind not in ENTITY_KINDS:
            raise ValueError(f"Unknown entity kind: {kind!r}")

    def _snapshot(self) -> Snapshot:
        return {k: dict(v) for k, v in self._records().items()}

    def _commit(self, snapshot: Snapshot) -> None:
        self._persist(snapshot)
        self._data = snapshot

    # --- interface ---
    def fetch_all(self, kind: str) -> List[dict]:
        self._check_kind(kind)
        with self._lock:
            partition = self._records().get(kind, {})
            return [dict(r) for r in partition.values()]

    def fetch_where(self, kind: str, start: datetime, end: datetime) -> List[dict]:
        start, end = to_local(start), to_local(end)
        result = []
        for record in self.fetch_all(kind):
            try:
                when = _record_date(record)
            except (TypeError, ValueError) as e:
                logger.warning("Skipping %s record %s with unreadable date: %s", kind, record.get("id"), e)
                continue
            if start <= when < end:
                result.append(record)
        return result

    def upsert(self, kind: str, record: dict) -> None:
        self._check_kind(kind)
        record_id = record.get("id")
        if not record_id:
            raise StorageWriteError(f"Cannot store a {kind} record without id")
        with self._lock:
            snapshot = self._snapshot()
            snapshot.setdefault(kind, {})[str(record_id)] = dict(record)
            self._commit(snapshot)

    def delete(self, kind: str, record_id: str) -> int:
        self._check_kind(kind)
        with self._lock:
            partition = self._records().get(kind, {})
            if str(record_id) not in partition:
                return 0
            snapshot = self._snapshot()
            del snapshot[kind][str(record_id)]
            self._commit(snapshot)
            return 1

    def count(self, kind: str) -> int:
        self._check_kind(kind)
        with self._lock:
            return len(self._records().get(kind, {}))


class JsonRecordStore(InMemoryRecordStore):
    """File-backed store: {"meal": {id: record}, "workout": {id: record}}."""

    def __init__(self, path: Path):
        super().__init__()
        self.path = Path(path)
        self._loaded = False

    def _records(self) -> Snapshot:
        if not self._loaded:
            self._data = self._load()
            self._loaded = True
        return self._data

    def _load(self) -> Snapshot:
        data: Snapshot = {kind: {} for kind in ENTITY_KINDS}
        if not self.path.exists():
            return data
        try:
            txt = self.path.read_text(encoding="utf-8").strip()
            raw = json.loads(txt) if txt else {}
        except (OSError, json.JSONDecodeError) as e:
            raise StorageReadError(f"Cannot read record store {self.path}: {e}") from e
        if not isinstance(raw, dict):
            raise StorageReadError(f"Record store {self.path} is not a JSON object")
        for kind in ENTITY_KINDS:
            partition = raw.get(kind) or {}
            if isinstance(partition, dict):
                data[kind] = {str(k): v for k, v in partition.items() if isinstance(v, dict)}
        return data

    def _persist(self, snapshot: Snapshot) -> None:
        try:
            atomic_write_json(self.path, snapshot, prefix=".records_")
        except OSError as e:
            raise StorageWriteError(f"Cannot write record store {self.path}: {e}") from e


__all__ = ['RecordStore', 'InMemoryRecordStore', 'JsonRecordStore', 'atomic_write_json']
