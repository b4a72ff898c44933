"""Tests for the in-memory and JSON record stores."""

from __future__ import annotations

import json
import threading
from datetime import datetime
from pathlib import Path

import pytest

from mealcal.domain.Meal import Meal, MealType
from mealcal.infra.Record_Store import InMemoryRecordStore, JsonRecordStore
from mealcal.logic.calendar.week import day_bounds
from mealcal.utilities.errors import StorageReadError, StorageWriteError


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path: Path):
    if request.param == "memory":
        return InMemoryRecordStore()
    return JsonRecordStore(tmp_path / "records.json")


def _meal(name="Eggs", when=datetime(2024, 1, 1, 8, 0), **kw):
    return Meal(name=name, type=kw.pop("type", MealType.breakfast), date=when, **kw).to_dict()


def test_upsert_and_fetch_all(store):
    rec = _meal()
    store.upsert("meal", rec)
    assert store.fetch_all("meal") == [rec]
    assert store.count("meal") == 1
    assert store.count("workout") == 0


def test_upsert_replaces_same_id(store):
    rec = _meal()
    store.upsert("meal", rec)
    store.upsert("meal", dict(rec, name="Pancakes"))
    rows = store.fetch_all("meal")
    assert len(rows) == 1
    assert rows[0]["name"] == "Pancakes"


def test_fetch_where_half_open(store):
    inside = _meal("Late snack", datetime(2024, 1, 1, 23, 59, 59))
    outside = _meal("Midnight snack", datetime(2024, 1, 2, 0, 0, 0))
    store.upsert("meal", inside)
    store.upsert("meal", outside)
    start, end = day_bounds(datetime(2024, 1, 1))
    assert [r["id"] for r in store.fetch_where("meal", start, end)] == [inside["id"]]


def test_delete_counts(store):
    rec = _meal()
    store.upsert("meal", rec)
    assert store.delete("meal", rec["id"]) == 1
    assert store.delete("meal", rec["id"]) == 0
    assert store.fetch_all("meal") == []


def test_returned_rows_are_copies(store):
    rec = _meal()
    store.upsert("meal", rec)
    store.fetch_all("meal")[0]["name"] = "changed"
    assert store.fetch_all("meal")[0]["name"] == "Eggs"


def test_unknown_kind_rejected(store):
    with pytest.raises(ValueError):
        store.fetch_all("recipe")


def test_upsert_without_id_fails(store):
    with pytest.raises(StorageWriteError):
        store.upsert("meal", {"name": "x"})


# ---- JSON specifics ----


def test_json_store_persists_across_instances(tmp_path):
    path = tmp_path / "records.json"
    rec = _meal()
    JsonRecordStore(path).upsert("meal", rec)
    assert JsonRecordStore(path).fetch_all("meal") == [rec]
    data = json.loads(path.read_text(encoding="utf-8"))
    assert rec["id"] in data["meal"]


def test_json_store_leaves_no_temp_files(tmp_path):
    store = JsonRecordStore(tmp_path / "records.json")
    store.upsert("meal", _meal())
    assert [p.name for p in tmp_path.iterdir()] == ["records.json"]


def test_json_store_missing_file_is_empty(tmp_path):
    assert JsonRecordStore(tmp_path / "absent.json").fetch_all("workout") == []


def test_json_store_corrupt_file_raises_read_error(tmp_path):
    path = tmp_path / "records.json"
    path.write_text("not valid json {{{{", encoding="utf-8")
    with pytest.raises(StorageReadError):
        JsonRecordStore(path).fetch_all("meal")


def test_failed_write_keeps_previous_state(tmp_path):
    class BrokenDisk(JsonRecordStore):
        fail = False

        def _persist(self, snapshot):
            if self.fail:
                raise StorageWriteError("disk full")
            super()._persist(snapshot)

    store = BrokenDisk(tmp_path / "records.json")
    first = _meal()
    store.upsert("meal", first)
    store.fail = True
    with pytest.raises(StorageWriteError):
        store.upsert("meal", _meal("Toast"))
    assert store.fetch_all("meal") == [first]


# ---- concurrency ----


def test_concurrent_writers_never_expose_partial_records(store, tmp_path):
    base = _meal("Variant 0", datetime(2024, 1, 1, 12, 0))
    variants = [dict(base, name=f"Variant {i}", notes="x" * (i * 50)) for i in range(8)]
    start, end = day_bounds(datetime(2024, 1, 1))
    json_path = getattr(store, "path", None)
    stop = threading.Event()
    problems = []

    def writer(offset):
        for n in range(40):
            if n % 5 == 4:
                store.delete("meal", base["id"])
            else:
                store.upsert("meal", variants[(offset + n) % len(variants)])

    def reader():
        while not stop.is_set():
            for row in store.fetch_where("meal", start, end):
                if row not in variants:
                    problems.append(row)
            if json_path is not None and json_path.exists():
                try:
                    json.loads(json_path.read_text(encoding="utf-8"))
                except json.JSONDecodeError as e:
                    problems.append(str(e))

    read_thread = threading.Thread(target=reader)
    writers = [threading.Thread(target=writer, args=(i,)) for i in range(4)]
    read_thread.start()
    for t in writers:
        t.start()
    for t in writers:
        t.join()
    stop.set()
    read_thread.join()

    assert problems == []
    assert len(store.fetch_all("meal")) <= 1
    for row in store.fetch_all("meal"):
        assert row in variants
    if json_path is not None:
        on_disk = json.loads(json_path.read_text(encoding="utf-8"))
        assert list(on_disk["meal"].values()) == store.fetch_all("meal")
        assert [p.name for p in tmp_path.iterdir()] == ["records.json"]
