"""Tests for the frequent meals repository."""

from __future__ import annotations

import json
from pathlib import Path

from mealcal.infra.Frequent_Meals_Repository import FrequentMealsRepository
from mealcal.infra.Legacy_Import import LegacyDefaults
from mealcal.utilities.constants import BASE_FREQUENT_MEALS


def test_base_list_when_no_file(tmp_path: Path):
    repo = FrequentMealsRepository(tmp_path / "frequent.json")
    assert repo.list_all() == list(BASE_FREQUENT_MEALS)


def test_add_user_meal_is_persisted(tmp_path: Path):
    path = tmp_path / "frequent.json"
    assert FrequentMealsRepository(path).add("  Paella ") is True
    assert FrequentMealsRepository(path).list_all()[-1] == "Paella"


def test_blank_and_duplicate_names_ignored(tmp_path: Path):
    repo = FrequentMealsRepository(tmp_path / "frequent.json")
    assert repo.add("") is False
    assert repo.add(BASE_FREQUENT_MEALS[0]) is False
    repo.add("Tacos")
    assert repo.add("Tacos") is False
    assert repo.list_all().count("Tacos") == 1


def test_corrupt_file_falls_back_to_base(tmp_path: Path):
    path = tmp_path / "frequent.json"
    path.write_text("[not json", encoding="utf-8")
    assert FrequentMealsRepository(path).list_all() == list(BASE_FREQUENT_MEALS)


def _legacy(tmp_path: Path, data) -> LegacyDefaults:
    path = tmp_path / "legacy_defaults.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return LegacyDefaults(path)


def test_legacy_favourites_seed_missing_file(tmp_path: Path):
    path = tmp_path / "frequent.json"
    legacy = _legacy(tmp_path, {"frequentMeals": ["Paella", " Tacos ", "Paella", ""]})
    repo = FrequentMealsRepository(path)
    assert repo.import_legacy(legacy) == 2
    assert repo.user_meals() == ["Paella", "Tacos"]
    assert json.loads(path.read_text(encoding="utf-8")) == ["Paella", "Tacos"]


def test_legacy_favourites_do_not_overwrite_existing_file(tmp_path: Path):
    repo = FrequentMealsRepository(tmp_path / "frequent.json")
    repo.add("Curry")
    legacy = _legacy(tmp_path, {"frequentMeals": ["Paella"]})
    assert repo.import_legacy(legacy) == 0
    assert repo.user_meals() == ["Curry"]


def test_legacy_favourites_absent_or_corrupt(tmp_path: Path):
    path = tmp_path / "frequent.json"
    repo = FrequentMealsRepository(path)
    assert repo.import_legacy(_legacy(tmp_path, {})) == 0
    assert repo.import_legacy(_legacy(tmp_path, {"frequentMeals": "{broken"})) == 0
    assert not path.exists()
