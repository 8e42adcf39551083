"""Tests for the file-backed string store."""

from pathlib import Path

import pytest

from calorie_tracker.adapters.file_string_store import FileStringStore
from calorie_tracker.services.storage import JsonStore


def test_missing_key_returns_none(tmp_path: Path) -> None:
    store = FileStringStore.create(tmp_path)

    assert store.get_item("foodDb") is None


def test_values_survive_a_new_instance(tmp_path: Path) -> None:
    FileStringStore.create(tmp_path / "data").set_item("entries_2026-10-19", "[]")

    reopened = FileStringStore.create(tmp_path / "data")

    assert reopened.get_item("entries_2026-10-19") == "[]"
    assert (tmp_path / "data" / "entries_2026-10-19.json").exists()


def test_set_item_replaces_file_contents(tmp_path: Path) -> None:
    store = FileStringStore.create(tmp_path)

    store.set_item("dailyLimit", "2000")
    store.set_item("dailyLimit", "1500")

    assert store.get_item("dailyLimit") == "1500"
    assert not list(tmp_path.glob("*.tmp"))


def test_rejects_keys_that_escape_the_directory(tmp_path: Path) -> None:
    store = FileStringStore.create(tmp_path)

    with pytest.raises(ValueError):
        store.set_item("../outside", "1")


def test_undecodable_file_loads_as_fallback(tmp_path: Path) -> None:
    (tmp_path / "foodDb.json").write_bytes(b"\xff\xfe\x00garbage")
    store = JsonStore(FileStringStore.create(tmp_path))

    assert store.load("foodDb", []) == []
