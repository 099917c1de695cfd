"""Tests for the entry repository."""

from __future__ import annotations

import json
import logging

import pendulum
import pytest

from medjournal.repository.entry import EntryRepository, EntryStoreError
from medjournal.repository.storage import MemoryKeyValueStorage

from conftest import FailingStorage, UnreadableStorage

KEY = "medication_entries"


@pytest.fixture()
def storage() -> MemoryKeyValueStorage:
    return MemoryKeyValueStorage()


@pytest.fixture()
def repository(storage) -> EntryRepository:
    return EntryRepository(storage)


# ---- save_new_entry ----


def test_save_assigns_id_and_timestamp(repository):
    before = pendulum.now("UTC")
    entry = repository.save_new_entry({"medications": ["Zinc"], "wellbeing": 6})
    after = pendulum.now("UTC")

    assert entry["id"]
    assert entry["timestamp"] is not None
    assert before <= entry["timestamp"] <= after
    assert entry["medications"] == ["Zinc"]
    assert entry["wellbeing"] == 6
    assert entry["notes"] is None


def test_save_ids_are_unique(repository):
    ids = {repository.save_new_entry({"medications": ["A"]})["id"] for _ in range(5)}
    assert len(ids) == 5


def test_save_ignores_caller_id_and_timestamp(repository):
    entry = repository.save_new_entry(
        {"id": "mine", "timestamp": "2000-01-01T00:00:00Z", "medications": ["A"]}  # type: ignore[typeddict-unknown-key]
    )
    assert entry["id"] != "mine"
    assert entry["timestamp"].year != 2000


def test_save_persists_json_array(repository, storage):
    entry = repository.save_new_entry({"medications": ["A"], "wellbeing": 7})
    stored = json.loads(storage.get(KEY))
    assert isinstance(stored, list)
    assert stored[0]["id"] == entry["id"]
    assert stored[0]["medications"] == ["A"]
    assert isinstance(stored[0]["timestamp"], str)


def test_saved_entries_round_trip(repository):
    entry = repository.save_new_entry({"medications": ["A"], "wellbeing": 7})
    assert repository.get_all_entries() == [entry]
    assert repository.get_entry(entry["id"]) == entry


def test_returned_entries_are_copies(repository):
    entry = repository.save_new_entry({"medications": ["A"]})
    entry["medications"].append("B")
    assert repository.get_all_entries()[0]["medications"] == ["A"]


def test_custom_key(storage):
    repository = EntryRepository(storage, key="other")
    repository.save_new_entry({"medications": ["A"]})
    assert storage.get(KEY) is None
    assert storage.get("other") is not None


# ---- modify_entry ----


def test_modify_merges_fields(repository):
    entry = repository.save_new_entry(
        {"medications": ["A"], "wellbeing": 4, "notes": "before"}
    )
    updated = repository.modify_entry(entry["id"], {"wellbeing": 9})

    assert updated is not None
    assert updated["id"] == entry["id"]
    assert updated["timestamp"] == entry["timestamp"]
    assert updated["wellbeing"] == 9
    assert updated["medications"] == ["A"]
    assert updated["notes"] == "before"
    assert repository.get_entry(entry["id"]) == updated


def test_modify_can_clear_notes(repository):
    entry = repository.save_new_entry({"medications": ["A"], "notes": "x"})
    updated = repository.modify_entry(entry["id"], {"notes": None})
    assert updated is not None
    assert updated["notes"] is None


def test_modify_unknown_returns_none(repository):
    repository.save_new_entry({"medications": ["A"]})
    assert repository.modify_entry("missing", {"wellbeing": 2}) is None


# ---- delete_entry / clear_entries ----


def test_delete(repository):
    keep = repository.save_new_entry({"medications": ["A"]})
    drop = repository.save_new_entry({"medications": ["B"]})
    assert repository.delete_entry(drop["id"]) is True
    assert [e["id"] for e in repository.get_all_entries()] == [keep["id"]]


def test_delete_unknown_id_succeeds(repository):
    repository.save_new_entry({"medications": ["A"]})
    assert repository.delete_entry("missing") is True
    assert len(repository.get_all_entries()) == 1


def test_clear(repository, storage):
    repository.save_new_entry({"medications": ["A"]})
    assert repository.clear_entries() is True
    assert storage.get(KEY) is None
    assert repository.get_all_entries() == []


# ---- degraded reads ----


def test_missing_data_is_empty(repository):
    assert repository.get_all_entries() == []


def test_corrupt_data_is_empty(repository, storage, caplog):
    storage.set(KEY, b"not json {{{")
    with caplog.at_level(logging.WARNING):
        assert repository.get_all_entries() == []
    assert "corrupt" in caplog.text


def test_non_array_data_is_empty(repository, storage):
    storage.set(KEY, json.dumps({"entries": []}).encode())
    assert repository.get_all_entries() == []


def test_invalid_utf8_is_empty(repository, storage):
    storage.set(KEY, b"\xff\xfe\x00")
    assert repository.get_all_entries() == []


def test_non_object_items_are_skipped(repository, storage):
    storage.set(KEY, json.dumps([1, "x", {"id": "a", "medications": ["A"]}]).encode())
    entries = repository.get_all_entries()
    assert [e["id"] for e in entries] == ["a"]


def test_malformed_records_are_normalized(repository, storage):
    storage.set(KEY, json.dumps([{"id": "a", "wellbeing": 42}]).encode())
    (entry,) = repository.get_all_entries()
    assert entry["medications"] == []
    assert entry["wellbeing"] is None
    assert entry["timestamp"] is None


def test_corrupt_data_is_backed_up_before_write(repository, storage):
    storage.set(KEY, b"garbage")
    repository.save_new_entry({"medications": ["A"]})

    backups = [key for key in storage._data if key.startswith(f"{KEY}.corrupt-")]
    assert len(backups) == 1
    assert storage.get(backups[0]) == b"garbage"
    assert len(repository.get_all_entries()) == 1


def test_unreadable_storage_reads_as_empty():
    repository = EntryRepository(UnreadableStorage())
    assert repository.get_all_entries() == []
    assert repository.get_entry("a") is None


# ---- write failures ----


def test_save_failure_raises():
    repository = EntryRepository(FailingStorage())
    with pytest.raises(EntryStoreError):
        repository.save_new_entry({"medications": ["A"]})


def test_modify_failure_raises():
    initial = json.dumps([{"id": "a", "medications": ["A"]}]).encode()
    repository = EntryRepository(FailingStorage({KEY: initial}))
    with pytest.raises(EntryStoreError):
        repository.modify_entry("a", {"wellbeing": 3})


def test_save_refuses_to_overwrite_unreadable_storage():
    repository = EntryRepository(UnreadableStorage())
    with pytest.raises(EntryStoreError):
        repository.save_new_entry({"medications": ["A"]})


def test_delete_failure_returns_false():
    initial = json.dumps([{"id": "a", "medications": ["A"]}]).encode()
    repository = EntryRepository(FailingStorage({KEY: initial}))
    assert repository.delete_entry("a") is False


def test_clear_failure_returns_false():
    repository = EntryRepository(FailingStorage())
    assert repository.clear_entries() is False
