"""Tests for the key-value storage backends."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from medjournal.repository.storage import (
    FileKeyValueStorage,
    MemoryKeyValueStorage,
    StorageError,
    is_valid_key,
)


@pytest.fixture()
def file_storage(tmp_path: Path) -> FileKeyValueStorage:
    return FileKeyValueStorage(tmp_path / "data")


# ---- MemoryKeyValueStorage ----


def test_memory_get_missing():
    assert MemoryKeyValueStorage().get("k") is None


def test_memory_set_get_remove():
    storage = MemoryKeyValueStorage()
    storage.set("k", b"value")
    assert storage.get("k") == b"value"
    storage.remove("k")
    assert storage.get("k") is None


def test_memory_remove_missing_is_noop():
    MemoryKeyValueStorage().remove("k")


# ---- FileKeyValueStorage ----


def test_file_get_missing(file_storage):
    assert file_storage.get("entries") is None


def test_file_set_creates_directory_and_file(file_storage):
    file_storage.set("entries", b"[]")
    assert (file_storage.directory / "entries.json").read_bytes() == b"[]"
    assert file_storage.get("entries") == b"[]"


def test_file_set_overwrites(file_storage):
    file_storage.set("entries", b"[1]")
    file_storage.set("entries", b"[2]")
    assert file_storage.get("entries") == b"[2]"


def test_file_set_is_atomic_no_tmp_left(file_storage):
    file_storage.set("entries", b"[]")
    assert not (file_storage.directory / "entries.json.tmp").exists()


def test_file_set_restricts_permissions(file_storage):
    file_storage.set("entries", b"[]")
    mode = oct(os.stat(file_storage.directory / "entries.json").st_mode & 0o777)
    assert mode == "0o600"


def test_file_remove(file_storage):
    file_storage.set("entries", b"[]")
    file_storage.remove("entries")
    assert file_storage.get("entries") is None


def test_file_remove_missing_is_noop(file_storage):
    file_storage.remove("entries")


def test_file_rejects_path_like_keys(file_storage):
    with pytest.raises(StorageError):
        file_storage.get("../escape")


def test_file_write_failure_raises_storage_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    storage = FileKeyValueStorage(blocker / "data")
    with pytest.raises(StorageError):
        storage.set("entries", b"[]")


def test_is_valid_key():
    assert is_valid_key("medication_entries")
    assert is_valid_key("entries.corrupt-123")
    assert not is_valid_key("my entries")
    assert not is_valid_key("entries\n")
    assert not is_valid_key("")
