# SPDX-License-Identifier: MIT

import json
import logging
from copy import deepcopy
from typing import Any, Optional, cast

from medjournal import configuration, time
from medjournal.model.entity_id import EntityId
from medjournal.model.entry import Entry, EntryFields
from medjournal.repository.configuration import CONFIGURATION_REPO
from medjournal.repository.storage import (
    FileKeyValueStorage,
    KeyValueStorage,
    StorageError,
)
from medjournal.service.normalize import normalize_entry
from medjournal.template.entry import get_entry_template

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "medication_entries"

MUTABLE_FIELDS = ("medications", "wellbeing", "notes")


class EntryStoreError(Exception):
    """Raised when the entry collection could not be written."""

    pass


class CorruptEntryData(Exception):
    def __init__(self, raw: bytes, reason: str) -> None:
        super().__init__(reason)
        self.raw = raw


class EntryRepository:
    """
    The canonical entry collection, persisted as one JSON array under a
    single key of a KeyValueStorage.

    Every operation reads the collection from storage, so there is no
    cached state to flush.
    """

    def __init__(
        self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY
    ) -> None:
        self.storage = storage
        self.key = key

    def __decode(self, raw: bytes) -> list[Entry]:
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CorruptEntryData(raw, str(e)) from e
        if not isinstance(data, list):
            raise CorruptEntryData(
                raw, f"expected a JSON array, got {type(data).__name__}"
            )

        entries: list[Entry] = []
        for item in data:
            if not isinstance(item, dict):
                logger.warning("Skipping malformed entry record: %r", item)
                continue
            entries.append(normalize_entry(item))
        return entries

    def __load_data(self) -> list[Entry]:
        """Read failures degrade to an empty collection."""
        try:
            raw = self.storage.get(self.key)
        except StorageError as e:
            logger.warning("Could not read entries, treating as empty: %s", e)
            return []
        if raw is None:
            return []
        try:
            return self.__decode(raw)
        except CorruptEntryData as e:
            logger.warning("Stored entries are corrupt, treating as empty: %s", e)
            return []

    def __load_data_for_write(self) -> list[Entry]:
        """
        Read before a mutation. Unreadable storage aborts the write, and
        corrupt data is backed up before it gets replaced.
        """
        try:
            raw = self.storage.get(self.key)
        except StorageError as e:
            logger.error("Could not read entries before writing: %s", e)
            raise EntryStoreError(f"Could not read stored entries: {e}") from e
        if raw is None:
            return []
        try:
            return self.__decode(raw)
        except CorruptEntryData as e:
            backup_key = f"{self.key}.corrupt-{int(time.now_utc().timestamp())}"
            logger.warning(
                "Stored entries are corrupt (%s), backing up to %s", e, backup_key
            )
            self.__write(backup_key, e.raw)
            return []

    def __write(self, key: str, payload: bytes) -> None:
        try:
            self.storage.set(key, payload)
        except StorageError as e:
            logger.error("Could not write entries: %s", e)
            raise EntryStoreError(f"Could not save entries: {e}") from e

    def __save_data(self, entries: list[Entry]) -> None:
        serializable = [
            self.__convert_entry_for_serialization(deepcopy(entry)) for entry in entries
        ]
        payload = json.dumps(serializable, ensure_ascii=False).encode("utf-8")
        self.__write(self.key, payload)

    def __convert_entry_for_serialization(self, entry: Entry) -> dict[str, Any]:
        serializable_entry = cast(dict[str, Any], entry)
        serializable_entry["timestamp"] = time.datetime_to_iso_str_optional(
            serializable_entry["timestamp"]
        )
        return serializable_entry

    def __merge_fields(self, entry: Entry, fields: EntryFields) -> None:
        for field in MUTABLE_FIELDS:
            if field in fields:
                entry[field] = deepcopy(fields[field])  # type: ignore[literal-required]

    def get_all_entries(self) -> list[Entry]:
        return self.__load_data()

    def get_entry(self, id: EntityId) -> Optional[Entry]:
        matches = [entry for entry in self.__load_data() if entry["id"] == id]
        return matches[0] if matches else None

    def save_new_entry(self, fields: EntryFields) -> Entry:
        entries = self.__load_data_for_write()

        entry = get_entry_template()
        self.__merge_fields(entry, fields)
        entry = normalize_entry(cast(dict[str, Any], entry))

        entries.append(entry)
        self.__save_data(entries)
        logger.debug("Saved entry %s", entry["id"])
        return deepcopy(entry)

    def modify_entry(self, id: EntityId, fields: EntryFields) -> Optional[Entry]:
        entries = self.__load_data_for_write()

        matches = [entry for entry in entries if entry["id"] == id]
        if not matches:
            logger.debug("No entry %s to modify", id)
            return None

        entry = matches[0]
        self.__merge_fields(entry, fields)
        normalized = normalize_entry(cast(dict[str, Any], entry))
        entry.update(normalized)

        self.__save_data(entries)
        logger.debug("Modified entry %s", id)
        return deepcopy(entry)

    def delete_entry(self, id: EntityId) -> bool:
        try:
            entries = self.__load_data_for_write()
            self.__save_data([entry for entry in entries if entry["id"] != id])
        except EntryStoreError:
            return False
        logger.debug("Deleted entry %s", id)
        return True

    def clear_entries(self) -> bool:
        try:
            self.storage.remove(self.key)
        except StorageError as e:
            logger.error("Could not clear entries: %s", e)
            return False
        logger.debug("Cleared all entries")
        return True


def get_entry_repository() -> EntryRepository:
    """Entry repository backed by files in the configured data directory."""
    config = CONFIGURATION_REPO.get_config()
    return EntryRepository(
        FileKeyValueStorage(configuration.DATA_PATH), config["storage_key"]
    )
