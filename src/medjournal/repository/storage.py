# SPDX-License-Identifier: MIT

import logging
import os
import re
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

_KEY_P = re.compile(r"[A-Za-z0-9_.-]+")


class StorageError(Exception):
    """Raised when the storage backend fails to read or write a key."""

    pass


def is_valid_key(key: str) -> bool:
    return _KEY_P.fullmatch(key) is not None


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[bytes]: ...

    def set(self, key: str, value: bytes) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryKeyValueStorage:
    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileKeyValueStorage:
    """
    One file per key inside a directory.

    Writes go to a temp file in the same directory, are flushed and fsynced,
    then moved over the target with os.replace.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        if not is_valid_key(key):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[bytes]:
        path = self._path_for(key)
        if not path.is_file():
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            raise StorageError(f"Could not read {path}: {e}") from e

    def set(self, key: str, value: bytes) -> None:
        path = self._path_for(key)
        tmp = path.with_name(path.name + ".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(tmp, "wb") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except OSError as e:
            raise StorageError(f"Could not write {path}: {e}") from e

        try:
            os.chmod(path, 0o600)
        except OSError:
            logger.debug("Could not restrict permissions on %s", path)

    def remove(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Could not remove {path}: {e}") from e
