from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import pendulum
import pytest

from medjournal import configuration
from medjournal.model.entry import Entry
from medjournal.repository.configuration import CONFIGURATION_REPO


def make_entry(
    medications: Optional[list[str]] = None,
    wellbeing: Optional[int] = 5,
    timestamp: Optional[pendulum.DateTime] = None,
    id: str = "entry",
    notes: Optional[str] = None,
) -> Entry:
    return {
        "id": id,
        "timestamp": timestamp if timestamp is not None else pendulum.now("UTC"),
        "medications": medications if medications is not None else [],
        "wellbeing": wellbeing,
        "notes": notes,
    }


@pytest.fixture()
def isolated_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_dir)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_dir / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", data_dir)
    monkeypatch.setattr(CONFIGURATION_REPO, "_config", None)
    return tmp_path


class FailingStorage:
    """Storage whose reads work but whose writes always fail."""

    def __init__(self, initial: Optional[dict[str, bytes]] = None) -> None:
        self.data: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self.data.get(key)

    def set(self, key: str, value: bytes) -> None:
        from medjournal.repository.storage import StorageError

        raise StorageError("disk full")

    def remove(self, key: str) -> None:
        from medjournal.repository.storage import StorageError

        raise StorageError("read-only")


class UnreadableStorage(FailingStorage):
    def get(self, key: str) -> Any:
        from medjournal.repository.storage import StorageError

        raise StorageError("permission denied")
