"""Tests for configuration loading and initialization."""

from __future__ import annotations

from pathlib import Path

from yaml import safe_dump, safe_load

from medjournal import configuration
from medjournal.initialize import initialize
from medjournal.repository.configuration import CONFIGURATION_REPO
from medjournal.repository.entry import get_entry_repository
from medjournal.view.state import get_show_header, set_show_header


def test_defaults_without_config_file(isolated_paths):
    config = CONFIGURATION_REPO.get_config()
    assert config == configuration.get_default_configuration()


def test_initialize_creates_config_and_data_dirs(isolated_paths):
    initialize()
    assert configuration.APP_CONFIG_PATH.is_file()
    assert configuration.DATA_PATH.is_dir()
    written = safe_load(configuration.APP_CONFIG_PATH.read_text())
    assert written["trend_window_days"] == 30
    assert written["storage_key"] == "medication_entries"


def test_missing_keys_get_defaults(isolated_paths):
    configuration.CONFIG_PATH.mkdir(parents=True)
    configuration.APP_CONFIG_PATH.write_text(safe_dump({"trend_window_days": 14}))
    config = CONFIGURATION_REPO.get_config()
    assert config["trend_window_days"] == 14
    assert config["min_correlation_entries"] == 2


def test_update_config_persists(isolated_paths):
    CONFIGURATION_REPO.update_config(min_correlation_entries=3, log_level="debug")
    written = safe_load(configuration.APP_CONFIG_PATH.read_text())
    assert written["min_correlation_entries"] == 3
    assert written["log_level"] == "DEBUG"


def test_data_path_setting(isolated_paths: Path):
    custom = isolated_paths / "custom-data"
    configuration.CONFIG_PATH.mkdir(parents=True)
    configuration.APP_CONFIG_PATH.write_text(safe_dump({"data_path": str(custom)}))

    initialize()

    assert configuration.DATA_PATH == custom
    assert custom.is_dir()
    get_entry_repository().save_new_entry({"medications": ["A"]})
    assert (custom / "medication_entries.json").is_file()


def test_show_header_setting(isolated_paths):
    configuration.CONFIG_PATH.mkdir(parents=True)
    configuration.APP_CONFIG_PATH.write_text(safe_dump({"show_header": False}))
    initialize()
    assert get_show_header() is False
    set_show_header(True)
