#!/usr/bin/env python3
"""
Unit tests for ConfigManager.

Tests loading, defaults, malformed files and saving.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from sleep_tracker_app.core.dataclasses_config import AppConfig
from sleep_tracker_app.core.exceptions import ConfigurationError, ValidationError
from sleep_tracker_app.utils.config import ConfigManager

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "config.json"


class TestLoadConfig:
    """Tests for loading configuration."""

    def test_missing_file_uses_defaults(self, config_path: Path):
        manager = ConfigManager(config_path)

        assert manager.config == AppConfig.create_default()
        assert not config_path.exists()

    def test_loads_existing_file(self, config_path: Path):
        config_path.write_text(json.dumps({"log_level": "info", "max_background_threads": 2}))

        manager = ConfigManager(config_path)

        assert manager.config.log_level == "INFO"
        assert manager.config.max_background_threads == 2

    def test_malformed_json(self, config_path: Path):
        config_path.write_text("{not json")

        with pytest.raises(ConfigurationError):
            ConfigManager(config_path)

    def test_invalid_values(self, config_path: Path):
        config_path.write_text(json.dumps({"max_background_threads": -5}))

        with pytest.raises(ConfigurationError):
            ConfigManager(config_path)

    def test_rejects_non_json_path(self, tmp_path: Path):
        with pytest.raises(ValidationError):
            ConfigManager(tmp_path / "config.yaml")


class TestSaveConfig:
    """Tests for saving configuration."""

    def test_save_round_trip(self, config_path: Path):
        manager = ConfigManager(config_path)
        manager.config.log_level = "DEBUG"

        manager.save_config()

        assert ConfigManager(config_path).config.log_level == "DEBUG"

    def test_update_database_path(self, tmp_path: Path, config_path: Path):
        manager = ConfigManager(config_path)
        db_path = str(tmp_path / "elsewhere.db")

        manager.update_database_path(db_path)

        assert json.loads(config_path.read_text())["database_path"] == db_path

    def test_update_database_path_validates(self, config_path: Path):
        manager = ConfigManager(config_path)

        with pytest.raises(ValidationError):
            manager.update_database_path("notes.txt")
