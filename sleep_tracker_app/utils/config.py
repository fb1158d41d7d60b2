#!/usr/bin/env python3
"""
Configuration Manager for Sleep Tracker Application
Loads and saves AppConfig as JSON in the user data directory.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from sleep_tracker_app.core.dataclasses_config import AppConfig
from sleep_tracker_app.core.exceptions import ConfigurationError, ErrorCodes
from sleep_tracker_app.core.validation import InputValidator
from sleep_tracker_app.utils.resource_resolver import get_config_path

logger = logging.getLogger(__name__)


class ConfigManager:
    """Owns the application's AppConfig and its JSON file."""

    def __init__(self, config_path: Path | str | None = None) -> None:
        if config_path:
            self.config_path = InputValidator.validate_file_path(
                config_path, must_exist=False, allowed_extensions={".json"}
            )
        else:
            self.config_path = get_config_path()
        self.config = self.load_config()

    def load_config(self) -> AppConfig:
        """
        Load configuration from disk, falling back to defaults if the file is missing.

        Raises:
            ConfigurationError: If the file exists but is not valid JSON or holds invalid values

        """
        if not self.config_path.exists():
            logger.info("No config file at %s, using defaults", self.config_path)
            return AppConfig.create_default()

        try:
            data = json.loads(self.config_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            msg = f"Invalid JSON in config file {self.config_path}: {e}"
            raise ConfigurationError(msg, ErrorCodes.CONFIG_INVALID) from e
        except OSError as e:
            msg = f"Cannot read config file {self.config_path}: {e}"
            raise ConfigurationError(msg, ErrorCodes.FILE_PERMISSION_DENIED) from e

        config = AppConfig.from_dict(data)
        logger.debug("Loaded config from %s: %s", self.config_path, config)
        return config

    def save_config(self) -> None:
        """Write the current configuration back to disk."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(json.dumps(self.config.to_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            msg = f"Cannot write config file {self.config_path}: {e}"
            raise ConfigurationError(msg, ErrorCodes.FILE_PERMISSION_DENIED) from e
        logger.info("Saved config to %s", self.config_path)

    def update_database_path(self, database_path: str) -> None:
        """Point the app at a different database file and persist the choice."""
        if database_path:
            InputValidator.validate_file_path(database_path, must_exist=False, allowed_extensions={".db"})
        self.config.database_path = database_path
        self.save_config()
