#!/usr/bin/env python3
"""Configuration-related dataclasses."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from typing import Any

from sleep_tracker_app.core.exceptions import ConfigurationError, ErrorCodes

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AppConfig:
    """Application configuration settings with defaults."""

    # Empty string means "use the per-user data directory"
    database_path: str = ""

    # Logging
    log_level: str = "WARNING"
    log_file: str = ""  # Empty string logs to stderr only

    # Background pool size; 0 keeps Qt's default (one thread per core)
    max_background_threads: int = 0

    def __post_init__(self) -> None:
        self.log_level = str(self.log_level).upper()
        if self.log_level not in VALID_LOG_LEVELS:
            msg = f"Invalid log level: {self.log_level}. Expected one of {', '.join(VALID_LOG_LEVELS)}"
            raise ConfigurationError(msg, ErrorCodes.CONFIG_INVALID)
        if isinstance(self.max_background_threads, bool) or not isinstance(self.max_background_threads, int):
            msg = f"max_background_threads must be an integer, got {type(self.max_background_threads).__name__}"
            raise ConfigurationError(msg, ErrorCodes.CONFIG_INVALID)
        if self.max_background_threads < 0:
            msg = f"max_background_threads must be >= 0, got {self.max_background_threads}"
            raise ConfigurationError(msg, ErrorCodes.CONFIG_INVALID)

    @property
    def numeric_log_level(self) -> int:
        return logging.getLevelName(self.log_level)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for config storage."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        """
        Create config from a dictionary, ignoring unknown keys.

        Raises:
            ConfigurationError: If data is not a mapping or a value is invalid

        """
        if not isinstance(data, dict):
            msg = f"Config must be a JSON object, got {type(data).__name__}"
            raise ConfigurationError(msg, ErrorCodes.CONFIG_INVALID)

        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def create_default(cls) -> AppConfig:
        return cls()
