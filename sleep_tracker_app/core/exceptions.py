#!/usr/bin/env python3
"""
Exception types for the sleep tracker.

Every error raised by the application derives from SleepTrackerError and
carries an ErrorCodes value plus optional context for logging.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCodes(StrEnum):
    """Machine-readable error codes."""

    # Input
    INVALID_INPUT = "INVALID_INPUT"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    MISSING_REQUIRED = "MISSING_REQUIRED"

    # SQLite store
    DB_CONNECTION_FAILED = "DB_CONNECTION_FAILED"
    DB_QUERY_FAILED = "DB_QUERY_FAILED"
    DB_INTEGRITY_VIOLATION = "DB_INTEGRITY_VIOLATION"
    DB_INSERT_FAILED = "DB_INSERT_FAILED"

    # Files and paths
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    FILE_PERMISSION_DENIED = "FILE_PERMISSION_DENIED"
    PATH_TRAVERSAL = "PATH_TRAVERSAL"

    CONFIG_INVALID = "CONFIG_INVALID"


class SleepTrackerError(Exception):
    """Root of the application's exception hierarchy."""

    def __init__(self, message: str, error_code: str | None = None, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def __str__(self) -> str:
        if not self.error_code:
            return self.message
        return f"[{self.error_code}] {self.message}"


class ValidationError(SleepTrackerError):
    """Bad input from the user or a caller."""


class DatabaseError(SleepTrackerError):
    """The SQLite store could not complete an operation."""


class DataIntegrityError(DatabaseError):
    """A write was rejected by a table constraint."""


class SecurityError(SleepTrackerError):
    """A path tried to escape its directory."""


class ConfigurationError(SleepTrackerError):
    """config.json is unreadable or holds invalid values."""
