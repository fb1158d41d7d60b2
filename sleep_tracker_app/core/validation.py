#!/usr/bin/env python3
"""
Input Validation Module for Sleep Tracker Application
Checks user-supplied paths, session ids and quality scores before they reach the store.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, ClassVar

from sleep_tracker_app.core.constants import SleepQuality
from sleep_tracker_app.core.exceptions import ErrorCodes, SecurityError, ValidationError


class InputValidator:
    """Static validators raising ValidationError / SecurityError on bad input."""

    TRAVERSAL_RE = re.compile(r"\.\.[\\/]")

    ALLOWED_EXTENSIONS: ClassVar[frozenset[str]] = frozenset({".db", ".json", ".log"})
    MAX_NAME_LENGTH = 255
    MAX_PATH_LENGTH = 4096

    @staticmethod
    def _require_safe_path(raw: str | Path | None, what: str) -> Path:
        if not raw:
            msg = f"{what} path is required"
            raise ValidationError(msg, ErrorCodes.MISSING_REQUIRED)

        text = str(raw)
        if InputValidator.TRAVERSAL_RE.search(text):
            msg = f"Refusing {what.lower()} path containing '..': {text}"
            raise SecurityError(msg, ErrorCodes.PATH_TRAVERSAL, {"path": text})
        if len(text) > InputValidator.MAX_PATH_LENGTH:
            msg = f"{what} path exceeds {InputValidator.MAX_PATH_LENGTH} characters"
            raise ValidationError(msg, ErrorCodes.INVALID_INPUT)
        return Path(raw)

    @staticmethod
    def validate_file_path(
        file_path: str | Path,
        must_exist: bool = True,
        allowed_extensions: set[str] | frozenset[str] | None = None,
    ) -> Path:
        """
        Validate a database, config or log file path.

        Args:
            file_path: Path to validate
            must_exist: Whether the file has to be present already
            allowed_extensions: Accepted suffixes, defaults to ALLOWED_EXTENSIONS

        Raises:
            ValidationError: Empty, too long, wrong extension or missing file
            SecurityError: Path contains a parent-directory traversal

        """
        path = InputValidator._require_safe_path(file_path, "File")

        if len(path.name) > InputValidator.MAX_NAME_LENGTH:
            msg = f"File name exceeds {InputValidator.MAX_NAME_LENGTH} characters: {path.name[:40]}..."
            raise ValidationError(msg, ErrorCodes.INVALID_INPUT)

        accepted = InputValidator.ALLOWED_EXTENSIONS if allowed_extensions is None else allowed_extensions
        if path.suffix.lower() not in accepted:
            msg = f"Unsupported file extension '{path.suffix}', expected one of {sorted(accepted)}"
            raise ValidationError(msg, ErrorCodes.INVALID_INPUT)

        if must_exist and not path.is_file():
            msg = f"No such file: {path}"
            raise ValidationError(msg, ErrorCodes.FILE_NOT_FOUND)

        return path

    @staticmethod
    def validate_directory_path(dir_path: str | Path, create_if_missing: bool = False) -> Path:
        """Validate a directory path, creating it first when ``create_if_missing`` is set."""
        path = InputValidator._require_safe_path(dir_path, "Directory")

        if not path.exists() and create_if_missing:
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                msg = f"Could not create directory {path}: {e}"
                raise ValidationError(msg, ErrorCodes.FILE_PERMISSION_DENIED) from e

        if not path.exists():
            msg = f"No such directory: {path}"
            raise ValidationError(msg, ErrorCodes.FILE_NOT_FOUND)
        if not path.is_dir():
            msg = f"Not a directory: {path}"
            raise ValidationError(msg, ErrorCodes.INVALID_INPUT)

        return path

    @staticmethod
    def validate_integer(
        value: Any,
        min_val: int | None = None,
        max_val: int | None = None,
        name: str = "value",
    ) -> int:
        """
        Check that ``value`` is a plain int within the optional bounds.

        bool is rejected even though it subclasses int.
        """
        if value is None:
            msg = f"{name} is required"
            raise ValidationError(msg, ErrorCodes.MISSING_REQUIRED)
        if isinstance(value, bool) or not isinstance(value, int):
            msg = f"{name} must be an integer, got {type(value).__name__}"
            raise ValidationError(msg, ErrorCodes.INVALID_INPUT)

        too_low = min_val is not None and value < min_val
        too_high = max_val is not None and value > max_val
        if too_low or too_high:
            low = "-inf" if min_val is None else min_val
            high = "inf" if max_val is None else max_val
            msg = f"{name} must be within [{low}, {high}], got {value}"
            raise ValidationError(msg, ErrorCodes.OUT_OF_RANGE, {"name": name, "value": value})

        return value

    @staticmethod
    def validate_quality_score(score: Any) -> int:
        """Validate a self-reported quality score (0 = very bad ... 5 = excellent)."""
        return InputValidator.validate_integer(
            score,
            min_val=min(SleepQuality).value,
            max_val=max(SleepQuality).value,
            name="quality_score",
        )

    @staticmethod
    def validate_session_id(session_id: Any) -> int:
        """Validate a store-assigned session id."""
        return InputValidator.validate_integer(session_id, min_val=1, name="session_id")
