#!/usr/bin/env python3
"""
Database Manager for Sleep Tracker Application
SQLite-backed record store for sleep sessions, with change notifications.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from PyQt6.QtCore import QObject, pyqtSignal

from sleep_tracker_app.core.exceptions import ErrorCodes, ValidationError
from sleep_tracker_app.core.validation import InputValidator
from sleep_tracker_app.data.database_schema import DatabaseSchemaManager
from sleep_tracker_app.data.repositories import BaseRepository, SleepSessionRepository
from sleep_tracker_app.utils.resource_resolver import get_database_path

if TYPE_CHECKING:
    from pathlib import Path

    from sleep_tracker_app.core.dataclasses import SleepSession

logger = logging.getLogger(__name__)


class DatabaseManager(QObject):
    """
    Record store for sleep sessions.

    Every public method is safe to call from any thread: each call opens its
    own SQLite connection. ``records_changed`` is emitted after each write
    that modified at least one row, from the thread that performed the write;
    receivers living on the UI thread get it through a queued connection.
    """

    records_changed = pyqtSignal()

    VALID_TABLES: ClassVar[set[str]] = BaseRepository.VALID_TABLES
    VALID_COLUMNS: ClassVar[set[str]] = BaseRepository.VALID_COLUMNS

    def __init__(self, db_path: Path | str | None = None, parent: QObject | None = None) -> None:
        """Open (or create) the store at ``db_path``, defaulting to the per-user database file."""
        super().__init__(parent)

        self.db_path = (
            InputValidator.validate_file_path(db_path, must_exist=False, allowed_extensions={".db"})
            if db_path
            else get_database_path()
        )
        InputValidator.validate_directory_path(self.db_path.parent, create_if_missing=True)

        self.sessions = SleepSessionRepository(self.db_path, self._validate_table_name, self._validate_column_name)
        self._create_schema()

    def _validate_table_name(self, table_name: str) -> str:
        """Whitelist check for table names interpolated into SQL."""
        return self._check_identifier(table_name, self.VALID_TABLES, "table")

    def _validate_column_name(self, column_name: str) -> str:
        """Whitelist check for column names interpolated into SQL."""
        return self._check_identifier(column_name, self.VALID_COLUMNS, "column")

    @staticmethod
    def _check_identifier(name: str, allowed: set[str], kind: str) -> str:
        if name not in allowed:
            msg = f"Unknown {kind} name: {name!r}"
            raise ValidationError(msg, ErrorCodes.INVALID_INPUT)
        return name

    def _create_schema(self) -> None:
        schema = DatabaseSchemaManager(self._validate_table_name, self._validate_column_name)
        # sqlite3 errors surface as DatabaseError from _get_connection
        with self.sessions._get_connection() as conn:
            schema.init_all_tables(conn)
            conn.commit()
        logger.info("Sleep session store ready at %s", self.db_path)

    # =========================================================================
    # Record store
    # =========================================================================

    def get_latest_record(self) -> SleepSession | None:
        """Most recent session (highest id), open or closed."""
        return self.sessions.get_latest_session()

    def get_all_records(self) -> list[SleepSession]:
        """All sessions, newest first."""
        return self.sessions.get_all_sessions()

    def get_record(self, session_id: int) -> SleepSession | None:
        return self.sessions.get_session(session_id)

    def insert_record(self, session: SleepSession) -> int:
        session_id = self.sessions.insert_session(session)
        self.records_changed.emit()
        return session_id

    def update_record(self, session: SleepSession) -> bool:
        updated = self.sessions.update_session(session)
        if updated:
            self.records_changed.emit()
        return updated

    def clear_all_records(self) -> int:
        deleted = self.sessions.clear_sessions()
        if deleted:
            self.records_changed.emit()
        return deleted
