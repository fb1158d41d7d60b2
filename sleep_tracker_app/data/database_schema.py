#!/usr/bin/env python3
"""
Database Schema Manager for Sleep Tracker Application.

Handles table and index creation for the sleep session store.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sleep_tracker_app.core.constants import DatabaseColumn, DatabaseTable

if TYPE_CHECKING:
    import sqlite3
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class DatabaseSchemaManager:
    """Creates the sleep session table and its indexes."""

    def __init__(
        self,
        validate_table_name: Callable[[str], str],
        validate_column_name: Callable[[str], str],
    ) -> None:
        """
        Initialize schema manager with validation callbacks.

        Args:
            validate_table_name: Callback to validate table names
            validate_column_name: Callback to validate column names

        """
        self._validate_table_name = validate_table_name
        self._validate_column_name = validate_column_name

    def init_all_tables(self, conn: sqlite3.Connection) -> None:
        """Create all tables and indexes if they do not exist yet."""
        sessions_table = self._validate_table_name(DatabaseTable.SLEEP_SESSIONS)
        self._create_sessions_table(conn, sessions_table)
        self._create_sessions_indexes(conn, sessions_table)

    def _create_sessions_table(self, conn: sqlite3.Connection, table_name: str) -> None:
        conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {table_name} (
                {self._validate_column_name(DatabaseColumn.SESSION_ID)} INTEGER PRIMARY KEY AUTOINCREMENT,
                {self._validate_column_name(DatabaseColumn.START_TIME_MILLI)} INTEGER NOT NULL,
                {self._validate_column_name(DatabaseColumn.END_TIME_MILLI)} INTEGER NOT NULL,
                {self._validate_column_name(DatabaseColumn.QUALITY_RATING)} INTEGER,
                CHECK ({DatabaseColumn.END_TIME_MILLI} >= {DatabaseColumn.START_TIME_MILLI})
            )
        """
        )
        logger.debug("Ensured table %s exists", table_name)

    def _create_sessions_indexes(self, conn: sqlite3.Connection, table_name: str) -> None:
        start_column = self._validate_column_name(DatabaseColumn.START_TIME_MILLI)
        conn.execute(f"CREATE INDEX IF NOT EXISTS idx_{table_name}_start ON {table_name} ({start_column})")
