"""Repository for sleep session database operations."""

from __future__ import annotations

import logging

from sleep_tracker_app.core.constants import DatabaseColumn, DatabaseTable
from sleep_tracker_app.core.dataclasses import SleepSession
from sleep_tracker_app.core.exceptions import DatabaseError, ErrorCodes, ValidationError
from sleep_tracker_app.core.validation import InputValidator
from sleep_tracker_app.data.repositories.base_repository import BaseRepository

logger = logging.getLogger(__name__)


class SleepSessionRepository(BaseRepository):
    """Repository for sleep session operations (one row per night)."""

    def _select_columns(self) -> str:
        return ", ".join(
            self._validate_column_name(column)
            for column in (
                DatabaseColumn.SESSION_ID,
                DatabaseColumn.START_TIME_MILLI,
                DatabaseColumn.END_TIME_MILLI,
                DatabaseColumn.QUALITY_RATING,
            )
        )

    def insert_session(self, session: SleepSession) -> int:
        """Insert a session and return the id assigned by SQLite."""
        if not isinstance(session, SleepSession):
            msg = "session must be SleepSession instance"
            raise ValidationError(msg, ErrorCodes.INVALID_INPUT)
        if session.id is not None:
            msg = f"Cannot insert a session that already has id {session.id}"
            raise ValidationError(msg, ErrorCodes.INVALID_INPUT)

        table_name = self._validate_table_name(DatabaseTable.SLEEP_SESSIONS)
        values = session.to_database_dict()
        columns = ", ".join(self._validate_column_name(column) for column in values)
        placeholders = ", ".join("?" for _ in values)

        with self._get_connection() as conn:
            cursor = conn.execute(
                f"INSERT INTO {table_name} ({columns}) VALUES ({placeholders})",
                tuple(values.values()),
            )
            conn.commit()
            session_id = cursor.lastrowid

        if session_id is None:
            msg = "SQLite did not assign an id to the inserted session"
            raise DatabaseError(msg, ErrorCodes.DB_INSERT_FAILED)

        logger.debug("Inserted sleep session %s starting at %s", session_id, session.start_time_milli)
        return session_id

    def update_session(self, session: SleepSession) -> bool:
        """
        Overwrite the stored row for ``session.id``.

        Returns:
            True if a row was updated, False if the session no longer exists

        """
        if not isinstance(session, SleepSession):
            msg = "session must be SleepSession instance"
            raise ValidationError(msg, ErrorCodes.INVALID_INPUT)
        session_id = InputValidator.validate_session_id(session.id)

        table_name = self._validate_table_name(DatabaseTable.SLEEP_SESSIONS)
        values = session.to_database_dict()
        assignments = ", ".join(f"{self._validate_column_name(column)} = ?" for column in values)
        id_column = self._validate_column_name(DatabaseColumn.SESSION_ID)

        with self._get_connection() as conn:
            cursor = conn.execute(
                f"UPDATE {table_name} SET {assignments} WHERE {id_column} = ?",
                (*values.values(), session_id),
            )
            conn.commit()
            updated = cursor.rowcount > 0

        if updated:
            logger.debug("Updated sleep session %s", session_id)
        else:
            logger.info("Sleep session %s no longer exists, nothing updated", session_id)
        return updated

    def get_session(self, session_id: int) -> SleepSession | None:
        """Load one session by id, or None if it does not exist."""
        session_id = InputValidator.validate_session_id(session_id)
        table_name = self._validate_table_name(DatabaseTable.SLEEP_SESSIONS)
        id_column = self._validate_column_name(DatabaseColumn.SESSION_ID)

        with self._get_connection() as conn:
            row = conn.execute(
                f"SELECT {self._select_columns()} FROM {table_name} WHERE {id_column} = ?",
                (session_id,),
            ).fetchone()

        return SleepSession.from_database_row(row) if row is not None else None

    def get_latest_session(self) -> SleepSession | None:
        """Load the most recently inserted session, open or closed."""
        table_name = self._validate_table_name(DatabaseTable.SLEEP_SESSIONS)
        id_column = self._validate_column_name(DatabaseColumn.SESSION_ID)

        with self._get_connection() as conn:
            row = conn.execute(
                f"SELECT {self._select_columns()} FROM {table_name} ORDER BY {id_column} DESC LIMIT 1",
            ).fetchone()

        return SleepSession.from_database_row(row) if row is not None else None

    def get_all_sessions(self) -> list[SleepSession]:
        """Load every session, newest first."""
        table_name = self._validate_table_name(DatabaseTable.SLEEP_SESSIONS)
        id_column = self._validate_column_name(DatabaseColumn.SESSION_ID)

        with self._get_connection() as conn:
            rows = conn.execute(
                f"SELECT {self._select_columns()} FROM {table_name} ORDER BY {id_column} DESC",
            ).fetchall()

        return [SleepSession.from_database_row(row) for row in rows]

    def clear_sessions(self) -> int:
        """Delete every session and return how many rows were removed."""
        table_name = self._validate_table_name(DatabaseTable.SLEEP_SESSIONS)

        with self._get_connection() as conn:
            cursor = conn.execute(f"DELETE FROM {table_name}")
            conn.commit()
            deleted = cursor.rowcount

        logger.info("Cleared %s sleep sessions", deleted)
        return deleted
