"""Shared connection handling for the sleep session repositories."""

from __future__ import annotations

import contextlib
import logging
import sqlite3
from contextlib import contextmanager
from typing import TYPE_CHECKING, ClassVar

from sleep_tracker_app.core.constants import DatabaseColumn, DatabaseTable
from sleep_tracker_app.core.exceptions import (
    DatabaseError,
    DataIntegrityError,
    ErrorCodes,
    SleepTrackerError,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError both subclass sqlite3.Error
_SQLITE_ERROR_MAP: tuple[tuple[type[sqlite3.Error], type[SleepTrackerError], ErrorCodes, str], ...] = (
    (sqlite3.IntegrityError, DataIntegrityError, ErrorCodes.DB_INTEGRITY_VIOLATION, "Constraint violated"),
    (sqlite3.OperationalError, DatabaseError, ErrorCodes.DB_CONNECTION_FAILED, "SQLite operation failed"),
    (sqlite3.Error, DatabaseError, ErrorCodes.DB_QUERY_FAILED, "SQLite error"),
)


class BaseRepository:
    """
    Common base for repositories over the sleep tracker database.

    Table and column names are interpolated into SQL, so every name passes
    through the whitelist validators handed in by the DatabaseManager.
    """

    VALID_TABLES: ClassVar[set[str]] = {
        DatabaseTable.SLEEP_SESSIONS,
    }
    VALID_COLUMNS: ClassVar[set[str]] = set(DatabaseColumn)

    def __init__(
        self,
        db_path: Path,
        validate_table_name: Callable[[str], str],
        validate_column_name: Callable[[str], str],
    ) -> None:
        self.db_path = db_path
        self._validate_table_name = validate_table_name
        self._validate_column_name = validate_column_name

    @contextmanager
    def _get_connection(self) -> Iterator[sqlite3.Connection]:
        """
        Open a short-lived connection, translating sqlite3 errors.

        Each call gets its own connection so pool threads never share one;
        SQLite's busy timeout serializes concurrent writers.

        Raises:
            DataIntegrityError: On constraint violations
            DatabaseError: On any other sqlite3 error

        """
        conn: sqlite3.Connection | None = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode = WAL")
            yield conn
        except sqlite3.Error as e:
            if conn is not None:
                with contextlib.suppress(sqlite3.Error):
                    conn.rollback()
            raise self._translate_error(e) from e
        finally:
            if conn is not None:
                with contextlib.suppress(sqlite3.Error):
                    conn.close()

    def _translate_error(self, error: sqlite3.Error) -> SleepTrackerError:
        for sqlite_type, error_type, code, label in _SQLITE_ERROR_MAP:
            if isinstance(error, sqlite_type):
                logger.exception("%s on %s", label, self.db_path)
                return error_type(f"{label}: {error}", code, {"db_path": str(self.db_path)})
        # Unreachable: the last entry matches every sqlite3.Error
        return DatabaseError(str(error), ErrorCodes.DB_QUERY_FAILED)
