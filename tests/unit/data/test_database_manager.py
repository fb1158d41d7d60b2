#!/usr/bin/env python3
"""
Unit tests for DatabaseManager.

Tests schema creation, path validation, the record-store methods and the
records_changed notification.
"""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING

import pytest

from sleep_tracker_app.core.constants import DatabaseTable
from sleep_tracker_app.core.dataclasses import SleepSession
from sleep_tracker_app.core.exceptions import SecurityError, ValidationError
from sleep_tracker_app.data.database import DatabaseManager
from sleep_tracker_app.ui.protocols import SleepSessionStore

if TYPE_CHECKING:
    from pathlib import Path


class TestDatabaseManagerInit:
    """Tests for DatabaseManager construction."""

    def test_creates_schema(self, test_db: DatabaseManager):
        with sqlite3.connect(test_db.db_path) as conn:
            tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
        assert DatabaseTable.SLEEP_SESSIONS in tables

    def test_creates_parent_directory(self, tmp_path: Path):
        db_path = tmp_path / "nested" / "dir" / "sleep.db"

        db = DatabaseManager(db_path=db_path)

        assert db.db_path == db_path
        assert db_path.exists()

    def test_reopening_keeps_data(self, test_db_path: Path):
        """Schema creation is idempotent."""
        first = DatabaseManager(db_path=test_db_path)
        session_id = first.insert_record(SleepSession.open_at(100))

        second = DatabaseManager(db_path=test_db_path)

        assert second.get_record(session_id) is not None

    def test_rejects_wrong_extension(self, tmp_path: Path):
        with pytest.raises(ValidationError):
            DatabaseManager(db_path=tmp_path / "sleep.sqlite")

    def test_rejects_path_traversal(self):
        with pytest.raises(SecurityError):
            DatabaseManager(db_path="../outside/sleep.db")

    def test_satisfies_store_protocol(self, test_db: DatabaseManager):
        assert isinstance(test_db, SleepSessionStore)


class TestNameValidation:
    """Tests for table/column whitelist validation."""

    def test_valid_table_name(self, test_db: DatabaseManager):
        assert test_db._validate_table_name(DatabaseTable.SLEEP_SESSIONS) == DatabaseTable.SLEEP_SESSIONS

    def test_invalid_table_name(self, test_db: DatabaseManager):
        with pytest.raises(ValidationError):
            test_db._validate_table_name("sessions; DROP TABLE x")

    def test_invalid_column_name(self, test_db: DatabaseManager):
        with pytest.raises(ValidationError):
            test_db._validate_column_name("1=1")


class TestRecordStore:
    """Tests for the record-store methods."""

    def test_insert_and_get(self, test_db: DatabaseManager):
        session_id = test_db.insert_record(SleepSession.open_at(100))

        assert test_db.get_record(session_id) == SleepSession(100, 100, None, session_id)

    def test_latest_record(self, test_db: DatabaseManager):
        test_db.insert_record(SleepSession(1, 2))
        latest_id = test_db.insert_record(SleepSession.open_at(3))

        assert test_db.get_latest_record().id == latest_id

    def test_update_record(self, test_db: DatabaseManager):
        session_id = test_db.insert_record(SleepSession.open_at(100))

        assert test_db.update_record(test_db.get_record(session_id).closed_at(500)) is True
        assert test_db.get_record(session_id).end_time_milli == 500

    def test_all_records_and_clear(self, test_db: DatabaseManager):
        test_db.insert_record(SleepSession.open_at(1))
        test_db.insert_record(SleepSession.open_at(2))

        assert len(test_db.get_all_records()) == 2
        assert test_db.clear_all_records() == 2
        assert test_db.get_all_records() == []


class TestRecordsChanged:
    """Tests for the records_changed signal."""

    def test_emitted_on_insert(self, qtbot, test_db: DatabaseManager):
        with qtbot.waitSignal(test_db.records_changed, timeout=1000):
            test_db.insert_record(SleepSession.open_at(100))

    def test_emitted_on_update(self, qtbot, test_db: DatabaseManager):
        session_id = test_db.insert_record(SleepSession.open_at(100))

        with qtbot.waitSignal(test_db.records_changed, timeout=1000):
            test_db.update_record(SleepSession(100, 500, id=session_id))

    def test_not_emitted_for_missing_update(self, qtbot, test_db: DatabaseManager):
        """Nothing changed, nothing to announce."""
        with qtbot.assertNotEmitted(test_db.records_changed):
            test_db.update_record(SleepSession(100, 500, id=12345))

    def test_emitted_on_clear(self, qtbot, test_db: DatabaseManager):
        test_db.insert_record(SleepSession.open_at(100))

        with qtbot.waitSignal(test_db.records_changed, timeout=1000):
            test_db.clear_all_records()

    def test_not_emitted_for_empty_clear(self, qtbot, test_db: DatabaseManager):
        with qtbot.assertNotEmitted(test_db.records_changed):
            test_db.clear_all_records()
