#!/usr/bin/env python3
"""
Shared fixtures for data layer tests.

Provides repository instances and sample session factories.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from sleep_tracker_app.core.dataclasses import SleepSession
from sleep_tracker_app.data.repositories import BaseRepository, SleepSessionRepository

if TYPE_CHECKING:
    from sleep_tracker_app.data.database import DatabaseManager


# ============================================================================
# REPOSITORY FIXTURES
# ============================================================================


@pytest.fixture
def base_repository(test_db: DatabaseManager) -> BaseRepository:
    """BaseRepository sharing the test database and its validators."""
    return BaseRepository(
        db_path=test_db.db_path,
        validate_table_name=test_db._validate_table_name,
        validate_column_name=test_db._validate_column_name,
    )


@pytest.fixture
def session_repository(test_db: DatabaseManager) -> SleepSessionRepository:
    """The repository the DatabaseManager itself uses."""
    return test_db.sessions


# ============================================================================
# SAMPLE DATA
# ============================================================================


@pytest.fixture
def open_session() -> SleepSession:
    return SleepSession.open_at(100)


@pytest.fixture
def closed_session() -> SleepSession:
    return SleepSession(start_time_milli=100, end_time_milli=500, quality_score=3)
