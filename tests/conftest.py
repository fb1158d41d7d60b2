#!/usr/bin/env python3
"""
Shared test fixtures for the sleep tracker application.
Provides common test setup and utilities.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

# Headless Qt for CI; must be set before the QApplication is created
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QThreadPool

from sleep_tracker_app.data.database import DatabaseManager


# pytest-qt configuration
def pytest_configure(config):
    """Register markers used across the suite."""
    config.addinivalue_line("markers", "gui: mark test as a GUI test")
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


@pytest.fixture
def test_db_path(tmp_path: Path) -> Path:
    """Provide path for test database."""
    return tmp_path / "test_sleep_tracker.db"


@pytest.fixture
def test_db(test_db_path: Path) -> DatabaseManager:
    """Real DatabaseManager backed by a temp SQLite file."""
    return DatabaseManager(db_path=test_db_path)


@pytest.fixture
def thread_pool(qtbot):
    """
    Private background pool for one test.

    Waiting for it on teardown keeps store calls from one test leaking into
    the next.
    """
    pool = QThreadPool()
    yield pool
    pool.waitForDone(5000)
