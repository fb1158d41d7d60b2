#!/usr/bin/env python3
"""
Protocol classes for the interfaces the state holders depend on.
Keeps TrackerState and QualityState independent of the concrete store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sleep_tracker_app.core.dataclasses import SleepSession


@runtime_checkable
class SleepSessionStore(Protocol):
    """
    Record store consumed by the state holders.

    Implementations must be safe to call from several pool threads at once.
    ``records_changed`` is a Qt signal emitted after every write that changed
    the stored collection; it drives the history view.

    Implemented by DatabaseManager (see data/database.py).
    """

    records_changed: Any  # pyqtBoundSignal

    def get_latest_record(self) -> SleepSession | None: ...

    def get_all_records(self) -> list[SleepSession]: ...

    def get_record(self, session_id: int) -> SleepSession | None: ...

    def insert_record(self, session: SleepSession) -> int: ...

    def update_record(self, session: SleepSession) -> bool: ...

    def clear_all_records(self) -> int: ...
