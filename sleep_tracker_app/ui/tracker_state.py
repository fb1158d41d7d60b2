#!/usr/bin/env python3
"""
State holder for the sleep tracker screen.

Owns the currently open sleep session and the session history, and drives the
start / stop / clear workflow. Every store call runs on the background pool;
``current_session`` is always re-read from the store after a workflow, never
computed locally.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, QThreadPool, pyqtSlot

from sleep_tracker_app.core.dataclasses import SleepSession
from sleep_tracker_app.ui.state_holder import StateHolder
from sleep_tracker_app.utils.formatting import format_sessions

if TYPE_CHECKING:
    from collections.abc import Callable

    from sleep_tracker_app.ui.protocols import SleepSessionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackerViewState:
    """
    Immutable state of the tracker screen.

    navigate_to_quality and show_snackbar are one-shot events: the screen acts
    on them and then calls done_navigating() / done_showing_snackbar().
    """

    current_session: SleepSession | None = None
    sessions: tuple[SleepSession, ...] = ()  # Newest first
    navigate_to_quality: int | None = None  # Id of the session that was just stopped
    show_snackbar: bool = False  # Raised after the history was cleared


def wall_clock_millis() -> int:
    """Current time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


class TrackerState(StateHolder):
    """State holder for the tracker screen."""

    def __init__(
        self,
        store: SleepSessionStore,
        clock: Callable[[], int] | None = None,
        pool: QThreadPool | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(TrackerViewState(), name="TrackerState", pool=pool, parent=parent)
        self._store = store
        self._clock = clock or wall_clock_millis
        self._history_refresh_queued = False

        self._store.records_changed.connect(self._on_records_changed)

        self.initialize()
        self._refresh_history()

    # =========================================================================
    # Observable state
    # =========================================================================

    @property
    def current_session(self) -> SleepSession | None:
        """The open session, or None when nothing is being tracked."""
        return self.state.current_session

    @property
    def history(self) -> tuple[SleepSession, ...]:
        """All recorded sessions, newest first."""
        return self.state.sessions

    @property
    def history_text(self) -> str:
        return format_sessions(self.state.sessions)

    @property
    def start_enabled(self) -> bool:
        return self.state.current_session is None

    @property
    def stop_enabled(self) -> bool:
        return self.state.current_session is not None

    @property
    def clear_enabled(self) -> bool:
        return bool(self.state.sessions)

    @property
    def navigate_to_quality(self) -> int | None:
        return self.state.navigate_to_quality

    @property
    def show_snackbar(self) -> bool:
        return self.state.show_snackbar

    # =========================================================================
    # UI events
    # =========================================================================

    def initialize(self) -> None:
        """Adopt the latest stored session as the current one if it is still open."""
        self._launch(self._initialize_flow(), "initialize")

    def on_start_tracking(self) -> None:
        """Start button: record a new open session starting now."""
        self._launch(self._start_tracking_flow(), "start_tracking")

    def on_stop_tracking(self) -> None:
        """Stop button: close the current session. Does nothing if none is open."""
        self._launch(self._stop_tracking_flow(), "stop_tracking")

    def on_clear(self) -> None:
        """Clear button: delete every recorded session."""
        self._launch(self._clear_flow(), "clear")

    def done_navigating(self) -> None:
        self._publish(navigate_to_quality=None)

    def done_showing_snackbar(self) -> None:
        self._publish(show_snackbar=False)

    # =========================================================================
    # Workflows
    # =========================================================================

    def _load_tonight(self) -> SleepSession | None:
        """Latest stored session if it is still open. Runs on the pool."""
        latest = self._store.get_latest_record()
        if latest is None or not latest.is_open:
            return None
        return latest

    def _initialize_flow(self):
        tonight = yield self._load_tonight
        self._publish(current_session=tonight)

    def _start_tracking_flow(self):
        if self.current_session is not None:
            logger.info("Session %s is already being tracked, ignoring start", self.current_session.id)
            return

        new_session = SleepSession.open_at(self._clock())
        yield partial(self._store.insert_record, new_session)

        # Read it back so the snapshot carries the id assigned by the store
        tonight = yield self._load_tonight
        self._publish(current_session=tonight)

    def _stop_tracking_flow(self):
        tonight = self.current_session
        if tonight is None:
            logger.debug("No open session, ignoring stop")
            return

        closed = tonight.closed_at(self._clock())
        updated = yield partial(self._store.update_record, closed)

        current = yield self._load_tonight
        if not updated:
            logger.info("Session %s was removed before it could be stopped", tonight.id)
            self._publish(current_session=current)
            return

        logger.debug("Stopped session %s after %d ms", closed.id, closed.duration_millis)
        self._publish(force=True, current_session=current, navigate_to_quality=closed.id)

    def _clear_flow(self):
        yield self._store.clear_all_records
        self._publish(force=True, current_session=None, show_snackbar=True)

    def _refresh_history(self) -> None:
        # One queued refresh is enough to pick up any number of changes before it runs
        if self._history_refresh_queued:
            return
        self._history_refresh_queued = True
        self._launch(self._history_flow(), "refresh_history")

    def _history_flow(self):
        self._history_refresh_queued = False
        sessions = yield self._store.get_all_records
        self._publish(sessions=tuple(sessions))

    @pyqtSlot()
    def _on_records_changed(self) -> None:
        self._refresh_history()

    def _on_dispose(self) -> None:
        self._disconnect(self._store.records_changed, self._on_records_changed)
