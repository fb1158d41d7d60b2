#!/usr/bin/env python3
"""
Store Task Worker for Sleep Tracker Application
Runs one record-store call on a QThreadPool thread and reports back through Qt signals.

Signals are emitted from the pool thread; receivers living on the UI thread get
them through queued connections, so results are always handled on the UI thread.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from PyQt6.QtCore import QObject, QRunnable, pyqtSignal

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class CancellationToken:
    """
    Thread-safe cancellation flag shared by a sequence and its tasks.

    Cancellation is cooperative: tasks check the token before they start and
    after they finish, but a store call that is already running is never
    interrupted.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cooperative cancellation."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()


class StoreTaskSignals(QObject):
    """
    Signals for StoreTask.

    QRunnable is not a QObject, so the signals live on this companion object,
    created on the UI thread by whoever submits the task.
    """

    completed = pyqtSignal(int, object)  # ticket, result
    failed = pyqtSignal(int, object)  # ticket, exception


class StoreTask(QRunnable):
    """
    One background phase: a zero-argument callable run on a pool thread.

    The ticket identifies the phase so the receiver can ignore results that
    arrive after it moved on.
    """

    def __init__(
        self,
        call: Callable[[], Any],
        ticket: int,
        token: CancellationToken,
        signals: StoreTaskSignals,
        description: str = "store task",
    ) -> None:
        super().__init__()
        self.call = call
        self.ticket = ticket
        self.token = token
        self.signals = signals
        self.description = description
        self.setAutoDelete(True)

    def run(self) -> None:
        """Run the store call. Called on a pool thread."""
        if self.token.is_cancelled:
            logger.debug("Skipping %s: cancelled before it started", self.description)
            return

        try:
            result = self.call()
        except Exception as e:
            logger.exception("Store task %s failed", self.description)
            if not self.token.is_cancelled:
                self.signals.failed.emit(self.ticket, e)
            return

        if self.token.is_cancelled:
            logger.debug("Discarding result of %s: cancelled while running", self.description)
            return

        self.signals.completed.emit(self.ticket, result)
