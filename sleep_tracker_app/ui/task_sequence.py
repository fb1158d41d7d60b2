#!/usr/bin/env python3
"""
Single logical sequence of workflows for one state holder.

A workflow is a generator. Its body runs on the owning (UI) thread; each value
it yields is a zero-argument callable that performs one record-store call.
The sequence runs that callable on a QThreadPool thread and, once it
completes, sends the return value back into the generator on the owning
thread:

    def _start_tracking_flow(self):
        yield partial(self._store.insert_record, SleepSession.open_at(now))
        tonight = yield self._load_tonight
        self._publish(current_session=tonight)

    sequence.launch(self._start_tracking_flow(), "start_tracking")

Workflows run strictly one after another, with at most one store call in
flight per sequence. A failing store call aborts its workflow (nothing after
the failing ``yield`` runs) and the sequence moves on to the next one.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from PyQt6.QtCore import QObject, QThreadPool, pyqtSlot

from sleep_tracker_app.ui.workers import CancellationToken, StoreTask, StoreTaskSignals

if TYPE_CHECKING:
    from collections.abc import Callable, Generator

logger = logging.getLogger(__name__)


@dataclass
class _RunningWorkflow:
    name: str
    workflow: Generator[Callable[[], Any], Any, None]
    ticket: int = 0
    signals: StoreTaskSignals | None = None


class TaskSequence(QObject):
    """Runs workflows in issue order, handing their store calls to a thread pool."""

    def __init__(self, name: str, pool: QThreadPool | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._name = name
        self._pool = pool if pool is not None else QThreadPool.globalInstance()
        self._token = CancellationToken()
        self._queue: deque[tuple[str, Generator[Callable[[], Any], Any, None]]] = deque()
        self._current: _RunningWorkflow | None = None
        self._next_ticket = 0
        self._stepping = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_idle(self) -> bool:
        """True when no workflow is running or queued."""
        return self._current is None and not self._queue

    @property
    def pending_count(self) -> int:
        """Number of workflows queued behind the running one."""
        return len(self._queue)

    @property
    def is_cancelled(self) -> bool:
        return self._token.is_cancelled

    def launch(self, workflow: Generator[Callable[[], Any], Any, None], name: str = "workflow") -> None:
        """Queue a workflow; it starts right away if the sequence is idle."""
        if self._token.is_cancelled:
            logger.debug("%s: ignoring %s, sequence was cancelled", self._name, name)
            workflow.close()
            return

        self._queue.append((name, workflow))
        logger.debug("%s: queued %s (%d pending)", self._name, name, len(self._queue))
        if self._current is None and not self._stepping:
            self._start_next()

    def cancel(self) -> None:
        """
        Cancel the sequence.

        Queued workflows are dropped without running. A store call already
        running on the pool completes, but its result is discarded.
        """
        if self._token.is_cancelled:
            return
        self._token.cancel()

        dropped = len(self._queue)
        while self._queue:
            _, workflow = self._queue.popleft()
            workflow.close()

        # A workflow cancelling its own sequence is closed by _advance once its step returns
        if self._current is not None and not self._stepping:
            self._current.workflow.close()
            self._current = None

        logger.debug("%s: cancelled, dropped %d queued workflow(s)", self._name, dropped)

    # =========================================================================
    # Driving workflows
    # =========================================================================

    def _start_next(self) -> None:
        while self._current is None and self._queue and not self._token.is_cancelled:
            name, workflow = self._queue.popleft()
            self._current = _RunningWorkflow(name=name, workflow=workflow)
            logger.debug("%s: starting %s", self._name, name)
            self._advance(workflow.send, None)

    def _advance(self, step: Callable[[Any], Any], value: Any) -> None:
        """Run the current workflow body up to its next store call, or to its end."""
        current = self._current
        if current is None:
            return

        self._stepping = True
        try:
            call = step(value)
        except StopIteration:
            logger.debug("%s: %s finished", self._name, current.name)
            self._current = None
            return
        except Exception:
            logger.exception("%s: %s raised, workflow aborted", self._name, current.name)
            self._current = None
            return
        finally:
            self._stepping = False

        if self._token.is_cancelled:
            current.workflow.close()
            self._current = None
            return

        if not callable(call):
            logger.error("%s: %s yielded %r instead of a callable, workflow aborted", self._name, current.name, call)
            current.workflow.close()
            self._current = None
            return

        self._submit(current, call)

    def _submit(self, current: _RunningWorkflow, call: Callable[[], Any]) -> None:
        self._next_ticket += 1
        signals = StoreTaskSignals()
        signals.completed.connect(self._on_task_completed)
        signals.failed.connect(self._on_task_failed)

        current.ticket = self._next_ticket
        current.signals = signals

        task = StoreTask(
            call,
            ticket=current.ticket,
            token=self._token,
            signals=signals,
            description=f"{self._name}/{current.name}",
        )
        self._pool.start(task)

    def _take_current(self, ticket: int) -> _RunningWorkflow | None:
        """Return the running workflow if ``ticket`` belongs to its store call."""
        if self._token.is_cancelled:
            return None
        current = self._current
        if current is None or current.ticket != ticket:
            logger.debug("%s: ignoring stale result for ticket %d", self._name, ticket)
            return None
        current.signals = None
        return current

    @pyqtSlot(int, object)
    def _on_task_completed(self, ticket: int, result: Any) -> None:
        current = self._take_current(ticket)
        if current is None:
            return
        self._advance(current.workflow.send, result)
        self._start_next()

    @pyqtSlot(int, object)
    def _on_task_failed(self, ticket: int, error: Any) -> None:
        current = self._take_current(ticket)
        if current is None:
            return
        logger.warning("%s: %s aborted after store failure: %s", self._name, current.name, error)
        current.workflow.close()
        self._current = None
        self._start_next()
