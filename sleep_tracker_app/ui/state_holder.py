#!/usr/bin/env python3
"""
Base class for screen state holders.

A state holder keeps an immutable state snapshot (a frozen dataclass) for one
screen, replaces it wholesale on every change and notifies subscribers:

    tracker = TrackerState(store)
    unsubscribe = tracker.subscribe(on_change)

    def on_change(old_state: TrackerViewState, new_state: TrackerViewState):
        if old_state.current_session != new_state.current_session:
            self._render_session(new_state.current_session)

Store access goes through the holder's TaskSequence, so publishing always
happens on the thread that owns the holder.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable
from dataclasses import fields, replace
from typing import TYPE_CHECKING, Any

from PyQt6.QtCore import QObject, QThreadPool

from sleep_tracker_app.ui.task_sequence import TaskSequence

if TYPE_CHECKING:
    from collections.abc import Generator

logger = logging.getLogger(__name__)

StateChangeCallback = Callable[[Any, Any], None]
UnsubscribeFunction = Callable[[], None]


class StateHolder(QObject):
    """Holds one screen's state, sequences its workflows and notifies subscribers."""

    def __init__(
        self,
        initial_state: Any,
        name: str,
        pool: QThreadPool | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._state = initial_state
        self._name = name
        self._subscribers: list[StateChangeCallback] = []
        self._disposed = False
        self._sequence = TaskSequence(name, pool=pool, parent=self)

    @property
    def state(self) -> Any:
        """Get current state (read-only)."""
        return self._state

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def is_idle(self) -> bool:
        """True when no workflow is running or queued."""
        return self._sequence.is_idle

    def subscribe(self, callback: StateChangeCallback) -> UnsubscribeFunction:
        """Subscribe to state changes. Callbacks receive (old_state, new_state)."""
        self._subscribers.append(callback)
        cb_name = getattr(callback, "__qualname__", str(callback))
        logger.debug("%s: subscriber added: %s | Total subscribers: %d", self._name, cb_name, len(self._subscribers))

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)
                logger.debug("%s: subscriber removed: %s", self._name, cb_name)

        return unsubscribe

    def dispose(self) -> None:
        """
        Tear the holder down.

        Queued workflows are dropped, a running store call finishes but its
        result is discarded, and no further state is published.
        """
        if self._disposed:
            return
        self._disposed = True
        self._sequence.cancel()
        self._on_dispose()
        self._subscribers.clear()
        logger.debug("%s: disposed", self._name)

    def _on_dispose(self) -> None:
        """Hook for subclasses to release their own connections."""

    def _launch(self, workflow: Generator[Callable[[], Any], Any, None], name: str) -> None:
        if self._disposed:
            logger.debug("%s: ignoring %s after dispose", self._name, name)
            workflow.close()
            return
        self._sequence.launch(workflow, name)

    def _publish(self, force: bool = False, **changes: Any) -> None:
        """
        Replace the state snapshot with the given field changes and notify subscribers.

        Subscribers are only notified when the state changed, unless ``force``
        is set: one-shot events must reach subscribers on every raise, even
        when the previous one was never acknowledged.
        """
        if self._disposed:
            logger.debug("%s: dropping publish after dispose: %s", self._name, sorted(changes))
            return

        old_state = self._state
        new_state = replace(old_state, **changes)

        if old_state == new_state and not force:
            logger.debug("%s: state unchanged", self._name)
            return

        self._state = new_state
        logger.debug("%s: state changed | Diff: %s", self._name, self._get_state_diff(old_state, new_state))
        self._notify_subscribers(old_state, new_state)

    def _notify_subscribers(self, old_state: Any, new_state: Any) -> None:
        """Notify all subscribers of state change."""
        for callback in self._subscribers[:]:  # Copy list to allow unsubscribe during iteration
            if self._disposed:
                break
            try:
                callback(old_state, new_state)
            except Exception:
                logger.exception("%s: error in subscriber callback", self._name)

    @staticmethod
    def _get_state_diff(old_state: Any, new_state: Any) -> dict[str, tuple[Any, Any]]:
        """Get dictionary of changed fields for logging."""
        diff = {}
        for field in fields(new_state):
            old_val = getattr(old_state, field.name)
            new_val = getattr(new_state, field.name)
            if old_val != new_val:
                diff[field.name] = (old_val, new_val)
        return diff

    def _disconnect(self, signal: Any, slot: Callable[..., Any]) -> None:
        """Disconnect a Qt signal, ignoring connections that are already gone."""
        with contextlib.suppress(TypeError, RuntimeError):
            signal.disconnect(slot)
