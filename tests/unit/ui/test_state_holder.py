"""
Tests for the StateHolder base class.

Uses a minimal counter holder to exercise publishing, subscriptions and
dispose without any store.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from unittest.mock import MagicMock

import pytest

from sleep_tracker_app.ui.state_holder import StateHolder


@dataclass(frozen=True)
class CounterState:
    count: int = 0
    label: str = ""


class CounterHolder(StateHolder):
    def __init__(self, pool=None) -> None:
        super().__init__(CounterState(), name="CounterHolder", pool=pool)
        self.disposed_hook_calls = 0

    def set_count(self, count: int) -> None:
        self._publish(count=count)

    def raise_label(self, label: str) -> None:
        self._publish(force=True, label=label)

    def load(self, call) -> None:
        self._launch(self._load_flow(call), "load")

    def _load_flow(self, call):
        value = yield call
        self._publish(count=value)

    def _on_dispose(self) -> None:
        self.disposed_hook_calls += 1


@pytest.fixture
def holder(thread_pool):
    counter = CounterHolder(pool=thread_pool)
    yield counter
    counter.dispose()


# ============================================================================
# Test Publishing
# ============================================================================


class TestPublish:
    """Tests for _publish and subscriber notification."""

    def test_initial_state(self, holder: CounterHolder):
        assert holder.state == CounterState()
        assert holder.is_idle

    def test_subscriber_receives_old_and_new(self, holder: CounterHolder):
        callback = MagicMock()
        holder.subscribe(callback)

        holder.set_count(3)

        callback.assert_called_once_with(CounterState(count=0), CounterState(count=3))
        assert holder.state.count == 3

    def test_unchanged_state_not_notified(self, holder: CounterHolder):
        """Publishing the same values is a no-op."""
        callback = MagicMock()
        holder.subscribe(callback)

        holder.set_count(0)

        callback.assert_not_called()

    def test_forced_publish_notifies_when_unchanged(self, holder: CounterHolder):
        """One-shot events reach subscribers every time they are raised."""
        callback = MagicMock()
        holder.subscribe(callback)

        holder.raise_label("saved")
        holder.raise_label("saved")

        assert callback.call_count == 2
        callback.assert_called_with(CounterState(label="saved"), CounterState(label="saved"))

    def test_unsubscribe(self, holder: CounterHolder):
        callback = MagicMock()
        unsubscribe = holder.subscribe(callback)

        unsubscribe()
        unsubscribe()  # Safe to call twice
        holder.set_count(1)

        callback.assert_not_called()

    def test_failing_subscriber_does_not_block_others(self, holder: CounterHolder):
        failing = MagicMock(side_effect=RuntimeError("render failed"))
        healthy = MagicMock()
        holder.subscribe(failing)
        holder.subscribe(healthy)

        holder.set_count(5)

        healthy.assert_called_once()
        assert holder.state.count == 5

    def test_state_diff(self):
        diff = StateHolder._get_state_diff(CounterState(1, "a"), CounterState(2, "a"))

        assert diff == {"count": (1, 2)}

    def test_publish_from_workflow(self, qtbot, holder: CounterHolder):
        """Results of background calls are published on the owning thread."""
        callback = MagicMock()
        holder.subscribe(callback)

        holder.load(lambda: 9)

        qtbot.waitUntil(lambda: holder.state.count == 9, timeout=2000)
        callback.assert_called_once()


# ============================================================================
# Test Dispose
# ============================================================================


class TestDispose:
    """Tests for dispose()."""

    def test_no_publish_after_dispose(self, holder: CounterHolder):
        callback = MagicMock()
        holder.subscribe(callback)

        holder.dispose()
        holder.set_count(4)

        callback.assert_not_called()
        assert holder.state.count == 0
        assert holder.is_disposed

    def test_dispose_is_idempotent(self, holder: CounterHolder):
        holder.dispose()
        holder.dispose()

        assert holder.disposed_hook_calls == 1

    def test_launch_after_dispose_never_calls(self, qtbot, holder: CounterHolder):
        call = MagicMock(return_value=1)

        holder.dispose()
        holder.load(call)
        qtbot.wait(50)

        call.assert_not_called()
        assert holder.is_idle

    def test_running_call_result_discarded(self, qtbot, thread_pool, holder: CounterHolder):
        """A store call in flight at dispose time completes but publishes nothing."""
        callback = MagicMock()
        holder.subscribe(callback)

        started = threading.Event()
        gate = threading.Event()

        def slow_call():
            started.set()
            gate.wait(5)
            return 7

        holder.load(slow_call)
        assert started.wait(2)
        holder.dispose()
        gate.set()
        thread_pool.waitForDone(2000)
        qtbot.wait(50)

        callback.assert_not_called()
        assert holder.state.count == 0
