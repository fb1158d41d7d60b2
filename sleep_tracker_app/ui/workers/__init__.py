"""Qt-based workers for background store operations."""

from sleep_tracker_app.ui.workers.store_task_worker import CancellationToken, StoreTask, StoreTaskSignals

__all__ = [
    "CancellationToken",
    "StoreTask",
    "StoreTaskSignals",
]
