#!/usr/bin/env python
"""
Module entry point for the sleep tracker.

Prints the recorded sleep history:
    python -m sleep_tracker_app
or via the installed console script:
    sleep-tracker-history
"""

from __future__ import annotations

import logging
import sys

from PyQt6.QtCore import QCoreApplication, QTimer

from sleep_tracker_app.app_bootstrap import create_database, create_thread_pool, setup_logging
from sleep_tracker_app.core.exceptions import SleepTrackerError
from sleep_tracker_app.ui.tracker_state import TrackerState
from sleep_tracker_app.utils.config import ConfigManager

logger = logging.getLogger(__name__)


def main() -> int:
    """Main entry point for the module."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)

    try:
        config = ConfigManager().config
        setup_logging(config)
        store = create_database(config)
    except SleepTrackerError:
        logger.exception("Failed to start sleep tracker")
        return 1

    tracker = TrackerState(store, pool=create_thread_pool(config))

    def print_when_loaded() -> None:
        if not tracker.is_idle:
            return
        timer.stop()
        print(tracker.history_text)
        tracker.dispose()
        app.quit()

    timer = QTimer()
    timer.timeout.connect(print_when_loaded)
    timer.start(10)

    try:
        return app.exec()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
