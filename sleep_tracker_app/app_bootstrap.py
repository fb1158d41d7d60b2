#!/usr/bin/env python3
"""
Application bootstrap utilities.

Provides shared, UI-agnostic setup for logging, the record store and the
background worker pool.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from PyQt6.QtCore import QThreadPool

from sleep_tracker_app.core.constants import LOG_FORMAT
from sleep_tracker_app.data.database import DatabaseManager
from sleep_tracker_app.utils.resource_resolver import resource_resolver

if TYPE_CHECKING:
    from sleep_tracker_app.core.dataclasses_config import AppConfig

logger = logging.getLogger(__name__)


def setup_logging(config: AppConfig) -> Path | None:
    """
    Set up logging from the application config.

    A configured log file gets a handler next to stderr. A bundled build with
    no log file configured also writes to the per-user log file.

    Returns:
        Path to log file, or None if using default stderr.

    """
    log_file: Path | None = None
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if config.log_file:
        log_file = Path(config.log_file)
    elif resource_resolver.is_executable_environment():
        log_file = resource_resolver.get_log_path()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=config.numeric_log_level, format=LOG_FORMAT, handlers=handlers)
    return log_file


def create_database(config: AppConfig) -> DatabaseManager:
    """Open the record store at the configured path, or the per-user default."""
    return DatabaseManager(db_path=config.database_path or None)


def create_thread_pool(config: AppConfig) -> QThreadPool:
    """Return the shared background worker pool, sized from the config."""
    pool = QThreadPool.globalInstance()
    if config.max_background_threads > 0:
        pool.setMaxThreadCount(config.max_background_threads)
        logger.debug("Background pool limited to %d threads", config.max_background_threads)
    return pool
