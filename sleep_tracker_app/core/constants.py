#!/usr/bin/env python3
"""
Constants for Sleep Tracker Application
Centralized definitions for string enums, numeric constants, and configuration values.
"""

from enum import IntEnum, StrEnum

# ============================================================================
# DATABASE
# ============================================================================


class DatabaseTable(StrEnum):
    """Database table names."""

    SLEEP_SESSIONS = "daily_sleep_quality_table"


class DatabaseColumn(StrEnum):
    """Database column names."""

    SESSION_ID = "session_id"
    START_TIME_MILLI = "start_time_milli"
    END_TIME_MILLI = "end_time_milli"
    QUALITY_RATING = "quality_rating"


# ============================================================================
# SLEEP QUALITY
# ============================================================================


class SleepQuality(IntEnum):
    """Self-reported sleep quality scores, as offered by the rating screen."""

    VERY_BAD = 0
    POOR = 1
    SO_SO = 2
    OK = 3
    PRETTY_GOOD = 4
    EXCELLENT = 5


QUALITY_LABELS: dict[int, str] = {
    SleepQuality.VERY_BAD: "Very bad",
    SleepQuality.POOR: "Poor",
    SleepQuality.SO_SO: "So-so",
    SleepQuality.OK: "OK",
    SleepQuality.PRETTY_GOOD: "Pretty good",
    SleepQuality.EXCELLENT: "Excellent",
}

UNKNOWN_QUALITY_LABEL = "--"


# ============================================================================
# FILES AND LOGGING
# ============================================================================


class FileName(StrEnum):
    """File names used by the application."""

    SLEEP_TRACKER_DB = "sleep_tracker.db"
    CONFIG_JSON = "config.json"
    LOG_FILE = "sleep_tracker_app.log"


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
