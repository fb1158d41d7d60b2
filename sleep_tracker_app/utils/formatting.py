"""
Display helpers for sleep sessions.

Turns stored sessions into the text shown by the history list.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import TYPE_CHECKING

from sleep_tracker_app.core.constants import QUALITY_LABELS, UNKNOWN_QUALITY_LABEL

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sleep_tracker_app.core.dataclasses import SleepSession

HISTORY_TITLE = "Here is your sleep data"
TIMESTAMP_FORMAT = "%A %b-%d-%Y Time: %H:%M"


def quality_label(score: int | None) -> str:
    """Human-readable label for a quality score; '--' when unset or unknown."""
    if score is None:
        return UNKNOWN_QUALITY_LABEL
    return QUALITY_LABELS.get(score, UNKNOWN_QUALITY_LABEL)


def format_timestamp(millis: int, tz: tzinfo | None = None) -> str:
    """Format epoch milliseconds in ``tz`` (local time by default), e.g. 'Tuesday Jan-02-2024 Time: 22:15'."""
    return datetime.fromtimestamp(millis / 1000, tz=tz).strftime(TIMESTAMP_FORMAT)


def format_duration(millis: int) -> str:
    """Format a duration as H:MM:SS."""
    total_seconds = max(millis, 0) // 1000
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{seconds:02d}"


def format_sessions(sessions: Iterable[SleepSession], tz: tzinfo | None = None) -> str:
    """
    Render the history list as plain text.

    Open sessions only show their start; closed sessions also show the end,
    the quality label and the time slept. Times are shown in local time
    unless ``tz`` is given.
    """
    lines = [HISTORY_TITLE]
    for session in sessions:
        lines.append("")
        lines.append(f"Start:\t{format_timestamp(session.start_time_milli, tz)}")
        if not session.is_open:
            lines.append(f"End:\t{format_timestamp(session.end_time_milli, tz)}")
            lines.append(f"Quality:\t{quality_label(session.quality_score)}")
            lines.append(f"Hours:Minutes:Seconds:\t{format_duration(session.duration_millis)}")
    return "\n".join(lines)
