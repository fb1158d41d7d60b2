#!/usr/bin/env python3
"""Core dataclasses for sleep sessions."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from sleep_tracker_app.core.constants import DatabaseColumn


@dataclass(frozen=True)
class SleepSession:
    """
    One recorded night of sleep.

    A session is open (tracking in progress) exactly when its start and end
    timestamps are equal. Timestamps are milliseconds since the epoch.
    Instances are immutable snapshots; use the ``closed_at`` and
    ``with_quality`` helpers to derive updated copies.
    """

    start_time_milli: int
    end_time_milli: int
    quality_score: int | None = None
    id: int | None = None  # Assigned by the store on insert

    @classmethod
    def open_at(cls, now_milli: int) -> SleepSession:
        """Create a new open session starting (and ending) at ``now_milli``."""
        return cls(start_time_milli=now_milli, end_time_milli=now_milli)

    @property
    def is_open(self) -> bool:
        """Check if tracking is still in progress."""
        return self.start_time_milli == self.end_time_milli

    @property
    def duration_millis(self) -> int:
        """Length of the session; zero while it is open."""
        return self.end_time_milli - self.start_time_milli

    def closed_at(self, now_milli: int) -> SleepSession:
        """
        Return a closed copy of this session ending at ``now_milli``.

        The end time is kept strictly after the start time, otherwise the
        closed copy would still read as open.
        """
        return replace(self, end_time_milli=max(now_milli, self.start_time_milli + 1))

    def with_quality(self, score: int) -> SleepSession:
        """Return a copy carrying the given quality score."""
        return replace(self, quality_score=score)

    def to_database_dict(self) -> dict[str, Any]:
        """Convert to a column -> value mapping for persistence (id excluded)."""
        return {
            DatabaseColumn.START_TIME_MILLI: self.start_time_milli,
            DatabaseColumn.END_TIME_MILLI: self.end_time_milli,
            DatabaseColumn.QUALITY_RATING: self.quality_score,
        }

    @classmethod
    def from_database_row(cls, row: Any) -> SleepSession:
        """Build a session from a ``sqlite3.Row`` (or any mapping keyed by column)."""
        return cls(
            id=row[DatabaseColumn.SESSION_ID],
            start_time_milli=row[DatabaseColumn.START_TIME_MILLI],
            end_time_milli=row[DatabaseColumn.END_TIME_MILLI],
            quality_score=row[DatabaseColumn.QUALITY_RATING],
        )
