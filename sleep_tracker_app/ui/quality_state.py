#!/usr/bin/env python3
"""
State holder for the sleep quality screen.

Applies a quality score to one stored session and signals the screen to go
back to the tracker once the score has been persisted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from sleep_tracker_app.core.validation import InputValidator
from sleep_tracker_app.ui.state_holder import StateHolder

if TYPE_CHECKING:
    from PyQt6.QtCore import QObject, QThreadPool

    from sleep_tracker_app.ui.protocols import SleepSessionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QualityViewState:
    navigate_to_tracker: bool = False


class QualityState(StateHolder):
    """State holder for the quality screen of one session."""

    def __init__(
        self,
        session_id: int,
        store: SleepSessionStore,
        pool: QThreadPool | None = None,
        parent: QObject | None = None,
    ) -> None:
        session_id = InputValidator.validate_session_id(session_id)
        super().__init__(QualityViewState(), name=f"QualityState[{session_id}]", pool=pool, parent=parent)
        self._session_id = session_id
        self._store = store

    @property
    def session_id(self) -> int:
        """Id of the session being rated."""
        return self._session_id

    @property
    def navigate_to_tracker(self) -> bool:
        return self.state.navigate_to_tracker

    def on_set_sleep_quality(self, score: int) -> None:
        """
        Store ``score`` on the session, then raise ``navigate_to_tracker``.

        Raises:
            ValidationError: If the score is outside 0..5. Nothing is queued.

        """
        score = InputValidator.validate_quality_score(score)
        self._launch(self._set_quality_flow(score), "set_sleep_quality")

    def done_navigating(self) -> None:
        self._publish(navigate_to_tracker=False)

    def _set_quality_flow(self, score: int):
        tonight = yield partial(self._store.get_record, self._session_id)
        if tonight is None:
            logger.info("Session %d no longer exists, quality not recorded", self._session_id)
            return

        updated = yield partial(self._store.update_record, tonight.with_quality(score))
        if not updated:
            logger.info("Session %d was removed before its quality could be recorded", self._session_id)
            return

        self._publish(force=True, navigate_to_tracker=True)
