"""Per-file active time tracking."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from .errors import InvalidTransitionError, NotTrackedError
from .storage.models import ActiveState, GlobalState, PausedState, SessionRecord

logger = logging.getLogger(__name__)


def _whole_seconds(delta: timedelta) -> int:
    return max(0, int(delta.total_seconds()))


def _since_last_wind(record: SessionRecord, now: datetime) -> int | None:
    if record.last_winded_at is None:
        return None
    return _whole_seconds(now - record.last_winded_at)


class SessionTimer:
    """Pause/resume state machine over the sessions held in a ``GlobalState``.

    Active time is wall-clock time since generation minus all paused
    intervals. Only the aggregate paused duration is kept, so a record stays
    the same size however many pause/resume cycles it goes through.
    """

    def __init__(
        self,
        state: GlobalState,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._state = state
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def record(self, filename: str) -> SessionRecord:
        try:
            return self._state.sessions[filename]
        except KeyError:
            raise NotTrackedError(filename) from None

    def is_tracked(self, filename: str) -> bool:
        return filename in self._state.sessions

    def track(self, filename: str) -> SessionRecord:
        """Start tracking ``filename`` unless it already has a record."""

        existing = self._state.sessions.get(filename)
        if existing is not None:
            logger.info("File already tracked, keeping its session", extra={"file": filename})
            return existing

        now = self._clock()
        record = SessionRecord(generated_at=now, state=ActiveState(resumed_at=now))
        self._state.sessions[filename] = record
        logger.info("Tracking file", extra={"file": filename})
        return record

    def pause(self, filename: str) -> SessionRecord:
        record = self.record(filename)
        if isinstance(record.state, PausedState):
            raise InvalidTransitionError(filename, "paused")

        record.state = PausedState(resumed_at=record.state.resumed_at, paused_at=self._clock())
        logger.info("Paused file", extra={"file": filename})
        return record

    def resume(self, filename: str) -> int:
        """Resume a paused file and return how long it was paused, in seconds."""

        record = self.record(filename)
        if not isinstance(record.state, PausedState):
            raise InvalidTransitionError(filename, "active")

        now = self._clock()
        elapsed = max(timedelta(0), now - record.state.paused_at)
        record.blank += elapsed
        record.state = ActiveState(resumed_at=max(now, record.generated_at))
        logger.info(
            "Resumed file",
            extra={"file": filename, "paused_seconds": _whole_seconds(elapsed)},
        )
        return _whole_seconds(elapsed)

    def wind(self, filename: str) -> int | None:
        """Mark ``filename`` as copied out.

        Returns the seconds since the previous copy, or None on the first one.
        """

        record = self.record(filename)
        now = self._clock()
        since_last = _since_last_wind(record, now)
        record.last_winded_at = now
        return since_last

    def seconds_since_last_wind(self, filename: str) -> int | None:
        return _since_last_wind(self.record(filename), self._clock())

    def total_active_seconds(self, filename: str) -> int:
        record = self.record(filename)
        end = record.state.paused_at if isinstance(record.state, PausedState) else self._clock()
        return _whole_seconds(end - record.generated_at - record.blank)


__all__ = ["SessionTimer"]
