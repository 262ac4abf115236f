"""Data models for persistent tracking."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Union


@dataclass(frozen=True, slots=True)
class ActiveState:
    resumed_at: datetime


@dataclass(frozen=True, slots=True)
class PausedState:
    resumed_at: datetime
    paused_at: datetime


TimerState = Union[ActiveState, PausedState]


@dataclass(slots=True)
class SessionRecord:
    """Per-file timing bookkeeping.

    ``blank`` is the total time spent paused across all completed
    pause/resume cycles; the interval of a pause still in progress is not
    included until the file is resumed.
    """

    generated_at: datetime
    state: TimerState
    blank: timedelta = timedelta(0)
    last_winded_at: datetime | None = None

    @property
    def is_paused(self) -> bool:
        return isinstance(self.state, PausedState)

    @property
    def resumed_at(self) -> datetime:
        return self.state.resumed_at


@dataclass(slots=True)
class GlobalState:
    last_generated: str | None = None
    last_run: str | None = None
    last_file: str | None = None
    generated_count: int = 0
    run_count: int = 0
    sessions: dict[str, SessionRecord] = field(default_factory=dict)


__all__ = ["ActiveState", "GlobalState", "PausedState", "SessionRecord", "TimerState"]
