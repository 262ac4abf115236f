"""Storage abstractions for nomouse."""

from .documents import SessionDocument, StateDocument
from .models import ActiveState, GlobalState, PausedState, SessionRecord, TimerState
from .state_store import StateStore
from .templates import TemplateStore

__all__ = [
    "ActiveState",
    "GlobalState",
    "PausedState",
    "SessionDocument",
    "SessionRecord",
    "StateDocument",
    "StateStore",
    "TemplateStore",
    "TimerState",
]
