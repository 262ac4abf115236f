"""Wires command verbs to the session timer and run dispatcher."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable

from .clipboard import copy_to_clipboard
from .dispatcher import NotFound, Outcome, RunDispatcher
from .errors import FileAccessError, FileMissingError, NoRecentFileError, TemplateMissingError
from .storage import GlobalState, TemplateStore
from .timer import SessionTimer

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class WindReport:
    filename: str
    characters: int
    total_active_seconds: int | None
    seconds_since_last_wind: int | None


@dataclass(slots=True)
class StatusReport:
    filename: str
    paused: bool
    total_active_seconds: int
    seconds_since_last_wind: int | None
    generated_at: datetime


class SessionController:
    """Run one command against the state loaded for this invocation.

    The controller is the only writer of ``state`` while it is alive; callers
    persist it afterwards.
    """

    def __init__(
        self,
        state: GlobalState,
        *,
        templates: TemplateStore,
        dispatcher: RunDispatcher,
        clipboard: Callable[[str], None] = copy_to_clipboard,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._state = state
        self._templates = templates
        self._dispatcher = dispatcher
        self._clipboard = clipboard
        self._timer = SessionTimer(state, clock=clock)

    @property
    def state(self) -> GlobalState:
        return self._state

    @property
    def timer(self) -> SessionTimer:
        return self._timer

    def _target(self, filename: str | None) -> str:
        if filename:
            return filename
        if self._state.last_file:
            return self._state.last_file
        raise NoRecentFileError(
            "No file has been generated or run yet. Use 'nms gen' or 'nms run' first."
        )

    def on_generate(self, filename: str) -> Path:
        extension = Path(filename).suffix
        template = self._templates.load(extension) if extension else None
        if template is None:
            raise TemplateMissingError(extension)

        target = Path(filename)
        try:
            target.write_text(template, encoding="utf-8")
        except OSError as exc:
            raise FileAccessError(filename, "write", exc.strerror or str(exc)) from exc

        self._state.last_generated = filename
        self._state.last_file = filename
        self._state.generated_count += 1
        self._timer.track(filename)
        logger.info("Generated file from template", extra={"file": filename, "extension": extension})
        return target

    def on_set_template(self, extension: str, content: str) -> Path:
        path = self._templates.save(extension, content)
        logger.info("Saved template", extra={"path": str(path)})
        return path

    def on_pause(self, filename: str | None = None) -> str:
        target = self._target(filename)
        self._timer.pause(target)
        return target

    def on_resume(self, filename: str | None = None) -> tuple[str, int]:
        target = self._target(filename)
        return target, self._timer.resume(target)

    def on_wind(self, filename: str | None = None) -> WindReport:
        target = self._target(filename)
        path = Path(target)
        if not path.is_file():
            raise FileMissingError(f"File {target} no longer exists")

        # Undecodable bytes are copied as U+FFFD.
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise FileAccessError(target, "read", exc.strerror or str(exc)) from exc
        self._clipboard(content)

        total_active: int | None = None
        since_last: int | None = None
        if self._timer.is_tracked(target):
            total_active = self._timer.total_active_seconds(target)
            since_last = self._timer.wind(target)
        else:
            logger.info("Copied an untracked file", extra={"file": target})

        return WindReport(
            filename=target,
            characters=len(content),
            total_active_seconds=total_active,
            seconds_since_last_wind=since_last,
        )

    def on_run(self, filename: str) -> Outcome:
        outcome = self._dispatcher.run_file(filename)
        if isinstance(outcome, NotFound):
            return outcome

        self._state.last_run = filename
        self._state.last_file = filename
        self._state.run_count += 1
        logger.info(
            "Run finished",
            extra={"file": filename, "outcome": type(outcome).__name__},
        )
        return outcome

    def on_status(self, filename: str | None = None) -> StatusReport:
        target = self._target(filename)
        record = self._timer.record(target)
        return StatusReport(
            filename=target,
            paused=record.is_paused,
            total_active_seconds=self._timer.total_active_seconds(target),
            seconds_since_last_wind=self._timer.seconds_since_last_wind(target),
            generated_at=record.generated_at,
        )


__all__ = ["SessionController", "StatusReport", "WindReport"]
