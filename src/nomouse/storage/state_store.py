"""JSON file persistence for the global tracking state."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from ..errors import FileAccessError, PersistenceCorruptError
from .documents import StateDocument
from .models import GlobalState

logger = logging.getLogger(__name__)


class StateStore:
    """Load and save the single state record kept for all tracked files.

    Saving overwrites the whole document; concurrent invocations race and the
    last writer wins.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self.corruption: str | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> GlobalState:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceCorruptError(f"Cannot read {self._path}: {exc}") from exc
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PersistenceCorruptError(f"Invalid JSON in {self._path}: {exc}") from exc
        try:
            document = StateDocument.model_validate(payload)
        except ValidationError as exc:
            raise PersistenceCorruptError(f"Unexpected state layout in {self._path}: {exc}") from exc
        return document.to_state()

    def load(self) -> GlobalState:
        """Return the persisted state, or a fresh one when missing or unreadable.

        An unreadable document is never fatal: the reason is kept in
        ``corruption`` and logged, and tracking starts over.
        """

        self.corruption = None
        if not self._path.exists():
            logger.debug("No state file yet, starting fresh", extra={"path": str(self._path)})
            return GlobalState()

        try:
            return self._read()
        except PersistenceCorruptError as exc:
            self.corruption = str(exc)
            logger.warning(
                "State file is corrupt, starting with empty state",
                extra={"path": str(self._path), "reason": str(exc)},
            )
            return GlobalState()

    def save(self, state: GlobalState) -> None:
        document = StateDocument.from_state(state)
        payload = document.model_dump_json(by_alias=True, indent=2)

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=str(self._path.parent)
            )
        except OSError as exc:
            raise FileAccessError(str(self._path), "write", exc.strerror or str(exc)) from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise FileAccessError(str(self._path), "write", exc.strerror or str(exc)) from exc
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug(
            "Saved state",
            extra={"path": str(self._path), "sessions": len(state.sessions)},
        )


__all__ = ["StateStore"]
