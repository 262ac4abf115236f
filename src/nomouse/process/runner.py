"""Blocking runner for compiler and interpreter processes."""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Iterable, Sequence

from ..errors import NomouseError
from .utils import resolve_executable

logger = logging.getLogger(__name__)


class ProcessLaunchError(NomouseError):
    """Raised when an executable cannot be located or started."""

    def __init__(self, executable: str, reason: str) -> None:
        super().__init__(f"{executable}: {reason}")
        self.executable = executable
        self.reason = reason


@dataclass(slots=True)
class ExecutionResult:
    """Holds the outcome of a process invocation.

    ``stdout`` and ``stderr`` are empty when the process inherited the
    terminal instead of being captured.
    """

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessRunner:
    """Execute external programs synchronously and report their exit status."""

    def __init__(self, cwd: os.PathLike[str] | str | None = None) -> None:
        self._cwd = cwd

    def run(self, args: Sequence[str], *, capture: bool = True) -> ExecutionResult:
        if not args:
            raise ValueError("Cannot run an empty argument vector")

        executable = resolve_executable(args[0])
        if executable is None:
            raise ProcessLaunchError(args[0], "command not found")

        cmd = [executable, *args[1:]]
        logger.debug("Spawning process", extra={"argv": cmd, "capture": capture})
        try:
            if capture:
                completed = subprocess.run(
                    cmd,
                    capture_output=True,
                    text=True,
                    errors="replace",
                    cwd=self._cwd,
                )
                stdout, stderr = completed.stdout, completed.stderr
            else:
                completed = subprocess.run(cmd, cwd=self._cwd)
                stdout, stderr = "", ""
        except PermissionError as exc:
            raise ProcessLaunchError(args[0], "permission denied") from exc
        except FileNotFoundError as exc:
            raise ProcessLaunchError(args[0], "no such file or directory") from exc
        except OSError as exc:
            raise ProcessLaunchError(args[0], exc.strerror or str(exc)) from exc

        return ExecutionResult(
            args=tuple(cmd),
            returncode=completed.returncode,
            stdout=stdout,
            stderr=stderr,
        )


class FakeProcessRunner(ProcessRunner):
    """Test double that replays canned results instead of spawning processes.

    Each response is either an ``ExecutionResult`` or an exception to raise.
    Once the responses run out every call succeeds with empty output.
    """

    def __init__(
        self, responses: Iterable[ExecutionResult | BaseException] | None = None
    ) -> None:  # type: ignore[override]
        self._responses = list(responses or [])
        self._invocations: list[tuple[str, ...]] = []
        self._cwd = None

    def run(self, args: Sequence[str], *, capture: bool = True) -> ExecutionResult:  # type: ignore[override]
        self._invocations.append(tuple(args))
        if self._responses:
            response = self._responses.pop(0)
            if isinstance(response, BaseException):
                raise response
            return response
        return ExecutionResult(args=tuple(args), returncode=0, stdout="", stderr="")

    @property
    def invocations(self) -> list[tuple[str, ...]]:
        return self._invocations
