"""Compile-then-run orchestration across toolchains."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Union

from .process import ExecutionResult, ProcessLaunchError, ProcessRunner
from .toolchains import ToolchainRegistry, ToolchainSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Success:
    toolchain: str
    stdout: str | None = None
    ok = True


@dataclass(frozen=True, slots=True)
class CompileFailure:
    toolchain: str
    exit_code: int
    stderr: str
    ok = False


@dataclass(frozen=True, slots=True)
class RuntimeFailure:
    toolchain: str
    exit_code: int
    stderr: str
    ok = False


@dataclass(frozen=True, slots=True)
class Unhandled:
    """No toolchain is registered for the extension; the file is left as is."""

    extension: str
    ok = True


@dataclass(frozen=True, slots=True)
class NotFound:
    path: str
    ok = False


@dataclass(frozen=True, slots=True)
class LaunchFailure:
    """The compiler or interpreter itself could not be started."""

    toolchain: str
    phase: Literal["compile", "run"]
    message: str
    ok = False


Outcome = Union[Success, CompileFailure, RuntimeFailure, Unhandled, NotFound, LaunchFailure]


class RunDispatcher:
    """Compile (when the toolchain has a compile phase) and execute a source file.

    The run phase is only reached after a successful compile, so a failed
    build never executes a stale or missing artifact.
    """

    def __init__(
        self,
        registry: ToolchainRegistry,
        runner: ProcessRunner | None = None,
        *,
        capture_output: bool = False,
    ) -> None:
        self._registry = registry
        self._runner = runner or ProcessRunner()
        self._capture_output = capture_output

    def _invoke(
        self, toolchain: ToolchainSpec, phase: Literal["compile", "run"], args: list[str], *, capture: bool
    ) -> ExecutionResult | LaunchFailure:
        logger.info(
            "Starting phase",
            extra={"toolchain": toolchain.name, "phase": phase, "argv": args},
        )
        try:
            return self._runner.run(args, capture=capture)
        except ProcessLaunchError as exc:
            logger.warning(
                "Could not launch toolchain",
                extra={"toolchain": toolchain.name, "phase": phase, "reason": str(exc)},
            )
            return LaunchFailure(toolchain=toolchain.name, phase=phase, message=str(exc))

    def run_file(self, path: Path | str) -> Outcome:
        source = Path(path)
        if not source.is_file():
            return NotFound(path=str(path))

        toolchain = self._registry.for_file(source)
        if toolchain is None:
            logger.info("No toolchain registered", extra={"extension": source.suffix})
            return Unhandled(extension=source.suffix)

        compile_args = toolchain.compile_args(source)
        if compile_args is not None:
            compiled = self._invoke(toolchain, "compile", compile_args, capture=True)
            if isinstance(compiled, LaunchFailure):
                return compiled
            if not compiled.ok:
                return CompileFailure(
                    toolchain=toolchain.name,
                    exit_code=compiled.returncode,
                    stderr=compiled.stderr or compiled.stdout,
                )

        executed = self._invoke(
            toolchain, "run", toolchain.run_args(source), capture=self._capture_output
        )
        if isinstance(executed, LaunchFailure):
            return executed
        if not executed.ok:
            return RuntimeFailure(
                toolchain=toolchain.name,
                exit_code=executed.returncode,
                stderr=executed.stderr,
            )
        return Success(
            toolchain=toolchain.name,
            stdout=executed.stdout if self._capture_output else None,
        )


__all__ = [
    "CompileFailure",
    "LaunchFailure",
    "NotFound",
    "Outcome",
    "RunDispatcher",
    "RuntimeFailure",
    "Success",
    "Unhandled",
]
