"""External process execution utilities."""

from .runner import ExecutionResult, FakeProcessRunner, ProcessLaunchError, ProcessRunner

__all__ = [
    "ExecutionResult",
    "FakeProcessRunner",
    "ProcessLaunchError",
    "ProcessRunner",
]
