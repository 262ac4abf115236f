"""Exception hierarchy shared across nomouse components."""

from __future__ import annotations


class NomouseError(RuntimeError):
    """Base class for errors reported to the user at the command boundary."""


class NotTrackedError(NomouseError):
    """Raised when a timer operation targets a file with no session record."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"{filename} is not tracked; generate it with 'nms gen {filename}' first")
        self.filename = filename


class InvalidTransitionError(NomouseError):
    """Raised for a pause while paused or a resume while active."""

    def __init__(self, filename: str, state: str) -> None:
        super().__init__(f"{filename} is already {state}")
        self.filename = filename
        self.state = state


class FileMissingError(NomouseError):
    """Raised when a source file does not exist on disk."""


class FileAccessError(NomouseError):
    """Raised when a source or template file cannot be read or written."""

    def __init__(self, path: str, action: str, reason: str) -> None:
        super().__init__(f"Cannot {action} {path}: {reason}")
        self.path = path
        self.action = action
        self.reason = reason


class ConfigurationError(NomouseError):
    """Raised when environment settings fail validation."""


class TemplateMissingError(NomouseError):
    """Raised when no template is registered for an extension."""

    def __init__(self, extension: str) -> None:
        super().__init__(
            f"No template found for {extension or '(no extension)'} files. "
            f"Use 'nms set {extension}' to create one."
        )
        self.extension = extension


class NoRecentFileError(NomouseError):
    """Raised when a command needs the last file but none was generated or run."""


class ClipboardError(NomouseError):
    """Raised when the system clipboard cannot be written."""


class ToolchainLoadError(NomouseError):
    """Raised when one or more toolchain files cannot be parsed."""


class PersistenceCorruptError(NomouseError):
    """Raised when the persisted state document cannot be read back."""


__all__ = [
    "ClipboardError",
    "ConfigurationError",
    "FileAccessError",
    "FileMissingError",
    "InvalidTransitionError",
    "NoRecentFileError",
    "NomouseError",
    "NotTrackedError",
    "PersistenceCorruptError",
    "TemplateMissingError",
    "ToolchainLoadError",
]
