"""Toolchain models describing how a source file is compiled and run."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

PLACEHOLDERS = ("source", "artifact", "stem", "directory")


def normalize_extension(value: str) -> str:
    """Return ``value`` as a lower-case extension with a leading dot."""

    normalized = value.strip().lower()
    if normalized and not normalized.startswith("."):
        normalized = f".{normalized}"
    return normalized


class ToolchainSpec(BaseModel):
    """Compile and run argv templates for one family of file extensions.

    Templates may reference ``{source}``, ``{artifact}``, ``{stem}`` and
    ``{directory}``; they are expanded per argument, never through a shell.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Human-friendly toolchain name.")
    extensions: tuple[str, ...] = Field(..., description="Extensions handled by this toolchain.")
    compile: tuple[str, ...] | None = Field(
        default=None,
        description="Compile argv template; omitted for interpreted languages.",
    )
    run: tuple[str, ...] = Field(..., description="Run argv template.")

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("Toolchain name must not be empty")
        return normalized

    @field_validator("extensions", mode="before")
    @classmethod
    def _normalize_extensions(cls, value: Any):
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)) or not value:
            raise ValueError("Toolchain extensions must be a non-empty list")
        extensions = tuple(normalize_extension(str(item)) for item in value)
        if any(ext == "" for ext in extensions):
            raise ValueError("Toolchain extensions must not be empty")
        return extensions

    @field_validator("compile", "run")
    @classmethod
    def _validate_template(cls, value: tuple[str, ...] | None):
        if value is None:
            return value
        if not value:
            raise ValueError("Command templates must contain at least one argument")
        for argument in value:
            try:
                argument.format(**{key: "" for key in PLACEHOLDERS})
            except (KeyError, IndexError, ValueError) as exc:
                raise ValueError(f"Invalid placeholder in {argument!r}: {exc}") from exc
        return value

    @property
    def has_compile_phase(self) -> bool:
        return self.compile is not None

    def artifact_path(self, source: Path) -> Path:
        """Executable produced from ``source``: the absolute path minus its extension."""

        return Path(source).resolve().with_suffix("")

    def _expand(self, template: tuple[str, ...], source: Path) -> list[str]:
        source = Path(source)
        values = {
            "source": str(source),
            "artifact": str(self.artifact_path(source)),
            "stem": source.stem,
            "directory": str(source.resolve().parent),
        }
        return [argument.format(**values) for argument in template]

    def compile_args(self, source: Path) -> list[str] | None:
        if self.compile is None:
            return None
        return self._expand(self.compile, source)

    def run_args(self, source: Path) -> list[str]:
        return self._expand(self.run, source)


__all__ = ["PLACEHOLDERS", "ToolchainSpec", "normalize_extension"]
