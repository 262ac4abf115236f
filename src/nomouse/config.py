"""Configuration management for nomouse."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated
import os

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .errors import ConfigurationError


class NomouseSettings(BaseSettings):
    """Runtime configuration sourced from environment variables and optional .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    template_dir: Path = Field(
        default=Path(".nomouse-templates"), validation_alias="NOMOUSE_TEMPLATE_DIR"
    )
    state_path: Path = Field(
        default=Path(".nomouse-state.json"), validation_alias="NOMOUSE_STATE_PATH"
    )
    toolchain_paths: Annotated[tuple[Path, ...], NoDecode] = Field(
        default=(), validation_alias="NOMOUSE_TOOLCHAIN_PATHS"
    )
    log_level: str = Field(default="WARNING", validation_alias="NOMOUSE_LOG_LEVEL")
    capture_output: bool = Field(default=False, validation_alias="NOMOUSE_CAPTURE_OUTPUT")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(
                "NOMOUSE_LOG_LEVEL must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG"
            )
        return normalized

    @field_validator("toolchain_paths", mode="before")
    @classmethod
    def _parse_toolchain_paths(cls, value):
        if value is None or value == "":
            return ()
        if isinstance(value, (list, tuple)):
            return tuple(Path(str(item)) for item in value)
        if isinstance(value, str):
            parts = [part.strip() for part in value.split(os.pathsep) if part.strip()]
            return tuple(Path(part) for part in parts)
        raise TypeError(
            "NOMOUSE_TOOLCHAIN_PATHS must be a list of paths or a path-separated string"
        )


@lru_cache(maxsize=1)
def get_settings() -> NomouseSettings:
    """Return cached settings instance.

    Invalid environment values raise ``ConfigurationError`` naming each
    offending variable.
    """

    try:
        settings = NomouseSettings()
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from exc
    settings.template_dir = settings.template_dir.expanduser().resolve()
    settings.state_path = settings.state_path.expanduser().resolve()
    settings.toolchain_paths = tuple(
        path.expanduser().resolve() for path in settings.toolchain_paths
    )
    return settings


__all__ = ["NomouseSettings", "get_settings"]
