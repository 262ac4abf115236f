"""Toolchain loading utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import yaml
from pydantic import ValidationError

from ..errors import ToolchainLoadError
from .models import ToolchainSpec


class ToolchainLoader:
    """Loads extra toolchain definitions from YAML files on disk.

    A file holds either a single toolchain mapping or a list of them.
    """

    def __init__(self, search_paths: Iterable[Path] | None = None) -> None:
        paths = [Path(path) for path in (search_paths or [])]
        self._search_paths: list[Path] = [path for path in paths if path.exists()]

    @property
    def search_paths(self) -> list[Path]:
        """Return the normalized search paths."""

        return list(self._search_paths)

    def load_all(self) -> list[ToolchainSpec]:
        """Load toolchains from all configured search paths, in search order."""

        if not self._search_paths:
            return []

        toolchains: list[ToolchainSpec] = []
        errors: list[str] = []

        for base in self._search_paths:
            for path in sorted(base.glob("*.yml")) + sorted(base.glob("*.yaml")):
                try:
                    document = yaml.safe_load(path.read_text(encoding="utf-8"))
                except yaml.YAMLError as exc:
                    errors.append(f"Failed to parse YAML in {path}: {exc}")
                    continue

                if document is None:
                    continue

                entries = document if isinstance(document, list) else [document]
                for entry in entries:
                    try:
                        toolchains.append(ToolchainSpec.model_validate(entry))
                    except ValidationError as exc:
                        errors.append(f"Toolchain validation error in {path}: {exc}")

        if errors:
            raise ToolchainLoadError("; ".join(errors))

        return toolchains


def load_toolchains(search_paths: Iterable[Path] | None = None) -> list[ToolchainSpec]:
    """Convenience wrapper for loading toolchains from the provided paths."""

    loader = ToolchainLoader(search_paths)
    return loader.load_all()


__all__ = ["ToolchainLoader", "load_toolchains"]
