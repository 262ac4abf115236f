"""Extension to toolchain lookup table."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

from .loader import load_toolchains
from .models import ToolchainSpec, normalize_extension

BUILTIN_TOOLCHAINS: tuple[ToolchainSpec, ...] = (
    ToolchainSpec(name="Python", extensions=(".py",), run=("python3", "{source}")),
    ToolchainSpec(name="JavaScript", extensions=(".js",), run=("node", "{source}")),
    ToolchainSpec(
        name="C++",
        extensions=(".cpp", ".cc", ".cxx"),
        compile=("g++", "-o", "{artifact}", "{source}"),
        run=("{artifact}",),
    ),
    ToolchainSpec(
        name="C",
        extensions=(".c",),
        compile=("gcc", "-o", "{artifact}", "{source}"),
        run=("{artifact}",),
    ),
    ToolchainSpec(
        name="Java",
        extensions=(".java",),
        compile=("javac", "{source}"),
        run=("java", "-cp", "{directory}", "{stem}"),
    ),
)


class ToolchainRegistry:
    """Read-only mapping from file extension to toolchain.

    Later toolchains override earlier ones for every extension they list.
    """

    def __init__(self, toolchains: Iterable[ToolchainSpec]) -> None:
        table: dict[str, ToolchainSpec] = {}
        for toolchain in toolchains:
            for extension in toolchain.extensions:
                table[extension] = toolchain
        self._table: Mapping[str, ToolchainSpec] = MappingProxyType(table)

    @classmethod
    def builtin(cls) -> "ToolchainRegistry":
        return cls(BUILTIN_TOOLCHAINS)

    @property
    def extensions(self) -> list[str]:
        return sorted(self._table)

    def lookup(self, extension: str) -> ToolchainSpec | None:
        return self._table.get(normalize_extension(extension))

    def for_file(self, path: Path | str) -> ToolchainSpec | None:
        return self.lookup(Path(path).suffix) if Path(path).suffix else None

    def __contains__(self, extension: object) -> bool:
        return isinstance(extension, str) and normalize_extension(extension) in self._table


def build_registry(search_paths: Iterable[Path] | None = None) -> ToolchainRegistry:
    """Return the built-in table overlaid with toolchains found in ``search_paths``."""

    return ToolchainRegistry([*BUILTIN_TOOLCHAINS, *load_toolchains(search_paths)])


__all__ = ["BUILTIN_TOOLCHAINS", "ToolchainRegistry", "build_registry"]
