"""Toolchain models, loader and registry exports."""

from .loader import ToolchainLoader, load_toolchains
from .models import ToolchainSpec, normalize_extension
from .registry import BUILTIN_TOOLCHAINS, ToolchainRegistry, build_registry

__all__ = [
    "BUILTIN_TOOLCHAINS",
    "ToolchainLoader",
    "ToolchainRegistry",
    "ToolchainSpec",
    "build_registry",
    "load_toolchains",
    "normalize_extension",
]
