"""Utility helpers for the process runner."""

from __future__ import annotations

import os
import shutil
from pathlib import Path


def resolve_executable(name: str) -> str | None:
    """Return the path to run for ``name``, or None when it cannot be found.

    Names containing a path separator are taken as paths; bare names are
    looked up on PATH.
    """

    if os.sep in name or (os.altsep and os.altsep in name):
        return name if Path(name).is_file() else None
    return shutil.which(name)
