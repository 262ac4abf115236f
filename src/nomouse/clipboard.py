"""System clipboard access."""

from __future__ import annotations

import pyperclip

from .errors import ClipboardError


def copy_to_clipboard(text: str) -> None:
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as exc:
        raise ClipboardError(f"Could not copy to clipboard: {exc}") from exc


__all__ = ["copy_to_clipboard"]
