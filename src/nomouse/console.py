"""Colored terminal output."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape


def get_console() -> Console:
    if not hasattr(get_console, "_console"):
        get_console._console = Console(highlight=False, soft_wrap=True)
    return get_console._console


def get_error_console() -> Console:
    if not hasattr(get_error_console, "_console"):
        get_error_console._console = Console(stderr=True, highlight=False, soft_wrap=True)
    return get_error_console._console


def print_success(message: str) -> None:
    get_console().print(f"[bold green]✓ {escape(message)}")


def print_error(message: str) -> None:
    get_error_console().print(f"[bold red]✖ {escape(message)}")


def print_warning(message: str) -> None:
    get_console().print(f"[bold yellow]! {escape(message)}")


def print_info(message: str) -> None:
    get_console().print(f"[blue]{escape(message)}")


def print_detail(message: str) -> None:
    get_console().print(f"[bright_black]{escape(message)}")


def print_block(text: str, *, stderr: bool = False) -> None:
    """Print tool output verbatim."""

    console = get_error_console() if stderr else get_console()
    console.print(text, markup=False, emoji=False, end="" if text.endswith("\n") else "\n")
