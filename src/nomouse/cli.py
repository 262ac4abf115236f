"""Command line entry point for nomouse (``nms``)."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from . import __version__
from .config import NomouseSettings, get_settings
from .console import (
    print_block,
    print_detail,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from .controller import SessionController
from .dispatcher import (
    CompileFailure,
    LaunchFailure,
    NotFound,
    Outcome,
    RunDispatcher,
    RuntimeFailure,
    Success,
    Unhandled,
)
from .errors import NomouseError
from .storage import StateStore, TemplateStore
from .toolchains import build_registry
from .toolchains.models import normalize_extension

TEMPLATE_TERMINATOR = ".end"


def configure_logging(level: str) -> None:
    """Configure root logging for the CLI."""

    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )


def format_duration(seconds: int) -> str:
    hours, remainder = divmod(max(0, seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}h {minutes:02d}m {secs:02d}s"
    if minutes:
        return f"{minutes}m {secs:02d}s"
    return f"{secs}s"


def read_template(stream: TextIO) -> str:
    """Collect lines from ``stream`` until a ``.end`` line or end of input."""

    lines: list[str] = []
    for line in stream:
        if line.strip() == TEMPLATE_TERMINATOR:
            break
        lines.append(line)
    return "".join(lines)


def cmd_gen(controller: SessionController, args: argparse.Namespace) -> int:
    controller.on_generate(args.filename)
    print_success(f"Generated {args.filename} from template")
    return 0


def cmd_set(controller: SessionController, args: argparse.Namespace) -> int:
    extension = normalize_extension(args.extension)
    print_info(f"Setting template for {extension} extension...")
    if sys.stdin.isatty():
        print_detail(f"Please paste your template code and type {TEMPLATE_TERMINATOR} to finish:")
    path = controller.on_set_template(extension, read_template(sys.stdin))
    print_success(f"Template for {extension} saved successfully")
    print_detail(f"Path: {path}")
    return 0


def report_outcome(filename: str, outcome: Outcome) -> int:
    if isinstance(outcome, Success):
        if outcome.stdout:
            print_block(outcome.stdout)
        print_success(f"Run completed for {filename}")
        return 0
    if isinstance(outcome, Unhandled):
        print_warning(
            f"No specific handler for {outcome.extension or 'extensionless'} files. "
            "File exists and is ready."
        )
        return 0
    if isinstance(outcome, NotFound):
        print_error(f"File {outcome.path} does not exist")
        return 1
    if isinstance(outcome, CompileFailure):
        if outcome.stderr:
            print_block(outcome.stderr, stderr=True)
        print_error(f"{outcome.toolchain} compilation failed with exit code {outcome.exit_code}")
        return 1
    if isinstance(outcome, RuntimeFailure):
        if outcome.stderr:
            print_block(outcome.stderr, stderr=True)
        print_error(f"{filename} exited with code {outcome.exit_code}")
        return 1
    if isinstance(outcome, LaunchFailure):
        print_error(f"Could not start the {outcome.toolchain} {outcome.phase} step: {outcome.message}")
        return 1
    raise TypeError(f"Unexpected run outcome {outcome!r}")


def cmd_run(controller: SessionController, args: argparse.Namespace) -> int:
    print_info(f"Running {args.filename}...")
    return report_outcome(args.filename, controller.on_run(args.filename))


def cmd_wind(controller: SessionController, args: argparse.Namespace) -> int:
    report = controller.on_wind(args.filename)
    print_success(f"Copied {report.filename} content to clipboard")
    print_detail(f"File: {report.filename}")
    print_detail(f"Size: {report.characters} characters")
    if report.total_active_seconds is not None:
        print_detail(f"Active time: {format_duration(report.total_active_seconds)}")
    if report.seconds_since_last_wind is not None:
        print_detail(f"Since last copy: {format_duration(report.seconds_since_last_wind)}")
    return 0


def cmd_pause(controller: SessionController, args: argparse.Namespace) -> int:
    target = controller.on_pause(args.filename)
    print_success(f"Paused timer for {target}")
    return 0


def cmd_resume(controller: SessionController, args: argparse.Namespace) -> int:
    target, paused_seconds = controller.on_resume(args.filename)
    print_success(f"Resumed timer for {target} after {format_duration(paused_seconds)}")
    return 0


def cmd_status(controller: SessionController, args: argparse.Namespace) -> int:
    report = controller.on_status(args.filename)
    print_info(f"{report.filename} [{'paused' if report.paused else 'active'}]")
    print_detail(f"Generated: {report.generated_at.isoformat()}")
    print_detail(f"Active time: {format_duration(report.total_active_seconds)}")
    if report.seconds_since_last_wind is None:
        print_detail("Never copied")
    else:
        print_detail(f"Since last copy: {format_duration(report.seconds_since_last_wind)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nms",
        description="A CLI tool for competitive programmers to quickly create, execute, and copy files",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="cmd")

    p_gen = sub.add_parser("gen", help="Generate a new file based on an existing template")
    p_gen.add_argument("filename")
    p_gen.set_defaults(func=cmd_gen)

    p_set = sub.add_parser("set", help="Set the template for a file extension (read from stdin)")
    p_set.add_argument("extension")
    p_set.set_defaults(func=cmd_set)

    p_run = sub.add_parser("run", help="Compile and run a file")
    p_run.add_argument("filename")
    p_run.set_defaults(func=cmd_run)

    p_wind = sub.add_parser(
        "wind",
        help="Copy the source of a file (default: the last generated/run file) to the clipboard",
    )
    p_wind.add_argument("filename", nargs="?")
    p_wind.set_defaults(func=cmd_wind)

    p_pause = sub.add_parser("pause", help="Pause the active-time timer of a file")
    p_pause.add_argument("filename", nargs="?")
    p_pause.set_defaults(func=cmd_pause)

    p_resume = sub.add_parser("resume", help="Resume the active-time timer of a file")
    p_resume.add_argument("filename", nargs="?")
    p_resume.set_defaults(func=cmd_resume)

    p_status = sub.add_parser("status", help="Show timing information for a file")
    p_status.add_argument("filename", nargs="?")
    p_status.set_defaults(func=cmd_status)

    return parser


def run_command(args: argparse.Namespace, settings: NomouseSettings | None = None) -> int:
    """Execute a parsed command and return the process exit status.

    The state is saved even when the command fails so failed runs are
    still recorded.
    """

    try:
        settings = settings or get_settings()
    except NomouseError as exc:
        print_error(str(exc))
        return 1
    configure_logging(settings.log_level)

    try:
        registry = build_registry(settings.toolchain_paths)
    except NomouseError as exc:
        print_error(str(exc))
        return 1

    store = StateStore(settings.state_path)
    state = store.load()
    if store.corruption:
        print_warning(f"Tracking history was unreadable and has been reset: {store.corruption}")

    controller = SessionController(
        state,
        templates=TemplateStore(settings.template_dir),
        dispatcher=RunDispatcher(registry, capture_output=settings.capture_output),
    )
    exit_code = 1
    try:
        exit_code = args.func(controller, args)
    except NomouseError as exc:
        print_error(str(exc))
    finally:
        try:
            store.save(state)
        except NomouseError as exc:
            print_error(str(exc))
            exit_code = 1
    return exit_code


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return
    exit_code = run_command(args)
    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
