from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from nomouse.controller import SessionController
from nomouse.dispatcher import CompileFailure, NotFound, RunDispatcher, Success
from nomouse.errors import (
    ClipboardError,
    FileAccessError,
    FileMissingError,
    InvalidTransitionError,
    NoRecentFileError,
    NotTrackedError,
    TemplateMissingError,
)
from nomouse.process import ExecutionResult, FakeProcessRunner
from nomouse.storage import GlobalState, StateStore, TemplateStore
from nomouse.toolchains import ToolchainRegistry


class ManualClock:
    def __init__(self) -> None:
        self.now = datetime(2025, 6, 1, 8, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class RecordingClipboard:
    def __init__(self) -> None:
        self.copies: list[str] = []

    def __call__(self, text: str) -> None:
        self.copies.append(text)


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def make_controller(
    workspace: Path,
    *,
    state: GlobalState | None = None,
    runner: FakeProcessRunner | None = None,
    clock: ManualClock | None = None,
    clipboard=None,
) -> SessionController:
    return SessionController(
        state if state is not None else GlobalState(),
        templates=TemplateStore(workspace / ".nomouse-templates"),
        dispatcher=RunDispatcher(ToolchainRegistry.builtin(), runner or FakeProcessRunner()),
        clipboard=clipboard or RecordingClipboard(),
        clock=clock or ManualClock(),
    )


def test_generate_without_template_creates_nothing(workspace: Path) -> None:
    controller = make_controller(workspace)

    with pytest.raises(TemplateMissingError):
        controller.on_generate("a.cpp")

    assert not (workspace / "a.cpp").exists()
    assert controller.state.last_generated is None
    assert controller.state.sessions == {}


def test_generate_from_template_starts_tracking(workspace: Path) -> None:
    controller = make_controller(workspace)
    controller.on_set_template("cpp", "int main() { return 0; }\n")

    path = controller.on_generate("a.cpp")

    assert path.read_text(encoding="utf-8") == "int main() { return 0; }"
    assert controller.state.last_generated == "a.cpp"
    assert controller.state.last_file == "a.cpp"
    assert controller.state.generated_count == 1
    assert controller.timer.total_active_seconds("a.cpp") == 0
    assert not controller.timer.record("a.cpp").is_paused


def test_failed_compile_still_records_run(workspace: Path) -> None:
    (workspace / "a.cpp").write_text("int main( {", encoding="utf-8")
    runner = FakeProcessRunner(
        [ExecutionResult(args=("g++",), returncode=1, stdout="", stderr="error: expected ')'")]
    )
    controller = make_controller(workspace, runner=runner)

    outcome = controller.on_run("a.cpp")

    assert isinstance(outcome, CompileFailure)
    assert controller.state.last_run == "a.cpp"
    assert controller.state.last_file == "a.cpp"
    assert controller.state.run_count == 1
    assert len(runner.invocations) == 1


def test_run_of_missing_file_is_not_recorded(workspace: Path) -> None:
    controller = make_controller(workspace)

    outcome = controller.on_run("ghost.py")

    assert isinstance(outcome, NotFound)
    assert controller.state.last_run is None
    assert controller.state.run_count == 0


def test_pause_resume_default_to_last_file(workspace: Path) -> None:
    clock = ManualClock()
    controller = make_controller(workspace, clock=clock)
    controller.on_set_template(".py", "print()")
    controller.on_generate("sol.py")
    clock.advance(60)

    assert controller.on_pause() == "sol.py"
    clock.advance(120)
    assert controller.on_resume() == ("sol.py", 120)
    with pytest.raises(InvalidTransitionError):
        controller.on_resume()

    clock.advance(30)
    status = controller.on_status()
    assert status.filename == "sol.py"
    assert status.total_active_seconds == 90
    assert status.paused is False
    assert status.seconds_since_last_wind is None


def test_commands_without_recent_file_fail(workspace: Path) -> None:
    controller = make_controller(workspace)

    with pytest.raises(NoRecentFileError):
        controller.on_pause()
    with pytest.raises(NoRecentFileError):
        controller.on_wind()


def test_wind_copies_and_reports_timing(workspace: Path) -> None:
    clock = ManualClock()
    clipboard = RecordingClipboard()
    controller = make_controller(workspace, clock=clock, clipboard=clipboard)
    controller.on_set_template(".cpp", "// solution")
    controller.on_generate("a.cpp")
    clock.advance(300)

    first = controller.on_wind()
    clock.advance(45)
    second = controller.on_wind("a.cpp")

    assert clipboard.copies == ["// solution", "// solution"]
    assert first.characters == len("// solution")
    assert first.total_active_seconds == 300
    assert first.seconds_since_last_wind is None
    assert second.total_active_seconds == 345
    assert second.seconds_since_last_wind == 45
    assert not controller.timer.record("a.cpp").is_paused


def test_wind_untracked_file_still_copies(workspace: Path) -> None:
    (workspace / "loose.py").write_text("print(1)\n", encoding="utf-8")
    clipboard = RecordingClipboard()
    controller = make_controller(workspace, clipboard=clipboard)

    report = controller.on_wind("loose.py")

    assert clipboard.copies == ["print(1)\n"]
    assert report.total_active_seconds is None
    assert report.seconds_since_last_wind is None
    with pytest.raises(NotTrackedError):
        controller.on_status("loose.py")


def test_wind_missing_file(workspace: Path) -> None:
    controller = make_controller(workspace, state=GlobalState(last_file="deleted.cpp"))

    with pytest.raises(FileMissingError):
        controller.on_wind()


def test_generate_into_missing_directory_fails_cleanly(workspace: Path) -> None:
    controller = make_controller(workspace)
    controller.on_set_template("cpp", "int main() {}")

    with pytest.raises(FileAccessError, match="nodir/a.cpp"):
        controller.on_generate("nodir/a.cpp")

    assert controller.state.generated_count == 0
    assert controller.state.sessions == {}


def test_wind_copies_legacy_encoded_file(workspace: Path) -> None:
    (workspace / "a.cpp").write_bytes("// \u30b3\u30e1\u30f3\u30c8\nint main() {}\n".encode("cp932"))
    clipboard = RecordingClipboard()
    controller = make_controller(workspace, clipboard=clipboard)

    report = controller.on_wind("a.cpp")

    assert "\ufffd" in clipboard.copies[0]
    assert clipboard.copies[0].endswith("int main() {}\n")
    assert report.characters == len(clipboard.copies[0])


def test_clipboard_failure_leaves_timer_untouched(workspace: Path) -> None:
    def broken_clipboard(_text: str) -> None:
        raise ClipboardError("no clipboard")

    controller = make_controller(workspace, clipboard=broken_clipboard)
    controller.on_set_template(".py", "pass")
    controller.on_generate("a.py")

    with pytest.raises(ClipboardError):
        controller.on_wind()

    assert controller.timer.record("a.py").last_winded_at is None


def test_session_survives_reload(workspace: Path) -> None:
    store = StateStore(workspace / "state.json")
    clock = ManualClock()

    first = make_controller(workspace, state=store.load(), clock=clock)
    first.on_set_template(".py", "pass")
    first.on_generate("a.py")
    clock.advance(10)
    first.on_pause()
    store.save(first.state)

    clock.advance(50)
    runner = FakeProcessRunner()
    second = make_controller(workspace, state=store.load(), clock=clock, runner=runner)
    assert second.on_resume() == ("a.py", 50)
    clock.advance(5)
    assert second.timer.total_active_seconds("a.py") == 15
    assert isinstance(second.on_run("a.py"), Success)
    store.save(second.state)

    reloaded = store.load()
    assert reloaded.last_run == "a.py"
    assert reloaded.run_count == 1
    assert reloaded.generated_count == 1
    assert reloaded.sessions["a.py"].blank == timedelta(seconds=50)
