from __future__ import annotations

from pathlib import Path

import pytest

from nomouse.process import ExecutionResult, FakeProcessRunner, ProcessLaunchError, ProcessRunner
from nomouse.process.utils import resolve_executable


def write_script(path: Path, body: str) -> Path:
    path.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
    path.chmod(0o755)
    return path


def test_runner_captures_output_and_exit_code(tmp_path: Path) -> None:
    script = write_script(tmp_path / "tool", 'echo "out $1"\necho "err" >&2\nexit 3')

    result = ProcessRunner().run([str(script), "arg"], capture=True)

    assert not result.ok
    assert result.returncode == 3
    assert result.stdout.strip() == "out arg"
    assert result.stderr.strip() == "err"
    assert result.args[0] == str(script)


def test_runner_without_capture_returns_empty_streams(tmp_path: Path) -> None:
    script = write_script(tmp_path / "tool", "exit 0")

    result = ProcessRunner().run([str(script)], capture=False)

    assert result.ok
    assert result.stdout == ""
    assert result.stderr == ""


def test_runner_uses_working_directory(tmp_path: Path) -> None:
    script = write_script(tmp_path / "tool", "pwd")

    result = ProcessRunner(cwd=tmp_path).run([str(script)])

    assert Path(result.stdout.strip()).resolve() == tmp_path.resolve()


def test_missing_executable_is_a_launch_error(tmp_path: Path) -> None:
    with pytest.raises(ProcessLaunchError) as excinfo:
        ProcessRunner().run([str(tmp_path / "missing")])
    assert "command not found" in str(excinfo.value)

    with pytest.raises(ProcessLaunchError):
        ProcessRunner().run(["definitely-not-a-real-compiler-xyz"])


def test_non_executable_file_is_a_launch_error(tmp_path: Path) -> None:
    script = tmp_path / "tool"
    script.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    script.chmod(0o644)

    with pytest.raises(ProcessLaunchError) as excinfo:
        ProcessRunner().run([str(script)])

    assert excinfo.value.reason == "permission denied"


def test_resolve_executable_prefers_paths_over_lookup(tmp_path: Path) -> None:
    script = write_script(tmp_path / "tool", "exit 0")

    assert resolve_executable(str(script)) == str(script)
    assert resolve_executable(str(tmp_path / "nope")) is None
    assert resolve_executable("sh") is not None


def test_fake_runner_records_invocations_and_raises() -> None:
    fake = FakeProcessRunner(
        [
            ExecutionResult(args=("g++",), returncode=1, stdout="", stderr="boom"),
            ProcessLaunchError("java", "command not found"),
        ]
    )

    assert fake.run(["g++", "a.cpp"]).stderr == "boom"
    with pytest.raises(ProcessLaunchError):
        fake.run(["java", "Main"])
    assert fake.run(["./a"]).ok
    assert fake.invocations == [("g++", "a.cpp"), ("java", "Main"), ("./a",)]


def test_runner_passes_the_callers_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("PYTHONPATH", "/opt/lib")
    script = write_script(tmp_path / "env.sh", 'echo "$PYTHONPATH"')

    result = ProcessRunner().run([str(script)])

    assert result.stdout == "/opt/lib\n"
