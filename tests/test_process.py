"""Tests for the external command runner."""

from __future__ import annotations

import sys

from joplin_git.process import LAUNCH_FAILURE_EXIT_CODE, run_command


def test_run_command_captures_streams(tmp_path) -> None:
    result = run_command(
        sys.executable,
        ["-c", "import sys; print('out'); print('err', file=sys.stderr)"],
        tmp_path,
    )

    assert result.exit_code == 0
    assert result.ok
    assert result.stdout.strip() == "out"
    assert result.stderr.strip() == "err"


def test_run_command_does_not_raise_on_failure(tmp_path) -> None:
    result = run_command(sys.executable, ["-c", "import sys; sys.exit(3)"], tmp_path)

    assert result.exit_code == 3
    assert not result.ok


def test_run_command_uses_working_directory(tmp_path) -> None:
    result = run_command(
        sys.executable, ["-c", "import os; print(os.getcwd())"], tmp_path
    )

    assert result.stdout.strip() == str(tmp_path.resolve())


def test_run_command_reports_missing_executable(tmp_path) -> None:
    result = run_command("definitely-not-a-real-command-xyz", [], tmp_path)

    assert result.exit_code == LAUNCH_FAILURE_EXIT_CODE
    assert result.stdout == ""
    assert result.stderr
