"""Execution of external commands with captured output."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

logger = logging.getLogger(__name__)

LAUNCH_FAILURE_EXIT_CODE = -1


@dataclass(slots=True, frozen=True)
class ProcessResult:
    """Exit code and captured streams of a finished command."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    @property
    def combined_output(self) -> str:
        return self.stdout + self.stderr


CommandRunner = Callable[[str, Sequence[str], Path], ProcessResult]


def run_command(command: str, args: Sequence[str], cwd: Path | str) -> ProcessResult:
    """Run ``command`` with ``args`` inside ``cwd`` and capture its output.

    A non-zero exit is never raised; callers inspect ``exit_code``. A command
    that cannot be started at all is reported with ``LAUNCH_FAILURE_EXIT_CODE``
    and the OS error text on ``stderr``.
    """

    argv = [command, *args]
    logger.debug("Running %s in %s", " ".join(argv), cwd)
    try:
        process = subprocess.run(
            argv,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        logger.debug("Could not launch %s: %s", command, exc)
        return ProcessResult(LAUNCH_FAILURE_EXIT_CODE, "", str(exc))

    logger.debug("%s exited with %d", command, process.returncode)
    return ProcessResult(process.returncode, process.stdout or "", process.stderr or "")
