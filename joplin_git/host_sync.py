"""Trigger for Joplin's own synchronization after an export."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from .process import CommandRunner, run_command

logger = logging.getLogger(__name__)


class HostSyncError(RuntimeError):
    """Raised when the configured synchronization command fails."""


class HostSync:
    """Run the configured sync command, e.g. ``joplin sync``."""

    def __init__(
        self,
        command: Sequence[str] = (),
        *,
        runner: CommandRunner = run_command,
    ) -> None:
        self.command = tuple(command)
        self._runner = runner

    def trigger(self, cwd: Path | None = None) -> None:
        if not self.command:
            logger.debug("No sync command configured; skipping host sync")
            return

        program, *args = self.command
        result = self._runner(program, args, cwd or Path.home())
        if not result.ok:
            detail = (result.stderr or result.stdout).strip()
            raise HostSyncError(
                f"{' '.join(self.command)} failed (exit {result.exit_code}): {detail}"
            )
