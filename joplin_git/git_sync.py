"""Integration with Git for versioning the export directory."""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from .process import CommandRunner, ProcessResult, run_command

logger = logging.getLogger(__name__)

GIT = "git"

_NO_CHANGE_RE = re.compile(r"nothing to commit|no changes added", re.IGNORECASE)


class GitSyncError(RuntimeError):
    """Base error for git synchronization issues."""


class GitPushError(GitSyncError):
    """Raised when pushing to a configured remote fails."""


class SyncStatus(enum.Enum):
    COMMITTED = "committed"
    NO_CHANGE = "no_change"


@dataclass(slots=True, frozen=True)
class SyncResult:
    """Outcome of a successful :meth:`GitSync.sync` call."""

    status: SyncStatus
    pushed: bool

    @property
    def summary(self) -> str:
        if self.status is SyncStatus.NO_CHANGE:
            if self.pushed:
                return "Nothing to commit. Pushed to remote."
            return "Nothing to commit. No remote configured."
        if self.pushed:
            return "Committed and pushed."
        return "Committed (no remote configured, push skipped)."


def is_no_change(result: ProcessResult) -> bool:
    """Return True when a failed commit only reports an unchanged tree."""

    return not result.ok and bool(_NO_CHANGE_RE.search(result.combined_output))


class GitSync:
    """Wrapper around the handful of git verbs used to version exports."""

    def __init__(self, runner: CommandRunner = run_command) -> None:
        self._runner = runner

    def sync(self, repo_dir: Path | str, message: str) -> SyncResult:
        """Commit everything under ``repo_dir`` and push when a remote exists.

        The repository is initialized in place when ``repo_dir`` is not yet a
        working tree. An unchanged tree is reported as
        :attr:`SyncStatus.NO_CHANGE` rather than an error. A failing push is
        always fatal, even when there was nothing to commit.
        """

        repo_path = Path(repo_dir)
        self.ensure_repository(repo_path)

        add = self._git(repo_path, "add", "-A")
        if not add.ok:
            raise GitSyncError(f"git add failed: {add.stderr.strip()}")

        status = self.commit(repo_path, message)

        pushed = False
        if self.has_remote(repo_path):
            self.push(repo_path)
            pushed = True
        else:
            logger.debug("No remote configured in %s; skipping push", repo_path)

        return SyncResult(status=status, pushed=pushed)

    def ensure_repository(self, repo_path: Path) -> None:
        """Run ``git init`` unless ``repo_path`` is already inside a work tree."""

        probe = self._git(repo_path, "rev-parse", "--is-inside-work-tree")
        if probe.ok:
            return

        logger.info("Initializing git repository in %s", repo_path)
        # Best effort: a broken init shows up as a failing 'git add'.
        init = self._git(repo_path, "init")
        if not init.ok:
            logger.warning("git init failed in %s: %s", repo_path, init.stderr.strip())

    def commit(self, repo_path: Path, message: str) -> SyncStatus:
        result = self._git(repo_path, "commit", "-m", message)
        if result.ok:
            return SyncStatus.COMMITTED
        if is_no_change(result):
            logger.info("Nothing to commit in %s", repo_path)
            return SyncStatus.NO_CHANGE
        detail = (result.stderr or result.stdout).strip()
        raise GitSyncError(f"git commit failed: {detail}")

    def has_remote(self, repo_path: Path) -> bool:
        result = self._git(repo_path, "remote")
        return result.ok and bool(result.stdout.strip())

    def push(self, repo_path: Path) -> None:
        result = self._git(repo_path, "push")
        if not result.ok:
            detail = (result.stderr or result.stdout).strip()
            raise GitPushError(f"git push failed: {detail}")

    # ---------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------
    def _git(self, repo_path: Path, *args: str) -> ProcessResult:
        return self._runner(GIT, args, repo_path)
