"""Tests for committing and pushing the export directory."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest
from conftest import FakeRunner
from joplin_git.git_sync import (
    GitPushError,
    GitSync,
    GitSyncError,
    SyncResult,
    SyncStatus,
)
from joplin_git.process import ProcessResult

NOT_A_REPO = ProcessResult(128, "", "fatal: not a git repository")
NOTHING_TO_COMMIT = ProcessResult(
    1, "On branch main\nnothing to commit, working tree clean\n", ""
)
HAS_REMOTE = ProcessResult(0, "origin\n", "")

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not found")


def test_sync_initializes_missing_repository(tmp_path: Path) -> None:
    runner = FakeRunner({"rev-parse": NOT_A_REPO})

    result = GitSync(runner).sync(tmp_path, "msg")

    assert runner.verbs() == ["rev-parse", "init", "add", "commit", "remote"]
    assert result == SyncResult(SyncStatus.COMMITTED, pushed=False)


def test_sync_skips_init_for_existing_repository(tmp_path: Path) -> None:
    runner = FakeRunner()

    GitSync(runner).sync(tmp_path, "msg")

    assert "init" not in runner.verbs()


def test_sync_passes_message_verbatim(tmp_path: Path) -> None:
    runner = FakeRunner()
    message = 'Prefix: "quoted"\nsecond line'

    GitSync(runner).sync(tmp_path, message)

    assert ("git", "commit", "-m", message) in runner.calls


def test_no_change_without_remote_does_not_push(tmp_path: Path) -> None:
    runner = FakeRunner({"rev-parse": NOT_A_REPO, "commit": NOTHING_TO_COMMIT})

    result = GitSync(runner).sync(tmp_path, "msg")

    assert result.status is SyncStatus.NO_CHANGE
    assert result.pushed is False
    assert "push" not in runner.verbs()
    assert result.summary == "Nothing to commit. No remote configured."


def test_no_change_is_detected_case_insensitively_on_stderr(tmp_path: Path) -> None:
    runner = FakeRunner(
        {"commit": ProcessResult(1, "", "No changes added to commit\n")}
    )

    result = GitSync(runner).sync(tmp_path, "msg")

    assert result.status is SyncStatus.NO_CHANGE


def test_no_change_with_remote_still_pushes(tmp_path: Path) -> None:
    runner = FakeRunner({"commit": NOTHING_TO_COMMIT, "remote": HAS_REMOTE})

    result = GitSync(runner).sync(tmp_path, "msg")

    assert runner.verbs()[-1] == "push"
    assert result == SyncResult(SyncStatus.NO_CHANGE, pushed=True)
    assert result.summary == "Nothing to commit. Pushed to remote."


def test_push_failure_after_no_change_is_fatal(tmp_path: Path) -> None:
    runner = FakeRunner(
        {
            "commit": NOTHING_TO_COMMIT,
            "remote": HAS_REMOTE,
            "push": ProcessResult(1, "", "fatal: unable to access remote"),
        }
    )

    with pytest.raises(GitPushError) as exc_info:
        GitSync(runner).sync(tmp_path, "msg")

    assert "git push failed" in str(exc_info.value)
    assert "unable to access remote" in str(exc_info.value)


def test_commit_and_push(tmp_path: Path) -> None:
    runner = FakeRunner({"remote": HAS_REMOTE})

    result = GitSync(runner).sync(tmp_path, "msg")

    assert runner.verbs() == ["rev-parse", "add", "commit", "remote", "push"]
    assert result.summary == "Committed and pushed."


def test_add_failure_is_fatal(tmp_path: Path) -> None:
    runner = FakeRunner({"add": ProcessResult(128, "", "fatal: index.lock exists")})

    with pytest.raises(GitSyncError, match="git add failed: fatal: index.lock exists"):
        GitSync(runner).sync(tmp_path, "msg")

    assert "commit" not in runner.verbs()


def test_other_commit_failure_is_fatal_and_skips_push(tmp_path: Path) -> None:
    runner = FakeRunner(
        {
            "commit": ProcessResult(128, "", "Author identity unknown"),
            "remote": HAS_REMOTE,
        }
    )

    with pytest.raises(GitSyncError, match="git commit failed: Author identity unknown"):
        GitSync(runner).sync(tmp_path, "msg")

    assert "push" not in runner.verbs()


def test_failed_remote_listing_counts_as_no_remote(tmp_path: Path) -> None:
    runner = FakeRunner({"remote": ProcessResult(1, "origin\n", "error")})

    result = GitSync(runner).sync(tmp_path, "msg")

    assert result.pushed is False
    assert "push" not in runner.verbs()


@requires_git
def test_real_git_commit_then_no_change(tmp_path: Path, git_identity) -> None:
    repo = tmp_path / "repo"
    repo.mkdir()
    (repo / "note.md").write_text("hello", encoding="utf-8")
    git_sync = GitSync()

    first = git_sync.sync(repo, "first commit")
    second = git_sync.sync(repo, "second commit")

    assert (repo / ".git").is_dir()
    assert first == SyncResult(SyncStatus.COMMITTED, pushed=False)
    assert second == SyncResult(SyncStatus.NO_CHANGE, pushed=False)
    log = subprocess.run(
        ["git", "log", "--format=%s"],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    assert log.stdout.splitlines() == ["first commit"]


@requires_git
def test_real_git_push_to_bare_remote(tmp_path: Path, git_identity) -> None:
    remote = tmp_path / "remote.git"
    subprocess.run(["git", "init", "--bare", str(remote)], check=True, capture_output=True)
    repo = tmp_path / "repo"
    repo.mkdir()
    subprocess.run(["git", "init"], cwd=repo, check=True, capture_output=True)
    subprocess.run(
        ["git", "remote", "add", "origin", str(remote)],
        cwd=repo,
        check=True,
        capture_output=True,
    )
    subprocess.run(
        ["git", "config", "push.default", "current"],
        cwd=repo,
        check=True,
        capture_output=True,
    )
    (repo / "note.md").write_text("hello", encoding="utf-8")

    result = GitSync().sync(repo, "export")

    assert result == SyncResult(SyncStatus.COMMITTED, pushed=True)
    remote_log = subprocess.run(
        ["git", "log", "--all", "--format=%s"],
        cwd=remote,
        capture_output=True,
        text=True,
        check=True,
    )
    assert remote_log.stdout.splitlines() == ["export"]


@requires_git
def test_real_git_push_failure_raises(tmp_path: Path, git_identity) -> None:
    repo = tmp_path / "repo"
    repo.mkdir()
    subprocess.run(["git", "init"], cwd=repo, check=True, capture_output=True)
    subprocess.run(
        ["git", "remote", "add", "origin", str(tmp_path / "missing.git")],
        cwd=repo,
        check=True,
        capture_output=True,
    )
    (repo / "note.md").write_text("hello", encoding="utf-8")

    with pytest.raises(GitPushError):
        GitSync().sync(repo, "export")
