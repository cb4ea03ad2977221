from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Sequence

import pytest
from joplin_git.process import ProcessResult

JOPLIN_SCHEMA = """
CREATE TABLE folders (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL DEFAULT '',
    parent_id TEXT NOT NULL DEFAULT ''
);
CREATE TABLE notes (
    id TEXT PRIMARY KEY,
    parent_id TEXT NOT NULL DEFAULT '',
    title TEXT NOT NULL DEFAULT '',
    body TEXT NOT NULL DEFAULT '',
    updated_time INT NOT NULL DEFAULT 0,
    is_conflict INT NOT NULL DEFAULT 0
);
"""


class JoplinFixture:
    """Builds a minimal Joplin ``database.sqlite`` for tests."""

    def __init__(self, path: Path, *, with_trash: bool = False) -> None:
        self.path = path
        conn = sqlite3.connect(path)
        conn.executescript(JOPLIN_SCHEMA)
        if with_trash:
            conn.execute(
                "ALTER TABLE notes ADD COLUMN deleted_time INT NOT NULL DEFAULT 0"
            )
        conn.close()

    def add_folder(self, folder_id: str, title: str, parent_id: str = "") -> None:
        self._execute(
            "INSERT INTO folders (id, title, parent_id) VALUES (?, ?, ?)",
            (folder_id, title, parent_id),
        )

    def add_note(
        self,
        note_id: str,
        title: str,
        body: str,
        parent_id: str,
        *,
        updated_time: int = 0,
        is_conflict: int = 0,
        deleted_time: int | None = None,
    ) -> None:
        self._execute(
            "INSERT INTO notes (id, parent_id, title, body, updated_time, is_conflict)"
            " VALUES (?, ?, ?, ?, ?, ?)",
            (note_id, parent_id, title, body, updated_time, is_conflict),
        )
        if deleted_time is not None:
            self._execute(
                "UPDATE notes SET deleted_time = ? WHERE id = ?",
                (deleted_time, note_id),
            )

    def _execute(self, sql: str, params: tuple) -> None:
        conn = sqlite3.connect(self.path)
        with conn:
            conn.execute(sql, params)
        conn.close()


class FakeRunner:
    """Records commands and replays scripted results keyed by git verb."""

    def __init__(self, responses: dict[str, ProcessResult] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, command: str, args: Sequence[str], cwd: Path) -> ProcessResult:
        self.calls.append((command, *args))
        verb = args[0] if args else command
        return self.responses.get(verb, ProcessResult(0, "", ""))

    def verbs(self) -> list[str]:
        return [call[1] if len(call) > 1 else call[0] for call in self.calls]


@pytest.fixture
def joplin(tmp_path: Path) -> JoplinFixture:
    return JoplinFixture(tmp_path / "database.sqlite")


@pytest.fixture
def git_identity(monkeypatch, tmp_path: Path) -> None:
    """Give real git a committer identity isolated from the user's config."""

    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / "gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
