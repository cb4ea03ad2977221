"""Peewee-backed, read-only access to a Joplin profile database."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from peewee import (
    SQL,
    DatabaseError,
    DoesNotExist,
    IntegerField,
    Model,
    SqliteDatabase,
    TextField,
)

TABLE_NOTES = "notes"
TABLE_FOLDERS = "folders"
TRASH_COLUMN = "deleted_time"


class HostDataError(RuntimeError):
    """Raised when the Joplin database cannot be read."""


@dataclass(slots=True, frozen=True)
class Note:
    """A Joplin note as seen by the export pipeline."""

    id: str
    title: str
    body: str
    parent_id: str


@dataclass(slots=True, frozen=True)
class Folder:
    """A Joplin notebook; ``parent_id`` is ``None`` for top-level notebooks."""

    id: str
    title: str
    parent_id: str | None = None


class JoplinDatabaseConnection(SqliteDatabase):
    """SqliteDatabase opened with writes disabled."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            str(path),
            pragmas={"query_only": 1},
            check_same_thread=False,
        )


class JoplinModel(Model):
    """Base model bound to the Joplin database at call time."""

    class Meta:
        database = SqliteDatabase(None)


class NoteRow(JoplinModel):
    id = TextField(primary_key=True)
    parent_id = TextField(default="")
    title = TextField(default="")
    body = TextField(default="")
    updated_time = IntegerField(default=0)
    is_conflict = IntegerField(default=0)

    class Meta:
        table_name = TABLE_NOTES


class FolderRow(JoplinModel):
    id = TextField(primary_key=True)
    title = TextField(default="")
    parent_id = TextField(default="")

    class Meta:
        table_name = TABLE_FOLDERS


def _to_note(row: NoteRow) -> Note:
    return Note(
        id=row.id,
        title=row.title or "",
        body=row.body or "",
        parent_id=row.parent_id or "",
    )


def _to_folder(row: FolderRow) -> Folder:
    return Folder(id=row.id, title=row.title or "", parent_id=row.parent_id or None)


class JoplinDatabase:
    """Note and folder queries against Joplin's ``database.sqlite``."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()
        self._database = JoplinDatabaseConnection(self.path)

    def selected_note(self, note_id: str | None = None) -> Note | None:
        """Return the note to export.

        The database does not record the UI selection, so the explicit
        ``note_id`` wins and the most recently edited note is used otherwise.
        """

        with self._binding() as (note_model, _):
            try:
                if note_id:
                    return _to_note(note_model.get_by_id(note_id))
                query = note_model.select().where(note_model.is_conflict == 0)
                # Profiles with a trash keep deleted notes in the same table.
                if self._has_trash():
                    query = query.where(SQL(f"{TRASH_COLUMN} = 0"))
                row = query.order_by(note_model.updated_time.desc()).limit(1).first()
            except DoesNotExist:
                return None
            except DatabaseError as exc:
                raise HostDataError(f"Failed to read notes: {exc}") from exc
            return _to_note(row) if row is not None else None

    def get_folder(self, folder_id: str) -> Folder | None:
        if not folder_id:
            return None
        with self._binding() as (_, folder_model):
            try:
                return _to_folder(folder_model.get_by_id(folder_id))
            except DoesNotExist:
                return None
            except DatabaseError as exc:
                raise HostDataError(f"Failed to read folder '{folder_id}': {exc}") from exc

    def _has_trash(self) -> bool:
        columns = self._database.get_columns(TABLE_NOTES)
        return any(column.name == TRASH_COLUMN for column in columns)

    @contextmanager
    def _binding(self) -> Iterator[tuple[type[NoteRow], type[FolderRow]]]:
        if not self.path.exists():
            raise HostDataError(f"Joplin database not found at {self.path}")
        with self._database.connection_context():
            with self._database.bind_ctx([NoteRow, FolderRow]):
                yield NoteRow, FolderRow
