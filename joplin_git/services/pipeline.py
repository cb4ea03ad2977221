"""The export workflow: resolve, write, commit, push, then sync Joplin."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..app import AppContext
from ..git_sync import SyncResult
from ..joplin_db import Note
from .errors import ExportDirectoryError, NoNoteSelectedError
from .resolver import resolve_export_dir
from .writer import write_note

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ExportReport:
    file_path: Path
    note_title: str
    commit_message: str
    sync: SyncResult


def require_note(app: AppContext, note_id: str | None = None) -> Note:
    note = app.joplin.selected_note(note_id)
    if note is None:
        raise NoNoteSelectedError("No selected note.")
    return note


def export_dir_for(app: AppContext, note: Note) -> str:
    """Return the export directory for ``note`` or raise ExportDirectoryError."""

    dir_map = app.settings.notebook_dir_map()
    directory = resolve_export_dir(
        note,
        get_folder=app.joplin.get_folder,
        global_dir=app.settings.target_dir,
        dir_map=dir_map,
    )
    if directory:
        return directory

    # An empty result means no global directory and no override for this
    # notebook; tell apart "nothing at all" from "other notebooks only".
    if not dir_map:
        raise ExportDirectoryError(
            "No export directory. Configure a global export directory "
            "or one for this notebook."
        )
    folder = app.joplin.get_folder(note.parent_id)
    name = folder.title if folder is not None else note.parent_id
    raise ExportDirectoryError(
        f"No export directory for notebook '{name}'. Set the export directory "
        "in the settings or for this notebook."
    )


def run_pipeline(app: AppContext, note_id: str | None = None) -> ExportReport:
    """Export the selected note and version it with git.

    Any failing step aborts the remaining ones; nothing already done is
    rolled back.
    """

    note = require_note(app, note_id)
    directory = export_dir_for(app, note)

    exported = write_note(note, directory)
    message = f"{app.settings.commit_prefix}{exported.note_title}"

    result = app.git_sync.sync(directory, message)
    logger.info("%s: %s", exported.file_path, result.summary)

    app.host_sync.trigger(Path(directory))

    return ExportReport(
        file_path=exported.file_path,
        note_title=exported.note_title,
        commit_message=message,
        sync=result,
    )
