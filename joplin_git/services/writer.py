"""Writing notes to the export directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..joplin_db import Note
from ..utils.slug import slugify
from .errors import ExportDirectoryError, NoNoteSelectedError

logger = logging.getLogger(__name__)

UNTITLED_NOTE = "Untitled"
NOTE_SUFFIX = ".md"


@dataclass(slots=True, frozen=True)
class ExportedNote:
    file_path: Path
    note_title: str


def write_note(note: Note | None, directory: str | Path) -> ExportedNote:
    """Write ``note``'s body to ``directory``, replacing any previous export."""

    if note is None:
        raise NoNoteSelectedError("No selected note.")
    if not (directory.parts if isinstance(directory, Path) else directory):
        raise ExportDirectoryError("No export directory given.")

    title = note.title or UNTITLED_NOTE
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)

    file_path = target_dir / f"{slugify(title)}{NOTE_SUFFIX}"
    file_path.write_text(note.body or "", encoding="utf-8")
    logger.info("Wrote note '%s' to %s", title, file_path)
    return ExportedNote(file_path=file_path, note_title=title)
