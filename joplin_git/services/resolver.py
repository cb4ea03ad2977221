"""Resolution of the export directory for a note."""

from __future__ import annotations

import logging
import os
from typing import Callable, Mapping

from ..joplin_db import Folder, Note

logger = logging.getLogger(__name__)

FolderLookup = Callable[[str], Folder | None]

MAX_FOLDER_DEPTH = 64
UNTITLED_FOLDER = "untitled"


def folder_path_segments(
    folder_id: str | None,
    get_folder: FolderLookup,
    *,
    max_depth: int = MAX_FOLDER_DEPTH,
) -> list[str]:
    """Return folder titles from the notebook root down to ``folder_id``.

    The walk stops at the first missing folder or at a folder without parent,
    so a dangling reference shortens the path instead of failing. Cycles and
    chains deeper than ``max_depth`` are cut off as well.
    """

    segments: list[str] = []
    seen: set[str] = set()
    current = folder_id or None
    while current:
        if current in seen or len(segments) >= max_depth:
            logger.warning(
                "Folder hierarchy above '%s' is cyclic or too deep; truncating",
                folder_id,
            )
            break
        seen.add(current)

        folder = get_folder(current)
        if folder is None:
            break
        # A title such as "/etc" must stay below the export root.
        segments.append(folder.title.lstrip("/\\") or UNTITLED_FOLDER)
        current = folder.parent_id or None

    segments.reverse()
    return segments


def resolve_export_dir(
    note: Note,
    *,
    get_folder: FolderLookup,
    global_dir: str,
    dir_map: Mapping[str, str],
) -> str:
    """Compute the export directory for ``note``.

    A per-notebook override is returned as-is. Without one, the notebook
    hierarchy is mirrored below ``global_dir``. An empty string means nothing
    is configured for this note.
    """

    override = dir_map.get(note.parent_id)
    if override:
        return override

    if not global_dir:
        return ""

    return os.path.join(global_dir, *folder_path_segments(note.parent_id, get_folder))
