"""Export pipeline error types."""

from __future__ import annotations


class ExportError(RuntimeError):
    """Raised when exporting a note cannot proceed."""


class NoNoteSelectedError(ExportError):
    """Raised when there is no note to export."""


class ExportDirectoryError(ExportError):
    """Raised when no export directory applies to the note."""


__all__ = ["ExportDirectoryError", "ExportError", "NoNoteSelectedError"]
