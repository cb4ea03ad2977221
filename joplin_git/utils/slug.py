"""File name helpers for exported notes."""

from __future__ import annotations

import re

MAX_SLUG_CHARS = 80
SLUG_SEPARATOR = "_"
PLACEHOLDER_SLUG = "note"

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Map a note title to a file-system safe file stem.

    Anything outside ``[a-z0-9]`` (after lower-casing) is collapsed into a
    single ``_``, including non-ASCII letters. The result never exceeds
    ``MAX_SLUG_CHARS`` characters and falls back to ``"note"`` when empty.
    """

    slug = _NON_ALNUM_RE.sub(SLUG_SEPARATOR, (title or "").lower())
    slug = slug.strip(SLUG_SEPARATOR)[:MAX_SLUG_CHARS].rstrip(SLUG_SEPARATOR)
    return slug or PLACEHOLDER_SLUG
