"""Chunk title resolution and the line patterns of the chunk syntax."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Tuple

from pyliterate.errors import AmbiguousTitleError, ChunkNotFoundError

ELLIPSIS = "..."

# <indent><<title>><trailing space>
REFERENCE = re.compile(r"^(\s*)<<(.*)>>\s*$")
# <<title>>= at the very start of a raw listing line
HEADER = re.compile(r"^<<(.*)>>=\s*$")


def is_abbreviated(title: str) -> bool:
    return title.endswith(ELLIPSIS)


def resolve(title: str, names: Iterable[str]) -> str:
    """Return the full chunk title for a possibly abbreviated ``title``.

    Titles not ending in ``...`` are returned unchanged, without checking
    that they exist. An abbreviation must be the prefix of exactly one of
    ``names``.
    """
    if not is_abbreviated(title):
        return title
    prefix = title[: -len(ELLIPSIS)]
    hits = [name for name in names if name.startswith(prefix)]
    if not hits:
        raise ChunkNotFoundError(title)
    if len(hits) > 1:
        raise AmbiguousTitleError(title, hits)
    return hits[0]


def parse_reference(line: str) -> Optional[Tuple[str, str]]:
    """Split a reference line into ``(title, indent)``, or return None."""
    match = REFERENCE.match(line)
    if match is None:
        return None
    return match.group(2), match.group(1)


def parse_header(line: str) -> Optional[str]:
    """Return the chunk title of a ``<<title>>=`` header line, or None."""
    match = HEADER.match(line)
    return match.group(1) if match else None
