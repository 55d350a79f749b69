"""The block interface between a host document and the chunk database.

The engine never looks at a host document directly. A host hands over
:class:`Block` objects in document order and reads back the titles the
weaver rewrote.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

SOURCE = "source"
LISTING = "listing"


@dataclass(frozen=True)
class SourceLocation:
    """File name and 1-based line of the first content line of a block."""

    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass
class Block:
    """A listing handed over by the host document.

    ``kind`` is :data:`SOURCE` for formatted source blocks and
    :data:`LISTING` for raw listings. ``title`` names the chunk; the engine
    rewrites it only to expand an abbreviation. Navigation links go to
    ``navigation``, so building a database twice from the same blocks
    gives the same chunks.
    """

    id: str
    kind: str
    lines: List[str]
    location: SourceLocation
    title: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    navigation: str = ""

    @property
    def output(self) -> Optional[str]:
        return self.attributes.get("output")

    @property
    def language(self) -> Optional[str]:
        return self.attributes.get("language")

    @property
    def displayed_title(self) -> str:
        """Title followed by the navigation annotation, if any."""
        if not self.navigation:
            return self.title
        return f"{self.title} {self.navigation}" if self.title else self.navigation

    def __repr__(self) -> str:
        return f"Block(id={self.id!r}, kind={self.kind!r}, title={self.title!r}, at={self.location})"
