"""The chunk database: every chunk of one document, built in one pass."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from pyliterate.blocks import LISTING, SOURCE, Block, SourceLocation
from pyliterate.errors import ChunkKindError, DuplicateRootError
from pyliterate.titles import parse_header, parse_reference, resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextLine:
    """A line of chunk text.

    Reference lines carry the resolved ``target`` name and the leading
    whitespace of the reference; other lines have ``target`` None.
    """

    text: str
    target: Optional[str] = None
    indent: str = ""


@dataclass(frozen=True)
class PositionMarker:
    """Source coordinates of the text lines that follow."""

    file: str
    line: int


@dataclass(frozen=True)
class LanguageMarker:
    """Selects the line directive template for the text lines that follow."""

    language: str


Element = Union[TextLine, PositionMarker, LanguageMarker]


@dataclass(frozen=True)
class BackReference:
    """Chunk ``source`` (its block number ``index``) references ``target``."""

    source: str
    index: int
    target: str


# (name, is_root, lines, location) for one chunk contribution of a block
Contribution = Tuple[str, bool, Sequence[str], SourceLocation]


class ChunkDatabase:
    """Chunks, root chunks, block lists and back references of one run.

    Root chunks (bound to an output) and ordinary chunks (included by
    reference) live in separate namespaces; a name keeps the kind it was
    first declared with.
    """

    def __init__(self) -> None:
        self._chunks: Dict[str, List[Element]] = {}
        self._roots: Dict[str, List[Element]] = {}
        # insertion ordered set of every name defined or referenced so far
        self._names: Dict[str, None] = {}
        self._blocks: Dict[str, List[Block]] = {}
        self._references: List[BackReference] = []

    @classmethod
    def build(cls, blocks: Iterable[Block]) -> "ChunkDatabase":
        db = cls()
        for block in blocks:
            db.add_block(block)
        return db

    def add_block(self, block: Block) -> None:
        """Add the chunk contributions of ``block``; other blocks are ignored."""
        for name, is_root, lines, location in self._contributions(block):
            self._contribute(block, name, is_root, lines, location)

    def _contributions(self, block: Block) -> Iterator[Contribution]:
        if block.kind == SOURCE:
            if block.output is not None:
                yield block.output, True, block.lines, block.location
            elif block.title:
                name = resolve(block.title, self._names)
                if name != block.title:
                    logger.debug("Expanded chunk title %r to %r", block.title, name)
                    block.title = name
                yield name, False, block.lines, block.location
        elif block.kind == LISTING and block.lines and parse_header(block.lines[0]) is not None:
            yield from self._segments(block)

    def _segments(self, block: Block) -> Iterator[Contribution]:
        # lazily, so each header resolves against the names of the segments before it
        start = 0
        for offset in range(1, len(block.lines) + 1):
            if offset < len(block.lines) and parse_header(block.lines[offset]) is None:
                continue
            title = parse_header(block.lines[start])
            location = SourceLocation(block.location.file, block.location.line + start + 1)
            lines = block.lines[start + 1 : offset]
            if " " in title:
                yield resolve(title, self._names), False, lines, location
            else:
                yield title, True, lines, location
            start = offset

    def _contribute(
        self,
        block: Block,
        name: str,
        is_root: bool,
        lines: Sequence[str],
        location: SourceLocation,
    ) -> None:
        if is_root:
            if name in self._roots:
                raise DuplicateRootError(name)
            if name in self._chunks:
                raise ChunkKindError(name, is_root=False)
            elements = self._roots[name] = []
        else:
            if name in self._roots:
                raise ChunkKindError(name, is_root=True)
            elements = self._chunks.setdefault(name, [])
        self._names.setdefault(name)

        if block.language:
            elements.append(LanguageMarker(block.language))
        elements.append(PositionMarker(location.file, location.line))

        index = len(self._blocks.get(name, ()))
        for line in lines:
            reference = parse_reference(line)
            if reference is None:
                elements.append(TextLine(line))
                continue
            title, indent = reference
            target = resolve(title, self._names)
            self._names.setdefault(target)
            self._references.append(BackReference(name, index, target))
            elements.append(TextLine(line, target, indent))

        self._blocks.setdefault(name, []).append(block)
        logger.debug(
            "Added %d lines to %s chunk %r from %s",
            len(lines), "root" if is_root else "ordinary", name, location,
        )

    @property
    def names(self) -> List[str]:
        """Every chunk name defined or referenced, in order of first sight."""
        return list(self._names)

    @property
    def roots(self) -> List[str]:
        return list(self._roots)

    @property
    def chunks(self) -> List[str]:
        return list(self._chunks)

    @property
    def references(self) -> List[BackReference]:
        return list(self._references)

    def is_root(self, name: str) -> bool:
        return name in self._roots

    def is_defined(self, name: str) -> bool:
        return name in self._roots or name in self._chunks

    def root(self, name: str) -> Optional[List[Element]]:
        return self._roots.get(name)

    def chunk(self, name: str) -> Optional[List[Element]]:
        return self._chunks.get(name)

    def block_list(self, name: str) -> List[Block]:
        return list(self._blocks.get(name, ()))

    def references_to(self, name: str) -> List[BackReference]:
        return [ref for ref in self._references if ref.target == name]

    def __len__(self) -> int:
        return len(self._roots) + len(self._chunks)

    def __repr__(self) -> str:
        return f"ChunkDatabase(roots={len(self._roots)}, chunks={len(self._chunks)}, references={len(self._references)})"
