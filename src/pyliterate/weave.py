"""Cross references between chunk blocks, and the chunk graph."""

from __future__ import annotations

import logging
import textwrap
from dataclasses import dataclass
from typing import Dict, List, Tuple

from pyliterate.blocks import Block
from pyliterate.database import BackReference, ChunkDatabase

logger = logging.getLogger(__name__)

UP = "up"
PREV = "prev"
NEXT = "next"

ARROWS = {UP: "↑", PREV: "←", NEXT: "→"}

GRAPH_SUFFIX = "-lp.dot"
LABEL_WIDTH = 20
# port of a graph node standing for the chunk as a whole
ALL_PORT = "all"


@dataclass(frozen=True)
class NavLink:
    """A link from a chunk block to the block with id ``anchor``."""

    kind: str
    anchor: str
    label: str


def _escape_markdown(text: str) -> str:
    return text.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")


def render_links(links: List[NavLink]) -> str:
    """Render links as one right aligned inline annotation."""
    parts = []
    for link in links:
        text = f"{ARROWS[link.kind]} {link.label}" if link.kind == UP else ARROWS[link.kind]
        parts.append(f"[{_escape_markdown(text)}](#{link.anchor})")
    return '<span class="right">' + " ".join(parts) + "</span>"


def _escape_record(text: str) -> str:
    for char in '\\"{}|<>':
        text = text.replace(char, "\\" + char)
    return text


def wrap_label(text: str, width: int = LABEL_WIDTH) -> str:
    """Word wrap ``text`` into a record field, one ``\\n`` per line break."""
    lines = textwrap.wrap(text, width) or [""]
    return "\\n".join(_escape_record(line) for line in lines)


class Weaver:
    """Navigation links for chunk blocks and the graph of all chunks."""

    def __init__(self, db: ChunkDatabase) -> None:
        self.db = db

    def uplink(self, ref: BackReference) -> NavLink:
        """Link to the block whose reference produced ``ref``."""
        includer = self.db.block_list(ref.source)
        label = ref.source if len(includer) == 1 else f"{ref.source} ({ref.index + 1})"
        return NavLink(UP, includer[ref.index].id, label)

    def links_for(self, name: str, index: int) -> List[NavLink]:
        """Links of the ``index``-th block of chunk ``name``.

        Uplinks come first in the order the references were recorded,
        then the previous and next block of the same chunk.
        """
        blocks = self.db.block_list(name)
        links = [self.uplink(ref) for ref in self.db.references_to(name)]
        if index > 0:
            links.append(NavLink(PREV, blocks[index - 1].id, "previous"))
        if index < len(blocks) - 1:
            links.append(NavLink(NEXT, blocks[index + 1].id, "next"))
        return links

    def annotate(self) -> int:
        """Set the navigation annotation of every linked block.

        A raw listing that feeds several chunks gets the links of all of
        them, in chunk order. Returns the number of blocks annotated.
        """
        # keyed by object id, one block may sit in several block lists
        collected: Dict[int, Tuple[Block, List[NavLink]]] = {}
        for name in self.db.names:
            for index, block in enumerate(self.db.block_list(name)):
                links = self.links_for(name, index)
                if links:
                    collected.setdefault(id(block), (block, []))[1].extend(links)
        for block, links in collected.values():
            block.navigation = render_links(links)
        logger.debug("Added navigation links to %d blocks", len(collected))
        return len(collected)

    def graph(self, title: str = "chunks") -> str:
        """Graphviz description of the chunks and their references."""
        ids: Dict[str, str] = {name: f"chunk{i}" for i, name in enumerate(self.db.names)}
        out = [f'digraph "{_escape_record(title)}" {{', "  node [shape=record];"]

        for name, node in ids.items():
            blocks = self.db.block_list(name)
            fields = [f"<{ALL_PORT}> {wrap_label(name)}"]
            if len(blocks) > 1:
                fields += [f"<b{i}> {i + 1}" for i in range(len(blocks))]
            attrs = [f'label="{"|".join(fields)}"']
            if self.db.is_root(name):
                attrs.append("style=bold")
            elif not self.db.is_defined(name):
                attrs.append("style=dashed")
            out.append(f"  {node} [{', '.join(attrs)}];")

        for ref in self.db.references:
            count = len(self.db.block_list(ref.target))
            port = f"b{ref.index}" if 1 < count and ref.index < count else ALL_PORT
            out.append(f"  {ids[ref.source]}:{ALL_PORT} -> {ids[ref.target]}:{port};")

        out.append("}")
        return "\n".join(out) + "\n"
