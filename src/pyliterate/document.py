"""A minimal Markdown host for literate documents.

Chunks are fenced code blocks. The info string holds the language
followed by ``key=value`` attributes::

    ```c output=main.c
    <<Includes>>
    ```

    ```c title="Includes"
    #include <stdio.h>
    ```

A fence without a language is a raw listing; it defines chunks when its
first line is a ``<<name>>=`` header. Lines of the form ``:key: value``
at the top of the document are document attributes.
"""

from __future__ import annotations

import re
import shlex
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pyliterate.blocks import LISTING, SOURCE, Block, SourceLocation
from pyliterate.errors import DocumentError

FENCE = re.compile(r"^(`{3,}|~{3,})\s*(.*?)\s*$")
ATTRIBUTE = re.compile(r"^:([\w-]+):\s*(.*?)\s*$")


def _closes(line: str, marker: str) -> bool:
    text = line.rstrip()
    return text.startswith(marker) and not text.strip(marker[0])


def _parse_info(info: str, where: str) -> Tuple[Optional[str], Dict[str, str]]:
    try:
        tokens = shlex.split(info)
    except ValueError as e:
        raise DocumentError(f"{where}: bad block attributes {info!r}: {e}") from e
    language = None
    if tokens and "=" not in tokens[0]:
        language = tokens.pop(0)
    attributes = {}
    for token in tokens:
        key, sep, value = token.partition("=")
        if not sep:
            raise DocumentError(f"{where}: expected key=value, got {token!r}")
        attributes[key] = value
    return language, attributes


class Document:
    """A parsed Markdown document."""

    def __init__(self, lines: List[str], path: Optional[str] = None) -> None:
        self.path = path
        self._lines = lines
        self.attributes: Dict[str, str] = {}
        # (index of the opening fence line, block)
        self._blocks: List[Tuple[int, Block]] = []
        self._parse()

    @staticmethod
    def load(path: str) -> "Document":
        """Load a document from a file."""
        with open(path, encoding="utf-8") as f:
            return Document(f.read().splitlines(), path)

    @staticmethod
    def parse(content: str, path: Optional[str] = None) -> "Document":
        """Parse markdown content directly."""
        return Document(content.splitlines(), path)

    @property
    def base_name(self) -> str:
        return Path(self.path).stem if self.path else "document"

    def _parse(self) -> None:
        source = self.path or "<string>"
        header = True
        i = 0
        while i < len(self._lines):
            line = self._lines[i]
            if header:
                match = ATTRIBUTE.match(line)
                if match:
                    self.attributes[match.group(1)] = match.group(2)
                    i += 1
                    continue
                header = not line.strip()
            fence = FENCE.match(line)
            if fence is None:
                i += 1
                continue
            header = False
            marker = fence.group(1)
            end = i + 1
            while end < len(self._lines) and not _closes(self._lines[end], marker):
                end += 1
            if end == len(self._lines):
                raise DocumentError(f"{source}:{i + 1}: unterminated code block")
            language, attributes = _parse_info(fence.group(2), f"{source}:{i + 1}")
            if language is not None:
                attributes["language"] = language
            block = Block(
                id=attributes.pop("id", f"block-{len(self._blocks) + 1}"),
                kind=SOURCE if language else LISTING,
                lines=self._lines[i + 1 : end],
                location=SourceLocation(source, i + 2),
                title=attributes.pop("title", ""),
                attributes=attributes,
            )
            self._blocks.append((i, block))
            i = end + 1

    def blocks(self) -> List[Block]:
        """Get all code blocks."""
        return [block for _, block in self._blocks]

    def render(self) -> str:
        """The document text with an anchor before every block.

        Blocks with a displayed title get it in bold after the anchor.
        """
        starts = dict(self._blocks)
        out = []
        for i, line in enumerate(self._lines):
            block = starts.get(i)
            if block is not None:
                anchor = f'<a id="{block.id}"></a>'
                title = block.displayed_title
                out.append(f"{anchor}**{title}**" if title else anchor)
            out.append(line)
        return "\n".join(out) + "\n"

    def __len__(self) -> int:
        return len(self._blocks)

    def __repr__(self) -> str:
        return f"Document(path={self.path!r}, blocks={len(self._blocks)})"
