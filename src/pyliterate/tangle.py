"""Recursive expansion of chunks into source text."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import List, Optional, TextIO, Tuple

from pyliterate.config import Config
from pyliterate.database import ChunkDatabase, Element, LanguageMarker, PositionMarker, TextLine
from pyliterate.errors import ChunkCycleError, InvalidElementError, UndefinedChunkError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """Expansion context of one chunk invocation.

    A callee gets its own frame, so returning from a reference restores
    the caller's indent and line template without any bookkeeping.
    """

    indent: str = ""
    template: str = ""
    stack: Tuple[str, ...] = ()


class Tangler:
    """Expands root chunks of a :class:`ChunkDatabase`."""

    def __init__(self, db: ChunkDatabase, config: Optional[Config] = None) -> None:
        self.db = db
        self.config = config if config is not None else Config()

    def tangle(self, root: str, annotate: bool = True) -> str:
        """Return the expanded text of root chunk ``root``.

        Without ``annotate`` no line directives are written.
        """
        elements = self.db.root(root)
        if elements is None:
            raise UndefinedChunkError(root, "<roots>")
        logger.debug("Tangling root chunk %r", root)
        return self._run(root, elements, annotate)

    def tangle_chunk(self, name: str, annotate: bool = True) -> str:
        """Return the expansion of the ordinary chunk ``name``."""
        elements = self.db.chunk(name)
        if elements is None:
            raise UndefinedChunkError(name, "<request>")
        return self._run(name, elements, annotate)

    def _run(self, name: str, elements: List[Element], annotate: bool) -> str:
        sink = io.StringIO()
        frame = Frame(template=self.config.line_template if annotate else "")
        self.expand(sink, name, elements, frame, annotate)
        return sink.getvalue()

    def expand(
        self,
        sink: TextIO,
        name: str,
        elements: List[Element],
        frame: Frame,
        annotate: bool = True,
    ) -> None:
        """Write chunk ``name`` to ``sink``, expanding references depth first."""
        if name in frame.stack:
            raise ChunkCycleError(name, frame.stack)
        stack = frame.stack + (name,)
        template = frame.template
        file: Optional[str] = None
        lineno = 0

        for element in elements:
            if isinstance(element, LanguageMarker):
                if annotate:
                    template = self.config.template_for(element.language)
            elif isinstance(element, PositionMarker):
                file, lineno = element.file, element.line
                self._directive(sink, template, file, lineno)
            elif isinstance(element, TextLine):
                lineno += 1
                if element.target is not None:
                    target = self.db.chunk(element.target)
                    if target is None:
                        raise UndefinedChunkError(element.target, name)
                    callee = Frame(frame.indent + element.indent, template, stack)
                    self.expand(sink, element.target, target, callee, annotate)
                    if file is not None:
                        self._directive(sink, template, file, lineno)
                elif element.text:
                    sink.write(frame.indent + element.text + "\n")
                else:
                    sink.write("\n")
            else:
                raise InvalidElementError(element)

    @staticmethod
    def _directive(sink: TextIO, template: str, file: str, lineno: int) -> None:
        if template:
            sink.write(template.format(lineno=lineno, file=file) + "\n")
