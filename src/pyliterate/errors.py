"""Exceptions raised by the literate programming engine.

Every fatal condition derives from :class:`LiterateError` and from the
closest builtin exception, so ``except ValueError`` keeps working for
callers that do not know about this module.
"""

from __future__ import annotations

from typing import Sequence


class LiterateError(Exception):
    """Base class for all engine errors."""


class ChunkNotFoundError(LiterateError, ValueError):
    """An abbreviated title matches no known chunk."""

    def __init__(self, title: str) -> None:
        super().__init__(f"No chunk {title}")
        self.title = title


class AmbiguousTitleError(LiterateError, ValueError):
    """An abbreviated title matches more than one known chunk."""

    def __init__(self, title: str, candidates: Sequence[str]) -> None:
        super().__init__(
            f"Chunk title {title} is not unique: " + ", ".join(candidates)
        )
        self.title = title
        self.candidates = list(candidates)


class DuplicateRootError(LiterateError, ValueError):
    """Two blocks bind the same output name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate root chunk for {name}")
        self.name = name


class ChunkKindError(LiterateError, ValueError):
    """A root chunk name is reused for an ordinary chunk, or vice versa."""

    def __init__(self, name: str, is_root: bool) -> None:
        kind = "root" if is_root else "ordinary"
        super().__init__(f"Chunk {name} was already declared as {kind} chunk")
        self.name = name


class ChunkCycleError(LiterateError, RuntimeError):
    """A chunk (transitively) includes itself."""

    def __init__(self, name: str, stack: Sequence[str]) -> None:
        path = " -> ".join([*stack, name])
        super().__init__(f"Recursive reference to {name}: {path}")
        self.name = name
        self.stack = list(stack)


class UndefinedChunkError(LiterateError, ValueError):
    """A reference names a chunk that no block defines."""

    def __init__(self, name: str, referrer: str) -> None:
        super().__init__(f"Found reference to undefined chunk {name} in {referrer}")
        self.name = name
        self.referrer = referrer


class OutputCollisionError(LiterateError, ValueError):
    """An output rename clashes with another root or rename target."""


class InvalidElementError(LiterateError, TypeError):
    """A chunk holds something that is not a chunk element."""

    def __init__(self, element: object) -> None:
        super().__init__(f"Unknown chunk element {element!r}")
        self.element = element


class ConfigError(LiterateError, ValueError):
    """Invalid configuration value or file."""


class DocumentError(LiterateError, ValueError):
    """Malformed host document."""
