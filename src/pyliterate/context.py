"""Run context: configuration, base directory and the primary output stream."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from pyliterate.config import Config


class Context:
    """Context for pyliterate operations."""

    def __init__(
        self,
        config: Optional[Config] = None,
        base_dir: Optional[str] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        self.base_dir = base_dir or os.getcwd()
        self.config = config if config is not None else Config.from_dir(self.base_dir)
        self._stream = stream

    @staticmethod
    def from_current_dir() -> "Context":
        return Context()

    @staticmethod
    def default_for_dir(path: str) -> "Context":
        """Create context with default config for a specific directory."""
        return Context(config=Config(), base_dir=path)

    @property
    def stream(self) -> TextIO:
        """Where the ``*`` root is written (stdout unless given)."""
        return self._stream if self._stream is not None else sys.stdout

    def resolve_path(self, path: str) -> str:
        return str(Path(self.base_dir) / path)

    def output_dir(self, config: Optional[Config] = None) -> Path:
        return Path(self.resolve_path((config or self.config).output_dir))

    def source_files(self) -> List[str]:
        """Source documents matching the configured patterns, sorted."""
        base = Path(self.base_dir)
        found = set()
        for pattern in self.config.source_patterns:
            for path in base.glob(pattern):
                if path.is_file():
                    found.add(str(path))
        return sorted(found)

    def __repr__(self) -> str:
        return f"Context(base_dir={self.base_dir!r}, config={self.config!r})"
