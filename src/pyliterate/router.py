"""Map root chunk names to output files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from pyliterate.errors import OutputCollisionError

logger = logging.getLogger(__name__)

# root name that goes to the primary output stream
STREAM = "*"
PAIR_SEPARATOR = ","
RENAME_MARK = ">"


def parse_renames(text: str) -> List[Tuple[str, str]]:
    """Split ``"a>b, c>d"`` into ``[("a", "b"), ("c", "d")]``.

    Entries without a ``>`` come back with an empty target so the router
    can report them.
    """
    pairs = []
    for item in text.split(PAIR_SEPARATOR):
        if not item.strip():
            continue
        name, _, target = item.partition(RENAME_MARK)
        pairs.append((name.strip(), target.strip()))
    return pairs


class OutputRouter:
    """Resolves each root chunk to a file below ``output_dir`` or the stream."""

    def __init__(
        self,
        roots: Iterable[str],
        renames: Iterable[Tuple[str, str]] = (),
        output_dir: Path = Path("."),
    ) -> None:
        self.roots = list(roots)
        self.output_dir = Path(output_dir)
        self.renames = self._check(renames)

    @classmethod
    def from_string(cls, roots: Iterable[str], text: str, output_dir: Path = Path(".")) -> "OutputRouter":
        return cls(roots, parse_renames(text), output_dir)

    def _check(self, renames: Iterable[Tuple[str, str]]) -> Dict[str, str]:
        known = set(self.roots)
        result: Dict[str, str] = {}
        targets: Dict[str, str] = {}
        for name, target in renames:
            if not name or not target:
                logger.warning("Ignoring incomplete output rename %r>%r", name, target)
                continue
            if name not in known:
                logger.warning("Ignoring output rename of unknown root chunk %r", name)
                continue
            if name in result:
                raise OutputCollisionError(f"Cannot rename {name} to {target}: already renamed to {result[name]}")
            if target != name and target in known:
                raise OutputCollisionError(f"Cannot rename {name} to {target}: {target} is another root chunk")
            if target in targets:
                raise OutputCollisionError(
                    f"Cannot rename {name} to {target}: {targets[target]} is already renamed to it"
                )
            targets[target] = name
            result[name] = target
        return result

    def output_name(self, root: str) -> str:
        return self.renames.get(root, root)

    def destination(self, root: str) -> Optional[Path]:
        """File for ``root``, or None when it goes to the primary stream."""
        name = self.output_name(root)
        if name == STREAM:
            return None
        return self.output_dir / name

    def __repr__(self) -> str:
        return f"OutputRouter(roots={self.roots!r}, renames={self.renames!r}, output_dir={str(self.output_dir)!r})"
