"""Pending output actions, executed only once a whole document succeeded."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Union

from pyliterate.context import Context

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteFile:
    path: Path
    content: str

    def describe(self) -> str:
        return f"write {self.path}"


@dataclass(frozen=True)
class WriteStream:
    content: str

    def describe(self) -> str:
        return "write <stdout>"


Action = Union[WriteFile, WriteStream]


class Transaction:
    """A transaction representing pending file operations."""

    def __init__(self) -> None:
        self._actions: List[Action] = []

    def add(self, action: Action) -> None:
        self._actions.append(action)

    def extend(self, other: "Transaction") -> None:
        self._actions.extend(other)

    def is_empty(self) -> bool:
        return not self._actions

    def describe(self) -> List[str]:
        """Get descriptions of all actions."""
        return [action.describe() for action in self._actions]

    def __iter__(self) -> Iterator[Action]:
        return iter(self._actions)

    def __len__(self) -> int:
        return len(self._actions)

    def __repr__(self) -> str:
        return f"Transaction(actions={len(self._actions)})"


def execute_transaction(transaction: Transaction, ctx: Context) -> None:
    """Write every action of ``transaction``.

    Each file is opened (truncated) for its own write only; missing
    directories are created.
    """
    for action in transaction:
        if isinstance(action, WriteStream):
            ctx.stream.write(action.content)
            ctx.stream.flush()
            continue
        action.path.parent.mkdir(parents=True, exist_ok=True)
        with open(action.path, "w", encoding="utf-8") as f:
            f.write(action.content)
        logger.info("Wrote %s", action.path)
