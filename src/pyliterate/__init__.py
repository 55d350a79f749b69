"""pyliterate - Literate Programming Engine.

Chunks of source are written in a Markdown document in whatever order
reads best. Tangling expands the root chunks into source files; weaving
adds navigation links between the blocks of a chunk and the places that
use it, and optionally a Graphviz graph of all chunks.

Example:
    >>> from pyliterate import Context, tangle_documents, execute_transaction
    >>> ctx = Context.from_current_dir()
    >>> tx = tangle_documents(ctx)
    >>> if not tx.is_empty():
    ...     execute_transaction(tx, ctx)
"""

__version__ = "0.1.0"

from pyliterate.blocks import Block, SourceLocation
from pyliterate.config import Config
from pyliterate.context import Context
from pyliterate.database import ChunkDatabase
from pyliterate.document import Document
from pyliterate.errors import LiterateError
from pyliterate.pipeline import (
    process_document,
    tangle_documents,
    tangle_ref,
    weave_document,
)
from pyliterate.router import OutputRouter
from pyliterate.tangle import Tangler
from pyliterate.titles import resolve
from pyliterate.transaction import Transaction, execute_transaction
from pyliterate.weave import Weaver

__all__ = [
    "Block",
    "SourceLocation",
    "Config",
    "Context",
    "ChunkDatabase",
    "Document",
    "LiterateError",
    "OutputRouter",
    "Tangler",
    "Transaction",
    "Weaver",
    "execute_transaction",
    "process_document",
    "resolve",
    "tangle_documents",
    "tangle_ref",
    "weave_document",
    "main",
]


def main() -> int:
    """CLI entry point."""
    from pyliterate.cli import main as cli_main
    return cli_main()
