"""Build, tangle and weave documents."""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from pyliterate.config import Config
from pyliterate.context import Context
from pyliterate.database import ChunkDatabase
from pyliterate.document import Document
from pyliterate.router import OutputRouter
from pyliterate.tangle import Tangler
from pyliterate.titles import resolve
from pyliterate.transaction import Transaction, WriteFile, WriteStream
from pyliterate.weave import GRAPH_SUFFIX, Weaver

logger = logging.getLogger(__name__)


def document_config(doc: Document, ctx: Context) -> Config:
    """The context configuration overridden by the document attributes."""
    return ctx.config.copy().update(doc.attributes, strict=False)


def process_document(doc: Document, ctx: Context) -> Transaction:
    """Tangle and weave one document.

    Block titles of ``doc`` get their navigation links; the returned
    transaction holds the tangled files (and the graph, if enabled).
    Nothing is written if any chunk fails to expand.
    """
    config = document_config(doc, ctx)
    db = ChunkDatabase.build(doc.blocks())
    output_dir = ctx.output_dir(config)
    router = OutputRouter.from_string(db.roots, config.output_rename, output_dir)

    transaction = Transaction()
    tangler = Tangler(db, config)
    for root in db.roots:
        content = tangler.tangle(root)
        destination = router.destination(root)
        if destination is None:
            transaction.add(WriteStream(content))
        else:
            transaction.add(WriteFile(destination, content))

    weaver = Weaver(db)
    weaver.annotate()
    if config.graph:
        path = output_dir / (doc.base_name + GRAPH_SUFFIX)
        transaction.add(WriteFile(path, weaver.graph(doc.base_name)))

    logger.info(
        "%s: %d root chunks, %d chunks, %d references",
        doc.path or "<string>", len(db.roots), len(db.chunks), len(db.references),
    )
    return transaction


def weave_document(doc: Document, ctx: Context) -> Tuple[str, Transaction]:
    """Process ``doc`` and return its woven text with the pending writes."""
    transaction = process_document(doc, ctx)
    return doc.render(), transaction


def tangle_documents(ctx: Context, files: Optional[Sequence[str]] = None) -> Transaction:
    """Tangle ``files`` (default: all source files of the context).

    Relative paths are taken from the context base directory.

    Each document is a separate run; chunks are never shared between
    documents.
    """
    paths = ctx.source_files() if files is None else list(files)
    transaction = Transaction()
    for path in paths:
        transaction.extend(process_document(Document.load(ctx.resolve_path(path)), ctx))
    return transaction


def tangle_ref(doc: Document, name: str, annotate: bool = True, config: Optional[Config] = None) -> str:
    """Tangle one chunk of ``doc`` (root or ordinary) to a string."""
    db = ChunkDatabase.build(doc.blocks())
    tangler = Tangler(db, config)
    full = resolve(name, db.names)
    if db.is_root(full):
        return tangler.tangle(full, annotate=annotate)
    return tangler.tangle_chunk(full, annotate=annotate)
