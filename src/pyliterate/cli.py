"""Command-line interface for pyliterate."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from pyliterate import __version__
from pyliterate.config import Config
from pyliterate.context import Context
from pyliterate.database import ChunkDatabase
from pyliterate.document import Document
from pyliterate.errors import LiterateError
from pyliterate.pipeline import tangle_documents, weave_document
from pyliterate.transaction import execute_transaction


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def get_context(args: argparse.Namespace) -> Context:
    """Create a Context from CLI options."""
    base_dir = args.directory or os.getcwd()

    if args.config:
        config = Config.from_file(args.config)
    else:
        config = Config.from_dir(base_dir)

    if getattr(args, "output_dir", None):
        config.output_dir = args.output_dir
    if getattr(args, "rename", None):
        config.output_rename = args.rename
    if getattr(args, "graph", False):
        config.graph = True

    return Context(config=config, base_dir=base_dir)


def cmd_tangle(args: argparse.Namespace) -> int:
    """Execute the tangle command."""
    try:
        context = get_context(args)
        transaction = tangle_documents(context, args.files or None)

        if transaction.is_empty():
            print("No files to tangle.", file=sys.stderr)
            return 0

        if args.dry_run:
            print(f"Would perform {len(transaction)} actions:")
            for desc in transaction.describe():
                print(f"  {desc}")
            return 0

        execute_transaction(transaction, context)
        return 0

    except (LiterateError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_weave(args: argparse.Namespace) -> int:
    """Execute the weave command."""
    try:
        context = get_context(args)
        document = Document.load(context.resolve_path(args.file))
        text, transaction = weave_document(document, context)
        execute_transaction(transaction, context)

        if args.output:
            with open(context.resolve_path(args.output), "w", encoding="utf-8") as f:
                f.write(text)
        else:
            sys.stdout.write(text)
        return 0

    except (LiterateError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_list(args: argparse.Namespace) -> int:
    """Execute the list command."""
    try:
        context = get_context(args)
        db = ChunkDatabase.build(Document.load(context.resolve_path(args.file)).blocks())

        print(f"Root chunks: {len(db.roots)}")
        for name in db.roots:
            print(f"  {name} ({len(db.block_list(name))} blocks)")

        print(f"\nChunks: {len(db.chunks)}")
        for name in db.chunks:
            print(f"  {name} ({len(db.block_list(name))} blocks)")

        undefined = [name for name in db.names if not db.is_defined(name)]
        if undefined:
            print(f"\nUndefined: {len(undefined)}")
            for name in undefined:
                print(f"  {name}")
        return 0

    except (LiterateError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def add_output_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-d", "--output-dir",
        metavar="DIR",
        help="Directory for tangled files",
    )
    parser.add_argument(
        "--rename",
        metavar="PAIRS",
        help="Output renames, e.g. 'main.c>a.out.c, util.c>lib.c'",
    )
    parser.add_argument(
        "--graph",
        action="store_true",
        help="Also write the chunk graph (Graphviz)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pyliterate",
        description="Literate programming: tangle and weave Markdown documents",
    )
    parser.add_argument(
        "-c", "--config",
        metavar="FILE",
        help="Configuration file path",
    )
    parser.add_argument(
        "-C", "--directory",
        metavar="DIR",
        help="Working directory",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # tangle
    p_tangle = subparsers.add_parser(
        "tangle",
        help="Write the root chunks of documents to files",
    )
    add_output_options(p_tangle)
    p_tangle.add_argument(
        "-n", "--dry-run",
        action="store_true",
        help="Show what would be done",
    )
    p_tangle.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Documents to tangle (default: all matching source-patterns)",
    )
    p_tangle.set_defaults(func=cmd_tangle)

    # weave
    p_weave = subparsers.add_parser(
        "weave",
        help="Tangle a document and write it with chunk navigation links",
    )
    add_output_options(p_weave)
    p_weave.add_argument(
        "-o", "--output",
        metavar="FILE",
        help="Woven document (default: stdout)",
    )
    p_weave.add_argument("file", metavar="FILE", help="Document to weave")
    p_weave.set_defaults(func=cmd_weave)

    # list
    p_list = subparsers.add_parser(
        "list",
        help="List the chunks of a document",
    )
    p_list.add_argument("file", metavar="FILE", help="Document to inspect")
    p_list.set_defaults(func=cmd_list)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
