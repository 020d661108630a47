"""Entry point: python -m insertive"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from insertive import __version__
from insertive.app import Insertive
from insertive.config import AppConfig
from insertive.constants import DEFAULT_ICON, LOG_FORMAT
from insertive.errors import SnippetError
from insertive.features.menu import render_text
from insertive.features.search import preview, search


def setup_logging(verbosity: int = 0) -> None:
    """Configure logging on stderr with rich handler if available."""
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)

    try:
        from rich.console import Console
        from rich.logging import RichHandler

        logging.basicConfig(
            level=level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        )
    except ImportError:
        logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="insertive",
        description="Named text snippets with {1}, {2}... placeholders for selected text",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)"
    )
    parser.add_argument("--version", action="version", version=f"insertive {__version__}")
    parser.add_argument("--config", type=str, default=None, help="Path to config file")
    parser.add_argument("--store", type=str, default=None, help="Path to snippets file")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="List snippets in order")
    p.add_argument("--group", default=None, help="Only snippets in this group")

    p = sub.add_parser("show", help="Print a snippet's text")
    p.add_argument("key")

    p = sub.add_parser("add", help="Add a snippet")
    p.add_argument("key")
    p.add_argument("text")
    p.add_argument("--icon", default=DEFAULT_ICON)
    p.add_argument("--group", default="")
    p.add_argument("--force", action="store_true", help="Overwrite an existing snippet")

    p = sub.add_parser("edit", help="Edit or rename a snippet")
    p.add_argument("key")
    p.add_argument("--key", dest="new_key", default=None, help="New key")
    p.add_argument("--text", default=None)
    p.add_argument("--icon", default=None)
    p.add_argument("--group", default=None)

    p = sub.add_parser("remove", help="Delete a snippet")
    p.add_argument("key")

    p = sub.add_parser("move", help="Move a snippet to another position (0-based)")
    p.add_argument("from_index", type=int)
    p.add_argument("to_index", type=int)

    p = sub.add_parser("search", help="Find snippets by key")
    p.add_argument("query", nargs="?", default="")

    p = sub.add_parser("insert", help="Apply a snippet to the selection read from stdin")
    p.add_argument("key")
    p.add_argument("--selection", default=None, help="Selection text instead of stdin")

    sub.add_parser("menu", help="Print the snippet menu")

    p = sub.add_parser("serve", help="Run the dashboard API")
    p.add_argument("--host", default=None)
    p.add_argument("--port", type=int, default=None)

    return parser.parse_args(argv)


async def run_command(args: argparse.Namespace, insertive: Insertive) -> int:
    """Run one CLI command against a set-up application."""
    repo = insertive.repository
    preview_length = insertive.config.menu.preview_length

    if args.command == "list":
        for index, (key, record) in enumerate(repo.list()):
            if args.group is not None and record.group != args.group:
                continue
            group = f" <{record.group}>" if record.group else ""
            text = preview(record.text, preview_length).replace("\n", "\\n")
            print(f"  [{index}] {key}{group} ({record.icon}): {text}")
        if len(repo) == 0:
            print("No snippets configured yet.")
    elif args.command == "show":
        print(repo.get(args.key).text)
    elif args.command == "add":
        if args.force:
            await repo.overwrite(args.key, args.text, icon=args.icon, group=args.group)
        else:
            await repo.add(args.key, args.text, icon=args.icon, group=args.group)
        print(f"Added snippet: {args.key}")
    elif args.command == "edit":
        record = await repo.update(
            args.key, new_key=args.new_key, text=args.text, icon=args.icon, group=args.group
        )
        print(f"Updated snippet: {record.key}")
    elif args.command == "remove":
        await repo.delete(args.key)
        print(f"Deleted snippet: {args.key}")
    elif args.command == "move":
        await repo.reorder(args.from_index, args.to_index)
        print("Order: " + ", ".join(repo.keys()))
    elif args.command == "search":
        for record in search(repo.list(), args.query):
            text = preview(record.text).replace("\n", " ")
            print(f"  {record.key}: {text}")
    elif args.command == "insert":
        selection = args.selection
        if selection is None and not sys.stdin.isatty():
            selection = sys.stdin.read()
        sys.stdout.write(insertive.insert(args.key, selection))
    elif args.command == "menu":
        print("\n".join(render_text(insertive.menu())))
    return 0


async def _run(args: argparse.Namespace, insertive: Insertive) -> int:
    await insertive.setup()
    try:
        return await run_command(args, insertive)
    finally:
        insertive.stop()


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)
    logger = logging.getLogger("insertive")

    config = AppConfig.load(Path(args.config) if args.config else None)
    if args.store:
        config.store.path = args.store

    insertive = Insertive(config=config)

    if args.command == "serve":
        if not config.web.enabled:
            print("Error: dashboard API is disabled ([web] enabled = false)", file=sys.stderr)
            return 1

        from insertive.web.server import run_server

        run_server(
            insertive,
            host=args.host or config.web.host,
            port=args.port or config.web.port,
        )
        return 0

    try:
        return asyncio.run(_run(args, insertive))
    except SnippetError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
