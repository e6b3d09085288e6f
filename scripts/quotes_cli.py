#!/usr/bin/env python3
"""Command-line access to the local quote collection.

Usage
-----
Optionally point at another endpoint or data directory::

    export QUOTESYNC_BASE_URL="https://example.com/quotes"
    export QUOTESYNC_DATA_DIR="$HOME/.quotesync"

Then::

    python scripts/quotes_cli.py show [--category Life]
    python scripts/quotes_cli.py add "Stay hungry, stay foolish." Life
    python scripts/quotes_cli.py categories
    python scripts/quotes_cli.py sync
    python scripts/quotes_cli.py export --output quotes.json
    python scripts/quotes_cli.py import quotes.json
    python scripts/quotes_cli.py watch      # periodic sync until Ctrl-C

Options::

    -v / --verbose       Enable DEBUG logging
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from quotesync import (  # noqa: E402
    ImportFormatError,
    QuoteApp,
    QuoteSyncConfig,
    QuoteValidationError,
)
from quotesync.models import QuoteRecord  # noqa: E402


def _format_quote(quote: QuoteRecord) -> str:
    return f'{quote.category}: "{quote.text}"'


async def _cmd_show(app: QuoteApp, args: argparse.Namespace) -> int:
    if args.category is not None:
        app.select_category(args.category)
    quote = app.show_random_quote()
    if quote is None:
        print("No quotes available for this category.")
        return 1
    print(_format_quote(quote))
    return 0


async def _cmd_add(app: QuoteApp, args: argparse.Namespace) -> int:
    try:
        quote = await app.add_quote(args.text, args.category)
    except QuoteValidationError as exc:
        print(exc, file=sys.stderr)
        return 2
    print(f"Added: {_format_quote(quote)}")
    results = await app.wait_for_pushes()
    for result in results:
        if not result.ok:
            print("Quote saved locally; the server could not be reached.", file=sys.stderr)
    return 0


async def _cmd_categories(app: QuoteApp, _args: argparse.Namespace) -> int:
    selected = app.selected_category
    for category in ["all", *app.categories()]:
        marker = "*" if category == selected else " "
        print(f"{marker} {category}")
    return 0


async def _cmd_sync(app: QuoteApp, _args: argparse.Namespace) -> int:
    result = await app.sync_now()
    if result is None:
        print("Server unavailable; local quotes unchanged.", file=sys.stderr)
        return 1
    print(f"Sync finished: {result.summary()}")
    return 0


async def _cmd_export(app: QuoteApp, args: argparse.Namespace) -> int:
    text = app.export_json()
    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
        print(f"Exported {len(app.quotes)} quotes to {args.output}")
    else:
        print(text)
    return 0


async def _cmd_import(app: QuoteApp, args: argparse.Namespace) -> int:
    try:
        records = await app.import_json(Path(args.file).read_bytes())
    except ImportFormatError as exc:
        print(f"Import failed: {exc}", file=sys.stderr)
        return 2
    print(f"Imported {len(records)} quotes.")
    return 0


async def _cmd_watch(app: QuoteApp, _args: argparse.Namespace) -> int:
    scheduler = app.scheduler
    if scheduler is None:
        return 1
    scheduler.start()
    print(f"Syncing every {scheduler.interval:.0f}s, press Ctrl-C to stop.")
    seen = app.refresh_count
    while True:
        await asyncio.sleep(1)
        if app.refresh_count != seen:
            seen = app.refresh_count
            notice = app.notice
            if notice is not None:
                print(notice.message)


_COMMANDS = {
    "show": _cmd_show,
    "add": _cmd_add,
    "categories": _cmd_categories,
    "sync": _cmd_sync,
    "export": _cmd_export,
    "import": _cmd_import,
    "watch": _cmd_watch,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage the local quote collection")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")
    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Show a random quote")
    show.add_argument("--category", help="Filter by category ('all' for no filter); remembered")

    add = sub.add_parser("add", help="Add a quote and push it to the server")
    add.add_argument("text")
    add.add_argument("category")

    sub.add_parser("categories", help="List categories")
    sub.add_parser("sync", help="Run one sync cycle")

    export = sub.add_parser("export", help="Export quotes as JSON")
    export.add_argument("--output", help="Write to this file instead of stdout")

    imp = sub.add_parser("import", help="Import quotes from a JSON file")
    imp.add_argument("file")

    sub.add_parser("watch", help="Sync periodically until interrupted")
    return parser


async def _async_main(args: argparse.Namespace) -> int:
    config = QuoteSyncConfig.from_env(sync_enabled=False)
    async with QuoteApp(config) as app:
        return await _COMMANDS[args.command](app, args)


def main() -> int:
    args = _build_parser().parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_async_main(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
