"""Fetch command wiring for fetchkeep CLI."""

from __future__ import annotations

import argparse
from typing import Any

from core.types import FetchOptions
from store.dataset_sdk import FetchKeepClient


def add_fetch_command(subparsers: Any) -> None:
    """Register fetch subcommand."""
    parser = subparsers.add_parser(
        "fetch",
        help="Fetch a URL, file, or stdin into a dataset",
        description=(
            "Fetches a URL, file, or stdin and commits it to a dataset. "
            "URL fetches send the last stored ETag and skip the commit "
            "when the server answers 304 Not Modified."
        ),
    )
    parser.add_argument("--stdin", action="store_true", help="Read content from standard input")
    parser.add_argument(
        "--no-commit",
        dest="commit",
        action="store_false",
        help="Only write the content blob and print its hash",
    )
    parser.add_argument("source", nargs="?", help="Local file path or http(s) URL")
    parser.add_argument("destination", help="Dataset locator: <store-path>::<dataset> or <dataset>")


def run_fetch_command(client: FetchKeepClient, args: argparse.Namespace) -> int:
    """Execute one fetch and print its outcome line."""
    options = FetchOptions(
        destination=args.destination,
        source=args.source,
        use_stdin=args.stdin,
        commit=args.commit,
    )
    result = client.fetch(options)
    if result.status == "committed":
        print(f"committed {result.dataset_name} height={result.height} value={result.value_hash}")
    elif result.status == "unchanged":
        print(f"unchanged {result.dataset_name} height={result.height}")
    else:
        print(f"written #{result.value_hash}")
    return 0
