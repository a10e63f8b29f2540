"""fetchkeep CLI entry points.
This module exposes commands for fetching content and reading datasets.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from cli.fetch_command import add_fetch_command, run_fetch_command
from core.config import FetchKeepConfig
from core.errors import FetchKeepError
from core.logging_config import get_logger
from store.dataset_sdk import FetchKeepClient

_LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="fetchkeep",
        description="Fetch content into versioned, content-addressed datasets",
    )
    parser.add_argument("--data-root", help="Override FETCHKEEP_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_fetch_command(subparsers)
    _add_log_command(subparsers)
    _add_cat_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the fetchkeep CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code: 0 on success, 1 on fetch or store failure.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.data_root)
        if args.command == "fetch":
            return run_fetch_command(client, args)
        if args.command == "log":
            return _run_log_command(client, args)
        if args.command == "cat":
            return _run_cat_command(client, args)
    except FetchKeepError as error:
        _LOGGER.error("fetch_failed", command=args.command, error_type=type(error).__name__)
        print(f"error: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(data_root: str | None) -> FetchKeepClient:
    """Build SDK client with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Configured SDK client.
    """
    config = FetchKeepConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return FetchKeepClient(config)


def _run_log_command(client: FetchKeepClient, args: argparse.Namespace) -> int:
    """Handle log command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    dataset = client.dataset(args.dataset)
    for commit in reversed(dataset.list_commits()):
        print(
            f"{commit.height}\t"
            f"{commit.commit_id}\t"
            f"{commit.value_hash}\t"
            f"{json.dumps(commit.meta.fields(), sort_keys=True)}"
        )
    return 0


def _run_cat_command(client: FetchKeepClient, args: argparse.Namespace) -> int:
    """Handle cat command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code, 1 when the dataset has no commits.
    """
    dataset = client.dataset(args.dataset)
    value = dataset.head_value()
    if value is None:
        print(f"error: dataset '{dataset.name}' has no commits", file=sys.stderr)
        return 1
    sys.stdout.buffer.write(value.data)
    sys.stdout.buffer.flush()
    return 0


def _add_log_command(subparsers: Any) -> None:
    """Register log subcommand."""
    parser = subparsers.add_parser("log", help="List dataset commits, head first")
    parser.add_argument("--dataset", required=True, help="Dataset locator")


def _add_cat_command(subparsers: Any) -> None:
    """Register cat subcommand."""
    parser = subparsers.add_parser("cat", help="Write the head value to stdout")
    parser.add_argument("--dataset", required=True, help="Dataset locator")
