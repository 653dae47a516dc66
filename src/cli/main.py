"""Review ingest CLI entry points.
This module exposes replay, ingest, parse, and inventory commands.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
from pathlib import Path
from typing import Any, Sequence

from core.config import IngestConfig
from core.constants import SUPPORTED_IDENTIFIER_SCHEMES
from core.types import BatchSummary
from ingest.review_client import ReviewIngestClient, parse_local_file


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="review-ingest", description="Review ingest CLI")
    parser.add_argument("--table", help="Override REVIEW_INGEST_TABLE_NAME for this command")
    parser.add_argument(
        "--identifier-scheme",
        choices=SUPPORTED_IDENTIFIER_SCHEMES,
        help="Override REVIEW_INGEST_IDENTIFIER_SCHEME for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_replay_command(subparsers)
    _add_ingest_command(subparsers)
    _add_parse_command(subparsers)
    _add_inventory_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the review ingest CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    config = _build_config(args.table, args.identifier_scheme)
    if args.command == "parse":
        return _run_parse_command(config, args)
    if args.command == "replay":
        return _run_replay_command(ReviewIngestClient(config), args)
    if args.command == "ingest":
        return _run_ingest_command(ReviewIngestClient(config), args)
    if args.command == "inventory":
        return _run_inventory_command(ReviewIngestClient(config), args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(table: str | None, identifier_scheme: str | None) -> IngestConfig:
    """Build config with optional command-line overrides."""
    config = IngestConfig.from_env()
    if table:
        config = replace(config, table_name=table)
    if identifier_scheme:
        config = replace(config, identifier_scheme=identifier_scheme)
    return config


def _run_replay_command(client: ReviewIngestClient, args: argparse.Namespace) -> int:
    """Handle replay command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    event = json.loads(Path(args.event_file).read_text(encoding="utf-8"))
    summary = client.handle_event(event)
    return _print_summary(summary)


def _run_ingest_command(client: ReviewIngestClient, args: argparse.Namespace) -> int:
    """Handle ingest command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    summary = client.ingest_objects(args.uris)
    return _print_summary(summary)


def _run_parse_command(config: IngestConfig, args: argparse.Namespace) -> int:
    """Handle parse command."""
    outcome = parse_local_file(Path(args.file), config)
    for record in outcome.records:
        print(
            json.dumps(
                {
                    "name": record.name,
                    "price": str(record.price),
                    "comment": record.comment,
                    "rating": str(record.rating),
                },
                sort_keys=True,
            )
        )
    for skip in outcome.skipped:
        print(f"skipped\t{skip.position}\t{skip.reason.value}\t{skip.detail}")
    return 0


def _run_inventory_command(client: ReviewIngestClient, args: argparse.Namespace) -> int:
    """Handle inventory command."""
    counts = client.inventory(args.uri)
    for category, count in counts.items():
        print(f"{category}\t{count}")
    print(f"total\t{sum(counts.values())}")
    return 0


def _print_summary(summary: BatchSummary) -> int:
    print(summary.status_message())
    return 1 if summary.all_failed else 0


def _add_replay_command(subparsers: Any) -> None:
    """Register replay subcommand."""
    parser = subparsers.add_parser("replay", help="Process a saved S3 notification event")
    parser.add_argument("event_file", help="Path to an S3 event JSON document")


def _add_ingest_command(subparsers: Any) -> None:
    """Register ingest subcommand."""
    parser = subparsers.add_parser("ingest", help="Ingest existing S3 objects")
    parser.add_argument("uris", nargs="+", help="One or more s3://bucket/key URIs")


def _add_parse_command(subparsers: Any) -> None:
    """Register parse subcommand."""
    parser = subparsers.add_parser("parse", help="Parse a local review file without storing")
    parser.add_argument("file", help="Local .json or .txt review file")


def _add_inventory_command(subparsers: Any) -> None:
    """Register inventory subcommand."""
    parser = subparsers.add_parser("inventory", help="Count bucket objects per format")
    parser.add_argument("uri", help="s3://bucket or s3://bucket/prefix")
