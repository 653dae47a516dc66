"""Unit tests for CLI command handling."""

from __future__ import annotations

import json

import pytest

from cli.main import main
from ingest.review_client import ReviewIngestClient
from tests.fakes import InMemoryObjectReader, InMemoryRecordStore
from tests.fixture_paths import fixture_bytes, fixture_path


@pytest.fixture
def store(monkeypatch: pytest.MonkeyPatch) -> InMemoryRecordStore:
    """Route CLI commands to in-memory collaborators."""
    record_store = InMemoryRecordStore()
    reader = InMemoryObjectReader(
        {
            ("review-uploads", "incoming/store reviews.json"): fixture_bytes("reviews.json"),
            ("review-uploads", "incoming/reviews.txt"): fixture_bytes("reviews.txt"),
            ("review-uploads", "incoming/index.html"): b"<html></html>",
        }
    )

    def _client(config):
        return ReviewIngestClient(config, reader=reader, store=record_store)

    monkeypatch.setattr("cli.main.ReviewIngestClient", _client)
    return record_store


def test_cli_parse_prints_records_and_skips(capsys) -> None:
    """Parse should print one JSON line per record and one line per skip."""
    exit_code = main(["parse", str(fixture_path("reviews.txt"))])
    lines = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0
    assert json.loads(lines[0])["comment"] == "I loved this, great buy"
    assert lines[2].startswith("skipped\t2\tinvalid_number")


def test_cli_replay_processes_event_file(store, capsys) -> None:
    """Replay should handle the saved event and print the status line."""
    exit_code = main(["replay", str(fixture_path("s3_event.json"))])
    output = capsys.readouterr().out.strip()

    assert exit_code == 0
    assert output.startswith("Processing completed: 2 notifications, 2 records persisted")
    assert len(store.records) == 2


def test_cli_ingest_returns_failure_when_all_files_fail(store, capsys) -> None:
    """Ingest should exit non-zero when every object failed."""
    exit_code = main(["ingest", "s3://review-uploads/incoming/missing.json"])
    output = capsys.readouterr().out.strip()

    assert exit_code == 1 and output.startswith("Processing failed")


def test_cli_ingest_uses_token_identifiers_when_requested(store, capsys) -> None:
    """The identifier scheme flag should switch allocation."""
    exit_code = main(
        ["--identifier-scheme", "token", "ingest", "s3://review-uploads/incoming/reviews.txt"]
    )
    capsys.readouterr()

    assert exit_code == 0
    assert all(len(identifier) == 32 for identifier in store.records)


def test_cli_inventory_prints_counts(store, capsys) -> None:
    """Inventory should print a line per category and a total."""
    exit_code = main(["inventory", "s3://review-uploads/incoming/"])
    lines = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0
    assert lines == ["structured\t1", "delimited\t1", "other\t1", "total\t3"]
