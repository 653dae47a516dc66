"""Unit tests for bucket inventory counts."""

from __future__ import annotations

from core.types import FormatTable
from ingest.inventory import count_by_category, inventory_bucket
from tests.fakes import InMemoryObjectReader


def test_count_by_category_groups_keys() -> None:
    """Keys should be grouped by structured, delimited, and other."""
    keys = ["a.json", "b.JSON", "c.txt", "index.html", "photo.jpg"]

    counts = count_by_category(keys, FormatTable.default())

    assert counts == {"structured": 2, "delimited": 1, "other": 2}


def test_count_by_category_reports_empty_categories() -> None:
    """Every category should be present even with no keys."""
    counts = count_by_category([], FormatTable.default())

    assert counts == {"structured": 0, "delimited": 0, "other": 0}


def test_inventory_bucket_respects_prefix() -> None:
    """Only keys under the prefix should be counted."""
    reader = InMemoryObjectReader(
        {("b", "in/a.json"): b"", ("b", "in/b.txt"): b"", ("b", "archive/c.txt"): b""}
    )

    counts = inventory_bucket(reader, "b", "in/", FormatTable.default())

    assert counts == {"structured": 1, "delimited": 1, "other": 0}
