"""Unit tests for the public SDK surface."""

from __future__ import annotations

from decimal import Decimal

import review_ingest
from tests.fakes import InMemoryObjectReader, InMemoryRecordStore


def test_public_exports_resolve() -> None:
    """Every exported name should be importable from the SDK module."""
    missing = [name for name in review_ingest.__all__ if not hasattr(review_ingest, name)]

    assert missing == []


def test_public_surface_runs_a_batch() -> None:
    """The exported types should be enough to run one batch end to end."""
    store = InMemoryRecordStore()
    reader = InMemoryObjectReader(
        {("b", "r.txt"): b"ProductName: Lamp, Price: 19.99, Review: bright, warm, Rating: 4;"}
    )
    coordinator = review_ingest.IngestionCoordinator(
        reader=reader,
        store=store,
        allocator=review_ingest.CountIdentifierAllocator(store),
        parser=review_ingest.ContentParser(review_ingest.FormatTable.default()),
    )
    notification = review_ingest.Notification(
        store_key="r.txt", event_kind=review_ingest.EventKind.CREATED, container_id="b"
    )

    summary = coordinator.handle([notification])

    assert summary.records_persisted == 1
    assert store.records["1"].price == Decimal("19.99")
