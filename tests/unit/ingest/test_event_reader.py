"""Unit tests for storage event decoding."""

from __future__ import annotations

import json

import pytest

from core.errors import EventFormatError
from core.types import EventKind
from ingest.event_reader import read_notifications
from tests.fixture_paths import fixture_path


def test_read_notifications_decodes_fixture_event() -> None:
    """Fixture event should yield a created and a removed notification."""
    event = json.loads(fixture_path("s3_event.json").read_text(encoding="utf-8"))

    notifications = read_notifications(event)

    assert [item.event_kind for item in notifications] == [EventKind.CREATED, EventKind.OTHER]
    assert notifications[0].container_id == "review-uploads"


def test_read_notifications_url_decodes_keys() -> None:
    """Event keys are URL-encoded and should be decoded."""
    event = {
        "Records": [
            {
                "eventName": "ObjectCreated:CompleteMultipartUpload",
                "s3": {"bucket": {"name": "b"}, "object": {"key": "reviews/May%2FJune+batch.txt"}},
            }
        ]
    }

    notifications = read_notifications(event)

    assert notifications[0].store_key == "reviews/May/June batch.txt"


def test_read_notifications_drops_malformed_records() -> None:
    """Records without bucket or key should be dropped."""
    event = {
        "Records": [
            {"eventName": "ObjectCreated:Put", "s3": {"bucket": {"name": "b"}}},
            "garbage",
            {
                "eventName": "ObjectCreated:Put",
                "s3": {"bucket": {"name": "b"}, "object": {"key": "k.txt"}},
            },
        ]
    }

    notifications = read_notifications(event)

    assert [item.store_key for item in notifications] == ["k.txt"]


def test_read_notifications_requires_records_list() -> None:
    """Events without a Records list are not storage events."""
    with pytest.raises(EventFormatError):
        read_notifications({"detail-type": "Scheduled Event"})
