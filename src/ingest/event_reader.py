"""Storage event decoding.

This module converts the S3 notification event delivered by the host
into typed notifications for the coordinator.
"""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import unquote_plus

from core.errors import EventFormatError
from core.logging_config import get_logger
from core.types import EventKind, Notification

_LOGGER = get_logger(__name__)


def read_notifications(event: Mapping[str, Any]) -> list[Notification]:
    """Decode an S3 event into notifications.

    Args:
        event: Host event with a ``Records`` list.

    Returns:
        Notifications in event order. Malformed records are dropped.

    Raises:
        EventFormatError: If the event has no ``Records`` list.
    """
    records = event.get("Records") if isinstance(event, Mapping) else None
    if not isinstance(records, list):
        raise EventFormatError(
            "Invalid storage event: expected a 'Records' list. "
            "Only S3 object notification events are supported."
        )
    notifications: list[Notification] = []
    for position, record in enumerate(records):
        notification = _notification_from_record(record)
        if notification is None:
            _LOGGER.warning("event_record_dropped", position=position)
            continue
        notifications.append(notification)
    return notifications


def _notification_from_record(record: Any) -> Notification | None:
    """Build one notification, returning None for malformed records."""
    try:
        event_name = record["eventName"]
        bucket = record["s3"]["bucket"]["name"]
        raw_key = record["s3"]["object"]["key"]
    except (KeyError, TypeError):
        return None
    if not all(isinstance(value, str) and value for value in (event_name, bucket, raw_key)):
        return None
    return Notification(
        store_key=unquote_plus(raw_key),
        event_kind=EventKind.from_event_name(event_name),
        container_id=bucket,
    )


def build_created_notification(bucket: str, key: str) -> Notification:
    """Build a created notification for a known object."""
    return Notification(store_key=key, event_kind=EventKind.CREATED, container_id=bucket)
