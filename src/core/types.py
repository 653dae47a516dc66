"""Shared typed models.

This module defines immutable data models used by the parser,
coordinator, and store layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum

from core.constants import (
    CREATED_EVENT_PREFIX,
    DEFAULT_DELIMITED_EXTENSIONS,
    DEFAULT_STRUCTURED_EXTENSIONS,
    OTHER_CATEGORY,
)
from core.errors import RecordStateError


class ContentFormat(str, Enum):
    """Recognized content formats."""

    STRUCTURED = "structured"
    DELIMITED = "delimited"


class EventKind(str, Enum):
    """Storage change kinds the coordinator distinguishes."""

    CREATED = "created"
    OTHER = "other"

    @classmethod
    def from_event_name(cls, event_name: str) -> "EventKind":
        """Map a storage event name such as ``ObjectCreated:Put`` to a kind."""
        if event_name.startswith(CREATED_EVENT_PREFIX):
            return cls.CREATED
        return cls.OTHER


class SkipReason(str, Enum):
    """Why a single entry or segment was dropped during parsing."""

    NOT_AN_OBJECT = "not_an_object"
    MISSING_FIELD = "missing_field"
    INVALID_NUMBER = "invalid_number"
    INVALID_TEXT = "invalid_text"


class FileStatus(str, Enum):
    """Terminal state of one notification."""

    PROCESSED = "processed"
    IGNORED = "ignored"
    UNSUPPORTED = "unsupported"
    FAILED = "failed"


@dataclass(frozen=True)
class FormatTable:
    """Immutable suffix to format mapping used for dispatch.

    Attributes:
        entries: Ordered ``(suffix, format)`` pairs, suffixes lower-case.
    """

    entries: tuple[tuple[str, ContentFormat], ...]

    @classmethod
    def default(cls) -> "FormatTable":
        """Return the JSON/TXT table used when no configuration is given."""
        entries = [(suffix, ContentFormat.STRUCTURED) for suffix in DEFAULT_STRUCTURED_EXTENSIONS]
        entries.extend((suffix, ContentFormat.DELIMITED) for suffix in DEFAULT_DELIMITED_EXTENSIONS)
        return cls(entries=tuple(entries))

    def resolve(self, format_hint: str) -> ContentFormat | None:
        """Return the format whose suffix ends the hint, if any."""
        lowered_hint = format_hint.lower()
        for suffix, content_format in self.entries:
            if lowered_hint.endswith(suffix):
                return content_format
        return None

    def category_for(self, key: str) -> str:
        """Return the category name for an object key."""
        content_format = self.resolve(key)
        return content_format.value if content_format else OTHER_CATEGORY


@dataclass(frozen=True)
class ReviewRecord:
    """Canonical product review record.

    Attributes:
        name: Product name.
        price: Product price.
        comment: Free-text review body.
        rating: Review score.
        identifier: Store key, None until allocated.
    """

    name: str
    price: Decimal
    comment: str
    rating: Decimal
    identifier: str | None = None

    def with_identifier(self, identifier: str) -> "ReviewRecord":
        """Return a copy carrying the allocated identifier.

        Raises:
            RecordStateError: If the record already has an identifier.
        """
        if self.identifier is not None:
            raise RecordStateError(
                f"Cannot assign identifier '{identifier}' to record '{self.identifier}': "
                "identifiers are immutable once allocated."
            )
        return replace(self, identifier=identifier)


@dataclass(frozen=True)
class Notification:
    """One storage change event.

    Attributes:
        store_key: Object key inside the container.
        event_kind: Created or other change.
        container_id: Bucket name.
    """

    store_key: str
    event_kind: EventKind
    container_id: str


@dataclass(frozen=True)
class EntrySkip:
    """A dropped entry or segment with its reason.

    Attributes:
        position: Zero-based entry or segment index in the source.
        reason: Skip category.
        detail: Human-readable explanation.
    """

    position: int
    reason: SkipReason
    detail: str


@dataclass(frozen=True)
class ParseOutcome:
    """Parser result: accepted records plus skipped entries."""

    records: tuple[ReviewRecord, ...] = ()
    skipped: tuple[EntrySkip, ...] = ()


@dataclass(frozen=True)
class FileOutcome:
    """Result of processing one notification.

    Attributes:
        store_key: Object key of the notification.
        status: Terminal status.
        records_persisted: Records written to the store.
        records_skipped: Entries dropped by the parser.
        record_failures: Records whose write failed.
        error: Failure message for FAILED outcomes.
    """

    store_key: str
    status: FileStatus
    records_persisted: int = 0
    records_skipped: int = 0
    record_failures: int = 0
    error: str | None = None


@dataclass(frozen=True)
class BatchSummary:
    """Aggregated batch counters returned to the host."""

    notifications_seen: int = 0
    records_persisted: int = 0
    records_skipped: int = 0
    file_failures: int = 0
    record_failures: int = 0
    files_ignored: int = 0
    files_unsupported: int = 0
    outcomes: tuple[FileOutcome, ...] = field(default=(), repr=False)

    @classmethod
    def from_outcomes(cls, outcomes: list[FileOutcome]) -> "BatchSummary":
        """Aggregate per-notification outcomes."""
        return cls(
            notifications_seen=len(outcomes),
            records_persisted=sum(item.records_persisted for item in outcomes),
            records_skipped=sum(item.records_skipped for item in outcomes),
            file_failures=_count_status(outcomes, FileStatus.FAILED),
            record_failures=sum(item.record_failures for item in outcomes),
            files_ignored=_count_status(outcomes, FileStatus.IGNORED),
            files_unsupported=_count_status(outcomes, FileStatus.UNSUPPORTED),
            outcomes=tuple(outcomes),
        )

    @property
    def all_failed(self) -> bool:
        """Whether every notification failed at fetch or parse stage."""
        return self.notifications_seen > 0 and self.file_failures == self.notifications_seen

    def status_message(self) -> str:
        """Render the short human-readable status for the host."""
        prefix = "Processing failed" if self.all_failed else "Processing completed"
        return (
            f"{prefix}: {self.notifications_seen} notifications, "
            f"{self.records_persisted} records persisted, "
            f"{self.records_skipped} records skipped, "
            f"{self.file_failures} file failures, "
            f"{self.record_failures} record failures"
        )


def _count_status(outcomes: list[FileOutcome], status: FileStatus) -> int:
    return sum(1 for item in outcomes if item.status is status)
