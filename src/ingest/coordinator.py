"""Ingestion orchestration for storage notifications.

This module coordinates object retrieval, content parsing, identifier
allocation, and record persistence for one batch of notifications.
Failures stay isolated to the notification or record they belong to.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence

from core.errors import (
    ContentParseError,
    IngestError,
    RecordWriteError,
    TransientIOError,
)
from core.logging_config import get_logger
from core.types import (
    BatchSummary,
    EventKind,
    FileOutcome,
    FileStatus,
    Notification,
    ReviewRecord,
)
from ingest.content_parser import ContentParser
from ingest.event_reader import read_notifications
from ingest.identifier_allocator import IdentifierAllocator
from ingest.upload_log import UploadAuditLog

_LOGGER = get_logger(__name__)


class ObjectReader(Protocol):
    """Fetches raw object bytes by container and key."""

    def get(self, container_id: str, key: str) -> bytes: ...


class RecordWriter(Protocol):
    """Persists one record at a time."""

    def put(self, record: ReviewRecord) -> None: ...


class IngestionCoordinator:
    """Batch handler turning storage notifications into stored records."""

    def __init__(
        self,
        reader: ObjectReader,
        store: RecordWriter,
        allocator: IdentifierAllocator,
        parser: ContentParser | None = None,
        audit_log: UploadAuditLog | None = None,
    ) -> None:
        self._reader = reader
        self._store = store
        self._allocator = allocator
        self._parser = parser or ContentParser()
        self._audit_log = audit_log

    def handle(self, batch: Sequence[Notification]) -> BatchSummary:
        """Process every notification in order and summarize the batch.

        Args:
            batch: Notifications delivered in one invocation.

        Returns:
            Aggregated counters for the batch.
        """
        outcomes = [self._process_notification(notification) for notification in batch]
        summary = BatchSummary.from_outcomes(outcomes)
        _LOGGER.info(
            "ingest_batch_completed",
            notifications_seen=summary.notifications_seen,
            records_persisted=summary.records_persisted,
            records_skipped=summary.records_skipped,
            file_failures=summary.file_failures,
            record_failures=summary.record_failures,
            files_ignored=summary.files_ignored,
            files_unsupported=summary.files_unsupported,
        )
        return summary

    def handle_event(self, event: Mapping[str, Any]) -> str:
        """Decode a storage event, process it, and return the host status line.

        Raises:
            EventFormatError: If the event is not a storage notification event.
        """
        return self.handle(read_notifications(event)).status_message()

    def _process_notification(self, notification: Notification) -> FileOutcome:
        key = notification.store_key
        _LOGGER.info(
            "notification_received",
            bucket=notification.container_id,
            key=key,
            event_kind=notification.event_kind.value,
        )
        if self._audit_log is not None:
            self._audit_log.record(notification)
        if notification.event_kind is not EventKind.CREATED:
            _LOGGER.info("notification_ignored", key=key, event_kind=notification.event_kind.value)
            return FileOutcome(store_key=key, status=FileStatus.IGNORED)
        if not self._parser.supports(key):
            _LOGGER.info("unsupported_file_skipped", key=key)
            return FileOutcome(store_key=key, status=FileStatus.UNSUPPORTED)
        try:
            content = self._read_text(notification)
            outcome = self._parser.parse_outcome(content, key)
        except (IngestError, TransientIOError, ContentParseError) as error:
            _LOGGER.error(
                "file_processing_failed",
                bucket=notification.container_id,
                key=key,
                error_type=type(error).__name__,
                error=str(error),
            )
            return FileOutcome(store_key=key, status=FileStatus.FAILED, error=str(error))
        persisted, failures = self._persist_records(key, outcome.records)
        _LOGGER.info(
            "file_processed",
            key=key,
            records_persisted=persisted,
            records_skipped=len(outcome.skipped),
            record_failures=failures,
        )
        return FileOutcome(
            store_key=key,
            status=FileStatus.PROCESSED,
            records_persisted=persisted,
            records_skipped=len(outcome.skipped),
            record_failures=failures,
        )

    def _read_text(self, notification: Notification) -> str:
        """Fetch object bytes and decode them as UTF-8.

        Raises:
            ObjectNotFoundError: If the object is gone.
            TransientIOError: If the fetch fails.
            IngestError: If the bytes are not valid UTF-8.
        """
        payload = self._reader.get(notification.container_id, notification.store_key)
        try:
            return payload.decode("utf-8-sig")
        except UnicodeDecodeError as error:
            raise IngestError(
                f"Failed to decode s3://{notification.container_id}/{notification.store_key} "
                f"as UTF-8: {error.reason} at byte {error.start}. Re-upload the file as UTF-8."
            ) from error

    def _persist_records(self, key: str, records: Sequence[ReviewRecord]) -> tuple[int, int]:
        """Allocate and write each record, returning (persisted, failed) counts."""
        persisted = 0
        failures = 0
        for record in records:
            identified = record.with_identifier(self._allocator.next_identifier())
            try:
                self._store.put(identified)
            except RecordWriteError as error:
                failures += 1
                _LOGGER.error(
                    "record_write_failed",
                    key=key,
                    identifier=identified.identifier,
                    product_name=identified.name,
                    error=str(error),
                )
                continue
            persisted += 1
            _LOGGER.info(
                "record_saved",
                identifier=identified.identifier,
                product_name=identified.name,
            )
        return persisted, failures
