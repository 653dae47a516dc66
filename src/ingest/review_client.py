"""Python SDK for review ingest operations.

This module wires the boto3 collaborators, parser, and coordinator
from runtime config and exposes the operations used by the CLI and
the host entry point.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Sequence

from core.config import IngestConfig
from core.s3_uri import parse_s3_uri
from core.types import BatchSummary, ParseOutcome
from ingest.content_parser import ContentParser
from ingest.coordinator import IngestionCoordinator
from ingest.event_reader import build_created_notification, read_notifications
from ingest.identifier_allocator import build_identifier_allocator
from ingest.inventory import inventory_bucket
from ingest.upload_log import UploadAuditLog
from store.aws_clients import create_review_table, create_s3_client, create_session
from store.dynamo_record_store import DynamoRecordStore
from store.s3_object_reader import S3ObjectReader


class ReviewIngestClient:
    """Primary SDK entry point for review ingestion."""

    def __init__(
        self,
        config: IngestConfig | None = None,
        reader: S3ObjectReader | None = None,
        store: DynamoRecordStore | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            reader: Optional object reader, built from config when omitted.
            store: Optional record store, built from config when omitted.
        """
        self._config = config or IngestConfig.from_env()
        self._parser = ContentParser(self._config.format_table())
        if reader is None or store is None:
            session = create_session(self._config)
            reader = reader or S3ObjectReader(create_s3_client(session))
            store = store or DynamoRecordStore(
                create_review_table(session, self._config.table_name)
            )
        self._reader = reader
        self._store = store

    def coordinator(self) -> IngestionCoordinator:
        """Build a coordinator for one batch."""
        audit_log = None
        if self._config.upload_log_path:
            audit_log = UploadAuditLog(Path(self._config.upload_log_path))
        allocator = build_identifier_allocator(self._config.identifier_scheme, self._store)
        return IngestionCoordinator(
            reader=self._reader,
            store=self._store,
            allocator=allocator,
            parser=self._parser,
            audit_log=audit_log,
        )

    def handle_event(self, event: Mapping[str, Any]) -> BatchSummary:
        """Process a storage notification event.

        Raises:
            EventFormatError: If the event has no ``Records`` list.
        """
        return self.coordinator().handle(read_notifications(event))

    def ingest_objects(self, uris: Sequence[str]) -> BatchSummary:
        """Process existing objects as if they had just been created.

        Raises:
            IngestError: If a URI is malformed.
        """
        batch = []
        for uri in uris:
            location = parse_s3_uri(uri, require_key=True)
            batch.append(build_created_notification(location.bucket, location.key))
        return self.coordinator().handle(batch)

    def inventory(self, uri: str) -> dict[str, int]:
        """Count objects under an S3 URI per format category."""
        location = parse_s3_uri(uri, require_key=False)
        return inventory_bucket(
            self._reader, location.bucket, location.key, self._config.format_table()
        )


def parse_local_file(file_path: Path, config: IngestConfig | None = None) -> ParseOutcome:
    """Parse a local review file without touching AWS.

    Raises:
        UnsupportedFormatError: If the file extension is not configured.
        ContentParseError: If the content is not valid in its format.
    """
    parser = ContentParser((config or IngestConfig.from_env()).format_table())
    content = file_path.read_text(encoding="utf-8-sig")
    return parser.parse_outcome(content, file_path.name)
