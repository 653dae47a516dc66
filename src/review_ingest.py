"""Public SDK surface for review ingest.

This module provides a stable import path for library users.
It re-exports the primary client and typed models.
"""

from __future__ import annotations

from core.config import IngestConfig
from core.types import (
    BatchSummary,
    EventKind,
    FormatTable,
    Notification,
    ParseOutcome,
    ReviewRecord,
)
from ingest.content_parser import ContentParser
from ingest.coordinator import IngestionCoordinator
from ingest.identifier_allocator import CountIdentifierAllocator, TokenIdentifierAllocator
from ingest.review_client import ReviewIngestClient, parse_local_file

__all__ = [
    "BatchSummary",
    "ContentParser",
    "CountIdentifierAllocator",
    "EventKind",
    "FormatTable",
    "IngestConfig",
    "IngestionCoordinator",
    "Notification",
    "ParseOutcome",
    "ReviewIngestClient",
    "ReviewRecord",
    "TokenIdentifierAllocator",
    "parse_local_file",
]
