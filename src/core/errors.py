"""Review ingest exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each collaborator raises a specific error type for debuggability.
"""

from __future__ import annotations


class ReviewIngestError(Exception):
    """Base exception for all review ingest failures."""


class IngestConfigError(ReviewIngestError):
    """Raised for invalid runtime configuration."""


class IngestError(ReviewIngestError):
    """Raised for notification and object retrieval failures."""


class EventFormatError(IngestError):
    """Raised when a host event does not have the storage event shape."""


class ObjectNotFoundError(IngestError):
    """Raised when a requested object key does not exist."""


class ContentParseError(ReviewIngestError):
    """Raised when file content is not valid in its claimed format."""


class UnsupportedFormatError(ContentParseError):
    """Raised when a format hint matches no configured extension."""


class TransientIOError(ReviewIngestError):
    """Raised for retryable collaborator I/O failures."""


class StoreError(ReviewIngestError):
    """Raised for record store failures."""


class RecordWriteError(StoreError):
    """Raised when a single record cannot be persisted."""


class RecordStateError(StoreError):
    """Raised when a record is mutated outside its allocation lifecycle."""
