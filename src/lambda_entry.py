"""Host entry point for storage notification events.

The hosting runtime calls ``lambda_handler`` with an S3 event and logs
the returned status line. The client is built on the first invocation
and reused while the runtime stays warm.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.errors import EventFormatError, IngestConfigError
from core.logging_config import get_logger
from ingest.review_client import ReviewIngestClient

_LOGGER = get_logger(__name__)
_CLIENT: ReviewIngestClient | None = None


def _get_client() -> ReviewIngestClient:
    global _CLIENT
    if _CLIENT is None:
        _CLIENT = ReviewIngestClient()
    return _CLIENT


def lambda_handler(event: Mapping[str, Any], context: Any) -> str:
    """Process one event batch and return a short status string."""
    _ = context
    try:
        summary = _get_client().handle_event(event)
    except IngestConfigError as error:
        _LOGGER.error("ingest_config_rejected", error=str(error))
        return f"Error: {error}"
    except EventFormatError as error:
        _LOGGER.error("event_rejected", error=str(error))
        return f"Error: {error}"
    return summary.status_message()
