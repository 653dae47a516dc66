"""Upload audit trail.

Each received notification is appended as one line to a local file so
operators can see what arrived even when parsing later fails.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from core.logging_config import get_logger
from core.types import Notification

_LOGGER = get_logger(__name__)


class UploadAuditLog:
    """Append-only upload log file."""

    def __init__(self, log_path: Path) -> None:
        self._log_path = log_path

    def record(self, notification: Notification) -> None:
        """Append one notification line; write failures are only logged."""
        timestamp = datetime.now().isoformat(timespec="seconds")
        line = (
            f"[{timestamp}] File uploaded to bucket: {notification.container_id}, "
            f"object: {notification.store_key}\n"
        )
        try:
            with self._log_path.open("a", encoding="utf-8") as handle:
                handle.write(line)
        except OSError as error:
            _LOGGER.warning(
                "upload_log_write_failed",
                log_path=str(self._log_path),
                error=str(error),
            )
