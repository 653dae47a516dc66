"""Unit tests for the upload audit log."""

from __future__ import annotations

import re

from core.types import EventKind, Notification
from ingest.upload_log import UploadAuditLog
from tests.fakes import FakeLogger


def _notification() -> Notification:
    return Notification(store_key="in/reviews.txt", event_kind=EventKind.CREATED, container_id="b")


def test_record_appends_timestamped_line(tmp_path) -> None:
    """Each call should append one formatted line."""
    audit_log = UploadAuditLog(tmp_path / "uploads.log")

    audit_log.record(_notification())
    audit_log.record(_notification())

    lines = (tmp_path / "uploads.log").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert re.fullmatch(
        r"\[\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\] File uploaded to bucket: b, object: in/reviews.txt",
        lines[0],
    )


def test_record_write_failure_is_logged_not_raised(tmp_path, monkeypatch) -> None:
    """An unwritable path should only produce a warning."""
    fake_logger = FakeLogger()
    monkeypatch.setattr("ingest.upload_log._LOGGER", fake_logger)
    audit_log = UploadAuditLog(tmp_path / "missing-dir" / "uploads.log")

    audit_log.record(_notification())

    assert len(fake_logger.named("upload_log_write_failed")) == 1
