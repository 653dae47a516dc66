"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests independent of REVIEW_INGEST_* variables and /tmp."""
    for name in (
        "REVIEW_INGEST_TABLE_NAME",
        "REVIEW_INGEST_S3_REGION",
        "REVIEW_INGEST_S3_PROFILE",
        "REVIEW_INGEST_IDENTIFIER_SCHEME",
        "REVIEW_INGEST_STRUCTURED_EXTENSIONS",
        "REVIEW_INGEST_DELIMITED_EXTENSIONS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("REVIEW_INGEST_UPLOAD_LOG_PATH", str(tmp_path / "upload_log.txt"))
