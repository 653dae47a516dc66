"""In-memory collaborators shared by ingest tests."""

from __future__ import annotations

from typing import Any

import boto3

from core.errors import ObjectNotFoundError, RecordWriteError, TransientIOError
from core.types import ReviewRecord


class FakeLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, object]]] = []

    def debug(self, event: str, **fields: object) -> None:
        self.events.append(("debug", event, fields))

    def info(self, event: str, **fields: object) -> None:
        self.events.append(("info", event, fields))

    def warning(self, event: str, **fields: object) -> None:
        self.events.append(("warning", event, fields))

    def error(self, event: str, **fields: object) -> None:
        self.events.append(("error", event, fields))

    def named(self, event: str) -> list[dict[str, object]]:
        return [fields for _, name, fields in self.events if name == event]


class InMemoryObjectReader:
    def __init__(self, objects: dict[tuple[str, str], bytes]) -> None:
        self._objects = objects
        self.transient_keys: set[str] = set()

    def get(self, container_id: str, key: str) -> bytes:
        if key in self.transient_keys:
            raise TransientIOError(f"timeout reading {key}")
        try:
            return self._objects[(container_id, key)]
        except KeyError as error:
            raise ObjectNotFoundError(f"missing {container_id}/{key}") from error

    def list_keys(self, container_id: str, prefix: str = "") -> list[str]:
        return sorted(
            key
            for bucket, key in self._objects
            if bucket == container_id and key.startswith(prefix)
        )


class InMemoryRecordStore:
    def __init__(self) -> None:
        self.records: dict[str, ReviewRecord] = {}
        self.failing_names: set[str] = set()
        self.count_error: Exception | None = None

    def put(self, record: ReviewRecord) -> None:
        if record.name in self.failing_names:
            raise RecordWriteError(f"throttled writing {record.name}")
        assert record.identifier is not None
        self.records[record.identifier] = record

    def count(self) -> int:
        if self.count_error is not None:
            raise self.count_error
        return len(self.records)

    def get(self, identifier: str) -> ReviewRecord | None:
        return self.records.get(identifier)


def boto3_review_table() -> Any:
    """Return a real boto3 Table resource with throwaway credentials.

    Pair it with ``botocore.stub.Stubber(table.meta.client)`` so no request
    leaves the process.
    """
    session = boto3.session.Session(
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        region_name="us-east-1",
    )
    return session.resource("dynamodb").Table("ProductReview")
