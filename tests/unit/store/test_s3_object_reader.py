"""Unit tests for the S3 object reader."""

from __future__ import annotations

import io
from typing import Any

from botocore.exceptions import ClientError
import pytest

from core.errors import ObjectNotFoundError, TransientIOError
from store.s3_object_reader import S3ObjectReader


def _client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class _FakePaginator:
    def __init__(self, pages: list[dict[str, Any]]) -> None:
        self._pages = pages
        self.calls: list[dict[str, str]] = []

    def paginate(self, **kwargs: str) -> list[dict[str, Any]]:
        self.calls.append(kwargs)
        return self._pages


class _FakeS3Client:
    def __init__(self, objects: dict[str, bytes], error_code: str | None = None) -> None:
        self._objects = objects
        self._error_code = error_code
        self.paginator = _FakePaginator(
            [{"Contents": [{"Key": "b.txt"}, {"Key": "a.json"}]}, {}]
        )

    def get_object(self, Bucket: str, Key: str) -> dict[str, Any]:
        if self._error_code:
            raise _client_error(self._error_code, "GetObject")
        if Key not in self._objects:
            raise _client_error("NoSuchKey", "GetObject")
        return {"Body": io.BytesIO(self._objects[Key])}

    def get_paginator(self, name: str) -> _FakePaginator:
        assert name == "list_objects_v2"
        return self.paginator


def test_get_returns_object_bytes() -> None:
    """Reader should return the raw body bytes."""
    reader = S3ObjectReader(_FakeS3Client({"a.json": b"[]"}))

    assert reader.get("bucket", "a.json") == b"[]"


def test_get_maps_missing_key_to_not_found() -> None:
    """NoSuchKey should become ObjectNotFoundError."""
    reader = S3ObjectReader(_FakeS3Client({}))

    with pytest.raises(ObjectNotFoundError):
        reader.get("bucket", "gone.json")


def test_get_maps_other_client_errors_to_transient() -> None:
    """Access and throttling errors should be transient I/O failures."""
    reader = S3ObjectReader(_FakeS3Client({}, error_code="SlowDown"))

    with pytest.raises(TransientIOError):
        reader.get("bucket", "a.json")


def test_list_keys_collects_all_pages_sorted() -> None:
    """Listing should flatten pages and sort keys."""
    client = _FakeS3Client({})

    keys = S3ObjectReader(client).list_keys("bucket", "in/")

    assert keys == ["a.json", "b.txt"]
    assert client.paginator.calls == [{"Bucket": "bucket", "Prefix": "in/"}]
