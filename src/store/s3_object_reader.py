"""S3-backed object reader.

This module fetches uploaded object bytes and lists bucket keys.
botocore failures are translated into ingest error types.
"""

from __future__ import annotations

from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from core.errors import ObjectNotFoundError, TransientIOError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)

_NOT_FOUND_CODES = frozenset({"NoSuchKey", "NoSuchBucket", "404", "NotFound"})


class S3ObjectReader:
    """Read objects through a boto3 S3 client."""

    def __init__(self, s3_client: Any) -> None:
        self._s3_client = s3_client

    def get(self, container_id: str, key: str) -> bytes:
        """Download one object.

        Args:
            container_id: Bucket name.
            key: Object key.

        Returns:
            Raw object bytes.

        Raises:
            ObjectNotFoundError: If the bucket or key does not exist.
            TransientIOError: For any other S3 failure.
        """
        uri = f"s3://{container_id}/{key}"
        try:
            response = self._s3_client.get_object(Bucket=container_id, Key=key)
            body = response["Body"].read()
        except ClientError as error:
            code = str(error.response.get("Error", {}).get("Code", ""))
            if code in _NOT_FOUND_CODES:
                raise ObjectNotFoundError(
                    f"Object {uri} not found ({code}). "
                    "It may have been deleted before processing."
                ) from error
            raise TransientIOError(
                f"Failed to read {uri}: {error}. Check bucket permissions and retry."
            ) from error
        except BotoCoreError as error:
            raise TransientIOError(
                f"Failed to read {uri}: {error}. Check network access and retry."
            ) from error
        _LOGGER.info("object_read", uri=uri, size_bytes=len(body))
        return body

    def list_keys(self, container_id: str, prefix: str = "") -> list[str]:
        """List object keys under a prefix.

        Raises:
            TransientIOError: If listing fails.
        """
        paginator = self._s3_client.get_paginator("list_objects_v2")
        keys: list[str] = []
        try:
            for page in paginator.paginate(Bucket=container_id, Prefix=prefix):
                keys.extend(obj["Key"] for obj in page.get("Contents", []))
        except (ClientError, BotoCoreError) as error:
            raise TransientIOError(
                f"Failed to list s3://{container_id}/{prefix}: {error}. "
                "Check bucket permissions and retry."
            ) from error
        return sorted(keys)
