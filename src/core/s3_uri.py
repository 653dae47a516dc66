"""S3 URI parsing helpers.

This module centralizes S3 URI parsing for the CLI commands.
It keeps URI validation behavior consistent across commands.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.errors import IngestError


@dataclass(frozen=True)
class S3Location:
    """Parsed S3 location model."""

    bucket: str
    key: str


def parse_s3_uri(uri: str, require_key: bool) -> S3Location:
    """Parse and validate an S3 URI.

    Args:
        uri: URI in format ``s3://bucket/key`` or ``s3://bucket``.
        require_key: Whether an object key (or prefix) must be present.

    Returns:
        Parsed bucket and key pair; key is empty when omitted.

    Raises:
        IngestError: If the URI is malformed.
    """
    if not uri.startswith("s3://"):
        _raise_uri_error(uri, require_key)
    bucket, _, key = uri.removeprefix("s3://").partition("/")
    if not bucket or (require_key and not key):
        _raise_uri_error(uri, require_key)
    return S3Location(bucket=bucket, key=key)


def _raise_uri_error(uri: str, require_key: bool) -> None:
    """Raise an invalid URI error.

    Raises:
        IngestError: Always.
    """
    expected = "s3://bucket/key" if require_key else "s3://bucket[/prefix]"
    raise IngestError(
        f"Invalid S3 URI '{uri}': expected {expected}. "
        "Provide the bucket name after the s3:// scheme."
    )
