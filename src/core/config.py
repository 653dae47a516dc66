"""Runtime configuration model for review ingest.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_DELIMITED_EXTENSIONS,
    DEFAULT_STRUCTURED_EXTENSIONS,
    DEFAULT_TABLE_NAME,
    DEFAULT_UPLOAD_LOG_PATH,
    IDENTIFIER_SCHEME_COUNT,
    SUPPORTED_IDENTIFIER_SCHEMES,
)
from core.errors import IngestConfigError
from core.types import ContentFormat, FormatTable


@dataclass(frozen=True)
class IngestConfig:
    """Validated runtime configuration.

    Attributes:
        table_name: Record store table name.
        s3_region: Optional AWS region for S3 and DynamoDB clients.
        s3_profile: Optional AWS profile for boto3 session initialization.
        identifier_scheme: Identifier allocation scheme, ``count`` or ``token``.
        upload_log_path: Audit log file path, None when disabled.
        structured_extensions: File suffixes parsed as JSON.
        delimited_extensions: File suffixes parsed as delimited text.
    """

    table_name: str = DEFAULT_TABLE_NAME
    s3_region: str | None = None
    s3_profile: str | None = None
    identifier_scheme: str = IDENTIFIER_SCHEME_COUNT
    upload_log_path: str | None = DEFAULT_UPLOAD_LOG_PATH
    structured_extensions: tuple[str, ...] = DEFAULT_STRUCTURED_EXTENSIONS
    delimited_extensions: tuple[str, ...] = DEFAULT_DELIMITED_EXTENSIONS

    @classmethod
    def from_env(cls) -> "IngestConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            IngestConfigError: If environment values are invalid.
        """
        table_name = os.getenv("REVIEW_INGEST_TABLE_NAME", DEFAULT_TABLE_NAME).strip()
        if not table_name:
            raise IngestConfigError(
                "Invalid REVIEW_INGEST_TABLE_NAME value: expected a non-empty table name. "
                "Unset the variable to use the default table."
            )
        scheme = _parse_identifier_scheme(
            os.getenv("REVIEW_INGEST_IDENTIFIER_SCHEME", IDENTIFIER_SCHEME_COUNT)
        )
        upload_log_value = os.getenv("REVIEW_INGEST_UPLOAD_LOG_PATH", DEFAULT_UPLOAD_LOG_PATH)
        structured = _parse_extensions(
            "REVIEW_INGEST_STRUCTURED_EXTENSIONS", DEFAULT_STRUCTURED_EXTENSIONS
        )
        delimited = _parse_extensions(
            "REVIEW_INGEST_DELIMITED_EXTENSIONS", DEFAULT_DELIMITED_EXTENSIONS
        )
        overlap = set(structured) & set(delimited)
        if overlap:
            raise IngestConfigError(
                f"Invalid extension configuration: {sorted(overlap)} mapped to both formats. "
                "Assign each extension to exactly one format."
            )
        return cls(
            table_name=table_name,
            s3_region=os.getenv("REVIEW_INGEST_S3_REGION") or None,
            s3_profile=os.getenv("REVIEW_INGEST_S3_PROFILE") or None,
            identifier_scheme=scheme,
            upload_log_path=upload_log_value or None,
            structured_extensions=structured,
            delimited_extensions=delimited,
        )

    def format_table(self) -> FormatTable:
        """Build the immutable extension table for parser dispatch."""
        entries = [(suffix, ContentFormat.STRUCTURED) for suffix in self.structured_extensions]
        entries.extend((suffix, ContentFormat.DELIMITED) for suffix in self.delimited_extensions)
        return FormatTable(entries=tuple(entries))


def _parse_identifier_scheme(raw_value: str) -> str:
    """Parse the identifier scheme environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Normalized scheme name.

    Raises:
        IngestConfigError: If value is not a supported scheme.
    """
    scheme = raw_value.strip().lower()
    if scheme not in SUPPORTED_IDENTIFIER_SCHEMES:
        raise IngestConfigError(
            "Invalid REVIEW_INGEST_IDENTIFIER_SCHEME value: "
            f"expected one of {SUPPORTED_IDENTIFIER_SCHEMES}, got '{raw_value}'. "
            "Set REVIEW_INGEST_IDENTIFIER_SCHEME to a supported scheme."
        )
    return scheme


def _parse_extensions(variable: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Parse a comma separated extension list into normalized suffixes."""
    raw_value = os.getenv(variable)
    if raw_value is None:
        return default
    suffixes = []
    for item in raw_value.split(","):
        suffix = item.strip().lower()
        if not suffix:
            continue
        suffixes.append(suffix if suffix.startswith(".") else f".{suffix}")
    if not suffixes:
        raise IngestConfigError(
            f"Invalid {variable} value: expected at least one extension, got '{raw_value}'. "
            f"Provide a comma separated list such as '{','.join(default)}'."
        )
    return tuple(suffixes)
