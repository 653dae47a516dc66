"""boto3 client construction.

This module encapsulates boto3 session creation from runtime config.
It is shared by the object reader and the record store.
"""

from __future__ import annotations

from typing import Any

import boto3

from core.config import IngestConfig


def create_session(config: IngestConfig) -> boto3.session.Session:
    """Create a boto3 session honoring the configured profile and region.

    Args:
        config: Runtime config with optional session settings.

    Returns:
        Boto3 session.
    """
    session_kwargs: dict[str, str] = {}
    if config.s3_profile:
        session_kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        session_kwargs["region_name"] = config.s3_region
    return boto3.session.Session(**session_kwargs)


def create_s3_client(session: boto3.session.Session) -> Any:
    """Create an S3 client from a session."""
    return session.client("s3")


def create_review_table(session: boto3.session.Session, table_name: str) -> Any:
    """Create a DynamoDB table resource from a session."""
    return session.resource("dynamodb").Table(table_name)
