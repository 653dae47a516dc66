"""Bucket inventory by content format.

This module counts object keys per format category so operators can see
how many uploads the pipeline will pick up.
"""

from __future__ import annotations

from typing import Iterable, Protocol

from core.constants import OTHER_CATEGORY
from core.logging_config import get_logger
from core.types import ContentFormat, FormatTable

_LOGGER = get_logger(__name__)


class KeyLister(Protocol):
    def list_keys(self, container_id: str, prefix: str) -> list[str]: ...


def count_by_category(keys: Iterable[str], format_table: FormatTable) -> dict[str, int]:
    """Count keys per format category.

    Args:
        keys: Object keys.
        format_table: Extension table used for categorization.

    Returns:
        Counts keyed by category name; every category is present.
    """
    counts = {content_format.value: 0 for content_format in ContentFormat}
    counts[OTHER_CATEGORY] = 0
    for key in keys:
        counts[format_table.category_for(key)] += 1
    return counts


def inventory_bucket(
    lister: KeyLister,
    bucket: str,
    prefix: str,
    format_table: FormatTable,
) -> dict[str, int]:
    """List a bucket prefix and count its keys per category.

    Raises:
        TransientIOError: If listing fails.
    """
    keys = lister.list_keys(bucket, prefix)
    counts = count_by_category(keys, format_table)
    _LOGGER.info(
        "bucket_inventory_completed", bucket=bucket, prefix=prefix, total=len(keys), **counts
    )
    return counts
