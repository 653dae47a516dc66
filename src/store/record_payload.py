"""Record store item serialization.

This module maps review records onto the table attribute names.
The attribute names are shared with data written by earlier releases.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping

from core.constants import (
    ATTRIBUTE_IDENTIFIER,
    ATTRIBUTE_PRICE,
    ATTRIBUTE_PRODUCT_NAME,
    ATTRIBUTE_RATING,
    ATTRIBUTE_REVIEW_COMMENT,
)
from core.errors import RecordStateError
from core.types import ReviewRecord


def record_to_item(record: ReviewRecord) -> dict[str, object]:
    """Serialize a record into a table item.

    Args:
        record: Identified review record.

    Returns:
        Item dictionary with Decimal numbers.

    Raises:
        RecordStateError: If the record has no identifier yet.
    """
    if record.identifier is None:
        raise RecordStateError(
            f"Cannot persist review for '{record.name}': identifier not allocated. "
            "Allocate an identifier before writing the record."
        )
    return {
        ATTRIBUTE_IDENTIFIER: record.identifier,
        ATTRIBUTE_PRODUCT_NAME: record.name,
        ATTRIBUTE_PRICE: record.price,
        ATTRIBUTE_REVIEW_COMMENT: record.comment,
        ATTRIBUTE_RATING: record.rating,
    }


def record_from_item(item: Mapping[str, Any]) -> ReviewRecord:
    """Deserialize a table item into a record.

    Args:
        item: Item returned by the table.

    Returns:
        Parsed record.

    Raises:
        ValueError: If a required attribute is missing.
    """
    try:
        return ReviewRecord(
            identifier=str(item[ATTRIBUTE_IDENTIFIER]),
            name=str(item[ATTRIBUTE_PRODUCT_NAME]),
            price=Decimal(str(item[ATTRIBUTE_PRICE])),
            comment=str(item[ATTRIBUTE_REVIEW_COMMENT]),
            rating=Decimal(str(item[ATTRIBUTE_RATING])),
        )
    except KeyError as error:
        raise ValueError(f"Invalid review item: missing attribute {error.args[0]}") from error
