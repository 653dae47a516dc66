"""DynamoDB-backed review record store.

This module persists review records keyed by identifier and reports
the persisted record count used by identifier allocation.
"""

from __future__ import annotations

from decimal import DecimalException
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from core.constants import ATTRIBUTE_IDENTIFIER
from core.errors import RecordWriteError, TransientIOError
from core.logging_config import get_logger
from core.types import ReviewRecord
from store.record_payload import record_from_item, record_to_item

_LOGGER = get_logger(__name__)


class DynamoRecordStore:
    """Review table accessed through a boto3 Table resource."""

    def __init__(self, table: Any) -> None:
        self._table = table

    def put(self, record: ReviewRecord) -> None:
        """Write one record.

        Raises:
            RecordWriteError: If the write fails.
            RecordStateError: If the record has no identifier.
        """
        item = record_to_item(record)
        try:
            self._table.put_item(Item=item)
        except DecimalException as error:
            raise RecordWriteError(
                f"Failed to serialize review {record.identifier} for '{record.name}': "
                f"{error!r}. Numbers must fit 38 digits within the table's magnitude range."
            ) from error
        except (ClientError, BotoCoreError) as error:
            raise RecordWriteError(
                f"Failed to save review {record.identifier} for '{record.name}': {error}. "
                "Check table permissions and capacity."
            ) from error
        _LOGGER.debug("review_record_written", identifier=record.identifier)

    def count(self) -> int:
        """Return the number of persisted records.

        Uses a strongly consistent count scan so writes from the same
        invocation are visible to the next allocation.

        Raises:
            TransientIOError: If the scan fails.
        """
        total = 0
        scan_kwargs: dict[str, Any] = {"Select": "COUNT", "ConsistentRead": True}
        try:
            while True:
                response = self._table.scan(**scan_kwargs)
                total += int(response.get("Count", 0))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    return total
                scan_kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as error:
            raise TransientIOError(
                f"Failed to count review records: {error}. Check table permissions and retry."
            ) from error

    def get(self, identifier: str) -> ReviewRecord | None:
        """Load one record by identifier, or None when absent.

        Raises:
            TransientIOError: If the read fails.
        """
        try:
            response = self._table.get_item(
                Key={ATTRIBUTE_IDENTIFIER: identifier}, ConsistentRead=True
            )
        except (ClientError, BotoCoreError) as error:
            raise TransientIOError(
                f"Failed to read review {identifier}: {error}. Check table permissions and retry."
            ) from error
        item = response.get("Item")
        return record_from_item(item) if item else None
