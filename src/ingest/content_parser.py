"""Review content parsing.

This module turns file text into validated review records. JSON files
hold one review object or a list of them. Text files hold reviews
separated by ``;`` with ``Field: value`` pairs separated by commas:

    ProductName: Sony TV, Price: 12000, Review: I loved it, truly, Rating: 4.85;

Bad entries are dropped and reported in the outcome, never raised.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
import json
import re
from typing import Any, Union

from core.constants import (
    FIELD_PRICE,
    FIELD_PRODUCT_NAME,
    FIELD_RATING,
    FIELD_REVIEW,
    NUMBER_MAX_DIGITS,
    NUMBER_MAX_EXPONENT,
    NUMBER_MIN_EXPONENT,
    RECORD_SEPARATOR,
    SOURCE_FIELDS,
)
from core.errors import ContentParseError, UnsupportedFormatError
from core.logging_config import get_logger
from core.types import (
    ContentFormat,
    EntrySkip,
    FormatTable,
    ParseOutcome,
    ReviewRecord,
    SkipReason,
)

_LOGGER = get_logger(__name__)

_EntryResult = Union[ReviewRecord, EntrySkip]


def _build_field_pattern(field_name: str) -> re.Pattern[str]:
    # Value runs lazily until ", <word>:" or end of segment, so commas inside it survive.
    return re.compile(
        rf"\b{re.escape(field_name)}\s*:\s*(.+?)(?=\s*,\s*\w+\s*:|$)",
        re.IGNORECASE | re.DOTALL,
    )


_FIELD_PATTERNS = {field_name: _build_field_pattern(field_name) for field_name in SOURCE_FIELDS}


class ContentParser:
    """Parse review files using an immutable extension table."""

    def __init__(self, format_table: FormatTable | None = None) -> None:
        self._format_table = format_table or FormatTable.default()

    def supports(self, format_hint: str) -> bool:
        """Return whether the hint maps to a known format."""
        return self._format_table.resolve(format_hint) is not None

    def parse(self, content: str, format_hint: str) -> list[ReviewRecord]:
        """Parse content into validated records.

        Args:
            content: Decoded file text.
            format_hint: File name or object key used to pick the format.

        Returns:
            Records in source order.

        Raises:
            UnsupportedFormatError: If the hint matches no known extension.
            ContentParseError: If structured content is not valid JSON.
        """
        return list(self.parse_outcome(content, format_hint).records)

    def parse_outcome(self, content: str, format_hint: str) -> ParseOutcome:
        """Parse content and keep the reason for every dropped entry.

        Raises:
            UnsupportedFormatError: If the hint matches no known extension.
            ContentParseError: If structured content is not valid JSON.
        """
        content_format = self._format_table.resolve(format_hint)
        if content_format is None:
            raise UnsupportedFormatError(
                f"Unsupported file type: {format_hint}. "
                f"Expected one of {[suffix for suffix, _ in self._format_table.entries]}."
            )
        if content_format is ContentFormat.STRUCTURED:
            results = _parse_structured(content, format_hint)
        else:
            results = _parse_delimited(content)
        outcome = _collect(results)
        for skip in outcome.skipped:
            _LOGGER.warning(
                "review_entry_skipped",
                source=format_hint,
                position=skip.position,
                reason=skip.reason.value,
                detail=skip.detail,
            )
        _LOGGER.info(
            "review_content_parsed",
            source=format_hint,
            content_format=content_format.value,
            record_count=len(outcome.records),
            skipped_count=len(outcome.skipped),
        )
        return outcome


def _collect(results: list[_EntryResult]) -> ParseOutcome:
    records = tuple(item for item in results if isinstance(item, ReviewRecord))
    skipped = tuple(item for item in results if isinstance(item, EntrySkip))
    return ParseOutcome(records=records, skipped=skipped)


def _parse_structured(content: str, format_hint: str) -> list[_EntryResult]:
    """Parse a JSON document holding one review object or a list of them."""
    try:
        payload = json.loads(content, parse_float=Decimal, parse_int=Decimal)
    except json.JSONDecodeError as error:
        raise ContentParseError(
            f"Failed to parse JSON content from {format_hint}: {error.msg} "
            f"at line {error.lineno} column {error.colno}. Fix the JSON syntax and re-upload."
        ) from error
    entries = payload if isinstance(payload, list) else [payload]
    return [_record_from_json_entry(position, entry) for position, entry in enumerate(entries)]


def _record_from_json_entry(position: int, entry: Any) -> _EntryResult:
    if not isinstance(entry, dict):
        return EntrySkip(
            position, SkipReason.NOT_AN_OBJECT, f"expected JSON object, got {type(entry).__name__}"
        )
    missing = [name for name in SOURCE_FIELDS if entry.get(name) is None]
    if missing:
        return EntrySkip(position, SkipReason.MISSING_FIELD, f"missing required fields {missing}")
    for field_name in (FIELD_PRODUCT_NAME, FIELD_REVIEW):
        if not isinstance(entry[field_name], str):
            return EntrySkip(
                position,
                SkipReason.INVALID_TEXT,
                f"field {field_name} must be a string, got {entry[field_name]!r}",
            )
    price = _json_number(entry[FIELD_PRICE])
    rating = _json_number(entry[FIELD_RATING])
    if price is None or rating is None:
        return EntrySkip(
            position,
            SkipReason.INVALID_NUMBER,
            f"fields {FIELD_PRICE}/{FIELD_RATING} must be finite storable numbers, "
            f"got {entry[FIELD_PRICE]!r}/{entry[FIELD_RATING]!r}",
        )
    return ReviewRecord(
        name=entry[FIELD_PRODUCT_NAME],
        price=price,
        comment=entry[FIELD_REVIEW],
        rating=rating,
    )


def _json_number(value: Any) -> Decimal | None:
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, Decimal, str)):
        return None
    return to_decimal(str(value))


def _parse_delimited(content: str) -> list[_EntryResult]:
    """Parse ``;`` separated review segments."""
    results: list[_EntryResult] = []
    for position, raw_segment in enumerate(content.split(RECORD_SEPARATOR)):
        segment = raw_segment.strip()
        if segment:
            results.append(_record_from_segment(position, segment))
    return results


def _record_from_segment(position: int, segment: str) -> _EntryResult:
    values = {name: extract_field(segment, name) for name in SOURCE_FIELDS}
    missing = [name for name, value in values.items() if value is None]
    if missing:
        return EntrySkip(
            position, SkipReason.MISSING_FIELD, f"missing required fields {missing} in '{segment}'"
        )
    price = to_decimal(str(values[FIELD_PRICE]))
    rating = to_decimal(str(values[FIELD_RATING]))
    if price is None or rating is None:
        return EntrySkip(
            position,
            SkipReason.INVALID_NUMBER,
            f"fields {FIELD_PRICE}/{FIELD_RATING} must be finite storable numbers, "
            f"got '{values[FIELD_PRICE]}'/'{values[FIELD_RATING]}'",
        )
    return ReviewRecord(
        name=str(values[FIELD_PRODUCT_NAME]),
        price=price,
        comment=str(values[FIELD_REVIEW]),
        rating=rating,
    )


def extract_field(segment: str, field_name: str) -> str | None:
    """Extract one named value from a delimited segment.

    The value ends at the first comma followed by another ``word:`` token,
    or at the end of the segment. Field names match case-insensitively.

    Args:
        segment: One trimmed review segment.
        field_name: Field label without the colon.

    Returns:
        Trimmed value, or None when the field is absent or empty.
    """
    pattern = _FIELD_PATTERNS.get(field_name) or _build_field_pattern(field_name)
    match = pattern.search(segment)
    if match is None:
        return None
    value = match.group(1).strip()
    return value or None


def to_decimal(raw_value: str) -> Decimal | None:
    """Parse a finite decimal the record store can hold exactly.

    Returns:
        The number, or None when it is not numeric, not finite, has more
        than 38 significant digits, or lies outside the storable magnitude.
    """
    try:
        number = Decimal(raw_value.strip())
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    if number.is_zero():
        return Decimal(0)
    if len(number.as_tuple().digits) > NUMBER_MAX_DIGITS:
        return None
    if not NUMBER_MIN_EXPONENT <= number.adjusted() <= NUMBER_MAX_EXPONENT:
        return None
    return number
