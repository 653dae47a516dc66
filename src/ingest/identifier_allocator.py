"""Record identifier allocation.

Two schemes are available. The count scheme reproduces the identifiers
of earlier deployments (``count + 1``) and falls back to a millisecond
timestamp when the count cannot be read. Concurrent invocations of the
count scheme can still collide on the same identifier; the token scheme
avoids that by using random uuid4 tokens.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Protocol
import uuid

from core.constants import IDENTIFIER_SCHEME_TOKEN
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class RecordCounter(Protocol):
    """Anything that can report how many records are persisted."""

    def count(self) -> int: ...


class IdentifierAllocator(Protocol):
    """Produces the next identifier for a record about to be persisted."""

    def next_identifier(self) -> str: ...


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class CountIdentifierAllocator:
    """Allocate ``count + 1`` identifiers with a timestamp fallback."""

    def __init__(
        self,
        counter: RecordCounter,
        clock: Callable[[], int] = _epoch_millis,
    ) -> None:
        self._counter = counter
        self._clock = clock
        self._lock = threading.Lock()
        self._last_fallback = 0

    def next_identifier(self) -> str:
        """Return the next identifier.

        Returns:
            ``str(count + 1)``, or a millisecond timestamp string when the
            count read fails for any reason. Fallback values from one
            allocator are strictly increasing.
        """
        with self._lock:
            try:
                existing = self._counter.count()
            except Exception as error:
                fallback = self._next_fallback()
                _LOGGER.warning(
                    "identifier_count_failed",
                    error=str(error),
                    error_type=type(error).__name__,
                    fallback_identifier=fallback,
                )
                return fallback
            identifier = str(existing + 1)
            _LOGGER.debug("identifier_allocated", identifier=identifier, scheme="count")
            return identifier

    def _next_fallback(self) -> str:
        candidate = max(self._clock(), self._last_fallback + 1)
        self._last_fallback = candidate
        return str(candidate)


class TokenIdentifierAllocator:
    """Allocate collision-resistant random identifiers."""

    def next_identifier(self) -> str:
        identifier = uuid.uuid4().hex
        _LOGGER.debug("identifier_allocated", identifier=identifier, scheme="token")
        return identifier


def build_identifier_allocator(scheme: str, counter: RecordCounter) -> IdentifierAllocator:
    """Build the allocator for a configured scheme name."""
    if scheme == IDENTIFIER_SCHEME_TOKEN:
        return TokenIdentifierAllocator()
    return CountIdentifierAllocator(counter)
