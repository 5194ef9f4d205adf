"""Parsed template cache with size bound and TTL."""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .types import ParseResult


@dataclass
class _CacheEntry:
    result: ParseResult
    stored_at: float


class TemplateCache:
    """Cache of parse results keyed by template text.

    When full, the oldest entry is evicted. Entries older than ``ttl_seconds``
    are treated as missing.
    """

    def __init__(
        self,
        max_size: int = 100,
        ttl_seconds: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize cache.

        Args:
            max_size: Maximum number of cached templates
            ttl_seconds: Time to live for each entry
            clock: Time source in seconds (injectable for tests)
        """
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, template: str) -> ParseResult | None:
        """Get a cached parse result, dropping it if expired."""
        entry = self._entries.get(template)
        if entry is None:
            return None
        if self._clock() - entry.stored_at > self.ttl_seconds:
            del self._entries[template]
            return None
        return entry.result

    def set(self, template: str, result: ParseResult) -> None:
        """Store a parse result, evicting the oldest entry when full."""
        if template not in self._entries and len(self._entries) >= self.max_size:
            oldest = min(self._entries, key=lambda key: self._entries[key].stored_at)
            del self._entries[oldest]
        self._entries[template] = _CacheEntry(result=result, stored_at=self._clock())

    def invalidate(self, template: str) -> None:
        """Drop one template from the cache."""
        self._entries.pop(template, None)

    def clear(self) -> None:
        """Drop all entries."""
        self._entries.clear()

    def cleanup(self) -> int:
        """Remove expired entries.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired = [
            key for key, entry in self._entries.items() if now - entry.stored_at > self.ttl_seconds
        ]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def stats(self) -> dict[str, Any]:
        """Cache statistics."""
        return {
            "size": len(self._entries),
            "max_size": self.max_size,
            "ttl_seconds": self.ttl_seconds,
        }
