"""In-memory cache of parsed transcripts.

Parsed event lists are kept in a bounded LRU map with a time-to-live.
Events are immutable, so cached lists are shared between callers as-is.
"""

from __future__ import annotations

import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache

from claudist.config.defaults import DEFAULT_CACHE_MAX_SIZE, DEFAULT_CACHE_TTL_SECONDS
from claudist.config.settings import get_settings
from claudist.models.event import TranscriptEvent

__all__ = [
    "ConversationCache",
    "clear_global_cache",
    "get_cache_key",
    "get_global_cache",
]


@dataclass
class _CacheEntry:
    events: list[TranscriptEvent]
    stored_at: float


class ConversationCache:
    """LRU cache of parsed transcripts with a time-to-live.

    Entries expire ``ttl_seconds`` after they were stored. Reading an entry
    marks it as most recently used; when the cache is full the least
    recently used entry is evicted.

    Example:
        cache = ConversationCache(max_size=10, ttl_seconds=60)
        cache.set(get_cache_key(path), events)
        events = cache.get(get_cache_key(path))

    """

    def __init__(
        self,
        max_size: int = DEFAULT_CACHE_MAX_SIZE,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize an empty cache.

        Args:
            max_size: Maximum number of entries.
            ttl_seconds: Lifetime of an entry.
            clock: Monotonic time source in seconds.

        """
        self._entries: OrderedDict[str, _CacheEntry] = OrderedDict()
        self._max_size = max_size
        self._ttl = ttl_seconds
        self._clock = clock

    def get(self, key: str) -> list[TranscriptEvent] | None:
        """Return the cached events for a key, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._clock() - entry.stored_at > self._ttl:
            del self._entries[key]
            return None

        self._entries.move_to_end(key)
        return entry.events

    def set(self, key: str, events: list[TranscriptEvent]) -> None:
        """Store events under a key, evicting the least recently used entry if full."""
        self._entries[key] = _CacheEntry(events=events, stored_at=self._clock())
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_size:
            self._entries.popitem(last=False)

    def has(self, key: str) -> bool:
        """Check for a live entry without touching its recency."""
        entry = self._entries.get(key)
        return entry is not None and self._clock() - entry.stored_at <= self._ttl

    def delete(self, key: str) -> None:
        """Remove an entry if present."""
        self._entries.pop(key, None)

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()

    def size(self) -> int:
        """Return the number of stored entries, expired ones included."""
        return len(self._entries)

    def invalidate_by_prefix(self, prefix: str) -> None:
        """Remove every entry whose key starts with ``prefix``."""
        for key in [key for key in self._entries if key.startswith(prefix)]:
            del self._entries[key]


@lru_cache(maxsize=1)
def get_global_cache() -> ConversationCache:
    """Get the process-wide cache, sized from settings."""
    settings = get_settings().cache
    return ConversationCache(
        max_size=settings.max_size,
        ttl_seconds=settings.ttl_seconds,
    )


def clear_global_cache() -> None:
    """Empty the process-wide cache."""
    get_global_cache().clear()


def get_cache_key(file_path: str, suffix: str | None = None) -> str:
    """Build a cache key from a file path and an optional suffix."""
    return f"{file_path}:{suffix}" if suffix is not None else file_path
