"""In-memory implementation of CacheStore with lazy expiry."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

import structlog

from solbridge_core.constants import (
    ALLOCATIONS_CACHE_TTL_SECONDS,
    MATCHES_CACHE_TTL_SECONDS,
)
from solbridge_core.models.cache import CacheClass, CacheEntry, CacheStats

logger = structlog.get_logger()

DEFAULT_TTLS: dict[CacheClass, timedelta] = {
    CacheClass.MATCHES: timedelta(seconds=MATCHES_CACHE_TTL_SECONDS),
    CacheClass.ALLOCATIONS: timedelta(seconds=ALLOCATIONS_CACHE_TTL_SECONDS),
}


def _utcnow() -> datetime:
    return datetime.now(UTC)


class InMemoryCacheStore:
    """Process-local cache keyed by string, one TTL per entry class.

    Expiry is evaluated on read; a stale entry stays in memory until it is
    overwritten, deleted, cleared or evicted, but is never returned.
    """

    def __init__(
        self,
        ttls: Mapping[CacheClass, timedelta] | None = None,
        *,
        max_entries: int | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize with optional TTL overrides, capacity bound and clock."""
        if max_entries is not None and max_entries < 1:
            msg = "max_entries must be at least 1"
            raise ValueError(msg)
        self._ttls = {**DEFAULT_TTLS, **(ttls or {})}
        self._max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._generations: dict[str, int] = {}
        self._clears = 0
        self._stats = CacheStats()

    def ttl_for(self, cache_class: CacheClass) -> timedelta:
        """Return the TTL applied to entries of cache_class."""
        return self._ttls[cache_class]

    def get(self, key: str) -> CacheEntry | None:
        """Return a fresh entry for key, or None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            self._stats.misses += 1
            logger.debug("cache_miss", key=key)
            return None
        if not entry.is_valid(self._clock()):
            self._stats.misses += 1
            self._stats.expired += 1
            logger.debug("cache_miss", key=key, reason="expired")
            return None
        self._stats.hits += 1
        logger.debug("cache_hit", key=key)
        return entry

    def set(self, key: str, payload: Any, cache_class: CacheClass) -> CacheEntry:
        """Store payload under key, overwriting any prior entry."""
        if key not in self._entries:
            self._make_room()
        entry = CacheEntry(
            key=key,
            payload=payload,
            stored_at=self._clock(),
            ttl=self._ttls[cache_class],
        )
        self._entries[key] = entry
        return entry

    def generation(self, key: str) -> int:
        """Return a counter that changes whenever key is deleted or cleared."""
        return self._clears + self._generations.get(key, 0)

    def delete(self, key: str) -> None:
        """Remove the entry for key; no-op if absent.

        The generation of key advances even when nothing was stored, so a
        read already in flight will not repopulate it.
        """
        self._generations[key] = self._generations.get(key, 0) + 1
        if self._entries.pop(key, None) is not None:
            self._stats.invalidations += 1

    def clear(self) -> None:
        """Remove every entry unconditionally."""
        count = len(self._entries)
        self._entries.clear()
        self._clears += 1
        logger.info("cache_cleared", entries=count)

    def stats(self) -> CacheStats:
        """Return a snapshot of the cache counters."""
        return CacheStats(
            hits=self._stats.hits,
            misses=self._stats.misses,
            expired=self._stats.expired,
            evictions=self._stats.evictions,
            invalidations=self._stats.invalidations,
            entries=len(self._entries),
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def _make_room(self) -> None:
        """Evict the oldest entry when the capacity bound is reached."""
        if self._max_entries is None or len(self._entries) < self._max_entries:
            return
        oldest = min(self._entries.values(), key=lambda e: e.stored_at)
        del self._entries[oldest.key]
        self._stats.evictions += 1
        logger.info("cache_entry_evicted", key=oldest.key)
