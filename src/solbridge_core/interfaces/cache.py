"""Abstract cache store interface."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from solbridge_core.models.cache import CacheClass, CacheEntry, CacheStats


@runtime_checkable
class CacheStore(Protocol):
    """Synchronous keyed store with per-class TTL and lazy expiry."""

    def get(self, key: str) -> CacheEntry | None:
        """Return the entry for key, or None if missing or expired."""
        ...

    def set(self, key: str, payload: Any, cache_class: CacheClass) -> CacheEntry:
        """Store payload under key with the TTL of cache_class."""
        ...

    def generation(self, key: str) -> int:
        """Return a counter that advances on every delete or clear of key."""
        ...

    def delete(self, key: str) -> None:
        """Remove the entry for key; no-op if absent."""
        ...

    def clear(self) -> None:
        """Remove every entry."""
        ...

    def stats(self) -> CacheStats:
        """Return a snapshot of hit/miss/eviction counters."""
        ...
