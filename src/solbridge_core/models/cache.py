"""Cache entry and statistics models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any


class CacheClass(StrEnum):
    """Category of cached data, each with its own TTL policy."""

    MATCHES = "matches"
    ALLOCATIONS = "allocations"


@dataclass(frozen=True)
class CacheEntry:
    """A successfully fetched payload stored under a key."""

    key: str
    payload: Any
    stored_at: datetime
    ttl: timedelta

    def is_valid(self, now: datetime) -> bool:
        """Return True while the entry is younger than its TTL."""
        return now - self.stored_at < self.ttl


@dataclass
class CacheStats:
    """Local cache counters (not the remote matching statistics)."""

    hits: int = 0
    misses: int = 0
    expired: int = 0
    evictions: int = 0
    invalidations: int = 0
    entries: int = 0

    @property
    def hit_rate(self) -> float:
        """Fraction of reads served from the cache."""
        reads = self.hits + self.misses
        return self.hits / reads if reads else 0.0
