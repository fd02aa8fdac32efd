"""Tests for the in-memory cache store."""

from __future__ import annotations

from datetime import timedelta

import pytest

from solbridge_core.interfaces.cache import CacheStore
from solbridge_core.models.cache import CacheClass
from solbridge_infra.cache.memory_cache import InMemoryCacheStore
from tests.mocks.mock_clock import FakeClock


@pytest.mark.unit
class TestInMemoryCacheStore:
    """Tests for get/set/delete/clear semantics."""

    def test_satisfies_protocol(self, store: InMemoryCacheStore) -> None:
        """The store implements the CacheStore protocol."""
        assert isinstance(store, CacheStore)

    def test_set_and_get(self, store: InMemoryCacheStore, clock: FakeClock) -> None:
        """A stored payload comes back with its metadata."""
        store.set("k", {"a": 1}, CacheClass.MATCHES)
        entry = store.get("k")
        assert entry is not None
        assert entry.payload == {"a": 1}
        assert entry.stored_at == clock.now
        assert entry.ttl == timedelta(minutes=5)

    def test_get_missing_key(self, store: InMemoryCacheStore) -> None:
        """Missing key returns None."""
        assert store.get("missing") is None

    def test_ttl_per_class(self, store: InMemoryCacheStore, clock: FakeClock) -> None:
        """Allocations expire after one minute, matches after five."""
        store.set("m", "matches", CacheClass.MATCHES)
        store.set("a", "allocs", CacheClass.ALLOCATIONS)
        clock.advance(seconds=61)
        assert store.get("a") is None
        assert store.get("m") is not None

    def test_expired_entry_stays_until_overwritten(
        self, store: InMemoryCacheStore, clock: FakeClock
    ) -> None:
        """Stale entries are hidden from reads but not swept."""
        store.set("k", "old", CacheClass.ALLOCATIONS)
        clock.advance(minutes=2)
        assert store.get("k") is None
        assert "k" in store
        store.set("k", "new", CacheClass.ALLOCATIONS)
        entry = store.get("k")
        assert entry is not None
        assert entry.payload == "new"

    def test_overwrite_refreshes_timestamp(
        self, store: InMemoryCacheStore, clock: FakeClock
    ) -> None:
        """Setting an existing key restarts its TTL."""
        store.set("k", "v1", CacheClass.ALLOCATIONS)
        clock.advance(seconds=50)
        store.set("k", "v2", CacheClass.ALLOCATIONS)
        clock.advance(seconds=50)
        entry = store.get("k")
        assert entry is not None
        assert entry.payload == "v2"

    def test_delete(self, store: InMemoryCacheStore) -> None:
        """Delete removes the entry."""
        store.set("k", "v", CacheClass.MATCHES)
        store.delete("k")
        assert store.get("k") is None
        assert "k" not in store

    def test_delete_nonexistent_key(self, store: InMemoryCacheStore) -> None:
        """Deleting a missing key is a no-op."""
        store.delete("nope")
        assert store.stats().invalidations == 0

    def test_clear(self, store: InMemoryCacheStore) -> None:
        """Clear removes every entry."""
        store.set("a", 1, CacheClass.MATCHES)
        store.set("b", 2, CacheClass.ALLOCATIONS)
        store.clear()
        assert len(store) == 0
        assert store.get("a") is None

    def test_ttl_override(self, clock: FakeClock) -> None:
        """Custom TTLs replace the defaults for their class only."""
        store = InMemoryCacheStore({CacheClass.MATCHES: timedelta(seconds=10)}, clock=clock)
        assert store.ttl_for(CacheClass.MATCHES) == timedelta(seconds=10)
        assert store.ttl_for(CacheClass.ALLOCATIONS) == timedelta(minutes=1)

    def test_stats(self, store: InMemoryCacheStore, clock: FakeClock) -> None:
        """Hits, misses, expiries and invalidations are counted."""
        store.get("k")
        store.set("k", "v", CacheClass.ALLOCATIONS)
        store.get("k")
        clock.advance(minutes=1)
        store.get("k")
        store.delete("k")
        stats = store.stats()
        assert stats.hits == 1
        assert stats.misses == 2
        assert stats.expired == 1
        assert stats.invalidations == 1
        assert stats.entries == 0


@pytest.mark.unit
class TestGeneration:
    """Generations advance on delete and clear, never on set."""

    def test_set_keeps_generation(self, store: InMemoryCacheStore) -> None:
        before = store.generation("k")
        store.set("k", "v", CacheClass.MATCHES)
        store.set("k", "v2", CacheClass.MATCHES)
        assert store.generation("k") == before

    def test_delete_advances_only_that_key(self, store: InMemoryCacheStore) -> None:
        store.set("a", 1, CacheClass.MATCHES)
        a_before, b_before = store.generation("a"), store.generation("b")
        store.delete("a")
        assert store.generation("a") != a_before
        assert store.generation("b") == b_before

    def test_delete_of_absent_key_advances(self, store: InMemoryCacheStore) -> None:
        """An in-flight read must not refill a key deleted while it was empty."""
        before = store.generation("missing")
        store.delete("missing")
        assert store.generation("missing") != before
        assert store.stats().invalidations == 0

    def test_clear_advances_every_key(self, store: InMemoryCacheStore) -> None:
        store.set("a", 1, CacheClass.MATCHES)
        before = {k: store.generation(k) for k in ("a", "never-set")}
        store.clear()
        assert all(store.generation(k) != g for k, g in before.items())


@pytest.mark.unit
class TestCapacityBound:
    """Tests for the optional max_entries bound."""

    def test_oldest_entry_evicted(self, clock: FakeClock) -> None:
        """Inserting past capacity evicts the oldest entry."""
        store = InMemoryCacheStore(max_entries=2, clock=clock)
        store.set("a", 1, CacheClass.MATCHES)
        clock.advance(seconds=1)
        store.set("b", 2, CacheClass.MATCHES)
        clock.advance(seconds=1)
        store.set("c", 3, CacheClass.MATCHES)
        assert "a" not in store
        assert "b" in store
        assert "c" in store
        assert store.stats().evictions == 1

    def test_overwrite_does_not_evict(self, clock: FakeClock) -> None:
        """Overwriting an existing key at capacity keeps the others."""
        store = InMemoryCacheStore(max_entries=2, clock=clock)
        store.set("a", 1, CacheClass.MATCHES)
        store.set("b", 2, CacheClass.MATCHES)
        store.set("a", 10, CacheClass.MATCHES)
        assert len(store) == 2
        assert store.stats().evictions == 0

    def test_invalid_capacity(self) -> None:
        """A capacity below 1 is rejected."""
        with pytest.raises(ValueError, match="max_entries"):
            InMemoryCacheStore(max_entries=0)
