"""Targeted cache invalidation after successful mutating calls."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum

import structlog

from solbridge_core.interfaces.cache import CacheStore
from solbridge_matching.keys import ACTIVE_ALLOCATIONS_KEY

logger = structlog.get_logger()


class Mutation(StrEnum):
    """Mutating operations that may leave cached data stale."""

    CREATE_ALLOCATION = "create_allocation"
    CANCEL_ALLOCATION = "cancel_allocation"


# Creating an allocation leaves both caches alone: match results do not depend
# on allocation state, and the active list refreshes on TTL or forced refresh.
INVALIDATION_POLICY: Mapping[Mutation, tuple[str, ...]] = {
    Mutation.CREATE_ALLOCATION: (),
    Mutation.CANCEL_ALLOCATION: (ACTIVE_ALLOCATIONS_KEY,),
}


class InvalidationCoordinator:
    """Drops the cache entries a confirmed mutation makes stale."""

    def __init__(
        self,
        store: CacheStore,
        policy: Mapping[Mutation, tuple[str, ...]] = INVALIDATION_POLICY,
    ) -> None:
        """Initialize with the shared store and the invalidation policy."""
        self._store = store
        self._policy = policy

    def keys_for(self, mutation: Mutation) -> tuple[str, ...]:
        """Return the keys invalidated by mutation."""
        return self._policy.get(mutation, ())

    def invalidate(self, mutation: Mutation) -> tuple[str, ...]:
        """Delete every entry mapped to mutation and return their keys.

        Call only after the mutating request has succeeded.
        """
        keys = self.keys_for(mutation)
        for key in keys:
            self._store.delete(key)
        if keys:
            logger.info("cache_invalidated", mutation=str(mutation), keys=list(keys))
        return keys
