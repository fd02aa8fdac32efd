"""Public matching client: read-through caching over the request orchestrator."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from types import TracebackType
from typing import Any

import structlog

from solbridge_core.interfaces.cache import CacheStore
from solbridge_core.models.cache import CacheClass, CacheStats
from solbridge_core.models.matching import CostEstimateRequest, MatchQuery, SelectedMatch
from solbridge_infra.http import operations
from solbridge_infra.http.orchestrator import RequestOrchestrator
from solbridge_matching.invalidation import InvalidationCoordinator, Mutation
from solbridge_matching.keys import ACTIVE_ALLOCATIONS_KEY, derive_match_key

logger = structlog.get_logger()


class MatchingClient:
    """Entry point for callers of the remote matching service.

    Find-sellers results and the active allocations list are served from the
    shared store while fresh. Every other operation goes to the network.
    Request errors propagate unchanged from the orchestrator.

    Callers receive their own copy of cached payloads. A read that is still
    in flight when its key is invalidated or the cache is cleared returns
    its result but does not store it.
    """

    def __init__(
        self,
        orchestrator: RequestOrchestrator,
        store: CacheStore,
        invalidator: InvalidationCoordinator | None = None,
    ) -> None:
        """Initialize with an orchestrator and the store it fills."""
        self._orchestrator = orchestrator
        self._store = store
        self._invalidator = invalidator or InvalidationCoordinator(store)

    async def find_sellers(self, query: MatchQuery) -> Any:
        """Return ranked sellers for a buyer requirement, cached per query."""
        key = derive_match_key(query)
        entry = self._store.get(key)
        if entry is not None:
            logger.info("matches_served_from_cache", key=key)
            return copy.deepcopy(entry.payload)

        return await self._fetch_and_store(
            key, operations.find_sellers(query), CacheClass.MATCHES
        )

    async def get_match_details(self, match_id: str | int) -> Any:
        """Return full scoring detail for one match (never cached)."""
        return await self._orchestrator.call(operations.match_details(match_id))

    async def create_allocation(
        self, selected_matches: Iterable[SelectedMatch | Mapping[str, Any]]
    ) -> Any:
        """Allocate energy from the selected matches."""
        matches = [
            m if isinstance(m, SelectedMatch) else SelectedMatch.model_validate(m)
            for m in selected_matches
        ]
        if not matches:
            msg = "at least one match must be selected"
            raise ValueError(msg)

        data = await self._orchestrator.call(operations.create_allocation(matches))
        self._invalidator.invalidate(Mutation.CREATE_ALLOCATION)
        return data

    async def get_active_allocations(self, *, force_refresh: bool = False) -> Any:
        """Return the caller's active allocations.

        With force_refresh the cache is skipped and the stored entry is
        overwritten with the fresh result.
        """
        if not force_refresh:
            entry = self._store.get(ACTIVE_ALLOCATIONS_KEY)
            if entry is not None:
                return copy.deepcopy(entry.payload)

        return await self._fetch_and_store(
            ACTIVE_ALLOCATIONS_KEY, operations.active_allocations(), CacheClass.ALLOCATIONS
        )

    async def cancel_allocation(self, allocation_id: str | int) -> Any:
        """Cancel an allocation, then drop the cached active list."""
        data = await self._orchestrator.call(operations.cancel_allocation(allocation_id))
        self._invalidator.invalidate(Mutation.CANCEL_ALLOCATION)
        return data

    def clear_cache(self) -> None:
        """Wipe every cached entry."""
        self._store.clear()

    async def get_matching_stats(self) -> Any:
        """Return dashboard statistics from the service (never cached)."""
        return await self._orchestrator.call(operations.matching_statistics())

    async def calculate_estimate(self, required_kwh: float, max_price: float) -> Any:
        """Return a cost estimate for the requirement (never cached)."""
        request = CostEstimateRequest(required_kwh=required_kwh, max_price=max_price)
        return await self._orchestrator.call(operations.cost_estimate(request))

    def cache_stats(self) -> CacheStats:
        """Return local cache counters."""
        return self._store.stats()

    async def _fetch_and_store(
        self, key: str, operation: operations.Operation, cache_class: CacheClass
    ) -> Any:
        """Call the service and cache the result unless key was invalidated meanwhile."""
        generation = self._store.generation(key)
        data = await self._orchestrator.call(operation)
        if self._store.generation(key) != generation:
            logger.info("cache_write_skipped", key=key, reason="invalidated_in_flight")
            return data
        self._store.set(key, data, cache_class)
        return copy.deepcopy(data)

    async def aclose(self) -> None:
        """Release network resources."""
        await self._orchestrator.aclose()

    async def __aenter__(self) -> MatchingClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
