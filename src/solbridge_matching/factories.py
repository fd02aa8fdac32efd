"""Factory functions for building the matching client from settings."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

import httpx

from solbridge_core.models.cache import CacheClass
from solbridge_infra.cache.memory_cache import InMemoryCacheStore
from solbridge_infra.http.orchestrator import RequestOrchestrator
from solbridge_matching.client import MatchingClient
from solbridge_matching.invalidation import InvalidationCoordinator

if TYPE_CHECKING:
    from solbridge_core.config.settings import Settings


def create_cache_store(
    settings: Settings, clock: Callable[[], datetime] | None = None
) -> InMemoryCacheStore:
    """Create an in-memory store with the TTLs and capacity from settings."""
    ttls = {
        CacheClass.MATCHES: timedelta(seconds=settings.matches_cache_ttl_seconds),
        CacheClass.ALLOCATIONS: timedelta(seconds=settings.allocations_cache_ttl_seconds),
    }
    if clock is None:
        return InMemoryCacheStore(ttls, max_entries=settings.cache_max_entries)
    return InMemoryCacheStore(ttls, max_entries=settings.cache_max_entries, clock=clock)


def create_orchestrator(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> RequestOrchestrator:
    """Create a RequestOrchestrator pointed at the configured backend."""
    token = settings.access_token.get_secret_value() if settings.access_token else None
    return RequestOrchestrator(
        settings.matching_base_url,
        timeout_seconds=settings.request_timeout_seconds,
        access_token=token,
        transport=transport,
    )


def create_matching_client(
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    clock: Callable[[], datetime] | None = None,
) -> MatchingClient:
    """Wire store, orchestrator and invalidation into a MatchingClient.

    Each call returns an independent client with its own empty cache.
    """
    store = create_cache_store(settings, clock)
    return MatchingClient(
        create_orchestrator(settings, transport),
        store,
        InvalidationCoordinator(store),
    )
