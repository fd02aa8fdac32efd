"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest

from solbridge_infra.cache.memory_cache import InMemoryCacheStore
from solbridge_infra.http.orchestrator import RequestOrchestrator
from solbridge_matching.client import MatchingClient
from tests.mocks.mock_backend import FakeMatchingBackend
from tests.mocks.mock_clock import FakeClock

BASE_URL = "http://matching.test/api/v1/matching"


@pytest.fixture
def clock() -> FakeClock:
    """Return a frozen clock that tests advance explicitly."""
    return FakeClock()


@pytest.fixture
def backend() -> FakeMatchingBackend:
    """Return an empty fake matching backend."""
    return FakeMatchingBackend()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryCacheStore:
    """Return an isolated cache store driven by the fake clock."""
    return InMemoryCacheStore(clock=clock)


@pytest.fixture
async def orchestrator(
    backend: FakeMatchingBackend,
) -> AsyncGenerator[RequestOrchestrator, None]:
    """Return an orchestrator wired to the fake backend."""
    orch = RequestOrchestrator(BASE_URL, transport=backend.transport())
    yield orch
    await orch.aclose()


@pytest.fixture
def matching_client(
    orchestrator: RequestOrchestrator, store: InMemoryCacheStore
) -> MatchingClient:
    """Return a MatchingClient over the fake backend and isolated store."""
    return MatchingClient(orchestrator, store)
