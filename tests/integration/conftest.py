"""Integration test fixtures: real factory wiring, in-process matching service."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import httpx
import pytest

from solbridge_matching.client import MatchingClient
from solbridge_matching.factories import create_matching_client
from tests.mocks.mock_clock import FakeClock
from tests.mocks.mock_matching_server import MatchingServer
from tests.mocks.mock_settings import make_real_settings


@pytest.fixture
def server() -> MatchingServer:
    """Return a fresh matching service with no allocations."""
    return MatchingServer()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
async def client(server: MatchingServer, clock: FakeClock) -> AsyncGenerator[MatchingClient, None]:
    """A MatchingClient built by the real factory against the in-process server."""
    settings = make_real_settings(access_token="integration-token")
    async with create_matching_client(
        settings, transport=httpx.MockTransport(server.handle), clock=clock
    ) as matching_client:
        yield matching_client
