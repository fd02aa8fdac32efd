"""In-process fake of the remote matching service for httpx.MockTransport."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx

MATCHING_PREFIX = "/api/v1/matching/"

Responder = httpx.Response | Exception | Callable[[httpx.Request], httpx.Response]


@dataclass
class _Route:
    responders: list[Responder]
    delay: float = 0.0


def envelope(data: Any, **extra: Any) -> dict[str, Any]:
    """Wrap data the way the backend does on success."""
    return {"success": True, "data": data, **extra}


class FakeMatchingBackend:
    """Routes requests by (method, path) and records every call.

    A route given several responses plays them in order and then repeats
    the last one.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], _Route] = {}

    def respond(
        self,
        method: str,
        path: str,
        *responders: Responder,
        delay: float = 0.0,
    ) -> None:
        """Register the responses for method + path (path without prefix)."""
        self._routes[(method.upper(), path)] = _Route(list(responders), delay)

    def respond_data(self, method: str, path: str, *payloads: Any) -> None:
        """Register success envelopes carrying each payload in turn."""
        self.respond(
            method, path, *(httpx.Response(200, json=envelope(p)) for p in payloads)
        )

    def calls(self, method: str, path: str) -> int:
        """Number of requests received for method + path."""
        return len(self.requests_for(method, path))

    def requests_for(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if r.method == method.upper() and self._relative(r) == path
        ]

    def last_json(self, method: str, path: str) -> Any:
        """Decoded JSON body of the most recent matching request."""
        return json.loads(self.requests_for(method, path)[-1].content)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, self._relative(request)))
        if route is None:
            return httpx.Response(404, json={"success": False, "message": "Not found"})
        if route.delay:
            await asyncio.sleep(route.delay)
        responder = route.responders.pop(0) if len(route.responders) > 1 else route.responders[0]
        if isinstance(responder, Exception):
            raise responder
        if isinstance(responder, httpx.Response):
            return httpx.Response(
                responder.status_code, headers=responder.headers, content=responder.content
            )
        return responder(request)

    @staticmethod
    def _relative(request: httpx.Request) -> str:
        path = request.url.path
        return path[len(MATCHING_PREFIX):] if path.startswith(MATCHING_PREFIX) else path
