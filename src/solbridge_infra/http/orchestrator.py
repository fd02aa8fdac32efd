"""Single-call request execution with a fixed timeout and error classification."""

from __future__ import annotations

import asyncio
import time
from types import TracebackType
from typing import Any

import httpx
import structlog

from solbridge_core.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS, TIMEOUT_MESSAGE
from solbridge_core.exceptions import (
    RequestTimeoutError,
    ServerRejectedError,
    TransportFailureError,
)
from solbridge_infra.http.operations import Operation

logger = structlog.get_logger()


class RequestOrchestrator:
    """Issues exactly one HTTP call per invocation against the matching service.

    It is the only place where raw transport errors are translated into the
    timeout / server-rejected / transport-failure taxonomy. Nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        access_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client with the timeout policy and auth header."""
        if timeout_seconds <= 0:
            msg = "timeout_seconds must be positive"
            raise ValueError(msg)
        self._timeout = timeout_seconds
        headers = {"Accept": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        self._client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/",
            timeout=httpx.Timeout(timeout_seconds),
            headers=headers,
            transport=transport,
        )

    @property
    def timeout_seconds(self) -> float:
        return self._timeout

    async def call(self, operation: Operation) -> Any:
        """Execute operation and return the envelope's ``data`` field.

        Raises RequestTimeoutError, ServerRejectedError or TransportFailureError.
        """
        started = time.perf_counter()
        try:
            async with asyncio.timeout(self._timeout):
                response = await self._client.request(
                    operation.method, operation.path, json=operation.body
                )
        except (TimeoutError, httpx.TimeoutException) as exc:
            logger.warning(
                "matching_request_timeout",
                operation=operation.name,
                timeout_seconds=self._timeout,
            )
            raise RequestTimeoutError(TIMEOUT_MESSAGE, operation=operation.name) from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "matching_request_transport_failure",
                operation=operation.name,
                error=str(exc),
            )
            raise TransportFailureError(
                operation.fallback_message, operation=operation.name
            ) from exc

        duration_ms = round((time.perf_counter() - started) * 1000, 1)
        if response.is_error:
            message = _server_message(response) or operation.fallback_message
            logger.warning(
                "matching_request_rejected",
                operation=operation.name,
                status=response.status_code,
                message=message,
            )
            raise ServerRejectedError(
                message, operation=operation.name, status_code=response.status_code
            )

        data = _extract_data(operation, response)
        logger.info(
            "matching_request_completed",
            operation=operation.name,
            status=response.status_code,
            duration_ms=duration_ms,
        )
        return data

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> RequestOrchestrator:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def _server_message(response: httpx.Response) -> str | None:
    """Return the server-provided error message, if the body has one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


def _extract_data(operation: Operation, response: httpx.Response) -> Any:
    """Unwrap the ``data`` field of a success envelope."""
    try:
        body = response.json()
    except ValueError as exc:
        logger.warning(
            "matching_request_transport_failure",
            operation=operation.name,
            error="response body is not JSON",
        )
        raise TransportFailureError(
            operation.fallback_message,
            operation=operation.name,
            status_code=response.status_code,
        ) from exc
    if not isinstance(body, dict) or "data" not in body:
        logger.warning(
            "matching_request_transport_failure",
            operation=operation.name,
            error="response envelope has no data field",
        )
        raise TransportFailureError(
            operation.fallback_message,
            operation=operation.name,
            status_code=response.status_code,
        )
    return body["data"]
