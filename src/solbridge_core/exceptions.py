"""Custom exception hierarchy for the SolBridge matching client."""

from __future__ import annotations

from enum import StrEnum


class SolBridgeError(Exception):
    """Base exception for all SolBridge client errors."""


class ErrorKind(StrEnum):
    """Classification of a failed outbound matching request."""

    TIMEOUT = "timeout"
    SERVER_REJECTED = "server_rejected"
    TRANSPORT_FAILURE = "transport_failure"


class MatchingRequestError(SolBridgeError):
    """Raised when a call to the matching service does not yield a payload.

    Always carries a non-empty human-readable ``message`` and the ``kind``
    that tells a slow backend apart from a rejected request or a dead network.
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.status_code = status_code

    def to_dict(self) -> dict[str, str]:
        """Return the ``{kind, message}`` pair handed to callers."""
        return {"kind": str(self.kind), "message": self.message}


class RequestTimeoutError(MatchingRequestError):
    """Raised when a call exceeds the configured timeout."""

    kind = ErrorKind.TIMEOUT


class ServerRejectedError(MatchingRequestError):
    """Raised when the service answers with an error response."""

    kind = ErrorKind.SERVER_REJECTED


class TransportFailureError(MatchingRequestError):
    """Raised when the service could not be reached or answered garbage."""

    kind = ErrorKind.TRANSPORT_FAILURE
