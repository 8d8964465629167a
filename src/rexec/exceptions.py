"""
Exception hierarchy for rexec SDK.

All SDK errors derive from RexecError so callers can catch one type.
Nothing in the SDK retries: every error is raised to the immediate caller.
"""

from __future__ import annotations


class RexecError(Exception):
    """
    Base exception for all rexec SDK errors.

    Args:
        message: Human-readable description.
        cause: Underlying exception, if any.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self._original_cause = cause

    def __str__(self) -> str:
        return self.message


# =============================================================================
# REST Errors
# =============================================================================


class ApiError(RexecError):
    """Non-2xx response from the REST API."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code

    def __str__(self) -> str:
        return f"API error {self.status_code}: {self.message}"


class SerializationError(RexecError):
    """Malformed structured payload (REST JSON or resize encoding)."""


# =============================================================================
# Connection / Transport Errors
# =============================================================================


class ConnectionError(RexecError):
    """
    Terminal session could not be established.

    Raised for malformed base URLs, missing host, handshake rejection
    and transport-level connect failures.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code


class TransportError(RexecError):
    """Underlying I/O failure during a request or on a live session."""


class TerminalClosedError(RexecError):
    """Operation attempted on a terminal session that is already closed."""

    def __init__(self, message: str = "Terminal connection closed") -> None:
        super().__init__(message)


__all__ = [
    "RexecError",
    "ApiError",
    "SerializationError",
    "ConnectionError",
    "TransportError",
    "TerminalClosedError",
]
