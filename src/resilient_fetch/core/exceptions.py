"""Domain-specific exception hierarchy for consistent error handling."""

from __future__ import annotations

from typing import Any


class ResilientFetchError(Exception):
    """Base exception for all expected fetch orchestration errors."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_payload(self) -> dict[str, Any]:
        """Serialise the error into a structured payload."""

        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InvalidConfigurationError(ResilientFetchError):
    """Raised for malformed caller input, before any network activity."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(
            message=message,
            error_code="INVALID_CONFIGURATION",
            details=details,
        )


class TransportError(ResilientFetchError):
    """Raised by a transport when a single request attempt fails."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if url is not None:
            details["url"] = url
        if status_code is not None:
            details["status_code"] = status_code
        if cause is not None:
            details["cause"] = str(cause)
        super().__init__(message=message, error_code="TRANSPORT_ERROR", details=details)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class RetryExhaustedError(ResilientFetchError):
    """Raised when every allowed attempt of a fetch has failed."""

    def __init__(self, *, attempts: int, last_error: BaseException, url: str | None = None) -> None:
        details: dict[str, Any] = {"attempts": attempts, "last_error": str(last_error)}
        if url is not None:
            details["url"] = url
        super().__init__(
            message=f"Failed after {attempts} attempts: {last_error}",
            error_code="RETRY_EXHAUSTED",
            details=details,
        )
        self.attempts = attempts
        self.last_error = last_error
        self.url = url


__all__ = [
    "ResilientFetchError",
    "InvalidConfigurationError",
    "TransportError",
    "RetryExhaustedError",
]
