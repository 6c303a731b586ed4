"""Custom exception classes for the place lookup service.

This module provides domain-specific exception classes that carry
appropriate HTTP status codes and structured error information.
"""

from __future__ import annotations

from typing import Any
from typing import Optional


class AppError(Exception):
    """Base exception for application errors.

    All application-specific exceptions should inherit from this class.
    Each exception carries an HTTP status code and optional details.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code (default 500).
        detail: Optional additional context.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response body."""
        result: dict[str, Any] = {"error": self.message}
        if self.detail is not None:
            result["detail"] = self.detail
        return result


class ValidationError(AppError):
    """Raised when the request does not carry a usable location."""

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class ConfigurationError(AppError):
    """Raised when the OS Data Hub API key is missing or still a placeholder."""

    def __init__(self, message: str = "Server configuration error: API key not set."):
        super().__init__(message, status_code=500)


class UpstreamStatusError(AppError):
    """Raised when OS Data Hub answers with a non-success status code.

    The upstream status code is passed through to the caller unchanged
    and the upstream body is surfaced as the detail.
    """

    def __init__(self, status_code: int, body: str):
        super().__init__(
            f"OS Data Hub API returned {status_code}.",
            status_code=status_code,
            detail=body,
        )
        self.body = body


class UpstreamUnavailableError(AppError):
    """Raised when OS Data Hub cannot be reached at all.

    Covers connection refusals, DNS failures and timeouts.
    """

    def __init__(self, detail: str):
        super().__init__(
            "Unable to reach OS Data Hub API.",
            status_code=502,
            detail=detail,
        )


class UpstreamResponseError(AppError):
    """Raised when a successful OS Data Hub response is not valid JSON."""

    def __init__(self, detail: str):
        super().__init__(
            "OS Data Hub API returned an invalid response.",
            status_code=502,
            detail=detail,
        )
