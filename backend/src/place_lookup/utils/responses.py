"""Shared response utilities for Lambda handlers."""

from __future__ import annotations

import json
import os
from typing import Any
from typing import Mapping
from typing import Optional

from pydantic import BaseModel


def get_security_headers() -> dict[str, str]:
    """Get security headers for all responses.

    SECURITY: These headers protect against common web vulnerabilities:
    - X-Content-Type-Options: Prevents MIME type sniffing
    - X-Frame-Options: Prevents clickjacking
    - Cache-Control: Lookups are never cached by intermediaries

    Returns:
        Dictionary of security headers.
    """
    return {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Cache-Control": "no-store, no-cache, must-revalidate",
        "Pragma": "no-cache",
    }


def get_cors_headers(
    event: Optional[Mapping[str, Any]] = None,
) -> dict[str, str]:
    """Get CORS headers for the response.

    Allowed origins come from ``CORS_ALLOWED_ORIGINS`` (comma-separated).
    When unset, any origin is allowed.

    Args:
        event: The Lambda event containing the request origin header.

    Returns:
        Dictionary of CORS headers to include in the response.
    """
    allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS", "")
    allowed_origins = [
        origin.strip() for origin in allowed_origins_env.split(",") if origin.strip()
    ]

    request_origin = None
    if event:
        headers = event.get("headers") or {}
        request_origin = headers.get("origin") or headers.get("Origin")

    if not allowed_origins or "*" in allowed_origins:
        allow_origin = "*"
    elif request_origin and request_origin in allowed_origins:
        allow_origin = request_origin
    else:
        # Non-browser clients send no Origin; browsers will reject the mismatch.
        allow_origin = allowed_origins[0]

    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Headers": "Content-Type,X-Api-Key",
        "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    }


def json_response(
    status_code: int,
    body: Any,
    headers: Optional[dict[str, str]] = None,
    event: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Create a JSON API Gateway response.

    Args:
        status_code: HTTP status code.
        body: Response body (dict or Pydantic model).
        headers: Optional additional headers to include.
        event: Optional Lambda event for CORS origin detection.

    Returns:
        API Gateway response dictionary.
    """
    response_headers = {
        "Content-Type": "application/json",
    }
    response_headers.update(get_security_headers())
    response_headers.update(get_cors_headers(event))

    if headers:
        response_headers.update(headers)

    payload = _serialize_body(body)

    return {
        "statusCode": status_code,
        "headers": response_headers,
        "body": json.dumps(payload, default=str, ensure_ascii=False),
    }


def _serialize_body(body: Any) -> Any:
    """Serialize response body to JSON-compatible format."""
    if isinstance(body, BaseModel):
        return body.model_dump()

    return body


def error_response(
    status_code: int,
    message: str,
    detail: Optional[str] = None,
    event: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Create an error response.

    Args:
        status_code: HTTP status code.
        message: Error message.
        detail: Optional additional detail.
        event: Optional Lambda event for CORS origin detection.

    Returns:
        API Gateway response dictionary.
    """
    body: dict[str, Any] = {"error": message}
    if detail is not None:
        body["detail"] = detail

    return json_response(status_code, body, event=event)
