"""Shared parsing utilities for request handling."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any
from typing import Mapping
from typing import Optional


def first_param(params: dict[str, list[str]], key: str) -> Optional[str]:
    """Return the first query parameter value for a key.

    Args:
        params: Dictionary of parameter name to list of values.
        key: The parameter name to look up.

    Returns:
        The first value for the key, or None if not present.
    """
    values = params.get(key, [])
    return values[0] if values else None


def collect_query_params(event: Mapping[str, Any]) -> dict[str, list[str]]:
    """Collect query parameters from API Gateway events.

    Handles both single and multi-value query string parameters.

    Args:
        event: The API Gateway event dictionary.

    Returns:
        Dictionary mapping parameter names to lists of values.
    """
    params: dict[str, list[str]] = {}
    single = event.get("queryStringParameters") or {}
    multi = event.get("multiValueQueryStringParameters") or {}

    for key, value in single.items():
        if value is None:
            continue
        params.setdefault(key, []).append(value)

    for key, values in multi.items():
        if not values:
            continue
        for value in values:
            if value is None or value in params.get(key, []):
                continue
            params.setdefault(key, []).append(value)

    return params


def read_body(event: Mapping[str, Any]) -> Optional[str]:
    """Return the raw request body as text.

    Base64 encoded bodies are decoded. A body that cannot be decoded
    is treated as absent.
    """
    body = event.get("body")
    if not body:
        return None
    if not event.get("isBase64Encoded"):
        return body
    try:
        return base64.b64decode(body, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None


def parse_json_object(body: Optional[str]) -> Optional[dict[str, Any]]:
    """Parse a request body as a JSON object.

    Returns:
        The parsed object, or None when the body is empty, is not valid
        JSON, or has a non-object root.
    """
    if not body:
        return None
    try:
        parsed = json.loads(body)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def is_blank(value: Optional[str]) -> bool:
    """Return True for None, empty, or whitespace-only strings."""
    return value is None or not value.strip()
