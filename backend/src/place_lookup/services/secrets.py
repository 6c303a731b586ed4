"""Secrets Manager lookup for the OS Data Hub API key.

The secret is expected to be a JSON object such as
``{"api_key": "..."}``. Values are cached for the lifetime of the
Lambda container, so warm invocations do not call Secrets Manager.
"""

from __future__ import annotations

import base64
import json
from typing import Any
from typing import Optional

import boto3

_SECRET_CACHE: dict[str, dict[str, Any]] = {}
_secretsmanager_client: Any = None


def _get_client() -> Any:
    global _secretsmanager_client
    if _secretsmanager_client is None:
        _secretsmanager_client = boto3.client("secretsmanager")
    return _secretsmanager_client


def get_secret_json(secret_arn: str) -> dict[str, Any]:
    """Fetch a secret from AWS Secrets Manager and parse JSON.

    Raises:
        RuntimeError: If the secret is empty or not a JSON object.
        botocore.exceptions.ClientError: If Secrets Manager rejects the call.
    """
    if secret_arn in _SECRET_CACHE:
        return _SECRET_CACHE[secret_arn]

    response = _get_client().get_secret_value(SecretId=secret_arn)
    secret_str = response.get("SecretString")
    if not secret_str and response.get("SecretBinary"):
        secret_str = base64.b64decode(response["SecretBinary"]).decode("utf-8")
    if not secret_str:
        raise RuntimeError("Secret value is empty")

    try:
        payload = json.loads(secret_str)
    except ValueError as exc:
        raise RuntimeError("Secret value is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise RuntimeError("Secret value is not a JSON object")

    _SECRET_CACHE[secret_arn] = payload
    return payload


def get_api_key(secret_arn: str, field: str = "api_key") -> Optional[str]:
    """Return the API key stored under ``field`` in the secret, if any."""
    value = get_secret_json(secret_arn).get(field)
    return value if isinstance(value, str) else None


def clear_secret_cache() -> None:
    """Clear cached secrets and the client (useful in tests)."""
    global _secretsmanager_client
    _SECRET_CACHE.clear()
    _secretsmanager_client = None
