"""Runtime settings for the place lookup service.

Settings are resolved from the environment once per invocation and
passed into the handler, so the handler itself never reads ``os.environ``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from botocore.exceptions import BotoCoreError
from botocore.exceptions import ClientError

from place_lookup.services.secrets import get_api_key
from place_lookup.utils.logging import get_logger
from place_lookup.utils.logging import mask_secret

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.os.uk/"
DEFAULT_TIMEOUT_SECONDS = 10.0

API_KEY_ENV_VAR = "OS_DATA_HUB_API_KEY"
API_KEY_SECRET_ENV_VAR = "OS_DATA_HUB_API_KEY_SECRET_ARN"
BASE_URL_ENV_VAR = "OS_DATA_HUB_BASE_URL"
TIMEOUT_ENV_VAR = "OS_DATA_HUB_TIMEOUT_SECONDS"

# Deployment templates ship "<your-api-key>" until an operator fills it in.
PLACEHOLDER_PREFIX = "<"


def is_api_key_configured(api_key: Optional[str]) -> bool:
    """Return True when the key is present and not a template placeholder."""
    if api_key is None:
        return False
    stripped = api_key.strip()
    return bool(stripped) and not stripped.startswith(PLACEHOLDER_PREFIX)


@dataclass(frozen=True)
class LookupSettings:
    """Settings for the OS Data Hub proxy."""

    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def has_api_key(self) -> bool:
        return is_api_key_configured(self.api_key)

    @classmethod
    def from_env(cls) -> "LookupSettings":
        """Build settings from environment variables.

        The API key is read from ``OS_DATA_HUB_API_KEY``. When that is
        unset, ``OS_DATA_HUB_API_KEY_SECRET_ARN`` names a Secrets Manager
        secret holding ``{"api_key": ...}``. A failed secret lookup is
        logged and leaves the key unset.
        """
        api_key = os.getenv(API_KEY_ENV_VAR)
        secret_arn = os.getenv(API_KEY_SECRET_ENV_VAR, "").strip()
        if api_key is None and secret_arn:
            api_key = _load_api_key_secret(secret_arn)

        return cls(
            api_key=api_key,
            base_url=os.getenv(BASE_URL_ENV_VAR) or DEFAULT_BASE_URL,
            timeout_seconds=_parse_timeout(os.getenv(TIMEOUT_ENV_VAR)),
        )


def _load_api_key_secret(secret_arn: str) -> Optional[str]:
    try:
        api_key = get_api_key(secret_arn)
    except (BotoCoreError, ClientError, RuntimeError):
        logger.exception("Failed to load OS Data Hub API key from Secrets Manager")
        return None
    logger.debug(f"Loaded OS Data Hub API key {mask_secret(api_key)} from Secrets Manager")
    return api_key


def _parse_timeout(value: Optional[str]) -> float:
    if value is None or value.strip() == "":
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(value)
    except ValueError:
        logger.warning(f"Ignoring invalid {TIMEOUT_ENV_VAR}: {value!r}")
        return DEFAULT_TIMEOUT_SECONDS
    if timeout <= 0:
        logger.warning(f"Ignoring non-positive {TIMEOUT_ENV_VAR}: {value!r}")
        return DEFAULT_TIMEOUT_SECONDS
    return timeout
