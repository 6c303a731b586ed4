"""Pytest configuration and fixtures for the place lookup tests.

This module provides API Gateway event factories, service settings and
a recording stub of the OS Data Hub API built on ``httpx.MockTransport``.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any
from typing import Callable
from typing import Generator
from typing import Mapping
from typing import Optional
from uuid import uuid4

import httpx
import pytest

# Add backend source to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))


# --- Environment Fixtures ---


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch) -> None:
    """Keep deployment variables from leaking into tests."""
    for name in (
        'OS_DATA_HUB_API_KEY',
        'OS_DATA_HUB_API_KEY_SECRET_ARN',
        'OS_DATA_HUB_BASE_URL',
        'OS_DATA_HUB_TIMEOUT_SECONDS',
        'CORS_ALLOWED_ORIGINS',
        'APP_VERSION',
        'ENVIRONMENT',
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def clear_caches() -> Generator:
    """Reset the module-level Secrets Manager cache between tests."""
    from place_lookup.services.secrets import clear_secret_cache

    clear_secret_cache()
    yield
    clear_secret_cache()


# --- Settings Fixtures ---


@pytest.fixture
def settings():
    """Settings with a usable API key."""
    from place_lookup.config import LookupSettings

    return LookupSettings(api_key='test-key')


# --- Upstream Stub ---


class RecordingUpstream:
    """Stub OS Data Hub that records every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._respond: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={})
        )

    def respond_with(self, status_code: int, **kwargs: Any) -> None:
        """Answer every request with a fresh ``httpx.Response``."""
        self._respond = lambda request: httpx.Response(status_code, **kwargs)

    def raise_error(self, exc_factory: Callable[[httpx.Request], Exception]) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc_factory(request)

        self._respond = _raise

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)


@pytest.fixture
def upstream() -> RecordingUpstream:
    return RecordingUpstream()


@pytest.fixture
def run_lookup(upstream: RecordingUpstream):
    """Run the lookup handler against the recording upstream."""
    from place_lookup.api.location_lookup import LocationLookupHandler
    from place_lookup.services.os_data_hub import OsDataHubClient
    from place_lookup.services.os_data_hub import create_http_client

    def _run(event: Mapping[str, Any], settings) -> dict[str, Any]:
        async def _handle() -> dict[str, Any]:
            async with create_http_client(settings, transport=upstream.transport) as http:
                handler = LocationLookupHandler(settings, OsDataHubClient(http))
                return await handler.handle(event)

        return asyncio.run(_handle())

    return _run


# --- API Event Fixtures ---


def make_event(
    location: Optional[str] = None,
    body: Optional[str] = None,
    method: str = 'GET',
    is_base64: bool = False,
) -> dict[str, Any]:
    """Create an API Gateway proxy event for the lookup route."""
    return {
        'httpMethod': method,
        'path': '/api/getWeather',
        'queryStringParameters': {'location': location} if location is not None else None,
        'multiValueQueryStringParameters': (
            {'location': [location]} if location is not None else None
        ),
        'headers': {},
        'requestContext': {
            'requestId': str(uuid4()),
        },
        'body': body,
        'isBase64Encoded': is_base64,
    }
