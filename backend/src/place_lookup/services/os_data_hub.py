"""OS Data Hub Names API client.

Wraps an ``httpx.AsyncClient`` configured with the Data Hub base URL
and a JSON ``Accept`` header. The client is injected so tests can swap
in an ``httpx.MockTransport``.
"""

from __future__ import annotations

from typing import Any
from typing import Optional
from urllib.parse import quote

import httpx

from place_lookup.config import LookupSettings
from place_lookup.exceptions import UpstreamResponseError
from place_lookup.exceptions import UpstreamStatusError
from place_lookup.exceptions import UpstreamUnavailableError

FIND_PATH = "search/names/v1/find"


def create_http_client(
    settings: LookupSettings,
    timeout_seconds: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create an async HTTP client pointed at the OS Data Hub base URL.

    Args:
        settings: Service settings providing the base URL and timeout.
        timeout_seconds: Overrides ``settings.timeout_seconds``.
        transport: Optional transport, used by tests to stub the upstream.
    """
    timeout = timeout_seconds if timeout_seconds is not None else settings.timeout_seconds
    return httpx.AsyncClient(
        base_url=settings.base_url,
        headers={"Accept": "application/json"},
        timeout=httpx.Timeout(timeout),
        transport=transport,
    )


def build_find_url(location: str, api_key: str) -> str:
    """Build the relative Names API ``find`` URL.

    Both values are escaped as URI data strings: unreserved characters
    stay literal and spaces become ``%20``.
    """
    return f"{FIND_PATH}?query={quote(location, safe='')}&key={quote(api_key, safe='')}"


class OsDataHubClient:
    """Thin async client for the OS Data Hub Names search."""

    def __init__(self, http_client: httpx.AsyncClient):
        self._http = http_client

    async def find_names(self, location: str, api_key: str) -> Any:
        """Search OS Names for ``location`` and return the decoded JSON.

        Raises:
            UpstreamStatusError: Data Hub answered with a non-2xx status.
            UpstreamUnavailableError: The request never got an answer.
            UpstreamResponseError: The body could not be decoded, or a 2xx
                body was not valid JSON.
        """
        try:
            response = await self._http.get(build_find_url(location, api_key))
        except httpx.DecodingError as exc:
            raise UpstreamResponseError(str(exc) or type(exc).__name__) from exc
        except httpx.RequestError as exc:
            raise UpstreamUnavailableError(str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            raise UpstreamStatusError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamResponseError(str(exc)) from exc
