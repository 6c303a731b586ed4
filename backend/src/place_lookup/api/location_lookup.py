"""Lambda handler for the location lookup proxy.

Accepts a ``location`` (query string or JSON body), forwards it to the
OS Data Hub Names API and returns the upstream JSON wrapped with the
resolved location and a source label.

The API Gateway route is still called ``/api/getWeather`` for existing
clients; the endpoint performs a place-name search, not a weather lookup.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any
from typing import Mapping
from typing import Optional

from place_lookup.api.schemas import LookupBodySchema
from place_lookup.api.schemas import LookupResponseSchema
from place_lookup.config import LookupSettings
from place_lookup.exceptions import AppError
from place_lookup.exceptions import ConfigurationError
from place_lookup.exceptions import UpstreamStatusError
from place_lookup.exceptions import UpstreamUnavailableError
from place_lookup.exceptions import ValidationError
from place_lookup.services.os_data_hub import OsDataHubClient
from place_lookup.services.os_data_hub import create_http_client
from place_lookup.utils.logging import clear_request_context
from place_lookup.utils.logging import configure_logging
from place_lookup.utils.logging import get_logger
from place_lookup.utils.logging import log_lambda_event
from place_lookup.utils.logging import log_response
from place_lookup.utils.logging import set_request_context
from place_lookup.utils.parsers import collect_query_params
from place_lookup.utils.parsers import first_param
from place_lookup.utils.parsers import is_blank
from place_lookup.utils.parsers import parse_json_object
from place_lookup.utils.parsers import read_body
from place_lookup.utils.responses import error_response
from place_lookup.utils.responses import json_response

# Configure logging on module load
configure_logging()
logger = get_logger(__name__)

MISSING_LOCATION_MESSAGE = (
    "Missing required parameter 'location'. Pass it as a query string or JSON body."
)

# Leave the runtime enough time to serialize the 502 before it is killed.
TIMEOUT_SAFETY_MARGIN_SECONDS = 0.5
MIN_UPSTREAM_TIMEOUT_SECONDS = 0.1


def extract_location(event: Mapping[str, Any]) -> Optional[str]:
    """Resolve the requested location from the event.

    The ``location`` query parameter wins when it is not blank. Otherwise
    a JSON object body with a string ``location`` is used. A body that is
    not valid JSON is ignored.
    """
    location = first_param(collect_query_params(event), "location")
    if not is_blank(location):
        return location

    body_location = LookupBodySchema.location_from(parse_json_object(read_body(event)))
    if not is_blank(body_location):
        return body_location

    return None


class LocationLookupHandler:
    """Proxies location lookups to OS Data Hub.

    Args:
        settings: Resolved service settings; only ``api_key`` is read here.
        client: Upstream client used for the Names search.
    """

    def __init__(self, settings: LookupSettings, client: OsDataHubClient):
        self._settings = settings
        self._client = client

    async def handle(self, event: Mapping[str, Any]) -> dict[str, Any]:
        """Handle one API Gateway event and return the proxy response."""
        location: Optional[str] = None
        try:
            location = extract_location(event)
            if location is None:
                raise ValidationError(MISSING_LOCATION_MESSAGE)

            logger.info(f"Looking up location: {location}", extra={"location": location})

            if not self._settings.has_api_key:
                logger.error("OS_DATA_HUB_API_KEY is not configured.")
                raise ConfigurationError()

            data = await self._client.find_names(location, self._settings.api_key or "")
            result = LookupResponseSchema(location=location, data=data)
            return json_response(200, result, event=event)
        except UpstreamStatusError as exc:
            logger.warning(
                f"OS Data Hub API returned {exc.status_code}: {exc.body}",
                extra={"status_code": exc.status_code, "location": location},
            )
            return error_response(exc.status_code, exc.message, exc.detail, event=event)
        except UpstreamUnavailableError as exc:
            logger.error(
                f"Error calling OS Data Hub API for location '{location}': {exc.detail}",
                exc_info=exc.__cause__ or exc,
                extra={"location": location},
            )
            return error_response(exc.status_code, exc.message, exc.detail, event=event)
        except AppError as exc:
            if exc.status_code >= 500 and not isinstance(exc, ConfigurationError):
                logger.error(f"{exc.message} {exc.detail or ''}".strip())
            return error_response(exc.status_code, exc.message, exc.detail, event=event)
        except Exception as exc:  # pragma: no cover - safety net
            logger.exception("Unexpected error in location lookup")
            return error_response(500, "Internal server error", str(exc), event=event)


def _upstream_timeout(settings: LookupSettings, context: Any) -> float:
    """Cap the upstream timeout by the time left in this invocation."""
    get_remaining = getattr(context, "get_remaining_time_in_millis", None)
    if get_remaining is None:
        return settings.timeout_seconds
    remaining = get_remaining() / 1000 - TIMEOUT_SAFETY_MARGIN_SECONDS
    return max(MIN_UPSTREAM_TIMEOUT_SECONDS, min(settings.timeout_seconds, remaining))


async def _handle_async(
    event: Mapping[str, Any],
    settings: LookupSettings,
    timeout_seconds: float,
) -> dict[str, Any]:
    async with create_http_client(settings, timeout_seconds=timeout_seconds) as http:
        handler = LocationLookupHandler(settings, OsDataHubClient(http))
        return await handler.handle(event)


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Handle API Gateway request for a location lookup."""

    request_id = (event.get("requestContext") or {}).get("requestId", "")
    headers = event.get("headers") or {}
    correlation = headers.get("x-correlation-id") or headers.get("X-Correlation-Id")
    set_request_context(req_id=request_id, corr_id=correlation)
    start_time = time.perf_counter()

    try:
        log_lambda_event(logger, event)
        settings = LookupSettings.from_env()
        response = asyncio.run(
            _handle_async(event, settings, _upstream_timeout(settings, context))
        )
        log_response(
            logger,
            response["statusCode"],
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )
        return response
    finally:
        clear_request_context()
