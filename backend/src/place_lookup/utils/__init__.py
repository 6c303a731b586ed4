"""Utility modules for the place lookup service."""

from place_lookup.utils.parsers import (
    collect_query_params,
    first_param,
    is_blank,
    parse_json_object,
    read_body,
)
from place_lookup.utils.responses import error_response, json_response
from place_lookup.utils.logging import (
    configure_logging,
    get_logger,
    mask_secret,
    set_request_context,
    clear_request_context,
)

__all__ = [
    "clear_request_context",
    "collect_query_params",
    "configure_logging",
    "error_response",
    "first_param",
    "get_logger",
    "is_blank",
    "json_response",
    "mask_secret",
    "parse_json_object",
    "read_body",
    "set_request_context",
]
