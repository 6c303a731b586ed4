"""Lambda entrypoint for the location lookup proxy."""

from __future__ import annotations

from typing import Any
from typing import Mapping

from place_lookup.api.location_lookup import lambda_handler as _handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Delegate to the location lookup handler."""

    return _handler(event, context)
