"""Lambda entrypoint for the health check endpoint."""

from __future__ import annotations

from typing import Any
from typing import Mapping

from place_lookup.api.health import lambda_handler as _handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    return _handler(dict(event), context)
