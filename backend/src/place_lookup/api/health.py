"""Health check endpoint for monitoring and alerting.

Only local configuration is checked; the upstream API is never called,
so health probes do not spend OS Data Hub quota.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Optional

from place_lookup.config import API_KEY_ENV_VAR
from place_lookup.config import LookupSettings


@dataclass
class HealthCheck:
    """Result of a single health check."""

    name: str
    healthy: bool
    error: Optional[str] = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "name": self.name,
            "healthy": self.healthy,
        }
        if self.error:
            result["error"] = self.error
        if self.details:
            result["details"] = self.details
        return result


@dataclass
class HealthStatus:
    """Overall health status of the service."""

    healthy: bool
    checks: list[HealthCheck]
    version: str
    environment: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "healthy": self.healthy,
            "version": self.version,
            "environment": self.environment,
        }
        if self.checks:
            result["checks"] = [check.to_dict() for check in self.checks]
        return result


def check_health(
    settings: LookupSettings,
    include_details: bool = False,
) -> HealthStatus:
    """Perform all health checks and return overall status."""
    checks = [_check_configuration(settings)]

    return HealthStatus(
        healthy=all(check.healthy for check in checks),
        checks=checks if include_details else [],
        version=os.getenv("APP_VERSION", "unknown"),
        environment=os.getenv("ENVIRONMENT", "unknown"),
    )


def _check_configuration(settings: LookupSettings) -> HealthCheck:
    """Check that the OS Data Hub API key is set."""
    if not settings.has_api_key:
        return HealthCheck(
            name="configuration",
            healthy=False,
            error=f"{API_KEY_ENV_VAR} is missing or still a placeholder",
        )

    return HealthCheck(
        name="configuration",
        healthy=True,
        details={
            "base_url": settings.base_url,
            "timeout_seconds": settings.timeout_seconds,
        },
    )


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Lambda handler for health check endpoint.

    Args:
        event: API Gateway event.
        context: Lambda context.

    Returns:
        API Gateway response with health status.
    """
    from place_lookup.utils.responses import json_response

    include_details = (event.get("queryStringParameters", {}) or {}).get(
        "details"
    ) == "true"

    status = check_health(LookupSettings.from_env(), include_details=include_details)

    # Return 200 for healthy, 503 for unhealthy
    status_code = 200 if status.healthy else 503

    return json_response(status_code, status.to_dict(), event=event)
