"""
Health checks.

A ``HealthChecker`` holds async check functions; ``/health`` runs them all
and reports the worst status. The only built-in check pings MongoDB.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pymongo.errors import PyMongoError

from ..constants import HEALTH_CHECK_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

HealthCheck = Callable[[], Awaitable["HealthCheckResult"]]


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
    UNKNOWN = "unknown"


@dataclass
class HealthCheckResult:
    """Outcome of one named check."""

    name: str
    status: HealthStatus
    message: str
    details: dict[str, Any] | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


def _overall_status(results: list[HealthCheckResult]) -> HealthStatus:
    statuses = {result.status for result in results}
    for status in (HealthStatus.UNHEALTHY, HealthStatus.DEGRADED, HealthStatus.UNKNOWN):
        if status in statuses:
            return status
    return HealthStatus.HEALTHY


class HealthChecker:
    """Registry of health checks, run in registration order."""

    def __init__(self):
        self._checks: list[HealthCheck] = []

    def register_check(self, check_func: HealthCheck) -> None:
        self._checks.append(check_func)

    async def _run(self, check_func: HealthCheck) -> HealthCheckResult:
        try:
            return await check_func()
        except (RuntimeError, ValueError, TypeError, AttributeError, OSError) as e:
            logger.error(f"Health check '{check_func.__name__}' raised: {e}", exc_info=True)
            return HealthCheckResult(
                name=check_func.__name__,
                status=HealthStatus.UNKNOWN,
                message=f"Check failed: {e}",
            )

    async def check_all(self) -> dict[str, Any]:
        """
        Run every check.

        Returns:
            ``{"status", "timestamp", "checks"}``; the status is the worst
            individual status (unhealthy, then degraded, then unknown), or
            healthy when every check passed or none is registered.
        """
        results = [await self._run(check_func) for check_func in self._checks]
        return {
            "status": _overall_status(results).value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": [result.to_dict() for result in results],
        }


async def check_mongodb_health(
    mongo_client: Any | None, timeout_seconds: float = HEALTH_CHECK_TIMEOUT_SECONDS
) -> HealthCheckResult:
    """
    Ping MongoDB through ``mongo_client``.

    Args:
        mongo_client: Motor client, or None when no connection was opened
        timeout_seconds: Upper bound on the ping round-trip
    """

    def unhealthy(message: str) -> HealthCheckResult:
        return HealthCheckResult(name="mongodb", status=HealthStatus.UNHEALTHY, message=message)

    if mongo_client is None:
        return unhealthy("MongoDB client not initialized")

    try:
        await asyncio.wait_for(mongo_client.admin.command("ping"), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        return unhealthy(f"MongoDB ping timed out after {timeout_seconds}s")
    except PyMongoError as e:
        return unhealthy(f"MongoDB health check failed: {e}")

    return HealthCheckResult(
        name="mongodb",
        status=HealthStatus.HEALTHY,
        message="MongoDB connection is healthy",
        details={"timeout_seconds": timeout_seconds},
    )
