"""
FastAPI Dependencies

Usage:
    from fastapi import Depends
    from tagger_backend.dependencies import get_repository_registry

    @router.get("/drivers/count")
    async def count_drivers(registry: RepositoryRegistry = Depends(get_repository_registry)):
        return len(await registry.driver.list_all())
"""

import logging

from fastapi import HTTPException, Request, status

from .observability import HealthChecker
from .repositories import RepositoryRegistry

logger = logging.getLogger(__name__)


async def get_repository_registry(request: Request) -> RepositoryRegistry:
    """Get the process-wide repository registry from app state."""
    registry = getattr(request.app.state, "repositories", None)
    if registry is None:
        logger.error("Repository registry requested before startup completed")
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, "Repositories not initialized")
    return registry


async def get_health_checker(request: Request) -> HealthChecker:
    """Get the health checker from app state."""
    checker = getattr(request.app.state, "health_checker", None)
    if checker is None:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, "Health checker not initialized")
    return checker
