"""
FastAPI application factory.

``create_app()`` wires every resource router, the correlation middleware and
the ``/health`` and ``/metrics`` endpoints. On startup the lifespan opens the
process-wide MongoDB connection and builds one repository per resource;
passing a ready ``RepositoryRegistry`` skips MongoDB entirely (tests, local
runs with in-memory repositories).
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, status
from fastapi.responses import JSONResponse

from . import __version__
from .config import AppConfig
from .database import ConnectionManager
from .dependencies import get_health_checker
from .middleware import CorrelationIdMiddleware
from .observability import (
    HealthChecker,
    HealthCheckResult,
    HealthStatus,
    check_mongodb_health,
    get_logger,
    get_metrics_collector,
)
from .repositories import RepositoryRegistry
from .resources import RESOURCES
from .routing import build_resource_router

logger = logging.getLogger(__name__)
contextual_logger = get_logger(__name__)


def create_app(
    config: AppConfig | None = None,
    registry: RepositoryRegistry | None = None,
) -> FastAPI:
    """
    Create the Tagger backend application.

    Args:
        config: Application configuration (defaults to environment-based AppConfig)
        registry: Prebuilt repositories; when given, no MongoDB connection is made

    Returns:
        Configured FastAPI application
    """
    config = config or AppConfig()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        health_checker = HealthChecker()
        app.state.health_checker = health_checker
        manager: ConnectionManager | None = None

        if registry is not None:
            app.state.repositories = registry
            logger.info("Using provided repository registry; MongoDB connection skipped")
        else:
            config.validate()
            manager = ConnectionManager(
                mongo_uri=config.mongo_uri,
                db_name=config.db_name,
                max_pool_size=config.max_pool_size,
                min_pool_size=config.min_pool_size,
                server_selection_timeout_ms=config.server_selection_timeout_ms,
            )
            await manager.initialize()
            app.state.repositories = RepositoryRegistry.from_database(manager.mongo_db, config)

            async def mongodb() -> HealthCheckResult:
                return await check_mongodb_health(manager.mongo_client)

            health_checker.register_check(mongodb)

        contextual_logger.info(
            "Tagger backend started",
            extra={"resources": [resource.name for resource in RESOURCES]},
        )
        try:
            yield
        finally:
            if manager is not None:
                await manager.shutdown()
            app.state.repositories = None
            logger.info("Tagger backend stopped")

    app = FastAPI(
        title="Tagger Backend",
        description="CRUD API for users, drivers, vehicles, services and vehicle lookups",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(CorrelationIdMiddleware)

    for resource in RESOURCES:
        app.include_router(build_resource_router(resource.name, resource.entity_class))

    @app.get("/health", tags=["observability"])
    async def health(checker: HealthChecker = Depends(get_health_checker)):
        report = await checker.check_all()
        status_code = (
            status.HTTP_200_OK
            if report["status"] == HealthStatus.HEALTHY.value
            else status.HTTP_503_SERVICE_UNAVAILABLE
        )
        return JSONResponse(report, status_code=status_code)

    @app.get("/metrics", tags=["observability"])
    async def metrics():
        return get_metrics_collector().get_summary()

    return app
