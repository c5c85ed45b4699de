"""
MongoDB connection lifecycle.

One motor client per process: opened and pinged when the application
starts, shared by every repository, closed when it stops.
"""

import logging
import time

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from ..constants import (
    DEFAULT_MAX_IDLE_TIME_MS,
    DEFAULT_MAX_POOL_SIZE,
    DEFAULT_MIN_POOL_SIZE,
    DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
    MONGO_APP_NAME,
)
from ..exceptions import InitializationError
from ..observability import get_logger as get_contextual_logger
from ..observability import record_operation

logger = logging.getLogger(__name__)
contextual_logger = get_contextual_logger(__name__)


class ConnectionManager:
    """
    Owns the process-wide ``AsyncIOMotorClient``.

    Usage:
        manager = ConnectionManager("mongodb://localhost:27017", "tagger")
        await manager.initialize()
        drivers = manager.mongo_db["drivers"]
        ...
        await manager.shutdown()
    """

    def __init__(
        self,
        mongo_uri: str,
        db_name: str,
        max_pool_size: int = DEFAULT_MAX_POOL_SIZE,
        min_pool_size: int = DEFAULT_MIN_POOL_SIZE,
        server_selection_timeout_ms: int = DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
    ) -> None:
        self.mongo_uri = mongo_uri
        self.db_name = db_name
        self.max_pool_size = max_pool_size
        self.min_pool_size = min_pool_size
        self.server_selection_timeout_ms = server_selection_timeout_ms

        self._mongo_client: AsyncIOMotorClient | None = None
        self._mongo_db: AsyncIOMotorDatabase | None = None

    @property
    def initialized(self) -> bool:
        return self._mongo_db is not None

    @property
    def mongo_client(self) -> AsyncIOMotorClient:
        """
        The open client.

        Raises:
            RuntimeError: Before ``initialize()`` or after ``shutdown()``
        """
        if self._mongo_client is None or not self.initialized:
            raise RuntimeError("ConnectionManager not initialized. Call initialize() first.")
        return self._mongo_client

    @property
    def mongo_db(self) -> AsyncIOMotorDatabase:
        """
        The configured database.

        Raises:
            RuntimeError: Before ``initialize()`` or after ``shutdown()``
        """
        if self._mongo_db is None:
            raise RuntimeError("ConnectionManager not initialized. Call initialize() first.")
        return self._mongo_db

    def _create_client(self) -> AsyncIOMotorClient:
        return AsyncIOMotorClient(
            self.mongo_uri,
            appname=MONGO_APP_NAME,
            serverSelectionTimeoutMS=self.server_selection_timeout_ms,
            maxPoolSize=self.max_pool_size,
            minPoolSize=self.min_pool_size,
            maxIdleTimeMS=DEFAULT_MAX_IDLE_TIME_MS,
            retryWrites=True,
            retryReads=True,
            # datetimes come back UTC-aware
            tz_aware=True,
        )

    async def initialize(self) -> None:
        """
        Open the client and ping the server. A second call is a no-op.

        Raises:
            InitializationError: If the server is unreachable or the client
                cannot be built from the configured options
        """
        if self.initialized:
            logger.warning("ConnectionManager already initialized. Skipping re-initialization.")
            return

        contextual_logger.info(
            "Connecting to MongoDB",
            extra={
                "db_name": self.db_name,
                "pool_size": f"{self.min_pool_size}-{self.max_pool_size}",
            },
        )
        start_time = time.time()
        try:
            self._mongo_client = self._create_client()
            await self._mongo_client.admin.command("ping")
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            raise self._failed(start_time, e, f"Failed to connect to MongoDB: {e}") from e
        except (TypeError, ValueError, AttributeError, KeyError) as e:
            raise self._failed(
                start_time, e, f"ConnectionManager initialization failed: {e}"
            ) from e

        self._mongo_db = self._mongo_client[self.db_name]
        duration_ms = (time.time() - start_time) * 1000
        record_operation("connection.initialize", duration_ms, success=True)
        contextual_logger.info(
            "MongoDB connection ready",
            extra={"db_name": self.db_name, "duration_ms": round(duration_ms, 2)},
        )

    def _failed(self, start_time: float, error: Exception, message: str) -> InitializationError:
        """Record and log a failed initialize, release the client, build the error."""
        duration_ms = (time.time() - start_time) * 1000
        record_operation("connection.initialize", duration_ms, success=False)
        contextual_logger.critical(
            "MongoDB connection failed",
            extra={
                "error_type": type(error).__name__,
                "error": str(error),
                "duration_ms": round(duration_ms, 2),
            },
            exc_info=True,
        )
        self._close_client()
        return InitializationError(
            message,
            mongo_uri=self.mongo_uri,
            db_name=self.db_name,
            context={
                "error_type": type(error).__name__,
                "max_pool_size": self.max_pool_size,
                "min_pool_size": self.min_pool_size,
            },
        )

    def _close_client(self) -> None:
        if self._mongo_client is not None:
            self._mongo_client.close()
        self._mongo_client = None
        self._mongo_db = None

    async def shutdown(self) -> None:
        """Close the client. Safe to call repeatedly or before ``initialize()``."""
        if not self.initialized:
            return

        start_time = time.time()
        self._close_client()
        duration_ms = (time.time() - start_time) * 1000
        record_operation("connection.shutdown", duration_ms, success=True)
        contextual_logger.info("MongoDB connection closed")
