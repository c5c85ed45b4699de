"""
Configuration management for the Tagger backend.

Settings come from constructor arguments first, then environment variables,
then defaults. Call ``load_dotenv()`` before building an ``AppConfig`` to pick
up a local ``.env`` file.
"""

import os
from collections.abc import Callable
from typing import Any

from .constants import (
    DEFAULT_DRIVERS_COLLECTION,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_POOL_SIZE,
    DEFAULT_MIN_POOL_SIZE,
    DEFAULT_PORT,
    DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
    DEFAULT_SERVICES_COLLECTION,
    DEFAULT_USERS_COLLECTION,
    DEFAULT_VEHICLE_COLORS_COLLECTION,
    DEFAULT_VEHICLE_TYPES_COLLECTION,
    DEFAULT_VEHICLES_COLLECTION,
    MIN_SERVER_SELECTION_TIMEOUT_MS,
)
from .exceptions import ConfigurationError

COLLECTION_SETTINGS: tuple[str, ...] = (
    "users_collection_name",
    "drivers_collection_name",
    "vehicles_collection_name",
    "services_collection_name",
    "vehicle_colors_collection_name",
    "vehicle_types_collection_name",
)


def _setting(value: Any, env_var: str, default: Any, cast: Callable[[str], Any] = str) -> Any:
    """An explicit argument (even ``0`` or ``""``) wins over ``env_var``, then ``default``."""
    if value is not None:
        return value
    raw = os.getenv(env_var)
    return default if raw is None else cast(raw)


class AppConfig:
    """
    Tagger backend configuration.

    Example:
        # Using environment variables
        config = AppConfig()

        # Or using direct parameters
        config = AppConfig(
            mongo_uri="mongodb://localhost:27017",
            db_name="tagger",
            drivers_collection_name="drivers",
        )
    """

    def __init__(
        self,
        mongo_uri: str | None = None,
        db_name: str | None = None,
        users_collection_name: str | None = None,
        drivers_collection_name: str | None = None,
        vehicles_collection_name: str | None = None,
        services_collection_name: str | None = None,
        vehicle_colors_collection_name: str | None = None,
        vehicle_types_collection_name: str | None = None,
        max_pool_size: int | None = None,
        min_pool_size: int | None = None,
        server_selection_timeout_ms: int | None = None,
        host: str | None = None,
        port: int | None = None,
        log_level: str | None = None,
    ):
        """
        Initialize configuration.

        Args:
            mongo_uri: MongoDB connection URI (defaults to MONGO_URI env var)
            db_name: Database name (defaults to DB_NAME env var)
            users_collection_name: Users collection (USERS_COLLECTION_NAME)
            drivers_collection_name: Drivers collection (DRIVERS_COLLECTION_NAME)
            vehicles_collection_name: Vehicles collection (VEHICLES_COLLECTION_NAME)
            services_collection_name: Services collection (SERVICES_COLLECTION_NAME)
            vehicle_colors_collection_name: Vehicle colors collection
                (VEHICLE_COLORS_COLLECTION_NAME)
            vehicle_types_collection_name: Vehicle types collection
                (VEHICLE_TYPES_COLLECTION_NAME)
            max_pool_size: Maximum connection pool size (defaults to 50 or MONGO_MAX_POOL_SIZE)
            min_pool_size: Minimum connection pool size (defaults to 10 or MONGO_MIN_POOL_SIZE)
            server_selection_timeout_ms: Server selection timeout in ms (defaults to 5000)
            host: Interface the HTTP server binds to (defaults to HOST or 0.0.0.0)
            port: HTTP port (defaults to PORT or 8000)
            log_level: Root log level name (defaults to LOG_LEVEL or INFO)
        """
        self.mongo_uri = _setting(mongo_uri, "MONGO_URI", "")
        self.db_name = _setting(db_name, "DB_NAME", "")

        self.users_collection_name = _setting(
            users_collection_name, "USERS_COLLECTION_NAME", DEFAULT_USERS_COLLECTION
        )
        self.drivers_collection_name = _setting(
            drivers_collection_name, "DRIVERS_COLLECTION_NAME", DEFAULT_DRIVERS_COLLECTION
        )
        self.vehicles_collection_name = _setting(
            vehicles_collection_name, "VEHICLES_COLLECTION_NAME", DEFAULT_VEHICLES_COLLECTION
        )
        self.services_collection_name = _setting(
            services_collection_name, "SERVICES_COLLECTION_NAME", DEFAULT_SERVICES_COLLECTION
        )
        self.vehicle_colors_collection_name = _setting(
            vehicle_colors_collection_name,
            "VEHICLE_COLORS_COLLECTION_NAME",
            DEFAULT_VEHICLE_COLORS_COLLECTION,
        )
        self.vehicle_types_collection_name = _setting(
            vehicle_types_collection_name,
            "VEHICLE_TYPES_COLLECTION_NAME",
            DEFAULT_VEHICLE_TYPES_COLLECTION,
        )

        self.max_pool_size = _setting(
            max_pool_size, "MONGO_MAX_POOL_SIZE", DEFAULT_MAX_POOL_SIZE, int
        )
        self.min_pool_size = _setting(
            min_pool_size, "MONGO_MIN_POOL_SIZE", DEFAULT_MIN_POOL_SIZE, int
        )
        self.server_selection_timeout_ms = _setting(
            server_selection_timeout_ms,
            "MONGO_SERVER_SELECTION_TIMEOUT_MS",
            DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
            int,
        )

        self.host = _setting(host, "HOST", DEFAULT_HOST)
        self.port = _setting(port, "PORT", DEFAULT_PORT, int)
        self.log_level = _setting(log_level, "LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    def collection_name(self, setting: str) -> str:
        """
        Resolve the collection name configured under ``setting``.

        Raises:
            ConfigurationError: If ``setting`` is not a collection setting
        """
        if setting not in COLLECTION_SETTINGS:
            raise ConfigurationError(
                f"Unknown collection setting '{setting}'", config_key=setting
            )
        return getattr(self, setting)

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ConfigurationError: If required configuration is missing or invalid
        """
        if not self.mongo_uri:
            raise ConfigurationError(
                "mongo_uri is required (set MONGO_URI environment variable or pass directly)",
                config_key="mongo_uri",
            )

        if not self.db_name:
            raise ConfigurationError(
                "db_name is required (set DB_NAME environment variable or pass directly)",
                config_key="db_name",
            )

        for setting in COLLECTION_SETTINGS:
            if not getattr(self, setting).strip():
                raise ConfigurationError(
                    f"{setting} must not be empty", config_key=setting
                )

        if self.max_pool_size < 1:
            raise ConfigurationError(
                f"max_pool_size must be >= 1, got {self.max_pool_size}",
                config_key="max_pool_size",
                config_value=self.max_pool_size,
            )

        if self.min_pool_size < 1:
            raise ConfigurationError(
                f"min_pool_size must be >= 1, got {self.min_pool_size}",
                config_key="min_pool_size",
                config_value=self.min_pool_size,
            )

        if self.min_pool_size > self.max_pool_size:
            raise ConfigurationError(
                f"min_pool_size ({self.min_pool_size}) cannot be greater than "
                f"max_pool_size ({self.max_pool_size})",
                config_key="min_pool_size",
                config_value=self.min_pool_size,
            )

        if self.server_selection_timeout_ms < MIN_SERVER_SELECTION_TIMEOUT_MS:
            raise ConfigurationError(
                f"server_selection_timeout_ms must be >= {MIN_SERVER_SELECTION_TIMEOUT_MS}, "
                f"got {self.server_selection_timeout_ms}",
                config_key="server_selection_timeout_ms",
                config_value=self.server_selection_timeout_ms,
            )
