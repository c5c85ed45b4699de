"""
Constants for the Tagger backend.

Shared defaults for connection pooling, collection names and HTTP plumbing.
"""

from typing import Final

# ============================================================================
# DATABASE CONSTANTS
# ============================================================================

DEFAULT_MAX_POOL_SIZE: Final[int] = 50
"""Default maximum MongoDB connection pool size."""

DEFAULT_MIN_POOL_SIZE: Final[int] = 10
"""Default minimum MongoDB connection pool size."""

DEFAULT_SERVER_SELECTION_TIMEOUT_MS: Final[int] = 5000
"""Default server selection timeout in milliseconds."""

MIN_SERVER_SELECTION_TIMEOUT_MS: Final[int] = 1000
"""Lowest accepted server selection timeout in milliseconds."""

DEFAULT_MAX_IDLE_TIME_MS: Final[int] = 45000
"""Default maximum idle time before closing connections (milliseconds)."""

MONGO_APP_NAME: Final[str] = "tagger-backend"
"""Application name reported to the MongoDB server."""

OBJECT_ID_LENGTH: Final[int] = 24
"""Length of a hex-encoded MongoDB ObjectId."""

# Default collection names, one per entity type
DEFAULT_USERS_COLLECTION: Final[str] = "users"
DEFAULT_DRIVERS_COLLECTION: Final[str] = "drivers"
DEFAULT_VEHICLES_COLLECTION: Final[str] = "vehicles"
DEFAULT_SERVICES_COLLECTION: Final[str] = "services"
DEFAULT_VEHICLE_COLORS_COLLECTION: Final[str] = "vehicleColors"
DEFAULT_VEHICLE_TYPES_COLLECTION: Final[str] = "vehicleTypes"

# ============================================================================
# HTTP CONSTANTS
# ============================================================================

API_PREFIX: Final[str] = "/api"
"""Path prefix shared by every resource route."""

CORRELATION_ID_HEADER: Final[str] = "X-Correlation-ID"
"""Request/response header carrying the correlation ID."""

DEFAULT_HOST: Final[str] = "0.0.0.0"
DEFAULT_PORT: Final[int] = 8000
DEFAULT_LOG_LEVEL: Final[str] = "INFO"

# ============================================================================
# OBSERVABILITY CONSTANTS
# ============================================================================

MAX_METRICS: Final[int] = 10000
"""Maximum number of distinct metric keys kept before LRU eviction."""

HEALTH_CHECK_TIMEOUT_SECONDS: Final[float] = 5.0
"""Timeout for the MongoDB ping issued by the health check."""
