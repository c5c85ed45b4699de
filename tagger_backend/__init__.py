"""
Tagger Backend

CRUD HTTP API over MongoDB for users, drivers, vehicles, services and the
vehicle color/type lookups.
"""

__version__ = "0.1.0"

from .app import create_app  # noqa: E402
from .config import AppConfig  # noqa: E402
from .models import (  # noqa: E402
    Driver,
    Entity,
    GeoPoint,
    Service,
    User,
    Vehicle,
    VehicleColor,
    VehicleType,
)
from .repositories import (  # noqa: E402
    InMemoryRepository,
    MongoRepository,
    Repository,
    RepositoryRegistry,
)

__all__ = [
    # Application
    "create_app",
    "AppConfig",
    # Models
    "Entity",
    "User",
    "Driver",
    "GeoPoint",
    "Vehicle",
    "VehicleColor",
    "VehicleType",
    "Service",
    # Repositories
    "Repository",
    "InMemoryRepository",
    "MongoRepository",
    "RepositoryRegistry",
]
