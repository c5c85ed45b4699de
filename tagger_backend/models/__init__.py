"""
Entity models.

Pydantic models for every stored record type, serialised with camelCase
field names.
"""

from .base import Entity, utc_now
from .drivers import Driver, GeoPoint
from .services import Service
from .users import User
from .vehicles import Vehicle, VehicleColor, VehicleType

__all__ = [
    "Entity",
    "utc_now",
    "User",
    "Driver",
    "GeoPoint",
    "Vehicle",
    "VehicleColor",
    "VehicleType",
    "Service",
]
