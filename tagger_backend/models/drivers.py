"""
Driver records and the GeoJSON point used for their position.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from .base import Entity


class GeoPoint(BaseModel):
    """
    GeoJSON ``Point``.

    Coordinates are ``[longitude, latitude]``, e.g. ``[32.8597, 39.9334]``
    for Ankara.
    """

    type: Literal["Point"] = "Point"
    coordinates: list[float] = Field(..., min_length=2, max_length=2)

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]


class Driver(Entity):
    """A licensed driver."""

    name: str
    email: str
    phone: str
    license_number: str
    license_class: str
    license_expiry_date: datetime
    location: GeoPoint | None = None
