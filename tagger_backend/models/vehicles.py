"""
Vehicle records and the color/type lookups they reference.

``colorId`` and ``typeId`` hold the identifiers of VehicleColor and
VehicleType documents. They are stored as ObjectIds but never checked for
existence, so dangling references are possible.
"""

from typing import ClassVar

from .base import Entity


class VehicleColor(Entity):
    """Lookup entry for a vehicle color."""

    name: str
    hex_code: str | None = None
    is_active: bool = True


class VehicleType(Entity):
    """Lookup entry for a vehicle type (sedan, minivan, ...)."""

    name: str
    description: str | None = None
    is_active: bool = True


class Vehicle(Entity):
    """A registered vehicle."""

    object_id_fields: ClassVar[tuple[str, ...]] = ("colorId", "typeId")

    plate_number: str
    brand: str
    model: str
    year: int
    color_id: str
    type_id: str
    is_active: bool = True
