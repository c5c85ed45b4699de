"""
Resource catalogue.

Every HTTP resource is declared here once: its path name, its entity model
and the configuration setting naming its collection. Routers and
repositories are both built from this list.
"""

from dataclasses import dataclass

from .models import Driver, Entity, Service, User, Vehicle, VehicleColor, VehicleType


@dataclass(frozen=True)
class ResourceDefinition:
    """One CRUD resource: ``/api/{name}`` backed by one collection."""

    name: str
    entity_class: type[Entity]
    collection_setting: str


RESOURCES: tuple[ResourceDefinition, ...] = (
    ResourceDefinition("user", User, "users_collection_name"),
    ResourceDefinition("driver", Driver, "drivers_collection_name"),
    ResourceDefinition("vehicle", Vehicle, "vehicles_collection_name"),
    ResourceDefinition("service", Service, "services_collection_name"),
    ResourceDefinition("vehiclecolor", VehicleColor, "vehicle_colors_collection_name"),
    ResourceDefinition("vehicletype", VehicleType, "vehicle_types_collection_name"),
)
