"""
HTTP routing.

``build_resource_router`` turns one resource definition into the five CRUD
routes; importing this package registers the ``objectid`` path convertor.
"""

from .convertors import ObjectIdConvertor
from .crud import build_resource_router

__all__ = ["ObjectIdConvertor", "build_resource_router"]
