"""User records."""

from .base import Entity


class User(Entity):
    """A registered user of the platform."""

    name: str
    email: str
    phone: str
    is_active: bool = True
