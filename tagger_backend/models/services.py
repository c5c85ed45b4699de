"""Service catalogue records."""

from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer

from .base import Entity

# Decimal in Python and MongoDB (Decimal128), a JSON number on the wire
Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class Service(Entity):
    """A service offered to customers; ``duration`` is in minutes."""

    name: str
    description: str
    price: Price
    duration: int
    category: str
    is_active: bool = True
