"""
Abstract Repository Pattern

Defines the repository interface shared by every resource. Each repository
mediates access to one collection of a single entity type; "not found" is a
normal outcome (``None``/``False``), never an exception.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

import bson
from bson import ObjectId
from bson.codec_options import CodecOptions

from ..models import Entity

T = TypeVar("T", bound=Entity)

# read back the way the motor client is configured (tz_aware=True)
_CODEC_OPTIONS = CodecOptions(tz_aware=True)


class Repository(ABC, Generic[T]):
    """
    Abstract repository interface for one collection.

    Type parameter T should be an Entity subclass.
    """

    @abstractmethod
    async def list_all(self) -> list[T]:
        """
        Get every entity in the collection, in store-defined order.
        """

    @abstractmethod
    async def get(self, id: str) -> T | None:
        """
        Get a single entity by ID.

        Args:
            id: Entity ID

        Returns:
            Entity if found, None otherwise
        """

    @abstractmethod
    async def add(self, entity: T) -> str:
        """
        Insert a new entity.

        Any id already set on the entity is discarded; the store assigns a
        fresh one, which is written back to ``entity.id``.

        Args:
            entity: Entity to add

        Returns:
            ID of the created entity
        """

    @abstractmethod
    async def replace(self, id: str, entity: T) -> bool:
        """
        Overwrite the whole document with the given ID.

        ``entity.id`` is forced to ``id``. Fields missing from ``entity`` are
        not kept from the previous version.

        Args:
            id: Entity ID
            entity: Replacement entity

        Returns:
            True if a document matched, False otherwise
        """

    @abstractmethod
    async def delete(self, id: str) -> bool:
        """
        Delete an entity by ID.

        Args:
            id: Entity ID

        Returns:
            True if entity was deleted, False if not found
        """


class InMemoryRepository(Repository[T]):
    """
    In-memory repository implementation.

    Behaves like ``MongoRepository`` for tests and for running the API
    without MongoDB: valid ids match case-insensitively (as an ObjectId
    filter does) and documents go through a BSON encode/decode round-trip,
    so anything MongoDB would refuse to store fails here too.
    """

    def __init__(self, entity_class: type[T]):
        self._entity_class = entity_class
        self._storage: dict[str, dict[str, Any]] = {}

    @staticmethod
    def _key(id: str) -> str:
        return str(ObjectId(id)) if ObjectId.is_valid(id) else id

    @staticmethod
    def _encode(entity: T) -> dict[str, Any]:
        return bson.decode(bson.encode(entity.to_document()), codec_options=_CODEC_OPTIONS)

    async def list_all(self) -> list[T]:
        return [self._entity_class.from_document(doc) for doc in self._storage.values()]

    async def get(self, id: str) -> T | None:
        return self._entity_class.from_document(self._storage.get(self._key(id)))

    async def add(self, entity: T) -> str:
        entity.id = str(ObjectId())
        doc = self._encode(entity)
        self._storage[entity.id] = doc
        return entity.id

    async def replace(self, id: str, entity: T) -> bool:
        key = self._key(id)
        if key not in self._storage:
            return False
        entity.id = id
        self._storage[key] = self._encode(entity)
        return True

    async def delete(self, id: str) -> bool:
        return self._storage.pop(self._key(id), None) is not None

    def __len__(self) -> int:
        return len(self._storage)

    def clear(self) -> None:
        """Clear all entities (useful for test setup)."""
        self._storage.clear()
