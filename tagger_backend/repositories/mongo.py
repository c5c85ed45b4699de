"""
MongoDB Repository Implementation

Implements the Repository interface directly over a motor collection. Each
call is a single store round-trip; driver and BSON encoding errors propagate
untranslated after being logged and counted as failures.
"""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection

from ..models import Entity
from ..observability import log_operation, record_operation
from .base import Repository

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Entity)


def _object_id(id: str) -> Any:
    """Use an ObjectId filter for valid ids; anything else matches nothing."""
    return ObjectId(id) if ObjectId.is_valid(id) else id


class MongoRepository(Repository[T], Generic[T]):
    """
    MongoDB implementation of the Repository interface.

    Example:
        drivers = MongoRepository(db["drivers"], Driver)

        driver_id = await drivers.add(Driver(name="Ayşe Yılmaz", ...))
        driver = await drivers.get(driver_id)
    """

    def __init__(self, collection: AsyncIOMotorCollection, entity_class: type[T]):
        """
        Initialize the MongoDB repository.

        Args:
            collection: Motor collection holding this entity type
            entity_class: Entity subclass for this repository
        """
        self._collection = collection
        self._entity_class = entity_class

    @property
    def collection_name(self) -> str:
        return self._collection.name

    @contextmanager
    def _track(self, operation: str) -> Iterator[None]:
        """Time one store call and record it in metrics and logs."""
        start_time = time.time()
        success = True
        try:
            yield
        except Exception as e:
            # driver errors and BSON encoding errors alike
            success = False
            logger.error(
                f"{self._entity_class.__name__} {operation} failed on "
                f"'{self.collection_name}': {e}",
                exc_info=True,
            )
            raise
        except BaseException:
            # cancelled mid-call
            success = False
            raise
        finally:
            duration_ms = (time.time() - start_time) * 1000
            record_operation(
                f"repository.{operation}",
                duration_ms,
                success=success,
                collection=self.collection_name,
            )
            log_operation(
                logger,
                f"repository.{operation}",
                level=logging.DEBUG,
                success=success,
                duration_ms=duration_ms,
                collection=self.collection_name,
            )

    def _to_entity(self, doc: dict[str, Any] | None) -> T | None:
        return self._entity_class.from_document(doc)

    async def list_all(self) -> list[T]:
        with self._track("list_all"):
            docs = await self._collection.find({}).to_list(length=None)
        return [self._to_entity(doc) for doc in docs]

    async def get(self, id: str) -> T | None:
        with self._track("get"):
            doc = await self._collection.find_one({"_id": _object_id(id)})
        return self._to_entity(doc)

    async def add(self, entity: T) -> str:
        entity.id = None
        doc = entity.to_document()

        with self._track("add"):
            result = await self._collection.insert_one(doc)
        entity.id = str(result.inserted_id)

        logger.debug(f"Added {self._entity_class.__name__} with id={entity.id}")
        return entity.id

    async def replace(self, id: str, entity: T) -> bool:
        entity.id = id
        doc = entity.to_document()
        doc.pop("_id", None)

        with self._track("replace"):
            result = await self._collection.replace_one({"_id": _object_id(id)}, doc)
        return result.matched_count > 0

    async def delete(self, id: str) -> bool:
        with self._track("delete"):
            result = await self._collection.delete_one({"_id": _object_id(id)})
        return result.deleted_count > 0
