"""
Base entity model.

Every stored record derives from ``Entity``: an optional ObjectId string
``id`` (``None`` until first persisted) and a ``createdAt`` timestamp taken at
construction time. Field names are snake_case in Python and camelCase in
both JSON and MongoDB documents.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, ClassVar, TypeVar

from bson import Decimal128, ObjectId
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

E = TypeVar("E", bound="Entity")


def utc_now() -> datetime:
    """Current UTC instant (timezone-aware), truncated to milliseconds."""
    now = datetime.now(timezone.utc)
    # BSON dates carry millisecond precision
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _to_bson(value: Any) -> Any:
    """Convert Python values that BSON cannot encode directly."""
    if isinstance(value, Decimal):
        return Decimal128(value)
    if isinstance(value, dict):
        return {k: _to_bson(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_bson(v) for v in value]
    return value


def _from_bson(value: Any) -> Any:
    """Convert BSON-specific values back to plain Python values."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, Decimal128):
        return value.to_decimal()
    if isinstance(value, dict):
        return {k: _from_bson(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_from_bson(v) for v in value]
    return value


class Entity(BaseModel):
    """
    Base class for stored records.

    Subclasses declare their own fields; ``object_id_fields`` lists the
    camelCase names of reference fields that are stored as ObjectId.

    Example:
        class User(Entity):
            name: str
            email: str
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    object_id_fields: ClassVar[tuple[str, ...]] = ()

    id: str | None = None
    created_at: datetime = Field(default_factory=utc_now)

    def to_document(self) -> dict[str, Any]:
        """
        Convert the entity to a MongoDB document.

        ``id`` becomes ``_id`` (as ObjectId when it is a valid one); the key is
        omitted while the entity has no id.
        """
        doc = _to_bson(self.model_dump(by_alias=True, exclude={"id"}))

        for name in self.object_id_fields:
            value = doc.get(name)
            if isinstance(value, str) and ObjectId.is_valid(value):
                doc[name] = ObjectId(value)

        if self.id is not None:
            doc["_id"] = ObjectId(self.id) if ObjectId.is_valid(self.id) else self.id
        return doc

    @classmethod
    def from_document(cls: type[E], doc: dict[str, Any] | None) -> E | None:
        """Create an entity from a MongoDB document. Unknown keys are ignored."""
        if doc is None:
            return None

        data = {k: _from_bson(v) for k, v in doc.items() if k != "_id"}
        if "_id" in doc:
            data["id"] = str(doc["_id"])
        return cls.model_validate(data)
