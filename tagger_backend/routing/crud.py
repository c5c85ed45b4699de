"""
Generic CRUD routes.

``build_resource_router("driver", Driver)`` produces:

    GET    /api/driver        200 + list
    GET    /api/driver/{id}   200 + entity | 404
    POST   /api/driver        201 + entity, Location: /api/driver/{id}
    PUT    /api/driver/{id}   204 | 404
    DELETE /api/driver/{id}   204 | 404

A 404 for a well-formed id that matches nothing has an empty body.
PUT and DELETE perform the write first and answer 404 from the store's
match count, so a concurrent delete cannot turn a confirmed write into a
silent no-op.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from ..constants import API_PREFIX
from ..dependencies import get_repository_registry
from ..models import Entity
from ..observability import get_logger
from ..repositories import Repository, RepositoryRegistry
from . import convertors  # noqa: F401  registers the objectid convertor

logger = get_logger(__name__)


def build_resource_router(resource: str, entity_class: type[Entity]) -> APIRouter:
    """
    Build the CRUD router for one resource.

    Args:
        resource: Path name of the resource (``/api/{resource}``)
        entity_class: Entity model used for request and response bodies

    Returns:
        APIRouter with the five CRUD routes
    """
    router = APIRouter(prefix=f"{API_PREFIX}/{resource}", tags=[resource])
    entity_name = entity_class.__name__
    get_route_name = f"get_{resource}"
    not_found_response = {status.HTTP_404_NOT_FOUND: {"description": f"{entity_name} not found"}}

    async def get_repository(
        registry: RepositoryRegistry = Depends(get_repository_registry),
    ) -> Repository:
        return registry.get(resource)

    def not_found(id: str) -> Response:
        logger.debug(f"{entity_name} not found", extra={"resource": resource, "id": id})
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    @router.get("", response_model=list[entity_class], name=f"list_{resource}")
    async def list_entities(repository: Repository = Depends(get_repository)):
        return await repository.list_all()

    @router.get(
        "/{id:objectid}",
        response_model=entity_class,
        responses=not_found_response,
        name=get_route_name,
    )
    async def get_entity(id: str, repository: Repository = Depends(get_repository)):
        entity = await repository.get(id)
        if entity is None:
            return not_found(id)
        return entity

    @router.post(
        "",
        response_model=entity_class,
        status_code=status.HTTP_201_CREATED,
        name=f"create_{resource}",
    )
    async def create_entity(
        entity: entity_class,
        request: Request,
        response: Response,
        repository: Repository = Depends(get_repository),
    ):
        entity_id = await repository.add(entity)
        response.headers["Location"] = str(request.url_for(get_route_name, id=entity_id))
        logger.info(f"Created {entity_name}", extra={"resource": resource, "id": entity_id})
        return entity

    @router.put(
        "/{id:objectid}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        responses=not_found_response,
        name=f"replace_{resource}",
    )
    async def replace_entity(
        id: str,
        entity: entity_class,
        repository: Repository = Depends(get_repository),
    ):
        if not await repository.replace(id, entity):
            return not_found(id)
        logger.info(f"Replaced {entity_name}", extra={"resource": resource, "id": id})
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete(
        "/{id:objectid}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        responses=not_found_response,
        name=f"delete_{resource}",
    )
    async def delete_entity(id: str, repository: Repository = Depends(get_repository)):
        if not await repository.delete(id):
            return not_found(id)
        logger.info(f"Deleted {entity_name}", extra={"resource": resource, "id": id})
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
