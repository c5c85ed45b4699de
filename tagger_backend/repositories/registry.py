"""
Repository Registry

Holds one repository per resource for the life of the process. Built once at
startup from the resource catalogue and stored on ``app.state.repositories``;
request handlers only read from it.
"""

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from ..config import AppConfig
from ..resources import RESOURCES, ResourceDefinition
from .base import InMemoryRepository, Repository
from .mongo import MongoRepository

logger = logging.getLogger(__name__)


class RepositoryRegistry:
    """
    Mapping of resource name to repository.

    Usage:
        registry = RepositoryRegistry.from_database(db, config)
        drivers = registry.get("driver")
        # or
        drivers = registry.driver
    """

    def __init__(self, repositories: dict[str, Repository] | None = None):
        self._repositories: dict[str, Repository] = dict(repositories or {})

    @classmethod
    def from_database(
        cls,
        db: Any,  # AsyncIOMotorDatabase
        config: AppConfig,
        resources: Iterable[ResourceDefinition] = RESOURCES,
    ) -> "RepositoryRegistry":
        """
        Build MongoDB repositories over the configured collections.

        Args:
            db: Motor database handle
            config: Application configuration (collection names)
            resources: Resource definitions to register
        """
        registry = cls()
        for resource in resources:
            collection_name = config.collection_name(resource.collection_setting)
            registry.register(
                resource.name, MongoRepository(db[collection_name], resource.entity_class)
            )
            logger.debug(
                f"Registered repository for '{resource.name}' on collection '{collection_name}'"
            )
        return registry

    @classmethod
    def in_memory(
        cls, resources: Iterable[ResourceDefinition] = RESOURCES
    ) -> "RepositoryRegistry":
        """Build in-memory repositories for every resource."""
        return cls(
            {resource.name: InMemoryRepository(resource.entity_class) for resource in resources}
        )

    def register(self, name: str, repository: Repository) -> None:
        self._repositories[name] = repository

    def get(self, name: str) -> Repository:
        """
        Get the repository registered for a resource.

        Raises:
            KeyError: If no repository is registered under ``name``
        """
        try:
            return self._repositories[name]
        except KeyError:
            raise KeyError(f"No repository registered for resource '{name}'") from None

    def __getattr__(self, name: str) -> Repository:
        if name.startswith("_"):
            raise AttributeError(f"'{type(self).__name__}' has no attribute '{name}'")
        try:
            return self.get(name)
        except KeyError as e:
            raise AttributeError(str(e)) from None

    def __contains__(self, name: object) -> bool:
        return name in self._repositories

    def __iter__(self) -> Iterator[str]:
        return iter(self._repositories)

    def __len__(self) -> int:
        return len(self._repositories)
