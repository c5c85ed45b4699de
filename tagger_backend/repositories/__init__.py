"""
Repository Pattern

Provides the abstract repository interface, its MongoDB and in-memory
implementations, and the process-wide registry that maps resources to
repositories.

Usage:
    from tagger_backend.repositories import MongoRepository

    drivers = MongoRepository(db["drivers"], Driver)
    driver = await drivers.get("65a1f0c2e4b0a1b2c3d4e5f6")
"""

from .base import InMemoryRepository, Repository
from .mongo import MongoRepository
from .registry import RepositoryRegistry

__all__ = [
    "Repository",
    "InMemoryRepository",
    "MongoRepository",
    "RepositoryRegistry",
]
