"""
Pytest configuration and shared fixtures for Tagger backend tests.

This module provides:
- Mock MongoDB collection fixtures
- In-memory application and HTTP client fixtures
- Test data factories
- Testcontainers MongoDB for integration tests
"""

from typing import Any, Dict, Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from motor.motor_asyncio import AsyncIOMotorCollection

from tagger_backend.app import create_app
from tagger_backend.config import AppConfig
from tagger_backend.observability import get_metrics_collector
from tagger_backend.repositories import RepositoryRegistry


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: tests that need a real MongoDB")


# ============================================================================
# MOCK MONGODB FIXTURES
# ============================================================================


@pytest.fixture
def mock_mongo_collection() -> MagicMock:
    """Create a mock motor collection with async CRUD methods."""
    collection = MagicMock(spec=AsyncIOMotorCollection)
    collection.name = "drivers"
    collection.find = MagicMock(return_value=MagicMock(to_list=AsyncMock(return_value=[])))
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock(
        return_value=MagicMock(inserted_id="65a1f0c2e4b0a1b2c3d4e5f6")
    )
    collection.replace_one = AsyncMock(
        return_value=MagicMock(matched_count=1, modified_count=1)
    )
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    return collection


@pytest.fixture
def mock_mongo_database() -> MagicMock:
    """Create a mock motor database that hands out named mock collections."""
    db = MagicMock()
    collections: Dict[str, MagicMock] = {}

    def get_collection(name: str) -> MagicMock:
        if name not in collections:
            collection = MagicMock(spec=AsyncIOMotorCollection)
            collection.name = name
            collections[name] = collection
        return collections[name]

    db.__getitem__.side_effect = get_collection
    return db


# ============================================================================
# APPLICATION FIXTURES
# ============================================================================


@pytest.fixture
def registry() -> RepositoryRegistry:
    """In-memory repositories for every resource."""
    return RepositoryRegistry.in_memory()


@pytest.fixture
def app_config() -> AppConfig:
    """Provide a complete configuration that never touches a real server."""
    return AppConfig(mongo_uri="mongodb://localhost:27017", db_name="tagger_test")


@pytest.fixture
def client(app_config: AppConfig, registry: RepositoryRegistry) -> Iterator[TestClient]:
    """HTTP client for an app served from in-memory repositories."""
    app = create_app(app_config, registry=registry)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def reset_metrics() -> Iterator[None]:
    """Start every test with an empty metrics collector."""
    get_metrics_collector().reset()
    yield
    get_metrics_collector().reset()


# ============================================================================
# TEST DATA FACTORIES
# ============================================================================


@pytest.fixture
def driver_payload() -> Dict[str, Any]:
    """Provide a valid driver request body."""
    return {
        "name": "Ayşe Yılmaz",
        "email": "ayse@example.com",
        "phone": "5551234567",
        "licenseNumber": "34ABC123",
        "licenseClass": "B",
        "licenseExpiryDate": "2030-01-01T00:00:00Z",
    }


@pytest.fixture
def user_payload() -> Dict[str, Any]:
    """Provide a valid user request body."""
    return {"name": "Mehmet Demir", "email": "mehmet@example.com", "phone": "5559876543"}


@pytest.fixture
def vehicle_payload() -> Dict[str, Any]:
    """Provide a valid vehicle request body with unchecked references."""
    return {
        "plateNumber": "34 TGR 42",
        "brand": "Fiat",
        "model": "Egea",
        "year": 2022,
        "colorId": "65a1f0c2e4b0a1b2c3d4e5f1",
        "typeId": "65a1f0c2e4b0a1b2c3d4e5f2",
    }


@pytest.fixture
def service_payload() -> Dict[str, Any]:
    """Provide a valid service request body."""
    return {
        "name": "Airport transfer",
        "description": "Pickup from IST to the city centre",
        "price": 750.5,
        "duration": 60,
        "category": "transfer",
    }


# ============================================================================
# ENVIRONMENT VARIABLES
# ============================================================================


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch):
    """Reset environment variables before each test."""
    env_vars_to_clear = [
        "MONGO_URI",
        "DB_NAME",
        "USERS_COLLECTION_NAME",
        "DRIVERS_COLLECTION_NAME",
        "VEHICLES_COLLECTION_NAME",
        "SERVICES_COLLECTION_NAME",
        "VEHICLE_COLORS_COLLECTION_NAME",
        "VEHICLE_TYPES_COLLECTION_NAME",
        "MONGO_MAX_POOL_SIZE",
        "MONGO_MIN_POOL_SIZE",
        "MONGO_SERVER_SELECTION_TIMEOUT_MS",
        "HOST",
        "PORT",
        "LOG_LEVEL",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    yield


# ============================================================================
# TESTCONTAINERS FIXTURES (Real MongoDB for Integration Tests)
# ============================================================================


@pytest.fixture(scope="session")
def mongodb_container():
    """
    Start a MongoDB container for integration tests.

    Session-scoped: the container starts once and is reused.
    """
    try:
        from testcontainers.mongodb import MongoDbContainer
    except ImportError:
        pytest.skip("testcontainers not installed. Install with: pip install -e '.[test]'")

    container = MongoDbContainer(image="mongo:7.0")
    try:
        container.start()
    except Exception as e:  # docker daemon missing or unreachable
        pytest.skip(f"Could not start MongoDB container: {e}")
    try:
        yield container
    finally:
        container.stop()


@pytest.fixture
def mongodb_connection_string(mongodb_container) -> str:
    """Connection string for the running test container."""
    return mongodb_container.get_connection_url()
