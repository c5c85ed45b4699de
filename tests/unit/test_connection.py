"""
Unit tests for ConnectionManager.

Tests connection initialization, error handling, and shutdown.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from tagger_backend.database import ConnectionManager
from tagger_backend.exceptions import InitializationError
from tagger_backend.observability import get_metrics_collector

CLIENT_PATH = "tagger_backend.database.connection.AsyncIOMotorClient"


@pytest.fixture
def connection_config():
    """Provide default configuration for ConnectionManager."""
    return {
        "mongo_uri": "mongodb://localhost:27017",
        "db_name": "tagger_test",
        "max_pool_size": 10,
        "min_pool_size": 1,
    }


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1})
    return client


class TestConnectionManagerInitialization:
    """Test successful initialization."""

    @pytest.mark.asyncio
    async def test_initialize_success(self, connection_config, mock_client):
        with patch(CLIENT_PATH, return_value=mock_client) as client_class:
            manager = ConnectionManager(**connection_config)
            await manager.initialize()

        assert manager.initialized is True
        assert manager.mongo_client is mock_client
        assert manager.mongo_db is mock_client.__getitem__.return_value
        mock_client.__getitem__.assert_called_with("tagger_test")
        mock_client.admin.command.assert_awaited_once_with("ping")

        kwargs = client_class.call_args.kwargs
        assert kwargs["maxPoolSize"] == 10
        assert kwargs["minPoolSize"] == 1
        assert kwargs["tz_aware"] is True
        assert kwargs["appname"] == "tagger-backend"
        assert get_metrics_collector().get_operation_count("connection.initialize") == 1

    @pytest.mark.asyncio
    async def test_initialize_twice_is_noop(self, connection_config, mock_client):
        with patch(CLIENT_PATH, return_value=mock_client) as client_class:
            manager = ConnectionManager(**connection_config)
            await manager.initialize()
            await manager.initialize()

        assert client_class.call_count == 1

    def test_properties_before_initialize(self, connection_config):
        manager = ConnectionManager(**connection_config)

        assert manager.initialized is False
        with pytest.raises(RuntimeError, match="not initialized"):
            manager.mongo_client
        with pytest.raises(RuntimeError, match="not initialized"):
            manager.mongo_db


class TestConnectionManagerErrorHandling:
    """Test error handling during connection initialization."""

    @pytest.mark.asyncio
    async def test_server_unreachable(self, connection_config, mock_client):
        """Test that an unreachable server fails startup."""
        mock_client.admin.command = AsyncMock(
            side_effect=ServerSelectionTimeoutError("No servers found")
        )

        with patch(CLIENT_PATH, return_value=mock_client):
            manager = ConnectionManager(**connection_config)

            with pytest.raises(InitializationError) as exc_info:
                await manager.initialize()

        assert "Failed to connect to MongoDB" in str(exc_info.value)
        assert exc_info.value.db_name == "tagger_test"
        assert exc_info.value.context["error_type"] == "ServerSelectionTimeoutError"
        assert manager.initialized is False
        mock_client.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_initialize_type_error(self, connection_config, mock_client):
        """Test handling TypeError during initialization."""
        mock_client.admin.command = AsyncMock(side_effect=TypeError("Invalid type"))

        with patch(CLIENT_PATH, return_value=mock_client):
            manager = ConnectionManager(**connection_config)

            with pytest.raises(InitializationError) as exc_info:
                await manager.initialize()

        assert "ConnectionManager initialization failed" in str(exc_info.value)
        assert exc_info.value.context["error_type"] == "TypeError"

    @pytest.mark.asyncio
    async def test_invalid_uri(self, connection_config):
        """Test that a client constructor error is wrapped."""
        with patch(CLIENT_PATH, side_effect=ValueError("Invalid URI")):
            manager = ConnectionManager(**connection_config)

            with pytest.raises(InitializationError) as exc_info:
                await manager.initialize()

        assert exc_info.value.context["error_type"] == "ValueError"

    @pytest.mark.asyncio
    async def test_failure_is_recorded(self, connection_config, mock_client):
        mock_client.admin.command = AsyncMock(
            side_effect=ServerSelectionTimeoutError("No servers found")
        )

        with patch(CLIENT_PATH, return_value=mock_client):
            with pytest.raises(InitializationError):
                await ConnectionManager(**connection_config).initialize()

        summary = get_metrics_collector().get_summary()["summary"]
        assert summary["connection.initialize"]["error_count"] == 1


class TestConnectionManagerShutdown:
    """Test shutdown."""

    @pytest.mark.asyncio
    async def test_shutdown_closes_client(self, connection_config, mock_client):
        with patch(CLIENT_PATH, return_value=mock_client):
            manager = ConnectionManager(**connection_config)
            await manager.initialize()

        await manager.shutdown()

        mock_client.close.assert_called_once()
        assert manager.initialized is False

    @pytest.mark.asyncio
    async def test_shutdown_is_idempotent(self, connection_config, mock_client):
        with patch(CLIENT_PATH, return_value=mock_client):
            manager = ConnectionManager(**connection_config)
            await manager.initialize()

        await manager.shutdown()
        await manager.shutdown()

        mock_client.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_shutdown_without_initialize(self, connection_config):
        await ConnectionManager(**connection_config).shutdown()
