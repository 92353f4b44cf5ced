"""Integration test fixtures for API testing."""
from __future__ import annotations

import pytest
from httpx import AsyncClient, ASGITransport

from backend.src.adapters.inbound.fastapi_app import app
from backend.src.adapters.inbound.websocket_handler import connections
from backend.src.infrastructure.config import FirebaseSettings, Settings
from backend.src.infrastructure.container import ApplicationContainer


@pytest.fixture
def test_settings():
    """Create test settings with in-memory backends."""
    return Settings(app_env="test", firebase=FirebaseSettings(enabled=False))


@pytest.fixture
async def test_container(test_settings):
    """Container with a started session manager, as the lifespan would leave it."""
    container = ApplicationContainer(test_settings)
    manager = container.session_manager()
    manager.start()
    await container.identity_provider().drain()
    connections.attach(manager)
    yield container
    connections.detach()
    await container.aclose()


@pytest.fixture
def identity(test_container):
    return test_container.identity_provider()


@pytest.fixture
async def async_client(test_container):
    """Create an async test client for the FastAPI app."""
    app.state.container = test_container

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
