"""Shared test fixtures for all tests."""
from __future__ import annotations

import pytest
from unittest.mock import AsyncMock, MagicMock

from backend.src.adapters.outbound.firebase.in_memory_identity import InMemoryIdentityProvider
from backend.src.adapters.outbound.persistence.in_memory_document_store import InMemoryDocumentStore
from backend.src.application.profile_repository import ProfileRepository
from backend.src.application.session_manager import SessionManager
from backend.src.core.entities.principal import GOOGLE_PROVIDER, Principal
from backend.src.core.value_objects.subscription import Subscription


# ── Principal Fixtures ─────────────────────────────────────────────────────

@pytest.fixture
def sample_principal() -> Principal:
    return Principal(uid="uid-ada", email="user@example.com")


@pytest.fixture
def google_principal() -> Principal:
    return Principal(
        uid="uid-google",
        email="grace@gmail.com",
        display_name="Grace Hopper",
        provider_id=GOOGLE_PROVIDER,
    )


# ── In-memory Adapter Fixtures ─────────────────────────────────────────────

@pytest.fixture
def identity() -> InMemoryIdentityProvider:
    return InMemoryIdentityProvider()


@pytest.fixture
def documents() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def profiles(documents) -> ProfileRepository:
    return ProfileRepository(documents, collection="users")


@pytest.fixture
async def manager(identity, profiles):
    """Started SessionManager over in-memory adapters, already resolved."""
    session_manager = SessionManager(identity=identity, profiles=profiles)
    session_manager.start()
    await identity.drain()
    yield session_manager
    await session_manager.close()


# ── Mock Port Fixtures ─────────────────────────────────────────────────────

@pytest.fixture
def mock_identity_provider():
    """Identity provider that never delivers notifications on its own.

    Tests drive the change listener by calling the callback passed to
    ``subscribe``.
    """
    mock = AsyncMock()
    mock.subscribe = MagicMock(return_value=Subscription(lambda: None))
    mock.create_account.return_value = Principal(uid="uid-grace", email="grace@example.com")
    mock.sign_in.return_value = Principal(uid="uid-ada", email="user@example.com")
    mock.update_profile.return_value = None
    mock.sign_out.return_value = None
    return mock


@pytest.fixture
def mock_document_store():
    mock = AsyncMock()
    mock.get.return_value = None
    mock.set.return_value = None
    return mock
