"""Unit tests for ApplicationContainer wiring."""
from __future__ import annotations

import pytest
from unittest.mock import patch

from backend.src.adapters.outbound.firebase.google_consent import GoogleConsentFlow
from backend.src.adapters.outbound.firebase.identity_toolkit import IdentityToolkitProvider
from backend.src.adapters.outbound.firebase.in_memory_identity import InMemoryIdentityProvider
from backend.src.adapters.outbound.persistence.in_memory_document_store import InMemoryDocumentStore
from backend.src.application.session_manager import SessionManager
from backend.src.infrastructure.config import FirebaseSettings, SessionSettings, Settings
from backend.src.infrastructure.container import ApplicationContainer


class TestApplicationContainer:
    """Development settings wire the in-memory adapters."""

    @pytest.fixture
    def container(self) -> ApplicationContainer:
        settings = Settings(
            app_env="development",
            firebase=FirebaseSettings(enabled=False),
            session=SessionSettings(profile_collection="profiles"),
        )
        return ApplicationContainer(settings)

    def test_identity_provider(self, container):
        assert isinstance(container.identity_provider(), InMemoryIdentityProvider)

    def test_document_store(self, container):
        assert isinstance(container.document_store(), InMemoryDocumentStore)

    def test_consent_flow(self, container):
        assert isinstance(container.consent_flow(), GoogleConsentFlow)

    def test_profile_repository_uses_configured_collection(self, container):
        assert container.profile_repository().collection == "profiles"

    def test_session_manager_is_shared(self, container):
        manager = container.session_manager()
        assert isinstance(manager, SessionManager)
        assert container.session_manager() is manager

    @pytest.mark.asyncio
    async def test_aclose_closes_manager(self, container):
        manager = container.session_manager()
        manager.start()

        await container.aclose()

        with pytest.raises(RuntimeError):
            manager.start()

    @pytest.mark.asyncio
    async def test_aclose_before_use(self, container):
        await container.aclose()


class TestFirebaseWiring:
    def test_identity_toolkit_when_enabled(self):
        settings = Settings(firebase=FirebaseSettings(enabled=True, api_key="key"))
        container = ApplicationContainer(settings)

        assert isinstance(container.identity_provider(), IdentityToolkitProvider)

    def test_firestore_when_enabled(self):
        settings = Settings(firebase=FirebaseSettings(enabled=True, project_id="demo"))
        container = ApplicationContainer(settings)

        with patch(
            "backend.src.adapters.outbound.firebase.firestore_documents.FirestoreDocumentStore"
        ) as store_cls:
            store = container.document_store()

        store_cls.assert_called_once_with(credentials_path="", project_id="demo")
        assert store is store_cls.return_value
