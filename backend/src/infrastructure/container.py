"""
Dependency container.
Wires together ports and adapters based on configuration.
"""
from __future__ import annotations

import logging
from typing import Optional

from backend.src.infrastructure.config import Settings

logger = logging.getLogger(__name__)


class ApplicationContainer:
    """Simplified container that builds concrete instances from settings.

    Usage::

        container = ApplicationContainer(settings)
        manager = container.session_manager()
        manager.start()
        ...
        await container.aclose()

    Every accessor returns the same instance on repeated calls, so the
    session manager is shared by the whole process.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self._cache: dict[str, object] = {}

    def _get_or_create(self, key: str, factory):
        if key not in self._cache:
            self._cache[key] = factory(self.settings)
        return self._cache[key]

    # ── Lazy factory helpers ──────────────────────────────────────

    def _build_consent_flow(self, settings: Settings):
        from backend.src.adapters.outbound.firebase.google_consent import GoogleConsentFlow
        return GoogleConsentFlow(
            client_id=settings.google_oauth.client_id,
            client_secret=settings.google_oauth.client_secret,
            timeout_seconds=settings.google_oauth.consent_timeout,
            port=settings.google_oauth.redirect_port,
            open_browser=settings.google_oauth.open_browser,
        )

    def _build_identity_provider(self, settings: Settings):
        if settings.firebase.enabled:
            from backend.src.adapters.outbound.firebase.identity_toolkit import IdentityToolkitProvider
            return IdentityToolkitProvider(
                api_key=settings.firebase.api_key,
                consent_flow=self.consent_flow(),
                base_url=settings.firebase.identity_toolkit_url,
                timeout=settings.firebase.request_timeout,
            )
        from backend.src.adapters.outbound.firebase.in_memory_identity import (
            DEV_GOOGLE_PRINCIPAL,
            InMemoryIdentityProvider,
        )
        logger.info("Firebase disabled, using in-memory identity provider")
        return InMemoryIdentityProvider(
            federated_principals={settings.session.federated_provider: DEV_GOOGLE_PRINCIPAL},
        )

    @staticmethod
    def _build_document_store(settings: Settings):
        if settings.firebase.enabled:
            from backend.src.adapters.outbound.firebase.firestore_documents import FirestoreDocumentStore
            return FirestoreDocumentStore(
                credentials_path=settings.firebase.credentials_path,
                project_id=settings.firebase.project_id,
            )
        from backend.src.adapters.outbound.persistence.in_memory_document_store import InMemoryDocumentStore
        return InMemoryDocumentStore()

    def _build_profile_repository(self, settings: Settings):
        from backend.src.application.profile_repository import ProfileRepository
        return ProfileRepository(
            self.document_store(),
            collection=settings.session.profile_collection,
        )

    def _build_session_manager(self, settings: Settings):
        from backend.src.application.session_manager import SessionManager
        return SessionManager(
            identity=self.identity_provider(),
            profiles=self.profile_repository(),
            federated_provider=settings.session.federated_provider,
            placeholder_name=settings.session.placeholder_name,
        )

    # ── Port accessors ─────────────────────────────────────────────

    def consent_flow(self):
        return self._get_or_create("consent_flow", self._build_consent_flow)

    def identity_provider(self):
        return self._get_or_create("identity_provider", self._build_identity_provider)

    def document_store(self):
        return self._get_or_create("document_store", self._build_document_store)

    # ── Application services ───────────────────────────────────────

    def profile_repository(self):
        return self._get_or_create("profile_repository", self._build_profile_repository)

    def session_manager(self):
        return self._get_or_create("session_manager", self._build_session_manager)

    async def aclose(self) -> None:
        """Close the session manager, then any adapter holding a connection pool."""
        manager = self._cache.get("session_manager")
        if manager is not None:
            await manager.close()
        identity = self._cache.get("identity_provider")
        if identity is not None and hasattr(identity, "aclose"):
            await identity.aclose()
