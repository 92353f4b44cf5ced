"""
Session orchestration use case.

Owns the session state store and the identity-provider subscription, and
runs the four credential operations (register, login, federated login,
logout) against the identity provider and the profile documents.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from backend.src.application.profile_repository import ProfileRepository
from backend.src.application.profile_resolver import ProfileResolver
from backend.src.application.session_state_store import SessionStateStore
from backend.src.core.entities.principal import GOOGLE_PROVIDER, Principal
from backend.src.core.entities.profile_document import ProfileDocument
from backend.src.core.entities.session_state import SessionState, SessionWriter
from backend.src.core.entities.user import SessionUser
from backend.src.core.events.session_events import SessionStateChanged
from backend.src.core.exceptions import SessionError
from backend.src.core.value_objects.operation_result import OperationResult
from backend.src.core.value_objects.subscription import Subscription
from backend.src.ports.outbound.identity_provider_port import IdentityProviderPort

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER_NAME = "User"


class SessionManager:
    """Implements :class:`SessionUseCase`.

    Usage::

        manager = SessionManager(identity, profiles)
        async with manager:
            await manager.wait_until_resolved()
            ok = await manager.login("user@example.com", "secret")

    Credential operations never raise; they return an
    :class:`OperationResult` that is falsy on failure.
    """

    def __init__(
        self,
        identity: IdentityProviderPort,
        profiles: ProfileRepository,
        store: Optional[SessionStateStore] = None,
        resolver: Optional[ProfileResolver] = None,
        federated_provider: str = GOOGLE_PROVIDER,
        placeholder_name: str = DEFAULT_PLACEHOLDER_NAME,
    ):
        self._identity = identity
        self._profiles = profiles
        self._store = store or SessionStateStore()
        self._resolver = resolver or ProfileResolver(profiles)
        self._federated_provider = federated_provider
        self._placeholder_name = placeholder_name
        self._subscription: Optional[Subscription] = None
        self._closed = False
        self._notification_seq = 0

    # ── Lifecycle ──────────────────────────────────────────────────

    def start(self) -> None:
        """Subscribe to the provider's auth-state notifications."""
        if self._subscription is not None or self._closed:
            raise RuntimeError("SessionManager can only be started once")
        self._subscription = self._identity.subscribe(self._on_auth_state_changed)
        logger.info("Session manager started")

    async def close(self) -> None:
        """Release the provider subscription. Later calls are no-ops."""
        if self._closed:
            logger.debug("Session manager already closed")
            return
        self._closed = True
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        logger.info("Session manager closed")

    @property
    def started(self) -> bool:
        return self._subscription is not None

    async def __aenter__(self) -> "SessionManager":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # ── Read side ─────────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        return self._store.state

    @property
    def user(self) -> Optional[SessionUser]:
        return self._store.user

    @property
    def is_loading(self) -> bool:
        return self._store.loading

    async def wait_until_resolved(self) -> SessionState:
        return await self._store.wait_until_resolved()

    def subscribe(self, callback: Callable[[SessionStateChanged], None]) -> Subscription:
        return self._store.subscribe(callback)

    # ── Change listener ───────────────────────────────────────────

    async def _on_auth_state_changed(self, principal: Optional[Principal]) -> None:
        if self._closed:
            logger.debug("Ignoring auth-state notification after close")
            return
        self._notification_seq += 1
        seq = self._notification_seq

        if principal is None:
            self._store.resolve(None, source=SessionWriter.LISTENER)
            return

        name = ""
        try:
            name = await self._resolver.resolve(principal)
        except Exception as exc:
            logger.warning(
                "Display name resolution failed for %s (%s): %s",
                principal.uid,
                type(exc).__name__,
                exc,
            )

        if seq != self._notification_seq or self._closed:
            logger.debug("Discarding stale resolution for %s", principal.uid)
            return

        user = SessionUser(id=principal.uid, name=name, email=principal.email or "")
        self._store.resolve(user, source=SessionWriter.LISTENER)

    # ── Credential operations ─────────────────────────────────────

    async def register(self, name: str, email: str, password: str) -> OperationResult:
        self._store.set_loading(True)
        try:
            principal = await self._identity.create_account(email, password)
            async with self._profiles.write_guard():
                try:
                    await self._identity.update_profile(principal, display_name=name)
                except Exception as exc:
                    logger.warning("Display name update failed for %s: %s", principal.uid, exc)
                await self._profiles.create(principal.uid, ProfileDocument(name=name, email=email))

            # Set the user now; the listener notification may arrive later.
            user = SessionUser(id=principal.uid, name=name, email=email)
            self._store.set_user(user, source=SessionWriter.REGISTER)
            logger.info("Registered %s (%s)", email, principal.uid)
            return OperationResult.success()
        except Exception as exc:
            return self._failed("Registration", email, exc)
        finally:
            self._release_loading()

    async def login(self, email: str, password: str) -> OperationResult:
        self._store.set_loading(True)
        try:
            principal = await self._identity.sign_in(email, password)
            logger.info("Signed in %s (%s)", email, principal.uid)
            return OperationResult.success()
        except Exception as exc:
            return self._failed("Login", email, exc)
        finally:
            self._release_loading()

    async def login_with_google(self) -> OperationResult:
        self._store.set_loading(True)
        try:
            principal = await self._identity.sign_in_federated(self._federated_provider)
            # Entered before the listener task for this principal gets to run
            async with self._profiles.write_guard():
                existing = await self._profiles.get(principal.uid)
                if existing is None:
                    profile = ProfileDocument(
                        name=principal.display_name or self._placeholder_name,
                        email=principal.email or "",
                    )
                    await self._profiles.create(principal.uid, profile)
            logger.info("Federated sign-in via %s for %s", self._federated_provider, principal.uid)
            return OperationResult.success()
        except Exception as exc:
            return self._failed("Federated login", self._federated_provider, exc)
        finally:
            self._release_loading()

    async def logout(self) -> OperationResult:
        try:
            await self._identity.sign_out()
        except Exception as exc:
            return self._failed("Logout", self.user.email if self.user else "", exc)
        self._store.set_user(None, source=SessionWriter.LOGOUT)
        logger.info("Signed out")
        return OperationResult.success()

    def _release_loading(self) -> None:
        # Until the first resolution the session stays UNRESOLVED, which implies loading
        if self._store.state.resolved:
            self._store.set_loading(False)

    @staticmethod
    def _failed(operation: str, subject: str, exc: Exception) -> OperationResult:
        if isinstance(exc, SessionError):
            logger.warning("%s failed for %s [%s]: %s", operation, subject, exc.kind, exc)
        else:
            logger.exception("%s failed for %s with unexpected error", operation, subject)
        return OperationResult.failure(exc)
