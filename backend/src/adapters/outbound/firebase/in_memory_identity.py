"""In-memory identity provider for development mode.

Keeps accounts in a dict so the app runs without Firebase, with the same
error codes Firebase Authentication reports.
"""
from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass, replace
from typing import Optional

from backend.src.adapters.outbound.firebase.auth_state import AuthStateNotifier
from backend.src.core.entities.principal import GOOGLE_PROVIDER, PASSWORD_PROVIDER, Principal
from backend.src.core.exceptions import CredentialError, FederatedAuthError

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

DEV_GOOGLE_PRINCIPAL = Principal(
    uid="dev-user-000",
    email="dev@localhost",
    display_name="Developer",
    provider_id=GOOGLE_PROVIDER,
)


@dataclass
class _Account:
    principal: Principal
    password: str = ""
    disabled: bool = False


class InMemoryIdentityProvider(AuthStateNotifier):
    MIN_PASSWORD_LENGTH = 6

    def __init__(self, federated_principals: Optional[dict[str, Principal]] = None) -> None:
        super().__init__()
        self._accounts: dict[str, _Account] = {}
        self._federated: dict[str, Principal] = dict(federated_principals or {})

    def add_account(
        self,
        email: str,
        password: str,
        display_name: Optional[str] = None,
        uid: Optional[str] = None,
        disabled: bool = False,
    ) -> Principal:
        """Seed an existing account without signing it in."""
        principal = Principal(
            uid=uid or uuid.uuid4().hex[:28],
            email=email,
            display_name=display_name,
            provider_id=PASSWORD_PROVIDER,
        )
        self._accounts[email.lower()] = _Account(principal, password, disabled)
        return principal

    def set_federated_principal(self, provider_kind: str, principal: Optional[Principal]) -> None:
        """Configure who the next federated sign-in returns; None simulates a dismissed popup."""
        if principal is None:
            self._federated.pop(provider_kind, None)
        else:
            self._federated[provider_kind] = principal

    # ── IdentityProviderPort implementation ───────────────────────

    async def create_account(self, email: str, password: str) -> Principal:
        if not _EMAIL_RE.match(email or ""):
            raise CredentialError(f"Invalid email: {email}", code="INVALID_EMAIL")
        if email.lower() in self._accounts:
            raise CredentialError(f"Email already registered: {email}", code="EMAIL_EXISTS")
        if len(password or "") < self.MIN_PASSWORD_LENGTH:
            raise CredentialError(
                f"Password should be at least {self.MIN_PASSWORD_LENGTH} characters",
                code="WEAK_PASSWORD",
            )
        principal = self.add_account(email, password)
        logger.info("Dev account created for %s (%s)", email, principal.uid)
        self._set_current(principal)
        return principal

    async def sign_in(self, email: str, password: str) -> Principal:
        account = self._accounts.get((email or "").lower())
        if account is None:
            raise CredentialError(f"No account for {email}", code="EMAIL_NOT_FOUND")
        if account.password != password:
            raise CredentialError(f"Wrong password for {email}", code="INVALID_PASSWORD")
        if account.disabled:
            raise CredentialError(f"Account disabled: {email}", code="USER_DISABLED")
        self._set_current(account.principal)
        return account.principal

    async def sign_in_federated(self, provider_kind: str) -> Principal:
        principal = self._federated.get(provider_kind)
        if principal is None:
            raise FederatedAuthError(
                f"{provider_kind} sign-in was dismissed", code="POPUP_CLOSED_BY_USER"
            )
        self._set_current(principal)
        return principal

    async def sign_out(self) -> None:
        self._set_current(None)

    async def update_profile(self, principal: Principal, display_name: str) -> Principal:
        updated = replace(principal, display_name=display_name)
        for account in self._accounts.values():
            if account.principal.uid == principal.uid:
                account.principal = updated
        current = self.current_principal
        if current is not None and current.uid == principal.uid:
            self._set_current(updated)
        return updated
