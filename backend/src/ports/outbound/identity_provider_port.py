"""Port for the remote identity provider."""
from __future__ import annotations
from typing import Awaitable, Callable, Optional, Protocol, runtime_checkable

from backend.src.core.entities.principal import Principal
from backend.src.core.value_objects.subscription import Subscription

AuthStateCallback = Callable[[Optional[Principal]], Awaitable[None]]


@runtime_checkable
class IdentityProviderPort(Protocol):
    async def create_account(self, email: str, password: str) -> Principal: ...
    async def sign_in(self, email: str, password: str) -> Principal: ...
    async def sign_in_federated(self, provider_kind: str) -> Principal: ...
    async def sign_out(self) -> None: ...
    async def update_profile(self, principal: Principal, display_name: str) -> Principal: ...
    def subscribe(self, callback: AuthStateCallback) -> Subscription: ...
