"""Inbound port exposed to the presentation layer."""
from __future__ import annotations
from typing import TYPE_CHECKING, Callable, Optional, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.core.entities.session_state import SessionState
    from backend.src.core.entities.user import SessionUser
    from backend.src.core.events.session_events import SessionStateChanged
    from backend.src.core.value_objects.operation_result import OperationResult
    from backend.src.core.value_objects.subscription import Subscription


@runtime_checkable
class SessionUseCase(Protocol):
    @property
    def state(self) -> SessionState: ...
    @property
    def user(self) -> Optional[SessionUser]: ...
    @property
    def is_loading(self) -> bool: ...
    async def register(self, name: str, email: str, password: str) -> OperationResult: ...
    async def login(self, email: str, password: str) -> OperationResult: ...
    async def login_with_google(self) -> OperationResult: ...
    async def logout(self) -> OperationResult: ...
    def subscribe(self, callback: Callable[[SessionStateChanged], None]) -> Subscription: ...
