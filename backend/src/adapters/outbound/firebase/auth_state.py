"""Auth-state notification fan-out shared by identity provider adapters.

Mirrors Firebase's ``onAuthStateChanged``: a new subscriber receives the
current principal once, then one notification per change of signed-in user.
Callbacks run as separate tasks so a credential call never waits on them.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from backend.src.core.entities.principal import Principal
from backend.src.core.value_objects.subscription import Subscription
from backend.src.ports.outbound.identity_provider_port import AuthStateCallback

logger = logging.getLogger(__name__)


def _uid(principal: Optional[Principal]) -> Optional[str]:
    return principal.uid if principal is not None else None


class AuthStateNotifier:
    def __init__(self) -> None:
        self._listeners: list[AuthStateCallback] = []
        self._current: Optional[Principal] = None
        self._pending: set[asyncio.Task] = set()

    @property
    def current_principal(self) -> Optional[Principal]:
        return self._current

    def subscribe(self, callback: AuthStateCallback) -> Subscription:
        self._listeners.append(callback)
        logger.debug("Auth-state listener added (total=%d)", len(self._listeners))
        self._dispatch(callback, self._current)

        def _release() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)
            logger.debug("Auth-state listener removed (total=%d)", len(self._listeners))

        return Subscription(_release, name="auth-state")

    async def drain(self) -> None:
        """Wait until every scheduled notification has been delivered."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def _set_current(self, principal: Optional[Principal]) -> None:
        previous = self._current
        self._current = principal
        if _uid(previous) == _uid(principal):
            return
        logger.info("Auth state changed: %s -> %s", _uid(previous), _uid(principal))
        for callback in list(self._listeners):
            self._dispatch(callback, principal)

    def _dispatch(self, callback: AuthStateCallback, principal: Optional[Principal]) -> None:
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._deliver(callback, principal), name="auth-state-notify")
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, callback: AuthStateCallback, principal: Optional[Principal]) -> None:
        if callback not in self._listeners:
            return
        try:
            await callback(principal)
        except Exception:
            logger.exception("Auth-state listener failed for %s", _uid(principal))
