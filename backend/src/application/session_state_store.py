"""
Session state store: the single source of truth for "who is signed in".
"""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from backend.src.core.entities.session_state import SessionState, SessionWriter
from backend.src.core.entities.user import SessionUser
from backend.src.core.events.session_events import SessionStateChanged
from backend.src.core.value_objects.subscription import Subscription

logger = logging.getLogger(__name__)

_UNCHANGED = object()

StateObserver = Callable[[SessionStateChanged], None]


class SessionStateStore:
    """Holds the current :class:`SessionState` and notifies observers.

    Every write produces a new immutable snapshot with a higher revision.
    Concurrent writers are last-writer-wins: whichever write happens later
    replaces the user, and the emitted event records which writer it was.
    """

    def __init__(self) -> None:
        self._state = SessionState()
        self._observers: list[StateObserver] = []
        self._resolved = asyncio.Event()

    # -- read side ---------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def user(self) -> Optional[SessionUser]:
        return self._state.user

    @property
    def loading(self) -> bool:
        return self._state.loading

    async def wait_until_resolved(self) -> SessionState:
        """Suspend until the first user write, then return the current state."""
        await self._resolved.wait()
        return self._state

    def subscribe(self, observer: StateObserver) -> Subscription:
        self._observers.append(observer)

        def _release() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return Subscription(_release, name="session-state")

    # -- write side --------------------------------------------------------

    def resolve(self, user: Optional[SessionUser], source: SessionWriter) -> SessionState:
        """Set the user and clear loading in one transition."""
        return self._write(source, user=user, loading=False)

    def set_user(self, user: Optional[SessionUser], source: SessionWriter) -> SessionState:
        return self._write(source, user=user)

    def set_loading(self, loading: bool, source: SessionWriter = SessionWriter.OPERATION) -> SessionState:
        return self._write(source, loading=loading)

    def _write(self, source: SessionWriter, user=_UNCHANGED, loading=_UNCHANGED) -> SessionState:
        previous = self._state
        resolved = previous.resolved
        if user is _UNCHANGED:
            user = previous.user
        else:
            resolved = True
        if loading is _UNCHANGED:
            loading = previous.loading

        current = SessionState(
            user=user,
            loading=loading,
            resolved=resolved,
            revision=previous.revision + 1,
        )
        self._state = current
        if resolved:
            self._resolved.set()

        logger.debug(
            "Session state r%d by %s: status=%s loading=%s",
            current.revision,
            source.value,
            current.status.value,
            current.loading,
        )
        self._notify(SessionStateChanged(previous=previous, current=current, source=source))
        return current

    def _notify(self, event: SessionStateChanged) -> None:
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception:
                logger.exception("Session state observer failed")
