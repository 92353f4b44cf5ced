"""Session lifecycle state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from backend.src.core.entities.user import SessionUser


class SessionStatus(str, Enum):
    UNRESOLVED = "unresolved"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class SessionWriter(str, Enum):
    """Who performed a write to the session state."""

    LISTENER = "listener"
    REGISTER = "register"
    LOGOUT = "logout"
    OPERATION = "operation"


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of the current session.

    ``resolved`` flips to True on the first user write and stays True;
    ``loading`` is independent and tracks in-flight credential operations.
    """

    user: Optional[SessionUser] = None
    loading: bool = True
    resolved: bool = False
    revision: int = 0

    @property
    def status(self) -> SessionStatus:
        if not self.resolved:
            return SessionStatus.UNRESOLVED
        if self.user is None:
            return SessionStatus.ANONYMOUS
        return SessionStatus.AUTHENTICATED

    @property
    def is_authenticated(self) -> bool:
        return self.status == SessionStatus.AUTHENTICATED

    def to_dict(self) -> dict:
        return {
            "user": self.user.to_dict() if self.user else None,
            "loading": self.loading,
            "status": self.status.value,
            "revision": self.revision,
        }
