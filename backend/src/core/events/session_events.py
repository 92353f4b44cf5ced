"""Domain events emitted by the session state store."""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone

from backend.src.core.entities.session_state import SessionState, SessionWriter


@dataclass(frozen=True)
class SessionStateChanged:
    previous: SessionState
    current: SessionState
    source: SessionWriter
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def revision(self) -> int:
        return self.current.revision

    @property
    def user_changed(self) -> bool:
        return self.previous.user != self.current.user
