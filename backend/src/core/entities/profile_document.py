"""Profile document persisted in the ``users`` collection."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class ProfileDocument:
    """Stored profile keyed by principal uid.

    Written once per principal; ``created_at`` is captured at creation and
    never rewritten.
    """

    name: str
    email: str = ""
    created_at: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> dict:
        """Serialize using the document store's field names."""
        return {"name": self.name, "email": self.email, "createdAt": self.created_at}

    @classmethod
    def from_dict(cls, data: dict) -> "ProfileDocument":
        return cls(
            name=data.get("name") or "",
            email=data.get("email") or "",
            created_at=data.get("createdAt") or "",
        )
