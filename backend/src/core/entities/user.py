"""Session user entity: the application-facing view of the signed-in principal."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionUser:
    """Resolved user exposed to the presentation layer.

    ``id`` is the identity provider's uid and never changes for an account.
    ``name`` may be empty only while the profile is still converging.
    """

    id: str
    name: str = ""
    email: str = ""

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "email": self.email}
