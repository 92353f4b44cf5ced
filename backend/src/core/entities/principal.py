"""Principal as reported by the identity provider."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

PASSWORD_PROVIDER = "password"
GOOGLE_PROVIDER = "google.com"


@dataclass(frozen=True)
class Principal:
    """Authenticated entity as the identity provider sees it.

    ``display_name`` and ``email`` are optional: federated providers may
    leave either unset on first sign-in.
    """

    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    provider_id: str = PASSWORD_PROVIDER
