"""Custom exception hierarchy for the session orchestrator."""
from __future__ import annotations


class SessionError(Exception):
    """Base exception for all session/identity errors.

    ``kind`` names the failure family reported back to callers; ``code`` keeps
    the provider's own error code (e.g. ``EMAIL_EXISTS``) when one is known.
    """

    kind = "unknown"

    def __init__(self, message: str = "", code: str = "") -> None:
        self.code = code
        super().__init__(message or code or self.kind)


class CredentialError(SessionError):
    """Bad, duplicate or weak credentials, wrong password, unknown account."""

    kind = "credential"


class FederatedAuthError(SessionError):
    """Interactive federated sign-in was dismissed, blocked or failed."""

    kind = "federated"


class ProfileSyncError(SessionError):
    """Reading or writing a profile document failed."""

    kind = "profile_sync"


class ProviderUnavailable(SessionError):
    """Network or provider-infrastructure failure."""

    kind = "provider_unavailable"
