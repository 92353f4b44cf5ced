"""Typed outcome of a credential operation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FailureReason(str, Enum):
    CREDENTIAL = "credential"
    FEDERATED = "federated"
    PROFILE_SYNC = "profile_sync"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class OperationResult:
    """Success flag plus the failure kind when it failed.

    Truthy exactly when the operation succeeded, so callers that only need
    a boolean can keep writing ``if await manager.login(...)``.
    """

    ok: bool
    reason: Optional[FailureReason] = None
    message: str = ""

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls) -> "OperationResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: BaseException) -> "OperationResult":
        kind = getattr(error, "kind", FailureReason.UNKNOWN.value)
        try:
            reason = FailureReason(kind)
        except ValueError:
            reason = FailureReason.UNKNOWN
        return cls(ok=False, reason=reason, message=str(error))

    def to_dict(self) -> dict:
        return {
            "success": self.ok,
            "reason": self.reason.value if self.reason else None,
            "message": self.message,
        }
