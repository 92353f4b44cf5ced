"""Unit tests for core value objects."""
from __future__ import annotations

import pytest
from unittest.mock import MagicMock

from backend.src.core.exceptions import CredentialError, FederatedAuthError, ProfileSyncError
from backend.src.core.value_objects.operation_result import FailureReason, OperationResult
from backend.src.core.value_objects.subscription import Subscription


class TestOperationResult:
    def test_success_is_truthy(self):
        result = OperationResult.success()
        assert result
        assert result.reason is None

    def test_failure_is_falsy(self):
        result = OperationResult.failure(CredentialError("Wrong password", code="INVALID_PASSWORD"))
        assert not result
        assert result.reason == FailureReason.CREDENTIAL
        assert result.message == "Wrong password"

    @pytest.mark.parametrize("error,reason", [
        (FederatedAuthError("dismissed"), FailureReason.FEDERATED),
        (ProfileSyncError("write denied"), FailureReason.PROFILE_SYNC),
        (ValueError("bug"), FailureReason.UNKNOWN),
    ])
    def test_reason_mapping(self, error, reason):
        assert OperationResult.failure(error).reason == reason

    def test_to_dict(self):
        assert OperationResult.success().to_dict() == {"success": True, "reason": None, "message": ""}
        failed = OperationResult.failure(ProfileSyncError("write denied")).to_dict()
        assert failed == {"success": False, "reason": "profile_sync", "message": "write denied"}


class TestSubscription:
    def test_unsubscribe_releases_once(self):
        release = MagicMock()
        sub = Subscription(release)

        sub.unsubscribe()
        sub.unsubscribe()

        release.assert_called_once()
        assert sub.active is False

    def test_context_manager(self):
        release = MagicMock()
        with Subscription(release, name="test") as sub:
            assert sub.active is True
        release.assert_called_once()
