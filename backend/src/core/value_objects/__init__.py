from backend.src.core.value_objects.operation_result import FailureReason, OperationResult
from backend.src.core.value_objects.subscription import Subscription

__all__ = ["FailureReason", "OperationResult", "Subscription"]
