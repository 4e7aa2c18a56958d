"""
Result objects returned by every service call.

Services report business outcomes (a full room, an occupied bed, a delete
that needs a relocation decision) as failed results instead of raising.
The API layer turns a failed result into the error envelope.
"""

from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar


class ErrorCode(str, Enum):
    """Error codes carried by failed service results."""

    # General
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"

    # Hierarchy capacity
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    ROOM_FULL = "ROOM_FULL"
    INVALID_CAPACITY = "INVALID_CAPACITY"
    INVALID_RENT = "INVALID_RENT"
    DUPLICATE_FLOOR_NUMBER = "DUPLICATE_FLOOR_NUMBER"
    DUPLICATE_ROOM_NUMBER = "DUPLICATE_ROOM_NUMBER"
    DUPLICATE_BED_NUMBER = "DUPLICATE_BED_NUMBER"
    DUPLICATE_TENANT_ID = "DUPLICATE_TENANT_ID"

    # Occupancy
    BED_OCCUPIED = "BED_OCCUPIED"
    BED_UNAVAILABLE = "BED_UNAVAILABLE"
    BED_NOT_OCCUPIED = "BED_NOT_OCCUPIED"
    TENANT_ALREADY_ASSIGNED = "TENANT_ALREADY_ASSIGNED"
    TENANT_VACATED = "TENANT_VACATED"
    CROSS_PROPERTY_ASSIGNMENT = "CROSS_PROPERTY_ASSIGNMENT"
    ALREADY_VACATED = "ALREADY_VACATED"
    FUTURE_DATE_NOT_ALLOWED = "FUTURE_DATE_NOT_ALLOWED"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"

    # Deletion and relocation
    REQUIRES_RELOCATION_DECISION = "REQUIRES_RELOCATION_DECISION"
    TARGET_BED_OCCUPIED = "TARGET_BED_OCCUPIED"
    CROSS_PROPERTY_RELOCATION = "CROSS_PROPERTY_RELOCATION"
    INVALID_RELOCATION_TARGET = "INVALID_RELOCATION_TARGET"
    ACTIVE_TENANTS_EXIST = "ACTIVE_TENANTS_EXIST"
    PENDING_PAYMENTS_EXIST = "PENDING_PAYMENTS_EXIST"

    # Payments
    PAID_PAYMENT_NOT_DELETABLE = "PAID_PAYMENT_NOT_DELETABLE"
    ALREADY_PAID = "ALREADY_PAID"


class ErrorSeverity(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class ServiceError:
    """
    A typed failure.

    ``details`` ends up inside the ``error`` object of the response, so it
    holds facts about the failure itself (the violated constraint, the
    original vacate date, the tenant blocking a delete).
    """

    code: ErrorCode
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    details: Dict[str, Any] = dataclass_field(default_factory=dict)
    field: Optional[str] = None


TData = TypeVar("TData")


@dataclass
class ServiceResult(Generic[TData]):
    """
    Outcome of a service operation.

    On success ``data`` holds the wire payload. On failure ``error`` is set
    and ``metadata`` may carry remediation (``requiresAction``, ``actions``,
    ``relocationOptions``) that the API returns next to the error.
    """

    is_success: bool
    data: Optional[TData] = None
    error: Optional[ServiceError] = None
    message: Optional[str] = None
    metadata: Dict[str, Any] = dataclass_field(default_factory=dict)

    @classmethod
    def success(
        cls,
        data: Optional[TData] = None,
        message: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        return cls(is_success=True, data=data, message=message, metadata=metadata or {})

    @classmethod
    def failure(
        cls,
        error: ServiceError,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        return cls(is_success=False, error=error, message=error.message, metadata=metadata or {})

    @classmethod
    def validation_failure(
        cls,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        return failure(ErrorCode.VALIDATION_ERROR, message, field=field, details=details)

    @classmethod
    def not_found(
        cls,
        resource_type: str,
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
    ) -> "ServiceResult[TData]":
        """Missing entity, or one that belongs to another owner."""
        return failure(
            ErrorCode.NOT_FOUND,
            message or f"{resource_type} not found",
            details={"resourceType": resource_type, "resourceId": resource_id},
            severity=ErrorSeverity.WARNING,
        )

    @property
    def error_code(self) -> Optional[ErrorCode]:
        return self.error.code if self.error else None

    def unwrap(self) -> TData:
        """
        Return ``data`` of a successful result.

        Raises:
            ValueError: If the result is a failure
        """
        if not self.is_success:
            raise ValueError(f"Cannot unwrap failed result: {self.error.code.value} {self.error.message}")
        return self.data

    def __bool__(self) -> bool:
        return self.is_success

    def __repr__(self) -> str:
        if self.is_success:
            return f"ServiceResult(success: {self.message or 'OK'})"
        return f"ServiceResult(failure: {self.error.code.value})"


def failure(
    error_code: ErrorCode,
    message: str,
    field: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    severity: ErrorSeverity = ErrorSeverity.ERROR,
    metadata: Optional[Dict[str, Any]] = None,
) -> ServiceResult[Any]:
    """Shorthand for a failed result built from its parts."""
    error = ServiceError(
        code=error_code,
        message=message,
        severity=severity,
        details=details or {},
        field=field,
    )
    return ServiceResult.failure(error, metadata=metadata)


__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "ServiceError",
    "ServiceResult",
    "failure",
]
