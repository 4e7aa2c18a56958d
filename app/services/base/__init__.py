"""
Base services module.

Provides the ServiceResult pattern and the BaseService class with
transaction management, logging and property access checks.
"""

from app.services.base.service_result import (
    ServiceResult,
    ServiceError,
    ErrorCode,
    ErrorSeverity,
)

from app.services.base.base_service import BaseService, TransactionAborted

__all__ = [
    "ServiceResult",
    "ServiceError",
    "ErrorCode",
    "ErrorSeverity",
    "BaseService",
    "TransactionAborted",
]
