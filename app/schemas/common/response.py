# --- File: app/schemas/common/response.py ---
"""
Standard API response wrappers for success and error envelopes.
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import ConfigDict, Field

from app.schemas.common.base import BaseSchema

T = TypeVar("T")

__all__ = [
    "SuccessResponse",
    "ErrorBody",
    "ErrorResponse",
]


class SuccessResponse(BaseSchema, Generic[T]):
    """Standard success response."""

    success: bool = Field(default=True, description="Success flag")
    message: str = Field(..., description="Response message")
    data: Union[T, None] = Field(default=None, description="Response data")
    warnings: Optional[List[str]] = Field(default=None, description="Non-blocking warnings")

    @classmethod
    def create(
        cls,
        message: str,
        data: Union[T, None] = None,
        warnings: Optional[List[str]] = None,
    ):
        """Create success response."""
        return cls(success=True, message=message, data=data, warnings=warnings or None)


class ErrorBody(BaseSchema):
    """Error object; typed failures add their own keys."""

    model_config = ConfigDict(extra="allow")

    message: str = Field(..., description="Error message")
    code: str = Field(..., description="Application error code")


class ErrorResponse(BaseSchema):
    """
    Standard error response.

    Blocked deletions add remediation keys such as ``requiresAction`` and
    ``actions`` next to ``error``.
    """

    model_config = ConfigDict(extra="allow")

    success: bool = Field(default=False, description="Success flag")
    error: ErrorBody

    @classmethod
    def create(
        cls,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None,
        **extra: Any,
    ) -> Dict[str, Any]:
        """Create an error response body; ``details`` go inside ``error``."""
        error = ErrorBody(message=message, code=code, **(details or {}))
        return cls(success=False, error=error, **extra).model_dump(mode="json", by_alias=True)
