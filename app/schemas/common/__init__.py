"""Common schema building blocks."""

from app.schemas.common.base import (
    BaseSchema,
    BaseCreateSchema,
    BaseUpdateSchema,
    BaseResponseSchema,
)
from app.schemas.common.response import SuccessResponse, ErrorBody, ErrorResponse

__all__ = [
    "BaseSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
    "BaseResponseSchema",
    "SuccessResponse",
    "ErrorBody",
    "ErrorResponse",
]
