# app/api/v1/common.py
"""
Helpers shared by the v1 routers.
"""

from typing import Any, Optional

from app.core.exceptions import ServiceFailureError
from app.schemas.common import SuccessResponse
from app.services.base import ErrorCode, ServiceResult

# Failed service results map to these statuses; everything else is a 400
STATUS_BY_ERROR_CODE = {
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.INTERNAL_ERROR: 500,
}


def raise_for_result(result: ServiceResult) -> None:
    """
    Raise ``ServiceFailureError`` for a failed result.

    Error details go inside the ``error`` object; result metadata such as
    ``requiresAction`` is lifted to the top level of the body.
    """
    if result.is_success:
        return
    error = result.error
    details = dict(error.details or {})
    if error.field and "field" not in details:
        details["field"] = error.field
    raise ServiceFailureError(
        message=error.message,
        error_code=error.code,
        details=details,
        status_code=STATUS_BY_ERROR_CODE.get(error.code, 400),
        extra=result.metadata,
    )


def respond(result: ServiceResult, default_message: Optional[str] = None) -> Any:
    """Unwrap a service result into the success envelope or raise."""
    raise_for_result(result)
    response = SuccessResponse.create(
        message=result.message or default_message or "OK",
        data=result.data,
        warnings=(result.data or {}).get("warnings") if isinstance(result.data, dict) else None,
    )
    body = response.model_dump(mode="json", by_alias=True)
    if body.get("warnings") is None:
        body.pop("warnings", None)
    if result.metadata:
        body["meta"] = result.metadata
    return body
