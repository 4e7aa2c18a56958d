# app/core/error_handlers.py
"""
Exception handlers rendering every failure into the error envelope:

    {"success": false, "error": {"message": ..., "code": ..., ...details}, ...extra}
"""

from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import BaseAppException, ErrorCode
from app.core.logging import get_logger
from app.core.middleware import get_request_id
from app.schemas.common import ErrorResponse

logger = get_logger(__name__)


async def handle_application_exception(request: Request, exception: BaseAppException) -> JSONResponse:
    """Handle custom application exceptions"""
    log = logger.error if exception.status_code >= 500 else logger.info
    log(
        f"Application exception: {exception.error_code.value} - {exception.message}",
        extra={
            "request_id": get_request_id(request),
            "error_code": exception.error_code.value,
            "path": request.url.path,
            "method": request.method,
        },
    )
    return JSONResponse(status_code=exception.status_code, content=exception.to_dict())


async def handle_validation_error(request: Request, exception: RequestValidationError) -> JSONResponse:
    """Handle request bodies and parameters that fail schema validation"""
    field_errors: Dict[str, Any] = {}
    for error in exception.errors():
        field_path = ".".join(str(part) for part in error["loc"])
        field_errors[field_path] = {"message": error["msg"], "type": error["type"]}

    logger.info(
        f"Validation error: {len(field_errors)} field(s) failed validation",
        extra={"request_id": get_request_id(request), "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse.create(
            "Request validation failed",
            ErrorCode.VALIDATION_ERROR.value,
            {"fieldErrors": field_errors},
        ),
    )


async def handle_unexpected_exception(request: Request, exception: Exception) -> JSONResponse:
    """Last resort for anything the services did not turn into a result"""
    logger.error(
        f"Unhandled exception: {exception}",
        extra={"request_id": get_request_id(request), "path": request.url.path},
        exc_info=(type(exception), exception, exception.__traceback__),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse.create("Internal server error", ErrorCode.INTERNAL_ERROR.value),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAppException, handle_application_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_exception)


__all__ = ["register_exception_handlers"]
