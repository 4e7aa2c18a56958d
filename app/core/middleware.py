# app/core/middleware.py
"""
Request middleware: request id propagation, timing and error logging.
"""
from __future__ import annotations

import time
import uuid
from typing import Callable, Optional

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.core.logging import get_logger, request_id as request_id_var

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Paths left out of the per-request log line
QUIET_PATHS = {"/health", "/api/v1/health", "/docs", "/redoc", "/openapi.json"}


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tag every request with an id and log how long it took.

    The id comes from the ``X-Request-ID`` header when an upstream proxy set
    one. It is kept in ``request.state``, in the logging context variable
    and echoed back in the response headers.
    """

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        req_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = req_id
        token = request_id_var.set(req_id)
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        process_time = time.perf_counter() - start_time
        response.headers[self.header_name] = req_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        if request.url.path not in QUIET_PATHS:
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={
                    "request_id": req_id,
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "process_time": f"{process_time:.4f}s",
                },
            )
        return response


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """Log unhandled exceptions with the request they broke."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                f"Request processing failed: {exc}",
                extra={
                    "request_id": get_request_id(request),
                    "method": request.method,
                    "path": request.url.path,
                    "error_type": type(exc).__name__,
                },
                exc_info=True,
            )
            raise


def register_middlewares(app: FastAPI) -> None:
    """
    Register the core middlewares.

    Starlette runs the last added middleware first, so the request context
    is added last and wraps the error logger.
    """
    app.add_middleware(ErrorLoggingMiddleware)
    app.add_middleware(RequestContextMiddleware)
    logger.debug("Registered request context and error logging middleware")


def get_request_id(request: Request) -> Optional[str]:
    """Request id assigned by ``RequestContextMiddleware``, if any."""
    return getattr(request.state, "request_id", None)


__all__ = [
    "RequestContextMiddleware",
    "ErrorLoggingMiddleware",
    "register_middlewares",
    "get_request_id",
]
