"""
Exceptions raised at the HTTP boundary.

Services return ``ServiceResult`` objects; only the API layer and the
authentication dependency raise, and every exception here renders into the
same envelope:

    {"success": false, "error": {"message": ..., "code": ..., ...details}, ...extra}
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Codes produced outside the service layer"""
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_INVALID = "TOKEN_INVALID"


class BaseAppException(Exception):
    """
    Base class for exceptions the error handlers know how to render.

    Args:
        message: Human readable message, returned verbatim
        error_code: Any ``str`` enum; service codes are accepted as well
        details: Merged into the ``error`` object
        status_code: HTTP status of the response
        extra: Merged into the top level of the body
    """

    def __init__(
        self,
        message: str,
        error_code: Enum = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
        extra: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        self.extra = extra or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        error = {"message": self.message, "code": self.error_code.value}
        for key, value in self.details.items():
            error.setdefault(key, value)
        body: Dict[str, Any] = {"success": False, "error": error}
        body.update(self.extra)
        return body

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"


class AuthenticationError(BaseAppException):
    """Missing or unusable bearer credentials"""

    def __init__(
        self,
        message: str = "Authentication failed",
        error_code: Enum = ErrorCode.AUTHENTICATION_FAILED,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details, 401)


class TokenExpiredError(AuthenticationError):
    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, ErrorCode.TOKEN_EXPIRED)


class InvalidTokenError(AuthenticationError):
    """Token that fails to decode, or decodes without a usable subject or role"""

    def __init__(self, message: str = "Invalid token", reason: Optional[str] = None):
        super().__init__(message, ErrorCode.TOKEN_INVALID, {"reason": reason} if reason else None)


class ServiceFailureError(BaseAppException):
    """
    A failed service result on its way to the client.

    ``extra`` holds the result metadata (``requiresAction``, ``actions``,
    ``relocationOptions``, ``recommendations``).
    """

    def __init__(
        self,
        message: str,
        error_code: Enum,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 400,
        extra: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details, status_code, extra)


__all__ = [
    'ErrorCode',
    'BaseAppException',
    'AuthenticationError',
    'TokenExpiredError',
    'InvalidTokenError',
    'ServiceFailureError',
]
