"""
Application exceptions.
Each exception carries an ErrorCode that the handlers in app.main map to an HTTP status.
"""
from typing import Optional, Dict, Any

from app.schemas.error import ErrorCode


class AppException(Exception):
    """
    Base exception class for all application exceptions.
    All custom exceptions should inherit from this.
    """

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class UnauthenticatedException(AppException):
    """Raised when a protected operation has no valid caller identity (401)."""

    def __init__(self, message: str = "Unauthenticated", details: Optional[Dict[str, Any]] = None):
        super().__init__(ErrorCode.UNAUTHENTICATED, message, details)


class InvalidArgumentException(AppException):
    """Raised when request arguments are invalid (422)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(ErrorCode.INVALID_ARGUMENT, message, details)


class NotFoundException(AppException):
    """Raised when a referenced review, entity or chat does not exist (404)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(ErrorCode.NOT_FOUND, message, details)


class DependencyFailureException(AppException):
    """Raised when the database or an external service call fails (503)."""

    def __init__(
        self, message: str = "Dependency unavailable", details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(ErrorCode.DEPENDENCY_FAILURE, message, details)
