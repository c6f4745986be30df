"""
Standard error response schemas.
All API errors follow this unified format.
"""
from typing import Optional, Dict, Any
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict


class ErrorCode(str, Enum):
    """Error codes surfaced to API callers."""

    UNAUTHENTICATED = "UNAUTHENTICATED"  # 401
    INVALID_ARGUMENT = "INVALID_ARGUMENT"  # 422
    NOT_FOUND = "NOT_FOUND"  # 404
    DEPENDENCY_FAILURE = "DEPENDENCY_FAILURE"  # 503
    INTERNAL = "INTERNAL"  # 500


class ErrorDetail(BaseModel):
    """
    Error detail object.
    Contains the error code, human-readable message, and optional additional details.
    """

    code: ErrorCode = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")

    model_config = ConfigDict(use_enum_values=True)


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    Example:
    {
        "requestId": "abc-123-def",
        "error": {
            "code": "NOT_FOUND",
            "message": "Review not found: review_1700000000000_u1",
            "details": {"reviewId": "review_1700000000000_u1"}
        }
    }
    """

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    error: ErrorDetail = Field(..., description="Error details")

    model_config = ConfigDict(populate_by_name=True)


ERROR_CODE_TO_HTTP_STATUS = {
    ErrorCode.UNAUTHENTICATED: 401,
    ErrorCode.INVALID_ARGUMENT: 422,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.DEPENDENCY_FAILURE: 503,
    ErrorCode.INTERNAL: 500,
}
