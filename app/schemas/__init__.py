"""
Pydantic schemas package.
Exports all request/response models.
"""
from app.schemas.review import (
    SubmitReviewRequest,
    SubmitReviewResponse,
    ReviewOutput,
    CalculateRatingsRequest,
    CalculateRatingsResponse,
    ModerateReviewRequest,
    ModerateReviewResponse,
)
from app.schemas.chat import (
    CreateChatRequest,
    CreateChatResponse,
    SendMessageRequest,
    MarkReadRequest,
    SuccessResponse,
    ChatOutput,
    ChatMessageOutput,
    ChatListResponse,
    ChatMessageListResponse,
)
from app.schemas.user import SyncUserRequest, SyncUserResponse, UserOutput
from app.schemas.error import ErrorCode, ErrorDetail, ErrorResponse, ERROR_CODE_TO_HTTP_STATUS

__all__ = [
    # Review
    "SubmitReviewRequest",
    "SubmitReviewResponse",
    "ReviewOutput",
    "CalculateRatingsRequest",
    "CalculateRatingsResponse",
    "ModerateReviewRequest",
    "ModerateReviewResponse",
    # Chat
    "CreateChatRequest",
    "CreateChatResponse",
    "SendMessageRequest",
    "MarkReadRequest",
    "SuccessResponse",
    "ChatOutput",
    "ChatMessageOutput",
    "ChatListResponse",
    "ChatMessageListResponse",
    # User
    "SyncUserRequest",
    "SyncUserResponse",
    "UserOutput",
    # Error
    "ErrorCode",
    "ErrorDetail",
    "ErrorResponse",
    "ERROR_CODE_TO_HTTP_STATUS",
]
