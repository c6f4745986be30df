"""
Pydantic schemas for chat requests and responses.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict


class CreateChatRequest(BaseModel):
    """
    Request schema for opening a chat with a business.
    POST /api/chats/create
    """

    entity_id: str = Field(..., alias="entityId")
    entity_name: str = Field(..., alias="entityName")
    user_id: str = Field(..., alias="userId")
    user_name: str = Field(..., alias="userName")

    model_config = ConfigDict(populate_by_name=True)


class CreateChatResponse(BaseModel):
    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    success: bool
    chat_id: str = Field(..., alias="chatId")

    model_config = ConfigDict(populate_by_name=True)


class SendMessageRequest(BaseModel):
    """
    Request schema for sending a chat message.
    POST /api/chats/send-message
    """

    chat_id: str = Field(..., alias="chatId")
    sender_id: str = Field(..., alias="senderId")
    sender_name: str = Field(..., alias="senderName")
    sender_avatar: Optional[str] = Field(None, alias="senderAvatar")
    message: str

    model_config = ConfigDict(populate_by_name=True)


class MarkReadRequest(BaseModel):
    """
    Request schema for resetting a chat's unread counter.
    POST /api/chats/mark-read
    """

    chat_id: str = Field(..., alias="chatId")

    model_config = ConfigDict(populate_by_name=True)


class SuccessResponse(BaseModel):
    """Acknowledgement for operations with no other payload."""

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    success: bool

    model_config = ConfigDict(populate_by_name=True)


class ChatOutput(BaseModel):
    id: str
    entity_id: str = Field(..., alias="entityId")
    entity_name: str = Field(..., alias="entityName")
    user_id: str = Field(..., alias="userId")
    user_name: str = Field(..., alias="userName")
    last_message: Optional[str] = Field(None, alias="lastMessage")
    last_message_at: Optional[datetime] = Field(None, alias="lastMessageAt")
    unread_count: int = Field(0, alias="unreadCount")
    created_at: datetime = Field(..., alias="createdAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ChatMessageOutput(BaseModel):
    id: str
    chat_id: str = Field(..., alias="chatId")
    sender_id: str = Field(..., alias="senderId")
    sender_name: str = Field(..., alias="senderName")
    sender_avatar: Optional[str] = Field(None, alias="senderAvatar")
    message: str
    timestamp: datetime
    read: bool = False

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ChatListResponse(BaseModel):
    """
    Response schema for a user's conversations.
    GET /api/chats?userId=...
    """

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    chats: List[ChatOutput]

    model_config = ConfigDict(populate_by_name=True)


class ChatMessageListResponse(BaseModel):
    """
    Response schema for a chat thread.
    GET /api/chats/{chatId}/messages
    """

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    messages: List[ChatMessageOutput]

    model_config = ConfigDict(populate_by_name=True)
