"""
Pydantic schemas for user profile sync.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict


class SyncUserRequest(BaseModel):
    """
    Profile fields reported by the client after sign-in.
    POST /api/auth/sync-user

    Fields left unset keep their stored value.
    """

    name: Optional[str] = Field(None, max_length=200)
    email: Optional[str] = None
    avatar: Optional[str] = None


class UserOutput(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    avatar: Optional[str] = None
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class SyncUserResponse(BaseModel):
    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    success: bool
    user: UserOutput

    model_config = ConfigDict(populate_by_name=True)
