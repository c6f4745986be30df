"""
Pydantic schemas for review submission, moderation and rating requests and responses.
"""
from typing import Optional, List, Literal
from datetime import datetime
from pydantic import BaseModel, Field, field_validator, ConfigDict

from app.core.config import settings


class SubmitReviewRequest(BaseModel):
    """
    Request schema for review submission.
    POST /api/reviews/submit
    """

    entity_id: str = Field(..., alias="entityId", description="Business being reviewed")
    rating: float = Field(..., ge=1, le=5, description="Star rating (1-5)")
    review_text: str = Field(
        ...,
        alias="reviewText",
        min_length=settings.REVIEW_TEXT_MIN_LENGTH,
        max_length=settings.REVIEW_TEXT_MAX_LENGTH,
        description="Review body",
    )
    date_of_experience: str = Field(
        ..., alias="dateOfExperience", description="When the visit took place"
    )
    photo_urls: Optional[List[str]] = Field(
        None, alias="photoUrls", description="Uploaded photo references"
    )

    model_config = ConfigDict(populate_by_name=True)


class ReviewOutput(BaseModel):
    """
    A stored review, as returned to the client.
    """

    id: str
    entity_id: str = Field(..., alias="entityId")
    user_id: str = Field(..., alias="userId")
    user_name: str = Field(..., alias="userName")
    user_avatar: Optional[str] = Field(None, alias="userAvatar")
    rating: float
    review_text: str = Field(..., alias="reviewText")
    date_of_experience: str = Field(..., alias="dateOfExperience")
    created_at: datetime = Field(..., alias="createdAt")
    photo_urls: List[str] = Field(default_factory=list, alias="photoUrls")
    is_verified: bool = Field(True, alias="isVerified")
    likes: int = 0
    reports: int = 0
    moderation_status: str = Field(..., alias="moderationStatus")
    moderation_flags: List[str] = Field(default_factory=list, alias="moderationFlags")
    moderation_checked_at: Optional[datetime] = Field(None, alias="moderationCheckedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    @field_validator("moderation_status", mode="before")
    @classmethod
    def unwrap_status(cls, v):
        """Stored rows carry a ModerationStatus; clients see its string value."""
        return getattr(v, "value", v)


class SubmitReviewResponse(BaseModel):
    """Response schema for review submission."""

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    success: bool = Field(..., description="Whether the review was stored")
    review_id: str = Field(..., alias="reviewId", description="Generated review ID")
    review: ReviewOutput = Field(..., description="The stored review")

    model_config = ConfigDict(populate_by_name=True)


class CalculateRatingsRequest(BaseModel):
    """
    Request schema for rating recomputation.
    POST /api/reviews/calculate-ratings
    """

    entity_id: str = Field(..., alias="entityId", description="Business to recompute")

    model_config = ConfigDict(populate_by_name=True)


class CalculateRatingsResponse(BaseModel):
    """Response schema for rating recomputation."""

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    average_rating: float = Field(
        ..., alias="averageRating", description="Mean of published ratings, one decimal place"
    )
    total_reviews: int = Field(..., alias="totalReviews", description="Number of published reviews")

    model_config = ConfigDict(populate_by_name=True)


class ModerateReviewRequest(BaseModel):
    """
    Request schema for the admin moderation action.
    POST /api/reviews/moderate
    """

    review_id: str = Field(..., alias="reviewId", description="Review to moderate")
    action: Literal["approve", "hide"] = Field(..., description="'approve' publishes, 'hide' hides")

    model_config = ConfigDict(populate_by_name=True)


class ModerateReviewResponse(BaseModel):
    """Response schema for the admin moderation action."""

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    success: bool
    new_status: str = Field(..., alias="newStatus", description="published | hidden")

    model_config = ConfigDict(populate_by_name=True)
