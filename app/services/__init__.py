"""
Services package.
Business logic and external service clients.
"""
from app.services.store import EntityStore
from app.services.ratings import rating_aggregator, RatingAggregator, RatingSummary, average_rating
from app.services.moderation import (
    ModerationWorker,
    ModerationResult,
    ModerationVerdict,
    build_moderation_prompt,
    parse_moderation_response,
)
from app.services.reviews import review_service, ReviewService
from app.services.chat import chat_service, ChatService
from app.services.text_generation import text_generation_service, TextGenerationService
from app.services.identity import identity_service, IdentityService

__all__ = [
    "EntityStore",
    "rating_aggregator",
    "RatingAggregator",
    "RatingSummary",
    "average_rating",
    "ModerationWorker",
    "ModerationResult",
    "ModerationVerdict",
    "build_moderation_prompt",
    "parse_moderation_response",
    "review_service",
    "ReviewService",
    "chat_service",
    "ChatService",
    "text_generation_service",
    "TextGenerationService",
    "identity_service",
    "IdentityService",
]
