"""
Review intake and the admin moderation action.
"""
import time

from app.core.config import settings
from app.core.exceptions import InvalidArgumentException, NotFoundException
from app.core.logging import logger
from app.db.database import utcnow
from app.models import Review, ModerationStatus
from app.schemas.review import SubmitReviewRequest
from app.services.ratings import RatingAggregator, rating_aggregator
from app.services.store import EntityStore

ACTION_TO_STATUS = {
    "approve": ModerationStatus.PUBLISHED,
    "hide": ModerationStatus.HIDDEN,
}


def generate_review_id(user_id: str) -> str:
    """review_<epoch millis>_<author uid>; unique enough for one author at a time."""
    return f"review_{int(time.time() * 1000)}_{user_id}"


class ReviewService:
    def __init__(self, aggregator: RatingAggregator = rating_aggregator):
        self._aggregator = aggregator

    async def submit_review(
        self, store: EntityStore, user_id: str, request: SubmitReviewRequest
    ) -> Review:
        """
        Store a new review as published with no moderation flags. Does not commit.

        The author's display name and avatar come from their user record,
        falling back to settings.ANONYMOUS_USER_NAME.
        """
        user = await store.get_user(user_id)
        user_name = (user.name if user else None) or settings.ANONYMOUS_USER_NAME
        user_avatar = user.avatar if user else None

        review = Review(
            id=generate_review_id(user_id),
            entity_id=request.entity_id,
            user_id=user_id,
            user_name=user_name,
            user_avatar=user_avatar,
            rating=request.rating,
            review_text=request.review_text,
            date_of_experience=request.date_of_experience,
            photo_urls=request.photo_urls or [],
            is_verified=True,
            likes=0,
            reports=0,
            moderation_status=ModerationStatus.PUBLISHED,
            moderation_flags=[],
            moderation_checked_at=None,
            created_at=utcnow(),
        )
        await store.add_review(review)

        logger.info(
            "Review created",
            extra={"review_id": review.id, "entity_id": review.entity_id, "user_id": user_id},
        )
        return review

    async def moderate_review(
        self, store: EntityStore, review_id: str, action: str, moderator_id: str
    ) -> ModerationStatus:
        """
        Publish or hide a review, then recompute its business's score. Does not commit.

        Raises:
            InvalidArgumentException: unknown action
            NotFoundException: the review or its business does not exist
        """
        if action not in ACTION_TO_STATUS:
            raise InvalidArgumentException(
                f"Unknown moderation action: {action}",
                details={"allowed": sorted(ACTION_TO_STATUS)},
            )

        review = await store.get_review(review_id)
        if review is None:
            raise NotFoundException(
                f"Review not found: {review_id}", details={"reviewId": review_id}
            )

        new_status = ACTION_TO_STATUS[action]
        await store.set_review_status(review_id, new_status)
        await self._aggregator.recalculate(store, review.entity_id)

        logger.info(
            f"Review {action} by moderator",
            extra={
                "review_id": review_id,
                "moderator_id": moderator_id,
                "new_status": new_status.value,
            },
        )
        return new_status


# Global service instance
review_service = ReviewService()
