"""
Review API endpoints: submission, rating recomputation and admin moderation.
"""
from typing import Any, Dict
from fastapi import APIRouter, BackgroundTasks, Depends

from app.api.deps import get_store, get_current_user, get_moderation_worker
from app.core.middleware import get_request_id
from app.core.exceptions import AppException, DependencyFailureException
from app.core.logging import logger
from app.schemas.review import (
    SubmitReviewRequest,
    SubmitReviewResponse,
    ReviewOutput,
    CalculateRatingsRequest,
    CalculateRatingsResponse,
    ModerateReviewRequest,
    ModerateReviewResponse,
)
from app.services.moderation import ModerationWorker
from app.services.ratings import rating_aggregator
from app.services.reviews import review_service
from app.services.store import EntityStore


router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.post("/submit", response_model=SubmitReviewResponse)
async def submit_review(
    request: SubmitReviewRequest,
    background_tasks: BackgroundTasks,
    store: EntityStore = Depends(get_store),
    user: Dict[str, Any] = Depends(get_current_user),
    moderation_worker: ModerationWorker = Depends(get_moderation_worker),
):
    """
    Submit a review.

    The review is stored as published and returned immediately. Moderation and
    rating aggregation run as a background task after the response is sent;
    their outcome is never reported to the caller.

    Raises:
        401: Missing or invalid identity token
        422: Rating outside 1-5 or review text outside 10-500 characters
        503: Database unavailable
    """
    request_id = get_request_id()
    user_id = user["uid"]

    logger.info(
        "Processing review submission",
        extra={"request_id": request_id, "entity_id": request.entity_id, "user_id": user_id},
    )

    try:
        review = await review_service.submit_review(store, user_id, request)
        await store.commit()
    except AppException:
        raise
    except Exception as e:
        logger.error(
            f"Failed to submit review: {str(e)}",
            extra={"request_id": request_id},
            exc_info=True,
        )
        raise DependencyFailureException(f"Database operation failed: {str(e)}")

    background_tasks.add_task(
        moderation_worker.run,
        review_id=review.id,
        entity_id=review.entity_id,
        user_id=user_id,
        review_text=review.review_text,
    )

    return SubmitReviewResponse(
        request_id=request_id,
        success=True,
        review_id=review.id,
        review=ReviewOutput.model_validate(review),
    )


@router.post("/calculate-ratings", response_model=CalculateRatingsResponse)
async def calculate_ratings(
    request: CalculateRatingsRequest,
    store: EntityStore = Depends(get_store),
):
    """
    Recompute a business's Biashara score from its published reviews.

    Raises:
        404: Business not found
        503: Database unavailable
    """
    request_id = get_request_id()

    logger.info(
        "Processing rating recomputation",
        extra={"request_id": request_id, "entity_id": request.entity_id},
    )

    try:
        summary = await rating_aggregator.recalculate(store, request.entity_id)
        await store.commit()
    except AppException:
        raise
    except Exception as e:
        logger.error(
            f"Failed to calculate ratings: {str(e)}",
            extra={"request_id": request_id},
            exc_info=True,
        )
        raise DependencyFailureException(f"Database operation failed: {str(e)}")

    return CalculateRatingsResponse(
        request_id=request_id,
        average_rating=summary.average_rating,
        total_reviews=summary.total_reviews,
    )


@router.post("/moderate", response_model=ModerateReviewResponse)
async def moderate_review(
    request: ModerateReviewRequest,
    store: EntityStore = Depends(get_store),
    user: Dict[str, Any] = Depends(get_current_user),
):
    """
    Admin moderation: 'approve' publishes a review, 'hide' hides it.
    The business's score is recomputed in the same transaction.

    Raises:
        401: Missing or invalid identity token
        404: Review or business not found
        422: Unknown action
        503: Database unavailable
    """
    request_id = get_request_id()
    moderator_id = user["uid"]

    logger.info(
        "Processing moderation action",
        extra={
            "request_id": request_id,
            "review_id": request.review_id,
            "action": request.action,
            "moderator_id": moderator_id,
        },
    )

    try:
        new_status = await review_service.moderate_review(
            store, request.review_id, request.action, moderator_id
        )
        await store.commit()
    except AppException:
        raise
    except Exception as e:
        logger.error(
            f"Failed to moderate review: {str(e)}",
            extra={"request_id": request_id},
            exc_info=True,
        )
        raise DependencyFailureException(f"Database operation failed: {str(e)}")

    return ModerateReviewResponse(request_id=request_id, success=True, new_status=new_status.value)
