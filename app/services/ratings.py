"""
Rating aggregation - recomputes a business's Biashara score from its published reviews.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from app.core.exceptions import NotFoundException
from app.core.logging import logger
from app.services.store import EntityStore

_ONE_DECIMAL = Decimal("0.1")


def average_rating(ratings: Iterable[float]) -> float:
    """
    Mean of the ratings, rounded half-up to one decimal place. 0.0 for no ratings.

    Decimal arithmetic keeps 4.25 rounding to 4.3 instead of float's 4.2.
    """
    values = [Decimal(str(r)) for r in ratings]
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return float(mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class RatingSummary:
    average_rating: float
    total_reviews: int


class RatingAggregator:
    """
    Recompute-and-overwrite aggregation.

    There is no incremental state: every run reads the current set of published
    reviews and overwrites the business record, so concurrent runs for the same
    business converge and the last write wins.
    """

    async def recalculate(self, store: EntityStore, entity_id: str) -> RatingSummary:
        """
        Recompute and persist the score for one business. Does not commit.

        Raises:
            NotFoundException: the business does not exist
        """
        ratings = await store.published_ratings(entity_id)
        summary = RatingSummary(average_rating=average_rating(ratings), total_reviews=len(ratings))

        updated = await store.set_entity_rating(
            entity_id, score=summary.average_rating, total_reviews=summary.total_reviews
        )
        if not updated:
            raise NotFoundException(
                f"Business not found: {entity_id}", details={"entityId": entity_id}
            )

        logger.info(
            "Updated business rating",
            extra={
                "entity_id": entity_id,
                "average_rating": summary.average_rating,
                "total_reviews": summary.total_reviews,
            },
        )
        return summary


# Global aggregator instance
rating_aggregator = RatingAggregator()
