"""
Review moderation.

After a review is stored, a background worker asks the text generation service
whether the review breaks content policy. Flagged reviews move to 'pending' and
drop out of the business's Biashara score. Moderation is advisory: a reply that
cannot be parsed counts as safe, and any failure is logged and absorbed so the
already-published review stays as it is.
"""
import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import logger, log_error
from app.db.database import utcnow
from app.models import ModerationStatus
from app.services.ratings import RatingAggregator, rating_aggregator
from app.services.store import EntityStore


MODERATION_PROMPT_TEMPLATE = """Analyze this review for policy violations. Return a JSON object with:
- isSafe: boolean (true if the review is safe, false if it violates policies)
- flags: array of strings (reasons if unsafe, empty if safe)

Review policies:
- No hate speech, discrimination, or harassment
- No spam or promotional content
- No fake or misleading information
- No personal attacks
- No profanity or offensive language
- Must be relevant to the business

Review text: "{review_text}"
User history: {total_reviews} total reviews, {flagged_reviews} previously flagged

Respond ONLY with valid JSON, no additional text."""

# ```json ... ``` wrapper some models put around JSON replies
_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


class ModerationVerdict(str, Enum):
    SAFE = "safe"
    UNSAFE = "unsafe"
    UNPARSEABLE = "unparseable"


@dataclass(frozen=True)
class ModerationResult:
    """Classifier outcome. Only UNSAFE results carry flags."""

    verdict: ModerationVerdict
    flags: List[str] = field(default_factory=list)
    raw: Optional[str] = None

    @classmethod
    def safe(cls) -> "ModerationResult":
        return cls(ModerationVerdict.SAFE)

    @classmethod
    def unsafe(cls, flags: List[str]) -> "ModerationResult":
        return cls(ModerationVerdict.UNSAFE, flags=list(flags))

    @classmethod
    def unparseable(cls, raw: Optional[str]) -> "ModerationResult":
        return cls(ModerationVerdict.UNPARSEABLE, raw=raw)

    @property
    def is_flagged(self) -> bool:
        return self.verdict is ModerationVerdict.UNSAFE


def build_moderation_prompt(review_text: str, total_reviews: int, flagged_reviews: int) -> str:
    return MODERATION_PROMPT_TEMPLATE.format(
        review_text=review_text,
        total_reviews=total_reviews,
        flagged_reviews=flagged_reviews,
    )


def parse_moderation_response(reply: Optional[str]) -> ModerationResult:
    """
    Turn the classifier's reply into a ModerationResult.

    The reply must be a JSON object. A review is UNSAFE when isSafe is not
    truthy and at least one flag is given; any other object is SAFE. Anything
    that is not a JSON object is UNPARSEABLE.
    """
    if reply is None:
        return ModerationResult.unparseable(reply)

    text = reply.strip()
    fenced = _CODE_FENCE.match(text)
    if fenced:
        text = fenced.group(1)

    try:
        data: Any = json.loads(text)
    except ValueError:
        return ModerationResult.unparseable(reply)

    if not isinstance(data, dict):
        return ModerationResult.unparseable(reply)

    flags = data.get("flags")
    if not isinstance(flags, list):
        flags = []

    if not data.get("isSafe") and flags:
        return ModerationResult.unsafe([str(f) for f in flags])
    return ModerationResult.safe()


class ModerationWorker:
    """
    Moderates one review per run. Meant to be scheduled after the response has
    been sent; run() never raises.

    The worker opens its own session from session_factory since the request's
    session is closed by the time it runs.
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        text_generator: Any,
        aggregator: RatingAggregator = rating_aggregator,
    ):
        self._session_factory = session_factory
        self._text_generator = text_generator
        self._aggregator = aggregator

    async def classify(self, store: EntityStore, user_id: str, review_text: str) -> ModerationResult:
        total_reviews, flagged_reviews = await store.user_review_history(user_id)
        prompt = build_moderation_prompt(review_text, total_reviews, flagged_reviews)

        reply = await self._text_generator.generate([{"role": "user", "content": prompt}])
        return parse_moderation_response(reply)

    async def run(self, review_id: str, entity_id: str, user_id: str, review_text: str) -> None:
        try:
            async with self._session_factory() as session:
                store = EntityStore(session)

                result = await self.classify(store, user_id, review_text)
                if result.verdict is ModerationVerdict.UNPARSEABLE:
                    logger.warning(
                        "Failed to parse moderation response, treating review as safe",
                        extra={"review_id": review_id, "response": result.raw},
                    )

                if result.is_flagged:
                    await store.record_moderation(
                        review_id, result.flags, utcnow(), status=ModerationStatus.PENDING
                    )
                    logger.info(
                        "Review flagged for moderation",
                        extra={"review_id": review_id, "flags": result.flags},
                    )
                else:
                    await store.record_moderation(review_id, [], utcnow())
                await store.commit()

                await self._aggregator.recalculate(store, entity_id)
                await store.commit()
        except Exception as e:
            log_error(
                "Background moderation failed",
                e,
                review_id=review_id,
                entity_id=entity_id,
            )
