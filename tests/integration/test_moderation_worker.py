from app.db.database import AsyncSessionLocal
from app.models import Entity, Review, ModerationStatus
from app.services.moderation import ModerationWorker
from tests.conftest import (
    SPAM_REPLY,
    FakeTextGenerator,
    fetch,
    run,
    seed_entity,
    seed_review,
)


class BrokenSessionFactory:
    def __call__(self):
        raise ConnectionError("database is down")


def test_prompt_includes_author_history(database):
    seed_entity("biz1")
    seed_review("old1", 4, user_id="u1", flags=["spam"], status=ModerationStatus.PENDING)
    seed_review("old2", 5, user_id="u1")
    seed_review("new", 5, user_id="u1")
    generator = FakeTextGenerator()

    worker = ModerationWorker(AsyncSessionLocal, generator)
    run(worker.run("new", "biz1", "u1", "Seeded review text"))

    prompt = generator.calls[0][0]["content"]
    assert "User history: 3 total reviews, 1 previously flagged" in prompt
    assert generator.calls[0][0]["role"] == "user"


def test_flagged_review_is_pending_and_excluded(database):
    seed_entity("biz1")
    seed_review("keep", 4)
    seed_review("new", 1, user_id="u1")

    worker = ModerationWorker(AsyncSessionLocal, FakeTextGenerator(reply=SPAM_REPLY))
    run(worker.run("new", "biz1", "u1", "Seeded review text"))

    review = fetch(Review, "new")
    assert review.moderation_status == ModerationStatus.PENDING
    assert review.moderation_flags == ["spam"]
    assert fetch(Entity, "biz1").biashara_score == 4.0
    assert fetch(Entity, "biz1").total_reviews == 1


def test_safe_result_clears_flags_without_changing_status(database):
    seed_entity("biz1")
    seed_review("new", 3, status=ModerationStatus.HIDDEN, flags=["stale"])

    worker = ModerationWorker(AsyncSessionLocal, FakeTextGenerator())
    run(worker.run("new", "biz1", "u9", "Seeded review text"))

    review = fetch(Review, "new")
    assert review.moderation_status == ModerationStatus.HIDDEN
    assert review.moderation_flags == []
    assert review.moderation_checked_at is not None


def test_run_never_raises(database):
    worker = ModerationWorker(BrokenSessionFactory(), FakeTextGenerator())
    assert run(worker.run("new", "biz1", "u1", "text")) is None

    worker = ModerationWorker(AsyncSessionLocal, FakeTextGenerator(error=TimeoutError("slow")))
    assert run(worker.run("new", "biz1", "u1", "text")) is None
