"""
Shared fixtures.

The app runs against a throwaway SQLite file. NullPool makes every session open
its own connection, so the same database can be used from asyncio.run() helpers
and from TestClient requests, which run on different event loops.
"""
import asyncio
import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="biashara-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/test.db"
os.environ["DB_NULL_POOL"] = "true"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import select, func  # noqa: E402

from app.main import app  # noqa: E402
from app.api.deps import get_identity_service, get_text_generator  # noqa: E402
from app.db.database import AsyncSessionLocal, init_db, drop_db  # noqa: E402
from app.models import Entity, User, Review, ModerationStatus, Chat, ChatMessage  # noqa: E402

SAFE_REPLY = '{"isSafe": true, "flags": []}'
SPAM_REPLY = '{"isSafe": false, "flags": ["spam"]}'

TOKENS = {"token-u1": "u1", "token-u2": "u2", "token-admin": "admin"}


class FakeTextGenerator:
    """Stands in for the LLM; records every message list it receives."""

    def __init__(self, reply=SAFE_REPLY, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def generate(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeIdentityService:
    def __init__(self, tokens):
        self.tokens = tokens

    async def verify_token(self, token):
        uid = self.tokens.get(token)
        return {"uid": uid} if uid else None


def auth_header(uid="u1"):
    return {"Authorization": f"Bearer token-{uid}"}


def run(coro):
    return asyncio.run(coro)


async def _reset_db():
    await drop_db()
    await init_db()


@pytest.fixture
def database():
    run(_reset_db())
    yield


@pytest.fixture
def generator():
    return FakeTextGenerator()


@pytest.fixture
def client(database, generator):
    app.dependency_overrides[get_text_generator] = lambda: generator
    app.dependency_overrides[get_identity_service] = lambda: FakeIdentityService(TOKENS)
    yield TestClient(app)
    app.dependency_overrides.clear()


# Direct database helpers


def seed_entity(entity_id="biz1", name="Mama Oliech Restaurant"):
    async def _seed():
        async with AsyncSessionLocal() as db:
            db.add(Entity(id=entity_id, name=name, biashara_score=0.0, total_reviews=0))
            await db.commit()

    run(_seed())


def seed_user(user_id, name=None, avatar=None):
    async def _seed():
        async with AsyncSessionLocal() as db:
            db.add(User(id=user_id, name=name, avatar=avatar))
            await db.commit()

    run(_seed())


def seed_review(review_id, rating, entity_id="biz1", user_id="u9", status=ModerationStatus.PUBLISHED, flags=None):
    async def _seed():
        async with AsyncSessionLocal() as db:
            db.add(
                Review(
                    id=review_id,
                    entity_id=entity_id,
                    user_id=user_id,
                    user_name="Seeded",
                    rating=rating,
                    review_text="Seeded review text",
                    date_of_experience="2024-01-01",
                    photo_urls=[],
                    moderation_status=status,
                    moderation_flags=flags or [],
                )
            )
            await db.commit()

    run(_seed())


def fetch(model, key):
    async def _fetch():
        async with AsyncSessionLocal() as db:
            return await db.get(model, key)

    return run(_fetch())


def count_chats(entity_id, user_id):
    async def _count():
        async with AsyncSessionLocal() as db:
            result = await db.execute(
                select(func.count()).select_from(Chat).where(
                    Chat.entity_id == entity_id, Chat.user_id == user_id
                )
            )
            return result.scalar_one()

    return run(_count())


def messages_for(chat_id):
    async def _messages():
        async with AsyncSessionLocal() as db:
            result = await db.execute(select(ChatMessage).where(ChatMessage.chat_id == chat_id))
            return list(result.scalars().all())

    return run(_messages())
