"""
Entity store - the single place that issues queries against the database.

Services receive an EntityStore bound to one AsyncSession instead of reaching
for a global handle, so request handlers and the background moderation worker
each work against their own session.
"""
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import utcnow
from app.models import User, Entity, Review, ModerationStatus, Chat, ChatMessage


class EntityStore:
    """Query and mutation helpers over users, businesses, reviews, chats and messages."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()

    # Users

    async def get_user(self, user_id: str) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def upsert_user(
        self,
        user_id: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
        avatar: Optional[str] = None,
    ) -> User:
        user = await self.get_user(user_id)
        if user is None:
            user = User(id=user_id)
            self.session.add(user)

        # Only overwrite fields the client actually reported
        if name is not None:
            user.name = name
        if email is not None:
            user.email = email
        if avatar is not None:
            user.avatar = avatar
        user.updated_at = utcnow()

        await self.session.flush()
        return user

    # Businesses

    async def get_entity(self, entity_id: str) -> Optional[Entity]:
        return await self.session.get(Entity, entity_id)

    async def set_entity_rating(self, entity_id: str, score: float, total_reviews: int) -> bool:
        """Overwrite the aggregate rating. Returns False if the business does not exist."""
        result = await self.session.execute(
            update(Entity)
            .where(Entity.id == entity_id)
            .values(biashara_score=score, total_reviews=total_reviews)
        )
        return result.rowcount > 0

    # Reviews

    async def add_review(self, review: Review) -> Review:
        self.session.add(review)
        await self.session.flush()
        return review

    async def get_review(self, review_id: str) -> Optional[Review]:
        return await self.session.get(Review, review_id)

    async def published_ratings(self, entity_id: str) -> List[float]:
        result = await self.session.execute(
            select(Review.rating).where(
                Review.entity_id == entity_id,
                Review.moderation_status == ModerationStatus.PUBLISHED,
            )
        )
        return list(result.scalars().all())

    async def user_review_history(self, user_id: str) -> Tuple[int, int]:
        """Return (total reviews, reviews that carry moderation flags) for an author."""
        result = await self.session.execute(
            select(Review.moderation_flags).where(Review.user_id == user_id)
        )
        flag_lists = result.scalars().all()
        flagged = sum(1 for flags in flag_lists if flags)
        return len(flag_lists), flagged

    async def record_moderation(
        self,
        review_id: str,
        flags: List[str],
        checked_at: datetime,
        status: Optional[ModerationStatus] = None,
    ) -> bool:
        values = {"moderation_flags": list(flags), "moderation_checked_at": checked_at}
        if status is not None:
            values["moderation_status"] = status

        result = await self.session.execute(
            update(Review).where(Review.id == review_id).values(**values)
        )
        return result.rowcount > 0

    async def set_review_status(self, review_id: str, status: ModerationStatus) -> bool:
        result = await self.session.execute(
            update(Review).where(Review.id == review_id).values(moderation_status=status)
        )
        return result.rowcount > 0

    # Chats

    async def get_chat(self, chat_id: str) -> Optional[Chat]:
        return await self.session.get(Chat, chat_id)

    async def find_chat(self, entity_id: str, user_id: str) -> Optional[Chat]:
        result = await self.session.execute(
            select(Chat).where(Chat.entity_id == entity_id, Chat.user_id == user_id)
        )
        return result.scalars().first()

    async def add_chat(self, chat: Chat) -> Chat:
        self.session.add(chat)
        await self.session.flush()
        return chat

    async def list_chats(self, user_id: str) -> List[Chat]:
        result = await self.session.execute(
            select(Chat)
            .where(Chat.user_id == user_id)
            .order_by(Chat.last_message_at.desc().nulls_last(), Chat.created_at.desc())
        )
        return list(result.scalars().all())

    async def add_message(self, message: ChatMessage) -> ChatMessage:
        self.session.add(message)
        await self.session.flush()
        return message

    async def list_messages(self, chat_id: str) -> List[ChatMessage]:
        result = await self.session.execute(
            select(ChatMessage)
            .where(ChatMessage.chat_id == chat_id)
            .order_by(ChatMessage.timestamp.asc())
        )
        return list(result.scalars().all())

    async def record_chat_message(self, chat_id: str, text: str, sent_at: datetime) -> bool:
        """
        Set the chat preview and bump its unread counter in one statement.
        Returns False if the chat no longer exists.
        """
        result = await self.session.execute(
            update(Chat)
            .where(Chat.id == chat_id)
            .values(
                last_message=text,
                last_message_at=sent_at,
                unread_count=Chat.unread_count + 1,
            )
        )
        return result.rowcount > 0

    async def reset_unread(self, chat_id: str) -> bool:
        result = await self.session.execute(
            update(Chat).where(Chat.id == chat_id).values(unread_count=0)
        )
        return result.rowcount > 0
