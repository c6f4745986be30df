"""
Chat models - conversations between a user and a business, and their messages.
"""
import uuid
from sqlalchemy import (
    Column,
    String,
    Text,
    Integer,
    Boolean,
    DateTime,
    Index,
    UniqueConstraint,
)

from app.db.database import Base, utcnow


def _new_id() -> str:
    return uuid.uuid4().hex


class Chat(Base):
    """
    Conversation between one user and one business.
    At most one chat exists per (entity_id, user_id) pair.
    """

    __tablename__ = "chats"

    id = Column(String, primary_key=True, default=_new_id)

    entity_id = Column(String, nullable=False)
    entity_name = Column(String, nullable=False)
    user_id = Column(String, nullable=False)
    user_name = Column(String, nullable=False)

    last_message = Column(Text, nullable=True)
    last_message_at = Column(DateTime(timezone=True), nullable=True)
    unread_count = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("entity_id", "user_id", name="uq_chats_entity_user"),
        Index("idx_chats_user_last_message", "user_id", "last_message_at"),
    )

    def __repr__(self):
        return f"<Chat(id={self.id}, entity_id={self.entity_id}, user_id={self.user_id})>"


class ChatMessage(Base):
    """
    A message in a chat. Append-only.

    chat_id is not a foreign key: messages are appended even when the parent
    chat has been removed concurrently.
    """

    __tablename__ = "chat_messages"

    id = Column(String, primary_key=True, default=_new_id)
    chat_id = Column(String, nullable=False)

    sender_id = Column(String, nullable=False)
    sender_name = Column(String, nullable=False)
    sender_avatar = Column(String, nullable=True)

    message = Column(Text, nullable=False)
    timestamp = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    read = Column(Boolean, default=False, nullable=False)

    __table_args__ = (Index("idx_chat_messages_chat_timestamp", "chat_id", "timestamp"),)

    def __repr__(self):
        return f"<ChatMessage(id={self.id}, chat_id={self.chat_id}, sender_id={self.sender_id})>"
