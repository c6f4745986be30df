"""
SQLAlchemy models package.
Exports all database models for easy import.
"""
from app.models.user import User
from app.models.entity import Entity
from app.models.review import Review, ModerationStatus
from app.models.chat import Chat, ChatMessage

__all__ = [
    "User",
    "Entity",
    "Review",
    "ModerationStatus",
    "Chat",
    "ChatMessage",
]
