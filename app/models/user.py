"""
User model - profile data for an identity-provider account.
"""
from sqlalchemy import Column, String, DateTime

from app.db.database import Base, utcnow


class User(Base):
    """User profile keyed by the identity provider uid."""

    __tablename__ = "users"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    avatar = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, name={self.name})>"
