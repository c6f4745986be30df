"""
Review model - a star rating and text review of a business.
"""
from sqlalchemy import (
    Column,
    String,
    Text,
    Float,
    Boolean,
    Integer,
    DateTime,
    JSON,
    Index,
    Enum as SQLEnum,
)
import enum

from app.db.database import Base, utcnow


class ModerationStatus(str, enum.Enum):
    """Review visibility states. Only published reviews count towards the Biashara score."""

    PUBLISHED = "published"
    PENDING = "pending"
    HIDDEN = "hidden"


class Review(Base):
    """
    Review table.

    Rows are created by review intake with status 'published'. Afterwards only the
    moderation worker (status, flags, checked-at) and the admin moderation action
    (status) modify them. Reviews are never deleted.
    """

    __tablename__ = "reviews"

    # Primary Key: review_<epoch millis>_<author uid>
    id = Column(String, primary_key=True)

    entity_id = Column(String, nullable=False)

    # Author
    user_id = Column(String, nullable=False)
    user_name = Column(String, nullable=False)
    user_avatar = Column(String, nullable=True)

    # Content
    rating = Column(Float, nullable=False)
    review_text = Column(Text, nullable=False)
    date_of_experience = Column(String, nullable=False)
    photo_urls = Column(JSON, nullable=False, default=list)
    is_verified = Column(Boolean, default=True, nullable=False)

    # Engagement
    likes = Column(Integer, default=0, nullable=False)
    reports = Column(Integer, default=0, nullable=False)

    # Moderation
    moderation_status = Column(
        SQLEnum(
            ModerationStatus,
            native_enum=False,
            length=16,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=ModerationStatus.PUBLISHED,
        nullable=False,
    )
    moderation_flags = Column(JSON, nullable=False, default=list)
    moderation_checked_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_reviews_entity_status", "entity_id", "moderation_status"),
        Index("idx_reviews_user_id", "user_id"),
    )

    def __repr__(self):
        return (
            f"<Review(id={self.id}, entity_id={self.entity_id}, "
            f"rating={self.rating}, status={self.moderation_status})>"
        )
