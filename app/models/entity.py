"""
Entity model - a business listed in the app.
"""
from sqlalchemy import Column, String, Float, Integer

from app.db.database import Base


class Entity(Base):
    """
    Business table.

    Businesses are provisioned outside the API. Only the rating aggregator
    writes biashara_score and total_reviews.
    """

    __tablename__ = "entities"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)

    # Aggregate of published reviews, one decimal place
    biashara_score = Column(Float, default=0.0, nullable=False)
    total_reviews = Column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<Entity(id={self.id}, score={self.biashara_score}, reviews={self.total_reviews})>"
