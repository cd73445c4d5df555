# app/db/models/review.py
import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import relationship

from app.db.base import Base


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (
        # one review per user per cafe; a resubmission updates this row
        UniqueConstraint("user_id", "cafe_id", name="uq_reviews_user_cafe"),
        CheckConstraint("taste_rating BETWEEN 1 AND 5", name="ck_reviews_taste"),
        CheckConstraint("aesthetic_rating BETWEEN 1 AND 5", name="ck_reviews_aesthetic"),
        CheckConstraint("study_rating BETWEEN 1 AND 5", name="ck_reviews_study"),
        CheckConstraint("price_estimate IS NULL OR price_estimate >= 0", name="ck_reviews_price"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    cafe_id = Column(String(36), ForeignKey("cafes.id", ondelete="CASCADE"), nullable=False, index=True)

    taste_rating = Column(Integer, nullable=False)      # 1..5
    aesthetic_rating = Column(Integer, nullable=False)  # 1..5
    study_rating = Column(Integer, nullable=False)      # 1..5
    price_estimate = Column(Float, nullable=True)
    text_comment = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="reviews")
    cafe = relationship("Cafe", back_populates="reviews")
