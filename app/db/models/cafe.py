# app/db/models/cafe.py
import uuid

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Float, String, false, func
from sqlalchemy.orm import relationship

from app.db.base import Base


class Cafe(Base):
    """
    A listed venue.
    google_place_id is the upsert key used by the import pipeline.
    is_hidden removes the cafe from public queries without deleting it.
    """
    __tablename__ = "cafes"
    __table_args__ = (
        CheckConstraint(
            "(latitude IS NULL AND longitude IS NULL) OR (latitude IS NOT NULL AND longitude IS NOT NULL)",
            name="ck_cafes_coordinates_pair",
        ),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    address = Column(String, nullable=True)
    city = Column(String, nullable=False, index=True)

    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    google_place_id = Column(String, nullable=False, unique=True)
    is_hidden = Column(Boolean, nullable=False, default=False, server_default=false(), index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # hard delete removes reviews and favorites with the cafe
    reviews = relationship("Review", back_populates="cafe", cascade="all, delete-orphan")
    favorites = relationship("Favorite", back_populates="cafe", cascade="all, delete-orphan")
