# app/schemas/rating.py
from typing import Optional

from app.schemas.base import CamelModel


class RatingSummaryResponse(CamelModel):
    """Derived from review rows on every read; null ratings mean no reviews yet."""
    review_count: int = 0
    taste_rating: Optional[float] = None
    aesthetic_rating: Optional[float] = None
    study_rating: Optional[float] = None
    overall_rating: Optional[float] = None
    weighted_rating: Optional[float] = None
