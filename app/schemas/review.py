# app/schemas/review.py
from pydantic import Field, confloat, conint, constr
from typing import Optional
from datetime import datetime

from app.schemas.base import CamelModel
from app.schemas.rating import RatingSummaryResponse


class ReviewCreate(CamelModel):
    cafe_id: constr(strip_whitespace=True, min_length=1)
    taste_rating: conint(ge=1, le=5) = Field(..., description="Rating 1-5")
    aesthetic_rating: conint(ge=1, le=5) = Field(..., description="Rating 1-5")
    study_rating: conint(ge=1, le=5) = Field(..., description="Rating 1-5")
    price_estimate: Optional[confloat(ge=0)] = None
    text_comment: Optional[constr(strip_whitespace=True, max_length=500)] = None
    user_name: Optional[constr(strip_whitespace=True, max_length=100)] = None


class ReviewAuthor(CamelModel):
    id: str
    name: Optional[str] = None


class ReviewResponse(CamelModel):
    id: str
    cafe_id: str
    user_id: str
    taste_rating: int
    aesthetic_rating: int
    study_rating: int
    price_estimate: Optional[float] = None
    text_comment: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: Optional[ReviewAuthor] = None


class ReviewUpsertResponse(CamelModel):
    review: ReviewResponse
    average_ratings: RatingSummaryResponse


class DeletedReviewResponse(CamelModel):
    deleted_review: ReviewResponse
