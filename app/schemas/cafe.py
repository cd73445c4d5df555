# app/schemas/cafe.py
from typing import List, Optional
from datetime import datetime

from app.schemas.base import CamelModel
from app.schemas.rating import RatingSummaryResponse
from app.schemas.review import ReviewResponse


class CafeBase(CamelModel):
    id: str
    name: str
    address: Optional[str] = None
    city: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    google_place_id: str
    is_hidden: bool = False
    created_at: Optional[datetime] = None


class CafeListItem(CafeBase):
    review_count: int = 0
    average_rating: Optional[float] = None
    weighted_rating: Optional[float] = None
    is_favorited: bool = False


class PaginationMeta(CamelModel):
    page: int
    page_size: int
    total: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool


class CafeListResponse(CamelModel):
    cafes: List[CafeListItem]
    pagination: PaginationMeta
    sort: str


class CafeDetail(CafeBase):
    average_ratings: RatingSummaryResponse
    reviews: List[ReviewResponse] = []
    is_favorited: bool = False
    viewer_user_id: Optional[str] = None


class CafeDetailResponse(CamelModel):
    cafe: CafeDetail


class LeaderboardItem(CamelModel):
    rank: int
    id: str
    name: str
    city: str
    overall_rating: Optional[float] = None
    review_count: int


class LeaderboardResponse(CamelModel):
    cafes: List[LeaderboardItem]


class FavoriteStatus(CamelModel):
    is_favorited: bool
