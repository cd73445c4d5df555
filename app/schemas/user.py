# app/schemas/user.py
from pydantic import EmailStr
from typing import List, Optional
from datetime import datetime

from app.schemas.base import CamelModel


class UserResponse(CamelModel):
    id: str
    email: EmailStr
    name: Optional[str] = None
    created_at: Optional[datetime] = None


class MeResponse(CamelModel):
    user: Optional[UserResponse] = None
    is_admin: bool = False


class CafeMini(CamelModel):
    id: str
    name: str
    city: str
    address: Optional[str] = None


class UserReviewItem(CamelModel):
    id: str
    cafe_id: str
    taste_rating: int
    aesthetic_rating: int
    study_rating: int
    text_comment: Optional[str] = None
    updated_at: Optional[datetime] = None
    cafe: CafeMini


class UserFavoriteItem(CamelModel):
    id: str
    cafe_id: str
    created_at: Optional[datetime] = None
    cafe: CafeMini


class UserProfile(UserResponse):
    reviews: List[UserReviewItem] = []
    favorites: List[UserFavoriteItem] = []


class UserProfileResponse(CamelModel):
    user: UserProfile
    can_manage_reviews: bool = False
