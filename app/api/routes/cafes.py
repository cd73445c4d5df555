# app/api/routes/cafes.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.db.base import get_db
from app.db.models.user import User
from app.schemas.cafe import CafeDetailResponse, CafeListResponse, FavoriteStatus, LeaderboardResponse
from app.services import favorites
from app.services.catalog import CafeQuery, build_leaderboard, build_listing, get_cafe_detail, parse_city_filters
from app.services.pagination import parse_page, parse_page_size
from app.services.ranking import parse_sort
from app.services.visibility import parse_show_hidden
from app.core.errors import ValidationError
from app.core.security import caller_is_admin, get_caller_email, get_current_user, get_optional_user

router = APIRouter(prefix="/cafes", tags=["cafes"])


def _cafe_id(cafe_id: str) -> str:
    cleaned = cafe_id.strip()
    if not cleaned:
        raise ValidationError("cafe id is required")
    return cleaned


# List cafes (public, paginated, weighted ranking)
@router.get("", response_model=CafeListResponse)
def list_cafes(
    city: Optional[List[str]] = Query(None, description="Repeatable; 'All' means no filter"),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    sort: Optional[str] = Query(None, description="rating | popularity | name_asc | name_desc"),
    show_hidden: Optional[str] = Query(None, alias="showHidden", description="admins only"),
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
    caller_email: Optional[str] = Depends(get_caller_email),
):
    query = CafeQuery(
        cities=parse_city_filters(city),
        include_hidden=parse_show_hidden(show_hidden) and caller_is_admin(caller_email),
        sort=parse_sort(sort),
        page=parse_page(page),
        page_size=parse_page_size(page_size),
    )
    return build_listing(db, query, viewer)


# Leaderboard: top 20 by raw overall rating
@router.get("/leaderboard", response_model=LeaderboardResponse)
def leaderboard(db: Session = Depends(get_db)):
    return LeaderboardResponse(cafes=build_leaderboard(db))


# Cafe detail with summary and recent reviews
@router.get("/{cafe_id}", response_model=CafeDetailResponse)
def cafe_detail(
    cafe_id: str,
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
    caller_email: Optional[str] = Depends(get_caller_email),
):
    cafe = get_cafe_detail(db, _cafe_id(cafe_id), viewer, include_hidden=caller_is_admin(caller_email))
    return CafeDetailResponse(cafe=cafe)


# Favorites
@router.get("/{cafe_id}/favorite", response_model=FavoriteStatus)
def favorite_status(
    cafe_id: str,
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
):
    cafe_id = _cafe_id(cafe_id)
    if viewer is None:
        return FavoriteStatus(is_favorited=False)
    return FavoriteStatus(is_favorited=favorites.is_favorited(db, viewer.id, cafe_id))


@router.post("/{cafe_id}/favorite", response_model=FavoriteStatus)
def favorite_cafe(
    cafe_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    favorites.add_favorite(db, current_user, _cafe_id(cafe_id))
    return FavoriteStatus(is_favorited=True)


@router.delete("/{cafe_id}/favorite", response_model=FavoriteStatus)
def unfavorite_cafe(
    cafe_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    favorites.remove_favorite(db, current_user, _cafe_id(cafe_id))
    return FavoriteStatus(is_favorited=False)
