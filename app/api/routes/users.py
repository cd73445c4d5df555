# app/api/routes/users.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session, selectinload
from typing import Optional

from app.db.base import get_db
from app.db.models.favorite import Favorite
from app.db.models.review import Review
from app.db.models.user import User
from app.schemas.user import UserFavoriteItem, UserProfile, UserProfileResponse, UserReviewItem
from app.core.errors import NotFoundError, ValidationError, upstream_errors
from app.core.security import get_optional_user

router = APIRouter(prefix="/users", tags=["users"])


# Public profile: the user's reviews and favorite cafes
@router.get("/{user_id}", response_model=UserProfileResponse)
def user_profile(
    user_id: str,
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
):
    user_id = user_id.strip()
    if not user_id:
        raise ValidationError("user id is required")

    with upstream_errors("failed to load user", user_id=user_id):
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("user not found")

        user_reviews = (
            db.query(Review)
            .options(selectinload(Review.cafe))
            .filter(Review.user_id == user.id)
            .order_by(Review.updated_at.desc(), Review.id)
            .all()
        )
        user_favorites = (
            db.query(Favorite)
            .options(selectinload(Favorite.cafe))
            .filter(Favorite.user_id == user.id)
            .order_by(Favorite.created_at.desc(), Favorite.id)
            .all()
        )

    profile = UserProfile(
        id=user.id,
        email=user.email,
        name=user.name,
        created_at=user.created_at,
        reviews=[UserReviewItem.model_validate(r) for r in user_reviews],
        favorites=[UserFavoriteItem.model_validate(f) for f in user_favorites],
    )
    return UserProfileResponse(user=profile, can_manage_reviews=bool(viewer and viewer.id == user.id))
