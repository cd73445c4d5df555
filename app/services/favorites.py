# app/services/favorites.py
from typing import Iterable, Optional, Set

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, upstream_errors
from app.db.models.cafe import Cafe
from app.db.models.favorite import Favorite
from app.db.models.user import User


def favorited_cafe_ids(db: Session, user_id: Optional[str], cafe_ids: Iterable[str]) -> Set[str]:
    """Which of ``cafe_ids`` the viewer has favorited. Anonymous viewers get an empty set."""
    ids = list(dict.fromkeys(cafe_ids))
    if not user_id or not ids:
        return set()
    with upstream_errors("failed to load favorites", page_cafe_count=len(ids)):
        rows = (
            db.query(Favorite.cafe_id)
            .filter(Favorite.user_id == user_id, Favorite.cafe_id.in_(ids))
            .all()
        )
    return {cafe_id for (cafe_id,) in rows}


def is_favorited(db: Session, user_id: str, cafe_id: str) -> bool:
    return cafe_id in favorited_cafe_ids(db, user_id, [cafe_id])


def _find(db: Session, user_id: str, cafe_id: str):
    return db.query(Favorite).filter(Favorite.user_id == user_id, Favorite.cafe_id == cafe_id).first()


def add_favorite(db: Session, user: User, cafe_id: str) -> None:
    """Idempotent: favoriting twice leaves one row."""
    with upstream_errors("failed to favorite cafe", cafe_id=cafe_id):
        if db.query(Cafe.id).filter(Cafe.id == cafe_id).first() is None:
            raise NotFoundError("cafe not found")
        if _find(db, user.id, cafe_id) is not None:
            return
        db.add(Favorite(user_id=user.id, cafe_id=cafe_id))
        try:
            db.commit()
        except IntegrityError:
            # lost a race against the same favorite; the row exists either way
            db.rollback()


def remove_favorite(db: Session, user: User, cafe_id: str) -> None:
    """Idempotent: removing a missing favorite is a no-op."""
    with upstream_errors("failed to unfavorite cafe", cafe_id=cafe_id):
        db.query(Favorite).filter(Favorite.user_id == user.id, Favorite.cafe_id == cafe_id).delete(
            synchronize_session=False
        )
        db.commit()
