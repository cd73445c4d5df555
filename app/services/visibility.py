# app/services/visibility.py
"""Admin moderation of cafe listings.

Two distinct operations, named for what they do:
  * hide / restore (single or bulk) flip ``is_hidden`` and are reversible.
  * hard delete removes the cafe row together with its reviews and favorites.
The bulk action "delete" is kept as a synonym of "hide" for older clients.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError, upstream_errors
from app.core.logging import get_logger
from app.db.models.cafe import Cafe
from app.db.models.favorite import Favorite
from app.db.models.review import Review
from app.services.ranking import name_key
from app.services.search import matches

logger = get_logger(__name__)

BULK_ACTIONS = {
    "hide": True,
    "delete": True,
    "restore": False,
}


def parse_show_hidden(raw: Optional[str]) -> bool:
    if raw is None:
        return False
    value = raw.strip().lower()
    return value in ("1", "true")


def list_admin_cafes(db: Session, query: Optional[str], show_hidden: bool) -> List[Cafe]:
    """Moderation triage order: hidden first, then name."""
    with upstream_errors("failed to load cafes", show_hidden=show_hidden):
        db_query = db.query(Cafe)
        if not show_hidden:
            db_query = db_query.filter(Cafe.is_hidden.is_(False))
        cafes = db_query.all()

    text = (query or "").strip()
    if text:
        cafes = [cafe for cafe in cafes if matches(text, cafe.name, cafe.address, cafe.city)]
    return sorted(cafes, key=lambda cafe: (not cafe.is_hidden, name_key(cafe)))


def set_cafe_hidden(db: Session, cafe_id: str, hidden: bool) -> Cafe:
    with upstream_errors("failed to update cafe visibility", cafe_id=cafe_id):
        cafe = db.query(Cafe).filter(Cafe.id == cafe_id).first()
        if cafe is None:
            raise NotFoundError("cafe not found")
        cafe.is_hidden = hidden
        db.commit()
        db.refresh(cafe)
    logger.info("cafe visibility changed", extra={"cafe_id": cafe_id, "is_hidden": hidden})
    return cafe


def hide_cafe(db: Session, cafe_id: str) -> Cafe:
    return set_cafe_hidden(db, cafe_id, True)


def restore_cafe(db: Session, cafe_id: str) -> Cafe:
    return set_cafe_hidden(db, cafe_id, False)


@dataclass(frozen=True)
class BulkResult:
    updated_count: int
    is_hidden: bool


def clean_ids(ids: Optional[Iterable[str]]) -> List[str]:
    return list(dict.fromkeys(i.strip() for i in ids or () if isinstance(i, str) and i.strip()))


def bulk_set_hidden(db: Session, ids: Optional[Iterable[str]], action: Optional[str]) -> BulkResult:
    cafe_ids = clean_ids(ids)
    if not cafe_ids:
        raise ValidationError("ids are required")
    normalized_action = (action or "").strip().lower()
    if normalized_action not in BULK_ACTIONS:
        raise ValidationError("action must be hide, delete or restore")

    hidden = BULK_ACTIONS[normalized_action]
    with upstream_errors("failed to update cafe visibility", cafe_count=len(cafe_ids)):
        updated = (
            db.query(Cafe)
            .filter(Cafe.id.in_(cafe_ids))
            .update({Cafe.is_hidden: hidden}, synchronize_session=False)
        )
        db.commit()
    logger.info(
        "bulk cafe visibility changed",
        extra={"action": normalized_action, "requested": len(cafe_ids), "updated": updated, "is_hidden": hidden},
    )
    return BulkResult(updated_count=int(updated), is_hidden=hidden)


@dataclass(frozen=True)
class HardDeleteResult:
    cafe_id: str
    name: str
    deleted_reviews: int
    deleted_favorites: int


def hard_delete_cafe(db: Session, cafe_id: str) -> HardDeleteResult:
    """Remove the cafe row for good, cascading to its reviews and favorites."""
    with upstream_errors("failed to delete cafe", cafe_id=cafe_id):
        cafe = db.query(Cafe).filter(Cafe.id == cafe_id).first()
        if cafe is None:
            raise NotFoundError("cafe not found")
        review_count = db.query(Review).filter(Review.cafe_id == cafe_id).count()
        favorite_count = db.query(Favorite).filter(Favorite.cafe_id == cafe_id).count()
        result = HardDeleteResult(
            cafe_id=cafe.id,
            name=cafe.name,
            deleted_reviews=review_count,
            deleted_favorites=favorite_count,
        )
        db.delete(cafe)
        db.commit()
    logger.warning("cafe hard deleted", extra={"cafe_id": cafe_id, "deleted_reviews": review_count})
    return result
