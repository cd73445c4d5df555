# app/services/reviews.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ForbiddenError, NotFoundError, upstream_errors
from app.db.models.cafe import Cafe
from app.db.models.review import Review
from app.db.models.user import User
from app.schemas.review import ReviewCreate, ReviewResponse


def _apply(review: Review, payload: ReviewCreate) -> None:
    review.taste_rating = payload.taste_rating
    review.aesthetic_rating = payload.aesthetic_rating
    review.study_rating = payload.study_rating
    review.price_estimate = payload.price_estimate
    review.text_comment = payload.text_comment or None


def _find(db: Session, user_id: str, cafe_id: str):
    return db.query(Review).filter(Review.user_id == user_id, Review.cafe_id == cafe_id).first()


def upsert_review(db: Session, user: User, payload: ReviewCreate) -> Review:
    """Create the caller's review for a cafe, or overwrite the existing one.

    The (user_id, cafe_id) unique constraint settles concurrent first
    submissions: the loser rolls back and updates the winner's row.
    """
    with upstream_errors("failed to save review", cafe_id=payload.cafe_id):
        if db.query(Cafe.id).filter(Cafe.id == payload.cafe_id).first() is None:
            raise NotFoundError("cafe not found")

        review = _find(db, user.id, payload.cafe_id)
        if review is None:
            review = Review(user_id=user.id, cafe_id=payload.cafe_id)
            _apply(review, payload)
            db.add(review)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                review = _find(db, user.id, payload.cafe_id)
                if review is None:
                    raise
                _apply(review, payload)
                db.commit()
        else:
            _apply(review, payload)
            db.commit()
        db.refresh(review)
        return review


def get_review(db: Session, review_id: str) -> Review:
    with upstream_errors("failed to load review", review_id=review_id):
        review = db.query(Review).filter(Review.id == review_id).first()
    if review is None:
        raise NotFoundError("review not found")
    return review


def delete_review(db: Session, review: Review) -> ReviewResponse:
    """Delete the row and return what it held (deleted rows expire on commit)."""
    snapshot = ReviewResponse.model_validate(review)
    with upstream_errors("failed to delete review", review_id=snapshot.id):
        db.delete(review)
        db.commit()
    return snapshot


def delete_own_review(db: Session, user: User, review_id: str) -> ReviewResponse:
    review = get_review(db, review_id)
    if review.user_id != user.id:
        raise ForbiddenError()
    return delete_review(db, review)
