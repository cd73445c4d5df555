# app/api/routes/review.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.db.models.user import User
from app.schemas.rating import RatingSummaryResponse
from app.schemas.review import DeletedReviewResponse, ReviewCreate, ReviewResponse, ReviewUpsertResponse
from app.services import reviews
from app.services.rating import cafe_summary
from app.api.deps import enforce_review_rate_limit
from app.core.errors import upstream_errors
from app.core.security import get_current_user, upsert_user

router = APIRouter(prefix="/reviews", tags=["reviews"])


# Create or replace the caller's review of a cafe
@router.post(
    "",
    response_model=ReviewUpsertResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(enforce_review_rate_limit)],
)
def submit_review(
    review_in: ReviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if review_in.user_name and review_in.user_name != current_user.name:
        current_user = upsert_user(db, current_user.email, name=review_in.user_name)

    review = reviews.upsert_review(db, current_user, review_in)

    # summary reflects the review just written
    with upstream_errors("failed to save review", cafe_id=review.cafe_id):
        summary = cafe_summary(db, review.cafe_id)

    return ReviewUpsertResponse(
        review=ReviewResponse.model_validate(review),
        average_ratings=RatingSummaryResponse.model_validate(summary),
    )


# Owner deletes their own review
@router.delete("/{review_id}", response_model=DeletedReviewResponse)
def delete_my_review(
    review_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    deleted = reviews.delete_own_review(db, current_user, review_id.strip())
    return DeletedReviewResponse(deleted_review=deleted)
