# app/api/routes/admin.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.db.base import get_db
from app.schemas.admin import (
    AdminCafeItem,
    AdminCafeListResponse,
    BulkVisibilityRequest,
    BulkVisibilityResponse,
    CafeVisibilityItem,
    CafeVisibilityResponse,
    CafeVisibilityUpdate,
    DeletedCafeItem,
    HardDeleteCafeResponse,
)
from app.schemas.cafe import PaginationMeta
from app.schemas.review import DeletedReviewResponse
from app.services import reviews, visibility
from app.services.pagination import ADMIN_DEFAULT_PAGE_SIZE, ADMIN_MAX_PAGE_SIZE, paginate, parse_page, parse_page_size
from app.core.errors import ValidationError
from app.core.security import require_admin

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _require_id(value: str, label: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise ValidationError(f"{label} id is required")
    return cleaned


# -------------------------
# 1. List cafes for moderation
# -------------------------
@router.get("/cafes", response_model=AdminCafeListResponse)
def admin_list_cafes(
    q: Optional[str] = Query(None, description="Matches name, address or city"),
    show_hidden: Optional[str] = Query(None, alias="showHidden", description="1 or true to include hidden cafes"),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    db: Session = Depends(get_db),
):
    page_number = parse_page(page)
    size = parse_page_size(page_size, default=ADMIN_DEFAULT_PAGE_SIZE, maximum=ADMIN_MAX_PAGE_SIZE)

    cafes = visibility.list_admin_cafes(db, q, visibility.parse_show_hidden(show_hidden))
    window = paginate(cafes, page_number, size)
    return AdminCafeListResponse(
        cafes=[AdminCafeItem.model_validate(cafe) for cafe in window.items],
        pagination=PaginationMeta.model_validate(window),
    )


# --------------------------------------------------
# 2. Hide / restore a single cafe (reversible)
# --------------------------------------------------
@router.patch("/cafes/{cafe_id}", response_model=CafeVisibilityResponse)
def admin_set_cafe_visibility(
    cafe_id: str,
    body: CafeVisibilityUpdate,
    db: Session = Depends(get_db),
):
    cafe_id = _require_id(cafe_id, "cafe")
    if body.is_hidden is None:
        raise ValidationError("isHidden boolean is required")
    cafe = visibility.set_cafe_hidden(db, cafe_id, body.is_hidden)
    return CafeVisibilityResponse(cafe=CafeVisibilityItem(id=cafe.id, is_hidden=cafe.is_hidden))


# --------------------------------------------------
# 3. Bulk hide / restore (soft; "delete" is an alias of "hide")
# --------------------------------------------------
@router.post("/cafes/bulk", response_model=BulkVisibilityResponse)
def admin_bulk_visibility(body: BulkVisibilityRequest, db: Session = Depends(get_db)):
    result = visibility.bulk_set_hidden(db, body.ids, body.action)
    return BulkVisibilityResponse(updated_count=result.updated_count, is_hidden=result.is_hidden)


# --------------------------------------------------
# 4. Hard delete a cafe (destructive, cascades reviews and favorites)
# --------------------------------------------------
@router.delete("/cafes/{cafe_id}", response_model=HardDeleteCafeResponse)
def admin_hard_delete_cafe(cafe_id: str, db: Session = Depends(get_db)):
    result = visibility.hard_delete_cafe(db, _require_id(cafe_id, "cafe"))
    return HardDeleteCafeResponse(
        deleted_cafe=DeletedCafeItem(id=result.cafe_id, name=result.name),
        deleted_reviews=result.deleted_reviews,
        deleted_favorites=result.deleted_favorites,
    )


# --------------------------------------------------
# 5. Reviews moderation
# --------------------------------------------------
@router.delete("/reviews/{review_id}", response_model=DeletedReviewResponse)
def admin_delete_review(review_id: str, db: Session = Depends(get_db)):
    review = reviews.get_review(db, _require_id(review_id, "review"))
    return DeletedReviewResponse(deleted_review=reviews.delete_review(db, review))
