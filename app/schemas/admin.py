# app/schemas/admin.py
from pydantic import StrictBool
from typing import Optional, List
from datetime import datetime

from app.schemas.base import CamelModel
from app.schemas.cafe import PaginationMeta


class AdminCafeItem(CamelModel):
    id: str
    name: str
    city: str
    address: Optional[str] = None
    google_place_id: str
    is_hidden: bool
    created_at: Optional[datetime] = None


class AdminCafeListResponse(CamelModel):
    cafes: List[AdminCafeItem]
    pagination: PaginationMeta


class CafeVisibilityUpdate(CamelModel):
    # None is rejected in the route with a field-specific message
    is_hidden: Optional[StrictBool] = None


class CafeVisibilityItem(CamelModel):
    id: str
    is_hidden: bool


class CafeVisibilityResponse(CamelModel):
    cafe: CafeVisibilityItem


class BulkVisibilityRequest(CamelModel):
    ids: List[str] = []
    action: Optional[str] = None


class BulkVisibilityResponse(CamelModel):
    updated_count: int
    is_hidden: bool


class DeletedCafeItem(CamelModel):
    id: str
    name: str


class HardDeleteCafeResponse(CamelModel):
    deleted_cafe: DeletedCafeItem
    deleted_reviews: int
    deleted_favorites: int
