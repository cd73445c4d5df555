# app/api/routes/search.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.db.base import get_db
from app.db.models.user import User
from app.schemas.cafe import CafeListResponse
from app.services.catalog import CafeQuery, build_listing, parse_city_filters
from app.services.pagination import parse_page, parse_page_size
from app.services.ranking import parse_sort
from app.services.search import require_query
from app.services.visibility import parse_show_hidden
from app.core.security import caller_is_admin, get_caller_email, get_optional_user

router = APIRouter(prefix="/cafes", tags=["search"])


@router.get("/search", response_model=CafeListResponse)
def search_cafes(
    q: Optional[str] = Query(None, description="Cafe name to look for; accents and case are ignored"),
    city: Optional[List[str]] = Query(None, description="Repeatable; 'All' means no filter"),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    sort: Optional[str] = Query(None, description="rating | popularity | name_asc | name_desc"),
    show_hidden: Optional[str] = Query(None, alias="showHidden"),
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
    caller_email: Optional[str] = Depends(get_caller_email),
):
    """
    Search cafe names.
    - `q` is matched as a substring of the cafe name after folding accents and case
    - same city filter, sort and pagination contract as `GET /cafes`
    """
    query = CafeQuery(
        cities=parse_city_filters(city),
        text=require_query(q),
        include_hidden=parse_show_hidden(show_hidden) and caller_is_admin(caller_email),
        sort=parse_sort(sort),
        page=parse_page(page),
        page_size=parse_page_size(page_size),
    )
    return build_listing(db, query, viewer)
