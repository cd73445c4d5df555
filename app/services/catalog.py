# app/services/catalog.py
"""Public cafe listings: filter -> aggregate -> score -> sort -> page -> overlay.

Storage only filters on exact-match columns (city, visibility). Name search
runs in memory on the fetched candidates, so it does not depend on the
database collation.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from sqlalchemy.orm import Session, joinedload

from app.core.errors import NotFoundError, upstream_errors
from app.db.models.cafe import Cafe
from app.db.models.review import Review
from app.db.models.user import User
from app.schemas.cafe import (
    CafeDetail,
    CafeListItem,
    CafeListResponse,
    LeaderboardItem,
    PaginationMeta,
)
from app.schemas.rating import RatingSummaryResponse
from app.schemas.review import ReviewResponse
from app.services import favorites
from app.services.pagination import DEFAULT_PAGE_SIZE, Page, paginate
from app.services.ranking import SORT_RATING, ScoredCafe, rank_leaderboard, sort_cafes
from app.services.rating import aggregate_ratings, cafe_summary, summary_for
from app.services.search import matches

ALL_CITIES = "all"
RECENT_REVIEW_LIMIT = 20

# Metro labels that must match each other in a city filter.
CITY_ALIASES = {
    "Bay": ("Bay", "Bay Area"),
    "Bay Area": ("Bay", "Bay Area"),
}


def parse_city_filters(values: Optional[Iterable[str]]) -> List[str]:
    """Repeated and comma separated ``city`` values -> distinct labels.

    "All" and blanks mean no filter; aliases expand to every synonym.
    """
    cities: List[str] = []
    for raw in values or ():
        for part in raw.split(","):
            city = part.strip()
            if not city or city.lower() == ALL_CITIES:
                continue
            for label in CITY_ALIASES.get(city, (city,)):
                if label not in cities:
                    cities.append(label)
    return cities


@dataclass
class CafeQuery:
    cities: List[str] = field(default_factory=list)
    text: Optional[str] = None
    include_hidden: bool = False
    sort: str = SORT_RATING
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


def fetch_candidates(db: Session, cities: List[str], include_hidden: bool = False) -> List[Cafe]:
    with upstream_errors("failed to load cafes", cities=cities, include_hidden=include_hidden):
        query = db.query(Cafe)
        if not include_hidden:
            query = query.filter(Cafe.is_hidden.is_(False))
        if cities:
            query = query.filter(Cafe.city.in_(cities))
        return query.all()


def score_candidates(db: Session, cafes: List[Cafe]) -> List[ScoredCafe]:
    """Attach rating summaries for exactly this candidate set."""
    with upstream_errors("failed to load cafes", cafe_count=len(cafes)):
        summaries = aggregate_ratings(db, [cafe.id for cafe in cafes])
    return [ScoredCafe(cafe=cafe, summary=summary_for(summaries, cafe.id)) for cafe in cafes]


def search_cafes(db: Session, query: CafeQuery) -> Page[ScoredCafe]:
    """Full candidate set sorted, then one page cut from it."""
    candidates = fetch_candidates(db, query.cities, query.include_hidden)
    if query.text:
        candidates = [cafe for cafe in candidates if matches(query.text, cafe.name)]
    ordered = sort_cafes(score_candidates(db, candidates), query.sort)
    return paginate(ordered, query.page, query.page_size)


def to_list_item(item: ScoredCafe, favorited_ids: Set[str]) -> CafeListItem:
    cafe = item.cafe
    return CafeListItem(
        id=cafe.id,
        name=cafe.name,
        address=cafe.address,
        city=cafe.city,
        latitude=cafe.latitude,
        longitude=cafe.longitude,
        google_place_id=cafe.google_place_id,
        is_hidden=bool(cafe.is_hidden),
        created_at=cafe.created_at,
        review_count=item.review_count,
        average_rating=item.summary.average_rating,
        weighted_rating=item.summary.weighted_rating,
        is_favorited=cafe.id in favorited_ids,
    )


def build_listing(db: Session, query: CafeQuery, viewer: Optional[User]) -> CafeListResponse:
    page = search_cafes(db, query)
    # favorites are looked up for the returned page only
    favorited_ids = favorites.favorited_cafe_ids(
        db, viewer.id if viewer else None, [item.cafe.id for item in page.items]
    )
    return CafeListResponse(
        cafes=[to_list_item(item, favorited_ids) for item in page.items],
        pagination=PaginationMeta.model_validate(page),
        sort=query.sort,
    )


def build_leaderboard(db: Session) -> List[LeaderboardItem]:
    ranked = rank_leaderboard(score_candidates(db, fetch_candidates(db, [])))
    return [
        LeaderboardItem(
            rank=position,
            id=item.cafe.id,
            name=item.cafe.name,
            city=item.cafe.city,
            overall_rating=item.summary.overall_rating,
            review_count=item.review_count,
        )
        for position, item in enumerate(ranked, start=1)
    ]


def get_cafe_detail(db: Session, cafe_id: str, viewer: Optional[User], include_hidden: bool = False) -> CafeDetail:
    with upstream_errors("failed to load cafe", cafe_id=cafe_id):
        cafe = db.query(Cafe).filter(Cafe.id == cafe_id).first()
        if cafe is None or (cafe.is_hidden and not include_hidden):
            raise NotFoundError("cafe not found")

        recent_reviews = (
            db.query(Review)
            .options(joinedload(Review.user))
            .filter(Review.cafe_id == cafe_id)
            .order_by(Review.created_at.desc(), Review.id)
            .limit(RECENT_REVIEW_LIMIT)
            .all()
        )
        summary = cafe_summary(db, cafe_id)
        favorited = favorites.is_favorited(db, viewer.id, cafe_id) if viewer else False

    return CafeDetail(
        id=cafe.id,
        name=cafe.name,
        address=cafe.address,
        city=cafe.city,
        latitude=cafe.latitude,
        longitude=cafe.longitude,
        google_place_id=cafe.google_place_id,
        is_hidden=bool(cafe.is_hidden),
        created_at=cafe.created_at,
        average_ratings=RatingSummaryResponse.model_validate(summary),
        reviews=[ReviewResponse.model_validate(review) for review in recent_reviews],
        is_favorited=favorited,
        viewer_user_id=viewer.id if viewer else None,
    )
