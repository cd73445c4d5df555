# app/services/ranking.py
"""Ordering of candidate cafes.

Sorting always runs over the full filtered candidate list, before any page
is cut from it.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from app.db.models.cafe import Cafe
from app.services.rating import EMPTY_SUMMARY, RatingSummary
from app.services.search import normalize_for_search

SORT_RATING = "rating"
SORT_POPULARITY = "popularity"
SORT_NAME_ASC = "name_asc"
SORT_NAME_DESC = "name_desc"

SORT_OPTIONS = (SORT_RATING, SORT_POPULARITY, SORT_NAME_ASC, SORT_NAME_DESC)
_SORT_ALIASES = {"name": SORT_NAME_ASC}

LEADERBOARD_SIZE = 20


def parse_sort(value: Optional[str]) -> str:
    """Unknown or missing values fall back to rating."""
    option = (value or "").strip().lower()
    option = _SORT_ALIASES.get(option, option)
    return option if option in SORT_OPTIONS else SORT_RATING


@dataclass
class ScoredCafe:
    cafe: Cafe
    summary: RatingSummary = EMPTY_SUMMARY

    @property
    def review_count(self) -> int:
        return self.summary.review_count

    @property
    def weighted_score(self) -> float:
        # nulls sort after every real score
        weighted = self.summary.weighted_rating
        return -1.0 if weighted is None else weighted

    @property
    def overall_score(self) -> float:
        overall = self.summary.overall_rating
        return -1.0 if overall is None else overall


def name_key(cafe: Cafe) -> Tuple[str, str, str]:
    """Case- and accent-insensitive name order, settled by id."""
    return (normalize_for_search(cafe.name).casefold(), cafe.name.casefold(), str(cafe.id))


def _rating_key(item: ScoredCafe):
    return (-item.weighted_score, -item.review_count, name_key(item.cafe))


def _popularity_key(item: ScoredCafe):
    return (-item.review_count, -item.weighted_score, name_key(item.cafe))


def sort_cafes(items: Iterable[ScoredCafe], sort: str = SORT_RATING) -> List[ScoredCafe]:
    items = list(items)
    if sort == SORT_POPULARITY:
        return sorted(items, key=_popularity_key)
    if sort == SORT_NAME_ASC:
        return sorted(items, key=lambda item: name_key(item.cafe))
    if sort == SORT_NAME_DESC:
        return sorted(items, key=lambda item: name_key(item.cafe), reverse=True)
    return sorted(items, key=_rating_key)


def rank_leaderboard(items: Iterable[ScoredCafe], limit: int = LEADERBOARD_SIZE) -> List[ScoredCafe]:
    """Top cafes by raw overall rating (not the weighted score), then review count."""
    reviewed = [item for item in items if item.review_count > 0]
    reviewed.sort(key=lambda item: (-item.overall_score, -item.review_count, name_key(item.cafe)))
    return reviewed[:limit]
