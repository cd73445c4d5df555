# app/services/rating.py
"""Per-cafe rating summaries computed from review rows on every read.

Nothing here is cached or persisted: a summary always reflects the reviews
visible to the session that asked for it.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db.models.review import Review

# Bayesian prior: every cafe starts with PRIOR_WEIGHT virtual reviews of PRIOR_RATING.
PRIOR_RATING = 3
PRIOR_WEIGHT = 5

_TWO_PLACES = Decimal("0.01")


def _to_decimal(value) -> Decimal:
    # Postgres returns Decimal for avg(), SQLite returns float
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _quantize(value: Decimal) -> float:
    return float(value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def round_rating(value) -> Optional[float]:
    """Round to 2 decimals, half away from zero, on the value's decimal form."""
    if value is None:
        return None
    return _quantize(_to_decimal(value))


def weighted_rating(
    average_rating: Optional[float],
    review_count: int,
    prior_rating: float = PRIOR_RATING,
    prior_weight: int = PRIOR_WEIGHT,
) -> Optional[float]:
    """Shrink ``average_rating`` toward the prior; None when there are no reviews."""
    if review_count <= 0:
        return None
    # decimal arithmetic keeps x.xx5 scores exactly on the half
    average = _to_decimal(average_rating if average_rating is not None else 0)
    score = (average * review_count + _to_decimal(prior_rating) * prior_weight) / (review_count + prior_weight)
    return _quantize(score)


@dataclass(frozen=True)
class RatingSummary:
    review_count: int = 0
    taste_rating: Optional[float] = None
    aesthetic_rating: Optional[float] = None
    study_rating: Optional[float] = None
    overall_rating: Optional[float] = None
    weighted_rating: Optional[float] = None

    @property
    def average_rating(self) -> Optional[float]:
        return self.overall_rating


EMPTY_SUMMARY = RatingSummary()


def build_summary(
    review_count: int,
    taste_avg: Optional[float],
    aesthetic_avg: Optional[float],
    study_avg: Optional[float],
) -> RatingSummary:
    """Turn raw per-dimension means into a rounded summary.

    The overall rating is the mean of the *rounded* dimension means.
    """
    if not review_count:
        return EMPTY_SUMMARY

    taste = round_rating(taste_avg)
    aesthetic = round_rating(aesthetic_avg)
    study = round_rating(study_avg)

    if taste is None or aesthetic is None or study is None:
        overall = None
    else:
        overall = _quantize(sum(_to_decimal(v) for v in (taste, aesthetic, study)) / 3)

    return RatingSummary(
        review_count=int(review_count),
        taste_rating=taste,
        aesthetic_rating=aesthetic,
        study_rating=study,
        overall_rating=overall,
        weighted_rating=weighted_rating(overall, int(review_count)),
    )


def aggregate_ratings(db: Session, cafe_ids: Iterable[str]) -> Dict[str, RatingSummary]:
    """Summaries keyed by cafe id for the cafes that have at least one review.

    Cafes without reviews are absent; use :func:`summary_for` to read the map.
    """
    ids = list(dict.fromkeys(cafe_ids))
    if not ids:
        return {}

    rows = (
        db.query(
            Review.cafe_id,
            func.count(Review.id),
            func.avg(Review.taste_rating),
            func.avg(Review.aesthetic_rating),
            func.avg(Review.study_rating),
        )
        .filter(Review.cafe_id.in_(ids))
        .group_by(Review.cafe_id)
        .all()
    )

    return {
        cafe_id: build_summary(count, taste_avg, aesthetic_avg, study_avg)
        for cafe_id, count, taste_avg, aesthetic_avg, study_avg in rows
        if count
    }


def summary_for(summaries: Dict[str, RatingSummary], cafe_id: str) -> RatingSummary:
    return summaries.get(cafe_id, EMPTY_SUMMARY)


def cafe_summary(db: Session, cafe_id: str) -> RatingSummary:
    return summary_for(aggregate_ratings(db, [cafe_id]), cafe_id)
