# app/services/pagination.py
import math
from dataclasses import dataclass, field
from typing import Generic, List, Optional, Sequence, TypeVar

from app.core.errors import ValidationError

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 6
MAX_PAGE_SIZE = 50
ADMIN_DEFAULT_PAGE_SIZE = 20
ADMIN_MAX_PAGE_SIZE = 100


def _parse_positive_int(raw: Optional[str], default: int) -> Optional[int]:
    """``default`` for a missing/blank value, None for anything not a positive integer."""
    if raw is None or not raw.strip():
        return default
    text = raw.strip()
    if text.startswith("+"):
        text = text[1:]
    if not (text.isascii() and text.isdigit()):
        return None
    value = int(text)
    return value if value > 0 else None


def parse_page(raw: Optional[str]) -> int:
    page = _parse_positive_int(raw, 1)
    if page is None:
        raise ValidationError("page must be a positive integer")
    return page


def parse_page_size(raw: Optional[str], default: int = DEFAULT_PAGE_SIZE, maximum: int = MAX_PAGE_SIZE) -> int:
    page_size = _parse_positive_int(raw, default)
    if page_size is None or page_size > maximum:
        raise ValidationError(f"pageSize must be a positive integer up to {maximum}")
    return page_size


@dataclass
class Page(Generic[T]):
    items: List[T] = field(default_factory=list)
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total: int = 0
    total_pages: int = 1

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """Slice one page; a page past the end is clamped to the last page."""
    total = len(items)
    total_pages = max(1, math.ceil(total / page_size))
    safe_page = min(page, total_pages)
    start = (safe_page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        page=safe_page,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
    )
