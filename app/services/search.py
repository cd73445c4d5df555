# app/services/search.py
import unicodedata
from typing import Optional

from app.core.errors import ValidationError


def normalize_for_search(value: str) -> str:
    """Decompose, drop combining marks, lowercase ("Phê" -> "phe")."""
    decomposed = unicodedata.normalize("NFD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.lower()


def matches(query: str, *fields: Optional[str]) -> bool:
    """Substring containment of the normalized query in any non-empty field."""
    needle = normalize_for_search(query)
    return any(field and needle in normalize_for_search(field) for field in fields)


def require_query(raw: Optional[str]) -> str:
    query = (raw or "").strip()
    if not query:
        raise ValidationError("q is required")
    return query
