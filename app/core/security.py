# app/core/security.py
"""
Caller identity and admin capability.

Authentication happens upstream: the auth proxy verifies the session and
forwards the caller's email in X-User-Email (display name in X-User-Name).
This module only maps that identity onto local users and the admin allowlist.
"""
from typing import FrozenSet, Iterable, Optional

from fastapi import Depends, Header
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import ConfigurationError, ForbiddenError, UnauthorizedError, upstream_errors
from app.core.logging import get_logger
from app.db.base import get_db
from app.db.models.user import User

logger = get_logger(__name__)


def normalize_email(email: Optional[str]) -> Optional[str]:
    if not email:
        return None
    normalized = email.strip().lower()
    return normalized or None


def parse_admin_emails(raw: Optional[str]) -> FrozenSet[str]:
    """Comma separated allowlist -> normalized set (blank entries dropped)."""
    return frozenset(filter(None, (normalize_email(part) for part in (raw or "").split(","))))


def is_admin_email(email: Optional[str], allowlist: Iterable[str]) -> bool:
    normalized = normalize_email(email)
    if normalized is None:
        return False
    return normalized in {normalize_email(entry) for entry in allowlist}


def get_caller_email(x_user_email: Optional[str] = Header(None)) -> Optional[str]:
    return normalize_email(x_user_email)


def get_optional_user(
    email: Optional[str] = Depends(get_caller_email),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Local user for the caller, or None. Never creates a row."""
    if not email:
        return None
    with upstream_errors("failed to load user"):
        return db.query(User).filter(User.email == email).first()


def get_current_user(
    email: Optional[str] = Depends(get_caller_email),
    x_user_name: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> User:
    """Authenticated caller, creating the local user row on first contact."""
    if not email:
        raise UnauthorizedError()
    return upsert_user(db, email, name=(x_user_name or "").strip() or None)


def upsert_user(db: Session, email: str, name: Optional[str] = None) -> User:
    with upstream_errors("failed to load user"):
        user = db.query(User).filter(User.email == email).first()
        if user is None:
            user = User(email=email, name=name)
            db.add(user)
            try:
                db.commit()
            except IntegrityError:
                # a concurrent request created the same user first
                db.rollback()
                user = db.query(User).filter(User.email == email).one()
            else:
                db.refresh(user)
                return user
        if name and user.name != name:
            user.name = name
            db.commit()
            db.refresh(user)
        return user


def caller_is_admin(email: Optional[str]) -> bool:
    return is_admin_email(email, parse_admin_emails(settings.admin_emails))


def require_admin(email: Optional[str] = Depends(get_caller_email)) -> str:
    """Admin gate: 500 when no allowlist is configured, then 401, then 403."""
    allowlist = parse_admin_emails(settings.admin_emails)
    if not allowlist:
        logger.error("admin allowlist is empty; set ADMIN_EMAILS")
        raise ConfigurationError("admin email list is not configured")
    if not email:
        raise UnauthorizedError()
    if not is_admin_email(email, allowlist):
        raise ForbiddenError()
    return email
