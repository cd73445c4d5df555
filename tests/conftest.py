import itertools

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.api.deps import get_review_rate_limiter
from app.core.config import settings
from app.db.base import Base, get_db
from app.db.models.cafe import Cafe
from app.db.models.favorite import Favorite
from app.db.models.review import Review
from app.db.models.user import User
from app.services.rate_limit import FixedWindowRateLimiter

ADMIN_EMAIL = "admin@example.com"

_place_ids = itertools.count(1)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def review_limiter():
    return FixedWindowRateLimiter(max_requests=30, window_seconds=60)


@pytest.fixture(autouse=True)
def admin_allowlist(monkeypatch):
    monkeypatch.setattr(settings, "admin_emails", f" {ADMIN_EMAIL.upper()} , ")
    monkeypatch.setattr(settings, "environment", "test")


@pytest.fixture
def client(db, review_limiter):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_review_rate_limiter] = lambda: review_limiter
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def as_user(email):
    return {"X-User-Email": email}


@pytest.fixture
def admin_headers():
    return as_user(ADMIN_EMAIL)


@pytest.fixture
def make_cafe(db):
    def _make(name, city="LA", address=None, hidden=False, latitude=None, longitude=None):
        cafe = Cafe(
            name=name,
            city=city,
            address=address,
            latitude=latitude,
            longitude=longitude,
            google_place_id=f"gp-{next(_place_ids)}",
            is_hidden=hidden,
        )
        db.add(cafe)
        db.commit()
        db.refresh(cafe)
        return cafe

    return _make


@pytest.fixture
def make_user(db):
    def _make(email, name=None):
        user = User(email=email.lower(), name=name)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def add_review(db, make_user):
    counter = itertools.count(1)

    def _add(cafe, taste, aesthetic=None, study=None, user=None):
        if user is None:
            user = make_user(f"reviewer{next(counter)}-{cafe.id[:8]}@example.com")
        review = Review(
            user_id=user.id,
            cafe_id=cafe.id,
            taste_rating=taste,
            aesthetic_rating=taste if aesthetic is None else aesthetic,
            study_rating=taste if study is None else study,
        )
        db.add(review)
        db.commit()
        db.refresh(review)
        return review

    return _add


@pytest.fixture
def add_favorite(db):
    def _add(user, cafe):
        favorite = Favorite(user_id=user.id, cafe_id=cafe.id)
        db.add(favorite)
        db.commit()
        return favorite

    return _add
