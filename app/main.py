# app/main.py
from dotenv import load_dotenv

from fastapi import FastAPI

# Load environment variables from .env before settings are read
load_dotenv()

from app.core.config import settings  # noqa: E402
from app.core.errors import install_error_handlers  # noqa: E402
from app.core.logging import configure_logging  # noqa: E402
from app.db.base import Base, engine  # noqa: E402
from app.db.models import cafe, favorite, review, user  # noqa: E402,F401
from app.api.routes import admin as admin_router  # noqa: E402
from app.api.routes import auth as auth_router  # noqa: E402
from app.api.routes import cafes as cafes_router  # noqa: E402
from app.api.routes import review as review_router  # noqa: E402
from app.api.routes import search as search_router  # noqa: E402
from app.api.routes import users as users_router  # noqa: E402
from app.services.rate_limit import FixedWindowRateLimiter  # noqa: E402


app = FastAPI(title=settings.project_name)
app.state.review_rate_limiter = FixedWindowRateLimiter(
    max_requests=settings.review_rate_limit,
    window_seconds=settings.review_rate_window_seconds,
)
install_error_handlers(app)


@app.on_event("startup")
def startup():
    configure_logging()
    Base.metadata.create_all(bind=engine)


@app.get("/")
def root():
    return {"message": "Cafe Map API running"}


@app.get("/health")
def health():
    return {"status": "ok"}


# search is registered first so /cafes/search never reaches /cafes/{cafe_id}
app.include_router(search_router.router, prefix=settings.api_prefix)
app.include_router(cafes_router.router, prefix=settings.api_prefix)
app.include_router(review_router.router, prefix=settings.api_prefix)
app.include_router(users_router.router, prefix=settings.api_prefix)
app.include_router(auth_router.router, prefix=settings.api_prefix)
app.include_router(admin_router.router, prefix=settings.api_prefix)
