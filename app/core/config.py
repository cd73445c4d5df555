# app/core/config.py
"""Application configuration."""

from functools import lru_cache
import os

from pydantic import BaseModel


class Settings(BaseModel):
    """Application settings (env values win, defaults otherwise)."""

    project_name: str = os.getenv("PROJECT_NAME", "Cafe Map API")
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    environment: str = os.getenv("ENVIRONMENT", "development")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./cafes.db")

    # comma separated, compared case-insensitively
    admin_emails: str = os.getenv("ADMIN_EMAILS", "")

    review_rate_limit: int = int(os.getenv("REVIEW_RATE_LIMIT", "30"))
    review_rate_window_seconds: int = int(os.getenv("REVIEW_RATE_WINDOW_SECONDS", "60"))

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
