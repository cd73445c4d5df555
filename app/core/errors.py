# app/core/errors.py
"""Error taxonomy and the global handlers that render it."""

from contextlib import contextmanager
from typing import Iterator

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class AppError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "internal server error"

    def __init__(self, detail: str | None = None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "invalid request"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "unauthorized"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "forbidden"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "not found"


class RateLimitedError(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_detail = "too many requests, please try again shortly"


class ConfigurationError(AppError):
    """Server-side configuration is missing; the detail is safe to show."""

    default_detail = "server is not configured"


class UpstreamError(AppError):
    """The data store failed. Only the public message leaves the process."""

    default_detail = "upstream failure"

    def __init__(self, public_message: str, cause: BaseException | None = None):
        detail = public_message
        if cause is not None and not settings.is_production:
            detail = f"{public_message}: {cause}"
        super().__init__(detail)
        self.public_message = public_message


@contextmanager
def upstream_errors(public_message: str, **metadata) -> Iterator[None]:
    """Turn data store failures inside the block into an UpstreamError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception(public_message, extra={"query_metadata": metadata, "error": str(exc)})
        raise UpstreamError(public_message, cause=exc) from exc


def _field_name(loc) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "header")]
    return ".".join(parts) or "request"


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exc_handler(request: Request, exc: StarletteHTTPException):  # type: ignore[override]
        if exc.status_code >= 500:
            logger.error(
                "request failed",
                extra={"route": request.url.path, "method": request.method, "status": exc.status_code, "detail": exc.detail},
            )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError):  # type: ignore[override]
        errors = exc.errors()
        if errors:
            first = errors[0]
            detail = f"{_field_name(first.get('loc', ()))}: {first.get('msg', 'invalid value')}"
        else:
            detail = "invalid request"
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})
