# app/api/deps.py
from fastapi import Depends, Request

from app.core.errors import RateLimitedError
from app.services.rate_limit import FixedWindowRateLimiter


def get_review_rate_limiter(request: Request) -> FixedWindowRateLimiter:
    return request.app.state.review_rate_limiter


def client_ip(request: Request) -> str:
    """First X-Forwarded-For hop, then X-Real-IP, then the socket peer."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    real_ip = (request.headers.get("x-real-ip") or "").strip()
    if real_ip:
        return real_ip
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def enforce_review_rate_limit(
    request: Request,
    limiter: FixedWindowRateLimiter = Depends(get_review_rate_limiter),
) -> None:
    result = limiter.hit(f"reviews:post:{client_ip(request)}")
    if not result.allowed:
        raise RateLimitedError()
