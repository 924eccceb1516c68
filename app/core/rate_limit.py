from __future__ import annotations

from fastapi import Request
from slowapi import Limiter

from app.core.config import settings


def client_key(request: Request) -> str:
    """Client address used for both the global and the per-route quota."""
    if settings.trust_x_forwarded_for:
        forwarded_for = request.headers.get("x-forwarded-for", "").strip()
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


limiter = Limiter(key_func=client_key, enabled=settings.rate_limit_enabled)


def rate_limit():
    if not settings.rate_limit_enabled:
        return lambda func: func
    return limiter.limit(settings.rate_limit)
