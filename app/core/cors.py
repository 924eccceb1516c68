from __future__ import annotations

from app.core.config import settings


def cors_allowed_origins() -> list[str]:
    # Browsers send Origin without a trailing slash.
    origins: list[str] = []
    for origin in settings.cors_allowed_origins:
        cleaned = origin.rstrip("/")
        if cleaned and cleaned not in origins:
            origins.append(cleaned)
    return origins


def cors_allow_origin_regex() -> str | None:
    return (settings.cors_allow_origin_regex or "").strip() or None
