from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    rate_limit: str
    rate_limit_enabled: bool
    recommendations_rate_limit: int
    recommendations_rate_window_s: int
    rate_limit_db_path: str
    response_cache_enabled: bool
    response_cache_db_path: str
    response_cache_ttl_s: int
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    cors_allow_credentials: bool
    trust_x_forwarded_for: bool


settings = Settings(
    rate_limit=_get_env("RATE_LIMIT", "60/minute") or "60/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    recommendations_rate_limit=_get_env_int("RECOMMENDATIONS_RATE_LIMIT", 10),
    recommendations_rate_window_s=_get_env_int("RECOMMENDATIONS_RATE_WINDOW_S", 60),
    rate_limit_db_path=_get_env("RATE_LIMIT_DB_PATH", "data/rate_limit.db") or "data/rate_limit.db",
    response_cache_enabled=_get_env_bool("RESPONSE_CACHE_ENABLED", True),
    response_cache_db_path=_get_env("RESPONSE_CACHE_DB_PATH", "data/response_cache.db") or "data/response_cache.db",
    response_cache_ttl_s=_get_env_int("RESPONSE_CACHE_TTL_S", 300),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ],
    ),
    cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX"),
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", False),
    trust_x_forwarded_for=_get_env_bool("TRUST_X_FORWARDED_FOR", False),
)

if settings.recommendations_rate_limit < 1:
    raise RuntimeError("RECOMMENDATIONS_RATE_LIMIT must be at least 1.")

if settings.response_cache_ttl_s < 1:
    raise RuntimeError("RESPONSE_CACHE_TTL_S must be at least 1 second.")
