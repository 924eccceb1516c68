from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from app.ai.factory import get_text_generator
from app.ai.types import TextGenerator
from app.core.config import settings
from app.core.rate_limit import client_key, rate_limit
from app.core.rate_limiter import RateLimiter, get_rate_limiter
from app.core.response_cache import ResponseCache, cache_key_for, get_response_cache
from app.recommendations.service import EmptyProfileError, RecommendationService
from app.salary.validation import SalaryValidationError
from app.schemas.recommendations import RecommendationResponse, UserProfile

logger = logging.getLogger(__name__)

router = APIRouter()


def get_recommendation_service(
    generator: TextGenerator | None = Depends(get_text_generator),
) -> RecommendationService:
    return RecommendationService(generator)


def _rejection(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": message},
    )


@router.post(
    "/job-recommendations",
    response_model=RecommendationResponse,
    response_model_exclude_none=True,
    summary="Career recommendations",
    description="Rank career recommendations for a user profile with validated salary ranges.",
)
@rate_limit()
async def job_recommendations(
    request: Request,
    payload: UserProfile | None = Body(default=None),
    service: RecommendationService = Depends(get_recommendation_service),
    limiter: RateLimiter = Depends(get_rate_limiter),
    cache: ResponseCache = Depends(get_response_cache),
):
    if not limiter.allow(client_key(request)):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many requests. Please wait a minute and try again.",
        )

    profile = payload or UserProfile()
    if profile.is_empty():
        return _rejection("No user data provided")

    cache_key = cache_key_for(profile.model_dump(mode="json", by_alias=True, exclude_none=True))
    if settings.response_cache_enabled:
        cached = cache.get(cache_key)
        if cached is not None:
            logger.info("recommendation_cache_hit key=%s", cache_key[:12])
            return JSONResponse(content=cached)

    try:
        result = await service.recommend(profile)
    except (EmptyProfileError, SalaryValidationError) as exc:
        return _rejection(str(exc))

    body = result.model_dump(mode="json", by_alias=True, exclude_none=True)
    if settings.response_cache_enabled and result.note is None:
        cache.set(cache_key, body, settings.response_cache_ttl_s)
    return JSONResponse(content=body)
