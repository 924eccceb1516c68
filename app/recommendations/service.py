from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any, Iterable

from pydantic import ValidationError

from app.ai.json_extract import extract_json_payload, recommendations_from_payload
from app.ai.prompts import (
    ANALYSIS_MAX_TOKENS,
    ANALYSIS_TEMPERATURE,
    RECOMMENDATION_MAX_TOKENS,
    RECOMMENDATION_TEMPERATURE,
    build_analysis_prompt,
    build_recommendation_prompt,
)
from app.ai.types import TextGenerator, UpstreamError
from app.eligibility.education import EducationTier, classify_education, normalize_education_level
from app.eligibility.filtering import filter_recommendations
from app.recommendations.fallback import generate_fallback_recommendations
from app.recommendations.job_links import generate_job_links
from app.salary.repair import repair_recommendations
from app.salary.validation import ensure_valid_salary_expectation
from app.schemas.recommendations import JobRecommendation, RecommendationResponse, UserProfile

logger = logging.getLogger(__name__)

ANALYSIS_PLACEHOLDER = "No analysis available"
SAMPLE_DATA_NOTE = "Using sample data due to API issues"
ANALYSIS_UNAVAILABLE_NOTE = "Profile analysis is unavailable right now"
NO_ELIGIBLE_NOTE = "No generated roles fit your education level; showing sample roles instead"


class EmptyProfileError(ValueError):
    pass


def coerce_recommendations(items: Iterable[Any]) -> list[JobRecommendation]:
    """Validate untrusted generator items, dropping the ones that cannot be used."""
    jobs: list[JobRecommendation] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning("recommendation_item_skipped index=%s reason=not_an_object", index)
            continue
        try:
            jobs.append(JobRecommendation.model_validate(item))
        except ValidationError as exc:
            logger.warning("recommendation_item_skipped index=%s errors=%s", index, exc.error_count())
    return jobs


class RecommendationService:
    def __init__(self, generator: TextGenerator | None):
        self._generator = generator

    async def _analyze(self, profile: UserProfile, tier: EducationTier) -> str:
        system_prompt, prompt = build_analysis_prompt(profile, tier)
        text = await self._generator.generate(
            prompt,
            system_prompt=system_prompt,
            temperature=ANALYSIS_TEMPERATURE,
            max_tokens=ANALYSIS_MAX_TOKENS,
        )
        return text.strip()

    async def _generate_recommendations(self, profile: UserProfile, tier: EducationTier) -> list[JobRecommendation]:
        system_prompt, prompt = build_recommendation_prompt(profile, tier)
        text = await self._generator.generate(
            prompt,
            system_prompt=system_prompt,
            temperature=RECOMMENDATION_TEMPERATURE,
            max_tokens=RECOMMENDATION_MAX_TOKENS,
            json_mode=True,
        )
        jobs = coerce_recommendations(recommendations_from_payload(extract_json_payload(text)))
        if not jobs:
            raise UpstreamError("Generator returned no usable recommendations.", code="empty_recommendations")
        return jobs

    async def _run_generators(
        self,
        profile: UserProfile,
        tier: EducationTier,
    ) -> tuple[str | None, list[JobRecommendation] | None]:
        if self._generator is None:
            logger.warning("text_generator_unavailable using_fallbacks=true")
            return None, None

        results = await asyncio.gather(
            self._analyze(profile, tier),
            self._generate_recommendations(profile, tier),
            return_exceptions=True,
        )
        resolved: list[Any] = []
        for name, result in zip(("analysis", "recommendations"), results):
            if isinstance(result, UpstreamError):
                logger.warning("text_generator_failed call=%s code=%s: %s", name, result.code, result)
                resolved.append(None)
            elif isinstance(result, Exception):
                logger.warning("text_generator_failed call=%s code=unexpected", name, exc_info=result)
                resolved.append(None)
            elif isinstance(result, BaseException):
                raise result
            else:
                resolved.append(result)
        return resolved[0], resolved[1]

    def _fallback_response(
        self,
        profile: UserProfile,
        tier: EducationTier,
        *,
        analysis: str | None = None,
        note: str = SAMPLE_DATA_NOTE,
    ) -> RecommendationResponse:
        jobs = filter_recommendations(tier, generate_fallback_recommendations(profile, tier))
        return RecommendationResponse(
            success=True,
            recommendations=jobs,
            analysis=analysis or ANALYSIS_PLACEHOLDER,
            job_links=generate_job_links(jobs),
            education_level=normalize_education_level(profile.education_level),
            is_below_bachelors=tier is EducationTier.BELOW_BACHELOR,
            note=note,
        )

    async def recommend(self, profile: UserProfile) -> RecommendationResponse:
        """Build recommendations for ``profile``.

        Raises EmptyProfileError or SalaryValidationError for requests that must
        be rejected. Generator trouble never raises: each generator call falls
        back on its own and the response carries a ``note``.
        """
        if profile.is_empty():
            raise EmptyProfileError("No user data provided")
        ensure_valid_salary_expectation(profile.salary_expectation)

        started_at = time.perf_counter()
        tier = classify_education(profile.education_level)
        logger.info(
            json.dumps(
                {
                    "event": "recommendation_request",
                    "tier": tier.value,
                    "has_salary_expectation": bool(profile.salary_expectation),
                    "generator_available": self._generator is not None,
                }
            )
        )

        try:
            response = await self._build_response(profile, tier)
        except Exception:
            logger.exception("recommendation_pipeline_failed tier=%s", tier.value)
            response = self._fallback_response(profile, tier)

        logger.info(
            json.dumps(
                {
                    "event": "recommendation_complete",
                    "tier": tier.value,
                    "count": len(response.recommendations),
                    "degraded": response.note is not None,
                    "duration_ms": int((time.perf_counter() - started_at) * 1000),
                }
            )
        )
        return response

    async def _build_response(self, profile: UserProfile, tier: EducationTier) -> RecommendationResponse:
        analysis, generated = await self._run_generators(profile, tier)

        if generated is None:
            return self._fallback_response(profile, tier, analysis=analysis)

        jobs = filter_recommendations(tier, repair_recommendations(generated))
        if not jobs:
            return self._fallback_response(profile, tier, analysis=analysis, note=NO_ELIGIBLE_NOTE)

        return RecommendationResponse(
            success=True,
            recommendations=jobs,
            analysis=analysis or ANALYSIS_PLACEHOLDER,
            job_links=generate_job_links(jobs),
            education_level=normalize_education_level(profile.education_level),
            is_below_bachelors=tier is EducationTier.BELOW_BACHELOR,
            note=None if analysis else ANALYSIS_UNAVAILABLE_NOTE,
        )
