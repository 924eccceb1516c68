from __future__ import annotations

import logging
from functools import lru_cache
from typing import Iterable

from app.core.reference_data import get_reference_value
from app.eligibility.education import EducationTier
from app.schemas.recommendations import JobRecommendation

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def non_degree_titles() -> tuple[str, ...]:
    titles = get_reference_value("non_degree_titles", []) or []
    return tuple(str(title).strip().lower() for title in titles if str(title).strip())


def is_non_degree_title(title: str) -> bool:
    """Bidirectional substring match against the no-degree title list.

    Best effort only: short titles can match unrelated ones
    ("Cook" is contained in "Cookware Technician").
    """
    lowered = (title or "").strip().lower()
    if not lowered:
        return False
    return any(lowered in known or known in lowered for known in non_degree_titles())


def filter_recommendations(
    tier: EducationTier,
    jobs: Iterable[JobRecommendation],
) -> list[JobRecommendation]:
    jobs = list(jobs)
    if tier is not EducationTier.BELOW_BACHELOR:
        return jobs

    kept = [job for job in jobs if is_non_degree_title(job.title)]
    dropped = len(jobs) - len(kept)
    if dropped:
        logger.info("eligibility_filter tier=%s kept=%s dropped=%s", tier.value, len(kept), dropped)
    return kept
