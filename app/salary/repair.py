from __future__ import annotations

import logging
from typing import Iterable

from app.salary.bounds import CURRENCY_SYMBOL, clamp_to_bounds
from app.salary.estimates import estimate_salary_range
from app.salary.formatting import format_range
from app.salary.parsing import ParseError, normalize_salary_text, parse_salary_range
from app.schemas.recommendations import JobRecommendation, SalaryRange

logger = logging.getLogger(__name__)


def _attach(job: JobRecommendation, salary: SalaryRange) -> JobRecommendation:
    job.salary_range = format_range(salary)
    job.salary_data = salary
    return job


def repair_job_salary(job: JobRecommendation) -> JobRecommendation:
    """Leave ``job`` with a parsed, bounded and reformatted salary. Never raises."""
    if not job.salary_range:
        return _attach(job, estimate_salary_range(job.title, job.industry))

    try:
        parsed = parse_salary_range(normalize_salary_text(job.salary_range))
    except ParseError as exc:
        logger.warning("salary_unparseable title=%s salary=%r: %s", job.title, job.salary_range, exc)
        return _attach(job, estimate_salary_range(job.title, job.industry))

    low, high = clamp_to_bounds(parsed.min, parsed.max, parsed.is_annual)
    if (low, high) != (parsed.min, parsed.max):
        logger.warning(
            "salary_out_of_bounds title=%s salary=%r adjusted=%s-%s",
            job.title,
            job.salary_range,
            int(round(low)),
            int(round(high)),
        )

    salary = SalaryRange(
        min=int(round(low)),
        max=int(round(high)),
        period=parsed.period,
        currency=CURRENCY_SYMBOL,
    )
    return _attach(job, salary)


def repair_recommendations(jobs: Iterable[JobRecommendation]) -> list[JobRecommendation]:
    return [repair_job_salary(job) for job in jobs]
