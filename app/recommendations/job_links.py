from __future__ import annotations

import re
from typing import Callable, Iterable
from urllib.parse import quote

from app.schemas.recommendations import JobRecommendation

_LOCATION = "Philippines"

_SITES: tuple[Callable[[str, str], str], ...] = (
    lambda title, location: (
        f"https://www.linkedin.com/jobs/search/?keywords={title}&location={location}&geoId=103121230&f_TPR=r86400"
    ),
    lambda title, location: f"https://ph.indeed.com/jobs?q={title}&l={location}&fromage=7",
    lambda title, location: (
        f"https://www.jobstreet.com.ph/jobs?keywords={title}&location={location}&sortBy=createdAt"
    ),
    lambda title, location: f"https://www.kalibrr.com/job-board/te/1/job-search?query={title}",
    lambda title, location: f"https://www.monster.com.ph/jobs/search?q={title}&where={location}&tm=r",
)


def clean_title(title: str) -> str:
    without_punctuation = re.sub(r"[^\w\s]", "", title or "")
    return re.sub(r"\s+", " ", without_punctuation).strip()


def job_search_link(title: str, index: int) -> str:
    encoded_title = quote(clean_title(title), safe="")
    location = quote(_LOCATION, safe="")
    return _SITES[index % len(_SITES)](encoded_title, location)


def generate_job_links(jobs: Iterable[JobRecommendation]) -> list[str]:
    return [job_search_link(job.title, index) for index, job in enumerate(jobs)]
