from __future__ import annotations

import re
from enum import Enum
from functools import lru_cache

from app.core.reference_data import get_reference_value


class EducationTier(str, Enum):
    BELOW_BACHELOR = "below_bachelor"
    BACHELOR = "bachelor"
    ADVANCED = "advanced"
    UNKNOWN = "unknown"


# Checked in this order; the first set containing the input wins.
_TIER_KEYS: tuple[tuple[EducationTier, str], ...] = (
    (EducationTier.BELOW_BACHELOR, "education.below_bachelor"),
    (EducationTier.BACHELOR, "education.bachelor"),
    (EducationTier.ADVANCED, "education.advanced"),
)


def normalize_education_level(text: str | None) -> str:
    return re.sub(r"\s+", " ", (text or "").replace("’", "'")).strip().lower()


@lru_cache(maxsize=1)
def _tier_sets() -> tuple[tuple[EducationTier, frozenset[str]], ...]:
    return tuple(
        (tier, frozenset(normalize_education_level(str(item)) for item in get_reference_value(path, []) or []))
        for tier, path in _TIER_KEYS
    )


def classify_education(text: str | None) -> EducationTier:
    normalized = normalize_education_level(text)
    if not normalized:
        return EducationTier.UNKNOWN
    for tier, members in _tier_sets():
        if normalized in members:
            return tier
    return EducationTier.UNKNOWN


def is_below_bachelor(text: str | None) -> bool:
    return classify_education(text) is EducationTier.BELOW_BACHELOR
