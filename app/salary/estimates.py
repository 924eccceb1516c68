from __future__ import annotations

import re
from functools import lru_cache

from app.core.reference_data import get_reference_value
from app.salary.bounds import CURRENCY_SYMBOL, clamp_to_bounds
from app.salary.formatting import format_range
from app.schemas.recommendations import SalaryRange

_DEFAULT_INDUSTRY = "other"
_FALLBACK_BRACKET = (15000, 25000)


@lru_cache(maxsize=1)
def _role_table() -> tuple[tuple[str, int, int], ...]:
    roles = get_reference_value("salary.roles", []) or []
    return tuple((str(role["title"]).lower(), int(role["min"]), int(role["max"])) for role in roles)


@lru_cache(maxsize=1)
def _seniority_patterns() -> tuple[re.Pattern[str], re.Pattern[str]]:
    senior = get_reference_value("salary.seniority.senior_pattern", "senior|lead|manager|director")
    entry = get_reference_value("salary.seniority.entry_pattern", "assistant|junior|entry")
    return re.compile(senior, re.IGNORECASE), re.compile(entry, re.IGNORECASE)


def _multipliers(path: str, default: tuple[float, float]) -> tuple[float, float]:
    raw = get_reference_value(path, default) or default
    return float(raw[0]), float(raw[1])


def _industry_bracket(industry: str, *, senior: bool, entry: bool) -> tuple[int, int]:
    brackets = get_reference_value("salary.industries", {}) or {}
    lowered = (industry or "").strip().lower()
    chosen = brackets.get(_DEFAULT_INDUSTRY, {})
    for name, bracket in brackets.items():
        if name != _DEFAULT_INDUSTRY and name in lowered:
            chosen = bracket
            break

    if entry and "entry" in chosen:
        low, high = chosen["entry"]
    elif senior and "senior" in chosen:
        low, high = chosen["senior"]
    else:
        low, high = chosen.get("default", _FALLBACK_BRACKET)
    return int(low), int(high)


def estimate_salary_range(title: str, industry: str = "") -> SalaryRange:
    """Estimate a monthly range from the role table, else from the industry bracket."""
    title_lower = (title or "").lower()
    senior_re, entry_re = _seniority_patterns()
    senior = bool(senior_re.search(title_lower))
    entry = bool(entry_re.search(title_lower))

    for role_title, role_min, role_max in _role_table():
        if role_title in title_lower:
            if senior:
                low_mult, high_mult = _multipliers("salary.seniority.senior_max_multipliers", (1.5, 2.5))
                low, high = role_max * low_mult, role_max * high_mult
            elif entry:
                low_mult, high_mult = _multipliers("salary.seniority.entry_min_multipliers", (0.8, 1.2))
                low, high = role_min * low_mult, role_min * high_mult
            else:
                low, high = role_min, role_max
            break
    else:
        # Industry brackets check entry level before seniority.
        low, high = _industry_bracket(industry, senior=senior, entry=entry)

    low, high = clamp_to_bounds(low, high, is_annual=False)
    return SalaryRange(
        min=int(round(low)),
        max=int(round(high)),
        period="monthly",
        currency=CURRENCY_SYMBOL,
    )


def estimate_salary(title: str, industry: str = "") -> str:
    return format_range(estimate_salary_range(title, industry))
