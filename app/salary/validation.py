from __future__ import annotations

import re

from app.salary.bounds import (
    MAX_MONTHLY_SALARY,
    MIN_MONTHLY_SALARY,
    MONTHS_PER_YEAR,
    SALARY_RANGE_THRESHOLD,
)
from app.salary.formatting import format_amount
from app.salary.parsing import parse_number

_CURRENCY = r"(?:₱|\bphp\b|\bpesos?\b)"
_AMOUNT = r"(\d[\d,]*)(?:\.\d+)?"
_SECOND_AMOUNT = rf"(?:\s*(?:-|–|—|\bto\b)\s*{_CURRENCY}?\s*{_AMOUNT})?"
_MONTHLY_MARKER = r"\s*(?:per\s*month|a\s*month|monthly|/\s*mo(?:nth)?\b)"
_ANNUAL_MARKER = r"\s*(?:per\s*year|a\s*year|per\s*annum|annually|yearly|/\s*y(?:ea)?r\b)"

_MONTHLY_RE = re.compile(rf"{_CURRENCY}\s*{_AMOUNT}{_SECOND_AMOUNT}{_MONTHLY_MARKER}", re.IGNORECASE)
_ANNUAL_RE = re.compile(rf"{_CURRENCY}\s*{_AMOUNT}{_SECOND_AMOUNT}{_ANNUAL_MARKER}", re.IGNORECASE)

FORMAT_HINT_MESSAGE = (
    'Please specify salary in format like "₱20,000-₱30,000 per month" or "₱500,000 annually"'
)
INVALID_FORMAT_MESSAGE = 'Invalid salary format. Please use numbers like "₱20,000" or "₱500,000"'


class SalaryValidationError(ValueError):
    pass


def _bounds_from_match(match: re.Match[str]) -> tuple[int, int]:
    low = parse_number(match.group(1))
    high = parse_number(match.group(2)) if match.group(2) else low
    return low, high


def _lacks_progression(low: int, high: int) -> bool:
    return low != high and high < low * (1 + SALARY_RANGE_THRESHOLD)


def _check_monthly(low: int, high: int) -> str | None:
    if low < MIN_MONTHLY_SALARY:
        return f"Salary seems too low (minimum expected is {format_amount(MIN_MONTHLY_SALARY)} monthly)"
    if high > MAX_MONTHLY_SALARY:
        return (
            "Salary seems unrealistically high "
            f"(maximum expected is {format_amount(MAX_MONTHLY_SALARY)} monthly)"
        )
    if _lacks_progression(low, high):
        return "Salary range should show meaningful progression (e.g., ₱20,000-₱30,000)"
    return None


def _check_annual(low: int, high: int) -> str | None:
    low_monthly = low / MONTHS_PER_YEAR
    high_monthly = high / MONTHS_PER_YEAR
    if low_monthly < MIN_MONTHLY_SALARY:
        return (
            f"Annual salary translates to {format_amount(low_monthly)} monthly, "
            "which is below minimum expected"
        )
    if high_monthly > MAX_MONTHLY_SALARY:
        return (
            f"Annual salary translates to {format_amount(high_monthly)} monthly, "
            "which is unrealistically high"
        )
    if _lacks_progression(low, high):
        return "Annual salary range should show meaningful progression (e.g., ₱300,000-₱400,000)"
    return None


def validate_salary_expectation(text: str | None) -> str | None:
    """Return a rejection message for an implausible salary expectation, or None."""
    if not text or not str(text).strip():
        return None

    text = str(text)
    monthly = _MONTHLY_RE.search(text)
    annual = _ANNUAL_RE.search(text)
    if not monthly and not annual:
        return FORMAT_HINT_MESSAGE

    try:
        if monthly:
            message = _check_monthly(*_bounds_from_match(monthly))
            if message:
                return message
        if annual:
            message = _check_annual(*_bounds_from_match(annual))
            if message:
                return message
    except (ValueError, TypeError):
        return INVALID_FORMAT_MESSAGE
    return None


def ensure_valid_salary_expectation(text: str | None) -> None:
    message = validate_salary_expectation(text)
    if message:
        raise SalaryValidationError(message)
