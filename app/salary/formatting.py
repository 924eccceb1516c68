from __future__ import annotations

from app.salary.bounds import CURRENCY_SYMBOL
from app.schemas.recommendations import SalaryRange


def format_amount(value: float, currency: str = CURRENCY_SYMBOL) -> str:
    return f"{currency}{int(round(value)):,}"


def format_salary_range(
    min_value: float,
    max_value: float,
    is_annual: bool,
    *,
    currency: str = CURRENCY_SYMBOL,
) -> str:
    period = "per year" if is_annual else "per month"
    low = int(round(min_value))
    high = int(round(max_value))
    if low == high:
        return f"{format_amount(low, currency)} {period}"
    return f"{format_amount(low, currency)}–{format_amount(high, currency)} {period}"


def format_range(salary: SalaryRange) -> str:
    return format_salary_range(salary.min, salary.max, salary.is_annual)
