from __future__ import annotations

import re

from app.salary.bounds import CURRENCY_SYMBOL
from app.schemas.recommendations import SalaryRange

_WHITESPACE_RE = re.compile(r"\s+")
_THOUSANDS_SUFFIX_RE = re.compile(r"(\d+(?:\.\d+)?)\s*k\b")
_CURRENCY_WORD_RE = re.compile(r"\b(?:php|pesos?)\b\.?")
_CURRENCY_LETTER_RE = re.compile(r"\bp\.?\s*(?=\d)")
_CURRENCY_GAP_RE = re.compile(rf"{CURRENCY_SYMBOL}\s+(?=\d)")
# Plural units count as a period only after per, a or a slash ("2 years experience" is not one).
_MONTHLY_RE = re.compile(
    r"(?:(?:\bper\s+|\ba\s+|/\s*)\b(?:months|mos)\b"
    r"|(?:\bper\s+|\ba\s+|/\s*)?\b(?:monthly|month|mo)\b)\.?"
)
_ANNUAL_RE = re.compile(
    r"(?:(?:\bper\s+|\ba\s+|/\s*)\b(?:years|yrs)\b"
    r"|(?:\bper\s+|\ba\s+|/\s*)?\b(?:annually|annual|annum|yearly|year|yr)\b)\.?"
)
_RANGE_SEPARATOR_RE = re.compile(
    rf"({CURRENCY_SYMBOL}?\d[\d,]*(?:\.\d+)?)\s*(?:\bto\b|-|–|—)\s*({CURRENCY_SYMBOL}?\d[\d,]*(?:\.\d+)?)"
)
_AMOUNT_RE = re.compile(r"\d[\d,]*(?:\.\d+)?")


class ParseError(ValueError):
    pass


def parse_number(text: str) -> int:
    digits = re.sub(r"\D", "", text or "")
    if not digits:
        raise ParseError(f"no digits in {text!r}")
    try:
        return int(digits, 10)
    except ValueError as exc:
        raise ParseError(f"number too long ({len(digits)} digits)") from exc


def _expand_thousands(match: re.Match[str]) -> str:
    # Shift the decimal point as text so long digit runs never pass through float().
    whole, _, fraction = match.group(1).partition(".")
    return (whole + (fraction + "000")[:3]).lstrip("0") or "0"


def normalize_salary_text(text: str) -> str:
    """Rewrite a free-text salary into the canonical token set.

    Order matters: currency first, then monthly, then annual, then range
    separators. Every pattern is word-bounded, so a later step never rewrites
    a token an earlier one produced (``p`` is only a currency marker when an
    amount follows it, never inside ``per month``).
    """
    normalized = _WHITESPACE_RE.sub(" ", (text or "").lower()).strip()
    normalized = _THOUSANDS_SUFFIX_RE.sub(_expand_thousands, normalized)
    normalized = _CURRENCY_WORD_RE.sub(CURRENCY_SYMBOL, normalized)
    normalized = _CURRENCY_LETTER_RE.sub(CURRENCY_SYMBOL, normalized)
    normalized = _CURRENCY_GAP_RE.sub(CURRENCY_SYMBOL, normalized)
    normalized = _MONTHLY_RE.sub(" per month ", normalized)
    normalized = _ANNUAL_RE.sub(" per year ", normalized)
    normalized = _RANGE_SEPARATOR_RE.sub(r"\1-\2", normalized)
    return _WHITESPACE_RE.sub(" ", normalized).strip()


def parse_salary_range(text: str) -> SalaryRange:
    """Extract min/max/period/currency. Does not reorder min and max."""
    text = text or ""
    tokens = _AMOUNT_RE.findall(text)
    if not tokens:
        raise ParseError("no numbers found")

    low = parse_number(tokens[0].split(".")[0])
    high = parse_number(tokens[1].split(".")[0]) if len(tokens) > 1 else low
    return SalaryRange(
        min=low,
        max=high,
        period="annual" if "per year" in text else "monthly",
        currency=CURRENCY_SYMBOL if CURRENCY_SYMBOL in text else "",
    )
