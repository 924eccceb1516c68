CURRENCY_SYMBOL = "₱"

# Monthly bounds for the Philippine market; minimum wage sits around ₱12,000.
MIN_MONTHLY_SALARY = 10_000
MAX_MONTHLY_SALARY = 500_000

# A range counts as meaningful when max >= min * (1 + threshold).
SALARY_RANGE_THRESHOLD = 0.5

MONTHS_PER_YEAR = 12


def period_bounds(is_annual: bool) -> tuple[int, int]:
    factor = MONTHS_PER_YEAR if is_annual else 1
    return MIN_MONTHLY_SALARY * factor, MAX_MONTHLY_SALARY * factor


def clamp_to_bounds(low: float, high: float, is_annual: bool) -> tuple[float, float]:
    """Order a range and pull it inside the plausible bounds for its period."""
    floor, ceiling = period_bounds(is_annual)
    if low > high:
        low, high = high, low
    if low < floor:
        low = floor
        if high < low:
            high = low * 1.5
    if high > ceiling:
        high = ceiling
        if low > high:
            low = high * 0.7
    return low, high
