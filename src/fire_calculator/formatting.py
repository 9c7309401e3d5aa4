"""
Display formatting for simulation results.
"""

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Optional

from .config import CURRENCY_SYMBOL, DEFAULT_PERCENT_DECIMALS, INFINITY_LABEL, NEVER_LABEL


def _round_half_up(value: float, decimals: int) -> Decimal:
    # Rounds the shortest repr, so 5.5 -> 6 and 2.5 -> 3
    digits = Decimal(repr(float(value)))
    with localcontext() as ctx:
        # Enough precision to hold every integer digit plus the decimals
        ctx.prec = max(ctx.prec, digits.adjusted() + decimals + 2)
        return digits.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)


def _format_non_finite(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return "-Infinity" if value < 0 else "Infinity"


def format_currency(value: float) -> str:
    """Whole currency units with thousands separators, e.g. ``-$1,234``."""
    sign = "-" if value < 0 else ""
    if math.isnan(value):
        return f"{CURRENCY_SYMBOL}NaN"
    if math.isinf(value):
        return f"{sign}{CURRENCY_SYMBOL}{INFINITY_LABEL}"
    amount = _round_half_up(abs(value), 0)
    return f"{sign}{CURRENCY_SYMBOL}{amount:,.0f}"


def format_percent(value: float, decimals: int = DEFAULT_PERCENT_DECIMALS) -> str:
    """Fixed-decimal percentage, e.g. ``5.5%``."""
    if not math.isfinite(value):
        return f"{_format_non_finite(value)}%"
    return f"{_round_half_up(value, decimals):.{decimals}f}%"


def _format_age(value: float) -> str:
    # 47.0 -> "47", 30.5 -> "30.5"
    return f"{value:g}"


def format_retirement_age(retirement_age: Optional[float]) -> str:
    return NEVER_LABEL if retirement_age is None else _format_age(retirement_age)


def format_years_to_retirement(years: Optional[float]) -> str:
    return INFINITY_LABEL if years is None else _format_age(years)
