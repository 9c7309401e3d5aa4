"""
Age-interval resolution for contribution phases and withdrawal overrides.

Both kinds of interval share half-open ``[start_age, end_age)`` semantics,
with ``end_age=None`` meaning the interval never closes. They differ in how
overlaps resolve:

- contribution phases are additive: every active phase contributes
- withdrawal overrides are first-match: the earliest-starting active
  override shadows the rest, and no match falls back to the base rate
"""

from typing import List, Optional, Sequence, TypeVar, Union
import numpy as np

from ..config import MONTHS_PER_YEAR
from ..models import ContributionPhase, WithdrawalOverride

Interval = TypeVar("Interval", ContributionPhase, WithdrawalOverride)


def is_active(age: float, start_age: float, end_age: Optional[float]) -> bool:
    """True if ``age`` falls in ``[start_age, end_age)``."""
    upper = np.inf if end_age is None else end_age
    return start_age <= age < upper


def sort_by_start_age(intervals: Sequence[Interval]) -> List[Interval]:
    """Stable ascending sort; ties keep their input order."""
    return sorted(intervals, key=lambda interval: interval.start_age)


def resolve_contribution(age: float, phases: Sequence[ContributionPhase]) -> float:
    """Annual contribution at ``age``: all active phases summed."""
    monthly = 0.0
    for phase in phases:
        if is_active(age, phase.start_age, phase.end_age):
            monthly += phase.monthly_contribution
    return monthly * MONTHS_PER_YEAR


def resolve_withdrawal_rate(
    age: float,
    overrides: Sequence[WithdrawalOverride],
    base_rate: float,
) -> float:
    """
    Withdrawal rate at ``age`` as a decimal fraction.

    ``overrides`` are scanned in the given order, so callers pass them
    through ``sort_by_start_age`` first.
    """
    for override in overrides:
        if is_active(age, override.start_age, override.end_age):
            return override.withdrawal_rate / 100.0
    return base_rate


# ============================
# Per-age lookup tables
# ============================
def _active_mask(ages: np.ndarray, start_age: float, end_age: Optional[float]) -> np.ndarray:
    upper = np.inf if end_age is None else end_age
    return (ages >= start_age) & (ages < upper)


def contribution_schedule(
    ages: Union[Sequence[float], np.ndarray],
    phases: Sequence[ContributionPhase],
) -> np.ndarray:
    """
    Annual contribution for every age in ``ages``.

    Phases are accumulated in the order given, so each element matches
    ``resolve_contribution`` for the same age exactly.
    """
    ages = np.asarray(ages, dtype=float)
    monthly = np.zeros(ages.shape)
    for phase in phases:
        mask = _active_mask(ages, phase.start_age, phase.end_age)
        monthly[mask] += phase.monthly_contribution
    return monthly * MONTHS_PER_YEAR


def withdrawal_rate_schedule(
    ages: Union[Sequence[float], np.ndarray],
    overrides: Sequence[WithdrawalOverride],
    base_rate: float,
) -> np.ndarray:
    """Withdrawal rate (decimal) for every age in ``ages``, first match wins."""
    ages = np.asarray(ages, dtype=float)
    rates = np.full(ages.shape, base_rate, dtype=float)
    resolved = np.zeros(ages.shape, dtype=bool)
    for override in overrides:
        mask = _active_mask(ages, override.start_age, override.end_age) & ~resolved
        rates[mask] = override.withdrawal_rate / 100.0
        resolved |= mask
    return rates
