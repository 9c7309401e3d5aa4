"""
Deterministic retirement simulation.
"""

from .engine import simulate_retirement, fi_target, effective_return, calculate_growth
from .intervals import (
    contribution_schedule,
    is_active,
    resolve_contribution,
    resolve_withdrawal_rate,
    sort_by_start_age,
    withdrawal_rate_schedule,
)

__all__ = [
    "simulate_retirement",
    "fi_target",
    "effective_return",
    "calculate_growth",
    "contribution_schedule",
    "is_active",
    "resolve_contribution",
    "resolve_withdrawal_rate",
    "sort_by_start_age",
    "withdrawal_rate_schedule",
]
