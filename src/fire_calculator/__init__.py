"""
FIRE calculator: deterministic retirement projection.
"""

from .formatting import format_currency, format_percent
from .models import (
    ContributionPhase,
    RetirementInputs,
    SimulationResult,
    WithdrawalOverride,
    YearRow,
)
from .simulation import simulate_retirement

__all__ = [
    "ContributionPhase",
    "RetirementInputs",
    "SimulationResult",
    "WithdrawalOverride",
    "YearRow",
    "format_currency",
    "format_percent",
    "simulate_retirement",
]
