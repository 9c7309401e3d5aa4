"""
Pydantic models for the FIRE calculator.
All data models for simulation inputs and results.
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, FiniteFloat
from pydantic.alias_generators import to_camel

from .config import DEFAULT_LIFE_EXPECTANCY

CompoundingInterval = Literal["monthly", "yearly"]
InflationMode = Literal["real", "nominal"]


class _Record(BaseModel):
    """Immutable record with camelCase aliases on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ============================
# Schedule Models
# ============================
class ContributionPhase(_Record):
    """Recurring monthly cash flow over [start_age, end_age); negative = withdrawal"""
    start_age: float
    end_age: Optional[float] = None  # None = open-ended
    monthly_contribution: float


class WithdrawalOverride(_Record):
    """Replaces the base withdrawal rate over [start_age, end_age) once retired"""
    start_age: float
    end_age: Optional[float] = None  # None = open-ended
    withdrawal_rate: float  # percentage (5 = 5%)


# ============================
# Main Inputs Model
# ============================
class RetirementInputs(_Record):
    """Complete set of assumptions for one simulation run"""
    current_age: FiniteFloat
    life_expectancy: FiniteFloat = DEFAULT_LIFE_EXPECTANCY

    # Financial inputs
    initial_investment: float
    monthly_retirement_spend: float
    expected_yearly_return: float  # percentage (7 = 7%)
    inflation_rate: float  # percentage
    inflation_mode: InflationMode = "real"
    compounding_interval: CompoundingInterval = "yearly"
    safe_withdrawal_rate: float  # percentage
    retirement_buffer_multiplier: float = 1.0

    # Schedules
    contribution_phases: List[ContributionPhase] = Field(default_factory=list)
    withdrawal_overrides: List[WithdrawalOverride] = Field(default_factory=list)


# ============================
# Response Models
# ============================
class YearRow(_Record):
    """One simulated year"""
    age: float
    contribution: float  # annual contribution for this year
    total_contributions: float  # cumulative, seeded by the initial investment
    growth: float
    withdrawal: float  # 0 before retirement
    portfolio_end: float  # balance after withdrawal
    retired: bool


class SimulationResult(_Record):
    """Results from a deterministic simulation"""
    retirement_age: Optional[float] = None  # None = never reaches the FI target
    fi_target: float
    years_to_retirement: Optional[float] = None
    rows: List[YearRow] = Field(default_factory=list)
