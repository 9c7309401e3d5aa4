"""
Core deterministic simulation engine for FIRE planning.
"""

import logging
from typing import List, Optional
import numpy as np

from ..config import MONTHS_PER_YEAR
from ..models import RetirementInputs, SimulationResult, YearRow
from .intervals import contribution_schedule, sort_by_start_age, withdrawal_rate_schedule

logger = logging.getLogger(__name__)


def effective_return(inputs: RetirementInputs) -> float:
    """Annual return as a decimal, net of inflation in real mode."""
    pct = inputs.expected_yearly_return
    if inputs.inflation_mode == "real":
        pct -= inputs.inflation_rate
    return pct / 100.0


def fi_target(annual_spend: float, withdrawal_rate: float, buffer_multiplier: float) -> float:
    """
    Portfolio needed to fund ``annual_spend`` at ``withdrawal_rate``.

    A zero rate follows IEEE division instead of raising: positive spend
    gives +inf (never reached), zero spend gives nan (never reached).
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        target = np.float64(annual_spend) / np.float64(withdrawal_rate) * buffer_multiplier
    return float(target)


def calculate_growth(portfolio: float, yearly_return: float, interval: str) -> float:
    """One year of growth on ``portfolio`` under the given compounding convention."""
    if interval == "yearly":
        return portfolio * yearly_return
    monthly_return = yearly_return / MONTHS_PER_YEAR
    # Overflow goes to inf rather than raising
    with np.errstate(over="ignore", invalid="ignore"):
        factor = np.power(np.float64(1.0) + monthly_return, MONTHS_PER_YEAR) - 1.0
        growth = portfolio * factor
    return float(growth)


def simulate_retirement(inputs: RetirementInputs) -> SimulationResult:
    """
    Run the year-by-year projection from ``current_age`` to ``life_expectancy``.

    Each year, in order:
        1. While not retired, retire if the balance meets the FI target for
           this age's withdrawal rate (overrides included)
        2. Add the contributions of every active phase
        3. Apply growth
        4. If retired, withdraw this age's rate from the grown balance

    Retirement is one-way. The loop stops after the first year that ends
    with a negative balance; that row is still reported.
    """
    yearly_return = effective_return(inputs)
    swr = inputs.safe_withdrawal_rate / 100.0
    annual_spend = inputs.monthly_retirement_spend * MONTHS_PER_YEAR
    buffer = inputs.retirement_buffer_multiplier
    base_target = fi_target(annual_spend, swr, buffer)

    phases = sort_by_start_age(inputs.contribution_phases)
    overrides = sort_by_start_age(inputs.withdrawal_overrides)

    # Per-age lookup tables over the whole horizon (empty if it is negative)
    n_years = int(np.floor(inputs.life_expectancy - inputs.current_age)) + 1
    ages = inputs.current_age + np.arange(max(n_years, 0))
    contributions = contribution_schedule(ages, phases)
    rates = withdrawal_rate_schedule(ages, overrides, swr)
    logger.debug(
        "Simulating ages %g-%g (%d years, %d phases, %d overrides)",
        inputs.current_age, inputs.life_expectancy, len(ages), len(phases), len(overrides),
    )

    portfolio = float(inputs.initial_investment)
    total_contributions = float(inputs.initial_investment)
    retirement_age: Optional[float] = None
    retired = False
    rows: List[YearRow] = []

    for yi, age in enumerate(ages):
        age = float(age)
        rate = float(rates[yi])

        # 1. Target is re-derived every year since overrides make it age-dependent
        if not retired and portfolio >= fi_target(annual_spend, rate, buffer):
            retired = True
            retirement_age = age

        # 2. Phases stay active after retirement if their interval says so
        contribution = float(contributions[yi])
        portfolio += contribution
        total_contributions += contribution

        # 3. Growth
        growth = calculate_growth(portfolio, yearly_return, inputs.compounding_interval)
        portfolio += growth

        # 4. Percentage-of-balance withdrawal, taken after growth
        withdrawal = portfolio * rate if retired else 0.0
        portfolio -= withdrawal

        rows.append(YearRow(
            age=age,
            contribution=contribution,
            total_contributions=total_contributions,
            growth=growth,
            withdrawal=withdrawal,
            portfolio_end=portfolio,
            retired=retired,
        ))

        # 5. Depletion is terminal
        if portfolio < 0:
            logger.info("Portfolio depleted at age %g", age)
            break

    years_to_retirement = retirement_age - inputs.current_age if retirement_age is not None else None
    if retirement_age is None:
        logger.info("FI target %.2f not reached by age %g", base_target, inputs.life_expectancy)
    else:
        logger.info("Retirement at age %g (%g years)", retirement_age, years_to_retirement)

    return SimulationResult(
        retirement_age=retirement_age,
        fi_target=base_target,
        years_to_retirement=years_to_retirement,
        rows=rows,
    )
