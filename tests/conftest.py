"""
Shared fixtures for simulation and API testing.
"""

import pytest
from fastapi.testclient import TestClient

from fire_calculator.models import RetirementInputs


@pytest.fixture
def baseline_scenario():
    """Plain accumulation scenario: no savings yet, 4% rule, real returns."""
    return {
        "current_age": 30,
        "initial_investment": 0,
        "monthly_retirement_spend": 3000,
        "expected_yearly_return": 7,
        "inflation_rate": 3,
        "inflation_mode": "real",
        "compounding_interval": "yearly",
        "safe_withdrawal_rate": 4,
        "retirement_buffer_multiplier": 1,
        "contribution_phases": [],
    }


@pytest.fixture
def make_inputs(baseline_scenario):
    """Factory fixture: baseline scenario with selected fields replaced."""
    def _make(**overrides):
        return RetirementInputs(**{**baseline_scenario, **overrides})

    return _make


@pytest.fixture
def client():
    from fire_calculator.main import app

    return TestClient(app)
