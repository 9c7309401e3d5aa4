"""
Test shareable query-string encoding and its fallback behavior.
"""

from urllib.parse import parse_qs

import pytest

from fire_calculator.models import ContributionPhase, WithdrawalOverride
from fire_calculator.url_state import DEFAULT_INPUTS, decode_inputs, encode_inputs


@pytest.fixture
def shared_inputs(make_inputs):
    return make_inputs(
        current_age=42,
        life_expectancy=95,
        initial_investment=125_000.5,
        compounding_interval="monthly",
        inflation_mode="nominal",
        retirement_buffer_multiplier=1.1,
        contribution_phases=[
            {"start_age": 42, "end_age": 50, "monthly_contribution": 1500},
            {"start_age": 50, "monthly_contribution": -200},
        ],
        withdrawal_overrides=[{"start_age": 60, "end_age": 65, "withdrawal_rate": 5}],
    )


class TestEncode:
    """Query-string layout."""

    def test_scalar_keys(self, shared_inputs):
        params = {k: v[0] for k, v in parse_qs(encode_inputs(shared_inputs)).items()}

        assert params["age"] == "42"
        assert params["life"] == "95"
        assert params["initial"] == "125000.5"
        assert params["spend"] == "3000"
        assert params["return"] == "7"
        assert params["inflation"] == "3"
        assert params["compound"] == "monthly"
        assert params["swr"] == "4"
        assert params["buffer"] == "1.1"
        assert params["mode"] == "nominal"

    def test_phases_are_camel_case_json(self, shared_inputs):
        params = parse_qs(encode_inputs(shared_inputs))

        assert params["phases"][0] == (
            '[{"startAge":42.0,"endAge":50.0,"monthlyContribution":1500.0},'
            '{"startAge":50.0,"monthlyContribution":-200.0}]'
        )

    def test_decode_restores_inputs(self, shared_inputs):
        decoded = decode_inputs(encode_inputs(shared_inputs), DEFAULT_INPUTS)

        assert decoded.model_dump() == shared_inputs.model_dump()


class TestDecodeFallback:
    """Missing or malformed keys fall back to defaults."""

    def test_empty_query_gives_defaults(self):
        assert decode_inputs("", DEFAULT_INPUTS).model_dump() == DEFAULT_INPUTS.model_dump()

    def test_partial_query(self):
        decoded = decode_inputs("?age=45&spend=5000", DEFAULT_INPUTS)

        assert decoded.current_age == 45
        assert decoded.monthly_retirement_spend == 5000
        assert decoded.initial_investment == DEFAULT_INPUTS.initial_investment
        assert decoded.contribution_phases == DEFAULT_INPUTS.contribution_phases

    def test_malformed_numbers_are_ignored(self):
        decoded = decode_inputs("age=abc&initial=&return=inf&swr=3.5", DEFAULT_INPUTS)

        assert decoded.current_age == DEFAULT_INPUTS.current_age
        assert decoded.initial_investment == DEFAULT_INPUTS.initial_investment
        assert decoded.expected_yearly_return == DEFAULT_INPUTS.expected_yearly_return
        assert decoded.safe_withdrawal_rate == 3.5

    def test_unknown_enum_values_are_ignored(self):
        decoded = decode_inputs("compound=weekly&mode=imaginary", DEFAULT_INPUTS)

        assert decoded.compounding_interval == DEFAULT_INPUTS.compounding_interval
        assert decoded.inflation_mode == DEFAULT_INPUTS.inflation_mode

    def test_malformed_phases_are_ignored(self):
        decoded = decode_inputs("phases=not-json&overrides=%5B%7B%22startAge%22%3A%22x%22%7D%5D", DEFAULT_INPUTS)

        assert decoded.contribution_phases == DEFAULT_INPUTS.contribution_phases
        assert decoded.withdrawal_overrides == DEFAULT_INPUTS.withdrawal_overrides

    def test_accepts_parsed_mapping(self):
        decoded = decode_inputs(
            {"age": ["33"], "phases": '[{"startAge":33,"monthlyContribution":750}]', "ignored": "x"},
            DEFAULT_INPUTS,
        )

        assert decoded.current_age == 33
        assert decoded.contribution_phases == [ContributionPhase(start_age=33, monthly_contribution=750)]

    def test_empty_override_list(self):
        decoded = decode_inputs("overrides=%5B%5D", DEFAULT_INPUTS.model_copy(update={
            "withdrawal_overrides": [WithdrawalOverride(start_age=60, withdrawal_rate=3)],
        }))

        assert decoded.withdrawal_overrides == []


class TestFractionalAges:
    """Ages are plain numbers, not integers."""

    def test_fractional_age_is_kept(self):
        decoded = decode_inputs("age=30.5&life=89.5", DEFAULT_INPUTS)

        assert decoded.current_age == 30.5
        assert decoded.life_expectancy == 89.5

    def test_fractional_age_is_encoded(self, make_inputs):
        params = parse_qs(encode_inputs(make_inputs(current_age=30.5)))

        assert params["age"] == ["30.5"]
