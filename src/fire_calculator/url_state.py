"""
Shareable-link state: encode simulation inputs to a query string and back.
"""

import json
import logging
from typing import Any, Dict, List, Mapping, Tuple, Union
from urllib.parse import parse_qs, urlencode

from pydantic import FiniteFloat, TypeAdapter, ValidationError

from .models import (
    CompoundingInterval,
    ContributionPhase,
    InflationMode,
    RetirementInputs,
    WithdrawalOverride,
)

logger = logging.getLogger(__name__)

DEFAULT_INPUTS = RetirementInputs(
    current_age=30,
    life_expectancy=90,
    initial_investment=50_000,
    monthly_retirement_spend=4_000,
    expected_yearly_return=10,
    inflation_rate=3,
    inflation_mode="real",
    compounding_interval="monthly",
    safe_withdrawal_rate=4,
    retirement_buffer_multiplier=1.0,
    contribution_phases=[ContributionPhase(start_age=30, monthly_contribution=2_000)],
)

# Query key -> (RetirementInputs field, validator for the raw value)
_SCALAR_KEYS: Dict[str, Tuple[str, TypeAdapter]] = {
    "age": ("current_age", TypeAdapter(FiniteFloat)),
    "life": ("life_expectancy", TypeAdapter(FiniteFloat)),
    "initial": ("initial_investment", TypeAdapter(FiniteFloat)),
    "spend": ("monthly_retirement_spend", TypeAdapter(FiniteFloat)),
    "return": ("expected_yearly_return", TypeAdapter(FiniteFloat)),
    "inflation": ("inflation_rate", TypeAdapter(FiniteFloat)),
    "compound": ("compounding_interval", TypeAdapter(CompoundingInterval)),
    "swr": ("safe_withdrawal_rate", TypeAdapter(FiniteFloat)),
    "buffer": ("retirement_buffer_multiplier", TypeAdapter(FiniteFloat)),
    "mode": ("inflation_mode", TypeAdapter(InflationMode)),
}

_LIST_KEYS: Dict[str, Tuple[str, TypeAdapter]] = {
    "phases": ("contribution_phases", TypeAdapter(List[ContributionPhase])),
    "overrides": ("withdrawal_overrides", TypeAdapter(List[WithdrawalOverride])),
}


def _format_number(value: Union[int, float]) -> str:
    # 30.0 -> "30", 7.5 -> "7.5"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _dump_intervals(intervals) -> str:
    return json.dumps(
        [interval.model_dump(mode="json", by_alias=True, exclude_none=True) for interval in intervals],
        separators=(",", ":"),
    )


def encode_inputs(inputs: RetirementInputs) -> str:
    """Encode ``inputs`` as a URL query string (without the leading ``?``)."""
    params = {
        "age": _format_number(inputs.current_age),
        "life": _format_number(inputs.life_expectancy),
        "initial": _format_number(inputs.initial_investment),
        "spend": _format_number(inputs.monthly_retirement_spend),
        "return": _format_number(inputs.expected_yearly_return),
        "inflation": _format_number(inputs.inflation_rate),
        "compound": inputs.compounding_interval,
        "swr": _format_number(inputs.safe_withdrawal_rate),
        "buffer": _format_number(inputs.retirement_buffer_multiplier),
        "mode": inputs.inflation_mode,
        "phases": _dump_intervals(inputs.contribution_phases),
        "overrides": _dump_intervals(inputs.withdrawal_overrides),
    }
    return urlencode(params)


def _first_values(query: Union[str, Mapping[str, Any]]) -> Dict[str, str]:
    if isinstance(query, str):
        parsed = parse_qs(query.lstrip("?"), keep_blank_values=True)
        return {key: values[0] for key, values in parsed.items()}
    values = {}
    for key, value in query.items():
        if isinstance(value, (list, tuple)):
            if not value:
                continue
            value = value[0]
        values[key] = value
    return values


def decode_inputs(
    query: Union[str, Mapping[str, Any]],
    defaults: RetirementInputs = DEFAULT_INPUTS,
) -> RetirementInputs:
    """
    Decode a query string (or an already-parsed mapping) into inputs.

    Every key is optional. A missing or malformed key keeps the value from
    ``defaults``; unknown keys are ignored. Never raises.
    """
    raw = _first_values(query)
    updates: Dict[str, Any] = {}

    for key, (field, adapter) in _SCALAR_KEYS.items():
        if key not in raw:
            continue
        try:
            updates[field] = adapter.validate_python(raw[key])
        except ValidationError:
            logger.warning("Ignoring malformed %r in shared state: %r", key, raw[key])

    for key, (field, adapter) in _LIST_KEYS.items():
        if key not in raw:
            continue
        try:
            updates[field] = adapter.validate_json(raw[key])
        except ValidationError:
            logger.warning("Ignoring malformed %r in shared state: %r", key, raw[key])

    return defaults.model_copy(update=updates)
