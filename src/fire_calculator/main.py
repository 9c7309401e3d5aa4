"""
FastAPI application exposing the FIRE simulation engine.
"""

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import (
    API_DESCRIPTION,
    API_TITLE,
    API_VERSION,
    CORS_CREDENTIALS,
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGINS,
    LOG_FORMAT,
    LOG_LEVEL,
)
from .formatting import (
    format_currency,
    format_percent,
    format_retirement_age,
    format_years_to_retirement,
)
from .models import RetirementInputs, SimulationResult
from .simulation import simulate_retirement
from .url_state import DEFAULT_INPUTS, decode_inputs, encode_inputs

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


def _run(inputs: RetirementInputs) -> SimulationResult:
    try:
        return simulate_retirement(inputs)
    except Exception as e:
        logger.exception("Simulation failed")
        raise HTTPException(status_code=400, detail=str(e))


# ============================
# FastAPI app
# ============================
configure_logging()

app = FastAPI(title=API_TITLE, description=API_DESCRIPTION, version=API_VERSION)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=CORS_CREDENTIALS,
    allow_methods=CORS_METHODS,
    allow_headers=CORS_HEADERS,
)


@app.get("/")
def root():
    return {"message": API_TITLE, "docs": "Visit /docs for API documentation"}


@app.get("/api/default_inputs", response_model=RetirementInputs)
def default_inputs() -> RetirementInputs:
    return DEFAULT_INPUTS


@app.post("/api/simulate", response_model=SimulationResult)
def simulate(inputs: RetirementInputs):
    return _run(inputs)


@app.get("/api/simulate", response_model=SimulationResult)
def simulate_shared(request: Request):
    """Simulate the scenario encoded in a shareable query string."""
    return _run(decode_inputs(request.url.query, DEFAULT_INPUTS))


@app.post("/api/share")
def share(inputs: RetirementInputs):
    return {"query": encode_inputs(inputs)}


@app.get("/api/summary")
def summary(request: Request):
    """Headline numbers for a shared scenario, formatted for display."""
    inputs = decode_inputs(request.url.query, DEFAULT_INPUTS)
    result = _run(inputs)
    final = result.rows[-1].portfolio_end if result.rows else inputs.initial_investment
    return {
        "fiTarget": format_currency(result.fi_target),
        "retirementAge": format_retirement_age(result.retirement_age),
        "yearsToRetirement": format_years_to_retirement(result.years_to_retirement),
        "finalPortfolio": format_currency(final),
        "safeWithdrawalRate": format_percent(inputs.safe_withdrawal_rate),
    }
