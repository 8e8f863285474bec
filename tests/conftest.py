# tests/conftest.py
from __future__ import annotations

from decimal import Decimal

import pytest

from mortgage_calc.data_models import MortgageParameters

MORTGAGE_ENV_VARS = (
    "MORTGAGE_LOAN_TERM",
    "MORTGAGE_LOAN_AMOUNT",
    "MORTGAGE_INTEREST_RATE",
    "MORTGAGE_SCHEDULE",
    "MORTGAGE_LOG_LEVEL",
    "MORTGAGE_MAX_SCHEDULE_ROWS",
)


# -------- Isolate tests from the caller's MORTGAGE_* environment --------
@pytest.fixture(autouse=True)
def _clean_mortgage_env(monkeypatch):
    for name in MORTGAGE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def one_year_loan():
    """120 000 over 12 months at 12 % a year: exactly 1 % per month."""
    return MortgageParameters(
        loan_term_months=12,
        loan_amount=Decimal("120000"),
        annual_interest_rate_percent=Decimal("12"),
    )


@pytest.fixture
def make_parameters():
    def _factory(term=12, amount="120000", rate="12"):
        return MortgageParameters(
            loan_term_months=term,
            loan_amount=Decimal(amount),
            annual_interest_rate_percent=Decimal(rate),
        )

    return _factory
