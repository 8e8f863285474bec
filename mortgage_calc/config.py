"""Runtime configuration for the mortgage calculator.

Default mortgage inputs and the log level come from environment variables so
the CLI and the web app can share one set of defaults:

``MORTGAGE_LOAN_TERM``      loan term in months (default 240)
``MORTGAGE_LOAN_AMOUNT``    financed amount, ``k``/``m`` suffixes allowed (default 1000000)
``MORTGAGE_INTEREST_RATE``  annual interest rate in percent (default 10)
``MORTGAGE_SCHEDULE``       ``annuity`` or ``differentiated`` (default annuity)
``MORTGAGE_LOG_LEVEL``      standard logging level name (default WARNING)
``MORTGAGE_MAX_SCHEDULE_ROWS`` longest term the web API will compute (default 600)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping, Optional

from .data_models import InvalidParameterError, MortgageParameters
from .engine import resolve_schedule
from .utils import decimal_from_str, parse_amount

DEFAULT_LOAN_TERM = 240
DEFAULT_LOAN_AMOUNT = Decimal("1000000")
DEFAULT_INTEREST_RATE = Decimal("10")
DEFAULT_SCHEDULE = "annuity"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_MAX_SCHEDULE_ROWS = 600


@dataclass(frozen=True)
class MortgageSettings:
    loan_term: int = DEFAULT_LOAN_TERM
    loan_amount: Decimal = DEFAULT_LOAN_AMOUNT
    interest_rate: Decimal = DEFAULT_INTEREST_RATE
    schedule: str = DEFAULT_SCHEDULE
    log_level: str = DEFAULT_LOG_LEVEL
    max_schedule_rows: int = DEFAULT_MAX_SCHEDULE_ROWS

    def to_parameters(self) -> MortgageParameters:
        return MortgageParameters(
            loan_term_months=self.loan_term,
            loan_amount=self.loan_amount,
            annual_interest_rate_percent=self.interest_rate,
        )


def _read(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def load_settings(environ: Optional[Mapping[str, str]] = None) -> MortgageSettings:
    """Build ``MortgageSettings`` from ``environ`` (``os.environ`` by default).

    Raises
    ------
    InvalidParameterError
        If a variable is set to a value that cannot be parsed.
    """
    env = os.environ if environ is None else environ
    settings = {}

    term = _read(env, "MORTGAGE_LOAN_TERM")
    if term is not None:
        try:
            settings["loan_term"] = int(term)
        except ValueError as exc:
            raise InvalidParameterError(f"MORTGAGE_LOAN_TERM must be an integer; got {term!r}") from exc

    amount = _read(env, "MORTGAGE_LOAN_AMOUNT")
    if amount is not None:
        try:
            settings["loan_amount"] = parse_amount(amount)
        except ValueError as exc:
            raise InvalidParameterError(f"MORTGAGE_LOAN_AMOUNT is not a number: {amount!r}") from exc

    rate = _read(env, "MORTGAGE_INTEREST_RATE")
    if rate is not None:
        try:
            settings["interest_rate"] = decimal_from_str(rate.rstrip("%"))
        except ValueError as exc:
            raise InvalidParameterError(f"MORTGAGE_INTEREST_RATE is not a number: {rate!r}") from exc

    schedule = _read(env, "MORTGAGE_SCHEDULE")
    if schedule is not None:
        settings["schedule"] = resolve_schedule(schedule)

    log_level = _read(env, "MORTGAGE_LOG_LEVEL")
    if log_level is not None:
        level = log_level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise InvalidParameterError(f"MORTGAGE_LOG_LEVEL is not a logging level: {log_level!r}")
        settings["log_level"] = level

    max_rows = _read(env, "MORTGAGE_MAX_SCHEDULE_ROWS")
    if max_rows is not None:
        try:
            settings["max_schedule_rows"] = int(max_rows)
        except ValueError as exc:
            raise InvalidParameterError(f"MORTGAGE_MAX_SCHEDULE_ROWS must be an integer; got {max_rows!r}") from exc
        if settings["max_schedule_rows"] <= 0:
            raise InvalidParameterError("MORTGAGE_MAX_SCHEDULE_ROWS must be positive")

    return MortgageSettings(**settings)
