"""Core calculation engine for the mortgage calculator.

This module implements the two repayment policies supported by the
calculator:

* **annuity** keeps the total monthly payment constant while the split between
  interest and principal shifts over the term;
* **differentiated** repays the same principal every month, so the total
  payment declines as the outstanding balance (and its interest) shrinks.

Both algorithms are plain functions over local accumulators. They never mutate
their ``MortgageParameters`` and return a fresh ``ScheduleResult`` on every
call, so repeated calls with the same inputs give identical results.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable, Dict, List

from .data_models import InvalidParameterError, MonthlyReport, MortgageParameters, ScheduleResult
from .utils import round_cents

logger = logging.getLogger(__name__)

ScheduleFunction = Callable[[MortgageParameters], ScheduleResult]


def _calculate_annuity_payment(principal: Decimal, rate_per_month: Decimal, term: int) -> Decimal:
    """Return the annuity (equal installment) monthly payment for a loan.

    The formula is:

        payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. When the interest rate is zero, or too
    small to move ``(1 + i)^n`` away from 1 at the working precision, the
    payment simplifies to ``P / n``.
    """
    if term <= 0:
        raise InvalidParameterError("Term must be positive")
    factor = (1 + rate_per_month) ** term
    if rate_per_month == 0 or factor == 1:
        return round_cents(principal / Decimal(term))
    return round_cents(principal * (rate_per_month * factor) / (factor - 1))


def _monthly_interest(balance: Decimal, percentage_ratio: Decimal) -> Decimal:
    return round_cents(balance * percentage_ratio / Decimal(100))


def annuity_schedule(parameters: MortgageParameters) -> ScheduleResult:
    """Build an equal-installment schedule.

    The installment comes from the annuity formula on the compound monthly
    rate, while each month's interest is charged with the percentage ratio
    (annual percent / 12) on the balance left before that month. The cash-flow
    series only carries the initial disbursement.
    """
    payment = _calculate_annuity_payment(
        parameters.loan_amount, parameters.monthly_compound_rate, parameters.loan_term_months
    )
    ratio = parameters.monthly_ratio

    balance = parameters.loan_amount
    total_interest = Decimal("0")
    reports: List[MonthlyReport] = []
    for month in range(1, parameters.loan_term_months + 1):
        interest_payment = _monthly_interest(balance, ratio)
        total_interest += interest_payment
        principal_payment = payment - interest_payment
        balance -= principal_payment
        reports.append(
            MonthlyReport(
                month_index=month,
                total_payment=payment,
                interest_payment=interest_payment,
                principal_payment=round_cents(principal_payment),
                remaining_balance=round_cents(balance),
            )
        )

    logger.debug(
        "Annuity schedule: %d months, installment %s, total interest %s",
        len(reports),
        payment,
        total_interest,
    )
    return ScheduleResult(
        monthly_reports=tuple(reports),
        total_interest_dept=round_cents(total_interest),
        cash_flow_series=(round_cents(parameters.loan_amount),),
    )


def differentiated_schedule(parameters: MortgageParameters) -> ScheduleResult:
    """Build a constant-principal schedule.

    The outstanding balance of month ``m`` is recomputed from the loan amount
    as ``loan_amount - fixed_principal * (m - 1)`` instead of being carried
    over from the previous month. Every month's total payment is appended to
    the cash-flow series as a negative amount after the disbursement.
    """
    loan_amount = parameters.loan_amount
    fixed_principal = parameters.fixed_principal
    ratio = parameters.monthly_ratio

    total_interest = Decimal("0")
    reports: List[MonthlyReport] = []
    cash_flows: List[Decimal] = [round_cents(loan_amount)]
    for month in range(1, parameters.loan_term_months + 1):
        outstanding = loan_amount - fixed_principal * (month - 1)
        interest_payment = _monthly_interest(outstanding, ratio)
        total_interest += interest_payment
        total_payment = round_cents(interest_payment + fixed_principal)
        remaining = loan_amount - fixed_principal * month
        reports.append(
            MonthlyReport(
                month_index=month,
                total_payment=total_payment,
                interest_payment=interest_payment,
                principal_payment=fixed_principal,
                remaining_balance=round_cents(remaining),
            )
        )
        cash_flows.append(-total_payment)

    logger.debug(
        "Differentiated schedule: %d months, fixed principal %s, total interest %s",
        len(reports),
        fixed_principal,
        total_interest,
    )
    return ScheduleResult(
        monthly_reports=tuple(reports),
        total_interest_dept=round_cents(total_interest),
        cash_flow_series=tuple(cash_flows),
    )


SCHEDULES: Dict[str, ScheduleFunction] = {
    "annuity": annuity_schedule,
    "differentiated": differentiated_schedule,
}

MORTGAGE_TYPES: Dict[str, str] = {
    "annuity": "Annuity Payment",
    "differentiated": "Differentiated Payment",
}


def resolve_schedule(kind: str) -> str:
    """Normalize a schedule name and make sure it is supported."""
    if not isinstance(kind, str):
        raise InvalidParameterError(f"Schedule type must be a string; got {kind!r}")
    key = kind.strip().lower()
    if key not in SCHEDULES:
        choices = ", ".join(sorted(SCHEDULES))
        raise InvalidParameterError(f"Unknown schedule type {kind!r}; expected one of: {choices}")
    return key


def compute_schedule(parameters: MortgageParameters, kind: str = "annuity") -> ScheduleResult:
    """Compute the repayment schedule of ``kind`` for ``parameters``.

    Parameters
    ----------
    parameters: MortgageParameters
        Validated mortgage inputs.
    kind: str
        ``"annuity"`` or ``"differentiated"`` (case-insensitive).

    Raises
    ------
    InvalidParameterError
        If ``kind`` names no known schedule.
    """
    return SCHEDULES[resolve_schedule(kind)](parameters)
