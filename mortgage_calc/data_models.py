"""Data models for the mortgage calculator.

This module defines the immutable dataclasses passed between the schedule
algorithms and their consumers: the mortgage parameters, the per-month report
and the result of one schedule run. Frozen dataclasses make it easy to
construct, compare and serialize these structures without worrying about an
algorithm changing them behind the caller's back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterator, Tuple

from .utils import round_cents


class InvalidParameterError(ValueError):
    """Raised when mortgage inputs cannot produce a schedule."""


def _to_decimal(name: str, value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidParameterError(f"{name} must be numeric; got {value!r}")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidParameterError(f"{name} must be numeric; got {value!r}") from exc


@dataclass(frozen=True)
class MortgageParameters:
    """Inputs of a fixed-rate, fixed-term mortgage.

    Attributes
    ----------
    loan_term_months: int
        Number of monthly payments. Must be positive.
    loan_amount: Decimal
        The financed principal. Must be positive.
    annual_interest_rate_percent: Decimal
        Nominal annual interest rate in percent (``12`` means 12 %). Must not
        be negative; zero is a valid interest-free loan.
    """

    loan_term_months: int
    loan_amount: Decimal
    annual_interest_rate_percent: Decimal

    def __post_init__(self) -> None:
        term = self.loan_term_months
        if isinstance(term, bool) or not isinstance(term, int):
            raise InvalidParameterError(f"Loan term must be a whole number of months; got {term!r}")
        if term <= 0:
            raise InvalidParameterError("Loan term must be positive")

        amount = _to_decimal("Loan amount", self.loan_amount)
        rate = _to_decimal("Interest rate", self.annual_interest_rate_percent)
        if not amount.is_finite() or amount <= 0:
            raise InvalidParameterError("Loan amount must be positive")
        if not rate.is_finite() or rate < 0:
            raise InvalidParameterError("Interest rate must not be negative")

        # frozen dataclass: bypass __setattr__ to store the coerced values
        object.__setattr__(self, "loan_amount", amount)
        object.__setattr__(self, "annual_interest_rate_percent", rate)

    @property
    def monthly_ratio(self) -> Decimal:
        """Monthly interest as a percentage ratio (annual percent / 12)."""
        return self.annual_interest_rate_percent / Decimal(12)

    @property
    def monthly_compound_rate(self) -> Decimal:
        """Monthly interest as a fraction, used by the annuity formula."""
        return (self.annual_interest_rate_percent / Decimal(100)) / Decimal(12)

    @property
    def fixed_principal(self) -> Decimal:
        """Principal repaid each month under the differentiated policy."""
        return round_cents(self.loan_amount / Decimal(self.loan_term_months))


@dataclass(frozen=True)
class MonthlyReport:
    """Breakdown of a single month of the schedule.

    ``month_index`` starts at 1. ``remaining_balance`` is the principal still
    outstanding after this month's payment.
    """

    month_index: int
    total_payment: Decimal
    interest_payment: Decimal
    principal_payment: Decimal
    remaining_balance: Decimal

    def as_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month_index,
            "payment": float(self.total_payment),
            "interest": float(self.interest_payment),
            "principal": float(self.principal_payment),
            "balance": float(self.remaining_balance),
        }


@dataclass(frozen=True)
class ScheduleResult:
    """Outcome of one schedule computation.

    Attributes
    ----------
    monthly_reports: tuple of MonthlyReport
        One report per month, in order.
    total_interest_dept: Decimal
        Sum of every month's interest payment, rounded to cents.
    cash_flow_series: tuple of Decimal
        Month 0 holds the disbursement (``+loan_amount``). The differentiated
        schedule follows it with ``-total_payment`` for each month; the annuity
        schedule carries the disbursement only.
    """

    monthly_reports: Tuple[MonthlyReport, ...]
    total_interest_dept: Decimal
    cash_flow_series: Tuple[Decimal, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.monthly_reports)

    def __iter__(self) -> Iterator[MonthlyReport]:
        return iter(self.monthly_reports)

    @property
    def total_principal(self) -> Decimal:
        return sum((r.principal_payment for r in self.monthly_reports), Decimal("0"))

    @property
    def final_balance(self) -> Decimal:
        if not self.monthly_reports:
            return Decimal("0")
        return self.monthly_reports[-1].remaining_balance
