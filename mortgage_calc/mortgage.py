"""High-level mortgage object.

``Mortgage`` pairs one schedule algorithm with an effective-rate calculator and
answers the questions a user asks about a loan: what is paid each month, how
much interest is owed in total, what the loan costs overall and what its
effective annual rate is.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

from .config import MortgageSettings
from .data_models import MonthlyReport, MortgageParameters, ScheduleResult
from .effective_rate import EffectiveRateCalculator
from .engine import MORTGAGE_TYPES, compute_schedule, resolve_schedule
from .utils import round_cents


class Mortgage:
    """A mortgage whose schedule is computed once, at construction."""

    def __init__(
        self,
        parameters: MortgageParameters,
        schedule: str = "annuity",
        effective_rate: Optional[EffectiveRateCalculator] = None,
    ) -> None:
        self.parameters = parameters
        self.schedule_kind = resolve_schedule(schedule)
        self.result: ScheduleResult = compute_schedule(parameters, self.schedule_kind)
        self._effective_rate = effective_rate or EffectiveRateCalculator()

    @classmethod
    def from_settings(cls, settings: MortgageSettings, schedule: Optional[str] = None) -> "Mortgage":
        return cls(settings.to_parameters(), schedule or settings.schedule)

    @property
    def loan_amount(self) -> Decimal:
        return self.parameters.loan_amount

    def show_repayment_schedule(self) -> List[MonthlyReport]:
        return list(self.result.monthly_reports)

    def percent_amount(self) -> Decimal:
        """Total interest paid over the whole term."""
        return self.result.total_interest_dept

    def total_amount(self) -> Decimal:
        """Loan amount plus all interest."""
        return round_cents(self.loan_amount + self.result.total_interest_dept)

    def effective_rate(self) -> int:
        return self._effective_rate.compute(self.result.cash_flow_series)

    def mortgage_type(self) -> str:
        return MORTGAGE_TYPES[self.schedule_kind]

    def summary(self) -> Dict[str, Any]:
        reports = self.result.monthly_reports
        return {
            "mortgage_type": self.mortgage_type(),
            "loan_amount": float(self.loan_amount),
            "interest_rate": float(self.parameters.annual_interest_rate_percent),
            "term_months": self.parameters.loan_term_months,
            "total_interest": float(self.percent_amount()),
            "total_cost": float(self.total_amount()),
            "effective_rate": self.effective_rate(),
            "first_payment": float(reports[0].total_payment),
            "last_payment": float(reports[-1].total_payment),
            "max_payment": float(max(r.total_payment for r in reports)),
        }
