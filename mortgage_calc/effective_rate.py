"""Effective annual rate of a mortgage from its cash-flow series.

The series is read as equally spaced monthly flows starting at month 0: the
disbursement first, then the borrower's payments as negative amounts. The
monthly internal rate of return is found with Newton-Raphson, falling back to
bisection when Newton does not converge, and then compounded over twelve
months.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional, Union

logger = logging.getLogger(__name__)

CashFlow = Union[Decimal, float, int]


class EffectiveRateCalculator:
    """Turns a cash-flow series into a whole-percent effective annual rate."""

    def __init__(self, *, max_iter: int = 100, tol: float = 1e-10) -> None:
        self.max_iter = max_iter
        self.tol = tol

    def compute(self, cash_flows: Iterable[CashFlow]) -> int:
        """Return the effective annual rate in whole percent.

        Returns 0 when the rate is undefined: fewer than two flows, no sign
        change, or no root found.
        """
        amounts = [float(a) for a in cash_flows]
        monthly = self.monthly_irr(amounts)
        if monthly is None:
            logger.warning("Effective rate undefined for a series of %d cash flows", len(amounts))
            return 0
        annual = ((1.0 + monthly) ** 12 - 1.0) * 100.0
        return int(Decimal(repr(annual)).quantize(Decimal(1), rounding=ROUND_HALF_UP))

    def monthly_irr(self, amounts: List[float]) -> Optional[float]:
        if len(amounts) < 2:
            return None
        # Must have sign change to have a real IRR
        if not (any(a > 0 for a in amounts) and any(a < 0 for a in amounts)):
            return None

        def npv(rate: float) -> float:
            return sum(a / (1.0 + rate) ** t for t, a in enumerate(amounts))

        def dnpv(rate: float) -> float:
            return sum(-t * a / (1.0 + rate) ** (t + 1) for t, a in enumerate(amounts) if t)

        r = 0.01
        for _ in range(self.max_iter):
            df = dnpv(r)
            if abs(df) < 1e-12:
                break
            new_r = r - npv(r) / df
            if new_r <= -1.0:
                break
            if abs(new_r - r) < self.tol:
                return new_r
            r = new_r

        return self._bisect(npv)

    def _bisect(self, npv) -> Optional[float]:
        lo, hi = -0.99, 1.0
        for _ in range(8):  # try a few expansions to find a sign change
            f_lo, f_hi = npv(lo), npv(hi)
            if f_lo == 0.0:
                return lo
            if f_hi == 0.0:
                return hi
            if f_lo * f_hi < 0.0:
                break
            hi *= 2.0
        else:
            return None

        for _ in range(200):
            mid = (lo + hi) / 2.0
            val = npv(mid)
            if abs(val) < self.tol or (hi - lo) < self.tol:
                return mid
            if (val > 0.0) == (f_lo > 0.0):
                lo = mid
            else:
                hi = mid
        return None
