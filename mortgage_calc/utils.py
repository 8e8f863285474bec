"""Utility functions for the mortgage calculator.

This module provides the shared rounding rule used by every schedule and a few
helpers for parsing user input into ``Decimal`` values.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, getcontext

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

CENT = Decimal("0.01")


def round_cents(value: Decimal) -> Decimal:
    """Round a monetary value to two decimal places.

    Halves are rounded away from zero, so ``0.005`` becomes ``0.01`` and
    ``-0.005`` becomes ``-0.01``. Every schedule step goes through this helper
    rather than rounding only the final figures.
    """
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def decimal_from_str(value: str) -> Decimal:
    """Convert a numeric string into a ``Decimal``.

    The function strips any commas and handles both integer and float-like
    strings. It raises ``ValueError`` if conversion fails.
    """
    try:
        cleaned = str(value).replace(",", "").strip()
        result = Decimal(cleaned)
    except Exception as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc
    if not result.is_finite():
        raise ValueError(f"Invalid numeric value: {value}")
    return result


def parse_amount(value: str) -> Decimal:
    """Parse a numeric string with optional suffixes.

    Accepts plain numbers ("500000") and shorthand with ``k``/``m`` suffixes
    (e.g., "500k" meaning 500_000).
    """
    text = str(value).strip().lower().replace(",", "")
    factor = Decimal(1)
    if text.endswith("k"):
        factor = Decimal(1_000)
        text = text[:-1]
    elif text.endswith("m"):
        factor = Decimal(1_000_000)
        text = text[:-1]
    return decimal_from_str(text) * factor


def parse_months(value) -> int:
    """Parse a loan term into a whole number of months.

    Integral numbers and numeric strings ("360", "360.0") are accepted.
    Fractions and booleans raise ``ValueError`` rather than being truncated.
    """
    if isinstance(value, bool):
        raise ValueError(f"Loan term must be a whole number of months; got {value!r}")
    if isinstance(value, int):
        return value
    number = decimal_from_str(str(value))
    if number != number.to_integral_value():
        raise ValueError(f"Loan term must be a whole number of months; got {value!r}")
    return int(number)
