"""Output helpers for the mortgage calculator.

This module provides simple functions to render repayment schedules and
summaries in a tabular text format. Output goes through ``click.echo`` so the
CLI can be exercised with click's test runner.
"""

from __future__ import annotations

from typing import Dict, Iterable

import click

from .data_models import MonthlyReport


def print_summary(summary: Dict[str, object]) -> None:
    """Print a summary of mortgage metrics in a human-readable format."""
    click.echo("Summary")
    click.echo("-" * 72)
    click.echo(f"Mortgage type      : {summary['mortgage_type']}")
    click.echo(f"Loan amount        : {summary['loan_amount']:.2f}")
    click.echo(f"Interest rate      : {summary['interest_rate']:.2f}%")
    click.echo(f"Term               : {summary['term_months']} months")
    click.echo(f"Total interest     : {summary['total_interest']:.2f}")
    click.echo(f"Total cost         : {summary['total_cost']:.2f}")
    click.echo(f"Effective rate     : {summary['effective_rate']}%")
    # For annuity loans this equals the constant installment; for
    # differentiated loans it is the first payment.
    click.echo(f"Highest payment    : {summary['max_payment']:.2f}")
    click.echo("-" * 72)


def print_schedule(schedule: Iterable[MonthlyReport]) -> None:
    """Print the repayment schedule as a simple table."""
    headers = ["Month", "Payment", "Interest", "Principal", "Balance"]
    click.echo("\t".join(headers))
    for entry in schedule:
        row = [
            str(entry.month_index),
            f"{entry.total_payment:.2f}",
            f"{entry.interest_payment:.2f}",
            f"{entry.principal_payment:.2f}",
            f"{entry.remaining_balance:.2f}",
        ]
        click.echo("\t".join(row))


def print_comparison(s1: Dict[str, object], s2: Dict[str, object]) -> None:
    """Print a comparison of two mortgage summaries side by side.

    The difference column is ``scenario2 - scenario1``; a negative difference
    means the second scenario is cheaper.
    """
    click.echo("Comparison")
    click.echo("=" * 72)
    keys = [
        "total_cost",
        "total_interest",
        "max_payment",
        "effective_rate",
    ]
    click.echo(f"{'Metric':20s} {s1['mortgage_type']:>15.15s} {s2['mortgage_type']:>15.15s} {'Difference':>15s}")
    for key in keys:
        v1 = s1.get(key)
        v2 = s2.get(key)
        diff = v2 - v1
        click.echo(f"{key:20s} {v1:15.2f} {v2:15.2f} {diff:15.2f}")
    click.echo("=" * 72)
