"""Command-line interface for the mortgage calculator.

This module uses the ``click`` library to implement a multi-command interface.
Users can compute full repayment schedules, view summaries or compare the
annuity and differentiated policies for the same loan. Results can be printed
to the terminal or exported to JSON/CSV files. Options left out on the command
line fall back to the ``MORTGAGE_*`` environment settings.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from .config import MortgageSettings, load_settings
from .data_models import InvalidParameterError, MonthlyReport, MortgageParameters
from .engine import SCHEDULES
from .formatter import print_comparison, print_schedule, print_summary
from .mortgage import Mortgage
from .utils import decimal_from_str, parse_amount

MAX_PRINTED_ROWS = 120


def build_parameters_from_options(
    settings: MortgageSettings,
    principal: Optional[str],
    rate: Optional[str],
    term: Optional[int],
) -> MortgageParameters:
    """Merge command-line options over ``settings`` into ``MortgageParameters``."""
    try:
        amount = parse_amount(principal) if principal is not None else settings.loan_amount
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--principal")
    try:
        interest = decimal_from_str(rate.strip().rstrip("%")) if rate is not None else settings.interest_rate
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--rate")
    try:
        return MortgageParameters(
            loan_term_months=term if term is not None else settings.loan_term,
            loan_amount=amount,
            annual_interest_rate_percent=interest,
        )
    except InvalidParameterError as exc:
        raise click.BadParameter(str(exc))


def build_mortgage(parameters: MortgageParameters, loan_type: str) -> Mortgage:
    try:
        return Mortgage(parameters, loan_type)
    except InvalidParameterError as exc:
        raise click.ClickException(str(exc))


def export_to_json(path: Path, schedule: List[MonthlyReport], summary: Dict[str, Any]) -> None:
    """Export schedule and summary to a JSON file."""
    data = {"summary": summary, "schedule": [e.as_dict() for e in schedule]}
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, schedule: List[MonthlyReport]) -> None:
    """Export schedule to a CSV file."""
    header = ["Month", "Payment", "Interest", "Principal", "Balance"]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for e in schedule:
            writer.writerow(
                [
                    e.month_index,
                    f"{e.total_payment:.2f}",
                    f"{e.interest_payment:.2f}",
                    f"{e.principal_payment:.2f}",
                    f"{e.remaining_balance:.2f}",
                ]
            )


def loan_options(func):
    """Attach the loan options shared by every command."""
    options = [
        click.option("--principal", "-p", "principal", help="Loan amount (500k, 1.2m, 250,000)"),
        click.option("--rate", "-r", "rate", help="Annual interest rate (percent)"),
        click.option("--term", "-t", "term", type=int, help="Loan term in months"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option("--log-level", "log_level", help="Logging level (DEBUG, INFO, WARNING, ...)")
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]) -> None:
    """A command-line mortgage calculator for annuity and differentiated loans."""
    try:
        settings = load_settings()
    except InvalidParameterError as exc:
        raise click.ClickException(str(exc))
    level = (log_level or settings.log_level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = settings


@cli.command()
@loan_options
@click.option("--type", "loan_type", type=click.Choice(sorted(SCHEDULES)), help="Repayment policy")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
@click.pass_obj
def schedule(
    settings: MortgageSettings,
    principal: Optional[str],
    rate: Optional[str],
    term: Optional[int],
    loan_type: Optional[str],
    output: Optional[str],
) -> None:
    """Compute and print the full repayment schedule."""
    parameters = build_parameters_from_options(settings, principal, rate, term)
    mortgage = build_mortgage(parameters, loan_type or settings.schedule)
    entries = mortgage.show_repayment_schedule()
    summary_data = mortgage.summary()
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, entries, summary_data)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, entries)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv", param_hint="--output")
        click.echo(f"Schedule exported to {path}")
        return

    print_summary(summary_data)
    # Limit schedule length printed to avoid flooding the terminal
    if len(entries) > MAX_PRINTED_ROWS:
        click.echo(f"Schedule has {len(entries)} rows; showing first {MAX_PRINTED_ROWS} rows.")
        entries = entries[:MAX_PRINTED_ROWS]
    print_schedule(entries)


@cli.command()
@loan_options
@click.option("--type", "loan_type", type=click.Choice(sorted(SCHEDULES)), help="Repayment policy")
@click.option("--output", "output", type=str, help="Output file path (.json)")
@click.pass_obj
def summary(
    settings: MortgageSettings,
    principal: Optional[str],
    rate: Optional[str],
    term: Optional[int],
    loan_type: Optional[str],
    output: Optional[str],
) -> None:
    """Compute and print only the summary metrics for a loan."""
    parameters = build_parameters_from_options(settings, principal, rate, term)
    summary_data = build_mortgage(parameters, loan_type or settings.schedule).summary()
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension", param_hint="--output")
        with path.open("w", encoding="utf-8") as f:
            json.dump({"summary": summary_data}, f, indent=2)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(summary_data)


@cli.command()
@loan_options
@click.pass_obj
def compare(
    settings: MortgageSettings,
    principal: Optional[str],
    rate: Optional[str],
    term: Optional[int],
) -> None:
    """Compare the annuity and differentiated schedules of the same loan."""
    parameters = build_parameters_from_options(settings, principal, rate, term)
    annuity = build_mortgage(parameters, "annuity").summary()
    differentiated = build_mortgage(parameters, "differentiated").summary()
    print_comparison(annuity, differentiated)


if __name__ == "__main__":
    cli()
