import logging
import os

from flask import Flask, jsonify, request

from mortgage_calc.config import load_settings
from mortgage_calc.data_models import InvalidParameterError, MortgageParameters
from mortgage_calc.mortgage import Mortgage
from mortgage_calc.utils import decimal_from_str, parse_amount, parse_months

logger = logging.getLogger(__name__)

app = Flask(__name__)


def _is_blank(value) -> bool:
    return value is None or value == ""


def _payload_to_parameters(payload, settings) -> MortgageParameters:
    principal = payload.get("loan_amount")
    rate = payload.get("interest_rate")
    term = payload.get("loan_term")
    try:
        amount = settings.loan_amount if _is_blank(principal) else parse_amount(str(principal))
        interest = settings.interest_rate if _is_blank(rate) else decimal_from_str(str(rate).rstrip("%"))
        months = settings.loan_term if _is_blank(term) else parse_months(term)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(str(exc)) from exc
    if months > settings.max_schedule_rows:
        raise InvalidParameterError(f"Loan term is limited to {settings.max_schedule_rows} months")
    return MortgageParameters(
        loan_term_months=months,
        loan_amount=amount,
        annual_interest_rate_percent=interest,
    )


def _request_payload():
    """Accept either a JSON body or form fields."""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form


def _serialize_schedule(mortgage: Mortgage):
    return [entry.as_dict() for entry in mortgage.show_repayment_schedule()]


@app.errorhandler(InvalidParameterError)
def invalid_parameter(exc):
    logger.info("Rejected mortgage request: %s", exc)
    return jsonify({"error": str(exc)}), 400


@app.get("/api/health")
def health():
    return jsonify({"status": "ok"})


@app.post("/api/schedule")
def schedule():
    payload = _request_payload()
    settings = load_settings()
    parameters = _payload_to_parameters(payload, settings)
    kind = payload.get("schedule")
    if _is_blank(kind):
        kind = settings.schedule
    mortgage = Mortgage(parameters, kind)
    return jsonify({"summary": mortgage.summary(), "schedule": _serialize_schedule(mortgage)})


@app.post("/api/compare")
def compare():
    parameters = _payload_to_parameters(_request_payload(), load_settings())
    summaries = {
        kind: Mortgage(parameters, kind).summary()
        for kind in ("annuity", "differentiated")
    }
    return jsonify(summaries)


if __name__ == "__main__":
    print("Starting Mortgage Calculator API...")
    app.run(debug=os.environ.get("FLASK_DEBUG") == "1")
