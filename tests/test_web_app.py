# tests/test_web_app.py
import pytest

from mortgage_calc_web.app import app

ONE_YEAR = {"loan_amount": "120000", "interest_rate": "12", "loan_term": 12}


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok"}


def test_schedule_endpoint_json(client):
    resp = client.post("/api/schedule", json={**ONE_YEAR, "schedule": "differentiated"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["summary"]["mortgage_type"] == "Differentiated Payment"
    assert data["summary"]["total_interest"] == 7800.0
    assert len(data["schedule"]) == 12
    assert data["schedule"][-1]["balance"] == 0.0


def test_schedule_endpoint_form_defaults_to_annuity(client):
    resp = client.post("/api/schedule", data={"loan_amount": "120k", "interest_rate": "12", "loan_term": "12"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["summary"]["mortgage_type"] == "Annuity Payment"
    assert {row["payment"] for row in data["schedule"]} == {10661.85}


def test_compare_endpoint(client):
    resp = client.post("/api/compare", json=ONE_YEAR)
    assert resp.status_code == 200
    data = resp.get_json()
    assert set(data) == {"annuity", "differentiated"}
    assert data["differentiated"]["total_cost"] == 127800.0


@pytest.mark.parametrize(
    "payload,message",
    [
        ({**ONE_YEAR, "loan_amount": "0"}, "Loan amount must be positive"),
        ({**ONE_YEAR, "loan_term": 0}, "Loan term must be positive"),
        ({**ONE_YEAR, "loan_term": "twelve"}, "twelve"),
        ({**ONE_YEAR, "loan_term": 6000}, "limited to 600 months"),
        ({**ONE_YEAR, "schedule": "balloon"}, "Unknown schedule type"),
    ],
)
def test_invalid_requests_return_400(client, payload, message):
    resp = client.post("/api/schedule", json=payload)
    assert resp.status_code == 400
    assert message in resp.get_json()["error"]


@pytest.mark.parametrize("kind", [123, ["annuity"], {"name": "annuity"}])
def test_non_string_schedule_returns_400(client, kind):
    resp = client.post("/api/schedule", json={**ONE_YEAR, "schedule": kind})
    assert resp.status_code == 400
    assert "must be a string" in resp.get_json()["error"]


@pytest.mark.parametrize("term", [12.7, "12.5", True])
def test_fractional_or_boolean_term_is_rejected(client, term):
    resp = client.post("/api/schedule", json={**ONE_YEAR, "loan_term": term})
    assert resp.status_code == 400
    assert "whole number of months" in resp.get_json()["error"]


def test_integral_float_term_is_accepted(client):
    resp = client.post("/api/schedule", json={**ONE_YEAR, "loan_term": 12.0})
    assert resp.status_code == 200
    assert resp.get_json()["summary"]["term_months"] == 12


def test_row_limit_comes_from_settings(client, monkeypatch):
    monkeypatch.setenv("MORTGAGE_MAX_SCHEDULE_ROWS", "6")
    resp = client.post("/api/compare", json=ONE_YEAR)
    assert resp.status_code == 400
    assert "limited to 6 months" in resp.get_json()["error"]


def test_malformed_row_limit_returns_400(client, monkeypatch):
    monkeypatch.setenv("MORTGAGE_MAX_SCHEDULE_ROWS", "lots")
    resp = client.post("/api/schedule", json=ONE_YEAR)
    assert resp.status_code == 400
    assert "MORTGAGE_MAX_SCHEDULE_ROWS" in resp.get_json()["error"]
