import pytest
from fastapi.testclient import TestClient

# We importeren de FastAPI app uit main.py
from main import CORS_ORIGINS_ENV_VAR, app, cors_origins

client = TestClient(app)


# ------------------------------------------------------------
# 1. Financiering
# ------------------------------------------------------------

def test_loan_payment_endpoint():
    response = client.post("/loan_payment", json={"principal": 100000, "annual_rate_percent": 12, "years": 5})
    assert response.status_code == 200
    assert response.json()["monthly_payment"] == pytest.approx(2224.44, abs=0.01)


def test_lease_payment_endpoint():
    response = client.post(
        "/lease_payment",
        json={"system_cost": 100000, "lease_term_years": 5, "residual_percent": 10, "money_factor": 0.003},
    )
    assert response.status_code == 200

    data = response.json()
    assert data["monthly_lease"] == 1830
    assert data["buyout_price"] == 10000
    assert data["total_cost"] == data["total_lease_payments"] + data["buyout_price"]


def test_lease_payment_rejects_invalid_residual():
    response = client.post(
        "/lease_payment",
        json={"system_cost": 100000, "lease_term_years": 5, "residual_percent": 150},
    )
    assert response.status_code == 422


def test_financing_endpoint():
    body = {
        "system_cost": 100000,
        "projections": [{"year": i, "savings": 30000} for i in range(1, 26)],
    }
    response = client.post("/financing", json=body)
    assert response.status_code == 200

    data = response.json()
    assert data["loan"]["monthly_payment"] == 1780
    assert data["loan_payback_years"] == 2.3


# ------------------------------------------------------------
# 2. Batterij
# ------------------------------------------------------------

def test_self_consumption_endpoint():
    response = client.post("/self_consumption", json={"daily_production": 10, "battery_kwh": 100})
    assert response.status_code == 200

    data = response.json()
    assert data["without"] == 0.3
    assert data["with"] == 0.85


def test_backup_endpoint():
    response = client.post("/backup", json={"battery_kwh": 10, "daily_consumption": 30})
    assert response.json() == {"hours": 3, "days": 0.1}


def test_battery_savings_endpoint():
    response = client.post(
        "/battery_savings",
        json={"annual_production": 10000, "self_consumption_increase": 0.2, "electricity_rate": 1500},
    )
    assert response.json() == {"annual": 3_000_000, "lifetime": 46_875_000}


def test_battery_recommendation_endpoint():
    assert client.post("/battery_recommendation", json={"daily_production": 25}).json() == {"capacity_kwh": 15}

    custom = client.post(
        "/battery_recommendation",
        json={"daily_production": 20, "available_capacities": [8, 12, 16]},
    )
    assert custom.json() == {"capacity_kwh": 12}


def test_battery_impact_endpoint():
    body = {
        "system_cost": 50_000_000,
        "annual_production": 7300,
        "monthly_consumption": 912.5,
        "electricity_rate": 1500,
        "projections": [{"year": i, "savings": 10_950_000} for i in range(1, 26)],
    }
    response = client.post("/battery_impact", json=body)
    assert response.status_code == 200
    assert response.json()["battery_cost"] == 160_000_000


# ------------------------------------------------------------
# 3. Projecties & evaluatie
# ------------------------------------------------------------

def test_projections_endpoint():
    response = client.post(
        "/projections",
        json={
            "annual_production": 10000,
            "electricity_rate": 1000,
            "tariff_escalation_percent": 3,
            "degradation_percent": 0.5,
            "horizon_years": 2,
        },
    )
    assert response.json()["projections"] == [
        {"year": 1, "savings": 10_000_000},
        {"year": 2, "savings": 10_248_500},
    ]


def test_evaluate_endpoint():
    response = client.post(
        "/evaluate",
        json={"projections": [{"savings": 3000}] * 3, "upfront_cost": 7500},
    )
    data = response.json()
    assert data["payback_years"] == 2.5
    assert data["total_savings"] == 9000
    assert data["roi_percent"] == pytest.approx(20)


def test_evaluate_endpoint_never_pays_back():
    response = client.post("/evaluate", json={"projections": [], "upfront_cost": 7500})
    assert response.json()["payback_years"] is None


# ------------------------------------------------------------
# 4. Scenario's & voorstel
# ------------------------------------------------------------

def test_scenario_endpoint_preset():
    body = {"annual_production": 10000, "electricity_rate": 1000, "system_cost": 100_000_000, "preset": "optimistic"}
    data = client.post("/scenario", json=body).json()

    assert data["scenario"]["annual_savings"] == 11_000_000
    assert data["changes"]["annual_savings_percent"] == pytest.approx(10)


def test_scenario_endpoint_unknown_preset():
    body = {"annual_production": 10000, "electricity_rate": 1000, "system_cost": 1, "preset": "magisch"}
    assert client.post("/scenario", json=body).json() == {"error": "UNKNOWN_PRESET"}


def test_compute_proposal_endpoint():
    body = {
        "annual_production": 7300,
        "electricity_rate": 1500,
        "system_cost": 50_000_000,
        "include_battery": True,
        "monthly_consumption": 912.5,
    }
    response = client.post("/compute_proposal", json=body)
    assert response.status_code == 200

    data = response.json()
    assert "projections" in data
    assert "evaluation" in data
    assert "financing" in data
    assert data["battery"]["backup_hours"] == 3


def test_compute_proposal_empty_production():
    body = {"annual_production": 0, "electricity_rate": 1500, "system_cost": 1}
    assert client.post("/compute_proposal", json=body).json() == {"error": "PRODUCTION_EMPTY"}


def test_settings_endpoint():
    data = client.get("/settings").json()
    assert data["core"]["system_lifetime_years"] == 25
    assert data["financing"]["loan_term_options"] == [3, 5, 7, 10]


# ------------------------------------------------------------
# CORS
# ------------------------------------------------------------

def _preflight(origin):
    return client.options(
        "/loan_payment",
        headers={"Origin": origin, "Access-Control-Request-Method": "POST"},
    )


def test_cors_allows_configured_origin():
    response = _preflight("http://localhost:5173")
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
    assert response.headers["access-control-allow-credentials"] == "true"


def test_cors_rejects_other_origin():
    response = _preflight("https://evil.example")
    assert "access-control-allow-origin" not in response.headers


def test_cors_origins_from_env(monkeypatch):
    monkeypatch.setenv(CORS_ORIGINS_ENV_VAR, "https://a.example, https://b.example,*,")
    assert cors_origins() == ["https://a.example", "https://b.example"]


def test_loan_payment_endpoint_extreme_rate():
    response = client.post("/loan_payment", json={"principal": 100000, "annual_rate_percent": 1000, "years": 100})
    assert response.status_code == 200
    assert response.json()["monthly_payment"] == pytest.approx(100000 / 1200)
