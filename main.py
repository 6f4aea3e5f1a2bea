# ============================================================
# Solar Engine — Backend API
# COMPLETE MAIN.PY (financiering + batterij + projecties + voorstel)
# ============================================================

import logging
import os
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Engine imports
from solar_engine.battery import (
    calculate_backup_capability,
    calculate_battery_savings,
    calculate_self_consumption,
    get_recommended_battery_capacity,
)
from solar_engine.battery_engine import BatteryEngine, BatteryImpactInput
from solar_engine.engine import ProposalEngine, ProposalInput
from solar_engine.financing import FinancingEngine, FinancingInput
from solar_engine.loan import calculate_lease_payment, calculate_loan_payment
from solar_engine.projections import generate_projections
from solar_engine.roi_engine import ROIEngine
from solar_engine.scenario_runner import ScenarioBaseInput, ScenarioRunner
from solar_engine.settings import load_settings
from solar_engine.types import ScenarioParams


logger = logging.getLogger(__name__)


# ============================================================
# FASTAPI INIT
# ============================================================

CORS_ORIGINS_ENV_VAR = "SOLAR_ENGINE_CORS_ORIGINS"
DEFAULT_CORS_ORIGINS = "http://localhost:5173"


def cors_origins() -> List[str]:
    # kommagescheiden lijst; met credentials mag "*" niet
    raw = os.environ.get(CORS_ORIGINS_ENV_VAR, DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip() and origin.strip() != "*"]


app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# Eén keer laden bij start (SOLAR_ENGINE_SETTINGS mag ontbreken)
settings = load_settings()


class SavingsItem(BaseModel):
    year: Optional[int] = None
    savings: float


# ============================================================
# FINANCIERING — lening & lease
# ============================================================

class LoanRequest(BaseModel):
    principal: float
    annual_rate_percent: float
    years: float


@app.post("/loan_payment")
def loan_payment(req: LoanRequest):
    return {
        "monthly_payment": calculate_loan_payment(req.principal, req.annual_rate_percent, req.years)
    }


class LeaseRequest(BaseModel):
    system_cost: float
    lease_term_years: float
    residual_percent: float = Field(default=settings.financing.lease_residual_value, ge=0, le=100)
    money_factor: float = Field(default=settings.financing.lease_money_factor, ge=0)


@app.post("/lease_payment")
def lease_payment(req: LeaseRequest):
    quote = calculate_lease_payment(
        req.system_cost,
        req.lease_term_years,
        req.residual_percent,
        req.money_factor,
    )
    return quote.to_dict()


class FinancingRequest(BaseModel):
    system_cost: float
    projections: list[SavingsItem]
    down_payment_percent: Optional[float] = None
    loan_term_years: Optional[float] = None
    interest_rate: Optional[float] = None
    lease_term_years: Optional[float] = None


@app.post("/financing")
def financing(req: FinancingRequest):
    result = FinancingEngine.compute(
        FinancingInput(
            system_cost=req.system_cost,
            projections=[p.model_dump() for p in req.projections],
            down_payment_percent=req.down_payment_percent,
            loan_term_years=req.loan_term_years,
            interest_rate=req.interest_rate,
            lease_term_years=req.lease_term_years,
        ),
        settings,
    )
    return result.to_dict()


# ============================================================
# BATTERIJ — zelfconsumptie, backup, besparing, advies
# ============================================================

class SelfConsumptionRequest(BaseModel):
    daily_production: float
    battery_kwh: float = Field(ge=0)
    round_trip_efficiency: float = Field(default=settings.battery.round_trip_efficiency, ge=0, le=1)
    base_consumption: float = Field(default=settings.battery.self_consumption_base, ge=0, le=1)
    max_consumption: float = Field(default=settings.battery.self_consumption_max, ge=0, le=1)


@app.post("/self_consumption")
def self_consumption(req: SelfConsumptionRequest):
    result = calculate_self_consumption(
        req.daily_production,
        req.battery_kwh,
        req.round_trip_efficiency,
        req.base_consumption,
        req.max_consumption,
    )
    return result.to_dict()


class BackupRequest(BaseModel):
    battery_kwh: float = Field(ge=0)
    round_trip_efficiency: float = Field(default=settings.battery.round_trip_efficiency, ge=0, le=1)
    daily_consumption: float
    active_hours: float = settings.battery.active_hours


@app.post("/backup")
def backup(req: BackupRequest):
    result = calculate_backup_capability(
        req.battery_kwh,
        req.round_trip_efficiency,
        req.daily_consumption,
        req.active_hours,
    )
    return result.to_dict()


class BatterySavingsRequest(BaseModel):
    annual_production: float
    self_consumption_increase: float
    electricity_rate: float
    degradation_percent_per_year: float = settings.battery.degradation_rate
    lifetime_years: float = settings.core.system_lifetime_years


@app.post("/battery_savings")
def battery_savings(req: BatterySavingsRequest):
    result = calculate_battery_savings(
        req.annual_production,
        req.self_consumption_increase,
        req.electricity_rate,
        req.degradation_percent_per_year,
        req.lifetime_years,
    )
    return result.to_dict()


class RecommendationRequest(BaseModel):
    daily_production: float
    recommended_ratio: float = settings.battery.recommended_ratio
    available_capacities: Optional[list[float]] = None


@app.post("/battery_recommendation")
def battery_recommendation(req: RecommendationRequest):
    capacities = req.available_capacities
    if capacities is None:
        capacities = list(settings.battery.capacities)

    return {
        "capacity_kwh": get_recommended_battery_capacity(
            req.daily_production,
            req.recommended_ratio,
            capacities,
        )
    }


class BatteryImpactRequest(BaseModel):
    system_cost: float
    annual_production: float
    monthly_consumption: float
    electricity_rate: float
    projections: list[SavingsItem]
    capacity_kwh: float = Field(default=10.0, ge=0)
    price_per_kwh: Optional[float] = None
    base_payback_years: Optional[float] = None


@app.post("/battery_impact")
def battery_impact(req: BatteryImpactRequest):
    result = BatteryEngine.compute(
        BatteryImpactInput(
            system_cost=req.system_cost,
            annual_production=req.annual_production,
            monthly_consumption=req.monthly_consumption,
            electricity_rate=req.electricity_rate,
            projections=[p.model_dump() for p in req.projections],
            capacity_kwh=req.capacity_kwh,
            price_per_kwh=req.price_per_kwh,
            base_payback_years=req.base_payback_years,
        ),
        settings,
    )
    return result.to_dict()


# ============================================================
# PROJECTIES & EVALUATIE
# ============================================================

class ProjectionRequest(BaseModel):
    annual_production: float
    electricity_rate: float
    tariff_escalation_percent: float = settings.core.default_tariff_escalation
    degradation_percent: float = settings.core.panel_degradation_rate
    horizon_years: int = settings.core.system_lifetime_years


@app.post("/projections")
def projections(req: ProjectionRequest):
    series = generate_projections(
        req.annual_production,
        req.electricity_rate,
        req.tariff_escalation_percent,
        req.degradation_percent,
        req.horizon_years,
    )
    return {"projections": [p.to_dict() for p in series]}


class EvaluateRequest(BaseModel):
    projections: list[SavingsItem]
    upfront_cost: float


@app.post("/evaluate")
def evaluate(req: EvaluateRequest):
    result = ROIEngine.evaluate(
        [p.model_dump() for p in req.projections],
        req.upfront_cost,
    )
    return result.to_dict()


# ============================================================
# SCENARIO'S
# ============================================================

class ScenarioRequest(BaseModel):
    annual_production: float
    electricity_rate: float
    system_cost: float
    tariff_escalation: Optional[float] = None

    # Of een preset, of eigen parameters
    preset: Optional[str] = None
    electricity_rate_change: float = 0.0
    consumption_change: float = 0.0
    system_degradation: float = settings.scenarios.default_degradation


@app.post("/scenario")
def scenario(req: ScenarioRequest):
    runner = ScenarioRunner(
        ScenarioBaseInput(
            annual_production=req.annual_production,
            electricity_rate=req.electricity_rate,
            system_cost=req.system_cost,
            tariff_escalation=req.tariff_escalation,
        ),
        settings,
    )

    if req.preset is not None:
        if settings.scenarios.preset(req.preset) is None:
            logger.warning("Onbekend scenario-preset: %s", req.preset)
            return {"error": "UNKNOWN_PRESET"}
        return runner.run_preset(req.preset).to_dict()

    params = ScenarioParams(
        electricity_rate_change=req.electricity_rate_change,
        consumption_change=req.consumption_change,
        system_degradation=req.system_degradation,
    )
    return runner.run(params).to_dict()


# ============================================================
# COMPUTE_PROPOSAL ENDPOINT
# ============================================================

class ProposalRequest(BaseModel):
    annual_production: float
    electricity_rate: float
    system_cost: float

    tariff_escalation: Optional[float] = None
    degradation: Optional[float] = None
    horizon_years: Optional[int] = None

    # FINANCIERING
    down_payment_percent: Optional[float] = None
    loan_term_years: Optional[float] = None
    interest_rate: Optional[float] = None
    lease_term_years: Optional[float] = None

    # BATTERIJ
    include_battery: bool = False
    monthly_consumption: float = 0.0
    battery_capacity_kwh: Optional[float] = None
    battery_price_per_kwh: Optional[float] = None


@app.post("/compute_proposal")
def compute_proposal(req: ProposalRequest):
    result = ProposalEngine.compute(ProposalInput(**req.model_dump()), settings)

    if "error" in result:
        logger.info("Voorstel afgewezen: %s", result["error"])

    return result


@app.get("/settings")
def get_settings():
    return settings.to_dict()
