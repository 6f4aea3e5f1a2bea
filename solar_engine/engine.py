# solar_engine/engine.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .battery_engine import BatteryEngine, BatteryImpactInput
from .financing import FinancingEngine, FinancingInput
from .projections import generate_projections
from .roi_engine import ROIEngine
from .settings import DEFAULT_SETTINGS, SolarSettings


@dataclass(frozen=True)
class ProposalInput:
    """Structuur die 1-op-1 lijkt op de /compute_proposal request body."""
    annual_production: float            # kWh/jaar
    electricity_rate: float             # valuta/kWh
    system_cost: float

    tariff_escalation: Optional[float] = None
    degradation: Optional[float] = None
    horizon_years: Optional[int] = None

    # Financiering
    down_payment_percent: Optional[float] = None
    loan_term_years: Optional[float] = None
    interest_rate: Optional[float] = None
    lease_term_years: Optional[float] = None

    # Batterij (optioneel)
    include_battery: bool = False
    monthly_consumption: float = 0.0
    battery_capacity_kwh: Optional[float] = None
    battery_price_per_kwh: Optional[float] = None


class ProposalEngine:
    """
    Publieke interface van de engine.
    Wordt aangeroepen door FastAPI in main.py (endpoint /compute_proposal).
    """

    @staticmethod
    def compute(inp: ProposalInput, settings: SolarSettings = DEFAULT_SETTINGS) -> Dict[str, Any]:
        """
        Projecties → evaluatie → financiering → batterij → advies,
        als API-ready dict.
        """

        # ------------------------------------------------------
        # 1) BASIC VALIDATION
        # ------------------------------------------------------
        if inp.annual_production <= 0:
            return {"error": "PRODUCTION_EMPTY"}

        core = settings.core

        # ------------------------------------------------------
        # 2) PROJECTIES & EVALUATIE
        # ------------------------------------------------------
        projections = generate_projections(
            inp.annual_production,
            inp.electricity_rate,
            core.default_tariff_escalation if inp.tariff_escalation is None else inp.tariff_escalation,
            core.panel_degradation_rate if inp.degradation is None else inp.degradation,
            core.system_lifetime_years if inp.horizon_years is None else inp.horizon_years,
        )
        evaluation = ROIEngine.evaluate(projections, inp.system_cost)

        # ------------------------------------------------------
        # 3) FINANCIERING
        # ------------------------------------------------------
        financing = FinancingEngine.compute(
            FinancingInput(
                system_cost=inp.system_cost,
                projections=projections,
                down_payment_percent=inp.down_payment_percent,
                loan_term_years=inp.loan_term_years,
                interest_rate=inp.interest_rate,
                lease_term_years=inp.lease_term_years,
            ),
            settings,
        )

        # ------------------------------------------------------
        # 4) BATTERIJ (optioneel)
        # ------------------------------------------------------
        recommended_kwh = BatteryEngine.recommend(inp.annual_production, settings)

        battery = None
        if inp.include_battery:
            capacity = recommended_kwh if inp.battery_capacity_kwh is None else inp.battery_capacity_kwh
            battery = BatteryEngine.compute(
                BatteryImpactInput(
                    system_cost=inp.system_cost,
                    annual_production=inp.annual_production,
                    monthly_consumption=inp.monthly_consumption,
                    electricity_rate=inp.electricity_rate,
                    projections=projections,
                    capacity_kwh=capacity,
                    price_per_kwh=inp.battery_price_per_kwh,
                    base_payback_years=evaluation.payback_years,
                ),
                settings,
            ).to_dict()

        return {
            "projections": [p.to_dict() for p in projections],
            "evaluation": evaluation.to_dict(),
            "financing": financing.to_dict(),
            "battery": battery,
            "recommended_battery_kwh": recommended_kwh,
        }
