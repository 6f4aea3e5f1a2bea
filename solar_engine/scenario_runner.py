# solar_engine/scenario_runner.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

from .projections import generate_projections
from .roi_engine import ROIEngine
from .settings import DEFAULT_SETTINGS, SolarSettings
from .types import ScenarioComparison, ScenarioParams, ScenarioResult


@dataclass(frozen=True)
class ScenarioBaseInput:
    annual_production: float
    electricity_rate: float
    system_cost: float
    tariff_escalation: Optional[float] = None    # None → CoreSettings


def _percent_change(new: float, old: float) -> float:
    if old <= 0:
        return 0.0
    return (new - old) / old * 100.0


class ScenarioRunner:
    """
    Orkestreert twee doorrekeningen:
    - basis: huidige invoer met standaard degradatie
    - scenario: aangepast tarief, aangepaste productie en eigen degradatie
    """

    def __init__(self, base: ScenarioBaseInput, settings: SolarSettings = DEFAULT_SETTINGS):
        self.base = base
        self.settings = settings

    # =================================================
    # HELPER — één doorrekening over de levensduur
    # =================================================
    def evaluate(self, production: float, rate: float, degradation: float) -> ScenarioResult:
        escalation = self.base.tariff_escalation
        if escalation is None:
            escalation = self.settings.core.default_tariff_escalation

        projections = generate_projections(
            production,
            rate,
            escalation,
            degradation,
            self.settings.core.system_lifetime_years,
        )
        evaluation = ROIEngine.evaluate(projections, self.base.system_cost)

        return ScenarioResult(
            annual_savings=projections[0].savings if projections else 0.0,
            total_lifetime_savings=evaluation.total_savings,
            payback_years=evaluation.payback_years,
            roi_percent=evaluation.roi_percent,
        )

    def resolve(self, preset: str) -> ScenarioParams:
        params = self.settings.scenarios.preset(preset)
        if params is None:
            raise ValueError(f"Onbekend scenario: {preset}")
        return params

    def default_params(self) -> ScenarioParams:
        return ScenarioParams(system_degradation=self.settings.scenarios.default_degradation)

    # =================================================
    # MAIN RUNNER
    # =================================================
    def run(self, params: Optional[ScenarioParams] = None) -> ScenarioComparison:
        params = params or self.default_params()

        production = max(self.base.annual_production, 0.0)
        rate = max(self.base.electricity_rate, 0.0)

        base = self.evaluate(production, rate, self.settings.scenarios.default_degradation)

        scenario = self.evaluate(
            production * (1 + params.consumption_change / 100.0),
            rate * (1 + params.electricity_rate_change / 100.0),
            params.system_degradation,
        )

        changes: Dict[str, Optional[float]] = {
            "annual_savings": scenario.annual_savings - base.annual_savings,
            "annual_savings_percent": _percent_change(scenario.annual_savings, base.annual_savings),
            "total_savings": scenario.total_lifetime_savings - base.total_lifetime_savings,
            "total_savings_percent": _percent_change(
                scenario.total_lifetime_savings, base.total_lifetime_savings
            ),
            "payback_delta": (
                scenario.payback_years - base.payback_years
                if scenario.payback_years is not None and base.payback_years is not None
                else None
            ),
            "roi_delta": scenario.roi_percent - base.roi_percent,
        }

        return ScenarioComparison(base=base, scenario=scenario, changes=changes)

    def run_preset(self, preset: str) -> ScenarioComparison:
        return self.run(self.resolve(preset))
