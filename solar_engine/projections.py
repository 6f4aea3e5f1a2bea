# solar_engine/projections.py

from __future__ import annotations
from typing import List

from .rounding import round_currency
from .types import ProjectionInput, YearlyProjection


def generate_projections(
    annual_production: float,
    electricity_rate: float,
    tariff_escalation_percent: float,
    degradation_percent: float,
    horizon_years: int,
) -> List[YearlyProjection]:
    """
    Jaar-op-jaar besparing:
    - jaar 1 = productie * tarief
    - productie daalt elk jaar met (1 - degradatie/100)
    - tarief stijgt elk jaar met (1 + escalatie/100)
    Beide factoren stapelen onafhankelijk; besparing per jaar op hele valuta.
    """

    escalation_factor = 1.0 + tariff_escalation_percent / 100.0
    degradation_factor = 1.0 - degradation_percent / 100.0

    production = annual_production
    rate = electricity_rate

    projections: List[YearlyProjection] = []
    for year in range(1, int(horizon_years) + 1):
        projections.append(
            YearlyProjection(year=year, savings=round_currency(production * rate))
        )
        rate *= escalation_factor
        production *= degradation_factor

    return projections


def projections_for(inp: ProjectionInput) -> List[YearlyProjection]:
    return generate_projections(
        inp.annual_production_kwh,
        inp.electricity_rate_per_kwh,
        inp.tariff_escalation_percent,
        inp.degradation_percent,
        inp.horizon_years,
    )
