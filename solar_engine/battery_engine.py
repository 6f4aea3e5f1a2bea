# solar_engine/battery_engine.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence

from .battery import (
    calculate_backup_capability,
    calculate_battery_savings,
    calculate_self_consumption,
    get_recommended_battery_capacity,
)
from .rounding import round_one_decimal
from .roi_engine import ProjectionLike, calculate_roi, savings_of
from .settings import DEFAULT_SETTINGS, SolarSettings
from .types import BatteryImpactResult


DAYS_PER_YEAR = 365


@dataclass(frozen=True)
class BatteryImpactInput:
    """Structuur die 1-op-1 lijkt op de batterij-request van de API."""
    system_cost: float                       # zonnesysteem zonder batterij
    annual_production: float                 # kWh/jaar
    monthly_consumption: float               # kWh/maand
    electricity_rate: float                  # valuta/kWh
    projections: Sequence[ProjectionLike]    # besparingsreeks zonder batterij
    capacity_kwh: float = 10.0
    price_per_kwh: Optional[float] = None    # None → prijstabel uit settings
    base_payback_years: Optional[float] = None


class BatteryEngine:
    """
    Effect van een thuisbatterij bovenop het zonnesysteem:
    zelfconsumptie, backup, extra besparing en nieuwe ROI/terugverdientijd.
    """

    @staticmethod
    def recommend(annual_production: float, settings: SolarSettings = DEFAULT_SETTINGS) -> float:
        batt = settings.battery
        return get_recommended_battery_capacity(
            annual_production / DAYS_PER_YEAR,
            batt.recommended_ratio,
            batt.capacities,
        )

    @staticmethod
    def compute(inp: BatteryImpactInput, settings: SolarSettings = DEFAULT_SETTINGS) -> BatteryImpactResult:
        batt = settings.battery
        lifetime_years = settings.core.system_lifetime_years

        price_per_kwh = batt.price_for(inp.capacity_kwh) if inp.price_per_kwh is None else inp.price_per_kwh
        annual_production = max(inp.annual_production, 0.0)
        solar_cost = max(inp.system_cost, 0.0)

        # -----------------------------
        # Kosten
        # -----------------------------
        battery_cost = inp.capacity_kwh * price_per_kwh
        total_system_cost = solar_cost + battery_cost

        # -----------------------------
        # Zelfconsumptie
        # -----------------------------
        self_consumption = calculate_self_consumption(
            annual_production / DAYS_PER_YEAR,
            inp.capacity_kwh,
            batt.round_trip_efficiency,
            batt.self_consumption_base,
            batt.self_consumption_max,
        )

        savings = calculate_battery_savings(
            annual_production,
            self_consumption.increase,
            inp.electricity_rate,
            batt.degradation_rate,
            lifetime_years,
        )

        # -----------------------------
        # Backup
        # -----------------------------
        daily_consumption = inp.monthly_consumption * 12 / DAYS_PER_YEAR
        backup = calculate_backup_capability(
            inp.capacity_kwh,
            batt.round_trip_efficiency,
            daily_consumption,
            batt.active_hours,
        )

        # -----------------------------
        # Nieuwe terugverdientijd
        # Batterijdeel degradeert samengesteld per jaar
        # -----------------------------
        base_savings = [savings_of(p) for p in inp.projections]
        annual_battery_savings = annual_production * self_consumption.increase * inp.electricity_rate
        battery_factor = 1.0 - batt.degradation_rate / 100.0

        new_payback: Optional[float] = None
        cumulative = 0.0
        for year in range(1, min(lifetime_years, len(base_savings)) + 1):
            year_savings = base_savings[year - 1] + annual_battery_savings * battery_factor ** (year - 1)
            previous = cumulative
            cumulative += year_savings

            if cumulative >= total_system_cost:
                fraction = (total_system_cost - previous) / year_savings if year_savings > 0 else 0.0
                new_payback = round_one_decimal(year - 1 + fraction)
                break

        payback_delta = (
            new_payback - inp.base_payback_years
            if new_payback is not None and inp.base_payback_years is not None
            else None
        )

        # -----------------------------
        # ROI met en zonder batterij
        # -----------------------------
        base_lifetime_savings = sum(base_savings)
        base_roi = calculate_roi(base_lifetime_savings, solar_cost)
        new_roi = calculate_roi(base_lifetime_savings + savings.lifetime, total_system_cost)

        return BatteryImpactResult(
            battery_cost=battery_cost,
            total_system_cost=total_system_cost,
            self_consumption_without=self_consumption.without * 100,
            self_consumption_with=self_consumption.with_battery * 100,
            self_consumption_increase=self_consumption.increase * 100,
            additional_annual_savings=savings.annual,
            additional_lifetime_savings=savings.lifetime,
            backup_hours=backup.hours,
            backup_days=backup.days,
            new_payback_years=new_payback,
            payback_delta=payback_delta,
            new_roi=new_roi,
            roi_delta=new_roi - base_roi,
        )