# solar_engine/battery.py

from __future__ import annotations
from typing import Sequence

from .rounding import round_currency, round_one_decimal
from .types import (
    BackupResult,
    BatteryProfile,
    BatterySavings,
    SelfConsumptionResult,
    SiteProfile,
)


DEFAULT_CAPACITIES_KWH = (5, 10, 15, 20)
DEFAULT_ACTIVE_HOURS = 10.0


# ============================================================
# ZELFCONSUMPTIE — met en zonder batterij
# ============================================================

def calculate_self_consumption(
    daily_production: float,
    battery_kwh: float,
    round_trip_efficiency: float,
    base_consumption: float,
    max_consumption: float,
) -> SelfConsumptionResult:
    """
    Zelfconsumptie als fractie (0–1).

    De batterij vangt hoogstens het deel van de dagproductie op dat nu
    wordt teruggeleverd, en nooit meer dan haar bruikbare capaciteit
    (kWh * rendement). Resultaat wordt afgetopt op max_consumption.
    """

    # Geen opwek → batterij kan niets extra opvangen
    if daily_production <= 0:
        return SelfConsumptionResult(
            without=base_consumption,
            with_battery=base_consumption,
            increase=0.0,
        )

    captureable_excess = daily_production * (1.0 - base_consumption)
    battery_capture = min(battery_kwh * round_trip_efficiency, captureable_excess)

    additional_ratio = battery_capture / daily_production
    with_battery = min(max_consumption, base_consumption + additional_ratio)

    return SelfConsumptionResult(
        without=base_consumption,
        with_battery=with_battery,
        increase=with_battery - base_consumption,
    )


def self_consumption_for(battery: BatteryProfile, site: SiteProfile) -> SelfConsumptionResult:
    return calculate_self_consumption(
        site.daily_production_kwh,
        battery.capacity_kwh,
        battery.round_trip_efficiency,
        site.base_self_consumption,
        site.max_self_consumption,
    )


# ============================================================
# BACKUP — hoe lang houdt de batterij het huis draaiende
# ============================================================

def calculate_backup_capability(
    battery_kwh: float,
    round_trip_efficiency: float,
    daily_consumption: float,
    active_hours: float = DEFAULT_ACTIVE_HOURS,
) -> BackupResult:
    if daily_consumption <= 0 or active_hours <= 0:
        return BackupResult(hours=0.0, days=0.0)

    avg_hourly_consumption = daily_consumption / active_hours
    usable_capacity = battery_kwh * round_trip_efficiency

    hours = usable_capacity / avg_hourly_consumption
    days = hours / 24.0

    return BackupResult(
        hours=round_one_decimal(hours),
        days=round_one_decimal(days),
    )


def backup_for(battery: BatteryProfile, site: SiteProfile) -> BackupResult:
    return calculate_backup_capability(
        battery.capacity_kwh,
        battery.round_trip_efficiency,
        site.daily_consumption_kwh,
        site.active_hours_per_day,
    )


# ============================================================
# EXTRA BESPARING — door hogere zelfconsumptie
# ============================================================

def calculate_battery_savings(
    annual_production: float,
    self_consumption_increase: float,
    electricity_rate: float,
    degradation_percent_per_year: float,
    lifetime_years: float,
) -> BatterySavings:
    """
    Jaarlijkse en levensduur-besparing van de batterij.

    Degradatie over de levensduur is lineair benaderd met het middenpunt:
        factor = 1 - (degradatie/100 * jaren / 2)
    Dit is bewust géén samengestelde degradatie zoals in de projecties.
    """

    annual = annual_production * self_consumption_increase * electricity_rate

    lifetime_factor = 1.0 - (degradation_percent_per_year / 100.0 * lifetime_years / 2.0)
    lifetime = annual * lifetime_years * lifetime_factor

    return BatterySavings(
        annual=round_currency(annual),
        lifetime=round_currency(lifetime),
    )


# ============================================================
# ADVIES — aanbevolen batterijcapaciteit
# ============================================================

def get_recommended_battery_capacity(
    daily_production: float,
    recommended_ratio: float,
    available_capacities: Sequence[float] = DEFAULT_CAPACITIES_KWH,
) -> float:
    recommended_kwh = daily_production * recommended_ratio

    # sorted() maakt een kopie; de lijst van de aanroeper blijft ongemoeid
    options = sorted(available_capacities)
    if not options:
        return DEFAULT_CAPACITIES_KWH[-1]

    for capacity in options:
        if recommended_kwh <= capacity:
            return capacity

    # Advies groter dan alle opties → grootste optie
    return options[-1]
