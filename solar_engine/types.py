# solar_engine/types.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional


# ============================================================
# Invoer — leningen, lease, batterij, locatie, projectie
# ============================================================

@dataclass(frozen=True)
class LoanTerms:
    principal: float               # valuta
    annual_rate_percent: float     # 12 = 12% (<= 0 → geen rente)
    term_years: float


@dataclass(frozen=True)
class LeaseTerms:
    system_cost: float
    lease_term_years: float
    residual_percent: float        # 0–100
    money_factor: float            # bv 0.003


@dataclass(frozen=True)
class BatteryProfile:
    capacity_kwh: float
    round_trip_efficiency: float   # 0–1


@dataclass(frozen=True)
class SiteProfile:
    daily_production_kwh: float
    daily_consumption_kwh: float
    base_self_consumption: float   # 0–1
    max_self_consumption: float    # 0–1
    active_hours_per_day: float = 10.0


@dataclass(frozen=True)
class ProjectionInput:
    annual_production_kwh: float
    electricity_rate_per_kwh: float
    tariff_escalation_percent: float
    degradation_percent: float
    horizon_years: int


# ============================================================
# YearlyProjection — één jaar uit de besparingsreeks
# ============================================================

@dataclass(frozen=True)
class YearlyProjection:
    year: int
    savings: float

    def to_dict(self):
        return {"year": self.year, "savings": self.savings}


# ============================================================
# LeaseQuote — total_cost == total_lease_payments + buyout_price
# ============================================================

@dataclass(frozen=True)
class LeaseQuote:
    monthly_lease: float
    total_lease_payments: float
    buyout_price: float
    total_cost: float

    def to_dict(self):
        return {
            "monthly_lease": self.monthly_lease,
            "total_lease_payments": self.total_lease_payments,
            "buyout_price": self.buyout_price,
            "total_cost": self.total_cost,
        }


# ============================================================
# Batterij — zelfconsumptie, backup, extra besparing
# ============================================================

@dataclass(frozen=True)
class SelfConsumptionResult:
    without: float                 # 0–1
    with_battery: float            # 0–1, nooit boven max
    increase: float                # with_battery - without

    def to_dict(self):
        return {
            "without": self.without,
            "with": self.with_battery,
            "increase": self.increase,
        }


@dataclass(frozen=True)
class BackupResult:
    hours: float
    days: float

    def to_dict(self):
        return {"hours": self.hours, "days": self.days}


@dataclass(frozen=True)
class BatterySavings:
    annual: float
    lifetime: float

    def to_dict(self):
        return {"annual": self.annual, "lifetime": self.lifetime}


# ============================================================
# InvestmentEvaluation — terugverdientijd & ROI
# ============================================================

@dataclass(frozen=True)
class InvestmentEvaluation:
    payback_years: Optional[float]   # None = nooit terugverdiend binnen horizon
    roi_percent: float
    total_savings: float
    upfront_cost: float

    def to_dict(self):
        return {
            "payback_years": self.payback_years,
            "roi_percent": self.roi_percent,
            "total_savings": self.total_savings,
            "upfront_cost": self.upfront_cost,
        }


# ============================================================
# Financiering — lening vs lease vs contant
# ============================================================

@dataclass(frozen=True)
class LoanResult:
    down_payment: float
    principal: float
    monthly_payment: float
    total_payments: float
    total_interest: float
    total_cost: float

    def to_dict(self):
        return {
            "down_payment": self.down_payment,
            "principal": self.principal,
            "monthly_payment": self.monthly_payment,
            "total_payments": self.total_payments,
            "total_interest": self.total_interest,
            "total_cost": self.total_cost,
        }


@dataclass(frozen=True)
class FinancingComparison:
    loan: LoanResult
    lease: LeaseQuote
    cash_roi: float
    loan_roi: float
    lease_roi: float
    loan_payback_years: Optional[float]

    def to_dict(self):
        return {
            "loan": self.loan.to_dict(),
            "lease": self.lease.to_dict(),
            "cash_roi": self.cash_roi,
            "loan_roi": self.loan_roi,
            "lease_roi": self.lease_roi,
            "loan_payback_years": self.loan_payback_years,
        }


# ============================================================
# BatteryImpactResult — effect van een batterij op het voorstel
# ============================================================

@dataclass(frozen=True)
class BatteryImpactResult:
    # Kosten
    battery_cost: float
    total_system_cost: float

    # Prestatie (in %)
    self_consumption_without: float
    self_consumption_with: float
    self_consumption_increase: float

    # Extra besparing
    additional_annual_savings: float
    additional_lifetime_savings: float

    # Backup
    backup_hours: float
    backup_days: float

    # ROI-impact
    new_payback_years: Optional[float]
    payback_delta: Optional[float]
    new_roi: float
    roi_delta: float

    def to_dict(self):
        return {
            "battery_cost": self.battery_cost,
            "total_system_cost": self.total_system_cost,
            "self_consumption_without": self.self_consumption_without,
            "self_consumption_with": self.self_consumption_with,
            "self_consumption_increase": self.self_consumption_increase,
            "additional_annual_savings": self.additional_annual_savings,
            "additional_lifetime_savings": self.additional_lifetime_savings,
            "backup_hours": self.backup_hours,
            "backup_days": self.backup_days,
            "new_payback_years": self.new_payback_years,
            "payback_delta": self.payback_delta,
            "new_roi": self.new_roi,
            "roi_delta": self.roi_delta,
        }


# ============================================================
# Scenario's — basis vs aangepast
# ============================================================

@dataclass(frozen=True)
class ScenarioParams:
    electricity_rate_change: float = 0.0   # -20 .. +30 (%)
    consumption_change: float = 0.0        # -30 .. +50 (%)
    system_degradation: float = 0.5        # 0.3 .. 1.5 (%/jaar)


@dataclass(frozen=True)
class ScenarioResult:
    annual_savings: float
    total_lifetime_savings: float
    payback_years: Optional[float]
    roi_percent: float

    def to_dict(self):
        return {
            "annual_savings": self.annual_savings,
            "total_lifetime_savings": self.total_lifetime_savings,
            "payback_years": self.payback_years,
            "roi_percent": self.roi_percent,
        }


@dataclass(frozen=True)
class ScenarioComparison:
    base: ScenarioResult
    scenario: ScenarioResult
    changes: Dict[str, Optional[float]] = field(default_factory=dict)

    def to_dict(self):
        return {
            "base": self.base.to_dict(),
            "scenario": self.scenario.to_dict(),
            "changes": dict(self.changes),
        }


# ============================================================
# Aliases voor duidelijkheid
# ============================================================

ProjectionSeries = List[YearlyProjection]
