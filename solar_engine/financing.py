# solar_engine/financing.py

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .loan import calculate_lease_payment, calculate_loan_payment
from .rounding import round_currency, round_one_decimal
from .roi_engine import ProjectionLike, savings_of, calculate_roi, sum_projection_savings
from .settings import DEFAULT_SETTINGS, SolarSettings
from .types import FinancingComparison, LoanResult


@dataclass(frozen=True)
class FinancingInput:
    """
    Invoer voor de vergelijking contant / lening / lease.
    Ontbrekende waarden (None) vallen terug op FinancingSettings.
    """
    system_cost: float
    projections: Sequence[ProjectionLike]
    down_payment_percent: Optional[float] = None
    loan_term_years: Optional[float] = None
    interest_rate: Optional[float] = None
    lease_term_years: Optional[float] = None


class FinancingEngine:
    """
    Vergelijkt contante aankoop, lening en lease voor één systeem.
    """

    @staticmethod
    def loan(system_cost: float, down_payment_percent: float, interest_rate: float, term_years: float) -> LoanResult:
        cost = max(system_cost, 0.0)

        down_payment = cost * (down_payment_percent / 100.0)
        principal = cost - down_payment

        monthly = calculate_loan_payment(principal, interest_rate, term_years)
        total_payments = monthly * term_years * 12 if term_years > 0 else 0.0
        total_interest = total_payments - principal

        return LoanResult(
            down_payment=round_currency(down_payment),
            principal=round_currency(principal),
            monthly_payment=round_currency(monthly),
            total_payments=round_currency(total_payments),
            total_interest=round_currency(total_interest),
            total_cost=round_currency(down_payment + total_payments),
        )

    @staticmethod
    def loan_payback_period(
        projections: Sequence[ProjectionLike],
        loan: LoanResult,
        term_years: float,
        lifetime_years: int,
    ) -> Optional[float]:
        """
        Terugverdientijd bij financiering met lening.

        Tijdens de looptijd is de netto besparing = besparing - jaarlasten;
        de aanbetaling (plus eventuele negatieve cashflow) moet terugkomen.
        """

        if not loan.monthly_payment:
            return None

        savings: List[float] = [savings_of(p) for p in projections]
        annual_payment = loan.monthly_payment * 12

        cumulative = 0.0
        for year in range(1, lifetime_years + 1):
            if year > len(savings):
                break

            net_savings = savings[year - 1] - (annual_payment if year <= term_years else 0.0)
            previous = cumulative
            cumulative += net_savings

            if cumulative >= loan.down_payment:
                needed = loan.down_payment - previous
                if needed <= 0:
                    return float(year - 1)
                fraction = needed / net_savings if net_savings > 0 else 0.0
                return round_one_decimal(year - 1 + fraction)

        return None

    @staticmethod
    def compute(inp: FinancingInput, settings: SolarSettings = DEFAULT_SETTINGS) -> FinancingComparison:
        fin = settings.financing

        down_payment_percent = fin.default_down_payment if inp.down_payment_percent is None else inp.down_payment_percent
        term_years = fin.default_loan_term if inp.loan_term_years is None else inp.loan_term_years
        interest_rate = fin.default_interest_rate if inp.interest_rate is None else inp.interest_rate
        lease_term = fin.default_lease_term if inp.lease_term_years is None else inp.lease_term_years

        projections = list(inp.projections)
        lifetime_savings = sum_projection_savings(projections)

        loan = FinancingEngine.loan(inp.system_cost, down_payment_percent, interest_rate, term_years)
        lease = calculate_lease_payment(
            inp.system_cost,
            lease_term,
            fin.lease_residual_value,
            fin.lease_money_factor,
        )

        return FinancingComparison(
            loan=loan,
            lease=lease,
            cash_roi=calculate_roi(lifetime_savings, inp.system_cost),
            loan_roi=calculate_roi(lifetime_savings, loan.total_cost),
            lease_roi=calculate_roi(lifetime_savings, lease.total_cost),
            loan_payback_years=FinancingEngine.loan_payback_period(
                projections,
                loan,
                term_years,
                settings.core.system_lifetime_years,
            ),
        )
