# solar_engine/loan.py

from __future__ import annotations

import math

from .rounding import round_currency
from .types import LeaseQuote, LeaseTerms, LoanTerms


# ============================================================
# LENING — annuïteit per maand
# ============================================================

def calculate_loan_payment(principal: float, annual_rate_percent: float, years: float) -> float:
    """
    Maandtermijn volgens de standaard annuïteitenformule:
        P * r * (1+r)^n / ((1+r)^n - 1)
    met r = jaarrente/100/12 en n = jaren*12.

    Geen afronding; dat doet de presentatielaag.
    """

    # Geen lening → niets af te lossen
    if principal <= 0:
        return 0.0

    # Geen looptijd → geen termijnen
    if years <= 0:
        return 0.0

    n = years * 12

    # Rente 0 of ongeldig negatief → lineair aflossen
    if annual_rate_percent <= 0:
        return principal / n

    r = annual_rate_percent / 100.0 / 12.0
    try:
        growth = (1.0 + r) ** n
    except OverflowError:
        return principal / n

    # Rente te klein (growth == 1) of te groot (inf) → lineair aflossen
    if growth - 1.0 <= 0 or not math.isfinite(growth):
        return principal / n

    payment = principal * r * growth / (growth - 1.0)
    if not math.isfinite(payment):
        return principal / n

    return payment


def loan_payment_for(terms: LoanTerms) -> float:
    return calculate_loan_payment(terms.principal, terms.annual_rate_percent, terms.term_years)


# ============================================================
# LEASE — afschrijving + financieringslast
# ============================================================

def calculate_lease_payment(
    system_cost: float,
    lease_term_years: float,
    residual_percent: float,
    money_factor: float,
) -> LeaseQuote:
    """
    Leasetermijn op basis van restwaarde en money factor:
    - afschrijving/maand = (kosten - restwaarde) / maanden
    - financieringslast/maand = (kosten + restwaarde) * money_factor
    - totaal = leasetermijnen + afkoopprijs
    """

    if system_cost <= 0 or lease_term_years <= 0:
        return LeaseQuote(
            monthly_lease=0.0,
            total_lease_payments=0.0,
            buyout_price=0.0,
            total_cost=0.0,
        )

    months = lease_term_years * 12
    residual_value = system_cost * (residual_percent / 100.0)

    depreciation = (system_cost - residual_value) / months
    finance_charge = (system_cost + residual_value) * money_factor

    monthly_lease = round_currency(depreciation + finance_charge)
    total_lease_payments = monthly_lease * months
    buyout_price = round_currency(residual_value)

    return LeaseQuote(
        monthly_lease=monthly_lease,
        total_lease_payments=total_lease_payments,
        buyout_price=buyout_price,
        total_cost=total_lease_payments + buyout_price,
    )


def lease_quote_for(terms: LeaseTerms) -> LeaseQuote:
    return calculate_lease_payment(
        terms.system_cost,
        terms.lease_term_years,
        terms.residual_percent,
        terms.money_factor,
    )
