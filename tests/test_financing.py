import pytest

from solar_engine.financing import FinancingEngine, FinancingInput
from solar_engine.roi_engine import calculate_roi
from solar_engine.settings import DEFAULT_SETTINGS, merge_settings
from solar_engine.types import YearlyProjection


def make_projections(savings=30000.0, years=25):
    return [YearlyProjection(year=i, savings=savings) for i in range(1, years + 1)]


def test_loan_breakdown_defaults():
    """
    100.000, 20% aanbetaling, 12% over 5 jaar:
    hoofdsom 80.000 → termijn ≈ 1779.56
    """
    loan = FinancingEngine.loan(100000, 20, 12, 5)

    assert loan.down_payment == 20000
    assert loan.principal == 80000
    assert loan.monthly_payment == 1780
    assert loan.total_payments == pytest.approx(106773, abs=1)
    assert loan.total_interest == pytest.approx(26773, abs=1)
    assert loan.total_cost == pytest.approx(126773, abs=1)


def test_compute_uses_financing_defaults():
    res = FinancingEngine.compute(FinancingInput(system_cost=100000, projections=make_projections()))

    # lease: 7 jaar, 10% restwaarde, mf 0.003
    # (90.000 / 84) + 330 = 1401.43 → 1401
    assert res.lease.monthly_lease == 1401
    assert res.lease.total_cost == 1401 * 84 + 10000

    lifetime = 30000 * 25
    assert res.cash_roi == pytest.approx(650)
    assert res.loan_roi == pytest.approx(calculate_roi(lifetime, res.loan.total_cost))
    assert res.lease_roi == pytest.approx(calculate_roi(lifetime, res.lease.total_cost))


def test_loan_payback_with_net_savings():
    """
    jaarlasten = 1780 * 12 = 21.360 → netto 8.640 per jaar
    na 2 jaar 17.280, aanbetaling 20.000 → 2 + 2720/8640 ≈ 2.3
    """
    res = FinancingEngine.compute(FinancingInput(system_cost=100000, projections=make_projections()))
    assert res.loan_payback_years == 2.3


def test_loan_payback_none_without_loan():
    res = FinancingEngine.compute(
        FinancingInput(system_cost=100000, projections=make_projections(), down_payment_percent=100)
    )
    assert res.loan.monthly_payment == 0
    assert res.loan_payback_years is None


def test_loan_payback_never_within_lifetime():
    res = FinancingEngine.compute(
        FinancingInput(system_cost=100000, projections=make_projections(savings=100.0))
    )
    assert res.loan_payback_years is None


def test_zero_cost_is_all_zero():
    res = FinancingEngine.compute(FinancingInput(system_cost=0, projections=make_projections()))

    assert res.loan.total_cost == 0
    assert res.lease.total_cost == 0
    assert res.cash_roi == 0
    assert res.loan_roi == 0
    assert res.lease_roi == 0


def test_settings_override_changes_lease():
    settings = merge_settings(DEFAULT_SETTINGS, {"financing": {"lease_money_factor": 0.004}})

    base = FinancingEngine.compute(FinancingInput(100000, make_projections()))
    pricier = FinancingEngine.compute(FinancingInput(100000, make_projections()), settings)

    assert pricier.lease.monthly_lease > base.lease.monthly_lease


def test_to_dict_structure():
    out = FinancingEngine.compute(FinancingInput(100000, make_projections())).to_dict()

    assert set(out) == {"loan", "lease", "cash_roi", "loan_roi", "lease_roi", "loan_payback_years"}
    assert out["lease"]["total_cost"] == out["lease"]["total_lease_payments"] + out["lease"]["buyout_price"]
