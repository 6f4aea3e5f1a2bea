import pytest

from solar_engine.battery import (
    calculate_backup_capability,
    calculate_battery_savings,
    calculate_self_consumption,
    get_recommended_battery_capacity,
)
from solar_engine.loan import calculate_lease_payment, calculate_loan_payment
from solar_engine.roi_engine import (
    ROIEngine,
    calculate_payback_period,
    calculate_roi,
    sum_projection_savings,
)
from solar_engine.types import YearlyProjection


SERIES = [YearlyProjection(year=i, savings=3000.0 + i) for i in range(1, 6)]
CAPACITIES = [15, 5, 20, 10]


# Zelfde invoer → zelfde uitkomst, en de invoer blijft ongemoeid
@pytest.mark.parametrize(
    "fn, args",
    [
        (calculate_loan_payment, (100000, 12, 5)),
        (calculate_loan_payment, (12000, 0, 1)),
        (calculate_lease_payment, (100000, 5, 10, 0.003)),
        (calculate_self_consumption, (30, 10, 0.9, 0.3, 0.85)),
        (calculate_backup_capability, (10, 0.9, 20)),
        (calculate_battery_savings, (10000, 0.2, 1500, 3, 10)),
        (get_recommended_battery_capacity, (24, 0.5, CAPACITIES)),
        (sum_projection_savings, (SERIES,)),
        (calculate_payback_period, (SERIES, 10000)),
        (calculate_roi, (25000, 10000)),
        (ROIEngine.evaluate, (SERIES, 10000)),
    ],
    ids=lambda v: getattr(v, "__name__", None),
)
def test_repeated_calls_give_same_result(fn, args):
    first = fn(*args)
    second = fn(*args)

    assert first == second
    assert CAPACITIES == [15, 5, 20, 10]
    assert [p.savings for p in SERIES] == [3001.0, 3002.0, 3003.0, 3004.0, 3005.0]
