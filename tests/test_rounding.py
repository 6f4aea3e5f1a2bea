import math

import pytest

from solar_engine.rounding import round_currency, round_one_decimal


@pytest.mark.parametrize("value, expected", [(2.5, 3.0), (-2.5, -2.0), (1234.49, 1234.0)])
def test_round_currency_half_up(value, expected):
    assert round_currency(value) == expected


@pytest.mark.parametrize("value, expected", [(1.25, 1.3), (0.04, 0.0), (7.0, 7.0)])
def test_round_one_decimal_half_up(value, expected):
    assert round_one_decimal(value) == pytest.approx(expected)


@pytest.mark.parametrize("fn", [round_currency, round_one_decimal])
def test_rounding_keeps_infinity(fn):
    assert fn(math.inf) == math.inf
    assert fn(-math.inf) == -math.inf


@pytest.mark.parametrize("fn", [round_currency, round_one_decimal])
def test_rounding_keeps_nan(fn):
    assert math.isnan(fn(math.nan))


def test_round_one_decimal_near_float_max():
    # value * 10 loopt over naar inf; waarde blijft ongewijzigd
    assert round_one_decimal(1e308) == 1e308
