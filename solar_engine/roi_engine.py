# solar_engine/roi_engine.py

from __future__ import annotations
from typing import Any, Iterable, Mapping, Optional, Union

from .rounding import round_one_decimal
from .types import InvestmentEvaluation, YearlyProjection


ProjectionLike = Union[YearlyProjection, Mapping[str, Any]]


def savings_of(projection: ProjectionLike) -> float:
    # API-payloads komen binnen als dicts, de engine levert YearlyProjection
    if isinstance(projection, Mapping):
        return float(projection.get("savings", 0.0))
    return float(projection.savings)


def sum_projection_savings(projections: Iterable[ProjectionLike]) -> float:
    return sum((savings_of(p) for p in projections), 0.0)


def calculate_payback_period(
    projections: Iterable[ProjectionLike],
    upfront_cost: float,
) -> Optional[float]:
    """
    Terugverdientijd in (fractionele) jaren.
    - kosten <= 0 → 0 (al terugverdiend)
    - lege reeks → None
    - eerste jaar k waarin cumulatief >= kosten:
        (k-1) + (kosten - cumulatief t/m k-1) / besparing_k
    - nooit bereikt → None
    """

    if upfront_cost <= 0:
        return 0.0

    savings = [savings_of(p) for p in projections]
    if not savings:
        return None

    cumulative = 0.0
    for index, year_savings in enumerate(savings):
        previous = cumulative
        cumulative += year_savings

        if cumulative >= upfront_cost:
            fraction = (upfront_cost - previous) / year_savings if year_savings > 0 else 0.0
            return round_one_decimal(index + fraction)

    return None


def calculate_roi(total_savings: float, total_cost: float) -> float:
    if total_cost <= 0:
        return 0.0
    return (total_savings - total_cost) / total_cost * 100.0


class ROIEngine:
    """
    Bundelt terugverdientijd, ROI en totale besparing over de horizon.
    """

    @staticmethod
    def evaluate(
        projections: Iterable[ProjectionLike],
        upfront_cost: float,
    ) -> InvestmentEvaluation:
        series = list(projections)
        total_savings = sum_projection_savings(series)

        return InvestmentEvaluation(
            payback_years=calculate_payback_period(series, upfront_cost),
            roi_percent=calculate_roi(total_savings, upfront_cost),
            total_savings=total_savings,
            upfront_cost=upfront_cost,
        )
