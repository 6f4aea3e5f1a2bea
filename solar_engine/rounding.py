# solar_engine/rounding.py

from __future__ import annotations
import math


def round_currency(value: float) -> float:
    """Afronden op hele valuta-eenheden, .5 altijd naar boven (ook bij negatief)."""
    # inf/nan blijven zoals ze zijn
    if not math.isfinite(value):
        return value
    return float(math.floor(value + 0.5))


def round_one_decimal(value: float) -> float:
    """Afronden op één decimaal, .05 naar boven."""
    scaled = value * 10 + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / 10
