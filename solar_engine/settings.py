# solar_engine/settings.py

"""
Standaardinstellingen voor zonnepaneel-voorstellen.

Alle waarden zijn frozen dataclasses; overrides leveren altijd een nieuw
object op. Een JSON-document met versie kan de standaardwaarden aanvullen:

    {"version": 1, "settings": {"battery": {"round_trip_efficiency": 0.92}}}
"""

from __future__ import annotations
import dataclasses
import json
import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .types import ScenarioParams


logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "SOLAR_ENGINE_SETTINGS"
SETTINGS_VERSION = 1


# ============================================================
# Instellingengroepen
# ============================================================

@dataclass(frozen=True)
class CoreSettings:
    system_lifetime_years: int = 25
    default_tariff_escalation: float = 3.0      # %/jaar
    panel_degradation_rate: float = 0.5         # %/jaar


@dataclass(frozen=True)
class BatterySettings:
    # prijs per kWh capaciteit, per beschikbare batterijgrootte
    battery_prices: Mapping[int, float] = field(
        default_factory=lambda: {
            5: 18_000_000,
            10: 16_000_000,
            15: 15_000_000,
            20: 14_000_000,
        }
    )
    round_trip_efficiency: float = 0.9
    self_consumption_base: float = 0.3
    self_consumption_max: float = 0.85
    degradation_rate: float = 3.0               # %/jaar
    recommended_ratio: float = 0.5
    active_hours: float = 10.0
    fallback_price_per_kwh: float = 15_000_000

    def __post_init__(self) -> None:
        # alleen-lezen; DEFAULT_SETTINGS wordt door alle aanroepen gedeeld
        object.__setattr__(self, "battery_prices", MappingProxyType(dict(self.battery_prices)))

    @property
    def capacities(self) -> Tuple[int, ...]:
        return tuple(sorted(self.battery_prices))

    def price_for(self, capacity_kwh: float) -> float:
        return self.battery_prices.get(capacity_kwh, self.fallback_price_per_kwh)


@dataclass(frozen=True)
class FinancingSettings:
    default_down_payment: float = 20.0          # %
    default_loan_term: int = 5                  # jaar
    default_interest_rate: float = 12.0         # %/jaar
    default_lease_term: int = 7                 # jaar
    lease_residual_value: float = 10.0          # %
    lease_money_factor: float = 0.003
    loan_term_options: Tuple[int, ...] = (3, 5, 7, 10)
    down_payment_options: Tuple[float, ...] = (0, 10, 20, 30)
    interest_rate_options: Tuple[float, ...] = (8, 10, 12, 15)


@dataclass(frozen=True)
class ScenarioSettings:
    default_degradation: float = 0.5
    optimistic: ScenarioParams = field(default_factory=lambda: ScenarioParams(10.0, 0.0, 0.3))
    pessimistic: ScenarioParams = field(default_factory=lambda: ScenarioParams(-5.0, -10.0, 1.0))
    high_growth: ScenarioParams = field(default_factory=lambda: ScenarioParams(20.0, 15.0, 0.5))

    def preset(self, name: str) -> Optional[ScenarioParams]:
        return {
            "optimistic": self.optimistic,
            "pessimistic": self.pessimistic,
            "high_growth": self.high_growth,
        }.get(name)


@dataclass(frozen=True)
class SolarSettings:
    core: CoreSettings = field(default_factory=CoreSettings)
    battery: BatterySettings = field(default_factory=BatterySettings)
    financing: FinancingSettings = field(default_factory=FinancingSettings)
    scenarios: ScenarioSettings = field(default_factory=ScenarioSettings)

    def to_dict(self) -> Dict[str, Any]:
        return _plain(self)


DEFAULT_SETTINGS = SolarSettings()


def _plain(value: Any) -> Any:
    if dataclasses.is_dataclass(value):
        return {f.name: _plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_plain(v) for v in value]
    return value


# ============================================================
# Overrides — diep samenvoegen in een nieuw object
# ============================================================

def _merge(obj: Any, overrides: Mapping[str, Any], path: str) -> Any:
    known = {f.name: f for f in dataclasses.fields(obj)}
    changes: Dict[str, Any] = {}

    for key, value in overrides.items():
        if key not in known:
            raise ValueError(f"Onbekende instelling: {path}{key}")

        current = getattr(obj, key)

        if dataclasses.is_dataclass(current) and isinstance(value, Mapping):
            changes[key] = _merge(current, value, f"{path}{key}.")
        elif isinstance(current, Mapping) and isinstance(value, Mapping):
            # per sleutel samenvoegen; JSON-sleutels zijn strings, batterijgroottes ints
            changes[key] = {**current, **{int(k): float(v) for k, v in value.items()}}
        elif isinstance(current, tuple) and isinstance(value, (list, tuple)):
            changes[key] = tuple(value)
        else:
            changes[key] = value

    return dataclasses.replace(obj, **changes)


def merge_settings(base: SolarSettings, overrides: Optional[Mapping[str, Any]]) -> SolarSettings:
    if not overrides:
        return base
    return _merge(base, overrides, "")


# ============================================================
# Laden uit JSON (pad of omgevingsvariabele)
# ============================================================

def load_settings(path: Optional[str] = None) -> SolarSettings:
    path = path or os.environ.get(SETTINGS_ENV_VAR)
    if not path:
        return DEFAULT_SETTINGS

    try:
        with open(path, encoding="utf-8") as fh:
            stored = json.load(fh)
    except FileNotFoundError:
        logger.warning("Instellingenbestand %s niet gevonden, standaardwaarden gebruikt", path)
        return DEFAULT_SETTINGS
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Instellingen uit %s niet leesbaar (%s), standaardwaarden gebruikt", path, exc)
        return DEFAULT_SETTINGS

    if not isinstance(stored, dict) or stored.get("version") != SETTINGS_VERSION:
        logger.warning(
            "Instellingenversie in %s wijkt af (verwacht %s), standaardwaarden gebruikt",
            path,
            SETTINGS_VERSION,
        )
        return DEFAULT_SETTINGS

    settings = merge_settings(DEFAULT_SETTINGS, stored.get("settings") or {})
    logger.info("Instellingen geladen uit %s", path)
    return settings
