"""Built-in aircraft presets and construction of validated configs."""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional

from .contracts import AircraftPerformanceConfig

SR22 = "SR22"
SF50 = "SF50"

PRESETS: Mapping[str, Mapping[str, Any]] = {
    SR22: {
        "name": "Cirrus SR22",
        "cruise_speed_kt": 172,  # KTAS at 7000 ft
        "fuel_flow_gph": 18.5,  # 7000 ft LOP
        "fuel_capacity_gal": 92,
        "usable_fuel_gal": 92,
        "max_takeoff_weight_lbs": 3650,
        "max_useful_load_lbs": 1216,
        "empty_weight_lbs": 2434,
        "fuel_weight_per_gallon_lbs": 6.0,  # 100LL
        "avg_person_weight_lbs": 185,
        "avg_bag_weight_lbs": 30,
        "taxi_fuel_gal": 1,
        "contingency_fuel_min_gal": 5,
        "contingency_fraction": 0.05,
        "reserve_fuel_gal": 11,  # 45 min at 55% LOP
        "max_passengers": 4,
        "max_bags": 4,
    },
    SF50: {
        "name": "Cirrus SF50 Vision Jet",
        "cruise_speed_kt": 308,  # KTAS at FL310
        "fuel_flow_gph": 72,
        "fuel_capacity_gal": 305,
        "usable_fuel_gal": 296,
        "max_takeoff_weight_lbs": 6000,
        "max_useful_load_lbs": 2450,
        "empty_weight_lbs": 3550,
        "fuel_weight_per_gallon_lbs": 6.7,  # Jet-A
        "avg_person_weight_lbs": 185,
        "avg_bag_weight_lbs": 30,
        "taxi_fuel_gal": 6,
        "contingency_fuel_min_gal": 10,
        "contingency_fraction": 0.05,
        "reserve_fuel_gal": 40,  # 45 min at long range cruise
        "max_passengers": 5,
        "max_bags": 7,
        "payload_range_constant": 1600,
    },
}

_AIRCRAFT_ALIASES = {
    "SR22": SR22,
    "SR 22": SR22,
    "SR22T": SR22,
    "CIRRUS SR22": SR22,
    "S22T": SR22,
    "SF50": SF50,
    "SF 50": SF50,
    "VISION JET": SF50,
    "VISIONJET": SF50,
    "CIRRUS VISION JET": SF50,
    "CIRRUS SF50": SF50,
    "CIRRUS SF50 VISION JET": SF50,
    "JET": SF50,
    "PC24": SF50,
    "PC 24": SF50,
}

_AIRCRAFT_KEYWORD_ALIASES = (
    ("SR22", SR22),
    ("SF50", SF50),
    ("VISION", SF50),
)

# Field names used by the admin configuration screens.
_FIELD_ALIASES = {
    "cruiseSpeed": "cruise_speed_kt",
    "cruiseSpeedKt": "cruise_speed_kt",
    "fuelFlow": "fuel_flow_gph",
    "fuelFlowGph": "fuel_flow_gph",
    "fuelCapacity": "fuel_capacity_gal",
    "fuelCapacityGal": "fuel_capacity_gal",
    "usableFuel": "usable_fuel_gal",
    "usableFuelGal": "usable_fuel_gal",
    "maxTakeoffWeight": "max_takeoff_weight_lbs",
    "maxTakeoffWeightLbs": "max_takeoff_weight_lbs",
    "maxUsefulLoad": "max_useful_load_lbs",
    "maxUsefulLoadLbs": "max_useful_load_lbs",
    "emptyWeight": "empty_weight_lbs",
    "fuelWeightPerGallon": "fuel_weight_per_gallon_lbs",
    "fuelWeightPerGallonLbs": "fuel_weight_per_gallon_lbs",
    "avgPersonWeight": "avg_person_weight_lbs",
    "avgPersonWeightLbs": "avg_person_weight_lbs",
    "avgBagWeight": "avg_bag_weight_lbs",
    "avgBagWeightLbs": "avg_bag_weight_lbs",
    "taxiFuel": "taxi_fuel_gal",
    "taxiFuelGal": "taxi_fuel_gal",
    "contingencyFuelMin": "contingency_fuel_min_gal",
    "contingencyFuelMinGal": "contingency_fuel_min_gal",
    "reserveFuel": "reserve_fuel_gal",
    "reserveFuelGal": "reserve_fuel_gal",
    "maxPassengers": "max_passengers",
    "maxBags": "max_bags",
}


def canonical_aircraft(name: Optional[str]) -> Optional[str]:
    """Resolve a free-form aircraft label to a preset key, or ``None``."""

    if not name:
        return None
    normalized = re.sub(r"[\s\-_]+", " ", str(name).upper()).strip()
    direct = _AIRCRAFT_ALIASES.get(normalized)
    if direct:
        return direct
    compact = normalized.replace(" ", "")
    for keyword, alias in _AIRCRAFT_KEYWORD_ALIASES:
        if keyword in compact:
            return alias
    return None


def _normalise_overrides(overrides: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    if not overrides:
        return {}
    normalised: Dict[str, Any] = {}
    for key, value in overrides.items():
        if value is None:
            continue
        field_name = _FIELD_ALIASES.get(str(key), str(key))
        normalised[field_name] = value
    return normalised


def build_aircraft_config(
    aircraft_type: str,
    overrides: Optional[Mapping[str, Any]] = None,
) -> AircraftPerformanceConfig:
    """Return the preset for ``aircraft_type`` with ``overrides`` applied.

    Raises ``KeyError`` for unknown aircraft and ``pydantic.ValidationError``
    when the merged values are not a valid configuration.
    """

    key = canonical_aircraft(aircraft_type)
    if key is None:
        raise KeyError(f"No performance preset for aircraft {aircraft_type!r}")
    values = dict(PRESETS[key])
    values.update(_normalise_overrides(overrides))
    return AircraftPerformanceConfig.model_validate(values)


def build_fleet(
    overrides_by_type: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> Dict[str, AircraftPerformanceConfig]:
    """Validated configs for every preset, keyed by preset name."""

    overrides_by_key: Dict[str, Mapping[str, Any]] = {}
    for label, overrides in (overrides_by_type or {}).items():
        key = canonical_aircraft(label)
        if key is None:
            raise KeyError(f"No performance preset for aircraft {label!r}")
        overrides_by_key[key] = overrides
    return {key: build_aircraft_config(key, overrides_by_key.get(key)) for key in PRESETS}
