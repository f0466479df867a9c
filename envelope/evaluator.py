"""Non-stop feasibility for a single distance.

The evaluator is a pure function of its inputs: it never validates the payload
against anything but the passenger/bag counts and never rounds. Display
rounding belongs to callers.
"""

from __future__ import annotations

import math
from typing import Union

from .contracts import AircraftPerformanceConfig, PayloadRequest
from .schemas import FlightFeasibilityResult
from .units import (
    Coordinate,
    fuel_gallons,
    gcd_nm,
    headwind_component,
    hours_to_minutes,
    initial_course_deg,
)


def weight_limited_fuel_gal(config: AircraftPerformanceConfig, payload_weight_lbs: float) -> float:
    """Fuel the structure allows on top of ``payload_weight_lbs`` (may be negative)."""

    limit = fuel_gallons(config.max_useful_load_lbs - payload_weight_lbs, config.fuel_weight_per_gallon_lbs)
    if config.empty_weight_lbs is not None:
        zero_fuel_weight = config.empty_weight_lbs + payload_weight_lbs
        mtow_limit = fuel_gallons(
            config.max_takeoff_weight_lbs - zero_fuel_weight, config.fuel_weight_per_gallon_lbs
        )
        limit = min(limit, mtow_limit)
    return limit


def available_fuel_gal(config: AircraftPerformanceConfig, payload: PayloadRequest) -> float:
    """Fuel that can be loaded for ``payload``: tank or weight limit, never negative."""

    limit = weight_limited_fuel_gal(config, payload.weight_lbs(config))
    return max(0.0, min(limit, config.usable_fuel_gal))


def _contingency_above_floor_gal(config: AircraftPerformanceConfig, cruise_fuel_gal: float) -> float:
    return max(0.0, cruise_fuel_gal * config.contingency_fraction - config.contingency_fuel_min_gal)


def evaluate(
    distance_nm: float,
    config: AircraftPerformanceConfig,
    payload: PayloadRequest,
    wind_kt: float = 0,
) -> FlightFeasibilityResult:
    """Decide whether ``distance_nm`` can be flown non-stop with legal reserves.

    ``wind_kt`` is positive for a headwind and negative for a tailwind.
    """

    if distance_nm < 0 or math.isnan(distance_nm):
        raise ValueError(f"distance_nm must be non-negative, got {distance_nm!r}")

    ground_speed = config.cruise_speed_kt - wind_kt
    payload_weight = payload.weight_lbs(config)
    weight_limit = weight_limited_fuel_gal(config, payload_weight)
    weight_constrained = weight_limit < config.usable_fuel_gal
    available = max(0.0, min(weight_limit, config.usable_fuel_gal))

    common = dict(
        distance_nm=distance_nm,
        ground_speed_kt=ground_speed,
        available_fuel_gal=available,
        payload_weight_lbs=payload_weight,
    )

    if distance_nm == 0:
        time_hours = 0.0
    elif ground_speed <= 0:
        return FlightFeasibilityResult(
            can_make_it_non_stop=False,
            elapsed_time_minutes=math.inf,
            fuel_required_gal=math.inf,
            weight_constrained=weight_constrained,
            **common,
        )
    else:
        time_hours = distance_nm / ground_speed

    cruise_fuel = time_hours * config.fuel_flow_gph
    required = (
        cruise_fuel
        + config.fixed_reserve_fuel_gal
        + _contingency_above_floor_gal(config, cruise_fuel)
    )

    feasible = (
        weight_limit >= 0
        and payload.within_limits(config)
        and required <= available
    )

    margin = None
    if feasible and required > 0:
        margin = (available - required) / required * 100

    return FlightFeasibilityResult(
        can_make_it_non_stop=feasible,
        elapsed_time_minutes=hours_to_minutes(time_hours),
        fuel_required_gal=required,
        weight_constrained=weight_constrained,
        fuel_margin_percent=margin,
        **common,
    )


def evaluate_between(
    origin: Coordinate,
    destination: Coordinate,
    config: AircraftPerformanceConfig,
    payload: PayloadRequest,
    wind_kt: float = 0,
) -> FlightFeasibilityResult:
    """Evaluate the great-circle leg between two ``(lat, lon)`` points."""

    distance = gcd_nm(origin[0], origin[1], destination[0], destination[1])
    return evaluate(distance, config, payload, wind_kt)


def evaluate_route(
    origin: Coordinate,
    destination: Coordinate,
    config: AircraftPerformanceConfig,
    payload: PayloadRequest,
    wind_direction: Union[float, str],
    wind_speed_kt: float,
) -> FlightFeasibilityResult:
    """Evaluate a leg against a reported wind instead of a precomputed headwind.

    The wind is resolved into a headwind component along the initial
    great-circle course; ``"VRB"`` winds count as calm.
    """

    course = initial_course_deg(origin[0], origin[1], destination[0], destination[1])
    headwind = headwind_component(wind_direction, wind_speed_kt, course)
    return evaluate_between(origin, destination, config, payload, headwind)
