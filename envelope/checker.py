"""Caller-facing checks and the per-aircraft range table."""

from __future__ import annotations

from typing import Dict, List, Mapping, Union

import pandas as pd

from .contracts import AircraftPerformanceConfig, PayloadRequest
from .evaluator import evaluate
from .schemas import CategoryResult, CategoryStatus, combine_statuses
from .solver import DEFAULT_BUDGET_MINUTES, max_non_stop_range, max_range_within_time
from .presets import canonical_aircraft
from .units import format_minutes, fuel_weight_lbs

PAYLOAD_RANGE_BUFFER_NM = 50

RANGE_TABLE_COLUMNS = [
    "aircraft",
    "wind_kt",
    "non_stop_nm",
    "non_stop_minutes",
    "budget_minutes",
    "budget_nm",
    "weight_constrained",
    "status",
    "summary",
]


def _label(config: AircraftPerformanceConfig) -> str:
    return config.name or "Aircraft"


def check_payload(config: AircraftPerformanceConfig, payload: PayloadRequest) -> CategoryResult:
    """Validate ``payload`` against the aircraft's seat, bag and useful-load limits."""

    aircraft = _label(config)
    weight = payload.weight_lbs(config)
    issues = [
        f"Passengers: {payload.passengers} (max {config.max_passengers})",
        f"Bags: {payload.bags} (max {config.max_bags})",
        f"Payload weight: {weight:.0f} lb (useful load {config.max_useful_load_lbs:.0f} lb)",
    ]
    details = {"payloadWeightLbs": weight}

    if payload.passengers > config.max_passengers:
        issues.append("Requested passengers exceed the seats available.")
        return CategoryResult(
            status="FAIL",
            summary=f"{aircraft} cannot accommodate {payload.passengers} passengers",
            issues=issues,
            details=details,
        )

    if payload.bags > config.max_bags:
        issues.append("Requested bags exceed the baggage allowance.")
        return CategoryResult(
            status="FAIL",
            summary=f"{aircraft} cannot carry {payload.bags} bags",
            issues=issues,
            details=details,
        )

    if weight > config.max_useful_load_lbs:
        issues.append(f"Overweight by {weight - config.max_useful_load_lbs:.0f} lb before fuel")
        return CategoryResult(
            status="FAIL",
            summary=f"Payload exceeds {aircraft} useful load",
            issues=issues,
            details=details,
        )

    if config.empty_weight_lbs is not None:
        zero_fuel_weight = config.empty_weight_lbs + weight
        details["zeroFuelWeightLbs"] = zero_fuel_weight
        if zero_fuel_weight > config.max_takeoff_weight_lbs:
            issues.append(
                f"Zero fuel weight {zero_fuel_weight:.0f} lb exceeds MTOW "
                f"{config.max_takeoff_weight_lbs:.0f} lb by {zero_fuel_weight - config.max_takeoff_weight_lbs:.0f} lb"
            )
            return CategoryResult(
                status="FAIL",
                summary=f"Payload puts {aircraft} over MTOW before fuel",
                issues=issues,
                details=details,
            )

    return CategoryResult(
        status="PASS",
        summary=f"Payload within {aircraft} limits",
        issues=issues,
        details=details,
    )


def _payload_range_rule(
    config: AircraftPerformanceConfig, payload_weight_lbs: float, distance_nm: float
) -> CategoryResult:
    constant = config.payload_range_constant
    if constant is None:
        return CategoryResult(status="PASS", summary="No payload/range rule for this aircraft")

    total = payload_weight_lbs + distance_nm
    if total > constant + PAYLOAD_RANGE_BUFFER_NM:
        return CategoryResult(
            status="CAUTION",
            summary="Mission may require a tech stop",
            issues=[
                f"Payload ({payload_weight_lbs:.0f} lbs) + range ({distance_nm:.0f} nm) = {total:.0f}, "
                f"exceeds the {_label(config)} rule of thumb (~{constant:.0f})."
            ],
        )
    return CategoryResult(status="PASS", summary="Within payload/range rule of thumb")


def evaluate_mission(
    distance_nm: float,
    config: AircraftPerformanceConfig,
    payload: PayloadRequest,
    wind_kt: float = 0,
) -> CategoryResult:
    """Payload limits, non-stop feasibility and the payload/range rule for one leg."""

    aircraft = _label(config)
    payload_check = check_payload(config, payload)
    if payload_check.status == "FAIL":
        return payload_check

    result = evaluate(distance_nm, config, payload, wind_kt)
    issues: List[str] = [
        f"Distance: {distance_nm:.0f} nm, wind {wind_kt:+g} kt",
        f"Ground speed: {result.ground_speed_kt:.0f} kt",
        f"Fuel required: {result.fuel_required_gal:.1f} gal of {result.available_fuel_gal:.1f} gal available",
        f"Fuel load: {fuel_weight_lbs(result.available_fuel_gal, config.fuel_weight_per_gallon_lbs):.0f} lb",
    ]
    details: Dict[str, object] = {"feasibility": result.as_dict()}

    if not result.can_make_it_non_stop:
        if result.ground_speed_kt <= 0:
            issues.append("Headwind meets or exceeds cruise speed.")
        elif result.weight_constrained:
            issues.append("Weight limits fuel below tank capacity.")
        else:
            issues.append("Required fuel exceeds usable fuel.")
        return CategoryResult(
            status="FAIL",
            summary=f"{aircraft} cannot fly {distance_nm:.0f} nm non-stop",
            issues=issues,
            details=details,
        )

    issues.append(f"Flight time: {format_minutes(result.elapsed_time_minutes)}")
    if result.fuel_margin_percent is not None:
        issues.append(f"Fuel margin: {result.fuel_margin_percent:.0f}%")

    rule = _payload_range_rule(config, result.payload_weight_lbs, distance_nm)
    issues.extend(rule.issues)
    status: CategoryStatus = combine_statuses([payload_check.status, rule.status])
    if status == "PASS":
        summary = f"{aircraft} can fly {distance_nm:.0f} nm non-stop"
    else:
        summary = f"{aircraft} can fly {distance_nm:.0f} nm non-stop; {rule.summary.lower()}"
    return CategoryResult(status=status, summary=summary, issues=issues, details=details)


def _range_row(
    label: str,
    config: AircraftPerformanceConfig,
    payload: PayloadRequest,
    wind_kt: float,
    budget_minutes: float,
) -> Dict[str, object]:
    row: Dict[str, object] = {
        "aircraft": config.name or label,
        "wind_kt": wind_kt,
        "non_stop_nm": None,
        "non_stop_minutes": None,
        "budget_minutes": budget_minutes,
        "budget_nm": None,
        "weight_constrained": None,
    }

    payload_check = check_payload(config, payload)
    if payload_check.status == "FAIL":
        row.update(status="FAIL", summary=payload_check.summary)
        return row

    non_stop = max_non_stop_range(config, payload, wind_kt)
    if non_stop.infeasible_at_any_distance:
        row.update(status="FAIL", summary="Not flyable at any distance with this load")
        return row

    timed = max_range_within_time(config, payload, wind_kt, budget_minutes)
    row.update(
        non_stop_nm=non_stop.max_distance_nm,
        non_stop_minutes=round(non_stop.time_at_max_distance_minutes, 1),
        budget_nm=timed.max_distance_nm,
        weight_constrained=non_stop.weight_constrained,
    )
    limit = "weight" if non_stop.weight_constrained else "fuel"
    summary = f"{non_stop.max_distance_nm} nm non-stop ({limit}-limited)"
    status: CategoryStatus = "PASS"
    if non_stop.bound_reached:
        status = "CAUTION"
        summary += f"; search bound {non_stop.search_bound_nm} nm reached"
    row.update(status=status, summary=summary)
    return row


def build_range_table(
    configs: Mapping[str, AircraftPerformanceConfig],
    payload: PayloadRequest,
    wind_kt: Union[float, Mapping[str, float]] = 0,
    *,
    budget_minutes: float = DEFAULT_BUDGET_MINUTES,
) -> pd.DataFrame:
    """One row per aircraft with its non-stop and time-budgeted range.

    ``wind_kt`` is either one wind for every aircraft or a mapping keyed by
    aircraft label; labels resolve through the preset aliases and aircraft
    missing from the mapping fly in calm air. Unknown labels raise ``KeyError``.
    """

    winds = _resolve_winds(configs, wind_kt)
    rows = [
        _range_row(label, config, payload, winds[label], budget_minutes)
        for label, config in configs.items()
    ]
    return pd.DataFrame(rows, columns=RANGE_TABLE_COLUMNS)


def _resolve_winds(
    configs: Mapping[str, AircraftPerformanceConfig],
    wind_kt: Union[float, Mapping[str, float]],
) -> Dict[str, float]:
    if not isinstance(wind_kt, Mapping):
        return {label: wind_kt for label in configs}

    by_key = {canonical_aircraft(label) or label: label for label in configs}
    winds: Dict[str, float] = {label: 0 for label in configs}
    for label, wind in wind_kt.items():
        if label in configs:
            winds[label] = wind
            continue
        target = by_key.get(canonical_aircraft(label) or "")
        if target is None:
            raise KeyError(f"No aircraft {label!r} in the range table")
        winds[target] = wind
    return winds
