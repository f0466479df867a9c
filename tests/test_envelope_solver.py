"""Tests for the range boundary searches."""

from pathlib import Path
import math
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from envelope import (
    AircraftPerformanceConfig,
    PayloadRequest,
    boundary_search,
    build_aircraft_config,
    max_non_stop_range,
    max_range_within_time,
)


def _build_config(**overrides):
    values = {
        "name": "Test Single",
        "cruise_speed_kt": 213,
        "fuel_flow_gph": 25,
        "fuel_capacity_gal": 92,
        "usable_fuel_gal": 92,
        "max_takeoff_weight_lbs": 3600,
        "max_useful_load_lbs": 1000,
        "fuel_weight_per_gallon_lbs": 6,
        "avg_person_weight_lbs": 190,
        "avg_bag_weight_lbs": 30,
        "taxi_fuel_gal": 1,
        "contingency_fuel_min_gal": 2,
        "reserve_fuel_gal": 9,
        "max_passengers": 4,
        "max_bags": 4,
    }
    values.update(overrides)
    return AircraftPerformanceConfig(**values)


SOLO = PayloadRequest(passengers=1, bags=0)


def test_non_stop_range_for_fuel_limited_single():
    result = max_non_stop_range(_build_config(), SOLO, 0)

    assert result.max_distance_nm == 681
    assert result.weight_constrained is False
    assert result.infeasible_at_any_distance is False
    assert result.bound_reached is False
    assert result.search_bound_nm == 2000
    assert result.time_at_max_distance_minutes == pytest.approx(681 / 213 * 60)


def test_headwind_never_extends_range():
    config = _build_config()

    headwind = max_non_stop_range(config, SOLO, 20).max_distance_nm
    calm = max_non_stop_range(config, SOLO, 0).max_distance_nm
    tailwind = max_non_stop_range(config, SOLO, -20).max_distance_nm

    assert headwind <= calm <= tailwind
    assert headwind < tailwind


def test_small_useful_load_reports_weight_limited_range():
    config = _build_config(max_useful_load_lbs=400)

    result = max_non_stop_range(config, SOLO, 0)

    assert result.weight_constrained is True
    assert result.max_distance_nm == 195


def test_small_tank_with_ample_useful_load_is_fuel_limited():
    config = _build_config(fuel_capacity_gal=40, usable_fuel_gal=40, max_useful_load_lbs=2000)

    result = max_non_stop_range(config, SOLO, 0)

    assert result.weight_constrained is False
    assert result.max_distance_nm == 238


def test_overweight_payload_is_flagged_instead_of_zero_range():
    config = _build_config(avg_person_weight_lbs=300)

    result = max_non_stop_range(config, PayloadRequest(passengers=4, bags=0), 0)

    assert result.infeasible_at_any_distance is True
    assert result.max_distance_nm == 0
    assert result.limiting is None
    assert result.as_dict()["infeasible_at_any_distance"] is True


def test_wind_at_cruise_speed_leaves_zero_as_floor():
    result = max_non_stop_range(_build_config(), SOLO, 250)

    assert result.infeasible_at_any_distance is False
    assert result.max_distance_nm == 0
    assert result.time_at_max_distance_minutes == 0


def test_two_hour_range_in_calm_air():
    result = max_range_within_time(_build_config(), SOLO, 0, 120)

    assert result.max_distance_nm == 426
    assert result.search_bound_nm == 1000
    assert result.time_at_max_distance_minutes <= 120


@pytest.mark.parametrize("budget", [15.0, 60.0, 120.0, 600.0, math.inf])
def test_budgeted_range_never_exceeds_non_stop_range(budget):
    config = _build_config()

    timed = max_range_within_time(config, SOLO, 10, budget)
    non_stop = max_non_stop_range(config, SOLO, 10)

    assert timed.max_distance_nm <= non_stop.max_distance_nm


def test_negative_budget_is_infeasible_at_any_distance():
    result = max_range_within_time(_build_config(), SOLO, 0, -1)

    assert result.infeasible_at_any_distance is True


def test_nan_budget_is_rejected():
    with pytest.raises(ValueError):
        max_range_within_time(_build_config(), SOLO, 0, float("nan"))


def test_answer_clipped_by_search_bound_is_flagged():
    result = max_non_stop_range(_build_config(), SOLO, 0, search_bound_nm=100)

    assert result.max_distance_nm == 99
    assert result.bound_reached is True


def test_boundary_search_finds_last_accepted_value():
    calls = []

    def accept(distance):
        calls.append(distance)
        return distance <= 1234, distance

    distance, best, bound_reached = boundary_search(accept, high=2000)

    assert distance == 1234
    assert best == 1234
    assert bound_reached is False
    assert len(calls) <= 12


def test_boundary_search_rejects_empty_domain():
    with pytest.raises(ValueError):
        boundary_search(lambda distance: (True, None), high=0)


def test_repeated_searches_are_identical():
    config = _build_config()

    assert max_non_stop_range(config, SOLO, 5) == max_non_stop_range(config, SOLO, 5)


def test_presets_with_typical_load():
    payload = PayloadRequest(passengers=2, bags=2)

    sr22 = max_non_stop_range(build_aircraft_config("SR22"), payload, 0)
    jet = max_non_stop_range(build_aircraft_config("Vision Jet"), payload, 0)

    assert sr22.max_distance_nm == 697
    assert jet.max_distance_nm == 1018
    assert not sr22.weight_constrained
    assert not jet.weight_constrained
