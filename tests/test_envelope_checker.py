"""Tests for payload checks, mission checks and the range table."""

from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pandas as pd
import pytest

from envelope import PayloadRequest, build_aircraft_config, build_fleet, build_range_table, check_payload, evaluate_mission
from envelope.checker import RANGE_TABLE_COLUMNS


def test_payload_within_limits_passes():
    result = check_payload(build_aircraft_config("SR22"), PayloadRequest(passengers=2, bags=2))

    assert result.status == "PASS"
    assert "within Cirrus SR22 limits" in result.summary
    assert result.details["payloadWeightLbs"] == 430


def test_too_many_passengers_fails():
    result = check_payload(build_aircraft_config("SR22"), PayloadRequest(passengers=5, bags=0))

    assert result.status == "FAIL"
    assert "cannot accommodate 5 passengers" in result.summary


def test_too_many_bags_fails():
    result = check_payload(build_aircraft_config("SR22"), PayloadRequest(passengers=1, bags=5))

    assert result.status == "FAIL"
    assert "cannot carry 5 bags" in result.summary


def test_payload_heavier_than_useful_load_fails():
    config = build_aircraft_config("SR22", {"avgPersonWeight": 320})

    result = check_payload(config, PayloadRequest(passengers=4, bags=0))

    assert result.status == "FAIL"
    assert "exceeds" in result.summary
    assert any("Overweight by 64 lb" in issue for issue in result.issues)


def test_short_mission_passes():
    result = evaluate_mission(500, build_aircraft_config("Vision Jet"), PayloadRequest(passengers=2), 0)

    assert result.status == "PASS"
    assert "can fly 500 nm non-stop" in result.summary
    assert result.details["feasibility"]["can_make_it_non_stop"] is True


def test_heavy_long_jet_mission_triggers_payload_range_caution():
    result = evaluate_mission(710, build_aircraft_config("SF50"), PayloadRequest(passengers=4, bags=7), 0)

    assert result.status == "CAUTION"
    assert "tech stop" in result.summary
    assert any("rule of thumb" in issue for issue in result.issues)


def test_mission_beyond_range_fails():
    result = evaluate_mission(900, build_aircraft_config("SR22"), PayloadRequest(passengers=1), 0)

    assert result.status == "FAIL"
    assert "cannot fly 900 nm" in result.summary
    assert any("Required fuel exceeds usable fuel" in issue for issue in result.issues)


def test_mission_into_overwhelming_headwind_fails():
    result = evaluate_mission(100, build_aircraft_config("SR22"), PayloadRequest(passengers=1), 200)

    assert result.status == "FAIL"
    assert any("Headwind meets or exceeds" in issue for issue in result.issues)


def test_mission_with_invalid_payload_returns_payload_failure():
    result = evaluate_mission(100, build_aircraft_config("SR22"), PayloadRequest(passengers=6), 0)

    assert result.status == "FAIL"
    assert "cannot accommodate" in result.summary


def test_range_table_has_one_row_per_aircraft():
    table = build_range_table(build_fleet(), PayloadRequest(passengers=2, bags=2), 0)

    assert list(table.columns) == RANGE_TABLE_COLUMNS
    rows = table.set_index("aircraft")
    assert rows.loc["Cirrus SR22", "non_stop_nm"] == 697
    assert rows.loc["Cirrus SF50 Vision Jet", "non_stop_nm"] == 1018
    assert rows.loc["Cirrus SR22", "budget_nm"] == 344
    assert rows.loc["Cirrus SF50 Vision Jet", "budget_nm"] == 616
    assert set(rows["status"]) == {"PASS"}
    assert "fuel-limited" in rows.loc["Cirrus SR22", "summary"]


def test_range_table_uses_per_aircraft_winds():
    payload = PayloadRequest(passengers=2, bags=2)

    calm = build_range_table(build_fleet(), payload, 0).set_index("aircraft")
    windy = build_range_table(build_fleet(), payload, {"SR22": 20}).set_index("aircraft")

    assert windy.loc["Cirrus SR22", "wind_kt"] == 20
    assert windy.loc["Cirrus SR22", "non_stop_nm"] < calm.loc["Cirrus SR22", "non_stop_nm"]
    assert windy.loc["Cirrus SF50 Vision Jet", "non_stop_nm"] == calm.loc["Cirrus SF50 Vision Jet", "non_stop_nm"]


def test_range_table_reports_payload_failures_without_solving():
    table = build_range_table(build_fleet(), PayloadRequest(passengers=5, bags=0), 0).set_index("aircraft")

    assert table.loc["Cirrus SR22", "status"] == "FAIL"
    assert pd.isna(table.loc["Cirrus SR22", "non_stop_nm"])
    assert table.loc["Cirrus SF50 Vision Jet", "status"] == "PASS"


def test_zero_fuel_weight_above_mtow_fails():
    config = build_aircraft_config("SR22", {"emptyWeight": 3300})

    result = check_payload(config, PayloadRequest(passengers=2, bags=0))

    assert result.status == "FAIL"
    assert "MTOW" in result.summary
    assert result.details["zeroFuelWeightLbs"] == 3670
    assert any("exceeds MTOW 3650 lb by 20 lb" in issue for issue in result.issues)


def test_mission_over_mtow_before_fuel_fails_as_payload_problem():
    config = build_aircraft_config("SR22", {"emptyWeight": 3300})

    result = evaluate_mission(100, config, PayloadRequest(passengers=2, bags=0), 0)

    assert result.status == "FAIL"
    assert "MTOW" in result.summary


def test_weight_limited_mission_names_weight_as_the_limit():
    config = build_aircraft_config("SR22", {"emptyWeight": 3000})

    result = evaluate_mission(600, config, PayloadRequest(passengers=2, bags=0), 0)

    assert result.status == "FAIL"
    assert any("Weight limits fuel below tank capacity" in issue for issue in result.issues)


def test_mission_lists_fuel_load_weight():
    result = evaluate_mission(500, build_aircraft_config("Vision Jet"), PayloadRequest(passengers=2), 0)

    assert "Fuel load: 1983 lb" in result.issues


def test_range_table_resolves_wind_aliases():
    table = build_range_table(build_fleet(), PayloadRequest(passengers=2, bags=2), {"Vision Jet": 40})
    rows = table.set_index("aircraft")

    assert rows.loc["Cirrus SF50 Vision Jet", "wind_kt"] == 40
    assert rows.loc["Cirrus SR22", "wind_kt"] == 0


def test_range_table_rejects_winds_for_unknown_aircraft():
    with pytest.raises(KeyError):
        build_range_table(build_fleet(), PayloadRequest(passengers=2, bags=2), {"Learjet 45": 5})


def test_range_table_keeps_fractional_winds():
    payload = PayloadRequest(passengers=2, bags=2)

    table = build_range_table(build_fleet(), payload, {"SR22": 12.5}).set_index("aircraft")
    rounded = build_range_table(build_fleet(), payload, {"SR22": 12}).set_index("aircraft")

    assert table.loc["Cirrus SR22", "wind_kt"] == 12.5
    assert table.loc["Cirrus SR22", "non_stop_nm"] <= rounded.loc["Cirrus SR22", "non_stop_nm"]
