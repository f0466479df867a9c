"""Aircraft performance envelope solver package."""

from .checker import build_range_table, check_payload, evaluate_mission
from .contracts import AircraftPerformanceConfig, PayloadRequest
from .evaluator import available_fuel_gal, evaluate, evaluate_between, evaluate_route
from .presets import PRESETS, build_aircraft_config, build_fleet, canonical_aircraft
from .schemas import (
    CategoryResult,
    CategoryStatus,
    FlightFeasibilityResult,
    RangeEnvelopeResult,
    combine_statuses,
)
from .solver import boundary_search, max_non_stop_range, max_range_within_time

__all__ = [
    "AircraftPerformanceConfig",
    "CategoryResult",
    "CategoryStatus",
    "FlightFeasibilityResult",
    "PRESETS",
    "PayloadRequest",
    "RangeEnvelopeResult",
    "available_fuel_gal",
    "boundary_search",
    "build_aircraft_config",
    "build_fleet",
    "build_range_table",
    "canonical_aircraft",
    "check_payload",
    "combine_statuses",
    "evaluate",
    "evaluate_between",
    "evaluate_mission",
    "evaluate_route",
    "max_non_stop_range",
    "max_range_within_time",
]
