"""Unit conversions and small geometry helpers shared by the solver."""

from __future__ import annotations

import math
from typing import Tuple, Union

EARTH_RADIUS_NM = 3440.065
MINUTES_PER_HOUR = 60.0

Coordinate = Tuple[float, float]


def fuel_weight_lbs(gallons: float, lbs_per_gallon: float) -> float:
    return gallons * lbs_per_gallon


def fuel_gallons(weight_lbs: float, lbs_per_gallon: float) -> float:
    """Convert a fuel weight into gallons for the given fuel density."""

    return weight_lbs / lbs_per_gallon


def hours_to_minutes(hours: float) -> float:
    return hours * MINUTES_PER_HOUR


def gcd_nm(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the great-circle distance between two coordinates in NM."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)
    a = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    return EARTH_RADIUS_NM * (2 * math.atan2(math.sqrt(a), math.sqrt(1 - a)))


def initial_course_deg(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """True course from the first point towards the second, 0-360 degrees."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    delta_lambda = math.radians(lon2 - lon1)
    y = math.sin(delta_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(delta_lambda)
    return (math.degrees(math.atan2(y, x)) + 360) % 360


def headwind_component(
    wind_direction: Union[float, str],
    wind_speed_kt: float,
    course_deg: float,
) -> int:
    """Signed headwind for a course: positive is headwind, negative tailwind.

    Variable winds (``"VRB"``) and calm winds contribute nothing.
    """

    if isinstance(wind_direction, str):
        if wind_direction.strip().upper() == "VRB":
            return 0
        wind_direction = float(wind_direction)
    if wind_speed_kt == 0:
        return 0

    angle = abs(wind_direction - course_deg) % 360
    if angle > 180:
        angle = 360 - angle
    return int(round(wind_speed_kt * math.cos(math.radians(angle))))


def format_minutes(minutes: float) -> str:
    """Render minutes as ``"2h 5m"``; non-finite durations render as ``"—"``."""

    if not math.isfinite(minutes):
        return "—"
    total = int(round(minutes))
    hours, mins = divmod(total, 60)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"
