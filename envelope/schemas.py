"""Shared dataclasses returned by the evaluator, solver and checkers."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Literal, Mapping, Optional

CategoryStatus = Literal["PASS", "CAUTION", "FAIL"]

_STATUS_PRIORITY: Mapping[CategoryStatus, int] = {"PASS": 0, "CAUTION": 1, "FAIL": 2}


def combine_statuses(statuses: Iterable[CategoryStatus]) -> CategoryStatus:
    """Return the most severe status contained in ``statuses``."""

    worst: CategoryStatus = "PASS"
    worst_score = _STATUS_PRIORITY[worst]
    for status in statuses:
        score = _STATUS_PRIORITY.get(status, 0)
        if score > worst_score:
            worst = status  # type: ignore[assignment]
            worst_score = score
    return worst


@dataclass
class CategoryResult:
    """Normalized structure returned by each caller-facing check."""

    status: CategoryStatus = "PASS"
    summary: str = ""
    issues: List[str] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, object]:
        return {
            "status": self.status,
            "summary": self.summary,
            "issues": list(self.issues),
            "details": dict(self.details),
        }


def _finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class FlightFeasibilityResult:
    """Outcome of evaluating a single non-stop distance.

    ``elapsed_time_minutes`` and ``fuel_required_gal`` are ``math.inf`` when the
    ground speed never allows the aircraft to arrive.
    """

    can_make_it_non_stop: bool
    elapsed_time_minutes: float
    fuel_required_gal: float
    weight_constrained: bool
    distance_nm: float = 0.0
    ground_speed_kt: float = 0.0
    available_fuel_gal: float = 0.0
    payload_weight_lbs: float = 0.0
    fuel_margin_percent: Optional[float] = None

    def as_dict(self) -> Dict[str, object]:
        payload = asdict(self)
        payload["elapsed_time_minutes"] = _finite_or_none(self.elapsed_time_minutes)
        payload["fuel_required_gal"] = _finite_or_none(self.fuel_required_gal)
        return payload


@dataclass(frozen=True)
class RangeEnvelopeResult:
    """Maximum distance found by a boundary search."""

    max_distance_nm: int
    time_at_max_distance_minutes: float
    infeasible_at_any_distance: bool = False
    search_bound_nm: int = 0
    bound_reached: bool = False
    limiting: Optional[FlightFeasibilityResult] = None

    @property
    def weight_constrained(self) -> bool:
        return bool(self.limiting and self.limiting.weight_constrained)

    def as_dict(self) -> Dict[str, object]:
        return {
            "max_distance_nm": self.max_distance_nm,
            "time_at_max_distance_minutes": self.time_at_max_distance_minutes,
            "infeasible_at_any_distance": self.infeasible_at_any_distance,
            "search_bound_nm": self.search_bound_nm,
            "bound_reached": self.bound_reached,
            "weight_constrained": self.weight_constrained,
            "limiting": self.limiting.as_dict() if self.limiting is not None else None,
        }
