"""Boundary searches for the largest flyable distance."""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional, Tuple

from .contracts import AircraftPerformanceConfig, PayloadRequest
from .evaluator import evaluate
from .schemas import FlightFeasibilityResult, RangeEnvelopeResult

logger = logging.getLogger(__name__)

# Upper bounds for the integer search. They must exceed any realistic answer
# for the aircraft class; answers at ``bound - 1`` are flagged ``bound_reached``.
NON_STOP_SEARCH_BOUND_NM = 2000
TIMED_SEARCH_BOUND_NM = 1000
DEFAULT_BUDGET_MINUTES = 120.0

Predicate = Callable[[int], Tuple[bool, FlightFeasibilityResult]]


def boundary_search(
    accept: Predicate, *, high: int
) -> Tuple[int, Optional[FlightFeasibilityResult], bool]:
    """Largest distance in ``[0, high)`` accepted by ``accept``.

    ``accept`` must be monotonic: once a distance is rejected, every farther
    distance is rejected too. Returns ``(distance, evaluation, bound_reached)``;
    ``evaluation`` is ``None`` when zero itself is rejected.
    """

    if high < 1:
        raise ValueError(f"search bound must be at least 1 nm, got {high!r}")

    ok, best = accept(0)
    if not ok:
        return 0, None, False

    low = 0
    bound_reached = True
    while high - low > 1:
        mid = (low + high) // 2
        ok, result = accept(mid)
        if ok:
            low = mid
            best = result
        else:
            high = mid
            bound_reached = False
    return low, best, bound_reached


def _search(
    accept: Predicate, *, bound: int, label: str, config: AircraftPerformanceConfig
) -> RangeEnvelopeResult:
    distance, best, bound_reached = boundary_search(accept, high=bound)
    if best is None:
        logger.debug("%s: %s is not flyable at any distance", label, config.name or "aircraft")
        return RangeEnvelopeResult(
            max_distance_nm=0,
            time_at_max_distance_minutes=0.0,
            infeasible_at_any_distance=True,
            search_bound_nm=bound,
        )
    if bound_reached:
        logger.debug("%s: %s range clipped at the %d nm search bound", label, config.name or "aircraft", bound)
    return RangeEnvelopeResult(
        max_distance_nm=distance,
        time_at_max_distance_minutes=best.elapsed_time_minutes,
        search_bound_nm=bound,
        bound_reached=bound_reached,
        limiting=best,
    )


def max_non_stop_range(
    config: AircraftPerformanceConfig,
    payload: PayloadRequest,
    wind_kt: float = 0,
    *,
    search_bound_nm: int = NON_STOP_SEARCH_BOUND_NM,
) -> RangeEnvelopeResult:
    """Farthest whole-NM distance flyable non-stop with reserves."""

    def accept(distance: int) -> Tuple[bool, FlightFeasibilityResult]:
        result = evaluate(distance, config, payload, wind_kt)
        return result.can_make_it_non_stop, result

    return _search(accept, bound=search_bound_nm, label="non-stop range", config=config)


def max_range_within_time(
    config: AircraftPerformanceConfig,
    payload: PayloadRequest,
    wind_kt: float = 0,
    budget_minutes: float = DEFAULT_BUDGET_MINUTES,
    *,
    search_bound_nm: int = TIMED_SEARCH_BOUND_NM,
) -> RangeEnvelopeResult:
    """Farthest whole-NM distance flyable non-stop within ``budget_minutes``."""

    if math.isnan(budget_minutes):
        raise ValueError("budget_minutes must be a number")

    def accept(distance: int) -> Tuple[bool, FlightFeasibilityResult]:
        result = evaluate(distance, config, payload, wind_kt)
        return result.can_make_it_non_stop and result.elapsed_time_minutes <= budget_minutes, result

    label = f"{budget_minutes:g}-minute range"
    return _search(accept, bound=search_bound_nm, label=label, config=config)
