from __future__ import annotations

from typing import Any, Dict, Tuple

import pandas as pd
import streamlit as st
from pydantic import ValidationError

from envelope import PayloadRequest, build_fleet, build_range_table
from envelope.presets import PRESETS
from envelope.units import format_minutes, hours_to_minutes


_PAGE_CONFIGURED_KEY = "_page_configured"
_DEFAULT_PAGE_TITLE = "Range Envelope"
_DEFAULT_PAGE_ICON = "✈️"

# Inputs exposed for per-aircraft tuning in the sidebar.
_TUNABLE_FIELDS = (
    ("cruise_speed_kt", "Cruise speed (KTAS)"),
    ("fuel_flow_gph", "Fuel flow (gph)"),
    ("usable_fuel_gal", "Usable fuel (gal)"),
    ("max_useful_load_lbs", "Max useful load (lb)"),
    ("reserve_fuel_gal", "Reserve fuel (gal)"),
)

OverrideKey = Tuple[Tuple[str, Tuple[Tuple[str, float], ...]], ...]


def configure_page(*, page_title: str | None = None) -> None:
    """Set the Streamlit page configuration once per run."""

    if not st.session_state.get(_PAGE_CONFIGURED_KEY):
        st.set_page_config(
            page_title=page_title or _DEFAULT_PAGE_TITLE,
            page_icon=_DEFAULT_PAGE_ICON,
            layout="wide",
        )
        st.session_state[_PAGE_CONFIGURED_KEY] = True


def _freeze(overrides: Dict[str, Dict[str, Any]]) -> OverrideKey:
    return tuple(sorted((key, tuple(sorted(values.items()))) for key, values in overrides.items()))


@st.cache_data(show_spinner=False)
def _range_table(
    overrides: OverrideKey,
    passengers: int,
    bags: int,
    winds: Tuple[Tuple[str, int], ...],
    budget_minutes: float,
) -> pd.DataFrame:
    fleet = build_fleet({key: dict(values) for key, values in overrides})
    payload = PayloadRequest(passengers=passengers, bags=bags)
    return build_range_table(fleet, payload, dict(winds), budget_minutes=budget_minutes)


def _render_overrides() -> Dict[str, Dict[str, Any]]:
    overrides: Dict[str, Dict[str, Any]] = {}
    with st.sidebar.expander("Aircraft performance", expanded=False):
        for key, preset in PRESETS.items():
            st.markdown(f"**{preset['name']}**")
            values: Dict[str, Any] = {}
            for field_name, label in _TUNABLE_FIELDS:
                values[field_name] = st.number_input(
                    label,
                    value=float(preset[field_name]),
                    key=f"{key}_{field_name}",
                )
            overrides[key] = values
    return overrides


def main() -> None:
    configure_page()

    st.title("✈️ Non-stop Range Envelope")
    st.caption(
        "Maximum non-stop distance with taxi, contingency and reserve fuel, and the distance "
        "reachable inside a time budget. Planning-grade only."
    )

    max_passengers = max(int(preset["max_passengers"]) for preset in PRESETS.values())
    max_bags = max(int(preset["max_bags"]) for preset in PRESETS.values())
    passengers = int(
        st.sidebar.number_input("Passengers (incl. pilot)", min_value=1, max_value=max_passengers, value=2)
    )
    bags = int(st.sidebar.number_input("Bags", min_value=0, max_value=max_bags, value=2))
    budget_hours = st.sidebar.slider("Time budget (hours)", min_value=0.5, max_value=5.0, value=2.0, step=0.25)

    winds: Dict[str, int] = {}
    for key, preset in PRESETS.items():
        winds[key] = int(
            st.sidebar.slider(
                f"{preset['name']} wind (kt, + headwind)",
                min_value=-60,
                max_value=60,
                value=0,
                key=f"{key}_wind",
            )
        )

    overrides = _render_overrides()

    try:
        table = _range_table(
            _freeze(overrides),
            passengers,
            bags,
            tuple(sorted(winds.items())),
            hours_to_minutes(budget_hours),
        )
    except ValidationError as exc:
        st.error(f"Invalid aircraft configuration: {exc}")
        st.stop()

    display = table.copy()
    display["non_stop_time"] = [
        format_minutes(value) if pd.notna(value) else "—" for value in table["non_stop_minutes"]
    ]
    st.dataframe(
        display[
            ["aircraft", "wind_kt", "non_stop_nm", "non_stop_time", "budget_nm", "weight_constrained", "status", "summary"]
        ],
        hide_index=True,
        use_container_width=True,
    )

    for row in table.itertuples():
        if row.status == "FAIL":
            st.error(f"{row.aircraft}: {row.summary}")
        elif row.status == "CAUTION":
            st.warning(f"{row.aircraft}: {row.summary}")


if __name__ == "__main__":
    main()
