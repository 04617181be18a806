"""
Layout helpers for the Streamlit application (page config and sidebar controls).

`DashboardState` in session state is the single source of truth; the
sidebar widgets mirror it and their callbacks apply state transitions.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Sequence

import streamlit as st

from happiness.config import MAX_SELECTED_COUNTRIES
from happiness.data.state import (
    DashboardState,
    initial_state,
    select_year,
    toggle_comparison,
    toggle_country,
    working_records,
)
from happiness.data.stats import distinct_countries
from happiness.errors import HappinessDataError

STATE_KEY = "hd_state"
REJECTED_KEY = "hd_rejected_countries"
COMPARING_KEY = "hd_comparing"
ACTIVE_YEAR_KEY = "hd_active_year"
COMPARE_YEARS_KEY = "hd_compare_years"
COUNTRIES_KEY = "hd_countries"


def setup_page() -> None:
    """Set Streamlit page configuration."""
    st.set_page_config(
        page_title="World Happiness Dashboard",
        layout="wide",
        page_icon=":earth_africa:",
    )


def current_state(available_years: Sequence[str]) -> DashboardState:
    """Session state, reset or pruned when the loaded years change."""
    state = st.session_state.get(STATE_KEY)
    if not isinstance(state, DashboardState) or state.active_year not in available_years:
        state = initial_state(available_years)
    elif state.comparing:
        kept = tuple(y for y in state.comparison_years if y in available_years)
        if kept != state.comparison_years:
            state = replace(state, comparison_years=kept)
    st.session_state[STATE_KEY] = state
    return state


def _on_comparison_toggle() -> None:
    st.session_state[STATE_KEY] = toggle_comparison(st.session_state[STATE_KEY])


def _on_active_year() -> None:
    st.session_state[STATE_KEY] = select_year(st.session_state[STATE_KEY], st.session_state[ACTIVE_YEAR_KEY])


def _on_compare_years() -> None:
    state: DashboardState = st.session_state[STATE_KEY]
    picked: List[str] = list(st.session_state[COMPARE_YEARS_KEY])
    # select_year toggles membership while comparing
    for year in state.comparison_years:
        if year not in picked:
            state = select_year(state, year)
    for year in picked:
        if year not in state.comparison_years:
            state = select_year(state, year)
    st.session_state[STATE_KEY] = state


def _on_countries() -> None:
    state: DashboardState = st.session_state[STATE_KEY]
    picked: List[str] = list(st.session_state[COUNTRIES_KEY])
    changes = [c for c in state.selected_countries if c not in picked]
    changes += [c for c in picked if c not in state.selected_countries]
    rejected: List[str] = []
    for country in changes:
        state, accepted = toggle_country(state, country)
        if not accepted:
            rejected.append(country)
    st.session_state[STATE_KEY] = state
    st.session_state[REJECTED_KEY] = rejected


def sidebar_controls(by_year, available_years: List[str]) -> DashboardState:
    state = current_state(available_years)
    st.sidebar.header("View")

    # Widgets mirror the state; assigned before creation so callbacks see fresh values
    st.session_state[COMPARING_KEY] = state.comparing
    st.sidebar.toggle(
        "Compare Years",
        key=COMPARING_KEY,
        on_change=_on_comparison_toggle,
        help="Compute every view over several years instead of one.",
    )

    if state.comparing:
        st.session_state[COMPARE_YEARS_KEY] = list(state.comparison_years)
        st.sidebar.multiselect(
            "Compare Years",
            options=available_years,
            key=COMPARE_YEARS_KEY,
            on_change=_on_compare_years,
        )
    else:
        st.session_state[ACTIVE_YEAR_KEY] = state.active_year
        st.sidebar.radio(
            "Select Year",
            options=available_years,
            key=ACTIVE_YEAR_KEY,
            on_change=_on_active_year,
            horizontal=True,
        )

    records = working_records(state, by_year)
    options = sorted(set(distinct_countries(records)) | set(state.selected_countries))
    st.session_state[COUNTRIES_KEY] = list(state.selected_countries)
    st.sidebar.multiselect(
        f"Countries (max {MAX_SELECTED_COUNTRIES})",
        options=options,
        key=COUNTRIES_KEY,
        on_change=_on_countries,
        help="Used by the Country Comparison and Trends tabs.",
    )
    rejected = st.session_state.pop(REJECTED_KEY, None)
    if rejected:
        st.sidebar.warning(
            f"At most {MAX_SELECTED_COUNTRIES} countries can be compared. "
            f"Not added: {', '.join(rejected)}."
        )
    return state


def load_diagnostics(failures: Dict[str, HappinessDataError]) -> None:
    if not failures:
        return
    with st.sidebar.expander(f"Unavailable years ({len(failures)})", expanded=False):
        for year, error in failures.items():
            st.write(f"- **{year}**: {error}")
