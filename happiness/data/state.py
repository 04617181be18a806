"""
Immutable dashboard view state and its transitions.

The dashboard is either in single-year mode (one active year) or comparing
several years. Every transition returns a new `DashboardState`; derived
views read the working set through `view_years` / `working_records`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, NamedTuple, Sequence, Tuple

from happiness.config import MAX_SELECTED_COUNTRIES
from happiness.data.records import CountryYearRecord
from happiness.data.stats import RecordsByYear, union_across_years

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardState:
    active_year: str
    comparing: bool = False
    comparison_years: Tuple[str, ...] = ()
    selected_countries: Tuple[str, ...] = ()

    @property
    def at_country_cap(self) -> bool:
        return len(self.selected_countries) >= MAX_SELECTED_COUNTRIES


class SelectionOutcome(NamedTuple):
    state: DashboardState
    accepted: bool


def initial_state(available_years: Sequence[str]) -> DashboardState:
    if not available_years:
        raise ValueError("initial_state requires at least one available year")
    return DashboardState(active_year=available_years[-1])


def toggle_comparison(state: DashboardState) -> DashboardState:
    if state.comparing:
        return replace(state, comparing=False, comparison_years=())
    return replace(state, comparing=True, comparison_years=(state.active_year,))


def select_year(state: DashboardState, year: str) -> DashboardState:
    if not state.comparing:
        return replace(state, active_year=year)
    if year in state.comparison_years:
        years = tuple(y for y in state.comparison_years if y != year)
    else:
        years = state.comparison_years + (year,)
    return replace(state, comparison_years=years)


def toggle_country(state: DashboardState, country: str) -> SelectionOutcome:
    if country in state.selected_countries:
        remaining = tuple(c for c in state.selected_countries if c != country)
        return SelectionOutcome(replace(state, selected_countries=remaining), True)
    if state.at_country_cap:
        logger.debug("Country selection full, ignoring %s", country)
        return SelectionOutcome(state, False)
    return SelectionOutcome(
        replace(state, selected_countries=state.selected_countries + (country,)),
        True,
    )


def view_years(state: DashboardState) -> Tuple[str, ...]:
    return state.comparison_years if state.comparing else (state.active_year,)


def working_records(state: DashboardState, by_year: RecordsByYear) -> List[CountryYearRecord]:
    return union_across_years(view_years(state), by_year)
