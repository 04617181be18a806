from __future__ import annotations

import pytest

from happiness.config import MAX_SELECTED_COUNTRIES
from happiness.data.state import (
    DashboardState,
    initial_state,
    select_year,
    toggle_comparison,
    toggle_country,
    view_years,
    working_records,
)


def test_initial_state_uses_most_recent_year():
    state = initial_state(["2020", "2021", "2023"])
    assert state == DashboardState(active_year="2023")


def test_initial_state_requires_a_year():
    with pytest.raises(ValueError):
        initial_state([])


def test_entering_comparison_seeds_active_year(by_year):
    state = toggle_comparison(DashboardState(active_year="2021"))
    assert state.comparing
    assert state.comparison_years == ("2021",)
    assert [r.year for r in working_records(state, by_year)] == ["2021", "2021"]


def test_leaving_comparison_restores_single_year(by_year):
    single = DashboardState(active_year="2021")
    comparing = select_year(toggle_comparison(single), "2020")
    assert comparing.comparison_years == ("2021", "2020")

    back = toggle_comparison(comparing)
    assert back == single
    assert working_records(back, by_year) == list(by_year["2021"])


def test_select_year_in_single_mode_sets_active_year():
    state = select_year(DashboardState(active_year="2020"), "2022")
    assert state.active_year == "2022"
    assert view_years(state) == ("2022",)


def test_select_year_in_comparison_mode_toggles_membership():
    state = toggle_comparison(DashboardState(active_year="2020"))
    state = select_year(state, "2022")
    state = select_year(state, "2021")
    assert view_years(state) == ("2020", "2022", "2021")
    state = select_year(state, "2020")
    assert view_years(state) == ("2022", "2021")
    assert state.active_year == "2020"


def test_comparison_union_of_selected_years(by_year):
    state = select_year(toggle_comparison(DashboardState(active_year="2022")), "2020")
    records = working_records(state, by_year)
    assert [(r.country, r.year) for r in records][:2] == [("Denmark", "2022"), ("Finland", "2022")]
    assert len(records) == 5


def test_toggle_country_adds_and_removes():
    state = DashboardState(active_year="2020")
    state, accepted = toggle_country(state, "Chad")
    assert accepted
    assert state.selected_countries == ("Chad",)
    state, accepted = toggle_country(state, "Chad")
    assert accepted
    assert state.selected_countries == ()


def test_country_selection_is_capped():
    state = DashboardState(active_year="2020")
    names = [f"Country {i}" for i in range(MAX_SELECTED_COUNTRIES + 3)]
    outcomes = []
    for name in names:
        state, accepted = toggle_country(state, name)
        outcomes.append(accepted)
    assert len(state.selected_countries) == MAX_SELECTED_COUNTRIES
    assert state.selected_countries == tuple(names[:MAX_SELECTED_COUNTRIES])
    assert outcomes == [True] * MAX_SELECTED_COUNTRIES + [False] * 3
    assert state.at_country_cap


def test_rejected_toggle_returns_same_state():
    state = DashboardState(active_year="2020", selected_countries=tuple("ABCDE"))
    outcome = toggle_country(state, "F")
    assert not outcome.accepted
    assert outcome.state is state


def test_removing_at_cap_frees_a_slot():
    state = DashboardState(active_year="2020", selected_countries=tuple("ABCDE"))
    state, _ = toggle_country(state, "C")
    state, accepted = toggle_country(state, "F")
    assert accepted
    assert state.selected_countries == ("A", "B", "D", "E", "F")


def test_transitions_leave_original_untouched():
    original = DashboardState(active_year="2020")
    toggle_comparison(original)
    toggle_country(original, "Chad")
    assert original == DashboardState(active_year="2020")
