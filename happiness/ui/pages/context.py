from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Sequence, Tuple

from happiness.data.records import CountryYearRecord
from happiness.data.state import DashboardState, view_years


@dataclass
class PageContext:
    state: DashboardState
    by_year: Mapping[str, Sequence[CountryYearRecord]]
    available_years: List[str]

    @property
    def comparing(self) -> bool:
        return self.state.comparing

    @property
    def view_years(self) -> Tuple[str, ...]:
        return view_years(self.state)

    @property
    def countries(self) -> Tuple[str, ...]:
        return self.state.selected_countries

    def title_suffix(self) -> str:
        """Heading suffix such as " (2023)"; empty when comparing years."""
        return "" if self.comparing else f" ({self.state.active_year})"
