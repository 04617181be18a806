from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence

import pandas as pd

from happiness.config import COLOR_SEQUENCE, year_color
from happiness.data.records import CountryYearRecord
from happiness.ui.components.formatting import country_label


def ranking_frame(records: Sequence[CountryYearRecord], with_year: bool) -> pd.DataFrame:
    """Rows for a ranking bar chart; labels stay unique across years."""
    return pd.DataFrame(
        [
            {
                "label": country_label(r.country, r.year, with_year),
                "country": r.country,
                "year": r.year,
                "score": r.score,
            }
            for r in records
        ],
        columns=["label", "country", "year", "score"],
    )


def year_color_map(years: Iterable[str]) -> Dict[str, str]:
    return {year: year_color(year) for year in years}


def series_color_map(countries: Sequence[str], years: Sequence[str], with_year: bool) -> Dict[str, str]:
    """Stable colours for radar series: one per country, or per country/year pair."""
    colors: Dict[str, str] = {}
    for c_idx, country in enumerate(countries):
        if not with_year:
            colors[country] = COLOR_SEQUENCE[c_idx % len(COLOR_SEQUENCE)]
            continue
        for y_idx, year in enumerate(years):
            color_idx = (c_idx * len(years) + y_idx) % len(COLOR_SEQUENCE)
            colors[country_label(country, year, True)] = COLOR_SEQUENCE[color_idx]
    return colors


def color_by(comparing: bool) -> Optional[str]:
    return "year" if comparing else None
