from __future__ import annotations

from typing import List, Sequence

import pandas as pd
import streamlit as st

from happiness.config import TOP_N
from happiness.data.records import CountryYearRecord
from happiness.data.stats import (
    average_score_by_year,
    bottom_n,
    bottom_n_by_year,
    key_statistics,
    score_distribution,
    top_n,
    top_n_by_year,
)
from happiness.ui.components.charts import SCORE_RANGE, line_chart, ranking_bar_chart, render_plotly
from happiness.ui.components.formatting import country_label, format_number
from happiness.ui.components.kpi import KpiCard, render_kpi_cards
from happiness.ui.pages.context import PageContext
from happiness.ui.pages.helpers import color_by, ranking_frame, year_color_map


def _key_stat_cards(records: Sequence[CountryYearRecord], comparing: bool) -> List[KpiCard]:
    stats = key_statistics(records)
    if stats is None:
        return []
    return [
        KpiCard(
            label="Highest Score",
            value=stats.highest.score,
            help_text=country_label(stats.highest.country, stats.highest.year, comparing),
        ),
        KpiCard(
            label="Lowest Score",
            value=stats.lowest.score,
            help_text=country_label(stats.lowest.country, stats.lowest.year, comparing),
        ),
        KpiCard(label="Average Score", value=stats.average_score),
        KpiCard(
            label="Total Data Points" if comparing else "Total Countries",
            value=stats.count,
            decimals=0,
        ),
    ]


def _distribution(records: Sequence[CountryYearRecord], context: PageContext) -> pd.DataFrame:
    if not context.comparing:
        return score_distribution(records)
    frames = [
        score_distribution(context.by_year[year])
        for year in context.view_years
        if context.by_year.get(year)
    ]
    if not frames:
        return score_distribution([])
    return pd.concat(frames, ignore_index=True)


def render(records: Sequence[CountryYearRecord], context: PageContext) -> None:
    st.subheader("Overview")
    if not records:
        st.info("No countries available for the current year selection.")
        return

    comparing = context.comparing
    suffix = context.title_suffix()
    colors = year_color_map(context.view_years)

    if comparing and len(context.available_years) > 1:
        trend = average_score_by_year(context.by_year, context.available_years)
        fig = line_chart(
            trend,
            x="year",
            y="score",
            title="Global Happiness Trends",
            yaxis_title="Average Happiness Score",
            yaxis_range=SCORE_RANGE,
        )
        render_plotly(fig)
        st.caption("Average happiness score across all countries by year.")

    if comparing:
        top = top_n_by_year(context.by_year, context.view_years, TOP_N)
        bottom = bottom_n_by_year(context.by_year, context.view_years, TOP_N)
    else:
        top = top_n(records, TOP_N)
        bottom = bottom_n(records, TOP_N)

    top_col, bottom_col = st.columns(2)
    with top_col:
        fig = ranking_bar_chart(
            ranking_frame(top, comparing),
            title=f"Top {TOP_N} Happiest Countries{suffix}",
            color=color_by(comparing),
            color_map=colors,
        )
        render_plotly(fig)
        st.caption("Countries with the highest happiness scores globally.")
    with bottom_col:
        fig = ranking_bar_chart(
            ranking_frame(bottom, comparing),
            title=f"Bottom {TOP_N} Countries{suffix}",
            color=color_by(comparing),
            color_map=colors,
        )
        render_plotly(fig)
        st.caption("Countries with the lowest happiness scores globally.")

    st.markdown(f"### Key Statistics{suffix}")
    render_kpi_cards(_key_stat_cards(records, comparing), columns=4)

    distribution = _distribution(records, context)
    fig = line_chart(
        distribution,
        x="position",
        y="score",
        color=color_by(comparing),
        title=f"Distribution of Happiness Scores{suffix}",
        xaxis_title="Country Rank",
        yaxis_title="Happiness Score",
        yaxis_range=SCORE_RANGE,
        markers=False,
        color_map=colors,
        hover_data=["country"],
    )
    fig.update_xaxes(type="linear")
    render_plotly(fig)
    st.caption(
        f"Shows how happiness scores are distributed across "
        f"{format_number(len(records), 0)} {'data points' if comparing else 'countries'}."
    )
