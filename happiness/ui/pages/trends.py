from __future__ import annotations

from typing import Sequence

import streamlit as st

from happiness.config import COLOR_SEQUENCE
from happiness.data.records import FACTOR_LABELS, FACTORS, CountryYearRecord
from happiness.data.stats import average_score_by_year, factor_evolution, factor_trend, trend_rows
from happiness.ui.components.charts import SCORE_RANGE, combo_chart, line_chart, radar_chart, render_plotly
from happiness.ui.pages.context import PageContext

# Factor -> (bar label, bar colour)
TREND_FACTORS = {
    "gdp": ("Average GDP Factor", COLOR_SEQUENCE[0]),
    "social_support": ("Average Social Support", COLOR_SEQUENCE[3]),
}


def _render_country_trends(context: PageContext) -> None:
    countries = list(context.countries)
    rows = trend_rows(context.by_year, countries, context.available_years)
    if rows.empty:
        st.info("The selected countries have no data in the loaded years.")
        return
    fig = line_chart(
        rows,
        x="year",
        y="score",
        color="country",
        title="Country Happiness Trends",
        yaxis_title="Happiness Score",
        yaxis_range=SCORE_RANGE,
        color_map={c: COLOR_SEQUENCE[i % len(COLOR_SEQUENCE)] for i, c in enumerate(countries)},
    )
    fig.update_xaxes(categoryorder="array", categoryarray=list(context.available_years))
    render_plotly(fig)
    st.caption("Happiness score trends for selected countries over time.")


def _render_factor_evolution(context: PageContext) -> None:
    st.markdown("### Factor Evolution for Selected Countries")
    factor_names = [FACTOR_LABELS[f] for f in FACTORS]
    factor_colors = {name: COLOR_SEQUENCE[i % len(COLOR_SEQUENCE)] for i, name in enumerate(factor_names)}
    cols = st.columns(2)
    for idx, country in enumerate(context.countries):
        evolution = factor_evolution(context.by_year, country, context.available_years)
        with cols[idx % 2]:
            fig = radar_chart(
                evolution.to_dict("records"),
                axis_key="year",
                series=factor_names,
                title=country,
                radial_range=[0, 2],
                color_map=factor_colors,
            )
            render_plotly(fig)


def render(records: Sequence[CountryYearRecord], context: PageContext) -> None:
    st.subheader("Trends Over Time")

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

    if context.countries:
        _render_country_trends(context)

    cols = st.columns(len(TREND_FACTORS))
    for col, (factor, (bar_name, bar_color)) in zip(cols, TREND_FACTORS.items()):
        with col:
            fig = combo_chart(
                factor_trend(context.by_year, context.available_years, factor),
                x="year",
                bar_y="average",
                line_y="correlation",
                bar_name=bar_name,
                line_name="Correlation with Happiness",
                title=f"{FACTOR_LABELS[factor]} Factor Trends",
                bar_color=bar_color,
            )
            render_plotly(fig)
            st.caption(f"How the {FACTOR_LABELS[factor]} contribution to happiness has changed over time.")

    if context.countries:
        _render_factor_evolution(context)
