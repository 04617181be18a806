from __future__ import annotations

from typing import Sequence

import streamlit as st

from happiness.config import MAX_SELECTED_COUNTRIES
from happiness.data.records import FACTOR_LABELS, FACTORS, CountryYearRecord
from happiness.data.stats import radar_projection, score_comparison, trend_rows
from happiness.ui.components.charts import SCORE_RANGE, bar_chart, radar_chart, render_plotly
from happiness.ui.components.tables import render_table
from happiness.ui.pages.context import PageContext
from happiness.ui.pages.helpers import series_color_map


def render(records: Sequence[CountryYearRecord], context: PageContext) -> None:
    st.subheader(f"Country Comparison{context.title_suffix()}")
    st.caption(f"Select up to {MAX_SELECTED_COUNTRIES} countries in the sidebar to compare their happiness factors.")

    countries = list(context.countries)
    if not countries:
        st.info("No countries selected yet.")
        return

    years = list(context.view_years)
    colors = series_color_map(countries, years, context.comparing)
    rows = radar_projection(context.by_year, countries, years, with_year=context.comparing)
    fig = radar_chart(
        rows,
        axis_key="factor",
        series=list(colors),
        title="Factor Profile",
        color_map=colors,
    )
    render_plotly(fig)

    scores = score_comparison(context.by_year, countries, years, with_year=context.comparing)
    if scores.empty:
        st.info("None of the selected countries appear in the selected years.")
        return
    fig = bar_chart(
        scores,
        x="label",
        y="score",
        color="label",
        title="Happiness Score Comparison",
        yaxis_title="Happiness Score",
        color_map=colors,
        hover_data=["country", "year"],
    )
    fig.update_yaxes(range=SCORE_RANGE)
    fig.update_xaxes(title=None, tickangle=-45 if context.comparing else 0)
    fig.update_layout(showlegend=False)
    render_plotly(fig)

    st.markdown("#### Selected Countries")
    details = trend_rows(context.by_year, countries, years).rename(
        columns={"country": "Country", "year": "Year", "score": "Score", **FACTOR_LABELS}
    )
    render_table(
        details,
        column_config={
            "Score": {"type": "number", "decimals": 3},
            **{FACTOR_LABELS[f]: {"type": "number", "decimals": 3} for f in FACTORS},
        },
        height=240,
        export_file_name="country_comparison.csv",
    )
