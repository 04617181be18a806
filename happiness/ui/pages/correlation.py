from __future__ import annotations

from typing import Sequence

import streamlit as st

from happiness.data.records import FACTOR_LABELS, CountryYearRecord
from happiness.data.stats import correlation_table, correlation_table_by_year, scatter_rows
from happiness.ui.components.charts import bar_chart, heatmap, render_plotly, scatter_plot
from happiness.ui.components.tables import render_table
from happiness.ui.pages.context import PageContext
from happiness.ui.pages.helpers import color_by, year_color_map

SCATTER_FACTORS = ("gdp", "freedom", "health")


def _scatter(records: Sequence[CountryYearRecord], context: PageContext, factor: str) -> None:
    label = FACTOR_LABELS[factor]
    fig = scatter_plot(
        scatter_rows(records, factor),
        x=factor,
        y="score",
        color=color_by(context.comparing),
        hover_data=["rank", "year"],
        title=f"{label} vs Happiness{context.title_suffix()}",
        xaxis_title=label,
        yaxis_title="Happiness Score",
        color_map=year_color_map(context.view_years),
    )
    render_plotly(fig)


def render(records: Sequence[CountryYearRecord], context: PageContext) -> None:
    st.subheader("Correlation Analysis")
    if not records:
        st.info("No countries available for the current year selection.")
        return

    _scatter(records, context, SCATTER_FACTORS[0])
    left, right = st.columns(2)
    for col, factor in zip((left, right), SCATTER_FACTORS[1:]):
        with col:
            _scatter(records, context, factor)

    st.markdown(f"### Factor Correlation with Happiness{context.title_suffix()}")
    if context.comparing:
        table = correlation_table_by_year(context.by_year, context.view_years)
        if len(table.columns) <= 1:
            st.info("Select at least one year to compare.")
            return
        fig = heatmap(table, index="factor", title="Pearson correlation by year", zrange=[-1, 1])
        render_plotly(fig)
        export_name = "factor_correlation_by_year.csv"
        signed_cols = [col for col in table.columns if col != "factor"]
    else:
        table = correlation_table(records)
        fig = bar_chart(
            table,
            x="factor",
            y="correlation",
            color="factor",
            title="Pearson correlation",
            yaxis_title="Correlation",
            text_auto=True,
        )
        fig.update_yaxes(range=[-1, 1])
        fig.update_xaxes(title=None)
        fig.update_layout(showlegend=False)
        render_plotly(fig)
        export_name = f"factor_correlation_{context.state.active_year}.csv"
        signed_cols = ["correlation"]

    st.caption(
        "Values near +1 or -1 indicate a strong relationship with the happiness score. "
        "A factor with no variation is reported as 0."
    )
    render_table(
        table,
        column_config={col: {"type": "signed", "decimals": 3} for col in signed_cols},
        height=260,
        export_file_name=export_name,
        highlight_cols=signed_cols,
    )
