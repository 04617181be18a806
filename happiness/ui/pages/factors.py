from __future__ import annotations

from typing import Sequence

import streamlit as st

from happiness.data.records import FACTOR_LABELS, CountryYearRecord
from happiness.data.stats import factor_averages, factor_averages_by_year, scatter_rows
from happiness.ui.components.charts import bar_chart, render_plotly, scatter_plot
from happiness.ui.pages.context import PageContext
from happiness.ui.pages.helpers import color_by, year_color_map

SCATTER_FACTORS = ("gdp", "social_support")


def _render_averages(records: Sequence[CountryYearRecord], context: PageContext) -> None:
    title = f"Average Factor Contributions{context.title_suffix()}"
    if context.comparing:
        wide = factor_averages_by_year(context.by_year, context.view_years)
        if len(wide.columns) <= 1:
            st.info("Select at least one year to compare.")
            return
        long = wide.melt(id_vars="factor", var_name="year", value_name="value")
        fig = bar_chart(
            long,
            x="factor",
            y="value",
            color="year",
            title=title,
            yaxis_title="Average Value",
            color_map=year_color_map(context.view_years),
        )
    else:
        fig = bar_chart(
            factor_averages(records),
            x="factor",
            y="value",
            color="factor",
            title=title,
            yaxis_title="Average Value",
            text_auto=True,
        )
        fig.update_layout(showlegend=False)
    fig.update_xaxes(title=None)
    render_plotly(fig)
    st.caption("Mean value of each contributing factor across all countries.")


def render(records: Sequence[CountryYearRecord], context: PageContext) -> None:
    st.subheader("Happiness Factors")
    if not records:
        st.info("No countries available for the current year selection.")
        return

    _render_averages(records, context)

    cols = st.columns(len(SCATTER_FACTORS))
    for col, factor in zip(cols, SCATTER_FACTORS):
        label = FACTOR_LABELS[factor]
        with col:
            fig = scatter_plot(
                scatter_rows(records, factor),
                x=factor,
                y="score",
                color=color_by(context.comparing),
                hover_data=["rank", "year"],
                title=f"{label} Impact on Happiness{context.title_suffix()}",
                xaxis_title=label,
                yaxis_title="Happiness Score",
                color_map=year_color_map(context.view_years),
            )
            render_plotly(fig)
