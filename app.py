import happiness.bootstrap_env  # noqa: F401  must be first to set env/secrets
import logging

import streamlit as st

from happiness.config import TABS, load_settings
from happiness.data.loader import clear_cache, load_data
from happiness.data.state import working_records
from happiness.errors import NoYearsAvailable
from happiness.ui.layout import load_diagnostics, setup_page, sidebar_controls
from happiness.ui.pages import comparison, correlation, factors, overview, trends
from happiness.ui.pages.context import PageContext


PAGE_RENDERERS = {
    "overview": overview.render,
    "factors": factors.render,
    "comparison": comparison.render,
    "correlation": correlation.render,
    "trends": trends.render,
}


def _configure_logging() -> None:
    logging.basicConfig(
        level=load_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _view_summary(context: PageContext, total_rows: int) -> None:
    if context.comparing:
        years = ", ".join(context.view_years) or "none"
        summary = f"Comparing years: {years}"
    else:
        summary = f"Year: {context.state.active_year}"
    if context.countries:
        summary += " | Countries: " + ", ".join(context.countries)
    st.markdown(f"**{summary}**")
    st.caption(f"{total_rows:,} country records in view.")


def main() -> None:
    setup_page()
    _configure_logging()
    st.title("World Happiness Dashboard")
    st.caption("Interactive visualization of the World Happiness Report data.")

    if st.sidebar.button("🔄 Refresh Data"):
        clear_cache()

    with st.spinner("Loading yearly datasets..."):
        report = load_data()

    try:
        report.require_any()
    except NoYearsAvailable as exc:
        st.error(f"Error loading data: {exc}")
        return

    by_year = report.by_year
    available_years = report.available_years
    state = sidebar_controls(by_year, available_years)
    load_diagnostics(report.failures)

    context = PageContext(state=state, by_year=by_year, available_years=available_years)
    records = working_records(state, by_year)
    _view_summary(context, len(records))

    tab_labels = [tab.label for tab in TABS]
    streamlit_tabs = st.tabs(tab_labels)

    for streamlit_tab, tab_config in zip(streamlit_tabs, TABS):
        renderer = PAGE_RENDERERS.get(tab_config.key)
        if renderer is None:
            continue
        with streamlit_tab:
            renderer(records, context)


if __name__ == "__main__":
    main()
