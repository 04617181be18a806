"""
Reusable helpers for rendering data tables with consistent configuration.
"""

from __future__ import annotations

from typing import Dict, Optional, List

import pandas as pd
import streamlit as st

from happiness.ui.components.formatting import format_number, format_signed


def render_table(
    df: pd.DataFrame,
    column_config: Optional[Dict[str, Dict[str, str]]] = None,
    height: int = 300,
    show_index: bool = False,
    export_file_name: str = "export.csv",
    highlight_cols: Optional[List[str]] = None,
) -> None:
    if df.empty:
        st.info("No data to display.")
        return

    formatted_df = df.copy()
    if column_config:
        for column, config in column_config.items():
            if column not in formatted_df.columns:
                continue
            fmt_type = config.get("type")
            decimals = int(config.get("decimals", 2))
            if fmt_type == "signed":
                formatted_df[column] = formatted_df[column].apply(
                    lambda v: format_signed(v, decimals=decimals)
                )
            elif fmt_type == "number":
                formatted_df[column] = formatted_df[column].apply(
                    lambda v: format_number(v, decimals=decimals)
                )

    dataframe_obj = formatted_df
    if highlight_cols:
        highlight_cols = [col for col in highlight_cols if col in formatted_df.columns]
        if highlight_cols:
            def _style_func(val):
                try:
                    num = float(str(val).replace(",", ""))
                except (TypeError, ValueError):
                    return ""
                if num > 0:
                    return "color: #2ca02c;"
                if num < 0:
                    return "color: #d62728;"
                return ""

            dataframe_obj = formatted_df.style.map(_style_func, subset=highlight_cols)

    st.dataframe(
        dataframe_obj,
        use_container_width=True,
        height=height,
        hide_index=not show_index,
    )

    csv_bytes = df.to_csv(index=show_index).encode("utf-8")
    st.download_button(
        "Download CSV",
        data=csv_bytes,
        file_name=export_file_name,
        mime="text/csv",
    )
