"""
Plotly chart factory functions with consistent styling for the dashboard.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st
from plotly.subplots import make_subplots

from happiness.config import COLOR_SEQUENCE

DEFAULT_TEMPLATE = "plotly_white"
SCORE_RANGE = [0, 10]


def _configure_layout(
    fig: go.Figure,
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    xaxis_title: Optional[str] = None,
    legend_title: Optional[str] = None,
    hovermode: str = "closest",
) -> go.Figure:
    fig.update_layout(
        template=DEFAULT_TEMPLATE,
        colorway=COLOR_SEQUENCE,
        title=title,
        legend_title=legend_title,
        hovermode=hovermode,
        margin=dict(l=40, r=20, t=60, b=40),
    )
    if yaxis_title:
        fig.update_yaxes(title=yaxis_title)
    if xaxis_title:
        fig.update_xaxes(title=xaxis_title)
    return fig


def render_plotly(fig: go.Figure) -> None:
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})


def line_chart(
    df: pd.DataFrame,
    x: str,
    y: str,
    color: Optional[str] = None,
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    xaxis_title: Optional[str] = None,
    yaxis_range: Optional[List[float]] = None,
    markers: bool = True,
    color_map: Optional[Mapping[str, str]] = None,
    hover_data: Optional[List[str]] = None,
) -> go.Figure:
    fig = px.line(
        df,
        x=x,
        y=y,
        color=color,
        markers=markers,
        color_discrete_map=dict(color_map) if color_map else None,
        hover_data=hover_data,
    )
    fig = _configure_layout(fig, title, yaxis_title, xaxis_title, hovermode="x unified")
    if yaxis_range:
        fig.update_yaxes(range=yaxis_range)
    fig.update_xaxes(type="category")
    return fig


def bar_chart(
    df: pd.DataFrame,
    x: str,
    y: str,
    color: Optional[str] = None,
    barmode: str = "group",
    orientation: str = "v",
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    xaxis_title: Optional[str] = None,
    color_map: Optional[Mapping[str, str]] = None,
    hover_data: Optional[List[str]] = None,
    text_auto: bool = False,
) -> go.Figure:
    fig = px.bar(
        df,
        x=x,
        y=y,
        color=color,
        barmode=barmode,
        orientation=orientation,
        color_discrete_map=dict(color_map) if color_map else None,
        hover_data=hover_data,
        text_auto=".2f" if text_auto else False,
    )
    fig = _configure_layout(fig, title, yaxis_title, xaxis_title)
    if text_auto:
        fig.update_traces(textposition="outside", cliponaxis=False)
    return fig


def ranking_bar_chart(
    df: pd.DataFrame,
    title: str,
    color: Optional[str] = None,
    color_map: Optional[Mapping[str, str]] = None,
) -> go.Figure:
    """Horizontal score bars in the order given, first row at the top."""
    fig = bar_chart(
        df,
        x="score",
        y="label",
        color=color,
        orientation="h",
        title=title,
        xaxis_title="Happiness Score",
        color_map=color_map,
        hover_data=["country", "year"],
    )
    fig.update_xaxes(range=SCORE_RANGE)
    fig.update_yaxes(title=None, categoryorder="array", categoryarray=list(df["label"])[::-1])
    fig.update_layout(height=max(360, 28 * len(df)))
    return fig


def scatter_plot(
    df: pd.DataFrame,
    x: str,
    y: str,
    color: Optional[str] = None,
    hover_data: Optional[List[str]] = None,
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    xaxis_title: Optional[str] = None,
    color_map: Optional[Mapping[str, str]] = None,
) -> go.Figure:
    fig = px.scatter(
        df,
        x=x,
        y=y,
        color=color,
        hover_name="country" if "country" in df.columns else None,
        hover_data=hover_data,
        color_discrete_map=dict(color_map) if color_map else None,
    )
    fig = _configure_layout(fig, title, yaxis_title, xaxis_title)
    fig.update_traces(marker=dict(opacity=0.7, size=8))
    return fig


def heatmap(
    df: pd.DataFrame,
    index: str,
    title: Optional[str] = None,
    color_scale: str = "RdBu",
    zrange: Optional[List[float]] = None,
) -> go.Figure:
    """Heatmap of a wide frame: rows from `index`, one column per remaining field."""
    matrix = df.set_index(index)
    fig = px.imshow(
        matrix,
        color_continuous_scale=color_scale,
        zmin=zrange[0] if zrange else None,
        zmax=zrange[1] if zrange else None,
        aspect="auto",
    )
    fig = _configure_layout(fig, title)
    fig.update_traces(texttemplate="%{z:.2f}", textfont_size=12)
    return fig


def radar_chart(
    rows: Sequence[Dict[str, object]],
    axis_key: str,
    series: Sequence[str],
    title: Optional[str] = None,
    radial_range: Optional[List[float]] = None,
    color_map: Optional[Mapping[str, str]] = None,
) -> go.Figure:
    """One polar trace per series; missing values are left as gaps."""
    categories = [str(row[axis_key]) for row in rows]
    fig = go.Figure()
    for idx, name in enumerate(series):
        values = [row.get(name) for row in rows]
        if all(v is None or pd.isna(v) for v in values):
            continue
        color = (color_map or {}).get(name, COLOR_SEQUENCE[idx % len(COLOR_SEQUENCE)])
        fig.add_trace(
            go.Scatterpolar(
                r=values + values[:1],
                theta=categories + categories[:1],
                name=name,
                fill="toself",
                opacity=0.6,
                line=dict(color=color),
                connectgaps=False,
            )
        )
    fig.update_layout(
        template=DEFAULT_TEMPLATE,
        title=title,
        polar=dict(radialaxis=dict(visible=True, range=radial_range)),
        margin=dict(l=40, r=40, t=60, b=40),
    )
    return fig


def combo_chart(
    df: pd.DataFrame,
    x: str,
    bar_y: str,
    line_y: str,
    bar_name: str,
    line_name: str,
    title: Optional[str] = None,
    bar_color: str = COLOR_SEQUENCE[0],
    line_color: str = "#ff7300",
) -> go.Figure:
    """Bars on the left axis, a correlation line on the right axis in [-1, 1]."""
    fig = make_subplots(specs=[[{"secondary_y": True}]])
    fig.add_trace(go.Bar(x=df[x], y=df[bar_y], name=bar_name, marker_color=bar_color), secondary_y=False)
    fig.add_trace(
        go.Scatter(x=df[x], y=df[line_y], name=line_name, mode="lines+markers", line=dict(color=line_color)),
        secondary_y=True,
    )
    fig = _configure_layout(fig, title, hovermode="x unified")
    fig.update_xaxes(type="category")
    fig.update_yaxes(title_text=bar_name, secondary_y=False)
    fig.update_yaxes(title_text=line_name, range=[-1, 1], secondary_y=True)
    return fig
