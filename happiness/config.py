"""
Application-wide configuration constants and settings resolution.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import streamlit as st


@dataclass(frozen=True)
class TabConfig:
    key: str
    label: str


# Ordered tab definitions for the dashboard
TABS: List[TabConfig] = [
    TabConfig("overview", "Overview"),
    TabConfig("factors", "Happiness Factors"),
    TabConfig("comparison", "Country Comparison"),
    TabConfig("correlation", "Correlation Analysis"),
    TabConfig("trends", "Trends Over Time"),
]

DEFAULT_YEARS: Tuple[str, ...] = ("2020", "2021", "2022", "2023", "2024")
DEFAULT_DATA_DIR = "data"
DEFAULT_FETCH_TIMEOUT = 10.0

MAX_SELECTED_COUNTRIES = 5
TOP_N = 10

COLOR_SEQUENCE = [
    "#8884d8",
    "#83a6ed",
    "#8dd1e1",
    "#82ca9d",
    "#a4de6c",
    "#d0ed57",
    "#ffc658",
    "#ff8042",
    "#ff6361",
    "#bc5090",
]

YEAR_COLORS: Dict[str, str] = {
    "2020": "#8884d8",
    "2021": "#82ca9d",
    "2022": "#ffc658",
    "2023": "#ff8042",
    "2024": "#ff6361",
}


def year_color(year: str) -> str:
    if year in YEAR_COLORS:
        return YEAR_COLORS[year]
    # Years outside the default palette cycle through the shared sequence
    try:
        return COLOR_SEQUENCE[int(year) % len(COLOR_SEQUENCE)]
    except ValueError:
        return COLOR_SEQUENCE[0]


@dataclass(frozen=True)
class Settings:
    data_url: Optional[str]
    data_dir: str
    years: Tuple[str, ...]
    fetch_timeout: float
    log_level: str


def _get_secret(name: str, default: str | None = None) -> str | None:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except Exception:
        # st.secrets raises when no secrets.toml exists
        pass
    return default


def _parse_list(raw) -> List[str] | None:
    """Accepts a list, a JSON array string, or a comma-separated string."""
    if raw is None:
        return None
    if isinstance(raw, (list, tuple)):
        return [str(x).strip() for x in raw if str(x).strip()]
    s = str(raw).strip()
    if not s:
        return None
    if s.startswith("[") and s.endswith("]"):
        try:
            arr = json.loads(s)
            return [str(x).strip() for x in arr if str(x).strip()]
        except ValueError:
            pass
    if "," in s:
        return [item.strip() for item in s.split(",") if item.strip()]
    return [s]


def _get_list_secret(name: str, default: List[str] | None = None) -> List[str] | None:
    lst = _parse_list(os.getenv(name))
    if lst:
        return lst
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            lst = _parse_list(sec.get(name))  # type: ignore[index]
            if lst:
                return lst
    except Exception:
        pass
    return default


def _parse_timeout(raw: str | None) -> float:
    if raw is None:
        return DEFAULT_FETCH_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_FETCH_TIMEOUT
    return value if value > 0 else DEFAULT_FETCH_TIMEOUT


def load_settings() -> Settings:
    years = _get_list_secret("HAPPINESS_YEARS", default=list(DEFAULT_YEARS)) or list(DEFAULT_YEARS)
    data_url = _get_secret("HAPPINESS_DATA_URL")
    return Settings(
        data_url=data_url.rstrip("/") if data_url else None,
        data_dir=_get_secret("HAPPINESS_DATA_DIR", DEFAULT_DATA_DIR) or DEFAULT_DATA_DIR,
        years=tuple(years),
        fetch_timeout=_parse_timeout(_get_secret("HAPPINESS_FETCH_TIMEOUT")),
        log_level=(_get_secret("LOG_LEVEL", "INFO") or "INFO").upper(),
    )
