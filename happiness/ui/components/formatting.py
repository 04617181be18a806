"""
Utility helpers for formatting scores, factor values and correlations.
"""

from __future__ import annotations

import math
from typing import Optional


def format_number(value: Optional[float], decimals: int = 2) -> str:
    if value is None:
        return "–"
    try:
        if math.isnan(value):
            return "N/A"
        return f"{value:,.{decimals}f}"
    except (TypeError, ValueError):
        return "–"


def format_signed(value: Optional[float], decimals: int = 2) -> str:
    """Correlation style: always show the sign."""
    if value is None:
        return "–"
    try:
        return f"{value:+.{decimals}f}"
    except (TypeError, ValueError):
        return "–"


def country_label(country: str, year: str, with_year: bool) -> str:
    return f"{country} ({year})" if with_year else country
