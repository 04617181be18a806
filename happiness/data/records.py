"""
Typed record for one country's row in one year's happiness dataset.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Dict, Iterable, List, Tuple

import pandas as pd


@dataclass(frozen=True)
class CountryYearRecord:
    country: str
    rank: int = 0
    score: float = 0.0
    gdp: float = 0.0
    social_support: float = 0.0
    health: float = 0.0
    freedom: float = 0.0
    generosity: float = 0.0
    corruption: float = 0.0
    year: str = ""

    def value(self, field: str) -> float:
        return getattr(self, field)


# Contributing factors, in chart order
FACTORS: Tuple[str, ...] = (
    "gdp",
    "social_support",
    "health",
    "freedom",
    "generosity",
    "corruption",
)

FACTOR_LABELS: Dict[str, str] = {
    "gdp": "GDP",
    "social_support": "Social Support",
    "health": "Health",
    "freedom": "Freedom",
    "generosity": "Generosity",
    "corruption": "Perception of Corruption",
}

RECORD_COLUMNS: List[str] = [f.name for f in fields(CountryYearRecord)]


def records_to_frame(records: Iterable[CountryYearRecord]) -> pd.DataFrame:
    rows = [asdict(record) for record in records]
    if not rows:
        return pd.DataFrame(columns=RECORD_COLUMNS)
    return pd.DataFrame(rows, columns=RECORD_COLUMNS)
