"""
CSV parsing for a single year of World Happiness Report data.

Turns the raw CSV text for one year into an ordered list of
`CountryYearRecord`. Columns are matched by their exact header label; the
GDP header in the published files carries a literal trailing tab, so it is
matched verbatim.
"""

from __future__ import annotations

import io
import logging
import re
from typing import Dict, List

import numpy as np
import pandas as pd

from happiness.data.records import CountryYearRecord
from happiness.errors import ParseFailure

logger = logging.getLogger(__name__)

# pandas C tokenizer message for a row longer than the header
EXTRA_FIELDS_ERROR = re.compile(r"Expected \d+ fields in line \d+, saw \d+")

COLUMN_MAP: Dict[str, str] = {
    "Country name": "country",
    "Happiness Rank": "rank",
    "Happiness score": "score",
    "Economy (GDP per Capita)\t": "gdp",
    "Social support": "social_support",
    "Healthy life expectancy": "health",
    "Freedom to make life choices": "freedom",
    "Generosity": "generosity",
    "Perceptions of corruption": "corruption",
}

INT_FIELDS = ("rank",)
FLOAT_FIELDS = (
    "score",
    "gdp",
    "social_support",
    "health",
    "freedom",
    "generosity",
    "corruption",
)


def _read_csv(raw_text: str, **kwargs) -> pd.DataFrame:
    return pd.read_csv(
        io.StringIO(raw_text),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        index_col=False,
        **kwargs,
    )


def _read_trimmed(raw_text: str, year: str) -> pd.DataFrame:
    """Re-read with rows longer than the header cut down to the header width."""
    width = len(_read_csv(raw_text, nrows=0).columns)
    trimmed = 0

    def _trim(bad_line: List[str]) -> List[str]:
        nonlocal trimmed
        trimmed += 1
        return bad_line[:width]

    try:
        df = _read_csv(raw_text, engine="python", on_bad_lines=_trim)
    except pd.errors.ParserError as exc:
        raise ParseFailure(year, str(exc)) from exc
    logger.warning("Ignored extra trailing fields on %d rows for %s", trimmed, year)
    return df


def _read_raw(raw_text: str, year: str) -> pd.DataFrame:
    try:
        return _read_csv(raw_text)
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except pd.errors.ParserError as exc:
        if not EXTRA_FIELDS_ERROR.search(str(exc)):
            raise ParseFailure(year, str(exc)) from exc
    return _read_trimmed(raw_text, year)


def _raw_column(df: pd.DataFrame, label: str) -> pd.Series:
    if label not in df.columns:
        return pd.Series("", index=df.index, dtype=object)
    return df[label].fillna("").astype(str).str.strip()


def _to_float(series: pd.Series) -> pd.Series:
    return pd.to_numeric(series, errors="coerce").fillna(0.0).astype(float)


def _to_int(series: pd.Series) -> pd.Series:
    numeric = pd.to_numeric(series, errors="coerce").replace([np.inf, -np.inf], np.nan)
    return np.trunc(numeric.fillna(0)).astype(int)


def parse(raw_text: str, year: str) -> List[CountryYearRecord]:
    """Parse one year's CSV text into records, preserving row order.

    Rows without a country name or a happiness score are dropped. Every
    other missing or non-numeric value becomes 0, and fields past the
    header width are ignored. Raises `ParseFailure` when the text cannot be
    tokenised; nothing partial is returned.
    """
    df = _read_raw(raw_text, year)
    if df.empty:
        return []

    raw = {field: _raw_column(df, label) for label, field in COLUMN_MAP.items()}
    keep = (raw["country"] != "") & (raw["score"] != "")
    dropped = int((~keep).sum())
    if dropped:
        logger.debug("Dropped %d rows without country or score for %s", dropped, year)

    columns: Dict[str, pd.Series] = {"country": raw["country"][keep]}
    for field in INT_FIELDS:
        columns[field] = _to_int(raw[field][keep])
    for field in FLOAT_FIELDS:
        columns[field] = _to_float(raw[field][keep])

    cleaned = pd.DataFrame(columns)
    return [
        CountryYearRecord(
            country=row.country,
            rank=int(row.rank),
            score=float(row.score),
            gdp=float(row.gdp),
            social_support=float(row.social_support),
            health=float(row.health),
            freedom=float(row.freedom),
            generosity=float(row.generosity),
            corruption=float(row.corruption),
            year=year,
        )
        for row in cleaned.itertuples(index=False)
    ]
