"""
Rankings, averages and correlation statistics over parsed yearly records.

All functions are pure: they never mutate the records they receive and
never fetch or cache anything. Callers pass either one year's sequence or
the `by_year` mapping together with the years currently in view.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from happiness.data.records import FACTOR_LABELS, FACTORS, CountryYearRecord, records_to_frame

Records = Sequence[CountryYearRecord]
RecordsByYear = Mapping[str, Records]


@dataclass(frozen=True)
class KeyStatistics:
    highest: CountryYearRecord
    lowest: CountryYearRecord
    average_score: float
    count: int


def top_n(records: Records, n: int, by: str = "score") -> List[CountryYearRecord]:
    # sorted() is stable and reverse=True keeps ties in input order
    return sorted(records, key=lambda r: r.value(by), reverse=True)[: max(n, 0)]


def bottom_n(records: Records, n: int, by: str = "score") -> List[CountryYearRecord]:
    return sorted(records, key=lambda r: r.value(by))[: max(n, 0)]


def average(records: Records, field: str) -> Optional[float]:
    """Arithmetic mean of `field`; None when there are no records."""
    if not records:
        return None
    return sum(r.value(field) for r in records) / len(records)


def union_across_years(selection: Iterable[str], by_year: RecordsByYear) -> List[CountryYearRecord]:
    combined: List[CountryYearRecord] = []
    for year in selection:
        combined.extend(by_year.get(year, ()))
    return combined


def distinct_countries(records: Records) -> List[str]:
    return list(dict.fromkeys(r.country for r in records))


def pearson_correlation(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Pearson's r between two equal-length sequences.

    Pairs with a NaN on either side are ignored. Returns 0 when fewer than
    two valid pairs remain, when the lengths differ, or when either side
    has zero variance, so charts always receive a plottable number.
    """
    if len(xs) != len(ys) or len(xs) == 0:
        return 0.0
    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    valid = ~(np.isnan(x) | np.isnan(y))
    if valid.sum() < 2:
        return 0.0
    x = x[valid]
    y = y[valid]
    # The mean of a constant float series can drift off its value by an ulp
    if np.ptp(x) == 0 or np.ptp(y) == 0:
        return 0.0
    x_diff = x - x.mean()
    y_diff = y - y.mean()
    numerator = float(np.sum(x_diff * y_diff))
    x_denom = float(np.sum(x_diff * x_diff))
    y_denom = float(np.sum(y_diff * y_diff))
    if x_denom == 0 or y_denom == 0:
        return 0.0
    return numerator / math.sqrt(x_denom * y_denom)


def factor_correlation(records: Records, factor: str) -> float:
    return pearson_correlation(
        [r.value(factor) for r in records],
        [r.score for r in records],
    )


def _find(records: Records, country: str) -> Optional[CountryYearRecord]:
    return next((r for r in records if r.country == country), None)


def radar_projection(
    by_year: RecordsByYear,
    countries: Sequence[str],
    years: Sequence[str],
    with_year: Optional[bool] = None,
) -> List[Dict[str, object]]:
    """One row per factor with a column per country (or country/year pair).

    Series are keyed "Country (Year)" when `with_year` is set (the dashboard
    passes its comparison mode) and by country name otherwise. Left as None,
    the year is included only when several years are given. Countries missing
    from a year leave the key out.
    """
    if not countries:
        return []
    multi_year = len(years) > 1 if with_year is None else with_year
    rows: List[Dict[str, object]] = []
    for factor in FACTORS:
        row: Dict[str, object] = {"factor": FACTOR_LABELS[factor]}
        for country in countries:
            for year in years:
                record = _find(by_year.get(year, ()), country)
                if record is None:
                    continue
                key = f"{country} ({year})" if multi_year else country
                row[key] = record.value(factor)
        rows.append(row)
    return rows


def top_n_by_year(by_year: RecordsByYear, years: Sequence[str], n: int) -> List[CountryYearRecord]:
    ranked: List[CountryYearRecord] = []
    for year in years:
        if year in by_year:
            ranked.extend(top_n(by_year[year], n))
    return ranked


def bottom_n_by_year(by_year: RecordsByYear, years: Sequence[str], n: int) -> List[CountryYearRecord]:
    ranked: List[CountryYearRecord] = []
    for year in years:
        if year in by_year:
            ranked.extend(bottom_n(by_year[year], n))
    return ranked


def key_statistics(records: Records) -> Optional[KeyStatistics]:
    if not records:
        return None
    return KeyStatistics(
        highest=top_n(records, 1)[0],
        lowest=bottom_n(records, 1)[0],
        average_score=average(records, "score") or 0.0,
        count=len(records),
    )


def factor_averages(records: Records) -> pd.DataFrame:
    if not records:
        return pd.DataFrame(columns=["factor", "value"])
    return pd.DataFrame(
        [{"factor": FACTOR_LABELS[f], "value": average(records, f)} for f in FACTORS]
    )


def factor_averages_by_year(by_year: RecordsByYear, years: Sequence[str]) -> pd.DataFrame:
    present = [year for year in years if by_year.get(year)]
    rows = []
    for factor in FACTORS:
        row: Dict[str, object] = {"factor": FACTOR_LABELS[factor]}
        for year in present:
            row[year] = average(by_year[year], factor)
        rows.append(row)
    return pd.DataFrame(rows, columns=["factor", *present])


def correlation_table(records: Records) -> pd.DataFrame:
    return pd.DataFrame(
        [{"factor": FACTOR_LABELS[f], "correlation": factor_correlation(records, f)} for f in FACTORS],
        columns=["factor", "correlation"],
    )


def correlation_table_by_year(by_year: RecordsByYear, years: Sequence[str]) -> pd.DataFrame:
    present = [year for year in years if by_year.get(year)]
    rows = []
    for factor in FACTORS:
        row: Dict[str, object] = {"factor": FACTOR_LABELS[factor]}
        for year in present:
            row[year] = factor_correlation(by_year[year], factor)
        rows.append(row)
    return pd.DataFrame(rows, columns=["factor", *present])


def average_score_by_year(by_year: RecordsByYear, years: Sequence[str]) -> pd.DataFrame:
    rows = [
        {"year": year, "score": average(by_year[year], "score")}
        for year in years
        if by_year.get(year)
    ]
    return pd.DataFrame(rows, columns=["year", "score"])


def factor_trend(by_year: RecordsByYear, years: Sequence[str], factor: str) -> pd.DataFrame:
    rows = []
    for year in years:
        records = by_year.get(year)
        if records:
            rows.append(
                {
                    "year": year,
                    "average": average(records, factor),
                    "correlation": factor_correlation(records, factor),
                }
            )
        else:
            rows.append({"year": year, "average": 0.0, "correlation": 0.0})
    return pd.DataFrame(rows, columns=["year", "average", "correlation"])


def trend_rows(by_year: RecordsByYear, countries: Sequence[str], years: Sequence[str]) -> pd.DataFrame:
    columns = ["country", "year", "score", *FACTORS]
    rows = []
    for country in countries:
        for year in years:
            record = _find(by_year.get(year, ()), country)
            if record is None:
                continue
            row = {"country": country, "year": year, "score": record.score}
            row.update({f: record.value(f) for f in FACTORS})
            rows.append(row)
    return pd.DataFrame(rows, columns=columns)


def factor_evolution(by_year: RecordsByYear, country: str, years: Sequence[str]) -> pd.DataFrame:
    """Per-year factor values for one country; NaN where the year lacks it."""
    rows = []
    for year in years:
        record = _find(by_year.get(year, ()), country)
        row: Dict[str, object] = {"year": year}
        for factor in FACTORS:
            row[FACTOR_LABELS[factor]] = record.value(factor) if record else np.nan
        rows.append(row)
    return pd.DataFrame(rows, columns=["year", *(FACTOR_LABELS[f] for f in FACTORS)])


def score_distribution(records: Records) -> pd.DataFrame:
    ordered = top_n(records, len(records))
    return pd.DataFrame(
        [
            {"position": idx, "country": r.country, "year": r.year, "score": r.score}
            for idx, r in enumerate(ordered)
        ],
        columns=["position", "country", "year", "score"],
    )


def scatter_rows(records: Records, factor: str) -> pd.DataFrame:
    return records_to_frame(records)[["country", "year", "rank", factor, "score"]]


def score_comparison(
    by_year: RecordsByYear,
    countries: Sequence[str],
    years: Sequence[str],
    with_year: Optional[bool] = None,
) -> pd.DataFrame:
    multi_year = len(years) > 1 if with_year is None else with_year
    rows = []
    for country in countries:
        for year in years:
            record = _find(by_year.get(year, ()), country)
            if record is None:
                continue
            rows.append(
                {
                    "label": f"{country} ({year})" if multi_year else country,
                    "country": country,
                    "year": year,
                    "score": record.score,
                }
            )
    return pd.DataFrame(rows, columns=["label", "country", "year", "score"])
