"""Quick validation script for the CSV parser and statistics.

Run with `python scripts/validate_parser.py [path/to/2024.csv]` to check that
a yearly file parses into records with the expected fields. Without a path
a small inline sample is used.
"""

from __future__ import annotations

import sys
from pathlib import Path

from happiness.data.parser import parse
from happiness.data.records import FACTORS, records_to_frame
from happiness.data.stats import correlation_table, top_n

SAMPLE = (
    "Country name,Happiness Rank,Happiness score,Economy (GDP per Capita)\t,Social support,"
    "Healthy life expectancy,Freedom to make life choices,Generosity,Perceptions of corruption\n"
    "Finland,1,7.741,1.844,1.572,0.695,0.859,0.142,0.546\n"
    "Denmark,2,7.583,1.908,1.520,0.699,0.823,0.204,0.548\n"
    "Afghanistan,143,1.721,0.628,0.000,0.242,0.000,0.091,0.088\n"
    ",,,,,,,,\n"
)


def main() -> None:
    if len(sys.argv) > 1:
        path = Path(sys.argv[1])
        text = path.read_text(encoding="utf-8-sig")
        year = path.stem
    else:
        text, year = SAMPLE, "2024"

    records = parse(text, year)
    if not records:
        raise SystemExit(f"No records parsed for {year}")

    frame = records_to_frame(records)
    missing = [col for col in ("country", "score", *FACTORS) if col not in frame.columns]
    if missing:
        raise SystemExit(f"Missing required columns: {missing}")

    assert frame["country"].ne("").all(), "Every record should have a country"
    assert frame["year"].eq(year).all(), "Every record should carry its year"
    if len(sys.argv) == 1:
        assert frame["gdp"].iloc[0] == 1.844, "GDP header with trailing tab should be matched"

    best = top_n(records, 1)[0]
    print(f"Parser validation passed. Rows: {len(records)}; top: {best.country} ({best.score:.3f})")
    print(correlation_table(records).to_string(index=False))


if __name__ == "__main__":
    main()
