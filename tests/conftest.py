from __future__ import annotations

from typing import Dict, List

import pytest

from happiness.data.records import CountryYearRecord

from factories import csv_text, make_record


@pytest.fixture
def sample_csv() -> str:
    return csv_text(
        "Finland,1,7.741,1.844,1.572,0.695,0.859,0.142,0.546",
        "Denmark,2,7.583,1.908,1.520,0.699,0.823,0.204,0.548",
        "Iceland,3,7.525,1.881,1.617,0.718,0.819,0.258,0.182",
    )


@pytest.fixture
def by_year() -> Dict[str, List[CountryYearRecord]]:
    return {
        "2020": [
            make_record("Finland", 7.8, "2020", gdp=1.3, freedom=0.6),
            make_record("Denmark", 7.6, "2020", gdp=1.4, freedom=0.6),
            make_record("Togo", 4.2, "2020", gdp=0.3, freedom=0.3),
        ],
        "2021": [
            make_record("Finland", 7.9, "2021", gdp=1.4, freedom=0.7),
            make_record("Togo", 4.1, "2021", gdp=0.4, freedom=0.2),
        ],
        "2022": [
            make_record("Denmark", 7.5, "2022", gdp=1.5, freedom=0.5),
            make_record("Finland", 7.8, "2022", gdp=1.3, freedom=0.7),
        ],
    }
