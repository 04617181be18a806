from __future__ import annotations

import pytest

from happiness.config import DEFAULT_FETCH_TIMEOUT, DEFAULT_YEARS, load_settings, year_color

ENV_VARS = (
    "HAPPINESS_DATA_URL",
    "HAPPINESS_DATA_DIR",
    "HAPPINESS_YEARS",
    "HAPPINESS_FETCH_TIMEOUT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = load_settings()
    assert settings.years == DEFAULT_YEARS
    assert settings.data_url is None
    assert settings.data_dir == "data"
    assert settings.fetch_timeout == DEFAULT_FETCH_TIMEOUT
    assert settings.log_level == "INFO"


@pytest.mark.parametrize("raw", ['["2019", "2020"]', "2019, 2020", "2019,2020,"])
def test_years_from_env(monkeypatch, raw):
    monkeypatch.setenv("HAPPINESS_YEARS", raw)
    assert load_settings().years == ("2019", "2020")


def test_data_url_and_timeout(monkeypatch):
    monkeypatch.setenv("HAPPINESS_DATA_URL", "https://example.org/csv/")
    monkeypatch.setenv("HAPPINESS_FETCH_TIMEOUT", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.data_url == "https://example.org/csv"
    assert settings.fetch_timeout == 2.5
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_invalid_timeout_falls_back(monkeypatch, raw):
    monkeypatch.setenv("HAPPINESS_FETCH_TIMEOUT", raw)
    assert load_settings().fetch_timeout == DEFAULT_FETCH_TIMEOUT


def test_year_color_covers_unknown_years():
    assert year_color("2020") == "#8884d8"
    assert year_color("2031").startswith("#")
    assert year_color("n/a").startswith("#")
