from __future__ import annotations

import pickle
import threading

import pytest
import requests

from happiness.data import loader
from happiness.data.loader import file_fetcher, http_fetcher, load_all_years
from happiness.errors import FetchFailure, NoYearsAvailable, ParseFailure

from factories import csv_text


def _fetcher(texts):
    def fetch(year):
        value = texts[year]
        if isinstance(value, Exception):
            raise value
        return value

    return fetch


def test_all_years_load_in_requested_order():
    texts = {
        "2021": csv_text("Finland,1,7.8,1,1,1,1,1,1"),
        "2020": csv_text("Denmark,1,7.6,1,1,1,1,1,1", "Togo,2,4.2,0,0,0,0,0,0"),
    }
    report = load_all_years(["2021", "2020"], _fetcher(texts), timeout=5)
    assert report.available_years == ["2021", "2020"]
    assert [r.country for r in report.by_year["2020"]] == ["Denmark", "Togo"]
    assert report.failures == {}
    report.require_any()


def test_failed_years_are_excluded_without_aborting_others():
    texts = {
        "2020": FetchFailure("2020", "HTTP 404"),
        "2021": csv_text('"Broken,1,7.8'),
        "2022": csv_text("Finland,1,7.8,1,1,1,1,1,1"),
        "2023": csv_text(",,,,,,,,"),
    }
    report = load_all_years(["2020", "2021", "2022", "2023"], _fetcher(texts), timeout=5)
    assert report.available_years == ["2022"]
    assert isinstance(report.failures["2020"], FetchFailure)
    assert isinstance(report.failures["2021"], ParseFailure)
    assert isinstance(report.failures["2023"], ParseFailure)


def test_unexpected_fetcher_error_only_fails_its_year():
    texts = {
        "2020": ConnectionError("unreachable"),
        "2021": csv_text("Finland,1,7.8,1,1,1,1,1,1"),
    }
    report = load_all_years(["2020", "2021"], _fetcher(texts), timeout=5)
    assert report.available_years == ["2021"]
    error = report.failures["2020"]
    assert isinstance(error, FetchFailure)
    assert "unreachable" in error.reason


def test_no_years_available_is_raised_when_everything_fails():
    texts = {"2020": FetchFailure("2020", "down"), "2021": FetchFailure("2021", "down")}
    report = load_all_years(["2020", "2021"], _fetcher(texts), timeout=5)
    with pytest.raises(NoYearsAvailable) as excinfo:
        report.require_any()
    assert set(excinfo.value.failures) == {"2020", "2021"}


def test_empty_request_has_no_years():
    report = load_all_years([], _fetcher({}), timeout=5)
    assert report.available_years == []
    with pytest.raises(NoYearsAvailable):
        report.require_any()


def test_duplicate_years_are_fetched_once():
    calls = []

    def fetch(year):
        calls.append(year)
        return csv_text("Finland,1,7.8,1,1,1,1,1,1")

    report = load_all_years(["2020", "2020"], fetch, timeout=5)
    assert calls == ["2020"]
    assert report.available_years == ["2020"]


def test_hung_fetch_times_out():
    release = threading.Event()

    def fetch(year):
        if year == "2020":
            release.wait(5)
        return csv_text("Finland,1,7.8,1,1,1,1,1,1")

    try:
        report = load_all_years(["2020", "2021"], fetch, timeout=0.2)
    finally:
        release.set()
    assert report.available_years == ["2021"]
    error = report.failures["2020"]
    assert isinstance(error, FetchFailure)
    assert "timed out" in error.reason


def test_errors_survive_pickling():
    error = pickle.loads(pickle.dumps(FetchFailure("2020", "HTTP 500")))
    assert (error.year, error.reason) == ("2020", "HTTP 500")
    wrapped = pickle.loads(pickle.dumps(NoYearsAvailable({"2020": error})))
    assert wrapped.failures["2020"].reason == "HTTP 500"


def test_file_fetcher_reads_year_file(tmp_path):
    (tmp_path / "2020.csv").write_text("\ufeff" + csv_text("Chad,1,4.3"), encoding="utf-8")
    fetch = file_fetcher(tmp_path)
    report = load_all_years(["2020", "2021"], fetch, timeout=5)
    assert [r.country for r in report.by_year["2020"]] == ["Chad"]
    assert isinstance(report.failures["2021"], FetchFailure)


def test_file_fetcher_rejects_invalid_utf8(tmp_path):
    (tmp_path / "2020.csv").write_bytes(b"Country name\n\xff\xfe\xfa\n")
    with pytest.raises(ParseFailure):
        file_fetcher(tmp_path)("2020")


class _FakeResponse:
    def __init__(self, status_code, content=b""):
        self.status_code = status_code
        self.content = content

    @property
    def ok(self):
        return self.status_code < 400


def test_http_fetcher_builds_year_url(monkeypatch):
    seen = {}

    def fake_get(url, timeout):
        seen["url"] = url
        seen["timeout"] = timeout
        return _FakeResponse(200, csv_text("Chad,1,4.3").encode("utf-8"))

    monkeypatch.setattr(loader.requests, "get", fake_get)
    text = http_fetcher("https://example.org/data/", timeout=3)("2022")
    assert seen == {"url": "https://example.org/data/2022.csv", "timeout": 3}
    assert text.startswith("Country name")


def test_http_fetcher_non_success_status(monkeypatch):
    monkeypatch.setattr(loader.requests, "get", lambda url, timeout: _FakeResponse(404))
    with pytest.raises(FetchFailure) as excinfo:
        http_fetcher("https://example.org", timeout=3)("2020")
    assert "404" in excinfo.value.reason


def test_http_fetcher_connection_error(monkeypatch):
    def boom(url, timeout):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(loader.requests, "get", boom)
    with pytest.raises(FetchFailure):
        http_fetcher("https://example.org", timeout=3)("2020")
