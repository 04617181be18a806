"""
Fetch and parse every requested year concurrently.

Each year is fetched and parsed on its own worker thread; outcomes come back
as tagged `YearResult` values and the report keeps only the years that
loaded. A failing or hung year never blocks the others past the join
timeout.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import requests
import streamlit as st

from happiness.bootstrap_env import ensure_env
from happiness.config import load_settings
from happiness.data.parser import parse
from happiness.data.records import CountryYearRecord
from happiness.errors import FetchFailure, HappinessDataError, NoYearsAvailable, ParseFailure

logger = logging.getLogger(__name__)

YearFetcher = Callable[[str], str]


@dataclass(frozen=True)
class YearResult:
    year: str
    records: Tuple[CountryYearRecord, ...] = ()
    error: Optional[HappinessDataError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class LoadReport:
    results: Tuple[YearResult, ...]

    @property
    def by_year(self) -> Dict[str, Tuple[CountryYearRecord, ...]]:
        return {r.year: r.records for r in self.results if r.ok}

    @property
    def available_years(self) -> List[str]:
        return [r.year for r in self.results if r.ok]

    @property
    def failures(self) -> Dict[str, HappinessDataError]:
        return {r.year: r.error for r in self.results if r.error is not None}

    def require_any(self) -> None:
        if not self.available_years:
            raise NoYearsAvailable(self.failures)


def http_fetcher(base_url: str, timeout: float) -> YearFetcher:
    base = base_url.rstrip("/")

    def fetch(year: str) -> str:
        url = f"{base}/{year}.csv"
        try:
            resp = requests.get(url, timeout=timeout)
        except requests.RequestException as exc:
            raise FetchFailure(year, str(exc)) from exc
        if not resp.ok:
            raise FetchFailure(year, f"HTTP {resp.status_code} from {url}")
        # Static hosts often omit the charset; the files are UTF-8
        return resp.content.decode("utf-8-sig", errors="replace")

    return fetch


def file_fetcher(data_dir: str | Path) -> YearFetcher:
    root = Path(data_dir)

    def fetch(year: str) -> str:
        path = root / f"{year}.csv"
        try:
            return path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParseFailure(year, f"{path} is not valid UTF-8") from exc
        except OSError as exc:
            raise FetchFailure(year, str(exc)) from exc

    return fetch


def _fetch_and_parse(year: str, fetch: YearFetcher) -> YearResult:
    try:
        records = parse(fetch(year), year)
    except HappinessDataError as exc:
        return YearResult(year, error=exc)
    except Exception as exc:
        # Anything else a fetcher or pandas raises fails only this year
        logger.debug("Unexpected error loading %s", year, exc_info=True)
        return YearResult(year, error=FetchFailure(year, f"{type(exc).__name__}: {exc}"))
    if not records:
        return YearResult(year, error=ParseFailure(year, "no rows with a country and score"))
    return YearResult(year, records=tuple(records))


def load_all_years(years: Sequence[str], fetch: YearFetcher, timeout: float) -> LoadReport:
    """Fetch and parse all years at once, waiting at most `timeout` seconds."""
    unique_years = list(dict.fromkeys(years))
    if not unique_years:
        return LoadReport(results=())

    executor = ThreadPoolExecutor(max_workers=len(unique_years), thread_name_prefix="year-fetch")
    try:
        futures = {executor.submit(_fetch_and_parse, year, fetch): year for year in unique_years}
        done, _ = wait(futures, timeout=timeout)
        results: List[YearResult] = []
        for future, year in futures.items():
            if future in done:
                results.append(future.result())
            else:
                future.cancel()
                results.append(YearResult(year, error=FetchFailure(year, f"timed out after {timeout:g}s")))
    finally:
        # Don't wait on hung fetches; their results are already discarded
        executor.shutdown(wait=False, cancel_futures=True)

    for result in results:
        if result.ok:
            logger.info("Loaded %d records for %s", len(result.records), result.year)
        else:
            logger.warning("Skipping %s: %s", result.year, result.error)

    report = LoadReport(results=tuple(results))
    if not report.available_years:
        logger.error("No yearly datasets loaded (requested %s)", ", ".join(unique_years))
    return report


def load_data() -> LoadReport:
    """Wrapper that resolves settings and calls the cached implementation."""
    ensure_env()
    settings = load_settings()
    report = _load_data_impl(settings.data_url, settings.data_dir, settings.years, settings.fetch_timeout)
    st.session_state["hd_load_diagnostics"] = {
        "source": settings.data_url or str(Path(settings.data_dir).resolve()),
        "requested_years": list(settings.years),
        "available_years": report.available_years,
        "failures": {year: str(err) for year, err in report.failures.items()},
    }
    return report


def clear_cache() -> None:
    _load_data_impl.clear()  # type: ignore[attr-defined]


@st.cache_data(show_spinner=False, ttl=600)
def _load_data_impl(
    data_url: Optional[str],
    data_dir: str,
    years: Tuple[str, ...],
    timeout: float,
) -> LoadReport:
    """Cached by source, years and timeout."""
    fetch = http_fetcher(data_url, timeout) if data_url else file_fetcher(data_dir)
    return load_all_years(years, fetch, timeout)
