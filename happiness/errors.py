"""
Error types raised while loading the yearly happiness datasets.

Per-year problems (`FetchFailure`, `ParseFailure`) are collected by the
loader and never abort the other years. Only `NoYearsAvailable` is meant to
reach the user.
"""

from __future__ import annotations

from typing import Dict


class HappinessDataError(Exception):
    """Base class for dataset loading errors."""


class _YearError(HappinessDataError):
    verb = "load"

    def __init__(self, year: str, reason: str):
        self.year = year
        self.reason = reason
        super().__init__(f"Failed to {self.verb} {year} data: {reason}")

    # Load reports pass through st.cache_data, which pickles them
    def __reduce__(self):
        return (self.__class__, (self.year, self.reason))


class FetchFailure(_YearError):
    verb = "fetch"


class ParseFailure(_YearError):
    verb = "parse"


class NoYearsAvailable(HappinessDataError):
    def __init__(self, failures: Dict[str, HappinessDataError]):
        self.failures = dict(failures)
        detail = "; ".join(str(err) for err in self.failures.values()) or "no years requested"
        super().__init__(f"No yearly datasets could be loaded ({detail})")

    def __reduce__(self):
        return (self.__class__, (self.failures,))
