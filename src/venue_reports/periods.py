# Venue Reports - Temporal reporting engine for wedding venue management
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Period helpers for Venue Reports.

This module defines the Period value object used by every report. A period
is described by a granularity ("day", "month" or "year") and a value
matching that granularity ("YYYY-MM-DD", "YYYY-MM" or "YYYY"). An empty
value means "all time": no date filter is applied and there is no previous
period to compare with.

A Period knows:
- its inclusive [start, end] date bounds (the reporting predicate),
- the immediately preceding period of the same granularity,
- how to render itself as a SQL predicate or filter a DataFrame.
"""

import calendar
import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

import pandas as pd

GRANULARITIES: tuple[str, ...] = ("day", "month", "year")

_VALUE_FORMATS = {
    "day": re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}"),
    "month": re.compile(r"[0-9]{4}-[0-9]{2}"),
    "year": re.compile(r"[0-9]{4}"),
}
_EXPECTED = {"day": "YYYY-MM-DD", "month": "YYYY-MM", "year": "YYYY"}


class PeriodError(ValueError):
    """Raised when a (granularity, value) pair does not describe a period."""


@dataclass(frozen=True)
class Period:
    """
    Reporting period with an explicit granularity.

    Attributes
    ----------
    granularity:
        One of "day", "month", "year".
    value:
        Normalized period value ("2024-03-15", "2024-03", "2024"), or None
        for an all-time period.
    start, end:
        Inclusive date bounds, or None for an all-time period.
    """

    granularity: str
    value: Optional[str]
    start: Optional[date]
    end: Optional[date]

    @classmethod
    def parse(cls, granularity: str, value: Optional[str]) -> "Period":
        """
        Build a Period from raw (granularity, value) input.

        Raises
        ------
        PeriodError
            If the granularity is not supported or the value does not parse
            to a calendar date / month / year for that granularity.
        """
        if granularity not in GRANULARITIES:
            raise PeriodError(
                f"Unsupported granularity: {granularity!r}. "
                f"Expected one of: {', '.join(GRANULARITIES)}."
            )

        raw = "" if value is None else str(value).strip()
        if not raw:
            return cls(granularity=granularity, value=None, start=None, end=None)

        message = (
            f"Invalid {granularity} value: {raw!r}. Expected {_EXPECTED[granularity]}."
        )
        if not _VALUE_FORMATS[granularity].fullmatch(raw):
            raise PeriodError(message)

        parts = [int(p) for p in raw.split("-")]
        try:
            if granularity == "day":
                return cls._for_day(date(*parts))
            if granularity == "month":
                return cls._for_month(*parts)
            return cls._for_year(parts[0])
        except ValueError as exc:
            raise PeriodError(message) from exc

    @classmethod
    def _for_day(cls, day: date) -> "Period":
        return cls(granularity="day", value=day.isoformat(), start=day, end=day)

    @classmethod
    def _for_month(cls, year: int, month: int) -> "Period":
        # date() raises ValueError for month 0 / 13 and year 0
        start = date(year, month, 1)
        end = date(year, month, calendar.monthrange(year, month)[1])
        return cls(
            granularity="month", value=f"{year:04d}-{month:02d}", start=start, end=end
        )

    @classmethod
    def _for_year(cls, year: int) -> "Period":
        start = date(year, 1, 1)
        end = date(year, 12, 31)
        return cls(granularity="year", value=f"{year:04d}", start=start, end=end)

    @property
    def is_all_time(self) -> bool:
        return self.value is None

    @property
    def label(self) -> str:
        if self.is_all_time:
            return "All time"
        return f"{self.granularity.capitalize()} {self.value}"

    def previous(self) -> Optional["Period"]:
        """
        Return the immediately preceding period of the same granularity.

        - day   : the day before,
        - month : the month before, January rolling back to December of the
                  previous year,
        - year  : the year before.

        All-time periods have no predecessor and return None. So does the
        first representable period (year 1).
        """
        if self.start is None:
            return None

        try:
            if self.granularity == "day":
                return self._for_day(self.start - timedelta(days=1))
            if self.granularity == "month":
                year, month = self.start.year, self.start.month - 1
                if month < 1:
                    year, month = year - 1, 12
                return self._for_month(year, month)
            return self._for_year(self.start.year - 1)
        except (ValueError, OverflowError):
            return None

    def contains(self, day: date) -> bool:
        """Return True if `day` falls inside the period (always True for all-time)."""
        if self.start is None or self.end is None:
            return True
        return self.start <= day <= self.end

    def sql_predicate(self, column: str) -> tuple[str, list[str]]:
        """
        Return a parameterized SQL predicate for a date column stored as ISO
        text, together with its parameters.
        """
        if self.start is None or self.end is None:
            return "1 = 1", []
        return f"{column} BETWEEN ? AND ?", [self.start.isoformat(), self.end.isoformat()]


def resolve(granularity: str, value: Optional[str]) -> Period:
    """Validate a (granularity, value) pair and return its Period."""
    return Period.parse(granularity, value)


def previous(granularity: str, value: Optional[str]) -> Optional[tuple[str, str]]:
    """
    Return the (granularity, value) pair of the preceding period, or None
    when the period is all-time.
    """
    prev = Period.parse(granularity, value).previous()
    if prev is None or prev.value is None:
        return None
    return prev.granularity, prev.value


def filter_rows_by_period(
    rows: pd.DataFrame, period: Period, column: str = "wedding_date"
) -> pd.DataFrame:
    """
    Keep only the rows whose `column` date falls inside the period.

    The column may contain ISO strings, dates or timestamps. Rows with an
    unparseable date are dropped unless the period is all-time.
    """
    if period.start is None or period.end is None or rows.empty:
        return rows.copy()

    dates = pd.to_datetime(rows[column], errors="coerce")
    mask = (dates >= pd.Timestamp(period.start)) & (dates <= pd.Timestamp(period.end))
    return rows.loc[mask].copy()
