"""
Calendar rules for the computed base-year default.

When no stored base year can be found, the legacy system computes one from
today's date: late in the year the registration cycle for the *next* year
is already open, so the default rolls forward.

Two windows exist and they are deliberately distinct:

==========================  =================  ========================
Constant                    Window             Used by
==========================  =================  ========================
``USER_FALLBACK_WINDOW``    Nov 7 – Dec 31     user-level resolution
``SCHOOL_FALLBACK_WINDOW``  Nov 17 – Dec 31    school-level resolution
==========================  =================  ========================

Examples:
    >>> from datetime import date
    >>> fallback_year(date(2025, 11, 7), MonthDay(11, 7), MonthDay(12, 31))
    2026
    >>> SCHOOL_FALLBACK_WINDOW.fallback_year(date(2025, 11, 10))
    2025

Tags:
    temporal, calendar, base-year, anobase, recadastro
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Callable

# Returns "today"; injected into resolvers so tests can pin the date.
Clock = Callable[[], date]


@dataclass(frozen=True, slots=True, order=True)
class MonthDay:
    """A (month, day) pair without a year, ordered chronologically.

    Day validity is checked against a leap year so that Feb 29 is allowed.
    """

    month: int
    day: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Invalid month: {self.month}")
        max_day = calendar.monthrange(2000, self.month)[1]
        if not 1 <= self.day <= max_day:
            raise ValueError(f"Invalid day {self.day} for month {self.month}")

    @classmethod
    def from_date(cls, value: date) -> MonthDay:
        return cls(value.month, value.day)

    def ordinal(self) -> int:
        """``month * 100 + day``, the comparison key used by the legacy rule."""
        return self.month * 100 + self.day

    def __str__(self) -> str:
        return f"{self.day:02d}/{self.month:02d}"


@dataclass(frozen=True, slots=True)
class DateWindow:
    """Inclusive (month, day) window lying within a single calendar year."""

    start: MonthDay
    end: MonthDay

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"Window start {self.start} is after end {self.end}; "
                "windows must not wrap across the year boundary"
            )

    def contains(self, day: date) -> bool:
        return self.start <= MonthDay.from_date(day) <= self.end

    def fallback_year(self, today: date) -> int:
        return fallback_year(today, self.start, self.end)


def fallback_year(today: date, window_start: MonthDay, window_end: MonthDay) -> int:
    """Return ``today.year + 1`` inside the window, else ``today.year``.

    Pure calendar arithmetic; never fails.
    """
    md = MonthDay.from_date(today).ordinal()
    if window_start.ordinal() <= md <= window_end.ordinal():
        return today.year + 1
    return today.year


USER_FALLBACK_WINDOW = DateWindow(MonthDay(11, 7), MonthDay(12, 31))
SCHOOL_FALLBACK_WINDOW = DateWindow(MonthDay(11, 17), MonthDay(12, 31))


__all__ = [
    "Clock",
    "MonthDay",
    "DateWindow",
    "fallback_year",
    "USER_FALLBACK_WINDOW",
    "SCHOOL_FALLBACK_WINDOW",
]
