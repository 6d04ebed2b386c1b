"""
Calendar seasons and the date windows derived from them.

Seasons use fixed solstice/equinox cut points, independent of the actual
astronomical dates in any given year:

    Winter = [Dec 21, Mar 21)   (wraps the year end)
    Spring = [Mar 21, Jun 21)
    Summer = [Jun 21, Sep 21)
    Fall   = [Sep 21, Dec 21)

Trap counts are labelled with ``season()``/``month()``. Weather summaries use
the same cut points to build year-specific windows:

  - cumulative windows all open on Dec 21 of the prior year and close at
    the next cut point (winter, spring, summer)
  - exclusive windows are the non-overlapping season spans
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import StrEnum

# Leap year so Feb 29 normalises cleanly
REFERENCE_YEAR = 2000

# (month, day) cut points
SPRING_START = (3, 21)
SUMMER_START = (6, 21)
FALL_START = (9, 21)
WINTER_START = (12, 21)


class Season(StrEnum):
    """Calendar season labels."""

    WINTER = "Winter"
    SPRING = "Spring"
    SUMMER = "Summer"
    FALL = "Fall"


def _on_reference_year(month_day: tuple[int, int]) -> date:
    return date(REFERENCE_YEAR, *month_day)


def season(day: date) -> Season:
    """Classify a date into a calendar season.

    Only the month and day are compared; the year is ignored.
    """
    normalized = date(REFERENCE_YEAR, day.month, day.day)
    if normalized >= _on_reference_year(WINTER_START):
        return Season.WINTER
    if normalized >= _on_reference_year(FALL_START):
        return Season.FALL
    if normalized >= _on_reference_year(SUMMER_START):
        return Season.SUMMER
    if normalized >= _on_reference_year(SPRING_START):
        return Season.SPRING
    return Season.WINTER


def month(day: date) -> str:
    """Full English month name, e.g. ``"June"``."""
    return calendar.month_name[day.month]


# =============================================================================
# Weather windows
# =============================================================================


@dataclass(frozen=True)
class SeasonWindow:
    """Half-open date window ``[start, end)`` for one season."""

    season: Season
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day < self.end

    @property
    def last_day(self) -> date:
        """Last date inside the window (the day before ``end``)."""
        return self.end - timedelta(days=1)


def winter_start(year: int) -> date:
    """Winter of ``year`` opens on Dec 21 of the previous year."""
    return date(year - 1, *WINTER_START)


def cumulative_windows(year: int) -> dict[Season, SeasonWindow]:
    """Windows sharing the winter start, used for accumulated statistics.

    Degree-day totals and frost-day counts read from these.
    """
    start = winter_start(year)
    return {
        Season.WINTER: SeasonWindow(Season.WINTER, start, date(year, *SPRING_START)),
        Season.SPRING: SeasonWindow(Season.SPRING, start, date(year, *SUMMER_START)),
        Season.SUMMER: SeasonWindow(Season.SUMMER, start, date(year, *FALL_START)),
    }


def exclusive_windows(year: int) -> dict[Season, SeasonWindow]:
    """Non-overlapping season windows, used for means and precipitation."""
    spring = date(year, *SPRING_START)
    summer = date(year, *SUMMER_START)
    return {
        Season.WINTER: SeasonWindow(Season.WINTER, winter_start(year), spring),
        Season.SPRING: SeasonWindow(Season.SPRING, spring, summer),
        Season.SUMMER: SeasonWindow(Season.SUMMER, summer, date(year, *FALL_START)),
    }
