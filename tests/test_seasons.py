"""Tests for season classification and season windows."""

from __future__ import annotations

from collections import Counter
from datetime import date, timedelta

import pytest

from swd_weather.seasons import (
    FALL_START,
    SPRING_START,
    SUMMER_START,
    WINTER_START,
    Season,
    SeasonWindow,
    cumulative_windows,
    exclusive_windows,
    month,
    season,
    winter_start,
)


def _days(year: int) -> list[date]:
    start = date(year, 1, 1)
    n = (date(year + 1, 1, 1) - start).days
    return [start + timedelta(days=i) for i in range(n)]


class TestBoundaryConstants:
    """Cut points are the fixed solstice/equinox dates."""

    def test_values(self) -> None:
        assert SPRING_START == (3, 21)
        assert SUMMER_START == (6, 21)
        assert FALL_START == (9, 21)
        assert WINTER_START == (12, 21)


class TestSeason:
    """Tests for season()."""

    @pytest.mark.parametrize(
        ("day", "expected"),
        [
            (date(2019, 12, 21), Season.WINTER),
            (date(2019, 12, 20), Season.FALL),
            (date(2019, 1, 1), Season.WINTER),
            (date(2019, 3, 20), Season.WINTER),
            (date(2019, 3, 21), Season.SPRING),
            (date(2019, 6, 20), Season.SPRING),
            (date(2019, 6, 21), Season.SUMMER),
            (date(2019, 9, 20), Season.SUMMER),
            (date(2019, 9, 21), Season.FALL),
            (date(2020, 2, 29), Season.WINTER),
        ],
    )
    def test_boundaries(self, day: date, expected: Season) -> None:
        assert season(day) == expected

    def test_year_is_ignored(self) -> None:
        assert season(date(1999, 7, 4)) == season(date(2031, 7, 4)) == Season.SUMMER

    @pytest.mark.parametrize("year", [2019, 2020])
    def test_partitions_the_year(self, year: int) -> None:
        """Every day gets exactly one season and each season is one contiguous run."""
        labels = [season(d) for d in _days(year)]
        assert set(labels) == set(Season)

        changes = sum(1 for a, b in zip(labels, labels[1:], strict=False) if a != b)
        # Winter -> Spring -> Summer -> Fall -> Winter
        assert changes == 4

    def test_season_lengths_non_leap(self) -> None:
        counts = Counter(season(d) for d in _days(2019))
        assert counts[Season.WINTER] == 90
        assert counts[Season.SPRING] == 92
        assert counts[Season.SUMMER] == 92
        assert counts[Season.FALL] == 91


class TestMonth:
    """Tests for month()."""

    def test_full_name(self) -> None:
        assert month(date(2019, 6, 1)) == "June"
        assert month(date(2019, 12, 31)) == "December"


class TestSeasonWindow:
    """Half-open window behaviour."""

    def test_contains_is_half_open(self) -> None:
        window = SeasonWindow(Season.SPRING, date(2019, 3, 21), date(2019, 6, 21))
        assert window.contains(date(2019, 3, 21))
        assert window.contains(date(2019, 6, 20))
        assert not window.contains(date(2019, 6, 21))
        assert not window.contains(date(2019, 3, 20))

    def test_last_day(self) -> None:
        window = SeasonWindow(Season.WINTER, date(2018, 12, 21), date(2019, 3, 21))
        assert window.last_day == date(2019, 3, 20)


class TestWeatherWindows:
    """Cumulative and exclusive windows for a summary year."""

    def test_winter_starts_previous_december(self) -> None:
        assert winter_start(2019) == date(2018, 12, 21)

    def test_cumulative_windows_share_start(self) -> None:
        windows = cumulative_windows(2019)
        assert {w.start for w in windows.values()} == {date(2018, 12, 21)}
        assert windows[Season.WINTER].last_day == date(2019, 3, 20)
        assert windows[Season.SPRING].last_day == date(2019, 6, 20)
        assert windows[Season.SUMMER].last_day == date(2019, 9, 20)

    def test_exclusive_windows_do_not_overlap(self) -> None:
        windows = exclusive_windows(2019)
        winter, spring, summer = (windows[s] for s in (Season.WINTER, Season.SPRING, Season.SUMMER))
        assert winter.start == date(2018, 12, 21)
        assert winter.end == spring.start == date(2019, 3, 21)
        assert spring.end == summer.start == date(2019, 6, 21)
        assert summer.end == date(2019, 9, 21)

    def test_windows_agree_with_season_labels(self) -> None:
        for s, window in exclusive_windows(2019).items():
            assert season(window.start) == s
            assert season(window.last_day) == s
