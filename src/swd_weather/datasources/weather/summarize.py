"""Seasonal weather statistics from a normalized station table (no I/O).

Conversion (applied after ``CUMDD10`` was accumulated on raw values):

    tmin, tmax       deg F  -> deg C
    precip           inches -> mm
    DD10, CUMDD10    F degree-days -> C degree-days, floored at 0

Statistics per season, using the windows in ``swd_weather.seasons``:

    DD_*                 CUMDD10 on the last day of the cumulative window
    tmin_*, tmax_*       mean over the exclusive window, missing days skipped
    days_below_*_winter  days in the winter cumulative window under threshold
    precipitation_*      sum over the exclusive window, kept only if >= 20 mm
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

from swd_weather.datasources.weather.models import (
    FROST_C,
    HARD_FROST_C,
    MIN_SEASON_PRECIP_MM,
    WeatherSeasonalSummary,
)
from swd_weather.datasources.weather.parse import CUMDD10
from swd_weather.seasons import Season, SeasonWindow, cumulative_windows, exclusive_windows
from swd_weather.units import degree_days_f_to_c, fahrenheit_to_celsius, inches_to_mm

if TYPE_CHECKING:
    from datetime import date


def convert_units(daily: pd.DataFrame, year: int) -> pd.DataFrame:
    """Add a ``date`` column and metric columns to a normalized daily table.

    Uses the table's ``year`` column when present, otherwise ``year``.
    Rows whose month/day is not a real date are dropped.
    """
    years = daily["year"] if "year" in daily.columns else year
    dates = pd.to_datetime(
        pd.DataFrame({"year": years, "month": daily["month"], "day": daily["day"]}),
        errors="coerce",
    )
    out = pd.DataFrame(
        {
            "date": dates,
            "tmin_c": fahrenheit_to_celsius(daily["tmin"]),
            "tmax_c": fahrenheit_to_celsius(daily["tmax"]),
            "precip_mm": inches_to_mm(daily["precip"]),
            "dd10_c": daily["DD10"].map(degree_days_f_to_c, na_action="ignore"),
            "cumdd10_c": daily[CUMDD10].map(degree_days_f_to_c, na_action="ignore"),
        }
    )
    return out.dropna(subset=["date"]).reset_index(drop=True)


def in_window(converted: pd.DataFrame, window: SeasonWindow) -> pd.DataFrame:
    """Rows whose date falls in ``[window.start, window.end)``."""
    start, end = pd.Timestamp(window.start), pd.Timestamp(window.end)
    return converted[(converted["date"] >= start) & (converted["date"] < end)]


def value_on(converted: pd.DataFrame, column: str, day: date) -> float | None:
    """Value of ``column`` on a given day, or None if absent/missing."""
    values = converted.loc[converted["date"] == pd.Timestamp(day), column].dropna()
    return float(values.iloc[-1]) if not values.empty else None


def mean_or_none(values: pd.Series) -> float | None:
    """Mean of observed values; None when nothing was observed."""
    observed = values.dropna()
    return float(observed.mean()) if not observed.empty else None


def filter_precipitation(total_mm: float, minimum: float = MIN_SEASON_PRECIP_MM) -> float | None:
    """Keep a seasonal precipitation sum only if it reaches ``minimum``."""
    return total_mm if total_mm >= minimum else None


def count_below(values: pd.Series, threshold: float) -> int:
    """Number of observed values strictly below ``threshold``."""
    return int((values.dropna() < threshold).sum())


def summarize_station(daily: pd.DataFrame, station: str, year: int) -> WeatherSeasonalSummary:
    """Compute the seasonal summary for one station and year.

    Args:
        daily: Normalized daily table (canonical columns plus ``CUMDD10``).
        station: Station identifier.
        year: Year the summary describes; winter starts Dec 21 of year - 1.
    """
    converted = convert_units(daily, year)
    cumulative = cumulative_windows(year)
    exclusive = exclusive_windows(year)

    winter_days = in_window(converted, cumulative[Season.WINTER])
    by_season = {s: in_window(converted, w) for s, w in exclusive.items()}

    def _dd(s: Season) -> float | None:
        return value_on(converted, "cumdd10_c", cumulative[s].last_day)

    def _precip(s: Season) -> float | None:
        return filter_precipitation(float(by_season[s]["precip_mm"].sum(skipna=True)))

    return WeatherSeasonalSummary(
        station=station,
        year=year,
        tmin_winter=mean_or_none(by_season[Season.WINTER]["tmin_c"]),
        tmax_winter=mean_or_none(by_season[Season.WINTER]["tmax_c"]),
        tmin_spring=mean_or_none(by_season[Season.SPRING]["tmin_c"]),
        tmax_spring=mean_or_none(by_season[Season.SPRING]["tmax_c"]),
        tmin_summer=mean_or_none(by_season[Season.SUMMER]["tmin_c"]),
        tmax_summer=mean_or_none(by_season[Season.SUMMER]["tmax_c"]),
        days_below_minus5_winter=count_below(winter_days["tmin_c"], HARD_FROST_C),
        days_below_zero_winter=count_below(winter_days["tmin_c"], FROST_C),
        DD_winter=_dd(Season.WINTER),
        DD_spring=_dd(Season.SPRING),
        DD_summer=_dd(Season.SUMMER),
        precipitation_winter=_precip(Season.WINTER),
        precipitation_spring=_precip(Season.SPRING),
        precipitation_summer=_precip(Season.SUMMER),
    )
