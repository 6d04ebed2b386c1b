"""Weather data models."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import TYPE_CHECKING

import pandas as pd

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

#: Minimum seasonal precipitation (mm) worth reporting; lower sums are
#: treated as incomplete records.
MIN_SEASON_PRECIP_MM = 20.0

#: Frost thresholds (deg C) for winter day counts.
HARD_FROST_C = -5.0
FROST_C = 0.0


@dataclass
class FetchOutcome:
    """Result of fetching one station's daily file for one year."""

    station: str
    year: int
    url: str
    path: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.path is not None


@dataclass(frozen=True)
class WeatherSeasonalSummary:
    """Seasonal weather statistics for one station and year.

    Temperatures in deg C, precipitation in mm, degree-days in Celsius
    degree-days. None means missing.
    """

    station: str
    year: int
    tmin_winter: float | None
    tmax_winter: float | None
    tmin_spring: float | None
    tmax_spring: float | None
    tmin_summer: float | None
    tmax_summer: float | None
    days_below_minus5_winter: int
    days_below_zero_winter: int
    DD_winter: float | None  # noqa: N815 (published column name)
    DD_spring: float | None  # noqa: N815
    DD_summer: float | None  # noqa: N815
    precipitation_winter: float | None
    precipitation_spring: float | None
    precipitation_summer: float | None


SUMMARY_COLUMNS = [f.name for f in fields(WeatherSeasonalSummary)]


def summaries_to_frame(summaries: Iterable[WeatherSeasonalSummary]) -> pd.DataFrame:
    """Tabulate summaries; None becomes NaN."""
    frame = pd.DataFrame([asdict(s) for s in summaries], columns=SUMMARY_COLUMNS)
    return frame.astype({"station": str, "year": int})
