"""Per-trap seasonal totals from labelled observations (no I/O)."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

import pandas as pd

from swd_weather.datasources.traps.models import SeasonalObservation, TrapSeasonalTotals
from swd_weather.seasons import Season, month, season

if TYPE_CHECKING:
    from collections.abc import Iterable

    from swd_weather.datasources.traps.models import TrapObservation

TOTALS_COLUMNS = ["trap_id", "total_SWD_spring", "total_SWD_summer", "SWD_June"]


def classify_observations(observations: Iterable[TrapObservation]) -> list[SeasonalObservation]:
    """Label each observation with its season and month."""
    return [
        SeasonalObservation(observation=obs, season=season(obs.date), month=month(obs.date))
        for obs in observations
    ]


def aggregate_seasonal_totals(
    observations: Iterable[SeasonalObservation],
) -> list[TrapSeasonalTotals]:
    """Sum counts per trap for spring, summer and June.

    Missing counts contribute zero. One row per distinct trap, ascending
    trap ID.
    """
    spring: dict[int, int] = {}
    summer: dict[int, int] = {}
    june: dict[int, int] = {}
    for obs in observations:
        tid = obs.trap_id
        spring.setdefault(tid, 0)
        summer.setdefault(tid, 0)
        june.setdefault(tid, 0)
        if obs.season == Season.SPRING:
            spring[tid] += obs.count
        elif obs.season == Season.SUMMER:
            summer[tid] += obs.count
        if obs.month == "June":
            june[tid] += obs.count

    return [
        TrapSeasonalTotals(
            trap_id=tid,
            total_SWD_spring=spring[tid],
            total_SWD_summer=summer[tid],
            SWD_June=june[tid],
        )
        for tid in sorted(spring)
    ]


def totals_to_frame(totals: Iterable[TrapSeasonalTotals]) -> pd.DataFrame:
    """Tabulate seasonal totals for joining."""
    return pd.DataFrame([asdict(t) for t in totals], columns=TOTALS_COLUMNS)
