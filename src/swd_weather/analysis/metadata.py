"""Attach trap metadata to a new year's totals and append to history.

Only traps with known location/station context are analyzable, so totals
without a metadata match in the reference year are dropped (and reported).
"""

from __future__ import annotations

import pandas as pd

from swd_weather.datasources.traps.aggregate import TOTALS_COLUMNS
from swd_weather.datasources.weather.models import SUMMARY_COLUMNS
from swd_weather.errors import JoinGapWarning

TRAP_ID = "trap_id"
YEAR = "year"
STATION = "station"

#: Seasonal weather summary columns carried by merged history rows.
WEATHER_COLUMNS = [c for c in SUMMARY_COLUMNS if c not in (STATION, YEAR)]

#: Columns measured per year; never copied from one year to another.
PER_YEAR_COLUMNS = [YEAR, *(c for c in TOTALS_COLUMNS if c != TRAP_ID), *WEATHER_COLUMNS]


def metadata_for_year(metadata: pd.DataFrame, year: int) -> tuple[pd.DataFrame, list[int]]:
    """Static trap attributes recorded for ``year``, one row per trap.

    Year, trap totals and weather summary columns are removed, so a new
    year's records start with those values missing. Returns the table and
    the trap IDs that had duplicate rows (first row kept).
    """
    rows = metadata[metadata[YEAR] == year]
    duplicated = rows[rows.duplicated(subset=TRAP_ID, keep="first")]
    dupes = sorted(int(t) for t in duplicated[TRAP_ID].unique())
    drop = [c for c in PER_YEAR_COLUMNS if c in rows.columns]
    static = rows.drop_duplicates(subset=TRAP_ID, keep="first").drop(columns=drop)
    return static.reset_index(drop=True), dupes


def join_trap_metadata(
    totals: pd.DataFrame,
    metadata: pd.DataFrame,
    reference_year: int,
    new_year: int,
) -> tuple[pd.DataFrame, list[JoinGapWarning]]:
    """Inner-join seasonal totals with the reference year's trap metadata.

    Args:
        totals: One row per trap (``trap_id`` plus total columns).
        metadata: Historical per-trap records with a ``year`` column.
        reference_year: Year whose metadata rows are eligible.
        new_year: Year tag for the joined rows.

    Returns:
        The annual records and any join-gap warnings.
    """
    static, dupes = metadata_for_year(metadata, reference_year)
    joined = totals.merge(static, on=TRAP_ID, how="inner", validate="one_to_one")
    joined[YEAR] = new_year

    warnings: list[JoinGapWarning] = []
    dropped = sorted(set(totals[TRAP_ID]) - set(static[TRAP_ID]))
    if dropped:
        warnings.append(
            JoinGapWarning(
                f"{len(dropped)} trap(s) have no {reference_year} metadata; dropped",
                source="trap-metadata-join",
                keys=dropped,
            )
        )
    if dupes:
        warnings.append(
            JoinGapWarning(
                f"duplicate {reference_year} metadata rows; first row kept",
                source="trap-metadata-join",
                keys=dupes,
            )
        )
    return joined, warnings


def append_to_history(history: pd.DataFrame, batch: pd.DataFrame) -> pd.DataFrame:
    """Append a year's records to history.

    Columns absent from the batch stay missing (NaN), never zero. Rows
    already in history for the batch's year(s) are replaced, so re-running
    a year does not duplicate it.
    """
    years = set(batch[YEAR].unique())
    kept = history[~history[YEAR].isin(years)]
    columns = list(history.columns) + [c for c in batch.columns if c not in history.columns]
    parts = [frame for frame in (kept, batch) if not frame.empty] or [batch]
    combined = pd.concat(parts, ignore_index=True, sort=False)
    return combined.reindex(columns=columns)
