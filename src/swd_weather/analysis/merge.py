"""Join trap history with seasonal weather summaries on (station, year)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

from swd_weather.analysis.metadata import STATION, WEATHER_COLUMNS, YEAR
from swd_weather.errors import JoinGapWarning

if TYPE_CHECKING:
    from collections.abc import Iterable

JOIN_KEYS = [STATION, YEAR]


def merge_weather(
    history: pd.DataFrame,
    summaries: pd.DataFrame,
    how: str = "inner",
    years: Iterable[int] | None = None,
) -> tuple[pd.DataFrame, list[JoinGapWarning]]:
    """Attach weather summaries to trap records.

    Only rows for ``years`` (default: the years present in ``summaries``)
    are (re-)merged with the chosen join. Rows for other years are
    preserved untouched, including any weather columns they already carry.

    Args:
        history: Multi-year trap records with ``station`` and ``year``.
        summaries: Seasonal weather summaries (see ``summaries_to_frame``).
        how: ``"inner"`` drops unmatched rows, ``"left"`` keeps them with
            missing weather.
        years: Years being merged.

    Returns:
        The analysis table and any join-gap warnings.
    """
    if how not in ("inner", "left"):
        msg = f"unsupported join {how!r}"
        raise ValueError(msg)

    targeted = history[YEAR].isin(set(years) if years is not None else set(summaries[YEAR]))
    preserved = history[~targeted]
    stale = [c for c in WEATHER_COLUMNS if c in history.columns]
    current = history[targeted].drop(columns=stale)

    merged = current.merge(
        summaries.astype({STATION: str}),
        on=JOIN_KEYS,
        how=how,
        validate="many_to_one",
    )

    warnings: list[JoinGapWarning] = []
    matched = current.merge(summaries[JOIN_KEYS], on=JOIN_KEYS, how="left", indicator=True)
    unmatched = matched[matched["_merge"] == "left_only"]
    if not unmatched.empty:
        pairs = zip(unmatched[STATION], unmatched[YEAR], strict=True)
        keys = sorted({f"{s}/{y}" for s, y in pairs})
        action = "dropped" if how == "inner" else "kept without weather"
        warnings.append(
            JoinGapWarning(
                f"{len(unmatched)} trap record(s) have no weather summary; {action}",
                source="weather-merge",
                keys=keys,
            )
        )

    columns = list(history.columns) + [c for c in merged.columns if c not in history.columns]
    parts = [frame for frame in (preserved, merged) if not frame.empty] or [merged]
    combined = pd.concat(parts, ignore_index=True, sort=False)
    return combined.reindex(columns=columns), warnings
