"""Parse station daily files into normalized tables.

Station files are whitespace-delimited, one row per day, with a single
non-data header line. Column *names* are not taken from that header: they
come from a canonical schema (configured, or read from a known-good
normalized file) and are applied by position.

``CUMDD10`` is the running sum of DD10 in file order, computed on the raw
Fahrenheit-scale values. Unit conversion happens later, in ``summarize``.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd

from swd_weather.errors import ConfigError, ParseError, SchemaError
from swd_weather.store import normalized_weather_path

if TYPE_CHECKING:
    from collections.abc import Sequence

    from swd_weather.schemas import Issue
    from swd_weather.store import DataStore

#: Canonical column order of a station daily file.
DEFAULT_COLUMNS = ("month", "day", "tmin", "tmax", "precip", "DD10")

#: Tokens marking an unobserved value.
DEFAULT_MISSING_VALUES = ("M", "-", "NA", "*")

CUMDD10 = "CUMDD10"
REQUIRED_COLUMNS = ("month", "day", "tmin", "tmax", "precip", "DD10")


def load_reference_columns(path: Path) -> list[str]:
    """Read canonical column names from the header of a known-good table."""
    header = pd.read_csv(path, nrows=0).columns
    return [str(c) for c in header if c != CUMDD10]


def _check_schema(columns: Sequence[str], source: str) -> None:
    missing = [c for c in REQUIRED_COLUMNS if c not in columns]
    if missing:
        raise ConfigError(f"weather schema lacks columns {missing}", source=source)


def parse_weather_text(
    text: str,
    columns: Sequence[str] = DEFAULT_COLUMNS,
    missing_values: Sequence[str] = DEFAULT_MISSING_VALUES,
    *,
    source: str = "",
    issues: list[Issue] | None = None,
) -> pd.DataFrame:
    """Parse the text of a station daily file.

    Args:
        text: File content. The first line is a header and is skipped.
        columns: Canonical column names, applied by position.
        missing_values: Tokens treated as unobserved.
        source: Identifier used in error context.
        issues: If given, non-numeric cells are recorded here and treated
            as missing instead of raising.

    Returns:
        DataFrame with the canonical columns (floats, month/day as ints).

    Raises:
        SchemaError: If any data row's width differs from ``columns``.
        ParseError: On a non-numeric cell when ``issues`` is None, or a row
            whose month or day is not a whole number.
    """
    _check_schema(columns, source)
    missing = set(missing_values)
    width = len(columns)
    month_idx, day_idx = columns.index("month"), columns.index("day")

    rows: list[list[float | None]] = []
    for line_no, line in enumerate(text.splitlines()[1:], start=1):
        fields = line.split()
        if not fields:
            continue
        if len(fields) != width:
            msg = f"expected {width} columns, found {len(fields)}"
            raise SchemaError(msg, source=source, row=line_no)

        values: list[float | None] = []
        for col, field in enumerate(fields):
            if field in missing:
                values.append(None)
                continue
            try:
                values.append(float(field))
            except ValueError:
                msg = f"non-numeric value {field!r}"
                err = ParseError(msg, source=source, row=line_no, column=col)
                if issues is None or col in (month_idx, day_idx):
                    raise err from None
                issues.append(err.to_issue())
                values.append(None)

        for idx in (month_idx, day_idx):
            value = values[idx]
            if value is None or not math.isfinite(value) or not value.is_integer():
                msg = f"{columns[idx]} must be a whole number, got {fields[idx]!r}"
                raise ParseError(msg, source=source, row=line_no, column=idx)
        rows.append(values)

    if not rows:
        raise SchemaError("no data rows", source=source)

    frame = pd.DataFrame(rows, columns=list(columns), dtype=float)
    frame["month"] = frame["month"].astype(int)
    frame["day"] = frame["day"].astype(int)
    return frame


def add_cumulative_degree_days(daily: pd.DataFrame) -> pd.DataFrame:
    """Return a copy with ``CUMDD10``, the running sum of DD10 in row order.

    A missing DD10 leaves that day's ``CUMDD10`` missing; the running total
    carries on past it.
    """
    out = daily.copy()
    out[CUMDD10] = out["DD10"].cumsum()
    return out


def normalize_weather_file(
    path: Path,
    columns: Sequence[str] = DEFAULT_COLUMNS,
    missing_values: Sequence[str] = DEFAULT_MISSING_VALUES,
    *,
    issues: list[Issue] | None = None,
) -> pd.DataFrame:
    """Parse a raw station file and add ``CUMDD10``."""
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    daily = parse_weather_text(text, columns, missing_values, source=str(path), issues=issues)
    return add_cumulative_degree_days(daily)


def write_normalized(
    store: DataStore, daily: pd.DataFrame, station: str, year: int, source: str
) -> Path:
    """Persist a normalized table at ``normalized/weather/<year>/<station>.csv``."""
    return store.write_table(
        normalized_weather_path(year, station), daily, source=source, station=station, year=year
    )


def read_normalized(store: DataStore, station: str, year: int) -> pd.DataFrame | None:
    """Load a previously normalized table, or None if it was never written."""
    return store.read_table(normalized_weather_path(year, station))
