"""Decode the dual-header weekly trap table into long-form observations.

Raw layout (0-based)::

    row 0   | ...metadata headers... | 6/1/2019 | 6/1/2019 | 6/15/2019 | ...
    row 1   |                        | M        | F        | M         | ...
    row 2.. | loc1 | host | loc2 | id | count    | count    | count     | ...
    last 2  | column totals (ignored)

Each count column pair (male, female) yields two observations per trap row.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

import pandas as pd

from swd_weather.datasources.traps.models import (
    DATE_FORMAT,
    METADATA_COLUMNS,
    TOTAL_ROWS,
    RawTrapTable,
    ResolvedLayout,
    Sex,
    TrapLayout,
    TrapObservation,
)
from swd_weather.errors import ConfigError, ParseError

if TYPE_CHECKING:
    from pathlib import Path

    from swd_weather.schemas import Issue

_FEMALE_LABELS = {"f", "female", "females"}


def read_trap_table(path: Path, delimiter: str = ",") -> RawTrapTable:
    """Read a delimited trap count file verbatim as a grid of strings.

    Raises:
        ParseError: If the file is empty, ragged or not valid UTF-8.
    """
    try:
        frame = pd.read_csv(
            path,
            sep=delimiter,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
        )
    except (pd.errors.ParserError, ValueError) as e:
        raise ParseError(f"unreadable trap table: {e}", source=str(path)) from e
    return [
        ["" if pd.isna(cell) else str(cell).strip() for cell in row]
        for row in frame.itertuples(index=False, name=None)
    ]


def _cell(table: RawTrapTable, row: int, column: int) -> str:
    cells = table[row]
    return cells[column].strip() if column < len(cells) else ""


def parse_date(
    text: str, *, source: str = "", row: int | None = None, column: int | None = None
) -> date:
    """Parse a ``month/day/year`` header label."""
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT).date()
    except ValueError:
        msg = f"invalid date {text!r}, expected month/day/year"
        raise ParseError(msg, source=source, row=row, column=column) from None


def parse_count(
    text: str, *, source: str = "", row: int | None = None, column: int | None = None
) -> int | None:
    """Parse a count cell. Blank means missing."""
    text = text.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        raise ParseError(
            f"non-numeric count {text!r}", source=source, row=row, column=column
        ) from None
    if value < 0 or not value.is_integer():
        raise ParseError(
            f"count must be a non-negative integer, got {text!r}",
            source=source,
            row=row,
            column=column,
        )
    return int(value)


def resolve_layout(table: RawTrapTable, layout: TrapLayout, source: str = "") -> ResolvedLayout:
    """Fill in inferred bounds and validate the layout against the table.

    Raises:
        ConfigError: If the layout does not describe whole male/female pairs
            inside the table.
    """
    width = max((len(r) for r in table), default=0)
    num_columns = layout.num_columns if layout.num_columns is not None else width
    num_data_rows = layout.num_data_rows
    if num_data_rows is None:
        num_data_rows = len(table) - layout.start_row - TOTAL_ROWS

    n_meta = len(METADATA_COLUMNS)
    start = layout.start_column
    if start < n_meta or (start - n_meta) % 2:
        msg = f"start_column {start} is not the first column of a male/female pair"
        raise ConfigError(msg, source=source, column=start)
    if len(table) > 1 and _cell(table, 1, start).lower() in _FEMALE_LABELS:
        msg = f"start_column {start} is labelled female; pairs must start with male"
        raise ConfigError(msg, source=source, column=start)
    if num_columns > width:
        msg = f"num_columns {num_columns} exceeds table width {width}"
        raise ConfigError(msg, source=source)
    if (num_columns - start) % 2:
        msg = f"columns {start}..{num_columns} do not form whole male/female pairs"
        raise ConfigError(msg, source=source)
    if layout.start_row < 1 or num_data_rows < 0 or layout.start_row + num_data_rows > len(table):
        msg = f"rows {layout.start_row}..{layout.start_row + num_data_rows} outside table"
        raise ConfigError(msg, source=source)

    return ResolvedLayout(
        start_row=layout.start_row,
        start_column=start,
        num_data_rows=num_data_rows,
        num_columns=num_columns,
    )


def parse_header_dates(
    table: RawTrapTable, layout: ResolvedLayout, source: str = ""
) -> list[tuple[date, date]]:
    """Return (male_date, female_date) for every column pair.

    A blank female label takes the male date (merged header cells export
    blank). Any other bad label raises ParseError: the whole column is
    unusable.
    """
    pairs: list[tuple[date, date]] = []
    for c in range(layout.start_column, layout.num_columns, 2):
        male = parse_date(_cell(table, 0, c), source=source, row=0, column=c)
        female_text = _cell(table, 0, c + 1)
        female = (
            parse_date(female_text, source=source, row=0, column=c + 1) if female_text else male
        )
        pairs.append((male, female))
    return pairs


def reshape_trap_table(
    table: RawTrapTable,
    layout: TrapLayout | None = None,
    *,
    source: str = "",
    issues: list[Issue] | None = None,
) -> list[TrapObservation]:
    """Reshape a raw trap table into one observation per trap, date and sex.

    Output is row-major, male before female within each pair.

    Args:
        table: Raw grid of cells.
        layout: Count block position; defaults to the standard layout.
        source: Identifier used in error context (usually the file path).
        issues: If given, bad cells are recorded here and skipped instead
            of raising.

    Raises:
        ConfigError: If the layout is invalid for this table.
        ParseError: On a malformed header date, or a malformed cell when
            ``issues`` is None.
    """
    resolved = resolve_layout(table, layout or TrapLayout(), source)
    pairs = parse_header_dates(table, resolved, source)

    observations: list[TrapObservation] = []
    for r in range(resolved.start_row, resolved.start_row + resolved.num_data_rows):
        location1, crop_host, location2, trap_text = (
            _cell(table, r, i) for i in range(len(METADATA_COLUMNS))
        )
        try:
            trap_id = _parse_trap_id(trap_text, source=source, row=r)
        except ParseError as e:
            if issues is None:
                raise
            issues.append(e.to_issue())
            continue

        for i, (male_date, female_date) in enumerate(pairs):
            c = resolved.start_column + 2 * i
            for column, sex, day in ((c, Sex.MALE, male_date), (c + 1, Sex.FEMALE, female_date)):
                text = _cell(table, r, column)
                try:
                    count = parse_count(text, source=source, row=r, column=column)
                except ParseError as e:
                    if issues is None:
                        raise
                    issues.append(e.to_issue())
                    continue
                observations.append(
                    TrapObservation(
                        location1=location1,
                        crop_host=crop_host,
                        location2=location2,
                        trap_id=trap_id,
                        sex=sex,
                        date=day,
                        count=count,
                    )
                )
    return observations


def _parse_trap_id(text: str, *, source: str, row: int) -> int:
    column = METADATA_COLUMNS.index("trap_id")
    try:
        value = float(text)
    except ValueError:
        msg = f"invalid trap ID {text!r}"
        raise ParseError(msg, source=source, row=row, column=column) from None
    if value <= 0 or not value.is_integer():
        msg = f"trap ID must be a positive integer, got {text!r}"
        raise ParseError(msg, source=source, row=row, column=column)
    return int(value)
