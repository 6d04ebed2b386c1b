"""Trap count data models and layout constants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date

    from swd_weather.seasons import Season

#: Leading per-trap columns of the raw table, in order.
METADATA_COLUMNS = ("location1", "crop_host", "location2", "trap_id")

#: Header rows above the trap rows: dates, then sex labels.
HEADER_ROWS = 2

#: Trailing aggregate rows (column totals) excluded from processing.
TOTAL_ROWS = 2

#: Date labels in the first header row.
DATE_FORMAT = "%m/%d/%Y"

#: Raw table as read from disk: rows of untyped string cells.
RawTrapTable = list[list[str]]


class Sex(StrEnum):
    MALE = "male"
    FEMALE = "female"


@dataclass(frozen=True)
class TrapLayout:
    """Where the counts sit in a raw trap table (0-based indices).

    ``num_data_rows`` and ``num_columns`` are inferred from the table when
    None. ``num_columns`` is the exclusive end of the count columns.
    """

    start_row: int = HEADER_ROWS
    start_column: int = len(METADATA_COLUMNS)
    num_data_rows: int | None = None
    num_columns: int | None = None


@dataclass(frozen=True)
class ResolvedLayout:
    """A TrapLayout with every bound filled in and checked against a table."""

    start_row: int
    start_column: int
    num_data_rows: int
    num_columns: int


@dataclass(frozen=True)
class TrapObservation:
    """One count for one trap, date and sex."""

    location1: str
    crop_host: str
    location2: str
    trap_id: int
    sex: Sex
    date: date
    count: int | None


@dataclass(frozen=True)
class SeasonalObservation:
    """A TrapObservation labelled with its season and month."""

    observation: TrapObservation
    season: Season
    month: str

    @property
    def trap_id(self) -> int:
        return self.observation.trap_id

    @property
    def count(self) -> int:
        """Count with missing treated as zero."""
        return self.observation.count or 0


@dataclass(frozen=True)
class TrapSeasonalTotals:
    """Per-trap totals for the seasons of interest."""

    trap_id: int
    total_SWD_spring: int  # noqa: N815 (published column name)
    total_SWD_summer: int  # noqa: N815
    SWD_June: int  # noqa: N815
