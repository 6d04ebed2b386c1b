"""Weekly SWD trap counts.

Decodes the dual-header trap spreadsheet export into typed observations and
totals them per trap by season.

Public API:
  - models: TrapLayout, ResolvedLayout, TrapObservation, SeasonalObservation, TrapSeasonalTotals
  - reshape: read_trap_table, resolve_layout, reshape_trap_table
  - aggregate: classify_observations, aggregate_seasonal_totals, totals_to_frame
"""

from swd_weather.datasources.traps.aggregate import (
    TOTALS_COLUMNS,
    aggregate_seasonal_totals,
    classify_observations,
    totals_to_frame,
)
from swd_weather.datasources.traps.models import (
    METADATA_COLUMNS,
    RawTrapTable,
    ResolvedLayout,
    SeasonalObservation,
    Sex,
    TrapLayout,
    TrapObservation,
    TrapSeasonalTotals,
)
from swd_weather.datasources.traps.reshape import (
    read_trap_table,
    reshape_trap_table,
    resolve_layout,
)

__all__ = [
    "METADATA_COLUMNS",
    "TOTALS_COLUMNS",
    "RawTrapTable",
    "ResolvedLayout",
    "SeasonalObservation",
    "Sex",
    "TrapLayout",
    "TrapObservation",
    "TrapSeasonalTotals",
    "aggregate_seasonal_totals",
    "classify_observations",
    "read_trap_table",
    "reshape_trap_table",
    "resolve_layout",
    "totals_to_frame",
]
