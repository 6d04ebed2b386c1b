"""Cross-datasource joins.

Each module combines outputs from 2+ datasources into the tables the
pipeline publishes. This is the domain logic layer.

Dependency rule: analysis/ imports from datasources/ models only.
It never fetches data or touches the filesystem.

Modules:
  - metadata: trap totals + historical trap metadata -> multi-year trap history
  - merge: trap history + seasonal weather summaries -> analysis table
"""

from swd_weather.analysis.merge import JOIN_KEYS, merge_weather
from swd_weather.analysis.metadata import (
    STATION,
    TRAP_ID,
    WEATHER_COLUMNS,
    YEAR,
    append_to_history,
    join_trap_metadata,
    metadata_for_year,
)

__all__ = [
    "JOIN_KEYS",
    "STATION",
    "TRAP_ID",
    "WEATHER_COLUMNS",
    "YEAR",
    "append_to_history",
    "join_trap_metadata",
    "merge_weather",
    "metadata_for_year",
]
