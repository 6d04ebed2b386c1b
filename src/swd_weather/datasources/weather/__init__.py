"""Station daily weather archive.

Fetches per-station daily files, parses them against a canonical column
schema and reduces them to seasonal statistics.

Public API:
  - client: station_url, fetch_station_file, fetch_stations
  - parse: load_reference_columns, parse_weather_text, normalize_weather_file,
    write_normalized, read_normalized
  - summarize: convert_units, summarize_station, filter_precipitation
  - models: FetchOutcome, WeatherSeasonalSummary, summaries_to_frame
"""

from swd_weather.datasources.weather.client import (
    fetch_station_file,
    fetch_stations,
    outcome_issue,
    station_url,
)
from swd_weather.datasources.weather.models import (
    MIN_SEASON_PRECIP_MM,
    SUMMARY_COLUMNS,
    FetchOutcome,
    WeatherSeasonalSummary,
    summaries_to_frame,
)
from swd_weather.datasources.weather.parse import (
    CUMDD10,
    DEFAULT_COLUMNS,
    DEFAULT_MISSING_VALUES,
    add_cumulative_degree_days,
    load_reference_columns,
    normalize_weather_file,
    parse_weather_text,
    read_normalized,
    write_normalized,
)
from swd_weather.datasources.weather.summarize import (
    convert_units,
    filter_precipitation,
    summarize_station,
)

__all__ = [
    "CUMDD10",
    "DEFAULT_COLUMNS",
    "DEFAULT_MISSING_VALUES",
    "MIN_SEASON_PRECIP_MM",
    "SUMMARY_COLUMNS",
    "FetchOutcome",
    "WeatherSeasonalSummary",
    "add_cumulative_degree_days",
    "convert_units",
    "fetch_station_file",
    "fetch_stations",
    "filter_precipitation",
    "load_reference_columns",
    "normalize_weather_file",
    "outcome_issue",
    "parse_weather_text",
    "read_normalized",
    "station_url",
    "summaries_to_frame",
    "summarize_station",
    "write_normalized",
]
