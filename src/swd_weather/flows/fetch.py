"""
Prefect flow for fetching station daily weather files.

Collects the distinct weather stations assigned to traps in each target
year and downloads one archive file per (station, year) into
``raw/weather/<year>/``. Failures are recorded per station; the batch
always completes.

Run locally:
    python -m swd_weather.flows.fetch
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from prefect import flow, task
from prefect.cache_policies import NO_CACHE

from swd_weather.analysis import STATION, YEAR
from swd_weather.config import Settings, get_settings
from swd_weather.datasources import weather
from swd_weather.errors import PipelineError
from swd_weather.flows.traps import load_history
from swd_weather.schemas import PipelineReport
from swd_weather.store import DataStore

if TYPE_CHECKING:
    from collections.abc import Iterable

    import pandas as pd


def stations_by_year(history: pd.DataFrame, years: Iterable[int]) -> dict[int, list[str]]:
    """Distinct, non-blank station IDs assigned to traps in each year."""
    result: dict[int, list[str]] = {}
    for year in years:
        column = history.loc[history[YEAR] == year, STATION].dropna().astype(str).str.strip()
        result[year] = sorted(s for s in column.unique() if s)
    return result


@task(name="fetch-station-files", cache_policy=NO_CACHE)
def fetch_station_files(
    stations: list[str],
    year: int,
    base_url: str,
    store: DataStore,
    max_workers: int,
    timeout: float,
    overwrite: bool = False,
) -> dict[str, weather.FetchOutcome]:
    """Fetch one year's station files on a bounded worker pool."""
    return weather.fetch_stations(
        stations,
        year,
        base_url,
        store,
        max_workers=max_workers,
        timeout=timeout,
        overwrite=overwrite,
    )


@flow(name="fetch-weather", log_prints=True)
def fetch_weather(settings: Settings | None = None, overwrite: bool = False) -> dict[str, Any]:
    """
    Fetch daily weather files for every station in the target years.

    Stored files are reused unless ``overwrite`` is set.
    """
    settings = settings or get_settings()
    store = DataStore(settings.data_dir)
    report = PipelineReport()

    try:
        history = load_history(store, settings.history_source)
    except PipelineError as e:
        print(f"Skipping weather fetch: {e}")
        report.add(e.to_issue())
        return {"outcomes": {}, "report": report}
    wanted = stations_by_year(history, settings.target_years)

    outcomes: dict[int, dict[str, weather.FetchOutcome]] = {}
    for year, stations in wanted.items():
        if not stations:
            print(f"No stations assigned to traps in {year}, nothing to fetch.")
            outcomes[year] = {}
            continue
        print(f"Fetching {len(stations)} station file(s) for {year}...")
        outcomes[year] = fetch_station_files(
            stations,
            year,
            settings.weather_base_url,
            store,
            settings.fetch_workers,
            settings.fetch_timeout,
            overwrite,
        )
        failed = [o for o in outcomes[year].values() if not o.ok]
        for outcome in failed:
            print(f"Fetch failed for {outcome.station} ({year}): {outcome.error}")
            report.add(weather.outcome_issue(outcome).to_issue())
        print(f"Fetched {len(stations) - len(failed)}/{len(stations)} station file(s) for {year}")

    return {"outcomes": outcomes, "report": report}


if __name__ == "__main__":
    result = fetch_weather()
    print(f"Flow complete: {result['report']}")
