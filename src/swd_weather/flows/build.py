"""
Prefect flow for building the analysis table from fetched data.

For each (station, year) needed by the trap history:
  raw station file -> normalized table (with CUMDD10) -> seasonal summary
then joins the summaries onto the trap history and writes
``derived/analysis.csv`` plus ``derived/report.json``.

Run locally:
    python -m swd_weather.flows.build
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd
from prefect import flow, task
from prefect.cache_policies import NO_CACHE

from swd_weather.analysis import merge_weather
from swd_weather.config import Settings, get_settings
from swd_weather.datasources import weather
from swd_weather.errors import PipelineError
from swd_weather.flows.fetch import stations_by_year
from swd_weather.flows.traps import load_history
from swd_weather.schemas import Issue, IssueKind, PipelineReport
from swd_weather.store import (
    ANALYSIS_PATH,
    REPORT_PATH,
    DataStore,
    raw_weather_path,
)

SOURCE = "swd-weather pipeline"


def resolve_columns(settings: Settings) -> list[str]:
    """Canonical weather columns: from the reference file if configured."""
    if settings.weather_reference_path is not None:
        return weather.load_reference_columns(settings.weather_reference_path)
    return list(settings.weather_columns)


@task(name="normalize-station", cache_policy=NO_CACHE)
def normalize_station(
    store: DataStore,
    station: str,
    year: int,
    columns: list[str],
    missing_values: list[str],
) -> tuple[pd.DataFrame | None, list[Issue]]:
    """Parse a stored raw file and save its normalized table.

    Returns (table or None if the file was skipped, issues).
    """
    raw = store.file_path(raw_weather_path(year, station))
    if raw is None:
        issue = Issue(
            kind=IssueKind.RETRIEVAL,
            source=str(raw_weather_path(year, station)),
            message="no raw file for station; fetch failed or was not run",
        )
        return None, [issue]

    issues: list[Issue] = []
    try:
        daily = weather.normalize_weather_file(raw, columns, missing_values, issues=issues)
    except PipelineError as e:
        return None, [*issues, e.to_issue()]

    weather.write_normalized(store, daily, station, year, source=str(raw))
    return daily, issues


@task(name="summarize-station", cache_policy=NO_CACHE)
def summarize_station(
    daily: pd.DataFrame, station: str, year: int
) -> weather.WeatherSeasonalSummary:
    """Seasonal statistics for one station and year."""
    return weather.summarize_station(daily, station, year)


@task(name="merge-datasets", cache_policy=NO_CACHE)
def merge_datasets(
    history: pd.DataFrame,
    summaries: pd.DataFrame,
    how: str,
    years: list[int],
) -> tuple[pd.DataFrame, list[Issue]]:
    """Join trap history with weather summaries."""
    merged, gaps = merge_weather(history, summaries, how=how, years=years)
    return merged, [g.to_issue() for g in gaps]


@task(name="save-analysis", cache_policy=NO_CACHE)
def save_analysis(store: DataStore, analysis: pd.DataFrame, report: PipelineReport) -> Path:
    """Save the analysis table and its run report via store."""
    store.write(
        REPORT_PATH,
        report.model_dump(mode="json"),
        source=SOURCE,
        failed_sources=report.failed_sources,
    )
    return store.write_table(ANALYSIS_PATH, analysis, source=SOURCE)


@flow(name="build-analysis", log_prints=True)
def build_analysis(
    settings: Settings | None = None,
    prior_report: PipelineReport | None = None,
) -> dict[str, Any]:
    """
    Summarize weather for every needed (station, year) and merge with traps.

    Files that fail to parse are skipped and reported; the remaining
    stations still make it into the table.
    """
    settings = settings or get_settings()
    store = DataStore(settings.data_dir)
    report = PipelineReport()
    if prior_report is not None:
        report.extend(prior_report.issues)

    try:
        history = load_history(store, settings.history_source)
    except PipelineError as e:
        print(f"Cannot build analysis table: {e}")
        issue = e.to_issue()
        if issue not in report.issues:
            report.add(issue)
        return {"rows": 0, "summaries": 0, "path": None, "report": report}

    try:
        columns = resolve_columns(settings)
    except (OSError, ValueError) as e:
        print(f"Cannot read weather reference schema: {e}")
        columns = list(settings.weather_columns)
        report.add(
            Issue(
                kind=IssueKind.CONFIG,
                source=str(settings.weather_reference_path),
                message=f"unreadable reference schema, using configured columns: {e}",
            )
        )

    summaries: list[weather.WeatherSeasonalSummary] = []
    for year, stations in stations_by_year(history, settings.target_years).items():
        for station in stations:
            daily, issues = normalize_station(
                store, station, year, columns, list(settings.missing_values)
            )
            report.extend(issues)
            if daily is None:
                print(f"Skipped {station} ({year}): {issues[-1].message}")
                continue
            summaries.append(summarize_station(daily, station, year))
    print(f"Summarized weather for {len(summaries)} station-year(s)")

    summary_frame = weather.summaries_to_frame(summaries)
    analysis, gap_issues = merge_datasets(
        history,
        summary_frame,
        settings.join_how,
        settings.target_years,
    )
    report.extend(gap_issues)

    path = save_analysis(store, analysis, report)
    print(f"Saved {len(analysis)} analysis rows to {path} ({len(report.issues)} issue(s))")
    return {"rows": len(analysis), "summaries": len(summaries), "path": path, "report": report}


if __name__ == "__main__":
    result = build_analysis()
    print(f"Flow complete: {result['rows']} rows")
