"""
Prefect flow for building the multi-year trap history.

Reshapes the new year's trap count table, totals it per trap by season,
attaches the reference year's trap metadata and appends the result to
``derived/historical_traps.csv``.

Run locally:
    python -m swd_weather.flows.traps
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd
from prefect import flow, task
from prefect.cache_policies import NO_CACHE

from swd_weather.analysis import STATION, TRAP_ID, YEAR, append_to_history, join_trap_metadata
from swd_weather.config import Settings, get_settings
from swd_weather.datasources import traps
from swd_weather.errors import ConfigError, ParseError, PipelineError
from swd_weather.schemas import Issue, PipelineReport
from swd_weather.store import HISTORY_PATH, DataStore


def read_history_csv(path: Path) -> pd.DataFrame:
    """Read a trap history/metadata CSV; station IDs stay strings."""
    try:
        return pd.read_csv(path, dtype={STATION: str})
    except FileNotFoundError:
        raise ConfigError("history file not found", source=str(path)) from None
    except (pd.errors.ParserError, ValueError) as e:
        raise ParseError(f"unreadable history table: {e}", source=str(path)) from e


@task(name="load-history", cache_policy=NO_CACHE)
def load_history(store: DataStore, fallback: Path) -> pd.DataFrame:
    """Load the derived trap history, or the configured input if not built yet."""
    derived = store.file_path(HISTORY_PATH)
    if derived is not None:
        return read_history_csv(derived)
    if fallback.exists():
        return read_history_csv(fallback)
    return pd.DataFrame(columns=[TRAP_ID, YEAR, STATION])


@task(name="load-trap-counts")
def load_trap_counts(path: Path, delimiter: str = ",") -> traps.RawTrapTable:
    """Read the raw trap count table."""
    try:
        return traps.read_trap_table(path, delimiter)
    except OSError as e:
        raise ConfigError(f"cannot read trap counts: {e}", source=str(path)) from e


@task(name="reshape-trap-counts", cache_policy=NO_CACHE)
def reshape_trap_counts(
    table: traps.RawTrapTable,
    layout: traps.TrapLayout,
    source: str,
) -> tuple[list[traps.TrapObservation], list[Issue]]:
    """Decode the raw table, collecting bad cells instead of failing."""
    issues: list[Issue] = []
    observations = traps.reshape_trap_table(table, layout, source=source, issues=issues)
    return observations, issues


@task(name="summarize-traps", cache_policy=NO_CACHE)
def summarize_traps(observations: list[traps.TrapObservation]) -> pd.DataFrame:
    """Seasonal totals per trap."""
    labelled = traps.classify_observations(observations)
    return traps.totals_to_frame(traps.aggregate_seasonal_totals(labelled))


@task(name="join-trap-metadata", cache_policy=NO_CACHE)
def join_metadata(
    totals: pd.DataFrame,
    metadata: pd.DataFrame,
    history: pd.DataFrame,
    reference_year: int,
    new_year: int,
) -> tuple[pd.DataFrame, pd.DataFrame, list[Issue]]:
    """Join totals to metadata and append the new year to history.

    Returns (annual records, updated history, join-gap issues).
    """
    annual, gaps = join_trap_metadata(totals, metadata, reference_year, new_year)
    return annual, append_to_history(history, annual), [g.to_issue() for g in gaps]


@task(name="save-history", cache_policy=NO_CACHE)
def save_history(store: DataStore, history: pd.DataFrame, source: str) -> Path:
    """Save the multi-year trap history via store."""
    return store.write_table(HISTORY_PATH, history, source=source)


def layout_from_settings(settings: Settings) -> traps.TrapLayout:
    return traps.TrapLayout(
        start_row=settings.start_row,
        start_column=settings.start_column,
        num_data_rows=settings.num_data_rows,
        num_columns=settings.num_columns,
    )


@flow(name="build-trap-history", log_prints=True)
def build_trap_history(settings: Settings | None = None) -> dict[str, Any]:
    """
    Add the new year's trap totals to the multi-year history.

    A malformed trap file, layout or history table stops this stage; the problem is
    reported and the existing history is left as it was.
    """
    settings = settings or get_settings()
    store = DataStore(settings.data_dir)
    report = PipelineReport()
    results: dict[str, Any] = {"observations": 0, "traps": 0, "joined": 0, "report": report}

    source = str(settings.trap_counts_path)
    try:
        table = load_trap_counts(settings.trap_counts_path, settings.trap_delimiter)
        observations, issues = reshape_trap_counts(table, layout_from_settings(settings), source)
        metadata = read_history_csv(settings.metadata_path)
        history = load_history(store, settings.history_source)
    except PipelineError as e:
        print(f"Skipping trap stage: {e}")
        report.add(e.to_issue())
        return results

    report.extend(issues)
    if issues:
        print(f"Skipped {len(issues)} malformed cell(s) in {source}")
    results["observations"] = len(observations)

    totals = summarize_traps(observations)
    results["traps"] = len(totals)
    print(f"Totalled {len(observations)} observations across {len(totals)} traps")

    annual, history, gap_issues = join_metadata(
        totals, metadata, history, settings.reference_year, settings.new_year
    )
    report.extend(gap_issues)
    results["joined"] = len(annual)
    if len(annual) < len(totals):
        dropped = len(totals) - len(annual)
        print(f"Dropped {dropped} trap(s) without {settings.reference_year} metadata")

    path = save_history(store, history, source)
    results["history_rows"] = len(history)
    print(f"Saved {len(history)} trap records ({len(annual)} for {settings.new_year}) to {path}")
    return results


if __name__ == "__main__":
    result = build_trap_history()
    print(f"Flow complete: {result}")
