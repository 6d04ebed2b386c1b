"""
Prefect flow running the whole pipeline: traps -> fetch -> build.

Run locally:
    python -m swd_weather.flows.pipeline
"""

from __future__ import annotations

from typing import Any

from prefect import flow

from swd_weather.config import Settings, get_settings
from swd_weather.flows.build import build_analysis
from swd_weather.flows.fetch import fetch_weather
from swd_weather.flows.traps import build_trap_history
from swd_weather.schemas import PipelineReport


@flow(name="swd-weather-pipeline", log_prints=True)
def run_pipeline(settings: Settings | None = None, overwrite: bool = False) -> dict[str, Any]:
    """
    Build trap history, fetch station files and write the analysis table.

    Every stage runs even if an earlier one reported problems; the final
    report lists all skipped and failed inputs.
    """
    settings = settings or get_settings()
    report = PipelineReport()

    traps_result = build_trap_history(settings)
    report.extend(traps_result["report"].issues)

    fetch_result = fetch_weather(settings, overwrite=overwrite)
    report.extend(fetch_result["report"].issues)

    build_result = build_analysis(settings, prior_report=report)
    fetched = [o for by_station in fetch_result["outcomes"].values() for o in by_station.values()]

    return {
        "observations": traps_result["observations"],
        "traps_joined": traps_result["joined"],
        "stations_fetched": sum(1 for o in fetched if o.ok),
        "analysis_rows": build_result["rows"],
        "report": build_result["report"],
    }


if __name__ == "__main__":
    result = run_pipeline()
    issues = result["report"].issues
    print(f"Flow complete: {result['analysis_rows']} rows, {len(issues)} issue(s)")
