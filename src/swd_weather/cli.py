"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import sys
from typing import TYPE_CHECKING

from swd_weather import __version__
from swd_weather.config import get_settings
from swd_weather.flows.build import build_analysis
from swd_weather.flows.fetch import fetch_weather
from swd_weather.flows.pipeline import run_pipeline
from swd_weather.flows.traps import build_trap_history

if TYPE_CHECKING:
    from swd_weather.schemas import PipelineReport


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="swd-weather",
        description="Relate seasonal SWD trap counts to seasonal station weather",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info and configuration")
    subparsers.add_parser("traps", help="Reshape trap counts and append them to trap history")

    fetch_parser = subparsers.add_parser("fetch", help="Fetch station daily weather files")
    fetch_parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Re-fetch files that are already stored",
    )

    subparsers.add_parser("build", help="Summarize weather and write the analysis table")

    run_parser = subparsers.add_parser("run", help="Run the whole pipeline")
    run_parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Re-fetch files that are already stored",
    )

    return parser


def print_report(report: PipelineReport) -> None:
    """Print collected issues to stderr."""
    if report.ok:
        print("No issues.")
        return
    print(f"{len(report.issues)} issue(s):", file=sys.stderr)
    for issue in report.issues:
        where = issue.source if issue.row is None else f"{issue.source}:{issue.row}"
        print(f"  [{issue.kind}] {where}: {issue.message}", file=sys.stderr)


def cmd_info(args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug or args.debug}")
    print(f"Data directory: {settings.data_dir}")
    print(f"Years: reference {settings.reference_year}, new {settings.new_year}")
    print(f"Weather archive: {settings.weather_base_url}")
    return 0


def cmd_traps(args: argparse.Namespace) -> int:
    """Handle the 'traps' command."""
    settings = get_settings()
    if args.debug:
        print(f"Debug mode enabled. Settings: {settings}")
    result = build_trap_history(settings)
    print(f"Joined {result['joined']} of {result['traps']} traps for {settings.new_year}")
    print_report(result["report"])
    return 0 if result["traps"] else 1


def cmd_fetch(args: argparse.Namespace) -> int:
    """Handle the 'fetch' command."""
    settings = get_settings()
    result = fetch_weather(settings, overwrite=args.overwrite)
    print_report(result["report"])
    return 0


def cmd_build(_args: argparse.Namespace) -> int:
    """Handle the 'build' command."""
    result = build_analysis(get_settings())
    if result["path"] is None:
        print("No analysis table written.")
    else:
        print(f"Wrote {result['rows']} rows to {result['path']}")
    print_report(result["report"])
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Handle the 'run' command: traps, fetch, then build."""
    settings = get_settings()
    if args.debug:
        print(f"Debug mode enabled. Settings: {settings}")
    result = run_pipeline(settings, overwrite=args.overwrite)
    print(
        f"Done: {result['traps_joined']} traps joined, "
        f"{result['stations_fetched']} station file(s), "
        f"{result['analysis_rows']} analysis rows."
    )
    print_report(result["report"])
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "traps": cmd_traps,
        "fetch": cmd_fetch,
        "build": cmd_build,
        "run": cmd_run,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
