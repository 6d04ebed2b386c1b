"""
Tests for CLI functionality.

These tests verify the command-line interface logic.
"""

from __future__ import annotations

import argparse
from io import StringIO
from pathlib import Path
from unittest.mock import patch

import pytest

from swd_weather.cli import (
    cmd_build,
    cmd_fetch,
    cmd_info,
    cmd_run,
    cmd_traps,
    create_parser,
    main,
    print_report,
)
from swd_weather.schemas import Issue, IssueKind, PipelineReport


def _report(*issues: Issue) -> PipelineReport:
    return PipelineReport(issues=list(issues))


class TestCreateParser:
    """Tests for create_parser function."""

    def test_creates_parser(self) -> None:
        """Parser is created successfully."""
        parser = create_parser()
        assert isinstance(parser, argparse.ArgumentParser)
        assert parser.prog == "swd-weather"

    def test_parser_has_version(self) -> None:
        """Parser has version argument."""
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["--version"])

    def test_parser_has_debug_flag(self) -> None:
        """Parser accepts --debug flag."""
        args = create_parser().parse_args(["--debug", "info"])
        assert args.debug is True

    @pytest.mark.parametrize("command", ["info", "traps", "fetch", "build", "run"])
    def test_parser_commands(self, command: str) -> None:
        """Parser accepts each pipeline command."""
        args = create_parser().parse_args([command])
        assert args.command == command

    def test_overwrite_flag(self) -> None:
        """Fetch and run accept --overwrite."""
        parser = create_parser()
        assert parser.parse_args(["fetch", "--overwrite"]).overwrite is True
        assert parser.parse_args(["run"]).overwrite is False


class TestPrintReport:
    """Tests for print_report function."""

    def test_no_issues(self) -> None:
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            print_report(_report())
            assert "No issues" in mock_stdout.getvalue()

    def test_issues_go_to_stderr(self) -> None:
        issue = Issue(kind=IssueKind.PARSE, source="traps.csv", row=3, message="bad count")
        with patch("sys.stderr", new=StringIO()) as mock_stderr:
            print_report(_report(issue))
            output = mock_stderr.getvalue()
            assert "[parse] traps.csv:3: bad count" in output


class TestCmdInfo:
    """Tests for cmd_info function."""

    def test_prints_app_info(self) -> None:
        """Info command prints application information."""
        args = argparse.Namespace(debug=False)

        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            exit_code = cmd_info(args)
            output = mock_stdout.getvalue()
            assert exit_code == 0
            assert "Application" in output
            assert "Weather archive" in output


class TestCmdTraps:
    """Tests for cmd_traps function."""

    def test_success_returns_zero(self) -> None:
        args = argparse.Namespace(debug=False)

        with patch("swd_weather.cli.build_trap_history") as mock_flow:
            mock_flow.return_value = {"traps": 3, "joined": 2, "report": _report()}
            assert cmd_traps(args) == 0
            mock_flow.assert_called_once()

    def test_no_traps_returns_one(self) -> None:
        args = argparse.Namespace(debug=False)
        issue = Issue(kind=IssueKind.CONFIG, source="traps.csv", message="not found")

        with patch("swd_weather.cli.build_trap_history") as mock_flow:
            mock_flow.return_value = {"traps": 0, "joined": 0, "report": _report(issue)}
            assert cmd_traps(args) == 1

    def test_debug_mode_prints_settings(self) -> None:
        args = argparse.Namespace(debug=True)

        with (
            patch("swd_weather.cli.build_trap_history") as mock_flow,
            patch("sys.stdout", new=StringIO()) as mock_stdout,
        ):
            mock_flow.return_value = {"traps": 1, "joined": 1, "report": _report()}
            cmd_traps(args)
            assert "Debug" in mock_stdout.getvalue()


class TestCmdFetch:
    """Tests for cmd_fetch function."""

    def test_passes_overwrite(self) -> None:
        args = argparse.Namespace(debug=False, overwrite=True)

        with patch("swd_weather.cli.fetch_weather") as mock_flow:
            mock_flow.return_value = {"outcomes": {}, "report": _report()}
            assert cmd_fetch(args) == 0
            assert mock_flow.call_args.kwargs["overwrite"] is True


class TestCmdBuild:
    """Tests for cmd_build function."""

    def test_prints_output_path(self) -> None:
        args = argparse.Namespace(debug=False)

        with (
            patch("swd_weather.cli.build_analysis") as mock_flow,
            patch("sys.stdout", new=StringIO()) as mock_stdout,
        ):
            mock_flow.return_value = {
                "rows": 4,
                "path": Path("data/derived/analysis.csv"),
                "report": _report(),
            }
            assert cmd_build(args) == 0
            assert "Wrote 4 rows" in mock_stdout.getvalue()


class TestCmdRun:
    """Tests for cmd_run function."""

    def test_runs_pipeline(self) -> None:
        args = argparse.Namespace(debug=False, overwrite=False)

        with (
            patch("swd_weather.cli.run_pipeline") as mock_flow,
            patch("sys.stdout", new=StringIO()) as mock_stdout,
        ):
            mock_flow.return_value = {
                "traps_joined": 2,
                "stations_fetched": 1,
                "analysis_rows": 4,
                "report": _report(),
            }
            assert cmd_run(args) == 0
            assert mock_flow.call_args.kwargs["overwrite"] is False
            assert "4 analysis rows" in mock_stdout.getvalue()


class TestMain:
    """Tests for main function."""

    def test_no_command_shows_help(self) -> None:
        """No command shows help and exits 0."""
        with patch("sys.argv", ["swd-weather"]):
            assert main() == 0

    @pytest.mark.parametrize(
        ("command", "handler"),
        [
            ("info", "cmd_info"),
            ("traps", "cmd_traps"),
            ("fetch", "cmd_fetch"),
            ("build", "cmd_build"),
            ("run", "cmd_run"),
        ],
    )
    def test_dispatches_command(self, command: str, handler: str) -> None:
        with (
            patch("sys.argv", ["swd-weather", command]),
            patch(f"swd_weather.cli.{handler}") as mock_cmd,
        ):
            mock_cmd.return_value = 0
            assert main() == 0
            mock_cmd.assert_called_once()

    def test_unknown_command_shows_help(self) -> None:
        """Unknown command shows help and returns 1."""
        with (
            patch("sys.argv", ["swd-weather", "run"]),
            patch("swd_weather.cli.create_parser") as mock_parser,
        ):
            mock_parser.return_value.parse_args.return_value = argparse.Namespace(command="unknown")
            assert main() == 1
