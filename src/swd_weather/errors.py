"""Error taxonomy for pipeline inputs.

Every error carries enough context (source identifier, row, column) to be
reported in aggregate. Flows catch these per file and keep going; the
collected issues end up in ``derived/report.json``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from swd_weather.schemas import Issue, IssueKind

if TYPE_CHECKING:
    from collections.abc import Iterable


class PipelineError(Exception):
    """Base class for errors tied to a specific input."""

    kind: IssueKind = IssueKind.PARSE

    def __init__(
        self,
        message: str,
        *,
        source: str = "",
        row: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
        self.row = row
        self.column = column

    def __str__(self) -> str:
        where = [self.source] if self.source else []
        if self.row is not None:
            where.append(f"row {self.row}")
        if self.column is not None:
            where.append(f"column {self.column}")
        return f"{', '.join(where)}: {self.message}" if where else self.message

    def to_issue(self) -> Issue:
        return Issue(
            kind=self.kind,
            source=self.source,
            row=self.row,
            column=self.column,
            message=self.message,
        )


class ParseError(PipelineError):
    """Malformed date or number in a source cell."""

    kind = IssueKind.PARSE


class SchemaError(PipelineError):
    """Weather file row width does not match the canonical schema."""

    kind = IssueKind.SCHEMA


class ConfigError(PipelineError):
    """Invalid pipeline configuration (e.g. misaligned column offsets)."""

    kind = IssueKind.CONFIG


class RetrievalError(PipelineError):
    """Network failure or missing remote file while fetching."""

    kind = IssueKind.RETRIEVAL


class JoinGapWarning(UserWarning):
    """Rows dropped by an inner join. Reported, never raised."""

    def __init__(self, message: str, *, source: str, keys: Iterable[object]) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
        self.keys = list(keys)

    def to_issue(self) -> Issue:
        return Issue(
            kind=IssueKind.JOIN_GAP,
            source=self.source,
            message=self.message,
            keys=[str(k) for k in self.keys],
        )
