"""
Report models for pipeline runs.

Pydantic models for the structured list of skipped and failed inputs that
accompanies every analysis table.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from collections.abc import Iterable


class IssueKind(StrEnum):
    """Category of a reported problem."""

    PARSE = "parse"
    SCHEMA = "schema"
    CONFIG = "config"
    RETRIEVAL = "retrieval"
    JOIN_GAP = "join_gap"


class Issue(BaseModel):
    """One skipped or failed input."""

    kind: IssueKind
    source: str = Field(..., description="File path, URL or stage name")
    message: str
    row: int | None = None
    column: int | None = None
    keys: list[str] = Field(default_factory=list, description="Keys dropped by a join")


class PipelineReport(BaseModel):
    """Aggregated issues for one pipeline run."""

    issues: list[Issue] = Field(default_factory=list)

    def add(self, issue: Issue) -> None:
        self.issues.append(issue)

    def extend(self, issues: Iterable[Issue]) -> None:
        self.issues.extend(issues)

    def of_kind(self, kind: IssueKind) -> list[Issue]:
        return [i for i in self.issues if i.kind == kind]

    @property
    def failed_sources(self) -> list[str]:
        """Sources that were skipped entirely or partially, in first-seen order."""
        seen: dict[str, None] = {}
        for issue in self.issues:
            if issue.kind != IssueKind.JOIN_GAP:
                seen.setdefault(issue.source, None)
        return list(seen)

    @property
    def ok(self) -> bool:
        return not self.issues
