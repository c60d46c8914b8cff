# Copyright (c) 2025 Arne Deutsch, itemis AG, MIT License
"""Per-line decode problems and the report returned by the decoder."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class IssueKind(str, Enum):
    """Category of a problem found while decoding a line."""

    DUPLICATE_ID = "duplicate_id"
    MALFORMED_LINE = "malformed_line"
    NUMERIC_PARSE = "numeric_parse"
    TRUNCATED_VALUE = "truncated_value"
    UNKNOWN_RECORD = "unknown_record"


@dataclass(frozen=True)
class DecodeIssue:
    """A problem tied to one input line.

    Parameters
    ----------
    kind : IssueKind
        Problem category.
    line_no : int
        1-based line number in the normalised input.
    line : str
        Raw line text.
    message : str
        Human readable description.
    """

    kind: IssueKind
    line_no: int
    line: str
    message: str

    def __str__(self) -> str:
        return f"line {self.line_no}: {self.kind.value}: {self.message}"


@dataclass
class DecodeReport:
    """Outcome of decoding a text buffer.

    Summary
    -------
    Counts what was applied to the map and collects every issue. A lenient
    decode always returns a report; ``ok`` tells whether the input was clean.
    """

    issues: List[DecodeIssue] = field(default_factory=list)
    references_added: int = 0
    points_added: int = 0
    lines_read: int = 0

    @property
    def ok(self) -> bool:
        return not self.issues

    def by_kind(self, kind: IssueKind) -> List[DecodeIssue]:
        """Return issues of ``kind`` in line order."""

        return [issue for issue in self.issues if issue.kind == kind]


class PCMDecodeError(ValueError):
    """Raised by a strict decode when the input has any issue."""

    def __init__(self, report: DecodeReport) -> None:
        self.report = report
        first = report.issues[0] if report.issues else None
        summary = f"{len(report.issues)} issue(s) in PCM input"
        if first is not None:
            summary += f"; first: {first}"
        super().__init__(summary)

    @property
    def issues(self) -> List[DecodeIssue]:
        return self.report.issues


__all__ = ["DecodeIssue", "DecodeReport", "IssueKind", "PCMDecodeError"]
