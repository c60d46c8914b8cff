# Copyright (c) 2025 Arne Deutsch, itemis AG, MIT License
"""Constants describing the line-oriented ``*.pcm`` text format."""

from __future__ import annotations

from dataclasses import dataclass

LIBRARY_VERSION = "1.1.0"
FILE_TITLE = "Point Cloud File"
FIELD_SEPARATOR = " "
COMMENT_PREFIX = "#"


@dataclass(frozen=True)
class RecordSpec:
    """Keyword and minimum token count of one record kind.

    Attributes
    ----------
    keyword : str
        First token of the line, matched case-sensitively.
    min_tokens : int
        Minimum number of tokens including the keyword.
    """

    keyword: str
    min_tokens: int


REF_RECORD = RecordSpec("ref", 4)
POINT_RECORD = RecordSpec("point", 5)


def header_lines(version: str = LIBRARY_VERSION) -> list[str]:
    """Return the two comment lines that open every encoded map."""
    return [f"{COMMENT_PREFIX} {FILE_TITLE}", f"{COMMENT_PREFIX} Version {version}"]


__all__ = [
    "COMMENT_PREFIX",
    "FIELD_SEPARATOR",
    "FILE_TITLE",
    "LIBRARY_VERSION",
    "POINT_RECORD",
    "REF_RECORD",
    "RecordSpec",
    "header_lines",
]
