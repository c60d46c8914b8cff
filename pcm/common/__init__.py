# Copyright (c) 2025 Arne Deutsch, itemis AG, MIT License
"""Shared helpers for the PCM codec: string splitting, file I/O and format constants."""

from .io import atomic_write_file, atomic_write_text, read_text
from .specs import (
    COMMENT_PREFIX,
    FIELD_SEPARATOR,
    FILE_TITLE,
    LIBRARY_VERSION,
    POINT_RECORD,
    REF_RECORD,
    RecordSpec,
    header_lines,
)
from .strings import replace_all, split_lines, split_string

__all__ = [
    "COMMENT_PREFIX",
    "FIELD_SEPARATOR",
    "FILE_TITLE",
    "LIBRARY_VERSION",
    "POINT_RECORD",
    "REF_RECORD",
    "RecordSpec",
    "header_lines",
    "atomic_write_file",
    "atomic_write_text",
    "read_text",
    "replace_all",
    "split_lines",
    "split_string",
]
