# Copyright (c) 2025 Arne Deutsch, itemis AG, MIT License
"""Point cloud map model and its text encoder/decoder.

Summary
-------
``PointCloudMap`` composes a :class:`~pcm.tables.ReferenceTable` and a
:class:`~pcm.tables.PointTable` and translates them to and from the
line-oriented ``*.pcm`` format::

    # Point Cloud File
    # Version 1.1.0

    ref terrain material grass

    point terrain 1 2 3

Decoding is tolerant by default: bad lines are dropped and reported in a
:class:`~pcm.errors.DecodeReport`. Strict decoding raises
:class:`~pcm.errors.PCMDecodeError` and leaves the map untouched.

Side Effects
------------
``save`` and ``load`` touch the filesystem; everything else is in-memory.

Complexity
----------
Encoding is ``O(R log R + P)``; decoding is linear in the input size.

Examples
--------
>>> m = PointCloudMap()
>>> m.add_reference("terrain", "material", "grass")
True
>>> m.add_point("terrain", (1, 2, 3))
True
>>> loads(dumps(m)).get_point((1, 2, 3)).reference
ReferenceId(value='terrain')

See Also
--------
pcm.tables
pcm.errors
"""

from __future__ import annotations

import logging
import numbers
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

import pcm.common.io as io
from pcm.common.specs import (
    COMMENT_PREFIX,
    FIELD_SEPARATOR,
    LIBRARY_VERSION,
    POINT_RECORD,
    REF_RECORD,
    header_lines,
)
from pcm.common.strings import split_lines, split_string
from pcm.config import CodecConfig
from pcm.errors import DecodeIssue, DecodeReport, IssueKind, PCMDecodeError
from pcm.tables import PointTable, ReferenceTable
from pcm.types import (
    IdLike,
    Point3D,
    PositionLike,
    Reference,
    ReferenceId,
    Vector3f,
    as_reference_id,
)

_log = logging.getLogger(__name__)

# leading decimal float as accepted by C ``atof``
_FLOAT_PREFIX = re.compile(
    r"[ \t\n\r\f\v]*[+-]?(?:infinity|inf|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
    re.IGNORECASE,
)


def parse_coordinate(token: str) -> Tuple[float, bool]:
    """Parse ``token`` with prefix-or-zero semantics.

    Parameters
    ----------
    token : str
        Coordinate text.

    Returns
    -------
    Tuple[float, bool]
        The value of the longest numeric prefix (``0.0`` if there is none)
        and whether the whole token was a float literal.

    Examples
    --------
    >>> parse_coordinate("1.5")
    (1.5, True)
    >>> parse_coordinate("1.5abc")
    (1.5, False)
    >>> parse_coordinate("oops")
    (0.0, False)
    """

    match = _FLOAT_PREFIX.match(token)
    if match is None:
        return 0.0, False
    return float(match.group(0)), match.end() == len(token)


@dataclass(frozen=True)
class _RefRecord:
    ref_id: ReferenceId
    reference: Reference


@dataclass(frozen=True)
class _PointRecord:
    ref_id: ReferenceId
    position: Vector3f


_Record = Union[_RefRecord, _PointRecord]


class PointCloudMap:
    """Named 3D points whose ids resolve through a reference table.

    Summary
    -------
    Owns one ``ReferenceTable`` and one ``PointTable``. Points carry a
    ``ReferenceId`` that is looked up on demand via :meth:`resolve`; ids
    without a matching reference are legal.

    Parameters
    ----------
    config : CodecConfig, optional
        Default codec settings for :meth:`to_string`, :meth:`from_string`,
        :meth:`save` and :meth:`load`.

    Examples
    --------
    >>> m = PointCloudMap()
    >>> m.add_point("tree_12", (0.0, 1.0, -100.0))
    True
    >>> m.resolve(m.get_point(0)) is None
    True
    """

    def __init__(self, config: Optional[CodecConfig] = None) -> None:
        self.references = ReferenceTable()
        self.points = PointTable()
        self.config = config or CodecConfig()

    def __repr__(self) -> str:
        return f"PointCloudMap(references={len(self.references)}, points={len(self.points)})"

    def __str__(self) -> str:
        return self.to_string()

    # ------------------------------------------------------------------
    # Construction and access
    def add_reference(
        self, ref_id: IdLike, ref_type: Union[str, Reference], value: str = ""
    ) -> bool:
        """Add a reference ``(ref_id, ref_type, value)``.

        Parameters
        ----------
        ref_id : str or ReferenceId
            Identity of the reference.
        ref_type : str or Reference
            Type label, or a ready ``Reference`` in which case ``value`` is
            ignored.
        value : str, optional
            Payload; must not contain whitespace to round-trip.

        Returns
        -------
        bool
            ``False`` without mutation if ``ref_id`` already exists.
        """

        ref = ref_type if isinstance(ref_type, Reference) else Reference(ref_type, value)
        return self.references.insert(ref_id, ref)

    def add_point(self, ref_id: IdLike, position: PositionLike) -> bool:
        """Append a point at ``position`` tagged with ``ref_id``.

        The id is not checked against the reference table. Always returns
        ``True``.
        """

        self.points.insert(Point3D(as_reference_id(ref_id), Vector3f.coerce(position)))
        return True

    def get_point(self, key: Union[int, PositionLike]) -> Optional[Point3D]:
        """Return a point by index or by position.

        Parameters
        ----------
        key : int or Vector3f or sequence of float
            An integer selects by insertion index; anything else is read as
            a position and the first point there is returned.

        Returns
        -------
        Point3D or None
            ``None`` if the index is out of range or no point sits at the
            position.

        Raises
        ------
        TypeError
            If ``key`` is neither an integer nor a 3-component position.
        """

        if isinstance(key, numbers.Integral) and not isinstance(key, bool):
            return self.points.get_by_index(int(key))
        try:
            position = Vector3f.coerce(key)  # type: ignore[arg-type]
        except (TypeError, ValueError) as exc:
            raise TypeError(f"point key must be an index or a 3D position, got {key!r}") from exc
        return self.points.get_by_position(position)

    def resolve(self, point: Point3D) -> Optional[Reference]:
        """Return the reference ``point`` is tagged with, or ``None`` if dangling."""

        return self.references.get(point.reference)

    def dangling_points(self) -> List[Point3D]:
        """Return points whose id has no entry in the reference table."""

        return [p for p in self.points if not self.references.contains(p.reference)]

    def clear(self) -> None:
        self.references.clear()
        self.points.clear()

    # ------------------------------------------------------------------
    # Encoding
    def to_string(self, config: Optional[CodecConfig] = None) -> str:
        """Serialise the map to ``*.pcm`` text.

        Summary
        -------
        Emits the two header comment lines, the reference block in id order
        and the point block in insertion order. Each block is framed by
        blank lines. Deterministic for equal table contents.

        Parameters
        ----------
        config : CodecConfig, optional
            Overrides the map's config for this call.

        Returns
        -------
        str
            Encoded text with ``\\n`` line endings.
        """

        cfg = config or self.config
        out = "".join(line + "\n" for line in header_lines(LIBRARY_VERSION))
        out += self.references.to_string()
        out += self.points.to_string(cfg.float_format)
        return out

    # ------------------------------------------------------------------
    # Decoding
    def _analyse(self, text: str) -> Tuple[List[_Record], DecodeReport]:
        """Classify every line of ``text`` without touching the tables."""

        report = DecodeReport()
        records: List[_Record] = []
        seen: set[ReferenceId] = set()
        lines = split_lines(text)
        report.lines_read = len(lines)

        def issue(kind: IssueKind, line_no: int, line: str, message: str) -> None:
            report.issues.append(DecodeIssue(kind, line_no, line, message))

        for line_no, line in enumerate(lines, start=1):
            if not line:
                continue
            tokens = split_string(line, FIELD_SEPARATOR)
            if not tokens:
                continue
            keyword = tokens[0]

            if keyword == REF_RECORD.keyword:
                if len(tokens) < REF_RECORD.min_tokens:
                    issue(
                        IssueKind.MALFORMED_LINE,
                        line_no,
                        line,
                        f"ref needs {REF_RECORD.min_tokens} tokens, got {len(tokens)}",
                    )
                    continue
                if len(tokens) > REF_RECORD.min_tokens:
                    issue(
                        IssueKind.TRUNCATED_VALUE,
                        line_no,
                        line,
                        f"value truncated to {tokens[3]!r}; values cannot contain spaces",
                    )
                ref_id = ReferenceId(tokens[1])
                if ref_id in seen or self.references.contains(ref_id):
                    issue(
                        IssueKind.DUPLICATE_ID,
                        line_no,
                        line,
                        f"reference {ref_id.value!r} already defined; keeping the first",
                    )
                    continue
                seen.add(ref_id)
                records.append(_RefRecord(ref_id, Reference(tokens[2], tokens[3])))

            elif keyword == POINT_RECORD.keyword:
                if len(tokens) < POINT_RECORD.min_tokens:
                    issue(
                        IssueKind.MALFORMED_LINE,
                        line_no,
                        line,
                        f"point needs {POINT_RECORD.min_tokens} tokens, got {len(tokens)}",
                    )
                    continue
                coords = []
                for token in tokens[2:5]:
                    value, complete = parse_coordinate(token)
                    if not complete:
                        issue(
                            IssueKind.NUMERIC_PARSE,
                            line_no,
                            line,
                            f"coordinate {token!r} read as {value!r}",
                        )
                    coords.append(value)
                records.append(_PointRecord(ReferenceId(tokens[1]), Vector3f(*coords)))

            elif keyword.startswith(COMMENT_PREFIX):
                continue

            else:
                issue(IssueKind.UNKNOWN_RECORD, line_no, line, f"unknown record {keyword!r}")

        return records, report

    def from_string(
        self,
        text: str,
        *,
        strict: Optional[bool] = None,
        config: Optional[CodecConfig] = None,
    ) -> DecodeReport:
        """Load ``*.pcm`` text into this map.

        Summary
        -------
        Lines are appended to the existing tables. In lenient mode every
        valid line is applied and problems are collected in the returned
        report. In strict mode any problem raises before the tables change.

        Parameters
        ----------
        text : str
            Encoded map; ``\\r\\n`` line endings are accepted.
        strict : bool, optional
            Overrides ``config.strict`` when given.
        config : CodecConfig, optional
            Overrides the map's config for this call.

        Returns
        -------
        DecodeReport
            Applied counts and collected issues.

        Raises
        ------
        PCMDecodeError
            In strict mode, if any line has an issue.

        Examples
        --------
        >>> m = PointCloudMap()
        >>> m.from_string("ref x\\npoint y 1 2\\n").ok
        False
        >>> len(m.points)
        0
        """

        cfg = config or self.config
        strict = cfg.strict if strict is None else strict
        records, report = self._analyse(text)
        if strict and report.issues:
            raise PCMDecodeError(report)

        for rec in records:
            if isinstance(rec, _RefRecord):
                if self.references.insert(rec.ref_id, rec.reference):
                    report.references_added += 1
            else:
                self.points.insert(Point3D(rec.ref_id, rec.position))
                report.points_added += 1

        for item in report.issues:
            _log.debug("pcm decode: %s", item)
        if report.issues and cfg.warn_on_issues:
            _log.warning(
                "dropped or altered %d line(s) while decoding PCM text", len(report.issues)
            )
        return report

    # ------------------------------------------------------------------
    # Persistence
    def save(self, path: str | Path, config: Optional[CodecConfig] = None) -> None:
        """Atomically write the encoded map to ``path``."""

        io.atomic_write_text(path, self.to_string(config))

    def load(
        self,
        path: str | Path,
        *,
        strict: Optional[bool] = None,
        config: Optional[CodecConfig] = None,
    ) -> DecodeReport:
        """Decode the file at ``path`` into this map; see :meth:`from_string`."""

        return self.from_string(io.read_text(path), strict=strict, config=config)


def dumps(cloud: PointCloudMap, config: Optional[CodecConfig] = None) -> str:
    """Return ``cloud`` encoded as text."""

    return cloud.to_string(config)


def loads(
    text: str, *, strict: Optional[bool] = None, config: Optional[CodecConfig] = None
) -> PointCloudMap:
    """Return a new map decoded from ``text``."""

    cloud = PointCloudMap(config)
    cloud.from_string(text, strict=strict)
    return cloud


__all__ = ["PointCloudMap", "dumps", "loads", "parse_coordinate"]
