# Copyright (c) 2025 Arne Deutsch, itemis AG, MIT License
"""Reference and point tables composed by :class:`~pcm.map.PointCloudMap`."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np

from pcm.common.specs import FIELD_SEPARATOR, REF_RECORD
from pcm.types import (
    IdLike,
    Point3D,
    PositionLike,
    Reference,
    ReferenceId,
    Vector3f,
    as_reference_id,
)


class ReferenceTable:
    """Unique mapping from ``ReferenceId`` to ``Reference``.

    Summary
    -------
    Each id maps to at most one reference; the first insert wins and later
    inserts under the same id are rejected. Iteration and serialisation
    follow the ``ReferenceId`` order.

    Examples
    --------
    >>> t = ReferenceTable()
    >>> t.insert("a", Reference("t1", "v1"))
    True
    >>> t.insert("a", Reference("t2", "v2"))
    False
    >>> t.get("a")
    Reference(type='t1', value='v1')

    See Also
    --------
    PointTable
    """

    def __init__(self) -> None:
        self._values: Dict[ReferenceId, Reference] = {}

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, ref_id: object) -> bool:
        if not isinstance(ref_id, (str, ReferenceId)):
            return False
        return self.contains(ref_id)

    def __iter__(self) -> Iterator[ReferenceId]:
        return iter(sorted(self._values))

    def contains(self, ref_id: IdLike) -> bool:
        """Return ``True`` if ``ref_id`` is a key of the table."""

        return as_reference_id(ref_id) in self._values

    def insert(self, ref_id: IdLike, reference: Reference) -> bool:
        """Insert ``reference`` under ``ref_id`` unless the id is taken.

        Returns
        -------
        bool
            ``False`` without mutating the table if ``ref_id`` exists.
        """

        key = as_reference_id(ref_id)
        if key in self._values:
            return False
        self._values[key] = reference
        return True

    def get(self, ref_id: IdLike) -> Optional[Reference]:
        """Return the reference stored under ``ref_id`` or ``None``."""

        return self._values.get(as_reference_id(ref_id))

    def entries(self) -> List[Tuple[ReferenceId, Reference]]:
        """Return a snapshot of ``(id, reference)`` pairs in id order."""

        return sorted(self._values.items(), key=lambda item: item[0])

    def clear(self) -> None:
        self._values.clear()

    def to_string(self) -> str:
        """Return the encoded reference block framed by blank lines."""

        out = "\n"
        for ref_id, ref in self.entries():
            out += FIELD_SEPARATOR.join((REF_RECORD.keyword, ref_id.to_string(), ref.to_string()))
            out += "\n"
        return out + "\n"


class PointTable:
    """Insertion-ordered collection of ``Point3D`` entries.

    Summary
    -------
    Points are owned by value in a list. Duplicates by id, by position or by
    both are kept. Lookups are linear scans and the first match by insertion
    order wins.

    Complexity
    ----------
    ``insert`` is amortised ``O(1)``; position lookups are ``O(n)``.

    Examples
    --------
    >>> t = PointTable()
    >>> t.insert(Point3D(ReferenceId("a"), Vector3f(0, 0, 0)))
    >>> t.insert(Point3D(ReferenceId("b"), Vector3f(0, 0, 0)))
    >>> t.find_index((0, 0, 0))
    0
    """

    def __init__(self) -> None:
        self._points: List[Point3D] = []

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point3D]:
        return iter(list(self._points))

    def insert(self, point: Point3D) -> None:
        """Append ``point``; always succeeds."""

        self._points.append(point)

    def find_index(self, position: PositionLike) -> Optional[int]:
        """Return the index of the first point at ``position`` or ``None``."""

        target = Vector3f.coerce(position)
        for i, point in enumerate(self._points):
            if point.position == target:
                return i
        return None

    def get_by_index(self, index: int) -> Optional[Point3D]:
        """Return the point at ``index`` or ``None`` when out of range.

        Negative indices are out of range; there is no wrap-around.
        """

        if 0 <= index < len(self._points):
            return self._points[index]
        return None

    def get_by_position(self, position: PositionLike) -> Optional[Point3D]:
        idx = self.find_index(position)
        if idx is None:
            return None
        return self.get_by_index(idx)

    def positions(self) -> np.ndarray:
        """Return all positions as a ``(N, 3)`` ``float32`` array."""

        if not self._points:
            return np.zeros((0, 3), dtype=np.float32)
        return np.stack([p.position.to_array() for p in self._points])

    def clear(self) -> None:
        self._points.clear()

    def to_string(self, float_format: str = "shortest") -> str:
        """Return the encoded point block framed by blank lines."""

        out = "\n"
        for point in self._points:
            out += point.to_string(float_format) + "\n"
        return out + "\n"


__all__ = ["PointTable", "ReferenceTable"]
