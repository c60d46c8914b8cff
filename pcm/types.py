# Copyright (c) 2025 Arne Deutsch, itemis AG, MIT License
"""Value types stored in a point cloud map.

Summary
-------
``Vector3f`` positions, ``ReferenceId`` identities, ``Reference`` metadata
pairs and the ``Point3D`` binding an identity to a position. All types are
immutable dataclasses so they can be shared freely between tables.

Examples
--------
>>> p = Point3D(ReferenceId("terrain"), Vector3f(1.0, 2.0, 3.0))
>>> p.to_string()
'point terrain 1 2 3'

See Also
--------
pcm.tables
pcm.map
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence, Union

import numpy as np

from pcm.common.specs import FIELD_SEPARATOR, POINT_RECORD

FLOAT_FORMATS = ("shortest", "fixed")


def to_float32(value: float) -> float:
    """Round ``value`` to the nearest binary32 number, overflowing to ``inf``."""

    with np.errstate(over="ignore"):
        return float(np.float32(value))


def format_float(value: float, float_format: str = "shortest") -> str:
    """Render ``value`` as decimal text.

    Parameters
    ----------
    value : float
        Coordinate to render.
    float_format : str, optional
        ``"shortest"`` emits the shortest text that parses back to the same
        binary32 value (``1.0 -> "1"``); ``"fixed"`` emits six fractional
        digits (``"1.000000"``).

    Returns
    -------
    str
        Decimal text without whitespace.

    Raises
    ------
    ValueError
        If ``float_format`` is unknown.
    """

    if float_format == "shortest":
        return np.format_float_positional(np.float32(value), unique=True, trim="-")
    if float_format == "fixed":
        return f"{value:f}"
    raise ValueError(f"Unknown float format: {float_format}")


@dataclass(frozen=True)
class Vector3f:
    """A 3D position with binary32 components.

    Summary
    -------
    Components are rounded to ``float32`` on construction. Equality is exact
    per component; there is no tolerance.

    Parameters
    ----------
    x, y, z : float, optional
        Components, by default ``0.0``.

    Examples
    --------
    >>> Vector3f(1, 2, 3) + Vector3f(1, 1, 1)
    Vector3f(x=2.0, y=3.0, z=4.0)
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", to_float32(self.x))
        object.__setattr__(self, "y", to_float32(self.y))
        object.__setattr__(self, "z", to_float32(self.z))

    @classmethod
    def zero(cls) -> "Vector3f":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def coerce(cls, value: "Vector3f | Sequence[float] | np.ndarray") -> "Vector3f":
        """Return ``value`` as a ``Vector3f``.

        Raises
        ------
        ValueError
            If ``value`` does not hold exactly three components.
        """

        if isinstance(value, cls):
            return value
        comps = [float(v) for v in value]
        if len(comps) != 3:
            raise ValueError(f"position needs 3 components, got {len(comps)}")
        return cls(*comps)

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __add__(self, other: "Vector3f") -> "Vector3f":
        if not isinstance(other, Vector3f):
            return NotImplemented
        return Vector3f(self.x + other.x, self.y + other.y, self.z + other.z)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float32)

    def to_string(self, float_format: str = "shortest") -> str:
        return FIELD_SEPARATOR.join(format_float(c, float_format) for c in self)


@dataclass(frozen=True, order=True)
class ReferenceId:
    """Opaque identifier of a reference.

    Ordering is plain ``str`` comparison, i.e. code-point order, which equals
    the byte order of the UTF-8 encoding. This order fixes the serialisation
    order of the reference table.
    """

    value: str = ""

    def __str__(self) -> str:
        return self.value

    def to_string(self) -> str:
        return self.value


@dataclass(frozen=True)
class Reference:
    """Typed metadata addressed by a ``ReferenceId``.

    ``value`` must not contain whitespace to survive a text round trip.
    """

    type: str = ""
    value: str = ""

    def to_string(self) -> str:
        return f"{self.type}{FIELD_SEPARATOR}{self.value}"


@dataclass(frozen=True)
class Point3D:
    """A position tagged with a ``ReferenceId``.

    The id is not required to resolve in the reference table.
    """

    reference: ReferenceId = field(default_factory=ReferenceId)
    position: Vector3f = field(default_factory=Vector3f)

    def to_string(self, float_format: str = "shortest") -> str:
        return FIELD_SEPARATOR.join(
            (POINT_RECORD.keyword, self.reference.to_string(), self.position.to_string(float_format))
        )


IdLike = Union[str, ReferenceId]
PositionLike = Union[Vector3f, Sequence[float], np.ndarray]


def as_reference_id(value: IdLike) -> ReferenceId:
    """Return ``value`` as a ``ReferenceId``."""
    return value if isinstance(value, ReferenceId) else ReferenceId(str(value))


__all__ = [
    "FLOAT_FORMATS",
    "IdLike",
    "Point3D",
    "PositionLike",
    "Reference",
    "ReferenceId",
    "Vector3f",
    "as_reference_id",
    "format_float",
    "to_float32",
]
