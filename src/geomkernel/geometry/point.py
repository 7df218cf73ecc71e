"""Points in 2d and 3d.

A point may be moved by a vector, and two points may be subtracted to give the vector
between them. There is no point + point operation. Coordinates produced by arithmetic
are rounded to nine decimals, which keeps intersection points computed along different
paths bitwise identical in the vast majority of cases.

"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Union, overload

import numpy as np

import geomkernel as gk

__all__ = ["Point2D", "Point3D"]


def _fine(value: float) -> float:
    return gk.tolerance.round_to(value, gk.NINE_DECIMALS)


@dataclass(frozen=True)
class Point2D:
    """Point in the plane, with coordinates ``u`` and ``v``.

    Examples:

        >>> p = Point2D(1, 1).add(gk.Vector2D(0.5, -1))
        >>> p.to_wkt()
        'POINT (1.500 0.000)'

    """

    u: float
    v: float

    result_kind: ClassVar[gk.ResultKind] = gk.ResultKind.POINT

    def __post_init__(self) -> None:
        object.__setattr__(self, "u", float(self.u))
        object.__setattr__(self, "v", float(self.v))

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Point2D:
        """Construct a point from an array of ``shape=(2,)``."""
        arr = np.asarray(arr, dtype=float).ravel()
        if arr.size != 2:
            raise ValueError(f"Expected 2 coordinates, got array of size {arr.size}")
        return cls(arr[0], arr[1])

    def to_array(self) -> np.ndarray:
        return np.array([self.u, self.v])

    def to_vector(self) -> gk.Vector2D:
        """Position vector of the point."""
        return gk.Vector2D(self.u, self.v)

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.u, self.v)

    def add(self, vector: gk.Vector2D) -> Point2D:
        return Point2D(_fine(self.u + vector.u), _fine(self.v + vector.v))

    @overload
    def subtract(self, other: Point2D) -> gk.Vector2D:
        ...

    @overload
    def subtract(self, other: gk.Vector2D) -> Point2D:
        ...

    def subtract(
        self, other: Union[Point2D, gk.Vector2D]
    ) -> Union[Point2D, gk.Vector2D]:
        """Subtract a point (giving a vector) or a vector (giving a point)."""
        if isinstance(other, Point2D):
            return gk.Vector2D(self.u - other.u, self.v - other.v)
        return Point2D(_fine(self.u - other.u), _fine(self.v - other.v))

    def distance_to(self, other: Point2D) -> float:
        return math.hypot(self.u - other.u, self.v - other.v)

    def almost_equals(
        self, other: Point2D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        return gk.tolerance.almost_equals(
            self.u, other.u, decimal_precision
        ) and gk.tolerance.almost_equals(self.v, other.v, decimal_precision)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Point2D):
            return NotImplemented
        return self.almost_equals(other)

    def __hash__(self) -> int:
        # Equality is tolerance based, so rounded coordinates cannot be hashed.
        return hash(Point2D.__name__)

    def __str__(self) -> str:
        return self.to_wkt()

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        coordinates = gk.wkt.format_coordinates(self.coordinates, decimal_precision)
        return f"POINT ({coordinates})"


@dataclass(frozen=True)
class Point3D:
    """Point in space, with coordinates ``x``, ``y`` and ``z``."""

    x: float
    y: float
    z: float

    result_kind: ClassVar[gk.ResultKind] = gk.ResultKind.POINT

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Point3D:
        """Construct a point from an array of ``shape=(3,)``."""
        arr = np.asarray(arr, dtype=float).ravel()
        if arr.size != 3:
            raise ValueError(f"Expected 3 coordinates, got array of size {arr.size}")
        return cls(arr[0], arr[1], arr[2])

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    def to_vector(self) -> gk.Vector3D:
        return gk.Vector3D(self.x, self.y, self.z)

    @property
    def coordinates(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def add(self, vector: gk.Vector3D) -> Point3D:
        return Point3D(
            _fine(self.x + vector.x), _fine(self.y + vector.y), _fine(self.z + vector.z)
        )

    @overload
    def subtract(self, other: Point3D) -> gk.Vector3D:
        ...

    @overload
    def subtract(self, other: gk.Vector3D) -> Point3D:
        ...

    def subtract(
        self, other: Union[Point3D, gk.Vector3D]
    ) -> Union[Point3D, gk.Vector3D]:
        """Subtract a point (giving a vector) or a vector (giving a point)."""
        if isinstance(other, Point3D):
            return gk.Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)
        return Point3D(
            _fine(self.x - other.x), _fine(self.y - other.y), _fine(self.z - other.z)
        )

    def distance_to(self, other: Point3D) -> float:
        return self.subtract(other).length()

    def are_collinear(
        self, p1: Point3D, p2: Point3D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        """Check whether this point and two others lie on a common line.

        Coincident points are collinear with anything.

        """
        if (
            self.almost_equals(p1, decimal_precision)
            or self.almost_equals(p2, decimal_precision)
            or p1.almost_equals(p2, decimal_precision)
        ):
            return True
        return p1.subtract(self).is_parallel(p2.subtract(self), decimal_precision)

    def almost_equals(
        self, other: Point3D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        return all(
            gk.tolerance.almost_equals(a, b, decimal_precision)
            for a, b in zip(self.coordinates, other.coordinates)
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Point3D):
            return NotImplemented
        return self.almost_equals(other)

    def __hash__(self) -> int:
        # Equality is tolerance based, so rounded coordinates cannot be hashed.
        return hash(Point3D.__name__)

    def __str__(self) -> str:
        return self.to_wkt()

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        coordinates = gk.wkt.format_coordinates(self.coordinates, decimal_precision)
        return f"POINT ({coordinates})"


Point2D.ORIGIN = Point2D(0.0, 0.0)
Point3D.ORIGIN = Point3D(0.0, 0.0, 0.0)
