"""Lines, rays and segments in space."""

from __future__ import annotations

from dataclasses import InitVar, dataclass
from typing import ClassVar

import geomkernel as gk

__all__ = ["Line3D", "Ray3D", "LineSegment3D"]


@dataclass(frozen=True, eq=False)
class Line3D(gk.linear.LineMixin, gk.Geometry3D):
    """Infinite line in space, stored as an origin and a unit direction.

    Raises:
        DegenerateGeometryError: If the direction is a zero vector.

    """

    origin: gk.Point3D
    direction: gk.UnitVector3D

    result_kind: ClassVar[gk.ResultKind] = gk.ResultKind.LINE

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", self.direction.normalize())

    @classmethod
    def from_points(
        cls,
        p0: gk.Point3D,
        p1: gk.Point3D,
        decimal_precision: int = gk.THREE_DECIMALS,
    ) -> Line3D:
        """Line through two points.

        Raises:
            DegenerateGeometryError: If the points coincide.

        """
        if p0.almost_equals(p1, decimal_precision):
            raise gk.DegenerateGeometryError(f"Line through coincident points {p0}")
        return cls(p0, p1.subtract(p0).normalize())

    @classmethod
    def from_direction(cls, origin: gk.Point3D, direction: gk.Vector3D) -> Line3D:
        return cls(origin, direction.normalize())

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        start = self.evaluate(-2)
        end = self.evaluate(2)
        return (
            f"GEOMETRYCOLLECTION ({self.origin.to_wkt(decimal_precision)}, "
            f"LINESTRING ({gk.wkt.format_point_list([start, end], decimal_precision)}))"
        )


@dataclass(frozen=True, eq=False)
class Ray3D(gk.linear.RayMixin, gk.Geometry3D):
    """Half line in space, starting at ``origin``."""

    origin: gk.Point3D
    direction: gk.UnitVector3D

    result_kind: ClassVar[gk.ResultKind] = gk.ResultKind.RAY

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", self.direction.normalize())

    @classmethod
    def from_points(
        cls,
        origin: gk.Point3D,
        through: gk.Point3D,
        decimal_precision: int = gk.THREE_DECIMALS,
    ) -> Ray3D:
        if origin.almost_equals(through, decimal_precision):
            raise gk.DegenerateGeometryError(f"Ray through coincident points {origin}")
        return cls(origin, through.subtract(origin).normalize())

    def contains(
        self, point: gk.Point3D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        return self.to_line().contains(
            point, decimal_precision
        ) and self.is_ahead(point, decimal_precision)

    def to_line(self) -> Line3D:
        return Line3D(self.origin, self.direction)

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        end = self.evaluate(1)
        points = gk.wkt.format_point_list([self.origin, end], decimal_precision)
        return (
            f"GEOMETRYCOLLECTION (LINESTRING ({points}), "
            f"{self.origin.to_wkt(decimal_precision)})"
        )


@dataclass(frozen=True, eq=False)
class LineSegment3D(gk.linear.SegmentMixin, gk.Geometry3D):
    """Segment between two distinct points in space.

    Raises:
        DegenerateGeometryError: If the endpoints coincide at ``decimal_precision``.

    """

    p0: gk.Point3D
    p1: gk.Point3D
    decimal_precision: InitVar[int] = gk.THREE_DECIMALS

    result_kind: ClassVar[gk.ResultKind] = gk.ResultKind.LINE_SEGMENT

    def __post_init__(self, decimal_precision: int) -> None:
        if self.p0.almost_equals(self.p1, decimal_precision):
            raise gk.DegenerateGeometryError(
                f"Segment between coincident points {self.p0} and {self.p1}"
            )

    @classmethod
    def from_points(
        cls,
        p0: gk.Point3D,
        p1: gk.Point3D,
        decimal_precision: int = gk.THREE_DECIMALS,
    ) -> LineSegment3D:
        return cls(p0, p1, decimal_precision)

    def to_line(self) -> Line3D:
        return Line3D(self.p0, self.direction)

    def contains(
        self, point: gk.Point3D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        if not self.to_line().contains(point, decimal_precision):
            return False
        t = self.parameter_at(point)
        return (
            gk.tolerance.compare(t, 0, decimal_precision) >= 0
            and gk.tolerance.compare(t, self.length(), decimal_precision) <= 0
        )

    def bounding_box(self) -> tuple[gk.Point3D, gk.Point3D]:
        lower = [min(a, b) for a, b in zip(self.p0.coordinates, self.p1.coordinates)]
        upper = [max(a, b) for a, b in zip(self.p0.coordinates, self.p1.coordinates)]
        return gk.Point3D(*lower), gk.Point3D(*upper)

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        return (
            "LINESTRING ("
            f"{gk.wkt.format_point_list([self.p0, self.p1], decimal_precision)})"
        )
