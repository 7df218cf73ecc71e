"""Lines, rays and segments in the plane.

Besides the behaviour shared with 3d (see :mod:`~geomkernel.geometry.linear`), planar
linear geometries classify points as LEFT or RIGHT of their direction. The side is the
sign of the perp product ``d x (p - origin)`` with a unit direction ``d``, so the perp
product is the signed distance of the point to the line.

"""

from __future__ import annotations

from dataclasses import InitVar, dataclass
from typing import ClassVar

import geomkernel as gk

__all__ = ["Line2D", "Ray2D", "LineSegment2D"]


def _side(origin: gk.Point2D, direction: gk.UnitVector2D, point: gk.Point2D) -> float:
    return direction.perp_product(point.subtract(origin))


@dataclass(frozen=True, eq=False)
class Line2D(gk.linear.LineMixin, gk.Geometry2D):
    """Infinite line in the plane.

    A line defined by two points is stored as the first point and the normalized
    direction towards the second.

    Raises:
        DegenerateGeometryError: If the direction is a zero vector.

    """

    origin: gk.Point2D
    direction: gk.UnitVector2D

    result_kind: ClassVar[gk.ResultKind] = gk.ResultKind.LINE

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", self.direction.normalize())

    @classmethod
    def from_points(
        cls,
        p0: gk.Point2D,
        p1: gk.Point2D,
        decimal_precision: int = gk.THREE_DECIMALS,
    ) -> Line2D:
        """Line through two points.

        Raises:
            DegenerateGeometryError: If the points coincide.

        """
        if p0.almost_equals(p1, decimal_precision):
            raise gk.DegenerateGeometryError(f"Line through coincident points {p0}")
        return cls(p0, p1.subtract(p0).normalize())

    @classmethod
    def from_direction(cls, origin: gk.Point2D, direction: gk.Vector2D) -> Line2D:
        return cls(origin, direction.normalize())

    def signed_distance_to(self, point: gk.Point2D) -> float:
        """Distance of a point to the line, positive on the left side."""
        return _side(self.origin, self.direction, point)

    def location(
        self, point: gk.Point2D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> gk.Location:
        """LEFT, RIGHT or ON_LINE."""
        return gk.Location.from_side(self.signed_distance_to(point), decimal_precision)

    def contains(
        self, point: gk.Point2D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        return self.location(point, decimal_precision) == gk.Location.ON_LINE

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        start = self.evaluate(-2)
        end = self.evaluate(2)
        return (
            f"GEOMETRYCOLLECTION ({self.origin.to_wkt(decimal_precision)}, "
            f"LINESTRING ({gk.wkt.format_point_list([start, end], decimal_precision)}))"
        )


@dataclass(frozen=True, eq=False)
class Ray2D(gk.linear.RayMixin, gk.Geometry2D):
    """Half line in the plane, starting at ``origin``."""

    origin: gk.Point2D
    direction: gk.UnitVector2D

    result_kind: ClassVar[gk.ResultKind] = gk.ResultKind.RAY

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", self.direction.normalize())

    @classmethod
    def from_points(
        cls,
        origin: gk.Point2D,
        through: gk.Point2D,
        decimal_precision: int = gk.THREE_DECIMALS,
    ) -> Ray2D:
        """Ray starting at ``origin`` and passing through a second point.

        Raises:
            DegenerateGeometryError: If the points coincide.

        """
        if origin.almost_equals(through, decimal_precision):
            raise gk.DegenerateGeometryError(f"Ray through coincident points {origin}")
        return cls(origin, through.subtract(origin).normalize())

    def location(
        self, point: gk.Point2D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> gk.Location:
        """LEFT or RIGHT of the ray, or AHEAD / BEHIND the origin if on its line."""
        side = gk.Location.from_side(
            _side(self.origin, self.direction, point), decimal_precision
        )
        if side != gk.Location.ON_LINE:
            return side
        if self.is_ahead(point, decimal_precision):
            return gk.Location.AHEAD
        return gk.Location.BEHIND

    def contains(
        self, point: gk.Point2D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        return self.location(point, decimal_precision) == gk.Location.AHEAD

    def to_line(self) -> Line2D:
        return Line2D(self.origin, self.direction)

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        end = self.evaluate(1)
        points = gk.wkt.format_point_list([self.origin, end], decimal_precision)
        return (
            f"GEOMETRYCOLLECTION (LINESTRING ({points}), "
            f"{self.origin.to_wkt(decimal_precision)})"
        )


@dataclass(frozen=True, eq=False)
class LineSegment2D(gk.linear.SegmentMixin, gk.Geometry2D):
    """Segment between two distinct points in the plane.

    Parameters:
        p0: Start point.
        p1: End point.
        decimal_precision: ``default=3``

            Tolerance of the check that the endpoints are distinct.

    Raises:
        DegenerateGeometryError: If the endpoints coincide.

    """

    p0: gk.Point2D
    p1: gk.Point2D
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
        p0: gk.Point2D,
        p1: gk.Point2D,
        decimal_precision: int = gk.THREE_DECIMALS,
    ) -> LineSegment2D:
        return cls(p0, p1, decimal_precision)

    def to_line(self) -> Line2D:
        return Line2D(self.p0, self.direction)

    def signed_distance_to(self, point: gk.Point2D) -> float:
        """Distance to the nearest point of the segment, with the sign of the side."""
        distance = point.distance_to(self.project_onto(point))
        return distance if _side(self.p0, self.direction, point) >= 0 else -distance

    def distance_to(self, point: gk.Point2D) -> float:
        """Signed distance, see :meth:`signed_distance_to`."""
        return self.signed_distance_to(point)

    def location(
        self, point: gk.Point2D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> gk.Location:
        """LEFT, RIGHT, ON_SEGMENT, or ON_LINE for collinear points off the segment."""
        side = gk.Location.from_side(
            _side(self.p0, self.direction, point), decimal_precision
        )
        if side != gk.Location.ON_LINE:
            return side
        t = self.parameter_at(point)
        if (
            gk.tolerance.compare(t, 0, decimal_precision) >= 0
            and gk.tolerance.compare(t, self.length(), decimal_precision) <= 0
        ):
            return gk.Location.ON_SEGMENT
        return gk.Location.ON_LINE

    def contains(
        self, point: gk.Point2D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        return self.location(point, decimal_precision) == gk.Location.ON_SEGMENT

    def bounding_box(self) -> tuple[gk.Point2D, gk.Point2D]:
        return (
            gk.Point2D(min(self.p0.u, self.p1.u), min(self.p0.v, self.p1.v)),
            gk.Point2D(max(self.p0.u, self.p1.u), max(self.p0.v, self.p1.v)),
        )

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        return (
            "LINESTRING ("
            f"{gk.wkt.format_point_list([self.p0, self.p1], decimal_precision)})"
        )
