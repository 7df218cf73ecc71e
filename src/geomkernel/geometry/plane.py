"""Planes in space and the projection pipeline between a plane and its 2d basis.

A plane carries an orthonormal basis ``(axis_u, axis_v, normal)`` with
``normal = axis_u x axis_v``. The basis is derived by the factories and is not set
independently. It makes the two maps

    project_into:  p      -> ((p - origin) . axis_u, (p - origin) . axis_v)
    evaluate:      (u, v) -> origin + u * axis_u + v * axis_v

mutually inverse for points on the plane. Every planar 3d problem (containment in a
triangle or polygon, chords of a polygon along a line, overlap of coplanar shapes) is
solved by projecting the operands into the plane, solving the 2d problem and lifting
the 2d result back with :meth:`Plane.lift`.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Sequence, Union

import geomkernel as gk

__all__ = ["Plane"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Plane(gk.Geometry3D):
    """Plane through ``origin`` spanned by two orthonormal axes.

    The preferred way of constructing a plane is through one of the factories
    :meth:`from_points`, :meth:`from_point_and_normal`, :meth:`from_point_and_line`
    and :meth:`from_two_lines`, which derive the basis.

    Raises:
        DegenerateGeometryError: If the axes are not orthonormal or the normal is not
            their cross product, both at nine decimals.

    """

    origin: gk.Point3D
    axis_u: gk.UnitVector3D
    axis_v: gk.UnitVector3D
    normal: gk.UnitVector3D

    result_kind: ClassVar[gk.ResultKind] = gk.ResultKind.PLANE

    def __post_init__(self) -> None:
        if not gk.tolerance.is_zero(self.axis_u.dot(self.axis_v), gk.NINE_DECIMALS):
            raise gk.DegenerateGeometryError("Plane axes are not perpendicular")
        if not self.axis_u.cross(self.axis_v).almost_equals(
            self.normal, gk.NINE_DECIMALS
        ):
            raise gk.DegenerateGeometryError(
                "Plane normal is not the cross product of the axes"
            )

    # ----- Factories

    @classmethod
    def from_points(
        cls,
        p0: gk.Point3D,
        p1: gk.Point3D,
        p2: gk.Point3D,
        decimal_precision: int = gk.THREE_DECIMALS,
    ) -> Plane:
        """Plane through three points.

        The origin is ``p0``, ``axis_u`` points towards ``p1`` and the normal is
        ``(p1 - p0) x (p2 - p0)``, normalized.

        Raises:
            DegenerateGeometryError: If the points are collinear or coincide.

        """
        if p0.are_collinear(p1, p2, decimal_precision):
            raise gk.DegenerateGeometryError(
                f"Cannot define a plane from collinear points {p0}, {p1}, {p2}"
            )
        vec_u = p1.subtract(p0)
        vec_v = p2.subtract(p0)
        normal = vec_u.cross(vec_v).normalize()
        axis_u = vec_u.normalize()
        axis_v = normal.cross(axis_u).normalize()
        return cls(p0, axis_u, axis_v, normal)

    @classmethod
    def try_from_points(
        cls,
        p0: gk.Point3D,
        p1: gk.Point3D,
        p2: gk.Point3D,
        decimal_precision: int = gk.THREE_DECIMALS,
    ) -> Optional[Plane]:
        """As :meth:`from_points`, but returns None for collinear points."""
        try:
            return cls.from_points(p0, p1, p2, decimal_precision)
        except gk.DegenerateGeometryError:
            return None

    @classmethod
    def from_point_and_normal(
        cls, point: gk.Point3D, normal: gk.Vector3D
    ) -> Plane:
        """Plane through a point with a given normal.

        ``axis_u`` is the direction towards the foot of ``point + (1, 1, 1)`` on the
        plane. If that foot coincides with the point, i.e. the normal is parallel to
        (1, 1, 1), the x axis is used instead.

        Raises:
            DegenerateGeometryError: If the normal is a zero vector.

        """
        normal = normal.normalize()
        axis_u = None
        for offset in (gk.Vector3D(1, 1, 1), gk.UnitVector3D.AXIS_X):
            # Component of the offset in the plane, i.e. foot minus point.
            in_plane = offset.subtract(normal.scale(offset.dot(normal)))
            if not in_plane.is_zero(gk.NINE_DECIMALS):
                axis_u = in_plane.normalize()
                break
            logger.debug("Normal %s is parallel to %s", normal, offset)
        assert axis_u is not None
        axis_v = normal.cross(axis_u).normalize()
        return cls(point, axis_u, axis_v, normal)

    @classmethod
    def from_point_and_line(
        cls,
        point: gk.Point3D,
        line: gk.Line3D,
        decimal_precision: int = gk.THREE_DECIMALS,
    ) -> Plane:
        """Plane containing a line and a point off the line.

        Raises:
            DegenerateGeometryError: If the point lies on the line.

        """
        if line.contains(point, decimal_precision):
            raise gk.DegenerateGeometryError(f"{point} lies on the defining line")
        return cls.from_points(
            line.origin, line.evaluate(1), point, decimal_precision
        )

    @classmethod
    def from_two_lines(
        cls,
        first: gk.Line3D,
        second: gk.Line3D,
        decimal_precision: int = gk.THREE_DECIMALS,
    ) -> Plane:
        """Plane spanned by two intersecting lines.

        Raises:
            DegenerateGeometryError: If the lines are parallel or skew.

        """
        point = gk.linear.line_intersection_3d(first, second, decimal_precision)
        if point is None:
            raise gk.DegenerateGeometryError("The lines do not intersect")
        return cls.from_points(
            point,
            point.add(first.direction),
            point.add(second.direction),
            decimal_precision,
        )

    # ----- Distances and containment

    def signed_distance(self, point: gk.Point3D) -> float:
        """Distance to the plane, positive on the side the normal points to."""
        return self.normal.dot(point.subtract(self.origin))

    def distance(self, point: gk.Point3D) -> float:
        return abs(self.signed_distance(point))

    def contains(self, other: Any, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        """Check whether a point, or a whole linear or planar geometry, lies in the
        plane."""
        if isinstance(other, gk.Point3D):
            return gk.tolerance.is_zero(self.signed_distance(other), decimal_precision)
        if isinstance(other, (gk.Line3D, gk.Ray3D)):
            return self.contains(
                other.origin, decimal_precision
            ) and other.direction.is_perpendicular(self.normal, decimal_precision)
        if isinstance(other, gk.LineSegment3D):
            return self.contains(other.p0, decimal_precision) and self.contains(
                other.p1, decimal_precision
            )
        if isinstance(other, (gk.Triangle3D, gk.Polygon3D, gk.Polyline3D)):
            return all(self.contains(p, decimal_precision) for p in other.vertices)
        if isinstance(other, Plane):
            return self.almost_equals(other, decimal_precision)
        raise TypeError(f"Cannot test containment of {type(other).__name__}")

    def is_perpendicular(
        self, other: Any, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        """Check whether a vector or linear geometry is perpendicular to the plane."""
        direction = getattr(other, "direction", other)
        return direction.is_parallel(self.normal, decimal_precision)

    def is_parallel(
        self, other: Any, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        """Check whether a vector or linear geometry is parallel to the plane."""
        direction = getattr(other, "direction", other)
        return direction.is_perpendicular(self.normal, decimal_precision)

    def perp(self, vector: gk.Vector3D) -> gk.Vector3D:
        """The cross product ``normal x vector``, an in-plane perpendicular of an
        in-plane vector."""
        return self.normal.cross(vector)

    # ----- Projections

    def project_onto(
        self, point: gk.Point3D, axis: Optional[gk.Vector3D] = None
    ) -> gk.Point3D:
        """Project a point onto the plane.

        Parameters:
            point: Point to project.
            axis: ``default=None``

                Direction of the projection. If not given, the orthogonal projection
                ``p - signed_distance(p) * normal`` is returned. Otherwise the point
                is moved along ``axis`` by ``-n . (p - origin) / (n . axis)``.

        Raises:
            ValueError: If ``axis`` is parallel to the plane.

        """
        if axis is None:
            return point.subtract(self.normal.scale(self.signed_distance(point)))
        denominator = self.normal.dot(axis)
        if gk.tolerance.is_zero(denominator, gk.NINE_DECIMALS):
            raise ValueError("Projection axis is parallel to the plane")
        s = -self.signed_distance(point) / denominator
        return point.add(axis.scale(s))

    def vertical_project_onto(self, point: gk.Point3D) -> gk.Point3D:
        """Project a point onto the plane along the z axis."""
        return self.project_onto(point, gk.UnitVector3D.AXIS_Z)

    def project_into(self, geometry: Any):
        """Express a 3d geometry in the 2d basis of the plane.

        Points off the plane are projected orthogonally. Lines and rays keep their
        origin and the in-plane component of their direction.

        Raises:
            DegenerateGeometryError: If a line or ray is perpendicular to the plane,
                or a shape collapses in the projection.
            TypeError: For unsupported geometries.

        """
        if isinstance(geometry, gk.Point3D):
            w = geometry.subtract(self.origin)
            return gk.Point2D(w.dot(self.axis_u), w.dot(self.axis_v))
        if isinstance(geometry, gk.LineSegment3D):
            return gk.LineSegment2D(
                self.project_into(geometry.p0),
                self.project_into(geometry.p1),
                gk.NINE_DECIMALS,
            )
        if isinstance(geometry, (gk.Line3D, gk.Ray3D)):
            direction = gk.Vector2D(
                geometry.direction.dot(self.axis_u), geometry.direction.dot(self.axis_v)
            )
            cls = gk.Line2D if isinstance(geometry, gk.Line3D) else gk.Ray2D
            return cls(self.project_into(geometry.origin), direction.normalize())
        if isinstance(geometry, gk.Triangle3D):
            return gk.Triangle2D(
                *self.project_points(geometry.vertices), gk.NINE_DECIMALS
            )
        if isinstance(geometry, gk.Polygon3D):
            return gk.Polygon2D(
                self.project_points(geometry.vertices), gk.NINE_DECIMALS
            )
        if isinstance(geometry, gk.Polyline3D):
            return gk.Polyline2D(
                self.project_points(geometry.vertices), gk.NINE_DECIMALS
            )
        raise TypeError(f"Cannot project {type(geometry).__name__} into a plane")

    def project_points(self, points: Sequence[gk.Point3D]) -> list[gk.Point2D]:
        return [self.project_into(p) for p in points]

    def evaluate(self, point: gk.Point2D) -> gk.Point3D:
        """The 3d point ``origin + u * axis_u + v * axis_v``."""
        return self.origin.add(
            self.axis_u.scale(point.u).add(self.axis_v.scale(point.v))
        )

    def evaluate_points(self, points: Sequence[gk.Point2D]) -> list[gk.Point3D]:
        return [self.evaluate(p) for p in points]

    def evaluate_segment(self, segment: gk.LineSegment2D) -> gk.LineSegment3D:
        return gk.LineSegment3D(
            self.evaluate(segment.p0), self.evaluate(segment.p1), gk.NINE_DECIMALS
        )

    def evaluate_triangle(
        self, triangle: gk.Triangle2D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> gk.Triangle3D:
        vertices = self.evaluate_points(triangle.vertices)
        return gk.Triangle3D(*vertices, decimal_precision)

    def evaluate_polygon(
        self, polygon: gk.Polygon2D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> gk.Polygon3D:
        """Lift a polygon. The lifted vertices are checked for coplanarity at
        ``decimal_precision``, which should not be finer than the rounding of the
        point arithmetic."""
        return gk.Polygon3D(self.evaluate_points(polygon.vertices), decimal_precision)

    def lift(
        self,
        geometry: Union[Any, gk.IntersectionResult],
        decimal_precision: int = gk.THREE_DECIMALS,
    ) -> Union[Any, gk.IntersectionResult]:
        """Lift a 2d geometry, or a result holding one, back into the plane.

        Parameters:
            geometry: 2d geometry expressed in the basis of the plane.
            decimal_precision: ``default=3``

                Tolerance of the validation of lifted triangles and polygons.

        Raises:
            TypeError: For unsupported geometries.

        """
        if isinstance(geometry, gk.IntersectionResult):
            if geometry.is_none():
                return geometry
            return gk.IntersectionResult.of(
                self.lift(geometry.value, decimal_precision)
            )
        if isinstance(geometry, gk.Point2D):
            return self.evaluate(geometry)
        if isinstance(geometry, gk.LineSegment2D):
            return self.evaluate_segment(geometry)
        if isinstance(geometry, gk.Triangle2D):
            return self.evaluate_triangle(geometry, decimal_precision)
        if isinstance(geometry, gk.Polygon2D):
            return self.evaluate_polygon(geometry, decimal_precision)
        if isinstance(geometry, gk.Polyline2D):
            return gk.Polyline3D(
                self.evaluate_points(geometry.vertices), gk.NINE_DECIMALS
            )
        if isinstance(geometry, (gk.Line2D, gk.Ray2D)):
            origin = self.evaluate(geometry.origin)
            direction = self.axis_u.scale(geometry.direction.u).add(
                self.axis_v.scale(geometry.direction.v)
            )
            cls = gk.Line3D if isinstance(geometry, gk.Line2D) else gk.Ray3D
            return cls(origin, direction.normalize())
        if isinstance(geometry, gk.PointSet2D):
            return gk.PointSet3D(
                self.evaluate_points(geometry.points), gk.NINE_DECIMALS
            )
        if isinstance(geometry, gk.LineSegmentSet2D):
            return gk.LineSegmentSet3D(
                [self.evaluate_segment(s) for s in geometry.segments],
                gk.NINE_DECIMALS,
            )
        raise TypeError(f"Cannot lift {type(geometry).__name__} into a plane")

    # ----- Comparison and text

    def almost_equals(
        self, other: Any, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        """Two planes are equal if their normals are parallel (either sign) and they
        share a point."""
        if not isinstance(other, Plane):
            return False
        if not self.normal.is_parallel(other.normal, decimal_precision):
            return False
        if self.origin.almost_equals(other.origin, decimal_precision):
            return True
        return gk.tolerance.is_zero(
            self.signed_distance(other.origin), decimal_precision
        )

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        lines = [
            gk.wkt.format_point_list(
                [self.origin, self.origin.add(axis)], decimal_precision
            )
            for axis in (self.normal, self.axis_u, self.axis_v)
        ]
        return (
            f"GEOMETRYCOLLECTION ({self.origin.to_wkt(decimal_precision)}, "
            + ", ".join(f"LINESTRING ({line})" for line in lines)
            + ")"
        )


Plane.XY = Plane(
    gk.Point3D.ORIGIN,
    gk.UnitVector3D.AXIS_X,
    gk.UnitVector3D.AXIS_Y,
    gk.UnitVector3D.AXIS_Z,
)
Plane.YZ = Plane(
    gk.Point3D.ORIGIN,
    gk.UnitVector3D.AXIS_Y,
    gk.UnitVector3D.AXIS_Z,
    gk.UnitVector3D.AXIS_X,
)
Plane.ZX = Plane(
    gk.Point3D.ORIGIN,
    gk.UnitVector3D.AXIS_Z,
    gk.UnitVector3D.AXIS_X,
    gk.UnitVector3D.AXIS_Y,
)
