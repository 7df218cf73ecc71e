"""Triangles, planar polygons and polylines in space.

Triangles and polygons carry a reference plane, the plane through their vertices. The
plane's basis is oriented so that the normal follows the right-hand rule of the
vertex order. Area, centroid and point containment are computed on the projection of
the shape into that plane, see :mod:`~geomkernel.geometry.plane`.

"""

from __future__ import annotations

from dataclasses import InitVar, dataclass
from functools import cached_property
from typing import ClassVar, Sequence

import numpy as np

import geomkernel as gk

__all__ = ["Triangle3D", "Polygon3D", "Polyline3D"]


def _ring_segments(vertices: Sequence[gk.Point3D]) -> list[gk.LineSegment3D]:
    n = len(vertices)
    return [
        gk.LineSegment3D(vertices[i], vertices[(i + 1) % n], gk.NINE_DECIMALS)
        for i in range(n)
    ]


def _ring_wkt(vertices: Sequence[gk.Point3D], decimal_precision: int) -> str:
    ring = gk.wkt.format_point_list(vertices, decimal_precision, close=True)
    return f"POLYGON (({ring}))"


@dataclass(frozen=True, eq=False)
class Triangle3D(gk.Geometry3D):
    """Triangle in space.

    Parameters:
        p0: First vertex.
        p1: Second vertex.
        p2: Third vertex.
        decimal_precision: ``default=3``

            Tolerance of the degeneracy checks.

    Raises:
        DegenerateGeometryError: If two vertices coincide, the vertices are collinear,
            or the area is zero.

    """

    p0: gk.Point3D
    p1: gk.Point3D
    p2: gk.Point3D
    decimal_precision: InitVar[int] = gk.THREE_DECIMALS

    result_kind: ClassVar[gk.ResultKind] = gk.ResultKind.TRIANGLE

    def __post_init__(self, decimal_precision: int) -> None:
        if (
            self.p0.almost_equals(self.p1, decimal_precision)
            or self.p1.almost_equals(self.p2, decimal_precision)
            or self.p0.almost_equals(self.p2, decimal_precision)
        ):
            raise gk.DegenerateGeometryError(
                f"Triangle with coincident vertices {self.to_wkt()}"
            )
        if self.p0.are_collinear(self.p1, self.p2, decimal_precision):
            raise gk.DegenerateGeometryError(
                f"Triangle with collinear vertices {self.to_wkt()}"
            )
        if gk.tolerance.is_zero(self._cross().length(), decimal_precision):
            raise gk.DegenerateGeometryError(f"Triangle {self.to_wkt()} has zero area")

    def _cross(self) -> gk.Vector3D:
        return self.p1.subtract(self.p0).cross(self.p2.subtract(self.p0))

    @property
    def vertices(self) -> tuple[gk.Point3D, gk.Point3D, gk.Point3D]:
        return (self.p0, self.p1, self.p2)

    @cached_property
    def normal(self) -> gk.UnitVector3D:
        """Unit normal ``(p1 - p0) x (p2 - p0)``, normalized."""
        return self._cross().normalize()

    @cached_property
    def ref_plane(self) -> gk.Plane:
        """Plane through the vertices, with origin ``p0`` and the triangle's normal."""
        return gk.Plane.from_points(self.p0, self.p1, self.p2, gk.NINE_DECIMALS)

    @cached_property
    def _projected(self) -> gk.Triangle2D:
        return self.ref_plane.project_into(self)

    def area(self) -> float:
        return 0.5 * self._cross().length()

    def center_of_mass(self) -> gk.Point3D:
        return gk.point_lists.average(self.vertices)

    def contains(
        self, point: gk.Point3D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        """Check whether a point lies in the reference plane and inside the triangle."""
        if not self.ref_plane.contains(point, decimal_precision):
            return False
        return self._projected.contains(
            self.ref_plane.project_into(point), decimal_precision
        )

    def to_segments(self) -> list[gk.LineSegment3D]:
        return _ring_segments(self.vertices)

    def to_polygon(self) -> Polygon3D:
        return Polygon3D(self.vertices, gk.NINE_DECIMALS)

    def bounding_box(self) -> tuple[gk.Point3D, gk.Point3D]:
        """Lower and upper corner of the axis aligned bounding box."""
        return gk.point_lists.bounding_box(self.vertices)

    def almost_equals(self, other, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        """Same normal and same vertex set."""
        return (
            isinstance(other, Triangle3D)
            and self.normal.almost_equals(other.normal, decimal_precision)
            and gk.point_lists.same_point_set(
                self.vertices, other.vertices, decimal_precision
            )
        )

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        return _ring_wkt(self.vertices, decimal_precision)


def _newell_normal(points: Sequence[gk.Point3D]) -> gk.Vector3D:
    """Sum of ``p_i x p_(i+1)`` over the ring, twice the vector area."""
    arr = gk.point_lists.to_array(points)
    following = np.roll(arr, -1, axis=1)
    return gk.Vector3D.from_array(np.cross(arr.T, following.T).sum(axis=0))


@dataclass(frozen=True, eq=False)
class Polygon3D(gk.Geometry3D):
    """Planar polygon in space.

    The vertex order is kept. At construction, consecutive duplicates and collinear
    vertices are removed and the vertices are checked to be coplanar.

    Parameters:
        vertices: Vertex cycle.
        decimal_precision: ``default=3``

            Tolerance of the vertex reduction and of the coplanarity check.

    Raises:
        DegenerateGeometryError: If fewer than three vertices remain, or if the
            vertices are not coplanar.

    """

    vertices: tuple[gk.Point3D, ...]
    decimal_precision: InitVar[int] = gk.THREE_DECIMALS

    result_kind: ClassVar[gk.ResultKind] = gk.ResultKind.POLYGON

    def __post_init__(self, decimal_precision: int) -> None:
        reduced = gk.point_lists.remove_collinear_points(
            list(self.vertices), decimal_precision, closed=True
        )
        if len(reduced) < 3:
            raise gk.DegenerateGeometryError(
                f"Polygon needs at least 3 non-collinear vertices, got {len(reduced)}"
            )
        object.__setattr__(self, "vertices", tuple(reduced))
        plane = self.ref_plane
        for p in reduced:
            if not plane.contains(p, decimal_precision):
                raise gk.DegenerateGeometryError(
                    f"Vertex {p} is not in the plane of the polygon"
                )

    @cached_property
    def normal(self) -> gk.UnitVector3D:
        """Unit normal, following the right-hand rule of the vertex order."""
        return _newell_normal(self.vertices).normalize()

    @cached_property
    def ref_plane(self) -> gk.Plane:
        return gk.Plane.from_point_and_normal(self.vertices[0], self.normal)

    @cached_property
    def _projected(self) -> gk.Polygon2D:
        return self.ref_plane.project_into(self)

    def area(self) -> float:
        return self._projected.area()

    def center_of_mass(self) -> gk.Point3D:
        return self.ref_plane.evaluate(self._projected.center_of_mass())

    def contains(
        self, point: gk.Point3D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        """Point in polygon test on the projection into the reference plane."""
        if not self.ref_plane.contains(point, decimal_precision):
            return False
        return self._projected.contains(
            self.ref_plane.project_into(point), decimal_precision
        )

    def to_segments(self) -> list[gk.LineSegment3D]:
        return _ring_segments(self.vertices)

    def bounding_box(self) -> tuple[gk.Point3D, gk.Point3D]:
        return gk.point_lists.bounding_box(self.vertices)

    def triangulate(self) -> list[Triangle3D]:
        """Split the polygon into triangles. Only triangular polygons are supported.

        Raises:
            NotImplementedError: For polygons with more than three vertices.

        """
        if len(self.vertices) != 3:
            raise NotImplementedError(
                "Triangulation is only available for polygons with three vertices"
            )
        return [Triangle3D(*self.vertices, gk.NINE_DECIMALS)]

    @staticmethod
    def approx_plane(
        points: Sequence[gk.Point3D], decimal_precision: int = gk.THREE_DECIMALS
    ) -> gk.Plane:
        """Best-fit plane of a point cloud, see
        :func:`~geomkernel.geometry.hulls.approx_plane`."""
        return gk.hulls.approx_plane(points, decimal_precision)

    @staticmethod
    def convex_hull(
        points: Sequence[gk.Point3D], decimal_precision: int = gk.THREE_DECIMALS
    ) -> Polygon3D:
        """Convex hull of an almost planar point cloud."""
        return Polygon3D(
            gk.hulls.convex_hull_3d(points, decimal_precision), decimal_precision
        )

    @staticmethod
    def concave_hull(
        points: Sequence[gk.Point3D], decimal_precision: int = gk.THREE_DECIMALS
    ) -> Polygon3D:
        """Polygon through an almost planar point cloud, sorted around its centroid."""
        return Polygon3D(
            gk.hulls.concave_hull_3d(points, decimal_precision), decimal_precision
        )

    def almost_equals(self, other, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        """Parallel normals and same vertex set."""
        return (
            isinstance(other, Polygon3D)
            and self.normal.is_parallel(other.normal, decimal_precision)
            and gk.point_lists.same_point_set(
                self.vertices, other.vertices, decimal_precision
            )
        )

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        return _ring_wkt(self.vertices, decimal_precision)


@dataclass(frozen=True, eq=False)
class Polyline3D(gk.Geometry3D):
    """Open chain of segments in space.

    Raises:
        DegenerateGeometryError: If fewer than two vertices remain after removal of
            duplicates and collinear interior vertices.

    """

    vertices: tuple[gk.Point3D, ...]
    decimal_precision: InitVar[int] = gk.THREE_DECIMALS

    result_kind: ClassVar[gk.ResultKind] = gk.ResultKind.POLYLINE

    def __post_init__(self, decimal_precision: int) -> None:
        reduced = gk.point_lists.remove_collinear_points(
            list(self.vertices), decimal_precision, closed=False
        )
        if len(reduced) < 2:
            raise gk.DegenerateGeometryError(
                f"Polyline needs at least 2 distinct vertices, got {len(reduced)}"
            )
        object.__setattr__(self, "vertices", tuple(reduced))

    def to_segments(self) -> list[gk.LineSegment3D]:
        return [
            gk.LineSegment3D(a, b, gk.NINE_DECIMALS)
            for a, b in zip(self.vertices[:-1], self.vertices[1:])
        ]

    def length(self) -> float:
        return sum(s.length() for s in self.to_segments())

    def bounding_box(self) -> tuple[gk.Point3D, gk.Point3D]:
        return gk.point_lists.bounding_box(self.vertices)

    def contains(
        self, point: gk.Point3D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        return any(s.contains(point, decimal_precision) for s in self.to_segments())

    def project_onto(self, point: gk.Point3D) -> gk.Point3D:
        """Projection onto the nearest segment."""
        return gk.linear.project_onto_chain(self.to_segments(), point)

    def location_pct(
        self, point: gk.Point3D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> float:
        """Relative arc length position of a point on the polyline.

        Raises:
            ValueError: If the point is not on the polyline.

        """
        return gk.linear.location_pct_on_chain(
            self.to_segments(), point, decimal_precision
        )

    def get_point_on_polyline(self, pct: gk.number) -> gk.Point3D:
        """Point at a relative arc length position.

        Raises:
            ValueError: If ``pct`` is outside [0, 1].

        """
        return gk.linear.point_on_chain(self.to_segments(), pct)

    def almost_equals(self, other, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        return (
            isinstance(other, Polyline3D)
            and len(self.vertices) == len(other.vertices)
            and all(
                p.almost_equals(q, decimal_precision)
                for p, q in zip(self.vertices, other.vertices)
            )
        )

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        points = gk.wkt.format_point_list(self.vertices, decimal_precision)
        return f"LINESTRING ({points})"
