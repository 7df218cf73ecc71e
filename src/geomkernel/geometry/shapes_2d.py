"""Triangles, polygons and polylines in the plane.

Polygons are simple (not self-intersecting) and have no holes. Their vertices are
stored counter-clockwise: a clockwise input is reversed at construction, so that the
interior is always on the LEFT of every edge.

"""

from __future__ import annotations

import logging
from dataclasses import InitVar, dataclass
from functools import cached_property
from typing import ClassVar, Sequence

import numpy as np

import geomkernel as gk

__all__ = ["Triangle2D", "Polygon2D", "Polyline2D"]

logger = logging.getLogger(__name__)


def _ring_segments(vertices: Sequence[gk.Point2D]) -> list[gk.LineSegment2D]:
    n = len(vertices)
    return [
        gk.LineSegment2D(vertices[i], vertices[(i + 1) % n], gk.NINE_DECIMALS)
        for i in range(n)
    ]


def _shoelace(points: Sequence[gk.Point2D]) -> float:
    """Signed area of a closed ring, positive if counter-clockwise."""
    arr = gk.point_lists.to_array(points)
    u, v = arr[0], arr[1]
    return 0.5 * float(np.dot(u, np.roll(v, -1)) - np.dot(np.roll(u, -1), v))


@dataclass(frozen=True, eq=False)
class Triangle2D(gk.Geometry2D):
    """Triangle in the plane. The vertex order is kept and defines the orientation.

    Parameters:
        p0: First vertex.
        p1: Second vertex.
        p2: Third vertex.
        decimal_precision: ``default=3``

            Tolerance of the checks for coincident and collinear vertices.

    Raises:
        DegenerateGeometryError: If two vertices coincide or all three are collinear.

    """

    p0: gk.Point2D
    p1: gk.Point2D
    p2: gk.Point2D
    decimal_precision: InitVar[int] = gk.THREE_DECIMALS

    result_kind: ClassVar[gk.ResultKind] = gk.ResultKind.TRIANGLE

    def __post_init__(self, decimal_precision: int) -> None:
        if (
            self.p0.almost_equals(self.p1, decimal_precision)
            or self.p1.almost_equals(self.p2, decimal_precision)
            or self.p0.almost_equals(self.p2, decimal_precision)
        ):
            raise gk.DegenerateGeometryError(
                f"Triangle with coincident vertices {self.vertices}"
            )
        if gk.tolerance.is_zero(
            gk.point_lists.offset_from_chord(self.p0, self.p1, self.p2),
            decimal_precision,
        ):
            raise gk.DegenerateGeometryError(
                f"Triangle with collinear vertices {self.to_wkt()}"
            )

    @property
    def vertices(self) -> tuple[gk.Point2D, gk.Point2D, gk.Point2D]:
        return (self.p0, self.p1, self.p2)

    @cached_property
    def orientation(self) -> gk.Orientation:
        """Winding of the vertices, from the sign of ``(p1 - p0) x (p2 - p0)``."""
        cross = self.p1.subtract(self.p0).perp_product(self.p2.subtract(self.p0))
        if cross > 0:
            return gk.Orientation.COUNTER_CLOCKWISE
        return gk.Orientation.CLOCKWISE

    def area(self) -> float:
        """Signed area, positive for counter-clockwise triangles."""
        return 0.5 * self.p1.subtract(self.p0).perp_product(self.p2.subtract(self.p0))

    def center_of_mass(self) -> gk.Point2D:
        return gk.point_lists.average(self.vertices)

    def contains(
        self, point: gk.Point2D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        """Check whether a point is inside or on the border of the triangle.

        The point is classified against every edge. It must be on the inner side of
        all three (LEFT for counter-clockwise triangles) or on the edge itself.

        """
        inside = self.orientation.inside_location()
        for edge in self.to_segments():
            location = edge.location(point, decimal_precision)
            if location == gk.Location.ON_SEGMENT:
                continue
            if location != inside:
                return False
        return True

    def to_segments(self) -> list[gk.LineSegment2D]:
        return _ring_segments(self.vertices)

    def to_polygon(self) -> Polygon2D:
        return Polygon2D(self.vertices, gk.NINE_DECIMALS)

    def bounding_box(self) -> tuple[gk.Point2D, gk.Point2D]:
        return gk.point_lists.bounding_box(self.vertices)

    def almost_equals(
        self, other, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        """Same orientation and same vertex set."""
        return (
            isinstance(other, Triangle2D)
            and self.orientation == other.orientation
            and gk.point_lists.same_point_set(
                self.vertices, other.vertices, decimal_precision
            )
        )

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        ring = gk.wkt.format_point_list(self.vertices, decimal_precision, close=True)
        return f"POLYGON (({ring}))"


@dataclass(frozen=True, eq=False)
class Polygon2D(gk.Geometry2D):
    """Simple polygon in the plane.

    At construction, consecutive duplicates and collinear vertices are removed, and a
    clockwise vertex cycle is reversed.

    Parameters:
        vertices: Vertex cycle. The closing vertex may, but need not, be repeated.
        decimal_precision: ``default=3``

            Tolerance of the vertex reduction.

    Raises:
        DegenerateGeometryError: If fewer than three vertices remain after the
            reduction.

    """

    vertices: tuple[gk.Point2D, ...]
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
        if _shoelace(reduced) < 0:
            logger.debug("Reversing clockwise polygon with %i vertices", len(reduced))
            reduced = [reduced[0]] + reduced[:0:-1]
        object.__setattr__(self, "vertices", tuple(reduced))

    @classmethod
    def from_array(
        cls, arr: np.ndarray, decimal_precision: int = gk.THREE_DECIMALS
    ) -> Polygon2D:
        """Construct a polygon from vertex coordinates.

        Parameters:
            arr: ``shape=(2, n)``

                Vertex coordinates, one column per vertex.

        """
        arr = np.asarray(arr, dtype=float)
        if arr.ndim != 2 or arr.shape[0] != 2:
            raise ValueError(f"Expected an array of shape (2, n), got {arr.shape}")
        return cls(gk.point_lists.from_array(arr), decimal_precision)

    def to_array(self) -> np.ndarray:
        return gk.point_lists.to_array(self.vertices)

    def to_segments(self) -> list[gk.LineSegment2D]:
        return _ring_segments(self.vertices)

    def bounding_box(self) -> tuple[gk.Point2D, gk.Point2D]:
        return gk.point_lists.bounding_box(self.vertices)

    def area(self) -> float:
        """Area of the polygon (positive, the vertices are counter-clockwise)."""
        return _shoelace(self.vertices)

    def center_of_mass(self) -> gk.Point2D:
        """Area centroid of the polygon.

        Raises:
            DegenerateGeometryError: If the area is zero at nine decimals.

        """
        area = self.area()
        if gk.tolerance.is_zero(area, gk.NINE_DECIMALS):
            raise gk.DegenerateGeometryError("Polygon has zero area")
        arr = self.to_array()
        u, v = arr[0], arr[1]
        u_next, v_next = np.roll(u, -1), np.roll(v, -1)
        cross = u * v_next - u_next * v
        cu = float(np.sum((u + u_next) * cross)) / (6 * area)
        cv = float(np.sum((v + v_next) * cross)) / (6 * area)
        return gk.Point2D(cu, cv)

    def is_convex(self, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        """Check whether every vertex is a strict left turn."""
        n = len(self.vertices)
        for i in range(n):
            edge = gk.LineSegment2D(
                self.vertices[i - 1], self.vertices[i], gk.NINE_DECIMALS
            )
            location = edge.location(self.vertices[(i + 1) % n], decimal_precision)
            if location != gk.Location.LEFT:
                return False
        return True

    @gk.time_logger(sections=["geometry"])
    def contains(
        self, point: gk.Point2D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        """Winding number test, with the border counted as inside.

        The point is first rejected if it is outside the bounding box, and accepted if
        it lies on an edge. Then the edges crossing the horizontal line through the
        point are counted: upward crossings with the point on their LEFT add one,
        downward crossings with the point on their RIGHT subtract one. A non-zero sum
        means the point is inside.

        """
        lower, upper = self.bounding_box()
        if (
            gk.tolerance.compare(point.u, lower.u, decimal_precision) < 0
            or gk.tolerance.compare(point.u, upper.u, decimal_precision) > 0
            or gk.tolerance.compare(point.v, lower.v, decimal_precision) < 0
            or gk.tolerance.compare(point.v, upper.v, decimal_precision) > 0
        ):
            return False

        winding_number = 0
        for edge in self.to_segments():
            location = edge.location(point, decimal_precision)
            if location == gk.Location.ON_SEGMENT:
                return True
            if edge.p0.v <= point.v:
                if edge.p1.v > point.v and location == gk.Location.LEFT:
                    winding_number += 1
            elif edge.p1.v <= point.v and location == gk.Location.RIGHT:
                winding_number -= 1
        return winding_number != 0

    def triangulate(self) -> list[Triangle2D]:
        """Split the polygon into triangles. Only triangular polygons are supported.

        Raises:
            NotImplementedError: For polygons with more than three vertices.

        """
        if len(self.vertices) != 3:
            raise NotImplementedError(
                "Triangulation is only available for polygons with three vertices"
            )
        return [Triangle2D(*self.vertices, gk.NINE_DECIMALS)]

    @staticmethod
    def convex_hull(
        points: Sequence[gk.Point2D], decimal_precision: int = gk.THREE_DECIMALS
    ) -> Polygon2D:
        """Convex hull of a point cloud, see :func:`~geomkernel.hulls.convex_hull_2d`.

        Raises:
            DegenerateGeometryError: If the points are collinear.

        """
        return Polygon2D(
            gk.hulls.convex_hull_2d(points, decimal_precision), decimal_precision
        )

    @staticmethod
    def concave_hull(
        points: Sequence[gk.Point2D], decimal_precision: int = gk.THREE_DECIMALS
    ) -> Polygon2D:
        """Polygon through all points, sorted around their centroid, see
        :func:`~geomkernel.hulls.concave_hull_2d`."""
        return Polygon2D(
            gk.hulls.concave_hull_2d(points, decimal_precision), decimal_precision
        )

    @staticmethod
    def polygonize(
        triangles: Sequence[Triangle2D], decimal_precision: int = gk.THREE_DECIMALS
    ) -> list[Polygon2D]:
        """Merge edge-adjacent triangles into polygons.

        The triangles are oriented counter-clockwise. An edge shared by two triangles
        is interior and dropped, and the remaining boundary edges are chained, end to
        start, into closed rings. At a vertex shared by several rings, the chain
        continues along the first outgoing edge met when turning clockwise from the
        incoming edge, which keeps the rings apart.

        Parameters:
            triangles: Triangles of a partition, e.g. a triangulation. They must not
                overlap.
            decimal_precision: ``default=3``

                Tolerance of the vertex matching.

        Returns:
            One polygon per connected group of triangles.

        Raises:
            ValueError: If the boundary edges do not close into rings.

        """
        edges = []
        for triangle in triangles:
            vertices = list(triangle.vertices)
            if triangle.orientation == gk.Orientation.CLOCKWISE:
                vertices.reverse()
            edges.extend(zip(vertices, vertices[1:] + vertices[:1]))

        def same_edge(e, f) -> bool:
            return (
                e[0].almost_equals(f[1], decimal_precision)
                and e[1].almost_equals(f[0], decimal_precision)
            ) or (
                e[0].almost_equals(f[0], decimal_precision)
                and e[1].almost_equals(f[1], decimal_precision)
            )

        boundary = [
            e
            for i, e in enumerate(edges)
            if not any(same_edge(e, f) for j, f in enumerate(edges) if j != i)
        ]

        polygons = []
        while boundary:
            start, end = boundary.pop(0)
            ring = [start]
            incoming = end.subtract(start)
            while not end.almost_equals(start, decimal_precision):
                candidates = [
                    k
                    for k, e in enumerate(boundary)
                    if e[0].almost_equals(end, decimal_precision)
                ]
                if not candidates:
                    raise ValueError(f"Boundary edges do not close at {end.to_wkt()}")
                back = incoming.negate()
                k = max(
                    candidates,
                    key=lambda c: back.signed_angle_to(
                        boundary[c][1].subtract(boundary[c][0])
                    ).radians,
                )
                ring.append(end)
                previous, end = boundary.pop(k)
                incoming = end.subtract(previous)
            polygons.append(Polygon2D(ring, decimal_precision))

        logger.debug(
            "Merged %i triangles into %i polygons", len(triangles), len(polygons)
        )
        return polygons

    def almost_equals(
        self, other, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        """Same vertex set. Both polygons are counter-clockwise."""
        return isinstance(other, Polygon2D) and gk.point_lists.same_point_set(
            self.vertices, other.vertices, decimal_precision
        )

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        ring = gk.wkt.format_point_list(self.vertices, decimal_precision, close=True)
        return f"POLYGON (({ring}))"


@dataclass(frozen=True, eq=False)
class Polyline2D(gk.Geometry2D):
    """Open chain of segments in the plane.

    Consecutive duplicates and collinear interior vertices are removed at
    construction; the endpoints are always kept.

    Raises:
        DegenerateGeometryError: If fewer than two vertices remain.

    """

    vertices: tuple[gk.Point2D, ...]
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

    def to_segments(self) -> list[gk.LineSegment2D]:
        return [
            gk.LineSegment2D(a, b, gk.NINE_DECIMALS)
            for a, b in zip(self.vertices[:-1], self.vertices[1:])
        ]

    def length(self) -> float:
        return sum(s.length() for s in self.to_segments())

    def bounding_box(self) -> tuple[gk.Point2D, gk.Point2D]:
        return gk.point_lists.bounding_box(self.vertices)

    def contains(
        self, point: gk.Point2D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        return any(s.contains(point, decimal_precision) for s in self.to_segments())

    def project_onto(self, point: gk.Point2D) -> gk.Point2D:
        return gk.linear.project_onto_chain(self.to_segments(), point)

    def location_pct(
        self, point: gk.Point2D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> float:
        return gk.linear.location_pct_on_chain(
            self.to_segments(), point, decimal_precision
        )

    def get_point_on_polyline(self, pct: gk.number) -> gk.Point2D:
        return gk.linear.point_on_chain(self.to_segments(), pct)

    def almost_equals(
        self, other, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        """Same vertices in the same order."""
        return (
            isinstance(other, Polyline2D)
            and len(self.vertices) == len(other.vertices)
            and all(
                p.almost_equals(q, decimal_precision)
                for p, q in zip(self.vertices, other.vertices)
            )
        )

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        points = gk.wkt.format_point_list(self.vertices, decimal_precision)
        return f"LINESTRING ({points})"

