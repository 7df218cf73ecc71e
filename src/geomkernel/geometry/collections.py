"""Unordered collections of points, of segments and of polygons.

Collections are the results of queries that may find several disjoint pieces, e.g. the
crossings of a polyline with a polygon or the chords of a non-convex polygon along a
line. They are free of duplicates at the precision they were built with, and compare
equal irrespective of the order of their members.

"""

from __future__ import annotations

from dataclasses import InitVar, dataclass
from typing import ClassVar, Iterator, Sequence

import geomkernel as gk

__all__ = [
    "PointSet2D",
    "PointSet3D",
    "LineSegmentSet2D",
    "LineSegmentSet3D",
    "MultiPolygon2D",
]


class _PointSetMixin:
    points: tuple

    def __post_init__(self, decimal_precision: int) -> None:
        unique = gk.point_lists.remove_duplicates(list(self.points), decimal_precision)
        object.__setattr__(self, "points", tuple(unique))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator:
        return iter(self.points)

    def contains(self, point, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        return any(p.almost_equals(point, decimal_precision) for p in self.points)

    def center_of_mass(self):
        return gk.point_lists.average(self.points)

    def bounding_box(self) -> tuple:
        return gk.point_lists.bounding_box(self.points)

    def almost_equals(self, other, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        return isinstance(other, type(self)) and gk.point_lists.same_point_set(
            self.points, other.points, decimal_precision
        )

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        if len(self.points) == 0:
            return f"MULTIPOINT {gk.WKT_EMPTY}"
        members = ", ".join(
            f"({gk.wkt.format_coordinates(p.coordinates, decimal_precision)})"
            for p in self.points
        )
        return f"MULTIPOINT ({members})"


@dataclass(frozen=True, eq=False)
class PointSet2D(_PointSetMixin, gk.Geometry2D):
    """Set of points in the plane."""

    points: tuple[gk.Point2D, ...]
    decimal_precision: InitVar[int] = gk.THREE_DECIMALS

    result_kind: ClassVar[gk.ResultKind] = gk.ResultKind.POINT_SET

    def convex_hull(
        self, decimal_precision: int = gk.THREE_DECIMALS
    ) -> gk.Polygon2D:
        return gk.Polygon2D.convex_hull(self.points, decimal_precision)

    def concave_hull(
        self, decimal_precision: int = gk.THREE_DECIMALS
    ) -> gk.Polygon2D:
        return gk.Polygon2D.concave_hull(self.points, decimal_precision)


@dataclass(frozen=True, eq=False)
class PointSet3D(_PointSetMixin, gk.Geometry3D):
    """Set of points in space."""

    points: tuple[gk.Point3D, ...]
    decimal_precision: InitVar[int] = gk.THREE_DECIMALS

    result_kind: ClassVar[gk.ResultKind] = gk.ResultKind.POINT_SET

    def convex_hull(
        self, decimal_precision: int = gk.THREE_DECIMALS
    ) -> gk.Polygon3D:
        return gk.Polygon3D.convex_hull(self.points, decimal_precision)

    def concave_hull(
        self, decimal_precision: int = gk.THREE_DECIMALS
    ) -> gk.Polygon3D:
        return gk.Polygon3D.concave_hull(self.points, decimal_precision)


def _unique_segments(segments: Sequence, decimal_precision: int) -> list:
    unique: list = []
    for s in segments:
        if not any(s.is_same_segment(t, decimal_precision) for t in unique):
            unique.append(s)
    return unique


class _SegmentSetMixin:
    segments: tuple

    def __post_init__(self, decimal_precision: int) -> None:
        unique = _unique_segments(self.segments, decimal_precision)
        object.__setattr__(self, "segments", tuple(unique))

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator:
        return iter(self.segments)

    def contains(self, point, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        return any(s.contains(point, decimal_precision) for s in self.segments)

    def center_of_mass(self):
        """Average of the segment midpoints."""
        return gk.point_lists.average([s.midpoint() for s in self.segments])

    def bounding_box(self) -> tuple:
        endpoints = [p for s in self.segments for p in (s.p0, s.p1)]
        return gk.point_lists.bounding_box(endpoints)

    def almost_equals(self, other, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        if not isinstance(other, type(self)) or len(self) != len(other):
            return False
        return all(
            any(s.is_same_segment(t, decimal_precision) for t in other.segments)
            for s in self.segments
        )

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        if len(self.segments) == 0:
            return f"MULTILINESTRING {gk.WKT_EMPTY}"
        members = ", ".join(
            f"({gk.wkt.format_point_list([s.p0, s.p1], decimal_precision)})"
            for s in self.segments
        )
        return f"MULTILINESTRING ({members})"


@dataclass(frozen=True, eq=False)
class LineSegmentSet2D(_SegmentSetMixin, gk.Geometry2D):
    """Set of segments in the plane."""

    segments: tuple[gk.LineSegment2D, ...]
    decimal_precision: InitVar[int] = gk.THREE_DECIMALS

    result_kind: ClassVar[gk.ResultKind] = gk.ResultKind.LINE_SEGMENT_SET


@dataclass(frozen=True, eq=False)
class LineSegmentSet3D(_SegmentSetMixin, gk.Geometry3D):
    """Set of segments in space."""

    segments: tuple[gk.LineSegment3D, ...]
    decimal_precision: InitVar[int] = gk.THREE_DECIMALS

    result_kind: ClassVar[gk.ResultKind] = gk.ResultKind.LINE_SEGMENT_SET


@dataclass(frozen=True, eq=False)
class MultiPolygon2D(gk.Geometry2D):
    """Set of polygons in the plane.

    Duplicate polygons are dropped at construction. The polygons are assumed not to
    overlap, which holds for the output of :meth:`from_triangles`.

    """

    polygons: tuple[gk.Polygon2D, ...]
    decimal_precision: InitVar[int] = gk.THREE_DECIMALS

    result_kind: ClassVar[gk.ResultKind] = gk.ResultKind.MULTI_POLYGON

    def __post_init__(self, decimal_precision: int) -> None:
        unique: list = []
        for polygon in self.polygons:
            if not any(polygon.almost_equals(q, decimal_precision) for q in unique):
                unique.append(polygon)
        object.__setattr__(self, "polygons", tuple(unique))

    @classmethod
    def from_triangles(
        cls,
        triangles: Sequence[gk.Triangle2D],
        decimal_precision: int = gk.THREE_DECIMALS,
    ) -> MultiPolygon2D:
        """Merge edge-adjacent triangles, see
        :meth:`~geomkernel.Polygon2D.polygonize`."""
        polygons = gk.Polygon2D.polygonize(triangles, decimal_precision)
        return cls(tuple(polygons), decimal_precision)

    def __len__(self) -> int:
        return len(self.polygons)

    def __iter__(self) -> Iterator[gk.Polygon2D]:
        return iter(self.polygons)

    def contains(self, point, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        return any(p.contains(point, decimal_precision) for p in self.polygons)

    def area(self) -> float:
        return sum(p.area() for p in self.polygons)

    def center_of_mass(self) -> gk.Point2D:
        """Area weighted average of the polygon centroids.

        Raises:
            DegenerateGeometryError: If the set is empty.

        """
        if len(self.polygons) == 0:
            raise gk.DegenerateGeometryError("Empty multi polygon has no centroid")
        total = self.area()
        centroids = [p.center_of_mass() for p in self.polygons]
        weights = [p.area() / total for p in self.polygons]
        u = sum(w * c.u for w, c in zip(weights, centroids))
        v = sum(w * c.v for w, c in zip(weights, centroids))
        return gk.Point2D(u, v)

    def bounding_box(self) -> tuple[gk.Point2D, gk.Point2D]:
        return gk.point_lists.bounding_box(
            [v for p in self.polygons for v in p.vertices]
        )

    def almost_equals(self, other, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        if not isinstance(other, MultiPolygon2D) or len(self) != len(other):
            return False
        return all(
            any(p.almost_equals(q, decimal_precision) for q in other.polygons)
            for p in self.polygons
        )

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        if len(self.polygons) == 0:
            return f"MULTIPOLYGON {gk.WKT_EMPTY}"
        members = ", ".join(
            f"(({gk.wkt.format_point_list(p.vertices, decimal_precision, close=True)}))"
            for p in self.polygons
        )
        return f"MULTIPOLYGON ({members})"
