"""Intersections and overlaps between the geometries of space.

Registered pairs (one registration serves both argument orders):

    plane x anything     planes against all kinds, planes included
    linear x linear      lines, rays and segments in any combination
    area x linear        triangles and polygons against lines, rays and segments
    area x area          triangles and polygons in any combination
    polyline x anything  polylines against all of the above and each other

Problems within a single plane are solved in 2d: the operands are projected into the
reference plane of the shape, the relation is computed by
:mod:`~geomkernel.geometry.relations_2d`, and the result is lifted back. Coplanar
configurations are reported as overlaps, while intersections only hold transversal
parts, e.g. the point where a segment pierces a triangle.

"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Optional, Union

import geomkernel as gk

logger = logging.getLogger(__name__)

Linear3D = Union[gk.Line3D, gk.Ray3D, gk.LineSegment3D]
Area3D = Union[gk.Triangle3D, gk.Polygon3D]

_LINEAR = (gk.Line3D, gk.Ray3D, gk.LineSegment3D)
_AREAS = (gk.Triangle3D, gk.Polygon3D)


def linear_overlap(
    a: Linear3D, b: Linear3D, decimal_precision: int
) -> Optional[Any]:
    return gk.linear.collinear_overlap(
        a, b, decimal_precision, gk.Line3D, gk.Ray3D, gk.LineSegment3D
    )


def linear_intersection(
    a: Linear3D, b: Linear3D, decimal_precision: int
) -> Optional[gk.Point3D]:
    """Crossing point of two linear geometries, None if parallel, skew or missed."""
    point = gk.linear.line_intersection_3d(a, b, decimal_precision)
    if point is None:
        return None
    if a.contains(point, decimal_precision) and b.contains(point, decimal_precision):
        return point
    return None


def pierce_point(
    plane: gk.Plane, linear: Linear3D, decimal_precision: int
) -> Optional[gk.Point3D]:
    """Point where a linear geometry crosses a plane.

    The point is ``origin + s * direction`` with ``s = -n . w / (n . direction)`` and
    ``w`` the vector from the plane origin to the origin of the linear geometry.

    Returns:
        The point, or None if the linear geometry is parallel to the plane (this
        includes lying in it), or if the point is not on a ray or segment.

    """
    if plane.is_parallel(linear, decimal_precision):
        return None
    w = linear.anchor.subtract(plane.origin)
    s = -plane.normal.dot(w) / plane.normal.dot(linear.direction)
    point = linear.evaluate(s)
    assert plane.contains(point, decimal_precision)
    if linear.contains(point, decimal_precision):
        return point
    return None


def plane_plane_line(
    a: gk.Plane, b: gk.Plane, decimal_precision: int
) -> Optional[gk.Line3D]:
    """Line shared by two non-parallel planes.

    The direction is ``u = n_a x n_b``. The origin is the point of the line closest to
    the world origin, ``((h_a n_b - h_b n_a) x u) / (u . u)`` with ``h = n . origin``
    the offset of each plane, which solves both plane equations and ``u . x = 0``.

    Returns:
        The line, or None if the planes are parallel.

    """
    if a.normal.is_parallel(b.normal, decimal_precision):
        return None
    u = a.normal.cross(b.normal)
    h_a = a.normal.dot(a.origin.to_vector())
    h_b = b.normal.dot(b.origin.to_vector())
    offset = b.normal.scale(h_a).subtract(a.normal.scale(h_b)).cross(u)
    origin = gk.Point3D.ORIGIN.add(offset.scale(1 / u.dot(u)))
    return gk.Line3D(origin, u.normalize())


def is_coplanar(area: Area3D, other: Any, decimal_precision: int) -> bool:
    return area.ref_plane.contains(other, decimal_precision)


def in_plane(plane: gk.Plane, geometry: Any, relation, decimal_precision: int):
    """Compute a 2d relation in the basis of a plane and lift the result back.

    Parameters:
        plane: Plane containing both operands.
        geometry: The operands.
        relation: One of the functions of :mod:`~geomkernel.geometry.relations`
            returning an :class:`~geomkernel.IntersectionResult`.

    Returns:
        The lifted geometry, or None.

    """
    first, second = (plane.project_into(g) for g in geometry)
    result = relation(first, second, decimal_precision)
    if result.is_none():
        return None
    return plane.lift(result.value, decimal_precision)


def section(area: Area3D, line: gk.Line3D, decimal_precision: int) -> list:
    """Pieces of a line of the reference plane inside a shape, see
    :func:`~geomkernel.geometry.relations_2d.chords`."""
    lifted = in_plane(
        area.ref_plane, (area, line), gk.relations.intersection, decimal_precision
    )
    return _pieces(lifted)


def _pieces(geometry: Any) -> list:
    if geometry is None:
        return []
    if isinstance(geometry, gk.LineSegmentSet3D):
        return list(geometry.segments)
    if isinstance(geometry, gk.PointSet3D):
        return list(geometry.points)
    return [geometry]


def _common_piece(a: Any, b: Any, decimal_precision: int) -> Optional[Any]:
    """Shared part of two points or segments on one line."""
    if isinstance(a, gk.Point3D) and isinstance(b, gk.Point3D):
        return a if a.almost_equals(b, decimal_precision) else None
    if isinstance(a, gk.Point3D):
        return a if b.contains(a, decimal_precision) else None
    if isinstance(b, gk.Point3D):
        return b if a.contains(b, decimal_precision) else None
    return linear_overlap(a, b, decimal_precision)


def _segments_of(geometry: Any) -> list:
    if isinstance(geometry, _LINEAR):
        return [geometry]
    return geometry.to_segments()


# ----- Plane x anything


@gk.relations.register_intersection(gk.Plane, gk.Plane)
def _plane_plane_intersection(
    a: gk.Plane, b: gk.Plane, decimal_precision: int
) -> Optional[gk.Line3D]:
    return plane_plane_line(a, b, decimal_precision)


@gk.relations.register_overlap(gk.Plane, gk.Plane)
def _plane_plane_overlap(
    a: gk.Plane, b: gk.Plane, decimal_precision: int
) -> Optional[gk.Plane]:
    return a if a.almost_equals(b, decimal_precision) else None


def _plane_linear_intersection(
    plane: gk.Plane, linear: Linear3D, decimal_precision: int
) -> Optional[gk.Point3D]:
    return pierce_point(plane, linear, decimal_precision)


def _plane_contained_overlap(
    plane: gk.Plane, geometry: Any, decimal_precision: int
) -> Optional[Any]:
    """The geometry itself, if it lies in the plane."""
    return geometry if plane.contains(geometry, decimal_precision) else None


for _kind in _LINEAR:
    gk.relations.register_intersection(gk.Plane, _kind)(_plane_linear_intersection)
    gk.relations.register_overlap(gk.Plane, _kind)(_plane_contained_overlap)


def _plane_area_intersection(
    plane: gk.Plane, area: Area3D, decimal_precision: int
) -> Optional[Any]:
    """Section of a shape by a plane, found along the line shared with the
    reference plane of the shape."""
    line = plane_plane_line(area.ref_plane, plane, decimal_precision)
    if line is None:
        return None
    return gk.relations.collect_pieces(
        section(area, line, decimal_precision), decimal_precision
    )


for _kind in _AREAS:
    gk.relations.register_intersection(gk.Plane, _kind)(_plane_area_intersection)
    gk.relations.register_overlap(gk.Plane, _kind)(_plane_contained_overlap)


@gk.relations.register_intersection(gk.Plane, gk.Polyline3D)
def _plane_polyline_intersection(
    plane: gk.Plane, polyline: gk.Polyline3D, decimal_precision: int
) -> Optional[gk.PointSet3D]:
    points = [
        pierce_point(plane, s, decimal_precision) for s in polyline.to_segments()
    ]
    return gk.relations.collect_pieces(points, decimal_precision, as_set=True)


@gk.relations.register_overlap(gk.Plane, gk.Polyline3D)
def _plane_polyline_overlap(
    plane: gk.Plane, polyline: gk.Polyline3D, decimal_precision: int
) -> Optional[gk.LineSegmentSet3D]:
    """Segments of the polyline lying in the plane."""
    segments = [
        s for s in polyline.to_segments() if plane.contains(s, decimal_precision)
    ]
    return gk.relations.collect_pieces(segments, decimal_precision, as_set=True)


# ----- Linear x linear


def _linear_linear_intersection(
    a: Linear3D, b: Linear3D, decimal_precision: int
) -> Optional[gk.Point3D]:
    return linear_intersection(a, b, decimal_precision)


def _linear_linear_overlap(
    a: Linear3D, b: Linear3D, decimal_precision: int
) -> Optional[Any]:
    return linear_overlap(a, b, decimal_precision)


for _first, _second in itertools.product(_LINEAR, repeat=2):
    gk.relations.register_intersection(_first, _second)(_linear_linear_intersection)
    gk.relations.register_overlap(_first, _second)(_linear_linear_overlap)


# ----- Area x linear


def _area_linear_intersection(
    area: Area3D, linear: Linear3D, decimal_precision: int
) -> Optional[gk.Point3D]:
    """Point where a linear geometry pierces a shape. Coplanar configurations are
    overlaps."""
    point = pierce_point(area.ref_plane, linear, decimal_precision)
    if point is not None and area.contains(point, decimal_precision):
        return point
    return None


def _area_linear_overlap(
    area: Area3D, linear: Linear3D, decimal_precision: int
) -> Optional[Any]:
    """Part of a coplanar linear geometry on the shape: the chord crossing the
    shape, or else the part shared with its boundary."""
    if not is_coplanar(area, linear, decimal_precision):
        return None
    geometry = (area, linear)
    lifted = in_plane(
        area.ref_plane, geometry, gk.relations.intersection, decimal_precision
    )
    if lifted is None:
        lifted = in_plane(
            area.ref_plane, geometry, gk.relations.overlap, decimal_precision
        )
    return lifted


for _first, _second in itertools.product(_AREAS, _LINEAR):
    gk.relations.register_intersection(_first, _second)(_area_linear_intersection)
    gk.relations.register_overlap(_first, _second)(_area_linear_overlap)


# ----- Area x area


def _area_area_intersection(
    a: Area3D, b: Area3D, decimal_precision: int
) -> Optional[Any]:
    """Common part of two shapes in different planes.

    Both shapes are cut along the line shared by their reference planes, and the
    pieces of the two sections are intersected pairwise.

    """
    line = plane_plane_line(a.ref_plane, b.ref_plane, decimal_precision)
    if line is None:
        return None
    pieces = [
        _common_piece(piece_a, piece_b, decimal_precision)
        for piece_a, piece_b in itertools.product(
            section(a, line, decimal_precision), section(b, line, decimal_precision)
        )
    ]
    return gk.relations.collect_pieces(pieces, decimal_precision)


def _area_area_overlap(a: Area3D, b: Area3D, decimal_precision: int) -> Optional[Any]:
    """Common region of two coplanar shapes, or else their shared boundary."""
    if not is_coplanar(a, b, decimal_precision):
        return None
    plane = a.ref_plane
    lifted = in_plane(plane, (a, b), gk.relations.intersection, decimal_precision)
    if lifted is None:
        lifted = in_plane(plane, (a, b), gk.relations.overlap, decimal_precision)
    return lifted


for _first, _second in itertools.combinations_with_replacement(_AREAS, 2):
    gk.relations.register_intersection(_first, _second)(_area_area_intersection)
    gk.relations.register_overlap(_first, _second)(_area_area_overlap)


# ----- Polyline x anything


def _polyline_segment_crossings(
    segment: gk.LineSegment3D, other: Any, decimal_precision: int
) -> list:
    if isinstance(other, _AREAS):
        if is_coplanar(other, segment, decimal_precision):
            return [
                linear_intersection(segment, edge, decimal_precision)
                for edge in other.to_segments()
            ]
        return [_area_linear_intersection(other, segment, decimal_precision)]
    return [
        linear_intersection(segment, t, decimal_precision)
        for t in _segments_of(other)
    ]


@gk.relations.register_intersection(gk.Polyline3D, gk.Line3D)
@gk.relations.register_intersection(gk.Polyline3D, gk.Ray3D)
@gk.relations.register_intersection(gk.Polyline3D, gk.LineSegment3D)
@gk.relations.register_intersection(gk.Polyline3D, gk.Triangle3D)
@gk.relations.register_intersection(gk.Polyline3D, gk.Polygon3D)
@gk.relations.register_intersection(gk.Polyline3D, gk.Polyline3D)
def _polyline_intersection(
    polyline: gk.Polyline3D, other: Any, decimal_precision: int
) -> Optional[gk.PointSet3D]:
    """Transversal crossings of the polyline segments with the other geometry.

    Segments pierce shapes in other planes, and cross the boundary of shapes in their
    own plane.

    """
    points = []
    for segment in polyline.to_segments():
        points.extend(
            _polyline_segment_crossings(segment, other, decimal_precision)
        )
    return gk.relations.collect_pieces(points, decimal_precision, as_set=True)


@gk.relations.register_overlap(gk.Polyline3D, gk.Line3D)
@gk.relations.register_overlap(gk.Polyline3D, gk.Ray3D)
@gk.relations.register_overlap(gk.Polyline3D, gk.LineSegment3D)
@gk.relations.register_overlap(gk.Polyline3D, gk.Triangle3D)
@gk.relations.register_overlap(gk.Polyline3D, gk.Polygon3D)
@gk.relations.register_overlap(gk.Polyline3D, gk.Polyline3D)
def _polyline_overlap(
    polyline: gk.Polyline3D, other: Any, decimal_precision: int
) -> Optional[Any]:
    """Collinear pieces shared by the polyline segments and the other geometry."""
    pieces = [
        linear_overlap(s, t, decimal_precision)
        for s, t in itertools.product(polyline.to_segments(), _segments_of(other))
    ]
    return gk.relations.collect_pieces(pieces, decimal_precision, as_set=True)
