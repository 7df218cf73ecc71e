"""Intersections and overlaps between the geometries of the plane.

Registered pairs (one registration serves both argument orders):

    linear x linear      lines, rays and segments in any combination
    area x linear        triangles and polygons against lines, rays and segments
    area x area          triangles and polygons in any combination
    polyline x anything  polylines against all of the above and each other

The linear geometries are treated through their supporting lines: a ray or segment
is first handled as a line, and the result is clipped to the ray or segment by
:func:`~geomkernel.geometry.linear.collinear_overlap`.

"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Optional, Union

import geomkernel as gk

logger = logging.getLogger(__name__)

Linear2D = Union[gk.Line2D, gk.Ray2D, gk.LineSegment2D]
Area2D = Union[gk.Triangle2D, gk.Polygon2D]

_LINEAR = (gk.Line2D, gk.Ray2D, gk.LineSegment2D)
_AREAS = (gk.Triangle2D, gk.Polygon2D)

# Crossing events along a line, see _polygon_chords. Closing events sort first.
_CLOSE = 0
_OPEN = 1


def supporting_line(linear: Linear2D) -> gk.Line2D:
    return gk.Line2D(linear.anchor, linear.direction)


def linear_overlap(
    a: Linear2D, b: Linear2D, decimal_precision: int
) -> Optional[Any]:
    return gk.linear.collinear_overlap(
        a, b, decimal_precision, gk.Line2D, gk.Ray2D, gk.LineSegment2D
    )


def linear_intersection(
    a: Linear2D, b: Linear2D, decimal_precision: int
) -> Optional[gk.Point2D]:
    """Crossing point of two non-parallel linear geometries, if on both."""
    point = gk.linear.line_intersection_2d(a, b, decimal_precision)
    if point is None:
        return None
    if a.contains(point, decimal_precision) and b.contains(point, decimal_precision):
        return point
    return None


def _triangle_chord(
    triangle: gk.Triangle2D, line: gk.Line2D, decimal_precision: int
) -> list:
    """Piece of a line inside a triangle.

    A line along an edge only touches the triangle and gives no chord. A line through
    a single vertex gives that vertex.

    """
    points = []
    for edge in triangle.to_segments():
        if gk.linear.are_collinear(line, edge, decimal_precision):
            return []
        point = linear_intersection(line, edge, decimal_precision)
        if point is not None:
            points.append(point)
    points = gk.point_lists.remove_duplicates(points, decimal_precision)
    if len(points) == 0:
        return []
    if len(points) == 1:
        return [points[0]]
    start, end = sorted(points[:2], key=line.parameter_at)
    return [gk.LineSegment2D(start, end, decimal_precision)]


@gk.time_logger(sections=["geometry"])
def _polygon_chords(
    polygon: gk.Polygon2D, line: gk.Line2D, decimal_precision: int
) -> list[gk.LineSegment2D]:
    """Pieces of a line inside a counter-clockwise polygon.

    The vertex cycle is split at the vertices off the line. Between two consecutive
    off-line vertices lies either a single edge or a run of vertices on the line. A
    passage from the LEFT side of the line to its RIGHT side opens a chord, and a
    passage from RIGHT to LEFT closes one. A passage through a run opens at the run's
    first point along the line and closes at its last, so the run is part of the
    chord. Runs with the polygon on the same side at both ends are touches and give
    no event: they only become part of a chord when another passage encloses them.
    The events are sorted along the line and every opening is paired with the next
    closing.

    """
    vertices = polygon.vertices
    sides = [line.location(v, decimal_precision) for v in vertices]
    off_line = [i for i, side in enumerate(sides) if side != gk.Location.ON_LINE]
    n = len(vertices)

    events = []
    for k, i in enumerate(off_line):
        j = off_line[(k + 1) % len(off_line)]
        if sides[i] == sides[j]:
            continue
        kind = _OPEN if sides[i] == gk.Location.LEFT else _CLOSE
        run = [vertices[m % n] for m in range(i + 1, j if j > i else j + n)]
        if run:
            pick = min if kind == _OPEN else max
            point = pick(run, key=line.parameter_at)
        else:
            edge = gk.LineSegment2D(vertices[i], vertices[j], gk.NINE_DECIMALS)
            point = gk.linear.line_intersection_2d(line, edge, gk.NINE_DECIMALS)
        t = gk.tolerance.round_to(line.parameter_at(point), decimal_precision)
        events.append((t, kind, point))

    chords = []
    opening = None
    for _, kind, point in sorted(events, key=lambda e: e[:2]):
        if kind == _OPEN:
            if opening is None:
                opening = point
        elif opening is not None:
            if not opening.almost_equals(point, decimal_precision):
                chords.append(gk.LineSegment2D(opening, point, decimal_precision))
            opening = None
    if opening is not None:
        logger.debug("Unmatched chord opening at %s", opening)
    return chords


def chords(area: Area2D, line: gk.Line2D, decimal_precision: int) -> list:
    """Pieces (segments, or a single point for triangles) of a line inside a shape."""
    if isinstance(area, gk.Triangle2D):
        return _triangle_chord(area, line, decimal_precision)
    return _polygon_chords(area, line, decimal_precision)


def _clip(pieces: list, linear: Linear2D, decimal_precision: int) -> list:
    clipped = []
    for piece in pieces:
        if isinstance(piece, gk.Point2D):
            if linear.contains(piece, decimal_precision):
                clipped.append(piece)
        else:
            clipped.append(linear_overlap(piece, linear, decimal_precision))
    return clipped


def _boundary_overlap(
    segments: list[gk.LineSegment2D], other: list, decimal_precision: int
) -> list:
    return [
        linear_overlap(s, t, decimal_precision)
        for s, t in itertools.product(segments, other)
    ]


# ----- Linear x linear


def _linear_linear_intersection(
    a: Linear2D, b: Linear2D, decimal_precision: int
) -> Optional[gk.Point2D]:
    return linear_intersection(a, b, decimal_precision)


def _linear_linear_overlap(
    a: Linear2D, b: Linear2D, decimal_precision: int
) -> Optional[Any]:
    return linear_overlap(a, b, decimal_precision)


for _first, _second in itertools.product(_LINEAR, repeat=2):
    gk.relations.register_intersection(_first, _second)(_linear_linear_intersection)
    gk.relations.register_overlap(_first, _second)(_linear_linear_overlap)


# ----- Area x linear


def _area_linear_intersection(
    area: Area2D, linear: Linear2D, decimal_precision: int
) -> Optional[Any]:
    pieces = chords(area, supporting_line(linear), decimal_precision)
    if not isinstance(linear, gk.Line2D):
        pieces = _clip(pieces, linear, decimal_precision)
    return gk.relations.collect_pieces(pieces, decimal_precision)


def _area_linear_overlap(
    area: Area2D, linear: Linear2D, decimal_precision: int
) -> Optional[Any]:
    pieces = _boundary_overlap(area.to_segments(), [linear], decimal_precision)
    return gk.relations.collect_pieces(pieces, decimal_precision)


for _first, _second in itertools.product(_AREAS, _LINEAR):
    gk.relations.register_intersection(_first, _second)(_area_linear_intersection)
    gk.relations.register_overlap(_first, _second)(_area_linear_overlap)


# ----- Area x area


def _area_area_intersection(
    a: Area2D, b: Area2D, decimal_precision: int
) -> Optional[Any]:
    """Common region of two convex shapes.

    The region is the convex hull of the edge crossings, the endpoints of shared edge
    pieces and the vertices of each shape contained in the other.

    """
    points = []
    for edge_a, edge_b in itertools.product(a.to_segments(), b.to_segments()):
        shared = linear_overlap(edge_a, edge_b, decimal_precision)
        if isinstance(shared, gk.LineSegment2D):
            points.extend([shared.p0, shared.p1])
        elif shared is not None:
            points.append(shared)
        else:
            crossing = linear_intersection(edge_a, edge_b, decimal_precision)
            if crossing is not None:
                points.append(crossing)
    points.extend(v for v in a.vertices if b.contains(v, decimal_precision))
    points.extend(v for v in b.vertices if a.contains(v, decimal_precision))

    hull = gk.hulls.convex_hull_2d(points, decimal_precision)
    if len(hull) == 0:
        return None
    try:
        if len(hull) == 3:
            return gk.Triangle2D(*hull, decimal_precision)
        if len(hull) > 3:
            return gk.Polygon2D(hull, decimal_precision)
    except gk.DegenerateGeometryError:
        # Sliver: the turn test of the hull and the degeneracy checks of the
        # constructors disagree.
        logger.debug("Collapsing sliver intersection with %i vertices", len(hull))
    return _longest_span(hull, decimal_precision)


def _longest_span(points: list[gk.Point2D], decimal_precision: int) -> Any:
    """The point, or the longest segment, spanned by a degenerate point cloud."""
    unique = gk.point_lists.remove_duplicates(points, decimal_precision)
    if len(unique) == 1:
        return unique[0]
    start, end = max(
        itertools.combinations(unique, 2),
        key=lambda pair: pair[0].distance_to(pair[1]),
    )
    return gk.LineSegment2D(start, end, decimal_precision)


def _area_area_overlap(a: Area2D, b: Area2D, decimal_precision: int) -> Optional[Any]:
    """Shared boundary of two shapes."""
    pieces = _boundary_overlap(a.to_segments(), b.to_segments(), decimal_precision)
    return gk.relations.collect_pieces(pieces, decimal_precision)


for _first, _second in itertools.combinations_with_replacement(_AREAS, 2):
    gk.relations.register_intersection(_first, _second)(_area_area_intersection)
    gk.relations.register_overlap(_first, _second)(_area_area_overlap)


# ----- Polyline x anything


def _segments_of(geometry: Any) -> list:
    if isinstance(geometry, _LINEAR):
        return [geometry]
    return geometry.to_segments()


@gk.relations.register_intersection(gk.Polyline2D, gk.Line2D)
@gk.relations.register_intersection(gk.Polyline2D, gk.Ray2D)
@gk.relations.register_intersection(gk.Polyline2D, gk.LineSegment2D)
@gk.relations.register_intersection(gk.Polyline2D, gk.Triangle2D)
@gk.relations.register_intersection(gk.Polyline2D, gk.Polygon2D)
@gk.relations.register_intersection(gk.Polyline2D, gk.Polyline2D)
def _polyline_intersection(
    polyline: gk.Polyline2D, other: Any, decimal_precision: int
) -> Optional[gk.PointSet2D]:
    """Transversal crossings of the polyline segments with the other geometry.

    Shapes are crossed along their boundary.

    """
    points = [
        linear_intersection(s, t, decimal_precision)
        for s, t in itertools.product(polyline.to_segments(), _segments_of(other))
    ]
    return gk.relations.collect_pieces(points, decimal_precision, as_set=True)


@gk.relations.register_overlap(gk.Polyline2D, gk.Line2D)
@gk.relations.register_overlap(gk.Polyline2D, gk.Ray2D)
@gk.relations.register_overlap(gk.Polyline2D, gk.LineSegment2D)
@gk.relations.register_overlap(gk.Polyline2D, gk.Triangle2D)
@gk.relations.register_overlap(gk.Polyline2D, gk.Polygon2D)
@gk.relations.register_overlap(gk.Polyline2D, gk.Polyline2D)
def _polyline_overlap(
    polyline: gk.Polyline2D, other: Any, decimal_precision: int
) -> Optional[Any]:
    """Collinear pieces shared by the polyline segments and the other geometry."""
    pieces = _boundary_overlap(
        polyline.to_segments(), _segments_of(other), decimal_precision
    )
    return gk.relations.collect_pieces(pieces, decimal_precision, as_set=True)
