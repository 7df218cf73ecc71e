"""Orthogonal projections of 3d geometries onto the coordinate planes.

The projection onto the xy plane drops the z coordinate, onto the yz plane the x
coordinate and onto the zx plane the y coordinate; the 2d coordinates are ``(x, y)``,
``(y, z)`` and ``(z, x)`` respectively, i.e. the ``(u, v)`` coordinates of
:attr:`Plane.XY <geomkernel.Plane.XY>`, ``Plane.YZ`` and ``Plane.ZX``.

A projection may collapse the geometry: a segment parallel to the dropped axis
projects to a point, and a triangle or polygon perpendicular to the coordinate plane
projects to a segment. The result is therefore a
:class:`~geomkernel.ProjectionResult` whose kind tells what the geometry became.

Example:

    >>> segment = gk.LineSegment3D(gk.Point3D(1, 2, 0), gk.Point3D(1, 2, 5))
    >>> gk.projections.to_xy(segment).kind
    <ResultKind.POINT: 1>

"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Sequence

import geomkernel as gk

__all__ = ["to_xy", "to_yz", "to_zx"]

logger = logging.getLogger(__name__)


def _collapse(points: Sequence[gk.Point2D], decimal_precision: int) -> Any:
    """The point, or the longest segment, spanned by degenerate projected points."""
    unique = gk.point_lists.remove_duplicates(points, decimal_precision)
    if len(unique) == 1:
        return unique[0]
    start, end = max(
        itertools.combinations(unique, 2),
        key=lambda pair: pair[0].distance_to(pair[1]),
    )
    return gk.LineSegment2D(start, end, decimal_precision)


def _project_vertices(
    plane: gk.Plane,
    vertices: Sequence[gk.Point3D],
    closed: bool,
    decimal_precision: int,
) -> tuple[list[gk.Point2D], list[gk.Point2D]]:
    projected = plane.project_points(vertices)
    reduced = gk.point_lists.remove_collinear_points(
        projected, decimal_precision, closed=closed
    )
    return projected, reduced


def _project(plane: gk.Plane, geometry: Any, decimal_precision: int) -> Any:
    if isinstance(geometry, gk.Point3D):
        return plane.project_into(geometry)

    if isinstance(geometry, gk.LineSegment3D):
        endpoints = plane.project_points([geometry.p0, geometry.p1])
        return _collapse(endpoints, decimal_precision)

    if isinstance(geometry, (gk.Line3D, gk.Ray3D)):
        if plane.is_perpendicular(geometry, decimal_precision):
            logger.debug("%s is perpendicular to the projection plane", geometry)
            return plane.project_into(geometry.origin)
        return plane.project_into(geometry)

    if isinstance(geometry, (gk.Triangle3D, gk.Polygon3D)):
        projected, reduced = _project_vertices(
            plane, geometry.vertices, True, decimal_precision
        )
        if len(reduced) < 3:
            return _collapse(projected, decimal_precision)
        if isinstance(geometry, gk.Triangle3D):
            return gk.Triangle2D(*projected, decimal_precision)
        return gk.Polygon2D(projected, decimal_precision)

    if isinstance(geometry, gk.Polyline3D):
        projected, reduced = _project_vertices(
            plane, geometry.vertices, False, decimal_precision
        )
        if len(reduced) < 2:
            return projected[0]
        return gk.Polyline2D(projected, decimal_precision)

    raise TypeError(f"Cannot project {type(geometry).__name__} on a coordinate plane")


def to_xy(
    geometry: Any, decimal_precision: int = gk.THREE_DECIMALS
) -> gk.ProjectionResult:
    """Project a 3d geometry onto the xy plane.

    Parameters:
        geometry: Point, line, ray, segment, triangle, polygon or polyline.
        decimal_precision: ``default=3``

            Tolerance of the checks for a collapsed projection.

    Raises:
        TypeError: For unsupported geometries.

    Returns:
        The projected geometry, possibly of a lower dimensional kind.

    """
    return gk.ProjectionResult.of(_project(gk.Plane.XY, geometry, decimal_precision))


def to_yz(
    geometry: Any, decimal_precision: int = gk.THREE_DECIMALS
) -> gk.ProjectionResult:
    """Project a 3d geometry onto the yz plane, see :func:`to_xy`."""
    return gk.ProjectionResult.of(_project(gk.Plane.YZ, geometry, decimal_precision))


def to_zx(
    geometry: Any, decimal_precision: int = gk.THREE_DECIMALS
) -> gk.ProjectionResult:
    """Project a 3d geometry onto the zx plane, see :func:`to_xy`."""
    return gk.ProjectionResult.of(_project(gk.Plane.ZX, geometry, decimal_precision))
