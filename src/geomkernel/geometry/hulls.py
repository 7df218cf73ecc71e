"""Hulls of point clouds in the plane and of almost planar point clouds in space.

The 3d functions reduce the problem to 2d: a best-fit plane is computed with
:func:`approx_plane`, the points are projected into it, the 2d hull is computed and the
result is lifted back. The returned vertex lists are meant to be passed to
:class:`~geomkernel.Polygon2D` or :class:`~geomkernel.Polygon3D`, which is what the
``convex_hull`` and ``concave_hull`` factories of those classes do.

"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

import geomkernel as gk

__all__ = [
    "is_left_turn",
    "convex_hull_2d",
    "concave_hull_2d",
    "approx_plane",
    "convex_hull_3d",
    "concave_hull_3d",
]

logger = logging.getLogger(__name__)


def is_left_turn(
    a: gk.Point2D,
    b: gk.Point2D,
    c: gk.Point2D,
    decimal_precision: int = gk.THREE_DECIMALS,
) -> bool:
    """Check whether ``c`` is strictly LEFT of the directed line from ``a`` to ``b``.

    The side is measured as a distance, so the test does not depend on the length of
    ``b - a``.

    """
    chord = gk.Line2D.from_points(a, b, gk.NINE_DECIMALS)
    return chord.location(c, decimal_precision) == gk.Location.LEFT


def _half_hull(
    points: Sequence[gk.Point2D], decimal_precision: int
) -> list[gk.Point2D]:
    chain: list[gk.Point2D] = []
    for p in points:
        while len(chain) >= 2 and not is_left_turn(
            chain[-2], chain[-1], p, decimal_precision
        ):
            chain.pop()
        chain.append(p)
    return chain


@gk.time_logger(sections=["algorithms"])
def convex_hull_2d(
    points: Sequence[gk.Point2D], decimal_precision: int = gk.THREE_DECIMALS
) -> list[gk.Point2D]:
    """Vertices of the convex hull of a point cloud, counter-clockwise.

    Monotone chain variant of the Graham scan: the points are ordered by their
    coordinates, and the lower and upper chains are accumulated while removing the
    last point as long as the last three points do not make a strict LEFT turn. The
    accumulated chains are convex at all times. Points on the hull edges are not
    hull vertices.

    Parameters:
        points: Point cloud. Duplicates are allowed.
        decimal_precision: ``default=3``

            Tolerance of the duplicate removal and of the turn test.

    Returns:
        The hull vertices, starting at the point with lowest u (then lowest v)
        coordinate. Fewer than three points if the cloud is degenerate, i.e. all
        points coincide or are collinear.

    """
    unique = gk.point_lists.remove_duplicates(points, decimal_precision)
    if len(unique) < 3:
        logger.debug("Convex hull of %i distinct points", len(unique))
        return unique

    ordered = sorted(
        unique,
        key=lambda p: (
            gk.tolerance.round_to(p.u, decimal_precision),
            gk.tolerance.round_to(p.v, decimal_precision),
        ),
    )
    lower = _half_hull(ordered, decimal_precision)
    upper = _half_hull(ordered[::-1], decimal_precision)
    # The last point of each chain is the first point of the other.
    return lower[:-1] + upper[:-1]


@gk.time_logger(sections=["algorithms"])
def concave_hull_2d(
    points: Sequence[gk.Point2D], decimal_precision: int = gk.THREE_DECIMALS
) -> list[gk.Point2D]:
    """Simple polygon through all distinct points, sorted counter-clockwise around
    their centroid.

    This is not a concave hull in the strict sense, only an ordering of the points
    that gives a non-self-intersecting ring for star-shaped point clouds.

    """
    unique = gk.point_lists.remove_duplicates(points, decimal_precision)
    return gk.point_lists.sort_ccw(unique, decimal_precision)


@gk.time_logger(sections=["algorithms"])
def approx_plane(
    points: Sequence[gk.Point3D], decimal_precision: int = gk.THREE_DECIMALS
) -> gk.Plane:
    """Best-fit plane of an almost planar point cloud.

    The normal is the average of the normals of all consecutive (cyclic) point
    triples. Triples with coincident or aligned points carry no direction and are
    skipped. Since the sign of a triple normal depends on the turn direction of the
    triple, every sample is first flipped to agree with the first one. The averaged
    normal is oriented towards positive z, and the plane passes through the
    centroid of the points.

    Parameters:
        points: Point cloud, ordered or not.
        decimal_precision: ``default=3``

            Tolerance of the duplicate and collinearity removal.

    Raises:
        DegenerateGeometryError: If less than three valid normal samples are found,
            i.e. the points are (almost) collinear.

    Returns:
        The approximating plane.

    """
    unique = gk.point_lists.remove_duplicates(points, decimal_precision)
    reduced = gk.point_lists.remove_collinear_points(
        unique, decimal_precision, closed=True
    )
    if len(reduced) < 3:
        raise gk.DegenerateGeometryError(
            f"Cannot fit a plane to {len(points)} collinear points"
        )

    pts = gk.point_lists.to_array(reduced)
    first = pts.T
    second = np.roll(pts, -1, axis=1).T
    third = np.roll(pts, -2, axis=1).T
    normals = np.cross(second - first, third - first)

    lengths = np.linalg.norm(normals, axis=1)
    valid = np.round(lengths, decimal_precision) > 0
    if np.count_nonzero(valid) < 3:
        raise gk.DegenerateGeometryError(
            f"Only {np.count_nonzero(valid)} valid normal samples, need 3"
        )
    normals = normals[valid] / lengths[valid][:, np.newaxis]
    # Flip all samples to the half space of the first one.
    signs = np.where(normals @ normals[0] < 0, -1.0, 1.0)
    normal = (normals * signs[:, np.newaxis]).mean(axis=0)
    if normal[2] < 0:
        normal = -normal

    centroid = gk.point_lists.average(unique)
    return gk.Plane.from_point_and_normal(centroid, gk.Vector3D.from_array(normal))


@gk.time_logger(sections=["algorithms"])
def convex_hull_3d(
    points: Sequence[gk.Point3D], decimal_precision: int = gk.THREE_DECIMALS
) -> list[gk.Point3D]:
    """Convex hull of an almost planar point cloud, see :func:`convex_hull_2d`.

    The returned vertices lie in the plane of :func:`approx_plane`, i.e. points off
    that plane are projected onto it.

    """
    plane = approx_plane(points, decimal_precision)
    projected = plane.project_points(points)
    return plane.evaluate_points(convex_hull_2d(projected, decimal_precision))


@gk.time_logger(sections=["algorithms"])
def concave_hull_3d(
    points: Sequence[gk.Point3D], decimal_precision: int = gk.THREE_DECIMALS
) -> list[gk.Point3D]:
    """Counterpart of :func:`concave_hull_2d` for almost planar point clouds."""
    plane = approx_plane(points, decimal_precision)
    projected = plane.project_points(points)
    return plane.evaluate_points(concave_hull_2d(projected, decimal_precision))
