"""Algorithms on plain lists of points.

The functions accept lists of :class:`~geomkernel.Point2D` or of
:class:`~geomkernel.Point3D` (not mixed) unless stated otherwise. Conversion to numpy
arrays follows the column convention: a list of ``n`` points in ``d`` dimensions is an
array of ``shape=(d, n)``.

"""

from __future__ import annotations

import logging
from typing import Sequence, Union

import numpy as np

import geomkernel as gk

__all__ = [
    "to_array",
    "from_array",
    "remove_duplicates",
    "same_point_set",
    "offset_from_chord",
    "remove_collinear_points",
    "average",
    "bounding_box",
    "sort_ccw",
    "sort_cw",
]

logger = logging.getLogger(__name__)

Point = Union[gk.Point2D, gk.Point3D]


def to_array(points: Sequence[Point]) -> np.ndarray:
    """Stack the coordinates of a list of points column-wise.

    Returns:
        Array of ``shape=(d, n)``.

    """
    if len(points) == 0:
        return np.zeros((0, 0))
    return np.array([p.coordinates for p in points], dtype=float).T


def from_array(arr: np.ndarray) -> list[Point]:
    """Inverse of :func:`to_array`.

    Parameters:
        arr: ``shape=(d, n)``

            Point coordinates, with ``d`` either 2 or 3.

    Raises:
        ValueError: If the array does not have 2 or 3 rows.

    """
    arr = np.asarray(arr, dtype=float)
    if arr.ndim != 2 or arr.shape[0] not in (2, 3):
        raise ValueError(
            f"Expected an array of shape (2, n) or (3, n), got {arr.shape}"
        )
    cls = gk.Point2D if arr.shape[0] == 2 else gk.Point3D
    return [cls(*arr[:, i]) for i in range(arr.shape[1])]


def remove_duplicates(
    points: Sequence[Point], decimal_precision: int = gk.THREE_DECIMALS
) -> list[Point]:
    """Remove points that are almost equal to an earlier point in the list.

    The first occurrence is kept, and the order of the kept points is preserved.

    """
    unique: list[Point] = []
    for p in points:
        if not any(p.almost_equals(q, decimal_precision) for q in unique):
            unique.append(p)
    return unique


def same_point_set(
    first: Sequence[Point], second: Sequence[Point], decimal_precision: int
) -> bool:
    """Check whether two lists hold the same points, in any order."""
    if len(first) != len(second):
        return False
    remaining = list(second)
    for p in first:
        for i, q in enumerate(remaining):
            if p.almost_equals(q, decimal_precision):
                del remaining[i]
                break
        else:
            return False
    return True


def offset_from_chord(a: Point, b: Point, c: Point) -> float:
    """Distance from ``b`` to the line through ``a`` and ``c``."""
    direction = c.subtract(a).normalize()
    w = b.subtract(a)
    foot = a.add(direction.scale(w.dot(direction)))
    return b.distance_to(foot)


def remove_collinear_points(
    points: Sequence[Point],
    decimal_precision: int = gk.THREE_DECIMALS,
    closed: bool = True,
) -> list[Point]:
    """Remove consecutive duplicates and the middle point of aligned triples.

    A point ``b`` between its neighbours ``a`` and ``c`` is removed if its distance to
    the line through ``a`` and ``c`` is zero at ``decimal_precision``, or if ``a`` and
    ``c`` coincide (a spike). The procedure is repeated until no point is removed.

    Parameters:
        points: Ordered points.
        decimal_precision: ``default=3``

            Tolerance of the duplicate and alignment tests.
        closed: ``default=True``

            If True, the points form a cycle (polygon), and the first and last points
            are neighbours. Otherwise the points form a chain (polyline) whose
            endpoints are always kept.

    Returns:
        The reduced list. An empty list if all points coincide.

    """
    reduced: list[Point] = []
    for p in points:
        if len(reduced) == 0 or not p.almost_equals(reduced[-1], decimal_precision):
            reduced.append(p)
    if closed:
        while len(reduced) > 1 and reduced[-1].almost_equals(
            reduced[0], decimal_precision
        ):
            reduced.pop()
    if len(reduced) == 1:
        logger.debug("All %i points coincide", len(points))
        return []

    removed = True
    while removed and len(reduced) >= 3:
        removed = False
        n = len(reduced)
        indices = range(n) if closed else range(1, n - 1)
        for i in indices:
            a, b, c = reduced[i - 1], reduced[i], reduced[(i + 1) % n]
            if a.almost_equals(c, decimal_precision) or gk.tolerance.is_zero(
                offset_from_chord(a, b, c), decimal_precision
            ):
                del reduced[i]
                removed = True
                break
    return reduced


def average(points: Sequence[Point]) -> Point:
    """Arithmetic mean of the points.

    Raises:
        ValueError: If the list is empty.

    """
    if len(points) == 0:
        raise ValueError("Cannot average an empty list of points")
    mean = to_array(points).mean(axis=1)
    return type(points[0])(*mean)


def bounding_box(points: Sequence[Point]) -> tuple[Point, Point]:
    """Lower and upper corner of the axis aligned box around the points."""
    arr = to_array(points)
    cls = type(points[0])
    return cls(*arr.min(axis=1)), cls(*arr.max(axis=1))


def _angles(points: Sequence[gk.Point2D]) -> np.ndarray:
    arr = to_array(points)
    center = arr.mean(axis=1)
    delta = arr - center[:, np.newaxis]
    return np.mod(np.arctan2(delta[1], delta[0]), 2 * np.pi)


def _argsort_angles(angles: np.ndarray, decimal_precision: int) -> np.ndarray:
    keys = np.round(angles, decimal_precision)
    # Angles just below 2 pi round to the start of the turn.
    keys[keys >= np.round(2 * np.pi, decimal_precision)] = 0
    return np.argsort(keys, kind="stable")


@gk.time_logger(sections=["algorithms"])
def sort_ccw(
    points: Sequence[gk.Point2D], decimal_precision: int = gk.THREE_DECIMALS
) -> list[gk.Point2D]:
    """Sort points counter-clockwise around their centroid.

    The sort key is the angle from the positive u axis to ``p - centroid``, in
    [0, 2 pi), rounded to ``decimal_precision``. The sort is stable, so points with
    equal rounded angles keep their relative order.

    Examples:

        >>> pts = [gk.Point2D(u, v) for u, v in [(1, 1), (1, -1), (-1, 1), (-1, -1)]]
        >>> [p.coordinates for p in sort_ccw(pts)]
        [(1.0, 1.0), (-1.0, 1.0), (-1.0, -1.0), (1.0, -1.0)]

    """
    if len(points) < 2:
        return list(points)
    order = _argsort_angles(_angles(points), decimal_precision)
    return [points[i] for i in order]


@gk.time_logger(sections=["algorithms"])
def sort_cw(
    points: Sequence[gk.Point2D], decimal_precision: int = gk.THREE_DECIMALS
) -> list[gk.Point2D]:
    """Sort points clockwise around their centroid, starting from the positive u axis.

    See :func:`sort_ccw`.

    """
    if len(points) < 2:
        return list(points)
    order = _argsort_angles(np.mod(-_angles(points), 2 * np.pi), decimal_precision)
    return [points[i] for i in order]
