"""Behaviour shared by lines, rays and segments in 2d and 3d.

The mixins below only use the named arithmetic of points and vectors (``add``,
``subtract``, ``scale``, ``dot``), which is identical in both dimensions. The concrete
classes in :mod:`~geomkernel.geometry.lines_2d` and
:mod:`~geomkernel.geometry.lines_3d` add the dimension specific parts: the text
representation, bounding boxes, and in 2d the left/right classification.

Every linear geometry is parametrized over its supporting line as
``anchor + t * direction``, with ``direction`` a unit vector, so ``t`` is a signed
distance along the line. Two collinear geometries are compared by expressing both as
parameter intervals on the same line, see :func:`collinear_overlap`.

"""

from __future__ import annotations

import logging
import math
from functools import cached_property
from typing import Any, Optional

import numpy as np

import geomkernel as gk

__all__ = [
    "LineMixin",
    "RayMixin",
    "SegmentMixin",
    "are_collinear",
    "line_intersection_2d",
    "line_intersection_3d",
    "collinear_overlap",
    "project_onto_chain",
    "location_pct_on_chain",
    "point_on_chain",
]

logger = logging.getLogger(__name__)


class _LinearMixin:
    """Parametrization of a linear geometry over its supporting line."""

    @property
    def anchor(self):
        """Point of the geometry where the parameter is zero."""
        raise NotImplementedError

    direction: Any

    def parameter_at(self, point) -> float:
        """Signed distance from the anchor to the foot of ``point`` on the line."""
        return point.subtract(self.anchor).dot(self.direction)

    def evaluate(self, t: gk.number):
        """Point on the supporting line at parameter ``t``."""
        return self.anchor.add(self.direction.scale(t))

    def interval_on(self, origin, direction) -> tuple[float, float]:
        """Parameter interval covered by this geometry on another collinear line.

        Parameters:
            origin: Point where the parameter of the other line is zero.
            direction: Unit direction of the other line.

        Returns:
            The lower and upper bound, possibly infinite.

        """
        raise NotImplementedError

    def is_parallel(self, other, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        """Parallelism with another linear geometry or a vector."""
        direction = getattr(other, "direction", other)
        return self.direction.is_parallel(direction, decimal_precision)

    def is_perpendicular(
        self, other, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        """Perpendicularity with another linear geometry or a vector."""
        direction = getattr(other, "direction", other)
        return self.direction.is_perpendicular(direction, decimal_precision)

    def distance_to(self, point) -> float:
        return point.distance_to(self.project_onto(point))

    def project_onto(self, point):
        raise NotImplementedError

    def contains(self, point, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        return gk.tolerance.is_zero(
            point.distance_to(self.project_onto(point)), decimal_precision
        )


class LineMixin(_LinearMixin):
    """Infinite line through ``origin`` along ``direction``."""

    origin: Any

    @property
    def anchor(self):
        return self.origin

    def project_onto(self, point):
        """Orthogonal projection ``origin + ((p - origin) . d) d`` of a point."""
        return self.evaluate(self.parameter_at(point))

    def interval_on(self, origin, direction) -> tuple[float, float]:
        return (-math.inf, math.inf)

    def almost_equals(self, other, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        """Two lines are equal if they are parallel and share a point."""
        return (
            isinstance(other, type(self))
            and self.is_parallel(other, decimal_precision)
            and self.contains(other.origin, decimal_precision)
        )


class RayMixin(_LinearMixin):
    """Half line starting at ``origin`` and extending along ``direction``."""

    origin: Any

    @property
    def anchor(self):
        return self.origin

    def is_ahead(self, point, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        """Check whether the foot of ``point`` lies on the ray side of the origin."""
        return gk.tolerance.sign(self.parameter_at(point), decimal_precision) >= 0

    def is_behind(self, point, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        return not self.is_ahead(point, decimal_precision)

    def project_onto(self, point):
        """Projection onto the ray. Feet behind the origin are clamped to it."""
        t = self.parameter_at(point)
        if t <= 0:
            return self.origin
        return self.evaluate(t)

    def interval_on(self, origin, direction) -> tuple[float, float]:
        t = self.origin.subtract(origin).dot(direction)
        if self.direction.dot(direction) > 0:
            return (t, math.inf)
        return (-math.inf, t)

    def almost_equals(self, other, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        return (
            isinstance(other, type(self))
            and self.origin.almost_equals(other.origin, decimal_precision)
            and self.direction.almost_equals(other.direction, decimal_precision)
        )


class SegmentMixin(_LinearMixin):
    """Bounded piece of a line between ``p0`` and ``p1``."""

    p0: Any
    p1: Any

    @property
    def anchor(self):
        return self.p0

    @cached_property
    def direction(self):
        """Unit vector from ``p0`` to ``p1``."""
        return self.p1.subtract(self.p0).normalize()

    def to_vector(self):
        return self.p1.subtract(self.p0)

    def length(self) -> float:
        return self.p0.distance_to(self.p1)

    def midpoint(self):
        return self.evaluate(0.5 * self.length())

    def project_onto(self, point):
        """Projection onto the segment, clamped to the nearest endpoint."""
        t = self.parameter_at(point)
        if t <= 0:
            return self.p0
        if t >= self.length():
            return self.p1
        return self.evaluate(t)

    def interval_on(self, origin, direction) -> tuple[float, float]:
        t0 = self.p0.subtract(origin).dot(direction)
        t1 = self.p1.subtract(origin).dot(direction)
        return (min(t0, t1), max(t0, t1))

    def location_pct(self, point, decimal_precision: int = gk.THREE_DECIMALS) -> float:
        """Relative position of a point along the segment, in [0, 1].

        Raises:
            ValueError: If the point does not lie on the segment.

        """
        if not self.contains(point, decimal_precision):
            raise ValueError(f"{point} does not lie on {self.to_wkt()}")
        pct = self.parameter_at(point) / self.length()
        return min(max(pct, 0.0), 1.0)

    def point_at(self, pct: gk.number):
        """Point at the relative position ``pct`` from ``p0`` to ``p1``."""
        if pct == 0:
            return self.p0
        if pct == 1:
            return self.p1
        return self.evaluate(pct * self.length())

    def reverse(self):
        return type(self)(self.p1, self.p0, gk.NINE_DECIMALS)

    def is_same_segment(
        self, other, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        """Equality of the endpoint sets, regardless of the orientation."""
        if self.p0.almost_equals(other.p0, decimal_precision):
            return self.p1.almost_equals(other.p1, decimal_precision)
        return self.p0.almost_equals(
            other.p1, decimal_precision
        ) and self.p1.almost_equals(other.p0, decimal_precision)

    def almost_equals(self, other, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        return isinstance(other, type(self)) and self.is_same_segment(
            other, decimal_precision
        )


def _supporting(linear) -> tuple[Any, Any]:
    return linear.anchor, linear.direction


def are_collinear(a, b, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
    """Check whether two linear geometries lie on a common line."""
    if not a.is_parallel(b, decimal_precision):
        return False
    origin, direction = _supporting(a)
    foot = origin.add(direction.scale(b.anchor.subtract(origin).dot(direction)))
    return gk.tolerance.is_zero(b.anchor.distance_to(foot), decimal_precision)


def line_intersection_2d(a, b, decimal_precision: int = gk.THREE_DECIMALS):
    """Intersection point of the supporting lines of two 2d linear geometries.

    The point is ``o1 + t d1`` with ``t = ((o2 - o1) x d2) / (d1 x d2)``, where ``x`` is
    the perp product.

    Returns:
        The point, or None if the lines are parallel.

    """
    if a.is_parallel(b, decimal_precision):
        return None
    o1, d1 = _supporting(a)
    o2, d2 = _supporting(b)
    t = o2.subtract(o1).perp_product(d2) / d1.perp_product(d2)
    return o1.add(d1.scale(t))


def line_intersection_3d(a, b, decimal_precision: int = gk.THREE_DECIMALS):
    """Intersection point of the supporting lines of two 3d linear geometries.

    The parameters ``s, t`` of ``o1 + s d1 = o2 + t d2`` are found as the least squares
    solution of the 3x2 system. The two candidate points are then compared: if they
    differ, the lines are skew.

    Returns:
        The point, or None if the lines are parallel or skew.

    """
    if a.is_parallel(b, decimal_precision):
        return None
    o1, d1 = _supporting(a)
    o2, d2 = _supporting(b)
    matrix = np.column_stack([d1.to_array(), -d2.to_array()])
    rhs = o2.subtract(o1).to_array()
    (s, t), *_ = np.linalg.lstsq(matrix, rhs, rcond=None)
    p1 = o1.add(d1.scale(float(s)))
    p2 = o2.add(d2.scale(float(t)))
    if not p1.almost_equals(p2, decimal_precision):
        logger.debug("Lines through %s and %s are skew", o1, o2)
        return None
    return p1


def collinear_overlap(
    a,
    b,
    decimal_precision: int,
    line_cls: type,
    ray_cls: type,
    segment_cls: type,
) -> Optional[Any]:
    """Shared part of two collinear linear geometries.

    Both operands are mapped to parameter intervals on the supporting line of ``a``,
    the intervals are intersected and the result is converted back to a geometry
    oriented along ``a``.

    Parameters:
        a: First line, ray or segment.
        b: Second line, ray or segment.
        decimal_precision: Tolerance of the collinearity test and of the comparison of
            the interval bounds.
        line_cls: Line class of the dimension of the operands.
        ray_cls: Ray class of the dimension of the operands.
        segment_cls: Segment class of the dimension of the operands.

    Returns:
        A point, a segment, a ray or a line. None if the operands are not collinear or
        if their intervals are disjoint.

    """
    if not are_collinear(a, b, decimal_precision):
        return None

    origin, direction = _supporting(a)
    lo_a, hi_a = a.interval_on(origin, direction)
    lo_b, hi_b = b.interval_on(origin, direction)
    lo, hi = max(lo_a, lo_b), min(hi_a, hi_b)

    if math.isinf(lo) and math.isinf(hi):
        return line_cls(origin, direction)
    if math.isinf(hi):
        return ray_cls(_evaluate(origin, direction, lo), direction)
    if math.isinf(lo):
        return ray_cls(_evaluate(origin, direction, hi), direction.negate())

    order = gk.tolerance.compare(lo, hi, decimal_precision)
    if order > 0:
        logger.debug("Collinear geometries are disjoint")
        return None
    if order == 0:
        return _evaluate(origin, direction, lo)
    return segment_cls(
        _evaluate(origin, direction, lo),
        _evaluate(origin, direction, hi),
        decimal_precision,
    )


def _evaluate(origin, direction, t: float):
    return origin.add(direction.scale(t))


def project_onto_chain(segments: list, point):
    """Projection of a point onto the nearest segment of a chain."""
    projections = [s.project_onto(point) for s in segments]
    distances = [point.distance_to(p) for p in projections]
    return projections[int(np.argmin(distances))]


def location_pct_on_chain(
    segments: list, point, decimal_precision: int = gk.THREE_DECIMALS
) -> float:
    """Relative arc length position of a point along a chain of segments.

    Raises:
        ValueError: If the point does not lie on the chain.

    """
    total = sum(s.length() for s in segments)
    walked = 0.0
    for s in segments:
        if s.contains(point, decimal_precision):
            walked += s.location_pct(point, decimal_precision) * s.length()
            return min(walked / total, 1.0)
        walked += s.length()
    raise ValueError(f"{point} does not lie on the polyline")


def point_on_chain(segments: list, pct: gk.number):
    """Point at the relative arc length ``pct`` along a chain of segments.

    Parameters:
        segments: Consecutive segments, the end of each is the start of the next.
        pct: Relative position. 0 gives the first node, 1 the last one.

    Raises:
        ValueError: If ``pct`` is outside [0, 1].

    """
    if pct < 0 or pct > 1:
        raise ValueError(f"Relative position must be in [0, 1], got {pct}")
    if pct == 0:
        return segments[0].p0
    if pct == 1:
        return segments[-1].p1
    target = pct * sum(s.length() for s in segments)
    walked = 0.0
    for s in segments:
        if walked + s.length() >= target:
            return s.evaluate(target - walked)
        walked += s.length()
    return segments[-1].p1
