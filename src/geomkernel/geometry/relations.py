"""Dispatcher of the pairwise relations between geometries.

The four relations are

    intersects(a, b):   whether ``intersection(a, b)`` is not none,
    intersection(a, b): the transversal part of ``a`` and ``b``, e.g. the crossing
                        point of two lines or the common region of two triangles,
    overlaps(a, b):     whether ``overlap(a, b)`` is not none,
    overlap(a, b):      the collinear or coplanar part shared by ``a`` and ``b``, e.g.
                        the common piece of two collinear segments.

Implementations are plain functions ``func(a, b, decimal_precision)`` returning a
geometry or None, registered for a pair of geometry classes with
:func:`register_intersection` and :func:`register_overlap`. One registration serves
both argument orders: if no implementation is found for ``(type(a), type(b))``, the
arguments are swapped. The implementations live in
:mod:`~geomkernel.geometry.relations_2d` and
:mod:`~geomkernel.geometry.relations_3d`, and :func:`missing_pairs` lists the pairs of
kinds that have no implementation.

Example:

    >>> a = gk.LineSegment2D(gk.Point2D(0, 0), gk.Point2D(2, 2))
    >>> b = gk.LineSegment2D(gk.Point2D(0, 2), gk.Point2D(2, 0))
    >>> gk.relations.intersection(a, b).expect(gk.ResultKind.POINT).coordinates
    (1.0, 1.0)

"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Callable, Optional

import geomkernel as gk

__all__ = [
    "register_intersection",
    "register_overlap",
    "intersects",
    "intersection",
    "overlaps",
    "overlap",
    "missing_pairs",
    "collect_pieces",
    "KINDS_2D",
    "KINDS_3D",
]

logger = logging.getLogger(__name__)

Relation = Callable[[Any, Any, int], Optional[Any]]

_INTERSECTIONS: dict[tuple[type, type], Relation] = {}
_OVERLAPS: dict[tuple[type, type], Relation] = {}

KINDS_2D: tuple[type, ...] = (
    gk.Line2D,
    gk.Ray2D,
    gk.LineSegment2D,
    gk.Triangle2D,
    gk.Polygon2D,
    gk.Polyline2D,
)
"""Geometry kinds of the plane taking part in the relations."""

KINDS_3D: tuple[type, ...] = (
    gk.Plane,
    gk.Line3D,
    gk.Ray3D,
    gk.LineSegment3D,
    gk.Triangle3D,
    gk.Polygon3D,
    gk.Polyline3D,
)
"""Geometry kinds of space taking part in the relations."""


def _register(table: dict, first: type, second: type) -> Callable:
    def decorator(func: Relation) -> Relation:
        key = (first, second)
        if key in table:
            raise ValueError(
                f"Relation between {first.__name__} and {second.__name__} is "
                "already registered"
            )
        table[key] = func
        return func

    return decorator


def register_intersection(first: type, second: type) -> Callable:
    """Function decorator to register an intersection implementation.

    Parameters:
        first: Class of the first argument of the decorated function.
        second: Class of the second argument.

    Raises:
        ValueError: If the pair is already registered.

    """
    return _register(_INTERSECTIONS, first, second)


def register_overlap(first: type, second: type) -> Callable:
    """Function decorator to register an overlap implementation, see
    :func:`register_intersection`."""
    return _register(_OVERLAPS, first, second)


def _find(table: dict, first: type, second: type) -> Optional[Relation]:
    for cls_a in first.__mro__:
        for cls_b in second.__mro__:
            func = table.get((cls_a, cls_b))
            if func is not None:
                return func
    return None


def _lookup(table: dict, name: str, a: Any, b: Any) -> tuple[Relation, Any, Any]:
    """Implementation and (possibly swapped) arguments of a relation query.

    Raises:
        TypeError: If the operands live in different dimensions.
        NotImplementedError: If no implementation is registered for the pair.

    """
    if getattr(a, "dimension", None) != getattr(b, "dimension", None):
        raise TypeError(
            f"Cannot compute the {name} of {type(a).__name__} and {type(b).__name__}"
        )
    func = _find(table, type(a), type(b))
    if func is not None:
        return func, a, b
    func = _find(table, type(b), type(a))
    if func is not None:
        logger.debug(
            "Computing %s of %s and %s with swapped arguments",
            name,
            type(a).__name__,
            type(b).__name__,
        )
        return func, b, a
    raise NotImplementedError(
        f"No {name} registered for {type(a).__name__} and {type(b).__name__}"
    )


@gk.time_logger(sections=["relations"])
def intersection(
    a: Any, b: Any, decimal_precision: int = gk.THREE_DECIMALS
) -> gk.IntersectionResult:
    """Transversal intersection of two geometries.

    Parameters:
        a: First geometry.
        b: Second geometry, of the same dimension.
        decimal_precision: ``default=3``

            Tolerance of all geometric decisions of the computation.

    Raises:
        TypeError: If the geometries live in different dimensions.
        NotImplementedError: If the pair of kinds is not supported.

    Returns:
        The intersection, the ``none`` result if there is none.

    """
    func, first, second = _lookup(_INTERSECTIONS, "intersection", a, b)
    return gk.IntersectionResult.of(func(first, second, decimal_precision))


def intersects(a: Any, b: Any, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
    """Check whether :func:`intersection` finds anything."""
    return intersection(a, b, decimal_precision).is_some()


@gk.time_logger(sections=["relations"])
def overlap(
    a: Any, b: Any, decimal_precision: int = gk.THREE_DECIMALS
) -> gk.IntersectionResult:
    """Collinear or coplanar part shared by two geometries.

    See :func:`intersection` for the parameters and the raised errors.

    """
    func, first, second = _lookup(_OVERLAPS, "overlap", a, b)
    return gk.IntersectionResult.of(func(first, second, decimal_precision))


def overlaps(a: Any, b: Any, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
    """Check whether :func:`overlap` finds anything."""
    return overlap(a, b, decimal_precision).is_some()


def missing_pairs() -> list[tuple[str, type, type]]:
    """Pairs of kinds, same kind pairs included, without an implementation.

    Returns:
        Tuples ``(relation, first, second)`` with ``relation`` either
        ``"intersection"`` or ``"overlap"``. Empty if every pair of
        :data:`KINDS_2D` and of :data:`KINDS_3D` is covered.

    """
    missing = []
    for kinds in (KINDS_2D, KINDS_3D):
        for first, second in itertools.combinations_with_replacement(kinds, 2):
            for name, table in (
                ("intersection", _INTERSECTIONS),
                ("overlap", _OVERLAPS),
            ):
                if _find(table, first, second) is None and (
                    _find(table, second, first) is None
                ):
                    missing.append((name, first, second))
    return missing


def collect_pieces(
    pieces: list, decimal_precision: int, as_set: bool = False
) -> Optional[Any]:
    """Reduce the pieces found by a relation to a single geometry.

    Parameters:
        pieces: Points and segments of one dimension. None entries are ignored.
        decimal_precision: Tolerance of the duplicate removal.
        as_set: ``default=False``

            If True, a single segment or point is still returned as a set.

    Returns:
        Segments take precedence over points: one segment, or a
        :class:`~geomkernel.LineSegmentSet2D` (``3D``) of several. If there are no
        segments, a point or a :class:`~geomkernel.PointSet2D` (``3D``). None if
        there are no pieces.

    """
    pieces = [x for x in pieces if x is not None]
    if len(pieces) == 0:
        return None
    planar = isinstance(pieces[0], (gk.Point2D, gk.Geometry2D))
    point_cls = gk.Point2D if planar else gk.Point3D
    segments = [x for x in pieces if not isinstance(x, point_cls)]
    if len(segments) > 0:
        segment_set_cls = gk.LineSegmentSet2D if planar else gk.LineSegmentSet3D
        collection = segment_set_cls(segments, decimal_precision)
        if len(collection) == 1 and not as_set:
            return collection.segments[0]
        return collection
    point_set_cls = gk.PointSet2D if planar else gk.PointSet3D
    collection = point_set_cls(pieces, decimal_precision)
    if len(collection) == 1 and not as_set:
        return collection.points[0]
    return collection
