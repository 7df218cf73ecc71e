"""Abstract base classes of the 2d and 3d geometries.

The bases only fix the protocol every geometry shares: containment of a point,
tolerance based equality and the text representation. The pairwise relations
(``intersects``, ``intersection``, ``overlaps``, ``overlap``) are not implemented per
class, but forwarded to the dispatch table in :mod:`geomkernel.geometry.relations`.

"""

from __future__ import annotations

import abc
from typing import Any, ClassVar

import geomkernel as gk

__all__ = ["Geometry2D", "Geometry3D"]


class _Geometry(abc.ABC):
    result_kind: ClassVar[gk.ResultKind]
    """Kind reported when the geometry is wrapped in a result."""

    dimension: ClassVar[int]

    @abc.abstractmethod
    def contains(self, point: Any, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        """Check whether a point belongs to the geometry."""

    @abc.abstractmethod
    def almost_equals(
        self, other: Any, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        """Tolerance based equality with another geometry of the same kind."""

    @abc.abstractmethod
    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        """Well-Known-Text representation of the geometry."""

    def intersects(
        self, other: Any, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        return gk.relations.intersects(self, other, decimal_precision)

    def intersection(
        self, other: Any, decimal_precision: int = gk.THREE_DECIMALS
    ) -> gk.IntersectionResult:
        return gk.relations.intersection(self, other, decimal_precision)

    def overlaps(self, other: Any, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
        return gk.relations.overlaps(self, other, decimal_precision)

    def overlap(
        self, other: Any, decimal_precision: int = gk.THREE_DECIMALS
    ) -> gk.IntersectionResult:
        return gk.relations.overlap(self, other, decimal_precision)

    def __eq__(self, other) -> bool:
        if not isinstance(other, _Geometry):
            return NotImplemented
        return type(self) is type(other) and self.almost_equals(other)

    def __hash__(self) -> int:
        # Equality is tolerance based and, for most kinds, independent of the
        # vertex order, so only the kind can take part in the hash.
        return hash(type(self).__name__)

    def __str__(self) -> str:
        return self.to_wkt()


class Geometry2D(_Geometry):
    """Base class of the geometries living in the plane."""

    dimension = 2


class Geometry3D(_Geometry):
    """Base class of the geometries living in space."""

    dimension = 3
