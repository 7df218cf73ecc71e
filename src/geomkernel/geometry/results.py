"""Tagged results of intersection, overlap and projection queries.

A query that finds no relation between its operands is not an error. It returns the
``none`` variant of the result, which callers are expected to check:

    res = a.intersection(b)
    if res.is_some():
        point = res.expect(gk.ResultKind.POINT)

The kind of a result is read from the ``result_kind`` class attribute of the geometry
it wraps, so each result carries exactly one of the variants listed in
:class:`ResultKind`.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

__all__ = ["ResultKind", "IntersectionResult", "ProjectionResult"]


class ResultKind(Enum):
    """Kinds of geometry a query result can hold."""

    NONE = 0
    POINT = 1
    POINT_SET = 2
    LINE = 3
    RAY = 4
    LINE_SEGMENT = 5
    LINE_SEGMENT_SET = 6
    TRIANGLE = 7
    POLYGON = 8
    POLYLINE = 9
    PLANE = 10
    MULTI_POLYGON = 11

    def __str__(self):
        return self.name

    def is_linear(self) -> bool:
        return self in (ResultKind.LINE, ResultKind.RAY, ResultKind.LINE_SEGMENT)

    def is_area(self) -> bool:
        return self in (
            ResultKind.TRIANGLE,
            ResultKind.POLYGON,
            ResultKind.MULTI_POLYGON,
        )


@dataclass(frozen=True)
class _TaggedResult:
    kind: ResultKind
    value: Optional[Any] = None

    def __post_init__(self) -> None:
        if (self.kind == ResultKind.NONE) != (self.value is None):
            raise ValueError(f"Result of kind {self.kind} cannot hold {self.value!r}")

    @classmethod
    def none(cls):
        return cls(ResultKind.NONE)

    @classmethod
    def of(cls, value: Any):
        """Wrap a geometry. The kind is taken from its ``result_kind`` attribute."""
        if value is None:
            return cls.none()
        return cls(value.result_kind, value)

    def is_none(self) -> bool:
        return self.kind == ResultKind.NONE

    def is_some(self) -> bool:
        return self.kind != ResultKind.NONE

    def expect(self, kind: ResultKind) -> Any:
        """Return the held geometry, checking that it is of the given kind.

        Raises:
            TypeError: If the result holds a different kind.

        """
        if self.kind != kind:
            raise TypeError(f"Expected a result of kind {kind}, found {self.kind}")
        return self.value

    def __str__(self) -> str:
        if self.is_none():
            return f"{type(self).__name__}(NONE)"
        return f"{type(self).__name__}({self.kind}: {self.value.to_wkt()})"


class IntersectionResult(_TaggedResult):
    """Result of ``intersection`` and ``overlap`` queries."""


class ProjectionResult(_TaggedResult):
    """Result of the axis plane projections in :mod:`geomkernel.geometry.projections`.

    A projection may collapse the geometry to a lower dimensional kind, e.g. a vertical
    segment projected on the xy plane is a point.

    """
