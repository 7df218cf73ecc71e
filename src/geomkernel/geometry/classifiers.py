"""Classifiers for the relative position of a point and the winding of a shape."""

from __future__ import annotations

from enum import Enum

import geomkernel as gk


class Location(Enum):
    """Position of a point relative to a directed linear geometry.

    The side of a point is the sign of the perp product between the direction of the
    geometry and the vector from its origin to the point. Positive means LEFT,
    negative means RIGHT, and zero means the point is ON_LINE. Segments refine
    ON_LINE to ON_SEGMENT when the point lies between the two endpoints.

    """

    LEFT = 0
    RIGHT = 1
    AHEAD = 2
    BEHIND = 3
    ON_SEGMENT = 4
    ON_LINE = 5

    def __str__(self):
        return self.name

    @classmethod
    def from_side(cls, value: gk.number, decimal_precision: int) -> Location:
        """Classify a signed distance (or perp product) as LEFT, RIGHT or ON_LINE."""
        s = gk.tolerance.sign(value, decimal_precision)
        if s > 0:
            return cls.LEFT
        if s < 0:
            return cls.RIGHT
        return cls.ON_LINE

    def is_on(self) -> bool:
        """Check whether the location is on the geometry (line or segment)."""
        return self in (Location.ON_LINE, Location.ON_SEGMENT)


class Orientation(Enum):
    """Winding of a triangle or polygon."""

    UNKNOWN = -1
    CLOCKWISE = 0
    COUNTER_CLOCKWISE = 1

    def __str__(self):
        return self.name

    @classmethod
    def from_perp_product(cls, value: gk.number, decimal_precision: int) -> Orientation:
        """Orientation from the perp product of two edge vectors sharing a vertex."""
        s = gk.tolerance.sign(value, decimal_precision)
        if s > 0:
            return cls.COUNTER_CLOCKWISE
        if s < 0:
            return cls.CLOCKWISE
        return cls.UNKNOWN

    def inside_location(self) -> Location:
        """Side of the edges that faces the interior of a shape with this winding.

        Raises:
            ValueError: For an UNKNOWN orientation.

        """
        if self == Orientation.COUNTER_CLOCKWISE:
            return Location.LEFT
        if self == Orientation.CLOCKWISE:
            return Location.RIGHT
        raise ValueError("A degenerate shape has no inside")
