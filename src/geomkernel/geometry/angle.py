"""Angle value type.

An angle is stored in radians. Equality is decided by the tolerance kernel at
``decimal_precision`` digits, and ordering at nine digits so that two angles which
compare equal are never also strictly ordered in a visible way.

"""

from __future__ import annotations

import math
from dataclasses import dataclass

import geomkernel as gk

__all__ = ["Angle"]


@dataclass(frozen=True)
class Angle:
    """Immutable angle in radians.

    Examples:

        >>> Angle.from_degrees(180).almost_equals(Angle.from_radians(math.pi))
        True
        >>> Angle.from_radians(math.pi / 2).degrees
        90.0

    """

    radians: float
    """Value of the angle in radians."""

    @classmethod
    def from_radians(cls, value: gk.number) -> Angle:
        return cls(float(value))

    @classmethod
    def from_degrees(cls, value: gk.number) -> Angle:
        return cls(math.radians(float(value)))

    @property
    def degrees(self) -> float:
        """Value of the angle in degrees."""
        return math.degrees(self.radians)

    def almost_equals(
        self, other: Angle, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        """Tolerance based equality of two angles, compared in radians."""
        return gk.tolerance.almost_equals(
            self.radians, other.radians, decimal_precision
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Angle):
            return NotImplemented
        return self.almost_equals(other)

    def __hash__(self) -> int:
        # Equality is tolerance based, so the rounded value cannot be hashed.
        return hash(Angle.__name__)

    def __lt__(self, other: Angle) -> bool:
        return gk.tolerance.compare(self.radians, other.radians, gk.NINE_DECIMALS) < 0

    def __le__(self, other: Angle) -> bool:
        return gk.tolerance.compare(self.radians, other.radians, gk.NINE_DECIMALS) <= 0

    def __gt__(self, other: Angle) -> bool:
        return gk.tolerance.compare(self.radians, other.radians, gk.NINE_DECIMALS) > 0

    def __ge__(self, other: Angle) -> bool:
        return gk.tolerance.compare(self.radians, other.radians, gk.NINE_DECIMALS) >= 0

    def add(self, other: Angle) -> Angle:
        return Angle(self.radians + other.radians)

    def subtract(self, other: Angle) -> Angle:
        return Angle(self.radians - other.radians)

    def scale(self, factor: gk.number) -> Angle:
        return Angle(self.radians * factor)

    def divide(self, divisor: gk.number) -> Angle:
        """Divide the angle by a scalar.

        Raises:
            ZeroDivisionError: If the divisor is zero at three decimals.

        """
        if gk.tolerance.is_zero(divisor, gk.THREE_DECIMALS):
            raise ZeroDivisionError(f"Cannot divide an angle by {divisor}")
        return Angle(self.radians / divisor)

    def negate(self) -> Angle:
        return Angle(-self.radians)

    def normalized(self) -> Angle:
        """The same direction, expressed in [0, 2*pi)."""
        value = math.fmod(self.radians, 2 * math.pi)
        if value < 0:
            value += 2 * math.pi
        if gk.tolerance.almost_equals(value, 2 * math.pi, gk.NINE_DECIMALS):
            value = 0.0
        return Angle(value)

    def __repr__(self) -> str:
        return f"Angle(radians={self.radians}, degrees={self.degrees})"

    def __str__(self) -> str:
        return f"{self.degrees} deg"


Angle.ZERO = Angle(0.0)
Angle.RIGHT = Angle(math.pi / 2)
Angle.STRAIGHT = Angle(math.pi)
