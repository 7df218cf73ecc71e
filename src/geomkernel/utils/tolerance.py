"""Tolerance kernel.

All geometric decisions in GeomKernel reduce to one rule: round a difference to a given
number of decimal digits, then compare the rounded value to zero. The functions below
implement that rule for scalars. Higher level predicates (parallel, perpendicular,
contains, on-segment) are expressed through them, so ``decimal_precision`` is the single
numeric knob of the package.

Rounding follows :func:`round`, i.e. ties are rounded to the nearest even digit.

Examples:

    >>> almost_equals(0.1 + 0.2, 0.3)
    True
    >>> almost_equals(1.0, 1.01, decimal_precision=2)
    False
    >>> sign(-0.0004)
    0

"""

from __future__ import annotations

import geomkernel as gk

__all__ = [
    "round_to",
    "is_zero",
    "almost_equals",
    "sign",
    "compare",
    "in_unit_interval",
]


def round_to(value: gk.number, decimal_precision: int = gk.THREE_DECIMALS) -> float:
    """Round a scalar to ``decimal_precision`` decimal digits.

    Negative zero is normalized to zero, so that the result can be used as a
    dictionary or set key.

    """
    rounded = round(float(value), decimal_precision)
    return 0.0 if rounded == 0 else rounded


def is_zero(value: gk.number, decimal_precision: int = gk.THREE_DECIMALS) -> bool:
    """Check whether a scalar is zero after rounding."""
    return round(float(value), decimal_precision) == 0


def almost_equals(
    a: gk.number, b: gk.number, decimal_precision: int = gk.THREE_DECIMALS
) -> bool:
    """Tolerance based equality of two scalars.

    Parameters:
        a: First value.
        b: Second value.
        decimal_precision: ``default=3``

            Number of decimal digits kept before the difference is compared to zero.

    Returns:
        True if ``round(a - b, decimal_precision) == 0``.

    """
    return is_zero(a - b, decimal_precision)


def sign(value: gk.number, decimal_precision: int = gk.THREE_DECIMALS) -> int:
    """Sign of a scalar after rounding: -1, 0 or 1."""
    rounded = round(float(value), decimal_precision)
    if rounded > 0:
        return 1
    if rounded < 0:
        return -1
    return 0


def compare(
    a: gk.number, b: gk.number, decimal_precision: int = gk.THREE_DECIMALS
) -> int:
    """Three-way comparison of two scalars under the tolerance rule.

    Returns:
        -1 if ``a < b``, 1 if ``a > b``, and 0 if the two are almost equal.

    """
    return sign(a - b, decimal_precision)


def in_unit_interval(
    t: gk.number, decimal_precision: int = gk.THREE_DECIMALS
) -> bool:
    """Check whether a parameter lies in [0, 1] after rounding."""
    rounded = round(float(t), decimal_precision)
    return 0 <= rounded <= 1
