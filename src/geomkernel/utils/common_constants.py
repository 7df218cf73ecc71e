"""
The module gives access to the unified tolerance levels used in GeomKernel.

To access the quantities, invoke gk.KEY.

Every comparison in the package rounds a difference to a number of decimal digits and
compares the result to zero. Two levels are used throughout:

    THREE_DECIMALS: the default for equality, containment and intersection tests.
    NINE_DECIMALS: unit length checks, direction checks and rounding of the coordinates
        produced by point arithmetic.

The levels are plain constants. They are passed explicitly as the ``decimal_precision``
argument of the functions that use them; there is no global state to modify.

"""

__all__ = ["THREE_DECIMALS", "NINE_DECIMALS", "WKT_EMPTY"]

THREE_DECIMALS = 3
"""Default precision for general equality, containment and intersection tests."""

NINE_DECIMALS = 9
"""Fine precision for unit length and direction checks, and coordinate rounding."""

WKT_EMPTY = "EMPTY"
"""Marker used by the well known text of empty collections."""
