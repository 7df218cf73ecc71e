"""Formatting helpers for the Well-Known-Text representation of geometries.

Coordinates are written with a fixed number of decimals. A value that rounds to zero is
always written without sign, so that the text of two almost equal points is identical
and can be used as a key.

"""

from __future__ import annotations

from typing import Iterable

import geomkernel as gk

__all__ = ["format_number", "format_coordinates", "format_point_list"]


def format_number(value: gk.number, decimal_precision: int = gk.THREE_DECIMALS) -> str:
    """Write a scalar with ``decimal_precision`` decimals.

    Examples:

        >>> format_number(-0.0001)
        '0.000'
        >>> format_number(2.5, 1)
        '2.5'

    """
    rounded = gk.tolerance.round_to(value, decimal_precision)
    return f"{rounded:.{decimal_precision}f}"


def format_coordinates(
    coordinates: Iterable[gk.number], decimal_precision: int = gk.THREE_DECIMALS
) -> str:
    """Write a coordinate tuple as space separated numbers."""
    return " ".join(format_number(c, decimal_precision) for c in coordinates)


def format_point_list(
    points: Iterable, decimal_precision: int = gk.THREE_DECIMALS, close: bool = False
) -> str:
    """Write a sequence of points as a comma separated coordinate list.

    Parameters:
        points: Points with a ``coordinates`` attribute.
        decimal_precision: ``default=3``

            Number of decimals per coordinate.
        close: ``default=False``

            Repeat the first point at the end, as required for polygon rings.

    """
    points = list(points)
    if close and len(points) > 0:
        points.append(points[0])
    return ", ".join(
        format_coordinates(p.coordinates, decimal_precision) for p in points
    )
