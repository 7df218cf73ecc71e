"""
Defines types commonly used in GeomKernel.
"""

from typing import Sequence, Union

__all__ = [
    "number",
    "Coordinates",
]

number = Union[float, int]
"""Type for numbers."""

Coordinates = Sequence[number]
"""Type for a plain sequence of coordinates, e.g. ``(1.0, 2.0)``."""
