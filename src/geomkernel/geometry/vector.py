"""Vectors and unit vectors in 2d and 3d.

Vectors are immutable. Arithmetic is spelled out as named methods (``add``,
``subtract``, ``scale``, ``negate``, ``dot``, ``cross``, ``perp_product``) instead of
operators, so that a point can never be added to a point by accident.

A unit vector is a vector whose length is one at nine decimals. The only ways to obtain
one are the constructor of :class:`UnitVector2D` / :class:`UnitVector3D`, which
validates the length, and :meth:`Vector2D.normalize` / :meth:`Vector3D.normalize`, which
fail for a zero vector.

Directional predicates (parallel, perpendicular, same direction) are evaluated on the
normalized vectors, so the tolerance is an angular one and does not depend on the
length of the inputs.

"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

import geomkernel as gk

__all__ = ["Vector2D", "UnitVector2D", "Vector3D", "UnitVector3D"]


def _check_shape(arr: np.ndarray, dim: int) -> np.ndarray:
    arr = np.asarray(arr, dtype=float).ravel()
    if arr.size != dim:
        raise ValueError(f"Expected {dim} coordinates, got array of size {arr.size}")
    return arr


@dataclass(frozen=True)
class Vector2D:
    """Vector in the plane, with components ``u`` and ``v``."""

    u: float
    v: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "u", float(self.u))
        object.__setattr__(self, "v", float(self.v))

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vector2D:
        """Construct a vector from an array of ``shape=(2,)``."""
        arr = _check_shape(arr, 2)
        return cls(arr[0], arr[1])

    def to_array(self) -> np.ndarray:
        """The components as an array of ``shape=(2,)``."""
        return np.array([self.u, self.v])

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.u, self.v)

    def length(self) -> float:
        return math.hypot(self.u, self.v)

    def is_zero(self, decimal_precision: int = gk.NINE_DECIMALS) -> bool:
        return gk.tolerance.is_zero(self.length(), decimal_precision)

    def normalize(self) -> UnitVector2D:
        """Scale the vector to unit length.

        Raises:
            DegenerateGeometryError: If the vector has zero length at nine decimals.

        """
        norm = self.length()
        if gk.tolerance.is_zero(norm, gk.NINE_DECIMALS):
            raise gk.DegenerateGeometryError("Cannot normalize a zero length vector")
        return UnitVector2D(self.u / norm, self.v / norm)

    def add(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.u + other.u, self.v + other.v)

    def subtract(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.u - other.u, self.v - other.v)

    def scale(self, factor: gk.number) -> Vector2D:
        return Vector2D(self.u * factor, self.v * factor)

    def negate(self) -> Vector2D:
        return Vector2D(-self.u, -self.v)

    def dot(self, other: Vector2D) -> float:
        return self.u * other.u + self.v * other.v

    def perp(self) -> Vector2D:
        """The vector rotated a quarter turn counter-clockwise."""
        return Vector2D(-self.v, self.u)

    def perp_product(self, other: Vector2D) -> float:
        """The 2d cross product ``u1 * v2 - v1 * u2``.

        Positive if ``other`` points to the left of this vector.

        """
        return self.perp().dot(other)

    def is_parallel(
        self, other: Vector2D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        return gk.tolerance.is_zero(
            self.normalize().perp_product(other.normalize()), decimal_precision
        )

    def is_perpendicular(
        self, other: Vector2D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        return gk.tolerance.is_zero(
            self.normalize().dot(other.normalize()), decimal_precision
        )

    def same_direction_as(
        self, other: Vector2D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        return self.is_parallel(other, decimal_precision) and self.dot(other) > 0

    def opposite_direction_as(
        self, other: Vector2D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        return self.is_parallel(other, decimal_precision) and self.dot(other) < 0

    def angle_to(self, other: Vector2D) -> gk.Angle:
        """Unsigned angle between two vectors, in [0, pi]."""
        cos = self.normalize().dot(other.normalize())
        return gk.Angle.from_radians(math.acos(np.clip(cos, -1.0, 1.0)))

    def signed_angle_to(self, other: Vector2D) -> gk.Angle:
        """Counter-clockwise angle from this vector to ``other``, in [0, 2 pi)."""
        angle = math.atan2(self.perp_product(other), self.dot(other))
        return gk.Angle.from_radians(angle).normalized()

    def almost_equals(
        self, other: Vector2D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        return gk.tolerance.almost_equals(
            self.u, other.u, decimal_precision
        ) and gk.tolerance.almost_equals(self.v, other.v, decimal_precision)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector2D):
            return NotImplemented
        return self.almost_equals(other)

    def __hash__(self) -> int:
        # Equality is tolerance based, so rounded coordinates cannot be hashed.
        return hash(Vector2D.__name__)

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        coordinates = gk.wkt.format_coordinates(self.coordinates, decimal_precision)
        return f"VECTOR ({coordinates})"


@dataclass(frozen=True, eq=False)
class UnitVector2D(Vector2D):
    """Vector of length one in the plane.

    Raises:
        DegenerateGeometryError: If the components do not have unit length at nine
            decimals.

    """

    def __post_init__(self) -> None:
        super().__post_init__()
        if not gk.tolerance.almost_equals(
            math.hypot(self.u, self.v), 1, gk.NINE_DECIMALS
        ):
            raise gk.DegenerateGeometryError(
                f"Components ({self.u}, {self.v}) do not form a unit vector"
            )

    def normalize(self) -> UnitVector2D:
        return self

    def negate(self) -> UnitVector2D:
        return UnitVector2D(-self.u, -self.v)

    def perp(self) -> UnitVector2D:
        return UnitVector2D(-self.v, self.u)


@dataclass(frozen=True)
class Vector3D:
    """Vector in space, with components ``x``, ``y`` and ``z``."""

    x: float
    y: float
    z: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vector3D:
        """Construct a vector from an array of ``shape=(3,)``."""
        arr = _check_shape(arr, 3)
        return cls(arr[0], arr[1], arr[2])

    def to_array(self) -> np.ndarray:
        """The components as an array of ``shape=(3,)``."""
        return np.array([self.x, self.y, self.z])

    @property
    def coordinates(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def length(self) -> float:
        return float(np.linalg.norm(self.to_array()))

    def is_zero(self, decimal_precision: int = gk.NINE_DECIMALS) -> bool:
        return gk.tolerance.is_zero(self.length(), decimal_precision)

    def normalize(self) -> UnitVector3D:
        """Scale the vector to unit length.

        Raises:
            DegenerateGeometryError: If the vector has zero length at nine decimals.

        """
        norm = self.length()
        if gk.tolerance.is_zero(norm, gk.NINE_DECIMALS):
            raise gk.DegenerateGeometryError("Cannot normalize a zero length vector")
        return UnitVector3D(self.x / norm, self.y / norm, self.z / norm)

    def add(self, other: Vector3D) -> Vector3D:
        return Vector3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def subtract(self, other: Vector3D) -> Vector3D:
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, factor: gk.number) -> Vector3D:
        return Vector3D(self.x * factor, self.y * factor, self.z * factor)

    def negate(self) -> Vector3D:
        return Vector3D(-self.x, -self.y, -self.z)

    def dot(self, other: Vector3D) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3D) -> Vector3D:
        return Vector3D.from_array(np.cross(self.to_array(), other.to_array()))

    def perp_on_plane(self, plane_normal: Vector3D) -> UnitVector3D:
        """Unit vector in the plane with the given normal, perpendicular to this one.

        Raises:
            DegenerateGeometryError: If the vector is parallel to the normal.

        """
        return plane_normal.cross(self).normalize()

    def is_parallel(
        self, other: Vector3D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        u = self.normalize()
        w = other.normalize()
        return u.almost_equals(w, decimal_precision) or u.almost_equals(
            w.negate(), decimal_precision
        )

    def is_perpendicular(
        self, other: Vector3D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        return gk.tolerance.is_zero(
            self.normalize().dot(other.normalize()), decimal_precision
        )

    def same_direction_as(
        self, other: Vector3D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        return self.is_parallel(other, decimal_precision) and self.dot(other) > 0

    def opposite_direction_as(
        self, other: Vector3D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        return self.is_parallel(other, decimal_precision) and self.dot(other) < 0

    def angle_to(self, other: Vector3D) -> gk.Angle:
        """Unsigned angle between two vectors, in [0, pi]."""
        cos = self.normalize().dot(other.normalize())
        return gk.Angle.from_radians(math.acos(np.clip(cos, -1.0, 1.0)))

    def almost_equals(
        self, other: Vector3D, decimal_precision: int = gk.THREE_DECIMALS
    ) -> bool:
        return all(
            gk.tolerance.almost_equals(a, b, decimal_precision)
            for a, b in zip(self.coordinates, other.coordinates)
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3D):
            return NotImplemented
        return self.almost_equals(other)

    def __hash__(self) -> int:
        # Equality is tolerance based, so rounded coordinates cannot be hashed.
        return hash(Vector3D.__name__)

    def to_wkt(self, decimal_precision: int = gk.THREE_DECIMALS) -> str:
        coordinates = gk.wkt.format_coordinates(self.coordinates, decimal_precision)
        return f"VECTOR ({coordinates})"


@dataclass(frozen=True, eq=False)
class UnitVector3D(Vector3D):
    """Vector of length one in space.

    Raises:
        DegenerateGeometryError: If the components do not have unit length at nine
            decimals.

    """

    def __post_init__(self) -> None:
        super().__post_init__()
        if not gk.tolerance.almost_equals(
            float(np.linalg.norm(self.to_array())), 1, gk.NINE_DECIMALS
        ):
            raise gk.DegenerateGeometryError(
                f"Components ({self.x}, {self.y}, {self.z}) do not form a unit vector"
            )

    def normalize(self) -> UnitVector3D:
        return self

    def negate(self) -> UnitVector3D:
        return UnitVector3D(-self.x, -self.y, -self.z)


Vector2D.ZERO = Vector2D(0.0, 0.0)
UnitVector2D.AXIS_U = UnitVector2D(1.0, 0.0)
UnitVector2D.AXIS_V = UnitVector2D(0.0, 1.0)

Vector3D.ZERO = Vector3D(0.0, 0.0, 0.0)
UnitVector3D.AXIS_X = UnitVector3D(1.0, 0.0, 0.0)
UnitVector3D.AXIS_Y = UnitVector3D(0.0, 1.0, 0.0)
UnitVector3D.AXIS_Z = UnitVector3D(0.0, 0.0, 1.0)
