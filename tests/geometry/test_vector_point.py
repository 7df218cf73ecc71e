import math

import numpy as np
import pytest

import geomkernel as gk

# --------- Testing vectors ---------


def test_vector_2d_length_and_normalize():
    v = gk.Vector2D(3, 4)
    assert v.length() == pytest.approx(5)
    unit = v.normalize()
    assert isinstance(unit, gk.UnitVector2D)
    assert unit.almost_equals(gk.Vector2D(0.6, 0.8), gk.NINE_DECIMALS)


@pytest.mark.parametrize(
    "vector", [gk.Vector2D(0, 0), gk.Vector2D(1e-11, 0), gk.Vector3D(0, 0, 0)]
)
def test_normalize_zero_vector_raises(vector):
    with pytest.raises(gk.DegenerateGeometryError):
        vector.normalize()


def test_unit_vector_rejects_non_unit_components():
    with pytest.raises(gk.DegenerateGeometryError):
        gk.UnitVector2D(1, 1)
    with pytest.raises(gk.DegenerateGeometryError):
        gk.UnitVector3D(0, 0, 2)
    # Unit length within nine decimals is accepted.
    gk.UnitVector2D(math.sqrt(0.5), math.sqrt(0.5))


def test_perp_and_perp_product():
    u = gk.Vector2D(1, 0)
    assert u.perp() == gk.Vector2D(0, 1)
    assert u.perp_product(gk.Vector2D(0, 2)) == pytest.approx(2)
    assert u.perp_product(gk.Vector2D(0, -2)) == pytest.approx(-2)
    assert u.perp_product(gk.Vector2D(5, 0)) == pytest.approx(0)


def test_directional_predicates_2d():
    v = gk.Vector2D(1, 1)
    assert v.is_parallel(gk.Vector2D(-2, -2))
    assert v.same_direction_as(gk.Vector2D(2, 2))
    assert not v.same_direction_as(gk.Vector2D(-2, -2))
    assert v.opposite_direction_as(gk.Vector2D(-2, -2))
    assert v.is_perpendicular(gk.Vector2D(-3, 3))
    assert not v.is_parallel(gk.Vector2D(1, 0))


def test_directional_predicates_do_not_depend_on_length():
    # A long vector slightly off an axis is parallel only if the angle is small.
    assert not gk.Vector2D(1000, 1).is_parallel(gk.Vector2D(1, 0))
    assert gk.Vector2D(1000, 0.1).is_parallel(gk.Vector2D(1, 0))


def test_angles_between_vectors():
    u = gk.Vector2D(1, 0)
    assert u.angle_to(gk.Vector2D(0, 1)).almost_equals(gk.Angle.RIGHT)
    assert u.angle_to(gk.Vector2D(-1, 0)).almost_equals(gk.Angle.STRAIGHT)
    assert u.signed_angle_to(gk.Vector2D(0, -1)).degrees == pytest.approx(270)
    assert u.signed_angle_to(gk.Vector2D(0, 1)).degrees == pytest.approx(90)


def test_vector_3d_cross_and_parallel():
    x, y, z = gk.UnitVector3D.AXIS_X, gk.UnitVector3D.AXIS_Y, gk.UnitVector3D.AXIS_Z
    assert x.cross(y) == z
    assert y.cross(x) == z.negate()
    assert gk.Vector3D(1, 2, 3).is_parallel(gk.Vector3D(-2, -4, -6))
    assert gk.Vector3D(1, 2, 3).opposite_direction_as(gk.Vector3D(-2, -4, -6))
    assert x.is_perpendicular(gk.Vector3D(0, 3, 4))
    assert x.perp_on_plane(z) == y


def test_vector_from_array_checks_shape():
    v = gk.Vector3D.from_array(np.array([1.0, 2.0, 3.0]))
    assert v.coordinates == (1.0, 2.0, 3.0)
    with pytest.raises(ValueError):
        gk.Vector3D.from_array(np.array([1.0, 2.0]))


def test_vector_wkt():
    assert gk.Vector2D(1, -0.00001).to_wkt() == "VECTOR (1.000 0.000)"


# --------- Testing points ---------


def test_point_arithmetic():
    p = gk.Point2D(1, 1).add(gk.Vector2D(0.5, -1))
    assert p == gk.Point2D(1.5, 0)
    displacement = gk.Point2D(3, 4).subtract(gk.Point2D(0, 0))
    assert isinstance(displacement, gk.Vector2D)
    assert displacement.length() == pytest.approx(5)
    moved = gk.Point2D(3, 4).subtract(gk.Vector2D(3, 4))
    assert isinstance(moved, gk.Point2D)
    assert moved == gk.Point2D.ORIGIN


def test_point_arithmetic_rounds_to_nine_decimals():
    p = gk.Point2D(0.1, 0).add(gk.Vector2D(0.2, 0))
    assert p.u == 0.3
    q = gk.Point3D(0, 0, 0.1).add(gk.Vector3D(0, 0, 0.2))
    assert q.z == 0.3


def test_point_equality_is_tolerance_based():
    assert gk.Point2D(1, 1) == gk.Point2D(1.0004, 0.9996)
    assert gk.Point2D(1, 1) != gk.Point2D(1.002, 1)
    assert gk.Point3D(1, 2, 3).almost_equals(gk.Point3D(1, 2, 3.002), 2)
    assert not gk.Point3D(1, 2, 3).almost_equals(gk.Point3D(1, 2, 3.002))
    assert hash(gk.Point2D(1, 1)) == hash(gk.Point2D(1.0001, 1))


@pytest.mark.parametrize(
    "a, b",
    [
        (gk.Point2D(0.0004, 0), gk.Point2D(0.0006, 0)),
        (gk.Point3D(0, 0, 0.0004), gk.Point3D(0, 0, 0.0006)),
        (gk.Vector2D(1.0004, 0), gk.Vector2D(1.0006, 0)),
        (gk.Vector3D(0, 1.0004, 0), gk.Vector3D(0, 1.0006, 0)),
        (gk.UnitVector2D.AXIS_U, gk.Vector2D(1.0004, 0)),
        (gk.Angle.from_radians(0.0004), gk.Angle.from_radians(0.0006)),
    ],
)
def test_equal_values_share_a_hash(a, b):
    # Equal at three decimals, although most pairs round to different values.
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_point_distance():
    assert gk.Point3D(1, 2, 3).distance_to(gk.Point3D(1, 2, 5)) == pytest.approx(2)
    assert gk.Point2D(0, 0).distance_to(gk.Point2D(3, 4)) == pytest.approx(5)


def test_points_are_collinear():
    p = gk.Point3D(0, 0, 0)
    assert p.are_collinear(gk.Point3D(1, 1, 1), gk.Point3D(3, 3, 3))
    assert not p.are_collinear(gk.Point3D(1, 0, 0), gk.Point3D(0, 1, 0))
    # Coincident points are collinear with anything.
    assert p.are_collinear(p, gk.Point3D(0, 1, 0))


def test_point_wkt():
    assert gk.Point2D(1.5, 0).to_wkt() == "POINT (1.500 0.000)"
    assert gk.Point3D(1, 2, 3).to_wkt(1) == "POINT (1.0 2.0 3.0)"
    assert str(gk.Point2D(1, 2)) == "POINT (1.000 2.000)"


def test_point_from_array_checks_shape():
    assert gk.Point2D.from_array([1, 2]) == gk.Point2D(1, 2)
    with pytest.raises(ValueError):
        gk.Point3D.from_array([1, 2])


# --------- Testing angles ---------


def test_angle_conversion():
    assert gk.Angle.from_degrees(180).almost_equals(gk.Angle.from_radians(math.pi))
    assert gk.Angle.from_radians(math.pi / 2).degrees == pytest.approx(90)


def test_angle_arithmetic():
    right = gk.Angle.RIGHT
    assert right.add(right) == gk.Angle.STRAIGHT
    assert gk.Angle.STRAIGHT.subtract(right) == right
    assert right.scale(2) == gk.Angle.STRAIGHT
    assert gk.Angle.STRAIGHT.divide(2) == right
    assert right.negate().radians == pytest.approx(-math.pi / 2)


def test_angle_division_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        gk.Angle.RIGHT.divide(0.0001)


def test_angle_ordering():
    assert gk.Angle.RIGHT < gk.Angle.STRAIGHT
    assert gk.Angle.STRAIGHT >= gk.Angle.RIGHT
    assert not gk.Angle.RIGHT < gk.Angle.from_radians(math.pi / 2 + 1e-12)


@pytest.mark.parametrize(
    "radians, expected",
    [
        (-math.pi / 2, 3 * math.pi / 2),
        (5 * math.pi, math.pi),
        (2 * math.pi, 0.0),
        (2 * math.pi - 1e-12, 0.0),
    ],
)
def test_angle_normalized(radians, expected):
    assert gk.Angle.from_radians(radians).normalized().radians == pytest.approx(
        expected
    )
