import math

import numpy as np
import pytest

import geomkernel as gk


@pytest.fixture
def tilted_plane():
    return gk.Plane.from_point_and_normal(gk.Point3D(1, 2, 3), gk.Vector3D(1, 1, 1))


def _assert_orthonormal(plane):
    assert plane.axis_u.length() == pytest.approx(1)
    assert plane.axis_v.length() == pytest.approx(1)
    assert plane.axis_u.dot(plane.axis_v) == pytest.approx(0, abs=1e-9)
    assert plane.axis_u.cross(plane.axis_v).almost_equals(plane.normal, 9)


# --------- Testing construction ---------


def test_from_points():
    plane = gk.Plane.from_points(
        gk.Point3D(0, 0, 0), gk.Point3D(1, 0, 0), gk.Point3D(0, 1, 0)
    )
    assert plane.normal == gk.UnitVector3D.AXIS_Z
    assert plane.axis_u == gk.UnitVector3D.AXIS_X
    assert plane.axis_v == gk.UnitVector3D.AXIS_Y
    _assert_orthonormal(plane)


def test_from_collinear_points_raises():
    points = [gk.Point3D(0, 0, 0), gk.Point3D(1, 1, 1), gk.Point3D(2, 2, 2)]
    with pytest.raises(gk.DegenerateGeometryError):
        gk.Plane.from_points(*points)
    assert gk.Plane.try_from_points(*points) is None


@pytest.mark.parametrize(
    "normal", [gk.Vector3D(1, 1, 1), gk.Vector3D(0, 0, 2), gk.Vector3D(-3, 1, 0.5)]
)
def test_from_point_and_normal(normal):
    plane = gk.Plane.from_point_and_normal(gk.Point3D(1, 2, 3), normal)
    _assert_orthonormal(plane)
    assert plane.normal.same_direction_as(normal)
    assert plane.contains(gk.Point3D(1, 2, 3))


def test_from_point_and_line():
    line = gk.Line3D.from_points(gk.Point3D(0, 0, 0), gk.Point3D(1, 0, 0))
    plane = gk.Plane.from_point_and_line(gk.Point3D(0, 0, 1), line)
    assert plane.normal.is_parallel(gk.UnitVector3D.AXIS_Y)
    assert plane.contains(line)
    with pytest.raises(gk.DegenerateGeometryError):
        gk.Plane.from_point_and_line(gk.Point3D(3, 0, 0), line)


def test_from_two_lines():
    x_axis = gk.Line3D(gk.Point3D(0, 0, 0), gk.UnitVector3D.AXIS_X)
    y_axis = gk.Line3D(gk.Point3D(0, 0, 0), gk.UnitVector3D.AXIS_Y)
    plane = gk.Plane.from_two_lines(x_axis, y_axis)
    assert plane.normal.is_parallel(gk.UnitVector3D.AXIS_Z)
    assert plane.contains(gk.Point3D(3, 4, 0))

    skew = gk.Line3D(gk.Point3D(0, 0, 1), gk.UnitVector3D.AXIS_Y)
    with pytest.raises(gk.DegenerateGeometryError):
        gk.Plane.from_two_lines(x_axis, skew)
    with pytest.raises(gk.DegenerateGeometryError):
        gk.Plane.from_two_lines(x_axis, x_axis)


def test_invalid_basis_raises():
    with pytest.raises(gk.DegenerateGeometryError):
        gk.Plane(
            gk.Point3D.ORIGIN,
            gk.UnitVector3D.AXIS_X,
            gk.UnitVector3D.AXIS_X,
            gk.UnitVector3D.AXIS_Z,
        )
    with pytest.raises(gk.DegenerateGeometryError):
        gk.Plane(
            gk.Point3D.ORIGIN,
            gk.UnitVector3D.AXIS_X,
            gk.UnitVector3D.AXIS_Y,
            gk.UnitVector3D.AXIS_Z.negate(),
        )


# --------- Testing distances and projections ---------


def test_signed_distance():
    assert gk.Plane.XY.signed_distance(gk.Point3D(4, 5, 2)) == pytest.approx(2)
    assert gk.Plane.XY.signed_distance(gk.Point3D(4, 5, -2)) == pytest.approx(-2)
    assert gk.Plane.YZ.distance(gk.Point3D(-3, 1, 1)) == pytest.approx(3)


def test_project_onto():
    plane = gk.Plane.XY
    assert plane.project_onto(gk.Point3D(1, 2, 5)) == gk.Point3D(1, 2, 0)
    along = plane.project_onto(gk.Point3D(1, 2, 5), gk.Vector3D(1, 0, 1))
    assert along == gk.Point3D(-4, 2, 0)
    with pytest.raises(ValueError):
        plane.project_onto(gk.Point3D(1, 2, 5), gk.Vector3D(1, 1, 0))


def test_vertical_project_onto():
    plane = gk.Plane.from_point_and_normal(gk.Point3D.ORIGIN, gk.Vector3D(0, -1, 1))
    projected = plane.vertical_project_onto(gk.Point3D(0, 1, 0))
    assert projected == gk.Point3D(0, 1, 1)
    assert plane.contains(projected)


def test_project_into_and_evaluate_are_inverse(tilted_plane):
    rng = np.random.default_rng(3)
    for u, v in rng.uniform(-10, 10, size=(20, 2)):
        point = gk.Point2D(u, v)
        lifted = tilted_plane.evaluate(point)
        assert tilted_plane.contains(lifted)
        assert tilted_plane.project_into(lifted) == point


def test_project_into_drops_the_normal_component(tilted_plane):
    on_plane = tilted_plane.evaluate(gk.Point2D(2, -1))
    off_plane = on_plane.add(tilted_plane.normal.scale(4))
    assert tilted_plane.project_into(off_plane) == gk.Point2D(2, -1)
    assert tilted_plane.evaluate(
        tilted_plane.project_into(off_plane)
    ) == tilted_plane.project_onto(off_plane)


def test_project_into_shapes():
    triangle = gk.Triangle3D(
        gk.Point3D(0, 0, 7), gk.Point3D(2, 0, 7), gk.Point3D(0, 3, 7)
    )
    projected = gk.Plane.XY.project_into(triangle)
    assert isinstance(projected, gk.Triangle2D)
    assert projected.area() == pytest.approx(3)

    line = gk.Line3D(gk.Point3D(1, 1, 1), gk.Vector3D(1, 0, 1))
    projected_line = gk.Plane.XY.project_into(line)
    assert isinstance(projected_line, gk.Line2D)
    assert projected_line.direction == gk.Vector2D(1, 0)


def test_project_into_perpendicular_line_raises():
    line = gk.Line3D(gk.Point3D(1, 1, 1), gk.UnitVector3D.AXIS_Z)
    with pytest.raises(gk.DegenerateGeometryError):
        gk.Plane.XY.project_into(line)


def test_lift(tilted_plane):
    res = gk.IntersectionResult.of(gk.Point2D(1, 2))
    lifted = tilted_plane.lift(res)
    assert isinstance(lifted, gk.IntersectionResult)
    assert lifted.expect(gk.ResultKind.POINT) == tilted_plane.evaluate(
        gk.Point2D(1, 2)
    )
    assert tilted_plane.lift(gk.IntersectionResult.none()).is_none()

    segment = gk.LineSegment2D(gk.Point2D(0, 0), gk.Point2D(1, 0))
    lifted_segment = tilted_plane.lift(segment)
    assert isinstance(lifted_segment, gk.LineSegment3D)
    assert lifted_segment.length() == pytest.approx(1)

    line = gk.Plane.XY.lift(gk.Line2D(gk.Point2D(0, 1), gk.Vector2D(1, 0)))
    assert line == gk.Line3D(gk.Point3D(0, 1, 0), gk.UnitVector3D.AXIS_X)


def test_lift_rejects_unknown_geometries(tilted_plane):
    with pytest.raises(TypeError):
        tilted_plane.lift(gk.Point3D(0, 0, 0))


# --------- Testing predicates ---------


def test_contains():
    plane = gk.Plane.XY
    assert plane.contains(gk.Point3D(3, -2, 0.0004))
    assert not plane.contains(gk.Point3D(3, -2, 0.01))
    assert plane.contains(gk.Line3D(gk.Point3D(1, 1, 0), gk.Vector3D(1, 2, 0)))
    assert not plane.contains(gk.Line3D(gk.Point3D(1, 1, 0), gk.Vector3D(1, 2, 1)))
    assert plane.contains(gk.LineSegment3D(gk.Point3D(0, 0, 0), gk.Point3D(1, 5, 0)))
    with pytest.raises(TypeError):
        plane.contains(gk.Point2D(0, 0))


def test_parallel_and_perpendicular():
    plane = gk.Plane.XY
    assert plane.is_parallel(gk.Vector3D(1, 1, 0))
    assert plane.is_perpendicular(gk.Vector3D(0, 0, -3))
    ray = gk.Ray3D(gk.Point3D(0, 0, 5), gk.Vector3D(1, 0, 0))
    assert plane.is_parallel(ray)
    assert not plane.is_perpendicular(ray)


def test_almost_equals():
    flipped = gk.Plane.from_point_and_normal(gk.Point3D(5, 5, 0), gk.Vector3D(0, 0, -1))
    assert gk.Plane.XY == flipped
    shifted = gk.Plane.from_point_and_normal(gk.Point3D(0, 0, 1), gk.Vector3D(0, 0, 1))
    assert gk.Plane.XY != shifted
    assert gk.Plane.XY != gk.Plane.YZ


def test_perp_is_in_plane():
    plane = gk.Plane.from_point_and_normal(gk.Point3D.ORIGIN, gk.Vector3D(0, 0, 1))
    perp = plane.perp(gk.Vector3D(1, 0, 0))
    assert perp == gk.Vector3D(0, 1, 0)
    assert math.isclose(perp.dot(plane.normal), 0, abs_tol=1e-12)
