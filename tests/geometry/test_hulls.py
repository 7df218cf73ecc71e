"""Tests of the hull algorithms and the best-fit plane.

The convex hull in 2d is checked against scipy.spatial.ConvexHull.
"""
import numpy as np
import pytest
import scipy.spatial

import geomkernel as gk


def _points(coords):
    return [gk.Point2D(u, v) for u, v in coords]


def _key(point):
    return tuple(gk.tolerance.round_to(c) for c in point.coordinates)


@pytest.fixture
def cloud():
    rng = np.random.default_rng(42)
    return [gk.Point2D(u, v) for u, v in rng.uniform(0, 10, size=(40, 2))]


# --------- Testing the turn predicate ---------


def test_is_left_turn():
    a, b = gk.Point2D(0, 0), gk.Point2D(1, 0)
    assert gk.hulls.is_left_turn(a, b, gk.Point2D(2, 1))
    assert not gk.hulls.is_left_turn(a, b, gk.Point2D(2, -1))
    assert not gk.hulls.is_left_turn(a, b, gk.Point2D(2, 0))
    # The side is a distance, so a short base does not hide the turn.
    assert gk.hulls.is_left_turn(a, gk.Point2D(0.01, 0), gk.Point2D(5, 0.01))


# --------- Testing the 2d convex hull ---------


def test_convex_hull_of_square_with_inner_points():
    points = _points(
        [(0.5, 0.5), (1, 1), (0, 0), (0.5, 0), (1, 0), (0, 1), (0, 0.5), (0, 0)]
    )
    hull = gk.hulls.convex_hull_2d(points)
    assert hull == _points([(0, 0), (1, 0), (1, 1), (0, 1)])


def test_convex_hull_matches_scipy(cloud):
    hull = gk.hulls.convex_hull_2d(cloud)
    arr = gk.point_lists.to_array(cloud).T
    reference = scipy.spatial.ConvexHull(arr)
    expected = {_key(gk.Point2D(*arr[i])) for i in reference.vertices}
    assert {_key(p) for p in hull} == expected
    assert gk.Polygon2D(hull).area() == pytest.approx(reference.volume, rel=1e-6)


def test_convex_hull_properties(cloud):
    hull = gk.Polygon2D(gk.hulls.convex_hull_2d(cloud))
    assert hull.is_convex()
    assert all(hull.contains(p) for p in cloud)
    # The hull vertices are input points.
    assert all(any(v == p for p in cloud) for v in hull.vertices)
    # The hull of the hull is the hull.
    assert gk.hulls.convex_hull_2d(list(hull.vertices)) == list(hull.vertices)


def test_convex_hull_is_counter_clockwise(cloud):
    hull = gk.hulls.convex_hull_2d(cloud)
    lowest = min(cloud, key=lambda p: (p.u, p.v))
    assert hull[0] == lowest
    n = len(hull)
    for i in range(n):
        edge = gk.LineSegment2D(hull[i], hull[(i + 1) % n])
        assert edge.location(hull[(i + 2) % n]) == gk.Location.LEFT


@pytest.mark.parametrize(
    "coords, expected",
    [
        ([], []),
        ([(1, 1), (1, 1.0001)], [(1, 1)]),
        ([(0, 0), (2, 2), (1, 1), (3, 3)], [(0, 0), (3, 3)]),
    ],
)
def test_convex_hull_of_degenerate_clouds(coords, expected):
    assert gk.hulls.convex_hull_2d(_points(coords)) == _points(expected)


def test_concave_hull_keeps_all_points():
    points = _points([(0, 0), (4, 0), (2, 1), (2, 4), (4, 0)])
    ring = gk.hulls.concave_hull_2d(points)
    assert len(ring) == 4
    assert ring == _points([(2, 4), (0, 0), (2, 1), (4, 0)])


# --------- Testing 3d hulls and the best-fit plane ---------


def test_approx_plane_of_tilted_points():
    points = [
        gk.Point3D(0, 0, 0),
        gk.Point3D(1, 0, 1),
        gk.Point3D(1, 1, 1),
        gk.Point3D(0, 1, 0),
    ]
    plane = gk.hulls.approx_plane(points)
    assert plane.normal == gk.Vector3D(-1, 0, 1).normalize()
    assert all(plane.contains(p) for p in points)


def test_approx_plane_points_up():
    # Clockwise seen from above, the triple normals point down.
    points = [
        gk.Point3D(0, 0, 1),
        gk.Point3D(0, 1, 1),
        gk.Point3D(1, 1, 1),
        gk.Point3D(1, 0, 1),
    ]
    plane = gk.hulls.approx_plane(points)
    assert plane.normal == gk.UnitVector3D.AXIS_Z
    assert plane.origin == gk.Point3D(0.5, 0.5, 1)


def test_approx_plane_averages_noise():
    rng = np.random.default_rng(0)
    xy = rng.uniform(-1, 1, size=(50, 2))
    noise = rng.uniform(-1e-7, 1e-7, size=50)
    points = [gk.Point3D(x, y, 2 + z) for (x, y), z in zip(xy, noise)]
    plane = gk.hulls.approx_plane(points)
    assert plane.normal.is_parallel(gk.UnitVector3D.AXIS_Z)
    assert plane.contains(gk.Point3D(0, 0, 2))


def test_approx_plane_of_collinear_points_raises():
    points = [gk.Point3D(i, 2 * i, 3 * i) for i in range(5)]
    with pytest.raises(gk.DegenerateGeometryError):
        gk.hulls.approx_plane(points)


def test_convex_hull_3d():
    plane = gk.Plane.from_point_and_normal(gk.Point3D(1, 1, 1), gk.Vector3D(1, 2, 3))
    corners = _points([(0, 0), (3, 0), (3, 2), (0, 2)])
    inner = _points([(1, 1), (2, 0.5), (1.5, 0)])
    points = plane.evaluate_points(corners + inner)
    hull = gk.hulls.convex_hull_3d(points)
    assert len(hull) == 4
    assert gk.point_lists.same_point_set(hull, points[:4], gk.THREE_DECIMALS)
    assert all(plane.contains(p) for p in hull)


def test_concave_hull_3d():
    points = [gk.Point3D(u, v, 5) for u, v in [(0, 0), (4, 0), (2, 1), (2, 4)]]
    ring = gk.hulls.concave_hull_3d(points)
    assert len(ring) == 4
    polygon = gk.Polygon3D(ring)
    assert polygon.area() == pytest.approx(6)


@pytest.mark.skipped  # Slow: many large random clouds.
@pytest.mark.parametrize("seed", range(20))
def test_convex_hull_matches_scipy_on_large_clouds(seed):
    rng = np.random.default_rng(seed)
    arr = rng.normal(0, 100, size=(2000, 2))
    hull = gk.hulls.convex_hull_2d([gk.Point2D(u, v) for u, v in arr])
    reference = scipy.spatial.ConvexHull(arr)
    assert gk.Polygon2D(hull).area() == pytest.approx(reference.volume, rel=1e-6)
