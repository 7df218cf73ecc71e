import numpy as np
import pytest

import geomkernel as gk


def _points(coords):
    return [gk.Point2D(u, v) for u, v in coords]


@pytest.fixture
def unit_square():
    return gk.Polygon2D(_points([(0, 0), (1, 0), (1, 1), (0, 1)]))


@pytest.fixture
def l_shape():
    return gk.Polygon2D(_points([(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)]))


@pytest.fixture
def triangle():
    return gk.Triangle2D(gk.Point2D(0, 0), gk.Point2D(4, 0), gk.Point2D(0, 4))


# --------- Testing triangles ---------


@pytest.mark.parametrize(
    "coords",
    [
        [(0, 0), (1, 0), (2, 0)],
        [(0, 0), (0, 0), (1, 1)],
        [(0, 0), (1, 1), (0.0001, 0.0002)],
    ],
)
def test_degenerate_triangle_raises(coords):
    with pytest.raises(gk.DegenerateGeometryError):
        gk.Triangle2D(*_points(coords))


def test_triangle_orientation_and_area(triangle):
    assert triangle.orientation == gk.Orientation.COUNTER_CLOCKWISE
    assert triangle.area() == pytest.approx(8)
    clockwise = gk.Triangle2D(gk.Point2D(0, 0), gk.Point2D(0, 4), gk.Point2D(4, 0))
    assert clockwise.orientation == gk.Orientation.CLOCKWISE
    assert clockwise.area() == pytest.approx(-8)


@pytest.mark.parametrize("clockwise", [False, True])
def test_triangle_contains(clockwise):
    vertices = _points([(0, 0), (4, 0), (0, 4)])
    if clockwise:
        vertices = vertices[::-1]
    triangle = gk.Triangle2D(*vertices)
    assert triangle.contains(gk.Point2D(1, 1))
    assert triangle.contains(gk.Point2D(2, 2))
    assert triangle.contains(gk.Point2D(0, 0))
    assert not triangle.contains(gk.Point2D(3, 3))
    assert not triangle.contains(gk.Point2D(-1, 1))


def test_triangle_equality(triangle):
    rotated = gk.Triangle2D(triangle.p1, triangle.p2, triangle.p0)
    assert triangle == rotated
    reversed_triangle = gk.Triangle2D(triangle.p2, triangle.p1, triangle.p0)
    assert triangle != reversed_triangle


def test_triangle_center_and_box(triangle):
    assert triangle.center_of_mass() == gk.Point2D(4 / 3, 4 / 3)
    lower, upper = triangle.bounding_box()
    assert lower == gk.Point2D(0, 0)
    assert upper == gk.Point2D(4, 4)


def test_triangle_wkt():
    triangle = gk.Triangle2D(*_points([(0, 0), (1, 0), (0, 1)]))
    assert triangle.to_wkt(1) == "POLYGON ((0.0 0.0, 1.0 0.0, 0.0 1.0, 0.0 0.0))"


# --------- Testing polygons ---------


def test_polygon_contains_unit_square(unit_square):
    assert unit_square.contains(gk.Point2D(0.5, 0.5))
    assert not unit_square.contains(gk.Point2D(2, 2))
    # Points on the border are inside.
    assert unit_square.contains(gk.Point2D(1, 0.5))
    assert unit_square.contains(gk.Point2D(0, 0))
    assert not unit_square.contains(gk.Point2D(1.01, 0.5))


def test_polygon_contains_non_convex(l_shape):
    assert l_shape.contains(gk.Point2D(0.5, 1.5))
    assert l_shape.contains(gk.Point2D(1.5, 0.5))
    assert l_shape.contains(gk.Point2D(1.5, 1))
    assert not l_shape.contains(gk.Point2D(1.5, 1.5))


def test_polygon_is_stored_counter_clockwise():
    polygon = gk.Polygon2D(_points([(0, 0), (0, 1), (1, 1), (1, 0)]))
    assert polygon.vertices == tuple(_points([(0, 0), (1, 0), (1, 1), (0, 1)]))
    assert polygon.area() == pytest.approx(1)


def test_polygon_vertex_reduction():
    polygon = gk.Polygon2D(
        _points([(0, 0), (1, 0), (2, 0), (2, 2), (2, 2), (0, 2), (0, 0)])
    )
    assert len(polygon.vertices) == 4
    with pytest.raises(gk.DegenerateGeometryError):
        gk.Polygon2D(_points([(0, 0), (1, 0), (2, 0)]))


def test_polygon_area_and_centroid(l_shape):
    assert l_shape.area() == pytest.approx(3)
    center = l_shape.center_of_mass()
    # Composite of a 2x1 and a 1x1 rectangle.
    assert center == gk.Point2D(5 / 6, 5 / 6)


def test_small_polygon_area():
    rectangle = gk.Polygon2D(_points([(0, 0), (0.04, 0), (0.04, 0.01), (0, 0.01)]))
    assert rectangle.area() == pytest.approx(0.0004)
    assert rectangle.center_of_mass() == gk.Point2D(0.02, 0.005)


def test_polygon_is_convex(unit_square, l_shape):
    assert unit_square.is_convex()
    assert not l_shape.is_convex()


def test_polygon_equality_ignores_start_vertex(unit_square):
    shifted = gk.Polygon2D(_points([(1, 1), (0, 1), (0, 0), (1, 0)]))
    assert unit_square == shifted
    assert unit_square != gk.Polygon2D(_points([(0, 0), (2, 0), (2, 2), (0, 2)]))


def test_polygon_from_array():
    arr = np.array([[0, 3, 3, 0], [0, 0, 1, 1]])
    polygon = gk.Polygon2D.from_array(arr)
    assert polygon.area() == pytest.approx(3)
    assert np.allclose(polygon.to_array(), arr)
    with pytest.raises(ValueError):
        gk.Polygon2D.from_array(np.zeros((3, 4)))


def test_polygon_triangulate(unit_square, triangle):
    assert triangle.to_polygon().triangulate() == [triangle]
    with pytest.raises(NotImplementedError):
        unit_square.triangulate()


def test_polygon_hull_factories():
    points = _points([(0, 0), (2, 0), (1, 0.5), (2, 2), (0, 2), (1, 1)])
    hull = gk.Polygon2D.convex_hull(points)
    assert hull == gk.Polygon2D(_points([(0, 0), (2, 0), (2, 2), (0, 2)]))
    with pytest.raises(gk.DegenerateGeometryError):
        gk.Polygon2D.convex_hull(_points([(0, 0), (1, 1), (2, 2)]))

    star = gk.Polygon2D.concave_hull(_points([(0, 0), (4, 0), (2, 1), (2, 4)]))
    assert len(star.vertices) == 4
    assert not star.is_convex()


def test_polygonize_two_triangles(unit_square):
    lower = gk.Triangle2D(*_points([(0, 0), (1, 0), (1, 1)]))
    upper = gk.Triangle2D(*_points([(0, 0), (1, 1), (0, 1)]))
    assert gk.Polygon2D.polygonize([lower, upper]) == [unit_square]


def test_polygonize_non_convex(l_shape):
    triangles = [
        # Clockwise triangles are reoriented.
        gk.Triangle2D(*_points([(0, 0), (1, 1), (1, 0)])),
        gk.Triangle2D(*_points([(0, 0), (1, 1), (0, 1)])),
        gk.Triangle2D(*_points([(1, 0), (2, 0), (2, 1)])),
        gk.Triangle2D(*_points([(1, 0), (2, 1), (1, 1)])),
        gk.Triangle2D(*_points([(0, 1), (1, 1), (1, 2)])),
        gk.Triangle2D(*_points([(0, 1), (1, 2), (0, 2)])),
    ]
    polygons = gk.Polygon2D.polygonize(triangles)
    assert polygons == [l_shape]
    assert polygons[0].area() == pytest.approx(3)


def test_polygonize_separate_groups():
    left = gk.Triangle2D(*_points([(0, 0), (1, 0), (1, 1)]))
    # Touches the first triangle at a vertex only.
    corner = gk.Triangle2D(*_points([(1, 1), (2, 1), (2, 2)]))
    far = gk.Triangle2D(*_points([(5, 5), (6, 5), (5, 6)]))
    polygons = gk.Polygon2D.polygonize([left, corner, far])
    assert len(polygons) == 3
    for triangle in (left, corner, far):
        assert triangle.to_polygon() in polygons
    assert gk.Polygon2D.polygonize([]) == []


def test_polygon_wkt(unit_square):
    assert unit_square.to_wkt(0) == "POLYGON ((0 0, 1 0, 1 1, 0 1, 0 0))"
