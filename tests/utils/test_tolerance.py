import pytest

import geomkernel as gk
from geomkernel.utils import tolerance


@pytest.mark.parametrize(
    "a, b, decimal_precision, expected",
    [
        (0.1 + 0.2, 0.3, 3, True),
        (1.0, 1.0004, 3, True),
        (1.0, 1.0006, 3, False),
        (1.0, 1.01, 2, False),
        (1.0, 1.0 + 1e-10, 9, True),
        (1.0, 1.0 + 1e-8, 9, False),
        (-2.5, -2.5, 0, True),
    ],
)
def test_almost_equals(a, b, decimal_precision, expected):
    assert tolerance.almost_equals(a, b, decimal_precision) == expected
    # The rule rounds the difference, so it is symmetric.
    assert tolerance.almost_equals(b, a, decimal_precision) == expected


def test_round_to_normalizes_negative_zero():
    value = tolerance.round_to(-0.0001)
    assert value == 0
    assert str(value) == "0.0"


@pytest.mark.parametrize(
    "value, expected", [(0.0004, 0), (-0.0004, 0), (0.002, 1), (-0.002, -1)]
)
def test_sign(value, expected):
    assert tolerance.sign(value) == expected


def test_compare():
    assert tolerance.compare(1.0, 2.0) == -1
    assert tolerance.compare(2.0, 1.0) == 1
    assert tolerance.compare(1.0, 1.0001) == 0


@pytest.mark.parametrize(
    "t, expected",
    [
        (0.0, True),
        (1.0, True),
        (0.5, True),
        (-0.0001, True),
        (1.01, False),
        (-0.2, False),
    ],
)
def test_in_unit_interval(t, expected):
    assert tolerance.in_unit_interval(t) == expected


def test_default_precision_constants():
    assert gk.THREE_DECIMALS == 3
    assert gk.NINE_DECIMALS == 9


# --------- Testing the text formatting ---------


def test_format_number_drops_sign_of_zero():
    assert gk.wkt.format_number(-0.0001) == "0.000"
    assert gk.wkt.format_number(2.5, 1) == "2.5"


def test_format_point_list_closes_rings():
    points = [gk.Point2D(0, 0), gk.Point2D(1, 0), gk.Point2D(0, 1)]
    text = gk.wkt.format_point_list(points, 1, close=True)
    assert text == "0.0 0.0, 1.0 0.0, 0.0 1.0, 0.0 0.0"
