import math

import pytest

from annolabel.geometry import (
    IntersectionType,
    deg2rad,
    intersection,
    rad2deg,
    wrap_angle,
)


def test_deg2rad_half_turn():
    assert deg2rad(180) == pytest.approx(math.pi)


def test_rad2deg_half_turn():
    assert rad2deg(math.pi) == pytest.approx(180.0)


@pytest.mark.parametrize("deg", [-720.0, -90.0, 0.0, 12.5, 360.0, 1234.0])
def test_degree_round_trip(deg):
    assert rad2deg(deg2rad(deg)) == pytest.approx(deg)


@pytest.mark.parametrize("angle", [0.0, 1.0, -1.0, 3.0, -3.0])
def test_wrap_angle_keeps_values_in_range(angle):
    assert wrap_angle(angle) == angle


@pytest.mark.parametrize("angle", [7.0, -7.0, 100.0, -100.0, 3 * math.pi + 0.1])
def test_wrap_angle_result_in_range_and_equivalent(angle):
    wrapped = wrap_angle(angle)
    assert -math.pi <= wrapped <= math.pi
    turns = (angle - wrapped) / (2 * math.pi)
    assert turns == pytest.approx(round(turns))


def test_wrap_angle_pi_stays_pi():
    assert wrap_angle(math.pi) == math.pi


def test_bounded_intersection_of_diagonals():
    kind, point = intersection(((0, 0), (2, 2)), ((0, 2), (2, 0)))
    assert kind is IntersectionType.BOUNDED
    assert point == pytest.approx((1.0, 1.0))


def test_parallel_lines_do_not_intersect():
    kind, point = intersection(((0, 0), (1, 0)), ((0, 1), (1, 1)))
    assert kind is IntersectionType.NO_INTERSECTION
    assert point is None


def test_unbounded_intersection_point_lies_on_both_lines():
    a = ((0.0, 0.0), (1.0, 0.0))
    b = ((5.0, -1.0), (5.0, 1.0))
    kind, point = intersection(a, b)
    assert kind is IntersectionType.UNBOUNDED
    assert point[1] == pytest.approx(a[0][1])
    assert point[0] == pytest.approx(b[0][0])


def test_unbounded_when_only_second_segment_misses():
    a = ((0.0, 0.0), (10.0, 0.0))
    b = ((5.0, 1.0), (5.0, 2.0))
    kind, point = intersection(a, b)
    assert kind is IntersectionType.UNBOUNDED
    assert point[0] == pytest.approx(b[0][0])


def test_intersection_is_symmetric_in_kind():
    a = ((0.0, 0.0), (4.0, 3.0))
    b = ((0.0, 3.0), (4.0, 0.0))
    kind_ab, point_ab = intersection(a, b)
    kind_ba, point_ba = intersection(b, a)
    assert kind_ab is kind_ba is IntersectionType.BOUNDED
    assert point_ab == pytest.approx(point_ba)