import math

import pytest

from quadplay.geometry import Rect, Vec2


def test_length_of_3_4_vector():
    assert Vec2(3.0, 4.0).length() == pytest.approx(5.0)


def test_normalize_gives_unit_length_and_same_direction():
    v = Vec2(-7.0, 2.5)
    n = v.normalize()
    assert n.length() == pytest.approx(1.0)
    assert n.x * v.y - n.y * v.x == pytest.approx(0.0)
    assert n.x * v.x + n.y * v.y > 0


def test_normalize_zero_vector_raises():
    with pytest.raises(ValueError):
        Vec2(0.0, 0.0).normalize()


def test_vector_arithmetic_round_trip():
    a = Vec2(1.5, -2.0)
    b = Vec2(4.0, 0.25)
    assert (a + b) - b == a
    assert (a * 2.0) / 2.0 == a
    assert -(-a) == a
    assert tuple(a) == (1.5, -2.0)


def test_rect_overlaps_is_symmetric_and_counts_touching_edges():
    a = Rect(0.0, 0.0, 10.0, 10.0)
    touching = Rect(10.0, 0.0, 5.0, 5.0)
    apart = Rect(10.5, 0.0, 5.0, 5.0)
    assert a.overlaps(touching) and touching.overlaps(a)
    assert not a.overlaps(apart) and not apart.overlaps(a)


def test_rect_contains_excludes_right_and_bottom_edges():
    r = Rect(2.0, 3.0, 4.0, 5.0)
    assert r.contains(Vec2(2.0, 3.0))
    assert r.contains(Vec2(5.9, 7.9))
    assert not r.contains(Vec2(6.0, 4.0))
    assert not r.contains(Vec2(3.0, 8.0))
    assert not r.contains(Vec2(1.9, 4.0))


def test_rect_edges_follow_position_and_size():
    r = Rect(1.0, 2.0, 3.0, 4.0)
    assert (r.left, r.top) == (1.0, 2.0)
    assert math.isclose(r.right - r.left, 3.0)
    assert math.isclose(r.bottom - r.top, 4.0)