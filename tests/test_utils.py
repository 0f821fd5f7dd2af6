import random

import pytest

from invaders.utils import Rect, bounds, clamp, lerp, overlaps, random_float, random_int


def test_overlapping_rects():
    assert overlaps(Rect(0, 0, 10, 10), Rect(5, 5, 10, 10))
    assert overlaps(Rect(5, 5, 10, 10), Rect(0, 0, 10, 10))


def test_contained_rect_overlaps():
    assert overlaps(Rect(0, 0, 100, 100), Rect(40, 40, 4, 12))


def test_touching_edges_do_not_overlap():
    assert not overlaps(Rect(0, 0, 10, 10), Rect(10, 0, 10, 10))
    assert not overlaps(Rect(0, 0, 10, 10), Rect(0, 10, 10, 10))


def test_separated_rects():
    assert not overlaps(Rect(0, 0, 10, 10), Rect(50, 50, 10, 10))
    # overlapping on x only
    assert not overlaps(Rect(0, 0, 10, 10), Rect(5, 20, 10, 10))


def test_rect_properties():
    r = Rect(10, 20, 40, 8)
    assert r.right == 50
    assert r.bottom == 28
    assert r.centerx == 30


def test_bounds():
    assert bounds([]) is None
    b = bounds([Rect(10, 10, 5, 5), Rect(0, 30, 5, 5)])
    assert b == Rect(0, 10, 15, 25)


def test_clamp():
    assert clamp(5, 0, 10) == 5
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10


def test_lerp():
    assert lerp(0, 10, 0) == 0
    assert lerp(0, 10, 1) == 10
    assert lerp(2, 4, 0.5) == 3


def test_random_int_is_inclusive(rng):
    draws = {random_int(1, 3, rng) for _ in range(300)}
    assert draws == {1, 2, 3}


def test_random_float_is_half_open(rng):
    for _ in range(300):
        v = random_float(2.0, 3.0, rng)
        assert 2.0 <= v < 3.0


def test_seeded_draws_repeat():
    a, b = random.Random(99), random.Random(99)
    assert [random_int(0, 100, a) for _ in range(20)] == [random_int(0, 100, b) for _ in range(20)]


@pytest.mark.parametrize("lo,hi", [(0, 0), (5, 5)])
def test_random_int_degenerate_range(lo, hi, rng):
    assert random_int(lo, hi, rng) == lo
