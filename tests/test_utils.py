"""
Geometry helper tests
"""

import pytest

from game.asteroids import utils
from game.asteroids.utils import circle_overlap, clamp, distance, random_int, random_range, vec_len, wrap_position, seed_everything


class Dot:
    def __init__(self, x, y, radius=10.0):
        self.x = x
        self.y = y
        self.radius = radius


@pytest.mark.parametrize("start, expected", [
    ((-11, 50), (110, 50)),
    ((111, 50), (-10, 50)),
    ((50, -11), (50, 90)),
    ((50, 91), (50, -10)),
])
def test_wrap_teleports_to_opposite_edge(start, expected):
    d = Dot(*start)
    wrap_position(d, 100, 80)
    assert (d.x, d.y) == expected


def test_wrap_keeps_entities_inside_margin():
    d = Dot(-10, 90)  # exactly on the margin, not past it
    wrap_position(d, 100, 80)
    assert (d.x, d.y) == (-10, 90)


def test_wrap_without_radius_uses_zero_margin():
    class Point:
        x = -0.5
        y = 10.0

    p = Point()
    wrap_position(p, 100, 80)
    assert p.x == 100


def test_identical_circles_overlap():
    for r in (0.1, 1.0, 50.0):
        assert circle_overlap(3, 4, r, 3, 4, r)


def test_tangent_circles_do_not_overlap():
    assert not circle_overlap(0, 0, 10, 30, 0, 20)
    assert circle_overlap(0, 0, 10, 29.999, 0, 20)


def test_bullet_near_small_asteroid_overlaps():
    assert distance(100, 100, 105, 100) == 5
    assert circle_overlap(100, 100, 3, 105, 100, 14)


def test_random_range_bounds():
    seed_everything(0)
    for _ in range(500):
        v = random_range(-5, 5)
        assert -5 <= v < 5
        n = random_int(7, 12)
        assert 7 <= n <= 12


def test_vector_helpers():
    assert vec_len(3, 4) == 5
    assert clamp(1.5, -1, 1) == 1
    assert clamp(-2, -1, 1) == -1
    assert clamp(0.25, -1, 1) == 0.25
    assert not hasattr(utils, "normalize")
