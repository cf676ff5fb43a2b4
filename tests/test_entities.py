"""
Ship, bullet and asteroid kinematics
"""

import math

import pytest

from game.asteroids.controls import Key, KeyState
from game.asteroids.entities import (
    BULLET_LIFETIME,
    INVULNERABLE_TIME,
    MAX_SPEED,
    ROTATION_SPEED,
    SIZE_TABLE,
    Asteroid,
    AsteroidSize,
    Bullet,
    Ship,
    make_asteroid,
    spawn_asteroid,
)
from game.asteroids.utils import seed_everything

W, H = 800, 600


def held(*keys):
    ks = KeyState()
    for k in keys:
        ks.press(k)
    return ks


def test_size_table():
    assert AsteroidSize.LARGE.spec.score == 20
    assert AsteroidSize.MEDIUM.spec.score == 50
    assert AsteroidSize.SMALL.spec.score == 100
    assert AsteroidSize.LARGE.child is AsteroidSize.MEDIUM
    assert AsteroidSize.MEDIUM.child is AsteroidSize.SMALL
    assert AsteroidSize.SMALL.child is None


def test_size_table_links_members_directly():
    for size, cfg in SIZE_TABLE.items():
        assert isinstance(size, AsteroidSize)
        assert cfg.child is None or isinstance(cfg.child, AsteroidSize)
        assert size.child is cfg.child


def test_unknown_size_fails_loudly():
    with pytest.raises(ValueError):
        make_asteroid(0, 0, "huge")
    with pytest.raises(ValueError):
        AsteroidSize.coerce(None)


@pytest.mark.parametrize("size", list(AsteroidSize))
def test_asteroid_shape_and_radius(size):
    seed_everything(3)
    for _ in range(50):
        a = make_asteroid(10, 20, size.value)
        assert a.size is size
        assert abs(a.radius - size.spec.radius) <= 5
        assert a.score == size.spec.score
        assert 7 <= len(a.vertices) <= 12
        assert all(0.7 * a.radius <= d <= a.radius for _, d in a.vertices)
        speed = math.hypot(a.vx, a.vy)
        assert 0.7 * size.spec.speed - 1e-9 <= speed <= 1.3 * size.spec.speed + 1e-9


def test_split_small_is_empty():
    a = make_asteroid(100, 100, AsteroidSize.SMALL)
    assert a.split() == []


@pytest.mark.parametrize("size, child", [
    (AsteroidSize.LARGE, AsteroidSize.MEDIUM),
    (AsteroidSize.MEDIUM, AsteroidSize.SMALL),
])
def test_split_makes_two_children_at_parent(size, child):
    a = make_asteroid(123, 456, size)
    children = a.split()
    assert len(children) == 2
    for c in children:
        assert isinstance(c, Asteroid)
        assert c.size is child
        assert (c.x, c.y) == (123, 456)
        assert c.alive


def test_asteroid_moves_and_spins_at_constant_rate():
    a = make_asteroid(400, 300, AsteroidSize.LARGE)
    vx, vy, spin = a.vx, a.vy, a.rot_speed
    a.update(W, H)
    a.update(W, H)
    assert a.x == pytest.approx(400 + 2 * vx)
    assert a.y == pytest.approx(300 + 2 * vy)
    assert a.rotation == pytest.approx(2 * spin)
    assert (a.vx, a.vy) == (vx, vy)


def test_spawn_asteroid_sits_on_an_edge():
    seed_everything(11)
    for _ in range(100):
        a = spawn_asteroid(W, H)
        assert a.size is AsteroidSize.LARGE
        on_edge = a.x in (0.0, W) or a.y in (0.0, H)
        assert on_edge, (a.x, a.y)


def test_ship_rotation_composes():
    s = Ship(x=400, y=300)
    start = s.angle
    s.update(held(Key.ROTATE_LEFT), W, H, now=0.0)
    assert s.angle == pytest.approx(start - ROTATION_SPEED)
    s.update(held(Key.ROTATE_LEFT, Key.ROTATE_RIGHT), W, H, now=0.0)
    assert s.angle == pytest.approx(start - ROTATION_SPEED)


def test_ship_speed_is_capped():
    s = Ship(x=400, y=300)
    controls = held(Key.THRUST)
    for _ in range(300):
        s.update(controls, W, H, now=0.0)
        assert s.speed <= MAX_SPEED + 1e-9
    assert s.speed == pytest.approx(MAX_SPEED)
    assert s.thrusting


def test_ship_friction_slows_without_thrust():
    s = Ship(x=400, y=300, vx=2.0, vy=0.0)
    s.update(KeyState(), W, H, now=0.0)
    assert s.vx == pytest.approx(1.98)
    assert not s.thrusting


def test_ship_invulnerability_is_wall_clock():
    s = Ship(x=400, y=300)
    s.reset(400, 300, now=10.0)
    assert s.invulnerable and s.alive

    s.update(KeyState(), W, H, now=10.0 + INVULNERABLE_TIME)
    assert s.invulnerable
    s.update(KeyState(), W, H, now=10.0 + INVULNERABLE_TIME + 0.01)
    assert not s.invulnerable


def test_ship_blinks_while_invulnerable():
    s = Ship(x=0, y=0)
    s.make_invulnerable(0.0)
    assert not s.is_visible(0.05)
    assert s.is_visible(0.15)
    s.invulnerable = False
    assert s.is_visible(0.05)


def test_ship_reset_restores_heading_and_stops():
    s = Ship(x=1, y=2, vx=3, vy=4, angle=1.0)
    s.reset(400, 300, now=0.0)
    assert (s.x, s.y, s.vx, s.vy) == (400, 300, 0.0, 0.0)
    assert s.angle == pytest.approx(-math.pi / 2)


def test_bullet_expires_after_lifetime():
    b = Bullet.fire(400, 300, 0.0)
    for _ in range(BULLET_LIFETIME - 1):
        b.update(W, H)
    assert b.alive
    b.update(W, H)
    assert not b.alive


def test_bullet_wraps_and_keeps_flying():
    b = Bullet.fire(W + 2, 300, 0.0)
    b.update(W, H)
    assert b.x == -b.radius
    assert b.alive
