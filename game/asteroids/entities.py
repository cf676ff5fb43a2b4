"""
Game entity dataclasses and their per-tick kinematics

All motion is expressed in pixels per tick (about 60 ticks/s). The only
wall-clock timer is the ship's invulnerability window.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from .controls import Key
from .utils import random_range, random_int, vec_len, wrap_position

Color = Tuple[int, int, int]

# Ship
ROTATION_SPEED = 0.07  # rad/tick
THRUST_POWER = 0.12
FRICTION = 0.99
MAX_SPEED = 6.0
SHIP_SIZE = 18.0
HIT_RADIUS_FACTOR = 0.6  # forgiving ship-asteroid test
INVULNERABLE_TIME = 3.0  # seconds, wall clock
BLINK_RATE = 0.1  # seconds

# Bullet
BULLET_SPEED = 8.0
BULLET_LIFETIME = 60  # ticks
BULLET_RADIUS = 3.0


@dataclass(frozen=True)
class SizeSpec:
    radius: float
    speed: float
    score: int
    color: Color
    child: Optional["AsteroidSize"]


class AsteroidSize(Enum):
    """Asteroid size categories, largest first"""
    LARGE = "large"
    MEDIUM = "medium"
    SMALL = "small"

    @classmethod
    def coerce(cls, value: Union["AsteroidSize", str]) -> "AsteroidSize":
        """Accept a member or its string value; anything else is a bug"""
        if isinstance(value, cls):
            return value
        return cls(value)

    @property
    def spec(self) -> SizeSpec:
        return SIZE_TABLE[self]

    @property
    def child(self) -> Optional["AsteroidSize"]:
        return self.spec.child


SIZE_TABLE = {
    AsteroidSize.LARGE: SizeSpec(radius=50.0, speed=1.0, score=20, color=(255, 0, 255), child=AsteroidSize.MEDIUM),
    AsteroidSize.MEDIUM: SizeSpec(radius=28.0, speed=1.8, score=50, color=(255, 136, 0), child=AsteroidSize.SMALL),
    AsteroidSize.SMALL: SizeSpec(radius=14.0, speed=2.5, score=100, color=(0, 255, 0), child=None),
}


@dataclass
class Ship:
    """Player ship"""
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    angle: float = -math.pi / 2  # pointing up
    radius: float = SHIP_SIZE
    thrusting: bool = False
    alive: bool = True
    invulnerable: bool = False
    invulnerable_start: float = 0.0
    invulnerable_time: float = INVULNERABLE_TIME

    @property
    def hit_radius(self) -> float:
        return self.radius * HIT_RADIUS_FACTOR

    @property
    def speed(self) -> float:
        return vec_len(self.vx, self.vy)

    def make_invulnerable(self, now: float):
        self.invulnerable = True
        self.invulnerable_start = now

    def reset(self, x: float, y: float, now: float):
        """Respawn in place; the ship object itself is never recreated"""
        self.x = x
        self.y = y
        self.vx = 0.0
        self.vy = 0.0
        self.angle = -math.pi / 2
        self.thrusting = False
        self.alive = True
        self.make_invulnerable(now)

    def nose(self) -> Tuple[float, float]:
        return (self.x + math.cos(self.angle) * SHIP_SIZE,
                self.y + math.sin(self.angle) * SHIP_SIZE)

    def update(self, controls, width: float, height: float, now: float):
        if controls.is_held(Key.ROTATE_LEFT):
            self.angle -= ROTATION_SPEED
        if controls.is_held(Key.ROTATE_RIGHT):
            self.angle += ROTATION_SPEED

        self.thrusting = controls.is_held(Key.THRUST)
        if self.thrusting:
            self.vx += math.cos(self.angle) * THRUST_POWER
            self.vy += math.sin(self.angle) * THRUST_POWER

        self.vx *= FRICTION
        self.vy *= FRICTION

        speed = vec_len(self.vx, self.vy)
        if speed > MAX_SPEED:
            self.vx = self.vx / speed * MAX_SPEED
            self.vy = self.vy / speed * MAX_SPEED

        self.x += self.vx
        self.y += self.vy
        wrap_position(self, width, height)

        if self.invulnerable and now - self.invulnerable_start > self.invulnerable_time:
            self.invulnerable = False

    def is_visible(self, now: float) -> bool:
        """Blink while invulnerable: hidden on every other BLINK_RATE window"""
        if not self.invulnerable:
            return True
        return int((now - self.invulnerable_start) / BLINK_RATE) % 2 == 1


@dataclass
class Bullet:
    """Bullet projectile entity"""
    x: float
    y: float
    vx: float
    vy: float
    radius: float = BULLET_RADIUS
    life: int = BULLET_LIFETIME  # ticks left
    alive: bool = True

    @classmethod
    def fire(cls, x: float, y: float, angle: float) -> "Bullet":
        return cls(x=x, y=y,
                   vx=math.cos(angle) * BULLET_SPEED,
                   vy=math.sin(angle) * BULLET_SPEED)

    def update(self, width: float, height: float):
        self.x += self.vx
        self.y += self.vy
        self.life -= 1
        if self.life <= 0:
            self.alive = False
        wrap_position(self, width, height)


@dataclass
class Asteroid:
    """Drifting asteroid with a fixed jagged outline"""
    x: float
    y: float
    vx: float
    vy: float
    size: AsteroidSize
    radius: float
    score: int
    color: Color
    rotation: float = 0.0
    rot_speed: float = 0.0
    vertices: List[Tuple[float, float]] = field(default_factory=list)  # (angle, dist)
    alive: bool = True

    def update(self, width: float, height: float):
        self.x += self.vx
        self.y += self.vy
        self.rotation += self.rot_speed
        wrap_position(self, width, height)

    def split(self) -> List["Asteroid"]:
        child = self.size.child
        if child is None:
            return []
        return [make_asteroid(self.x, self.y, child), make_asteroid(self.x, self.y, child)]

    def outline(self) -> List[Tuple[float, float]]:
        """Polygon points in field coordinates, rotated"""
        pts = []
        for a, d in self.vertices:
            a += self.rotation
            pts.append((self.x + math.cos(a) * d, self.y + math.sin(a) * d))
        return pts


def make_asteroid(x: float, y: float, size: Union[AsteroidSize, str]) -> Asteroid:
    """Build an asteroid of the given size with random velocity and shape"""
    size = AsteroidSize.coerce(size)
    cfg = size.spec
    radius = cfg.radius + random_range(-5, 5)

    angle = random_range(0, math.pi * 2)
    speed = cfg.speed * random_range(0.7, 1.3)

    n = random_int(7, 12)
    vertices = [((i / n) * math.pi * 2, radius * random_range(0.7, 1.0)) for i in range(n)]

    return Asteroid(
        x=x, y=y,
        vx=math.cos(angle) * speed,
        vy=math.sin(angle) * speed,
        size=size,
        radius=radius,
        score=cfg.score,
        color=cfg.color,
        rot_speed=random_range(-0.02, 0.02),
        vertices=vertices,
    )


def spawn_asteroid(width: float, height: float) -> Asteroid:
    # Spawn on a random edge
    side = random.choice(["left", "right", "top", "bottom"])

    if side == "left":
        x, y = 0.0, random_range(0, height)
    elif side == "right":
        x, y = float(width), random_range(0, height)
    elif side == "top":
        x, y = random_range(0, width), 0.0
    else:
        x, y = random_range(0, width), float(height)

    return make_asteroid(x, y, AsteroidSize.LARGE)
