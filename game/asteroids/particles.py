"""
Short-lived particles for explosions
"""

import math
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from .utils import random_range

DAMPING = 0.98


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    color: Tuple[int, int, int]
    decay: float
    size: float
    life: float = 1.0  # 1.0 -> 0, also used as alpha

    @classmethod
    def burst(cls, x: float, y: float, color) -> "Particle":
        angle = random_range(0, math.pi * 2)
        speed = random_range(1, 5)
        return cls(
            x=x, y=y,
            vx=math.cos(angle) * speed,
            vy=math.sin(angle) * speed,
            color=color,
            decay=random_range(0.015, 0.04),
            size=random_range(1, 3),
        )

    def update(self):
        self.x += self.vx
        self.y += self.vy
        self.vx *= DAMPING
        self.vy *= DAMPING
        self.life -= self.decay


class ParticleSystem:
    """Owns all live particles. The count is not capped."""

    def __init__(self):
        self.particles: List[Particle] = []

    def emit(self, x: float, y: float, color, count: int = 15):
        for _ in range(count):
            self.particles.append(Particle.burst(x, y, color))

    def update(self):
        for p in self.particles:
            p.update()
        self.particles = [p for p in self.particles if p.life > 0]

    def clear(self):
        self.particles = []

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self.particles)
