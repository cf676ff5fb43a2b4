"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def vec_len(x: float, y: float) -> float:
    """Calculate vector length (magnitude)"""
    return math.hypot(x, y)


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x1 - x2, y1 - y2)


def circle_overlap(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles overlap. Touching circles do not."""
    return distance(x1, y1, x2, y2) < r1 + r2


def random_range(lo: float, hi: float) -> float:
    """Uniform float in [lo, hi)"""
    return random.random() * (hi - lo) + lo


def random_int(lo: int, hi: int) -> int:
    """Uniform int in [lo, hi], both ends inclusive"""
    return random.randint(lo, hi)


def wrap_position(entity, width: float, height: float) -> None:
    """
    Teleport an entity that left the field to the opposite edge.

    The entity's radius is used as margin so it is fully off-screen
    before it re-enters on the other side.
    """
    margin = getattr(entity, "radius", 0.0) or 0.0
    if entity.x < -margin:
        entity.x = width + margin
    if entity.x > width + margin:
        entity.x = -margin
    if entity.y < -margin:
        entity.y = height + margin
    if entity.y > height + margin:
        entity.y = -margin


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
