"""
Logical key state consumed by the tick driver
"""

from enum import Enum
from typing import Iterable, Set


class Key(Enum):
    """Logical keys the game understands, independent of any device"""
    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"
    THRUST = "thrust"
    FIRE = "fire"
    CONFIRM = "confirm"


class KeyState:
    """
    Held / just-pressed key sets.

    Event delivery calls press()/release(); the tick driver reads
    is_held()/was_just_pressed() and clears the just-pressed set once
    at the end of each tick.
    """

    def __init__(self):
        self._held: Set[Key] = set()
        self._just_pressed: Set[Key] = set()

    def press(self, key: Key):
        # Auto-repeat of a key that is already down is not a new press
        if key not in self._held:
            self._just_pressed.add(key)
        self._held.add(key)

    def release(self, key: Key):
        self._held.discard(key)

    def set_held(self, keys: Iterable[Key]):
        """Replace the held set wholesale, registering fresh presses"""
        keys = set(keys)
        for key in keys - self._held:
            self._just_pressed.add(key)
        self._held = keys

    def is_held(self, key: Key) -> bool:
        return key in self._held

    def was_just_pressed(self, key: Key) -> bool:
        return key in self._just_pressed

    def clear_just_pressed(self):
        self._just_pressed.clear()
