"""
Sound effect signals emitted by the game core

The core only decides when an effect fires. How it sounds is up to
whatever sink is plugged in.
"""

import logging
from enum import Enum
from typing import Any, Optional

logger = logging.getLogger(__name__)


class SoundEffect(Enum):
    SHOOT = "shoot"
    EXPLOSION = "explosion"  # param: AsteroidSize
    SHIP_EXPLOSION = "ship_explosion"
    LEVEL_UP = "level_up"
    GAME_OVER = "game_over"


class AudioSink:
    """Fire-and-forget audio interface. The base class is silent."""

    def play(self, effect: SoundEffect, param: Optional[Any] = None):
        pass

    def set_thrust(self, active: bool):
        pass


class LoggingAudio(AudioSink):
    """Logs every signal instead of producing sound"""

    def __init__(self):
        self._thrust = False

    def play(self, effect: SoundEffect, param: Optional[Any] = None):
        if param is None:
            logger.debug("sfx %s", effect.value)
        else:
            logger.debug("sfx %s (%s)", effect.value, getattr(param, "value", param))

    def set_thrust(self, active: bool):
        # set_thrust is called every tick; only log edges
        if active != self._thrust:
            logger.debug("thrust %s", "on" if active else "off")
        self._thrust = active
