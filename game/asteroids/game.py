"""
AsteroidsGame - game session, collision resolution and state machine
---------------------------------------------------------------------
- One tick per frame: input -> ship -> shooting -> bullets -> asteroids
  -> collisions -> level check -> particles -> screen shake
- States: title -> playing -> gameover -> playing ...
- Bullet life, shoot cooldown, particle decay and shake decay count ticks.
  Ship invulnerability counts wall-clock seconds from the injected clock.

Rendering, audio and raw input live outside; the core reads a KeyState,
emits SoundEffect signals to an AudioSink and exposes plain fields.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, Dict, List, Optional

from .audio import AudioSink, SoundEffect
from .controls import Key, KeyState
from .entities import Asteroid, Bullet, Ship, spawn_asteroid
from .particles import ParticleSystem
from .utils import circle_overlap

logger = logging.getLogger(__name__)

ASTEROID_HIT_PARTICLES = 20
ASTEROID_HIT_SHAKE = 5.0
SHIP_HIT_SHAKE = 12.0
SHAKE_DECAY = 0.8
SHAKE_CUTOFF = 0.5
SHIP_DEBRIS = ((0, 255, 255), 30), ((255, 255, 255), 10)


class GameState(Enum):
    TITLE = "title"
    PLAYING = "playing"
    GAMEOVER = "gameover"


class AsteroidsGame:
    """Owns the ship and every entity collection of one game session"""

    def __init__(
        self,
        width: int = 800,
        height: int = 600,
        audio: Optional[AudioSink] = None,
        clock: Callable[[], float] = time.monotonic,
        max_lives: int = 3,
        initial_asteroids: int = 4,
        shoot_cooldown_steps: int = 10,
    ):
        assert width > 0 and height > 0, "Field size must be positive."
        assert max_lives > 0, "Need at least one life."

        self.width = width
        self.height = height
        self.audio = audio if audio is not None else AudioSink()
        self.clock = clock

        self.max_lives = max_lives
        self.initial_asteroids = initial_asteroids
        self.shoot_cooldown_steps = shoot_cooldown_steps

        self.state = GameState.TITLE
        self.score = 0
        self.lives = max_lives
        self.level = 0
        self.shoot_cooldown = 0
        self.screen_shake = 0.0

        self.ship = Ship(x=width / 2, y=height / 2)
        self.bullets: List[Bullet] = []
        self.asteroids: List[Asteroid] = []
        self.particles = ParticleSystem()

        # Per-tick counters for observers such as the RL env
        self._events: Dict[str, float] = {}
        self._reset_events()

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def start_game(self):
        self.state = GameState.PLAYING
        self.score = 0
        self.lives = self.max_lives
        self.level = 0
        self.shoot_cooldown = 0
        self.bullets = []
        self.asteroids = []
        self.ship.reset(self.width / 2, self.height / 2, self.clock())
        logger.info("Game started")
        self.next_level()

    def next_level(self):
        self.level += 1
        if self.level > 1:
            self.audio.play(SoundEffect.LEVEL_UP)
        count = self.wave_size(self.level)
        for _ in range(count):
            self.asteroids.append(spawn_asteroid(self.width, self.height))
        logger.info("Level %d: %d asteroids", self.level, count)

    def wave_size(self, level: int) -> int:
        return self.initial_asteroids + (level - 1) * 2

    def ship_destroyed(self):
        for color, count in SHIP_DEBRIS:
            self.particles.emit(self.ship.x, self.ship.y, color, count)
        self.screen_shake = SHIP_HIT_SHAKE
        self.audio.set_thrust(False)
        self.audio.play(SoundEffect.SHIP_EXPLOSION)
        self.lives -= 1
        self._events["life_lost"] += 1.0

        if self.lives <= 0:
            self.ship.alive = False
            self.state = GameState.GAMEOVER
            self.audio.play(SoundEffect.GAME_OVER)
            logger.info("Game over at level %d, score %d", self.level, self.score)
        else:
            self.ship.reset(self.width / 2, self.height / 2, self.clock())
            logger.info("Ship lost, %d lives left", self.lives)

    # ----------------------------
    # Tick
    # ----------------------------

    def tick(self, controls: KeyState):
        """One loop iteration. Just-pressed keys are consumed exactly here."""
        self.update(controls)
        controls.clear_just_pressed()

    def update(self, controls: KeyState):
        self._reset_events()

        if self.state is not GameState.PLAYING:
            if controls.was_just_pressed(Key.CONFIRM) or controls.was_just_pressed(Key.FIRE):
                self.start_game()
            self.particles.update()
            return

        self.ship.update(controls, self.width, self.height, self.clock())
        self.audio.set_thrust(self.ship.thrusting)

        self._apply_shoot(controls)

        for b in self.bullets:
            b.update(self.width, self.height)
        self.bullets = [b for b in self.bullets if b.alive]

        for a in self.asteroids:
            a.update(self.width, self.height)

        self.resolve_collisions()

        if not self.asteroids and self.state is GameState.PLAYING:
            self.next_level()

        self.particles.update()

        if self.screen_shake > 0:
            self.screen_shake *= SHAKE_DECAY
        if self.screen_shake < SHAKE_CUTOFF:
            self.screen_shake = 0.0

    def _apply_shoot(self, controls: KeyState):
        if self.shoot_cooldown > 0:
            self.shoot_cooldown -= 1
        if not controls.is_held(Key.FIRE) or self.shoot_cooldown > 0:
            return

        nx, ny = self.ship.nose()
        self.bullets.append(Bullet.fire(nx, ny, self.ship.angle))
        self.shoot_cooldown = self.shoot_cooldown_steps
        self.audio.play(SoundEffect.SHOOT)
        self._events["shot"] += 1.0

    def resolve_collisions(self):
        # Bullets vs asteroids. Split children are appended to the list
        # being walked, so later bullets in this pass can hit them.
        for b in self.bullets:
            for a in self.asteroids:
                if not b.alive or not a.alive:
                    continue
                if circle_overlap(b.x, b.y, b.radius, a.x, a.y, a.radius):
                    b.alive = False
                    a.alive = False
                    self.score += a.score
                    self._events["score"] += a.score
                    self.particles.emit(a.x, a.y, a.color, ASTEROID_HIT_PARTICLES)
                    self.screen_shake = ASTEROID_HIT_SHAKE
                    self.audio.play(SoundEffect.EXPLOSION, a.size)
                    self.asteroids.extend(a.split())

        # Ship vs asteroids
        if not self.ship.invulnerable:
            s = self.ship
            for a in self.asteroids:
                if not a.alive:
                    continue
                if circle_overlap(s.x, s.y, s.hit_radius, a.x, a.y, a.radius):
                    self.ship_destroyed()
                    break

        self.bullets = [b for b in self.bullets if b.alive]
        self.asteroids = [a for a in self.asteroids if a.alive]

    def _reset_events(self):
        self._events = {"score": 0.0, "shot": 0.0, "life_lost": 0.0}

    @property
    def events(self) -> Dict[str, float]:
        """What happened during the last update()"""
        return dict(self._events)
