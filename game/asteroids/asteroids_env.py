"""
AsteroidsEnv - the asteroids core as a Gymnasium environment
------------------------------------------------------------
- Wraps AsteroidsGame; every step presses logical keys and runs ticks
- Discrete MultiDiscrete action space: [rotate(3), thrust(2), fire(2)]
- Vector observation: ship state + top-K nearest asteroids
- Reward from score gained, lives lost, shots fired and elapsed time

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.asteroids.asteroids_env
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import REWARD_CONFIG
from .controls import Key, KeyState
from .entities import MAX_SPEED
from .game import AsteroidsGame, GameState
from .utils import clamp, seed_everything

# Fastest asteroid: small base speed 2.5 * 1.3 jitter
_MAX_ASTEROID_SPEED = 3.25
_MAX_ASTEROID_RADIUS = 55.0


class AsteroidsEnv(gym.Env):
    """Asteroids as an RL environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 800,
        height: int = 600,
        max_lives: int = 3,
        initial_asteroids: int = 4,
        shoot_cooldown_steps: int = 10,
        max_steps: int = 3600,
        frame_skip: int = 1,
        k_asteroids: int = 6,
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        assert frame_skip >= 1, "frame_skip must be at least 1."
        self.render_mode = render_mode

        self.max_steps = max_steps
        self.frame_skip = frame_skip
        self.k_asteroids = k_asteroids
        self.rewards = dict(REWARD_CONFIG)
        if reward_config:
            self.rewards.update(reward_config)

        # Simulated clock: one tick is 1/60 s regardless of wall time,
        # so invulnerability lasts the same number of steps in training.
        self._sim_time = 0.0
        self.game = AsteroidsGame(
            width=width,
            height=height,
            clock=lambda: self._sim_time,
            max_lives=max_lives,
            initial_asteroids=initial_asteroids,
            shoot_cooldown_steps=shoot_cooldown_steps,
        )
        self.controls = KeyState()

        # rotate: 0 none, 1 left, 2 right / thrust: 0/1 / fire: 0/1
        self.action_space = spaces.MultiDiscrete([3, 2, 2])

        # Ship: pos(2) vel(2) heading cos/sin(2) invulnerable(1) cooldown(1)
        # Each asteroid: rel pos(2) rel vel(2) radius(1)
        obs_dim = 8 + self.k_asteroids * 5
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        self._step_count = 0
        self._sim_time = 0.0
        self.controls.set_held(())
        self.controls.clear_just_pressed()
        self.game.particles.clear()
        self.game.start_game()

        return self._get_obs(), self._get_info()

    def step(self, action):
        action = np.asarray(action)
        if action.shape != (3,):
            raise ValueError(f"Expected action of shape (3,), got {action.shape}")
        rotate, thrust, fire = int(action[0]), int(action[1]), int(action[2])

        # A finished episode stays finished until reset()
        if self.game.state is GameState.GAMEOVER:
            self._step_count += 1
            truncated = self._step_count >= self.max_steps
            return self._get_obs(), 0.0, True, truncated, self._get_info()

        held = set()
        if rotate == 1:
            held.add(Key.ROTATE_LEFT)
        elif rotate == 2:
            held.add(Key.ROTATE_RIGHT)
        if thrust:
            held.add(Key.THRUST)
        if fire:
            held.add(Key.FIRE)
        self.controls.set_held(held)

        totals = {"score": 0.0, "shot": 0.0, "life_lost": 0.0}
        for _ in range(self.frame_skip):
            self.game.tick(self.controls)
            self._sim_time += 1.0 / 60.0
            for k, v in self.game.events.items():
                totals[k] += v
            if self.game.state is GameState.GAMEOVER:
                break

        reward = self._compute_reward(totals)

        terminated = self.game.state is GameState.GAMEOVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        g = self.game
        s = g.ship

        obs_parts = [
            clamp(s.x / g.width * 2 - 1, -1, 1),
            clamp(s.y / g.height * 2 - 1, -1, 1),
            clamp(s.vx / MAX_SPEED, -1, 1),
            clamp(s.vy / MAX_SPEED, -1, 1),
            math.cos(s.angle),
            math.sin(s.angle),
            1.0 if s.invulnerable else -1.0,
            clamp(g.shoot_cooldown / max(1, g.shoot_cooldown_steps) * 2 - 1, -1, 1),
        ]

        nearest = sorted(
            g.asteroids,
            key=lambda a: (a.x - s.x) ** 2 + (a.y - s.y) ** 2
        )
        for i in range(self.k_asteroids):
            if i < len(nearest):
                a = nearest[i]
                obs_parts += [
                    clamp((a.x - s.x) / g.width, -1, 1),
                    clamp((a.y - s.y) / g.height, -1, 1),
                    clamp((a.vx - s.vx) / (MAX_SPEED + _MAX_ASTEROID_SPEED), -1, 1),
                    clamp((a.vy - s.vy) / (MAX_SPEED + _MAX_ASTEROID_SPEED), -1, 1),
                    a.radius / _MAX_ASTEROID_RADIUS,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, totals: Dict[str, float]) -> float:
        r = self.rewards
        reward = 0.0
        reward += r["R_SCORE"] * totals["score"]
        reward -= r["R_LIFE"] * totals["life_lost"]
        reward -= r["R_SHOT"] * totals["shot"]
        reward -= r["R_TIME"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        g = self.game
        return {
            "score": g.score,
            "lives": g.lives,
            "level": g.level,
            "num_asteroids": len(g.asteroids),
            "num_bullets": len(g.bullets),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            # arcade needs a display; only pull it in when asked to draw
            from .window import AsteroidsWindow
            self._window = AsteroidsWindow(self.game, self.controls, drive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


def run_random_episode(render: bool = True, seed: Optional[int] = 42):
    """Run a random episode for testing"""
    env = AsteroidsEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close window to exit early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.3f}  score: {info['score']}  level: {info['level']}")
    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=True)
