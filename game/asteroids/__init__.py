"""Asteroids game module - simulation core and Gymnasium environment"""

from .game import AsteroidsGame, GameState
from .asteroids_env import AsteroidsEnv, run_random_episode

__all__ = ['AsteroidsGame', 'GameState', 'AsteroidsEnv', 'run_random_episode']
