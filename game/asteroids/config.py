"""
Gameplay and environment configuration
"""

# Game core parameters (AsteroidsGame kwargs)
GAME_CONFIG = {
    "width": 800,
    "height": 600,
    "max_lives": 3,
    "initial_asteroids": 4,  # wave size at level 1, +2 per level
    "shoot_cooldown_steps": 10,  # ticks between shots
}

# RL environment parameters (AsteroidsEnv kwargs, on top of GAME_CONFIG)
ENV_CONFIG = {
    **GAME_CONFIG,
    "max_steps": 3600,  # 60s at 60 ticks/s with frame_skip=1
    "frame_skip": 1,
    "k_asteroids": 6,
}

# Reward shaping for AsteroidsEnv
REWARD_CONFIG = {
    "R_SCORE": 0.01,   # per score point
    "R_LIFE": 5.0,     # penalty per life lost
    "R_SHOT": 0.005,   # penalty per bullet fired
    "R_TIME": 0.001,   # per step
}
