"""
Arcade frontend: keyboard capture and drawing for AsteroidsGame

Usage:
    python -m game.asteroids.window --seed 7
"""

import argparse
import logging
import math
import random
import time

import arcade

from .audio import LoggingAudio
from .config import GAME_CONFIG
from .controls import Key, KeyState
from .game import AsteroidsGame, GameState
from .utils import seed_everything

KEY_MAP = {
    arcade.key.LEFT: (Key.ROTATE_LEFT,),
    arcade.key.A: (Key.ROTATE_LEFT,),
    arcade.key.RIGHT: (Key.ROTATE_RIGHT,),
    arcade.key.D: (Key.ROTATE_RIGHT,),
    arcade.key.UP: (Key.THRUST,),
    arcade.key.W: (Key.THRUST,),
    arcade.key.SPACE: (Key.FIRE, Key.CONFIRM),
    arcade.key.ENTER: (Key.CONFIRM,),
    arcade.key.RETURN: (Key.CONFIRM,),
}


class AsteroidsWindow(arcade.Window):
    """Arcade window for playing or watching the game"""

    def __init__(self, game: AsteroidsGame, controls: KeyState, drive: bool = True):
        super().__init__(game.width, game.height, "Asteroids - Arcade")
        self.game = game
        self.controls = controls
        # When False something else (the RL env) ticks the game
        self.drive = drive

        self.background_color = (0, 0, 0)
        self.SHIP_C = (0, 255, 255)
        self.FLAME_C = (255, 136, 0)
        self.BULLET_C = (255, 255, 255)
        self.HUD_C = (0, 255, 255)
        self.DIM_C = (136, 136, 136)
        self.GAMEOVER_C = (255, 0, 0)

        self._ox = 0.0
        self._oy = 0.0

    # Game y grows downward, arcade y grows upward
    def _pt(self, x, y):
        return x + self._ox, self.height - y + self._oy

    def on_key_press(self, symbol, modifiers):
        for key in KEY_MAP.get(symbol, ()):
            self.controls.press(key)

    def on_key_release(self, symbol, modifiers):
        for key in KEY_MAP.get(symbol, ()):
            self.controls.release(key)

    def on_update(self, delta_time):
        if self.drive:
            self.game.tick(self.controls)

    def on_draw(self):
        self.clear()
        g = self.game

        shake = g.screen_shake
        self._ox = (random.random() - 0.5) * shake * 2 if shake > 0 else 0.0
        self._oy = (random.random() - 0.5) * shake * 2 if shake > 0 else 0.0

        if g.state is GameState.TITLE:
            self._draw_title()
            self._draw_particles()
            return

        for a in g.asteroids:
            arcade.draw_polygon_outline([self._pt(px, py) for px, py in a.outline()], a.color, 2)

        for b in g.bullets:
            x, y = self._pt(b.x, b.y)
            arcade.draw_circle_filled(x, y, 2, self.BULLET_C)
            tx, ty = self._pt(b.x - b.vx * 0.5, b.y - b.vy * 0.5)
            arcade.draw_line(x, y, tx, ty, (255, 255, 200, 128), 1.5)

        if g.state is GameState.PLAYING and g.ship.is_visible(g.clock()):
            self._draw_ship()

        self._draw_particles()
        self._draw_hud()

        if g.state is GameState.GAMEOVER:
            self._draw_game_over()

    def _draw_ship(self):
        s = self.game.ship
        r = s.radius
        nose = self._pt(s.x + math.cos(s.angle) * r, s.y + math.sin(s.angle) * r)
        left = self._pt(s.x + math.cos(s.angle + 2.3) * r * 0.8, s.y + math.sin(s.angle + 2.3) * r * 0.8)
        right = self._pt(s.x + math.cos(s.angle - 2.3) * r * 0.8, s.y + math.sin(s.angle - 2.3) * r * 0.8)
        back = self._pt(s.x - math.cos(s.angle) * r * 0.3, s.y - math.sin(s.angle) * r * 0.3)
        arcade.draw_polygon_outline([nose, left, back, right], self.SHIP_C, 2)

        if s.thrusting:
            flame = r * (0.6 + random.random() * 0.4)
            tip = self._pt(s.x - math.cos(s.angle) * flame, s.y - math.sin(s.angle) * flame)
            lx = left[0] * 0.7 + back[0] * 0.3
            ly = left[1] * 0.7 + back[1] * 0.3
            rx = right[0] * 0.7 + back[0] * 0.3
            ry = right[1] * 0.7 + back[1] * 0.3
            arcade.draw_line_strip([(lx, ly), tip, (rx, ry)], self.FLAME_C, 2)

    def _draw_particles(self):
        for p in self.game.particles:
            x, y = self._pt(p.x, p.y)
            alpha = int(255 * max(0.0, min(1.0, p.life)))
            arcade.draw_circle_filled(x, y, p.size, (*p.color, alpha))

    def _draw_hud(self):
        g = self.game
        arcade.draw_text(f"SCORE: {g.score}", 20, self.height - 35, self.HUD_C, 20, bold=True)
        arcade.draw_text(f"LEVEL {g.level}", self.width - 20, self.height - 35, self.HUD_C, 20,
                         anchor_x="right", bold=True)
        for i in range(g.lives):
            lx, ly = 25 + i * 25, self.height - 60
            arcade.draw_polygon_outline([(lx, ly + 8), (lx - 5, ly - 5), (lx, ly - 2), (lx + 5, ly - 5)],
                                        self.HUD_C, 1.5)

    def _draw_title(self):
        cx, cy = self.width / 2, self.height / 2
        arcade.draw_text("ASTEROIDS", cx, cy + 50, (255, 255, 255), 64, anchor_x="center", bold=True)
        arcade.draw_text("PRESS SPACE OR ENTER TO START", cx, cy - 20, self.HUD_C, 20, anchor_x="center")
        arcade.draw_text("ARROW KEYS = MOVE   |   SPACE = SHOOT", cx, cy - 70, self.DIM_C, 14,
                         anchor_x="center")

    def _draw_game_over(self):
        cx, cy = self.width / 2, self.height / 2
        arcade.draw_text("GAME OVER", cx, cy + 30, self.GAMEOVER_C, 48, anchor_x="center", bold=True)
        arcade.draw_text(f"FINAL SCORE: {self.game.score}", cx, cy - 20, self.HUD_C, 20, anchor_x="center")
        arcade.draw_text("PRESS SPACE OR ENTER TO RESTART", cx, cy - 60, self.DIM_C, 16, anchor_x="center")


def main():
    parser = argparse.ArgumentParser(description="Play asteroids in an arcade window")
    parser.add_argument("--width", type=int, default=GAME_CONFIG["width"])
    parser.add_argument("--height", type=int, default=GAME_CONFIG["height"])
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    seed_everything(args.seed)

    config = {**GAME_CONFIG, "width": args.width, "height": args.height}
    game = AsteroidsGame(audio=LoggingAudio(), clock=time.monotonic, **config)
    AsteroidsWindow(game, KeyState())

    print(f"Starting asteroids ({args.width}x{args.height})... close the window to quit.")
    arcade.run()


if __name__ == "__main__":
    main()
