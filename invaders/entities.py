from __future__ import annotations
import random
from typing import Optional, Tuple

from .settings import GameConfig
from .utils import Rect, clamp

# Slack for float drift when a craft reaches the far edge
EXIT_EPSILON = 1e-6


# ============================
# ENTITIES
# ============================
class Projectile:
    def __init__(self, x: float, y: float, speed: float, is_player_owned: bool, config: GameConfig):
        self.x = x
        self.y = y
        self.width, self.height = config.bullet_size
        self.speed = speed  # negative moves up the screen
        self.is_player_owned = is_player_owned
        self._field_height = config.height

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def update(self, dt: float):
        self.y += self.speed * dt

    def is_out_of_bounds(self) -> bool:
        return self.y < -self.height or self.y > self._field_height


class Player:
    def __init__(self, config: GameConfig):
        self.config = config
        self.width, self.height = config.player_size
        self.speed = config.player_speed
        self.cooldown_ms = config.player_cooldown_ms
        self.lives = config.player_lives
        self.x = 0.0
        self.y = 0.0
        self.last_shot_time = 0.0
        self.reset_position()

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def reset_position(self):
        """Respawn: back to the centre of the bottom row, cooldown cleared, lives kept."""
        self.x = (self.config.width - self.width) / 2
        self.y = self.config.height - self.height - self.config.player_bottom_margin
        self.last_shot_time = 0.0

    def reset(self):
        self.reset_position()
        self.lives = self.config.player_lives

    def update(self, dt: float, move_left: bool, move_right: bool):
        # Both held cancels out
        move = 0.0
        if move_left:
            move -= 1.0
        if move_right:
            move += 1.0
        self.x += move * self.speed * dt
        self.x = clamp(self.x, 0, self.config.width - self.width)

    def can_shoot(self, now: float) -> bool:
        return now - self.last_shot_time >= self.cooldown_ms

    def shoot(self, now: float) -> Optional[Projectile]:
        if not self.can_shoot(now):
            return None
        self.last_shot_time = now
        bw, bh = self.config.bullet_size
        bx = self.x + self.width / 2 - bw / 2
        by = self.y - bh
        return Projectile(bx, by, -self.config.bullet_speed, True, self.config)

    def hit(self):
        self.lives -= 1


class Enemy:
    def __init__(self, x: float, y: float, row: int, col: int, config: GameConfig):
        self.x = x
        self.y = y
        self.width, self.height = config.enemy_size
        self.row = row
        self.col = col
        self.alive = True
        self.config = config

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    @property
    def color(self) -> Tuple[int, int, int]:
        return self.config.row_color(self.row)

    def shoot(self) -> Projectile:
        bw, _ = self.config.bullet_size
        bx = self.x + self.width / 2 - bw / 2
        by = self.y + self.height
        return Projectile(bx, by, self.config.bullet_speed, False, self.config)

    def destroy(self):
        self.alive = False

    def __repr__(self):
        state = "alive" if self.alive else "dead"
        return f"Enemy(row={self.row}, col={self.col}, x={self.x:.0f}, y={self.y:.0f}, {state})"


class BonusCraft:
    """Fly-by target crossing the top of the playfield once, then gone."""

    def __init__(self, config: GameConfig, direction: Optional[int] = None,
                 rng: Optional[random.Random] = None):
        if direction is None:
            direction = 1 if (rng or random).random() < 0.5 else -1
        if direction not in (1, -1):
            raise ValueError(f"direction must be 1 or -1, got {direction}")
        self.width, self.height = config.bonus_size
        self.speed = config.bonus_speed
        self.direction = direction
        self.y = config.bonus_y
        # Enter from just outside the edge opposite to the heading
        self.x = -self.width if direction == 1 else config.width
        self.active = True
        self._field_width = config.width

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def update(self, dt: float):
        if not self.active:
            return
        self.x += self.speed * self.direction * dt
        if self.direction == 1 and self.x >= self._field_width - EXIT_EPSILON:
            self.active = False
        elif self.direction == -1 and self.x <= -self.width + EXIT_EPSILON:
            self.active = False

    def destroy(self):
        self.active = False
