"""
Gameplay constants and the validated GameConfig built from them.

Every number the simulation uses lives here. A GameConfig with no arguments
is the canonical arcade setup; tests and the front end override single fields.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from .errors import ConfigurationError

# ============================
# SETTINGS & CONSTANTS
# ============================
WIDTH, HEIGHT = 800, 600

# Player
PLAYER_SPEED = 300.0            # px/sec
PLAYER_SIZE = (40, 20)
PLAYER_BOTTOM_MARGIN = 20
PLAYER_CD_MS = 200
PLAYER_MAX_BULLETS = 5
PLAYER_LIVES = 3

# Projectiles
BULLET_SPEED = 400.0            # px/sec, sign picks the direction
BULLET_SIZE = (4, 12)

# Formation
ENEMY_ROWS = 5
ENEMY_COLS = 9
ENEMY_SIZE = (48, 32)
ENEMY_SPACING = (64, 40)
ENEMY_START_X = 88              # centres 9 columns: (800 - (9*64 - 16)) / 2
ENEMY_START_Y = 80
ENEMY_BASE_SPEED = 20.0         # lateral steps/sec at stage 1
ENEMY_STEP_X = 10
ENEMY_EDGE_MARGIN = 10
ENEMY_STEP_DOWN = 20
ENEMY_SHOOT_INTERVAL_MS = 2000.0

# (descent threshold in px, speed multiplier), ascending
SPEED_STAGES: Tuple[Tuple[float, float], ...] = (
    (0.0, 1.0),
    (100.0, 1.5),
    (200.0, 2.2),
    (300.0, 3.0),
)

# Bonus craft
BONUS_SPEED = 100.0
BONUS_SIZE = (50, 20)
BONUS_Y = 30
BONUS_SPAWN_INTERVAL_MS = 15000.0

# Scoring / session
SCORE_PER_ENEMY = 10
SCORE_BONUS = 100
RESPAWN_DELAY_MS = 1000.0

# Colors
ROW_COLORS: Tuple[Tuple[int, int, int], ...] = (
    (255, 0, 0),
    (255, 68, 0),
    (255, 136, 0),
    (255, 170, 0),
    (255, 204, 0),
)


@dataclass(frozen=True)
class GameConfig:
    width: int = WIDTH
    height: int = HEIGHT

    player_speed: float = PLAYER_SPEED
    player_size: Tuple[int, int] = PLAYER_SIZE
    player_bottom_margin: int = PLAYER_BOTTOM_MARGIN
    player_cooldown_ms: float = PLAYER_CD_MS
    player_max_bullets: int = PLAYER_MAX_BULLETS
    player_lives: int = PLAYER_LIVES

    bullet_speed: float = BULLET_SPEED
    bullet_size: Tuple[int, int] = BULLET_SIZE

    enemy_rows: int = ENEMY_ROWS
    enemy_cols: int = ENEMY_COLS
    enemy_size: Tuple[int, int] = ENEMY_SIZE
    enemy_spacing: Tuple[int, int] = ENEMY_SPACING
    enemy_start_x: float = ENEMY_START_X
    enemy_start_y: float = ENEMY_START_Y
    enemy_base_speed: float = ENEMY_BASE_SPEED
    enemy_step_x: float = ENEMY_STEP_X
    enemy_edge_margin: float = ENEMY_EDGE_MARGIN
    enemy_step_down: float = ENEMY_STEP_DOWN
    enemy_shoot_interval_ms: float = ENEMY_SHOOT_INTERVAL_MS
    speed_stages: Tuple[Tuple[float, float], ...] = SPEED_STAGES

    bonus_speed: float = BONUS_SPEED
    bonus_size: Tuple[int, int] = BONUS_SIZE
    bonus_y: float = BONUS_Y
    bonus_spawn_interval_ms: float = BONUS_SPAWN_INTERVAL_MS

    score_per_enemy: int = SCORE_PER_ENEMY
    score_bonus: int = SCORE_BONUS
    respawn_delay_ms: float = RESPAWN_DELAY_MS

    row_colors: Tuple[Tuple[int, int, int], ...] = ROW_COLORS

    def __post_init__(self):
        if self.enemy_rows <= 0 or self.enemy_cols <= 0:
            raise ConfigurationError(
                f"formation must be at least 1x1, got {self.enemy_rows}x{self.enemy_cols}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"playfield must be positive, got {self.width}x{self.height}")
        for name in ("player_size", "bullet_size", "enemy_size", "bonus_size"):
            w, h = getattr(self, name)
            if w <= 0 or h <= 0:
                raise ConfigurationError(f"{name} must be positive, got {(w, h)}")
        for name in ("player_speed", "bullet_speed", "enemy_base_speed", "bonus_speed",
                     "enemy_shoot_interval_ms", "bonus_spawn_interval_ms"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")
        if self.player_width > self.width:
            raise ConfigurationError("player is wider than the playfield")
        if self.player_lives < 1:
            raise ConfigurationError(f"player_lives must be >= 1, got {self.player_lives}")
        if self.player_max_bullets < 1:
            raise ConfigurationError("player_max_bullets must be >= 1")
        if self.player_cooldown_ms < 0 or self.respawn_delay_ms < 0:
            raise ConfigurationError("cooldowns and delays cannot be negative")
        if not self.speed_stages or self.speed_stages[0][0] != 0:
            raise ConfigurationError("speed_stages must start at threshold 0")
        thresholds = [t for t, _ in self.speed_stages]
        if thresholds != sorted(thresholds) or len(set(thresholds)) != len(thresholds):
            raise ConfigurationError("speed_stages thresholds must be strictly ascending")
        if any(m <= 0 for _, m in self.speed_stages):
            raise ConfigurationError("speed_stages multipliers must be positive")
        if not self.row_colors:
            raise ConfigurationError("row_colors cannot be empty")

    @property
    def player_width(self) -> int:
        return self.player_size[0]

    @property
    def player_height(self) -> int:
        return self.player_size[1]

    def row_color(self, row: int) -> Tuple[int, int, int]:
        return self.row_colors[row % len(self.row_colors)]
