"""
The invader formation: one rigid grid of enemies sharing a direction and two
wall-clock timers.

Movement and firing are gated by the injected `now` (ms) against the last
step/shot timestamps, never by accumulating frame deltas, so the formation
marches at the same pace whatever the frame rate. Both cadences speed up as
the lowest living enemy descends past the stage thresholds in
`GameConfig.speed_stages`.
"""
from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .entities import Enemy, Projectile
from .settings import GameConfig
from .utils import Rect, bounds, overlaps, random_int

LOGGER = logging.getLogger(__name__)

STEP_MOVE = "move"
STEP_DROP = "drop"


@dataclass
class SwarmUpdate:
    projectiles: List[Projectile] = field(default_factory=list)
    stage_changed: bool = False
    stage: int = 1
    step: Optional[str] = None


class Swarm:
    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.base_y = self.config.enemy_start_y
        self.enemies: List[Enemy] = []
        self.direction = 1
        self.last_move_time = 0.0
        self.last_shot_time = 0.0
        self.previous_stage = 1
        self._build()

    def _build(self):
        cfg = self.config
        spacing_x, _ = cfg.enemy_spacing
        # Row-major order; collision tie-breaks rely on it
        self.enemies = []
        for row in range(cfg.enemy_rows):
            for col in range(cfg.enemy_cols):
                x = cfg.enemy_start_x + col * spacing_x
                y = self.row_baseline(row)
                self.enemies.append(Enemy(x, y, row, col, cfg))

    def reset(self):
        """Fresh formation for a new wave or session."""
        self.direction = 1
        self.last_move_time = 0.0
        self.last_shot_time = 0.0
        self.previous_stage = 1
        self._build()

    # ----------------------------
    # Queries
    # ----------------------------
    def living(self) -> List[Enemy]:
        return [e for e in self.enemies if e.alive]

    def alive_count(self) -> int:
        return sum(1 for e in self.enemies if e.alive)

    def bounds(self) -> Optional[Rect]:
        return bounds(e.rect for e in self.enemies if e.alive)

    def row_baseline(self, row: int) -> float:
        return self.base_y + row * self.config.enemy_spacing[1]

    def descent_distance(self) -> float:
        """Lowest living enemy's y measured from the formation's top baseline."""
        alive = self.living()
        if not alive:
            return 0.0
        lowest = max(alive, key=lambda e: e.y)
        return lowest.y - self.base_y

    def _stage_index(self) -> int:
        if self.alive_count() == 0:
            return 0
        distance = self.descent_distance()
        index = 0
        for i, (threshold, _) in enumerate(self.config.speed_stages):
            if distance >= threshold:
                index = i
            else:
                break
        return index

    def speed_stage(self) -> int:
        return self._stage_index() + 1

    def speed_multiplier(self) -> float:
        return self.config.speed_stages[self._stage_index()][1]

    def move_interval_ms(self) -> float:
        return 1000.0 / (self.config.enemy_base_speed * self.speed_multiplier())

    def shoot_interval_ms(self) -> float:
        return self.config.enemy_shoot_interval_ms / self.speed_multiplier()

    def front_line(self) -> List[Enemy]:
        """Per column, the living enemy closest to the player."""
        lowest: Dict[int, Enemy] = {}
        for e in self.enemies:
            if not e.alive:
                continue
            if e.col not in lowest or e.y > lowest[e.col].y:
                lowest[e.col] = e
        return [lowest[col] for col in sorted(lowest)]

    # ----------------------------
    # Simulation
    # ----------------------------
    def update(self, dt: float, now: float) -> SwarmUpdate:
        result = SwarmUpdate()

        stage = self.speed_stage()
        if stage != self.previous_stage:
            LOGGER.info("Swarm speed stage %d -> %d (descent %.0f)",
                        self.previous_stage, stage, self.descent_distance())
            self.previous_stage = stage
            result.stage_changed = True
        result.stage = stage

        if now - self.last_move_time >= self.move_interval_ms():
            result.step = self.step()
            self.last_move_time = now

        if now - self.last_shot_time >= self.shoot_interval_ms():
            shooter = self.choose_shooter()
            if shooter is not None:
                result.projectiles.append(shooter.shoot())
            # Stamped even without a shooter so the cadence never bunches up
            self.last_shot_time = now

        return result

    def step(self) -> Optional[str]:
        """One march tick: either a lateral step or a reverse-and-drop, never both."""
        alive = self.living()
        if not alive:
            return None
        cfg = self.config
        left = min(e.x for e in alive)
        right = max(e.x + e.width for e in alive)

        drop = False
        if self.direction == 1 and right >= cfg.width - cfg.enemy_edge_margin:
            drop = True
        elif self.direction == -1 and left <= cfg.enemy_edge_margin:
            drop = True

        if drop:
            self.direction *= -1
            for e in alive:
                e.y += cfg.enemy_step_down
            LOGGER.debug("Swarm reversed, now heading %+d", self.direction)
            return STEP_DROP

        dx = self.direction * cfg.enemy_step_x
        for e in alive:
            e.x += dx
        return STEP_MOVE

    def choose_shooter(self) -> Optional[Enemy]:
        candidates = self.front_line()
        if not candidates:
            return None
        return candidates[random_int(0, len(candidates) - 1, self.rng)]

    def check_bullet_collision(self, projectile: Projectile) -> Optional[Enemy]:
        """Kill and return the first living enemy (row-major) hit by the projectile."""
        box = projectile.rect
        for e in self.enemies:
            if e.alive and overlaps(box, e.rect):
                e.destroy()
                return e
        return None

    def check_player_collision(self, player_rect: Rect) -> Optional[Enemy]:
        for e in self.enemies:
            if e.alive and overlaps(e.rect, player_rect):
                return e
        return None
