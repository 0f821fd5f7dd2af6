"""
Session state machine: TITLE -> PLAYING -> GAME_OVER -> TITLE.

A Session owns every entity and is advanced once per frame by the caller,
which supplies the elapsed seconds, a monotonic timestamp in milliseconds and
the input held/pressed this frame. Nothing here reads a clock, draws, or plays
sound; the returned FrameEvents and `snapshot()` are all a front end needs.

Per-frame order while PLAYING:

    respawn wait -> player -> player fire -> swarm -> bonus craft
    -> projectiles -> collisions -> swarm/player contact -> end conditions
"""
from __future__ import annotations
import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .entities import BonusCraft, Player, Projectile
from .errors import InvariantViolation
from .events import EventKind, FrameEvents
from .settings import GameConfig
from .swarm import Swarm
from .utils import Rect, overlaps

LOGGER = logging.getLogger(__name__)


class Phase(Enum):
    TITLE = "title"
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class InputState:
    move_left: bool = False
    move_right: bool = False
    fire: bool = False
    confirm: bool = False


NO_INPUT = InputState()


@dataclass(frozen=True)
class EnemyView:
    rect: Rect
    row: int
    col: int


@dataclass(frozen=True)
class ProjectileView:
    rect: Rect
    is_player_owned: bool


@dataclass(frozen=True)
class Snapshot:
    phase: Phase
    score: int
    wave: int
    lives: int
    respawning: bool
    player: Rect
    enemies: Tuple[EnemyView, ...]
    projectiles: Tuple[ProjectileView, ...]
    bonus_craft: Optional[Rect]
    speed_multiplier: float
    speed_stage: int
    enemies_alive: int


class Session:
    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.phase = Phase.TITLE
        self.score = 0
        self.wave = 1
        self.player = Player(self.config)
        self.swarm = Swarm(self.config, self.rng)
        self.player_bullets: List[Projectile] = []
        self.enemy_bullets: List[Projectile] = []
        self.bonus_craft: Optional[BonusCraft] = None
        self.respawning = False
        self.respawn_started = 0.0
        self.last_bonus_spawn = 0.0

    # ============================
    # PHASES
    # ============================
    def start(self, now: float, events: Optional[FrameEvents] = None):
        """TITLE -> PLAYING. The bonus craft schedule counts from here."""
        self.last_bonus_spawn = now
        self._set_phase(Phase.PLAYING, events)

    def reset(self, events: Optional[FrameEvents] = None):
        """Back to TITLE with everything (score, wave, lives, formation, timers) fresh."""
        self.score = 0
        self.wave = 1
        self.player.reset()
        self.swarm.reset()
        self.player_bullets = []
        self.enemy_bullets = []
        self.bonus_craft = None
        self.respawning = False
        self.respawn_started = 0.0
        self.last_bonus_spawn = 0.0
        self._set_phase(Phase.TITLE, events)

    def _game_over(self, events: FrameEvents):
        LOGGER.info("Game over: score %d, wave %d", self.score, self.wave)
        self._set_phase(Phase.GAME_OVER, events)

    def _next_wave(self, events: FrameEvents):
        self.wave += 1
        self.swarm.reset()
        self.player_bullets = []
        self.enemy_bullets = []
        events.emit(EventKind.WAVE_ADVANCED, self.wave)
        LOGGER.info("Wave %d", self.wave)

    def _set_phase(self, phase: Phase, events: Optional[FrameEvents]):
        if phase is self.phase:
            return
        LOGGER.info("Phase %s -> %s", self.phase.value, phase.value)
        self.phase = phase
        if events is not None:
            events.emit(EventKind.PHASE_CHANGED, phase)

    # ============================
    # FRAME
    # ============================
    def advance(self, dt: float, now: float, input_state: Optional[InputState] = None) -> FrameEvents:
        if not math.isfinite(dt) or not math.isfinite(now):
            raise InvariantViolation(f"dt and now must be finite, got dt={dt!r} now={now!r}")
        if dt < 0:
            LOGGER.warning("Negative dt %.4f clamped to 0", dt)
            dt = 0.0
        inp = input_state or NO_INPUT
        events = FrameEvents()

        if self.phase is Phase.TITLE:
            if inp.confirm:
                self.start(now, events)
        elif self.phase is Phase.PLAYING:
            self._update_playing(dt, now, inp, events)
        elif self.phase is Phase.GAME_OVER:
            if inp.confirm:
                self.reset(events)
        return events

    def _update_playing(self, dt: float, now: float, inp: InputState, events: FrameEvents):
        # Respawn freeze; once it expires the rest of this frame runs normally
        if self.respawning:
            if now - self.respawn_started < self.config.respawn_delay_ms:
                return
            self.respawning = False
            self.player.reset_position()
            self.enemy_bullets = []

        # 1) Player
        self.player.update(dt, inp.move_left, inp.move_right)
        if inp.fire and len(self.player_bullets) < self.config.player_max_bullets:
            bullet = self.player.shoot(now)
            if bullet is not None:
                self.player_bullets.append(bullet)
                events.emit(EventKind.PLAYER_FIRED)

        # 2) Swarm
        result = self.swarm.update(dt, now)
        for bullet in result.projectiles:
            self.enemy_bullets.append(bullet)
            events.emit(EventKind.ENEMY_FIRED)
        if result.stage_changed:
            events.emit(EventKind.SPEED_STAGE_CHANGED, result.stage)

        # 3) Bonus craft
        self._update_bonus_craft(dt, now)

        # 4) Projectiles
        self._update_projectiles(dt)

        # 5) Collisions
        self.resolve_collisions(now, events)
        contact = self.check_contact()

        # 6) End of game / wave
        if self.player.lives <= 0:
            self._game_over(events)
        elif contact:
            self._game_over(events)
        elif self.swarm.alive_count() == 0:
            self._next_wave(events)

    def spawn_bonus_craft(self, now: float, direction: Optional[int] = None) -> Optional[BonusCraft]:
        """Launch a bonus craft unless one is already flying."""
        if self.bonus_craft is not None and self.bonus_craft.active:
            return None
        self.bonus_craft = BonusCraft(self.config, direction, self.rng)
        self.last_bonus_spawn = now
        LOGGER.debug("Bonus craft launched heading %+d", self.bonus_craft.direction)
        return self.bonus_craft

    def _update_bonus_craft(self, dt: float, now: float):
        if self.bonus_craft is None and now - self.last_bonus_spawn >= self.config.bonus_spawn_interval_ms:
            self.spawn_bonus_craft(now)
        if self.bonus_craft is not None:
            self.bonus_craft.update(dt)
            if not self.bonus_craft.active:
                self.bonus_craft = None

    def _update_projectiles(self, dt: float):
        for b in self.player_bullets:
            b.update(dt)
        for b in self.enemy_bullets:
            b.update(dt)
        self.player_bullets = [b for b in self.player_bullets if not b.is_out_of_bounds()]
        self.enemy_bullets = [b for b in self.enemy_bullets if not b.is_out_of_bounds()]

    # ============================
    # COLLISIONS
    # ============================
    def resolve_collisions(self, now: float, events: FrameEvents):
        if self.respawning:
            return

        # Player bullets vs swarm, then vs bonus craft; one resolution per bullet
        for b in list(self.player_bullets):
            enemy = self.swarm.check_bullet_collision(b)
            if enemy is not None:
                self.player_bullets.remove(b)
                self.score += self.config.score_per_enemy
                events.emit(EventKind.ENEMY_KILLED, (enemy.row, enemy.col))
                continue
            craft = self.bonus_craft
            if craft is not None and craft.active and overlaps(b.rect, craft.rect):
                self.player_bullets.remove(b)
                craft.destroy()
                self.bonus_craft = None
                self.score += self.config.score_bonus
                events.emit(EventKind.BONUS_KILLED)
                LOGGER.info("Bonus craft down (+%d)", self.config.score_bonus)

        # Enemy bullets vs player; a single hit per frame
        player_rect = self.player.rect
        for b in self.enemy_bullets:
            if overlaps(b.rect, player_rect):
                self.enemy_bullets.remove(b)
                self.player.hit()
                events.emit(EventKind.PLAYER_HIT, max(0, self.player.lives))
                LOGGER.info("Player hit, %d lives left", max(0, self.player.lives))
                if self.player.lives > 0:
                    self.respawning = True
                    self.respawn_started = now
                break

    def check_contact(self) -> bool:
        """True when a living enemy physically touches the player."""
        if self.respawning:
            return False
        return self.swarm.check_player_collision(self.player.rect) is not None

    # ============================
    # SNAPSHOT
    # ============================
    def snapshot(self) -> Snapshot:
        enemies = tuple(EnemyView(e.rect, e.row, e.col) for e in self.swarm.enemies if e.alive)
        projectiles = tuple(ProjectileView(b.rect, b.is_player_owned)
                            for b in self.player_bullets + self.enemy_bullets)
        craft = self.bonus_craft.rect if self.bonus_craft is not None and self.bonus_craft.active else None
        return Snapshot(
            phase=self.phase,
            score=self.score,
            wave=self.wave,
            lives=max(0, self.player.lives),
            respawning=self.respawning,
            player=self.player.rect,
            enemies=enemies,
            projectiles=projectiles,
            bonus_craft=craft,
            speed_multiplier=self.swarm.speed_multiplier(),
            speed_stage=self.swarm.speed_stage(),
            enemies_alive=len(enemies),
        )
