"""
Space Invader — pygame front end for the `invaders` simulation.
File: spaceinvader.py

How to run:
  pip install -e .
  python spaceinvader.py [--seed N] [--mute] [--debug]

The simulation (formation march, speed stages, collisions, lives and waves)
lives in the `invaders` package and never touches pygame. This module is the
presentation side: it polls the keyboard, keeps the game clock, calls
Session.advance once per frame, plays a procedural sound for each FrameEvent
and paints Session.snapshot(). All assets are generated at runtime; no
external images or sounds are required.
"""
from __future__ import annotations
import argparse
import logging
import math
import random
import struct
import sys
from typing import List, Optional, Sequence, Tuple

import pygame

from invaders import EventKind, FrameEvents, GameConfig, InputState, Phase, Session, Snapshot
from invaders.utils import Rect, clamp, lerp

LOGGER = logging.getLogger(__name__)

# ============================
# SETTINGS & CONSTANTS
# ============================
FPS = 60
TITLE = "Space Invader"
ENABLE_SOUND = True

# Colors
COLOR_BG = (0, 0, 0)
COLOR_UI = (0, 255, 0)
COLOR_PLAYER = (0, 255, 0)
COLOR_BULLET_PLAYER = (0, 255, 0)
COLOR_BULLET_ENEMY = (255, 0, 0)
COLOR_BONUS = (255, 255, 0)
COLOR_BONUS_DOME = (255, 170, 0)
COLOR_EYE = (255, 255, 255)
COLOR_PUPIL = (0, 0, 0)
COLOR_ANTENNA_TIP = (255, 255, 0)
COLOR_HIGHLIGHT = (255, 255, 0)
COLOR_GAME_OVER = (255, 0, 0)
COLOR_DIM = (80, 140, 80)

# Enemies get redder once the formation runs faster than this
DANGER_MULTIPLIER = 1.5

SAMPLE_RATE = 22050


def configure_logging(debug: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def enemy_color(base: Tuple[int, int, int], multiplier: float) -> Tuple[int, int, int]:
    """Row colour, pushed toward red as the formation speeds up."""
    if multiplier <= DANGER_MULTIPLIER:
        return base
    intensity = min((multiplier - 1.0) * 0.4, 0.9)
    r, g, b = base
    return (
        int(clamp(round(r + intensity * 80), 0, 255)),
        int(clamp(round(g - intensity * 30), 0, 255)),
        int(clamp(round(b - intensity * 30), 0, 255)),
    )


def to_pygame_rect(r: Rect) -> pygame.Rect:
    return pygame.Rect(int(round(r.x)), int(round(r.y)), int(r.width), int(r.height))


# ============================
# INPUT
# ============================
class KeyboardInput:
    """Turns raw key states into an InputState; fire/confirm fire once per press."""
    LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
    RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
    FIRE_KEYS = (pygame.K_SPACE,)
    CONFIRM_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)

    def __init__(self):
        self._fire_was_down = False
        self._confirm_was_down = False

    @staticmethod
    def _any(pressed, keys: Sequence[int]) -> bool:
        return any(pressed[k] for k in keys)

    def poll(self, pressed) -> InputState:
        fire_down = self._any(pressed, self.FIRE_KEYS)
        confirm_down = self._any(pressed, self.CONFIRM_KEYS)
        state = InputState(
            move_left=self._any(pressed, self.LEFT_KEYS),
            move_right=self._any(pressed, self.RIGHT_KEYS),
            fire=fire_down and not self._fire_was_down,
            confirm=confirm_down and not self._confirm_was_down,
        )
        self._fire_was_down = fire_down
        self._confirm_was_down = confirm_down
        return state

    def reset(self):
        self._fire_was_down = False
        self._confirm_was_down = False


# ============================
# SOUND
# ============================
class SoundManager:
    """Generate and play very small procedural sounds. No external files required."""
    STAGE_BASE_FREQ = 330

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.sounds = {}
        self._init_mixer()
        if self.enabled:
            self.sounds["player_fired"] = self._make_tone(800, 100, 0.25)
            self.sounds["enemy_fired"] = self._make_tone(400, 150, 0.15)
            self.sounds["enemy_killed"] = self._make_noise_pop(200, 0.3)
            self.sounds["bonus_killed"] = self._make_sequence([440, 554, 659, 880], 80, 0.3)
            self.sounds["player_hit"] = self._make_sweep(400, 100, 500, 0.35)
            self.sounds["wave"] = self._make_sequence([523, 659, 784, 1047], 90, 0.25)
            self.sounds["game_start"] = self._make_sequence([262, 330, 392, 523], 100, 0.25)
            self.sounds["game_over"] = self._make_sequence([392, 330, 262, 196], 200, 0.25)
            for stage in range(2, 5):
                self.sounds[f"stage_{stage}"] = self._make_tone(self.STAGE_BASE_FREQ * stage, 250, 0.2)

    def _init_mixer(self):
        if not self.enabled:
            return
        try:
            pygame.mixer.pre_init(frequency=SAMPLE_RATE, size=-16, channels=1, buffer=512)
            pygame.mixer.init()
        except pygame.error as exc:
            LOGGER.warning("Audio unavailable, continuing muted: %s", exc)
            self.enabled = False

    @staticmethod
    def _samples_tone(freq: float, ms: int, volume: float) -> bytearray:
        n = max(1, int(SAMPLE_RATE * (ms / 1000.0)))
        amp = int(32767 * volume)
        buf = bytearray()
        for i in range(n):
            t = i / SAMPLE_RATE
            # short linear fade-out keeps the tail from clicking
            fade = 1.0 - (i / n) * 0.5
            s = int(amp * fade * math.sin(2 * math.pi * freq * t))
            buf += struct.pack('<h', s)
        return buf

    def _to_sound(self, buf: bytearray):
        try:
            return pygame.mixer.Sound(buffer=bytes(buf))
        except pygame.error:
            return None

    def _make_tone(self, freq: int, ms: int, volume: float):
        if not self.enabled:
            return None
        return self._to_sound(self._samples_tone(freq, ms, volume))

    def _make_sequence(self, freqs: List[int], ms: int, volume: float):
        if not self.enabled:
            return None
        buf = bytearray()
        for f in freqs:
            buf += self._samples_tone(f, ms, volume)
        return self._to_sound(buf)

    def _make_sweep(self, start_freq: int, end_freq: int, ms: int, volume: float):
        if not self.enabled:
            return None
        n = max(1, int(SAMPLE_RATE * (ms / 1000.0)))
        amp = int(32767 * volume)
        buf = bytearray()
        phase = 0.0
        for i in range(n):
            freq = lerp(start_freq, end_freq, i / n)
            phase += 2 * math.pi * freq / SAMPLE_RATE
            buf += struct.pack('<h', int(amp * (1.0 - i / n) * math.sin(phase)))
        return self._to_sound(buf)

    def _make_noise_pop(self, ms: int, volume: float):
        if not self.enabled:
            return None
        n = max(1, int(SAMPLE_RATE * (ms / 1000.0)))
        buf = bytearray()
        for i in range(n):
            decay = 1.0 - (i / n)
            s = int(32767 * volume * decay * (random.random() * 2 - 1))
            buf += struct.pack('<h', s)
        return self._to_sound(buf)

    @staticmethod
    def sound_name(kind: EventKind, value=None) -> Optional[str]:
        if kind is EventKind.PLAYER_FIRED:
            return "player_fired"
        if kind is EventKind.ENEMY_FIRED:
            return "enemy_fired"
        if kind is EventKind.ENEMY_KILLED:
            return "enemy_killed"
        if kind is EventKind.BONUS_KILLED:
            return "bonus_killed"
        if kind is EventKind.PLAYER_HIT:
            return "player_hit"
        if kind is EventKind.WAVE_ADVANCED:
            return "wave"
        if kind is EventKind.SPEED_STAGE_CHANGED:
            # Back to stage 1 (new wave) is silent
            return f"stage_{value}" if value and value > 1 else None
        if kind is EventKind.PHASE_CHANGED:
            if value is Phase.PLAYING:
                return "game_start"
            if value is Phase.GAME_OVER:
                return "game_over"
        return None

    def handle(self, events: FrameEvents):
        for event in events:
            name = self.sound_name(event.kind, event.value)
            if name is not None:
                self.play(name)

    def play(self, name: str):
        if not self.enabled:
            return
        snd = self.sounds.get(name)
        if snd is not None:
            try:
                snd.play()
            except pygame.error:
                pass


# ============================
# GAME
# ============================
class Game:
    def __init__(self, seed: Optional[int] = None, sound: bool = ENABLE_SOUND,
                 config: Optional[GameConfig] = None):
        pygame.init()
        self.config = config or GameConfig()
        pygame.display.set_caption(TITLE)
        self.screen = pygame.display.set_mode((self.config.width, self.config.height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont(None, 26)
        self.smallfont = pygame.font.SysFont(None, 20)
        self.bigfont = pygame.font.SysFont(None, 48)
        self.sound = SoundManager(sound)
        self.input = KeyboardInput()

        self.session = Session(self.config, random.Random(seed))
        self.paused = False
        # Game clock in ms; stands still while paused so the swarm timers do too
        self.now_ms = 0.0

    # ============================
    # MAIN LOOP
    # ============================
    def run(self):
        running = True
        while running:
            dt = self.clock.tick(FPS) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if not self.on_key(event.key):
                        running = False

            inp = self.input.poll(pygame.key.get_pressed())
            if not self.paused:
                self.now_ms += dt * 1000.0
                events = self.session.advance(dt, self.now_ms, inp)
                self.sound.handle(events)

            self.draw()
        pygame.quit()

    def on_key(self, key: int) -> bool:
        """React to one-off keys; returns False to quit."""
        phase = self.session.phase
        if key == pygame.K_ESCAPE:
            if phase is Phase.PLAYING and not self.paused:
                self.paused = True
            elif phase is Phase.GAME_OVER:
                self.session.reset()
            else:
                return False
        elif key == pygame.K_p and phase is Phase.PLAYING:
            self.paused = not self.paused
        elif key == pygame.K_RETURN and self.paused:
            self.paused = False
            self.input.reset()
        elif key == pygame.K_F1:
            swarm = self.session.swarm
            LOGGER.info("Wave %d | Enemies %d | Speed x%.1f (stage %d) | Bounds %s",
                        self.session.wave, swarm.alive_count(), swarm.speed_multiplier(),
                        swarm.speed_stage(), swarm.bounds())
        return True

    # ============================
    # RENDERING
    # ============================
    def draw(self):
        snap = self.session.snapshot()
        t = self.now_ms
        self.screen.fill(COLOR_BG)
        if snap.phase is Phase.TITLE:
            self.draw_menu()
        else:
            self.draw_game(snap, t)
            if snap.phase is Phase.GAME_OVER:
                self.draw_game_over(snap)
            elif self.paused:
                self.draw_paused()
        pygame.display.flip()

    def draw_game(self, snap: Snapshot, t: float):
        for e in snap.enemies:
            self.draw_enemy(to_pygame_rect(e.rect), enemy_color(self.config.row_color(e.row),
                                                                 snap.speed_multiplier), t)
        if snap.bonus_craft is not None:
            self.draw_bonus_craft(to_pygame_rect(snap.bonus_craft), t)
        for p in snap.projectiles:
            color = COLOR_BULLET_PLAYER if p.is_player_owned else COLOR_BULLET_ENEMY
            pygame.draw.rect(self.screen, color, to_pygame_rect(p.rect))
        # Blink while respawning
        if not snap.respawning or int(t / 200) % 2 == 0:
            self.draw_player(to_pygame_rect(snap.player))
        if snap.respawning:
            msg = self.font.render("RESPAWNING...", True, COLOR_HIGHLIGHT)
            self.screen.blit(msg, (self.config.width // 2 - msg.get_width() // 2, self.config.height // 2))
        self.draw_hud(snap)

    def draw_player(self, r: pygame.Rect):
        pygame.draw.rect(self.screen, COLOR_PLAYER, r)
        cannon = pygame.Rect(0, 0, 6, 8)
        cannon.midbottom = (r.centerx, r.top)
        pygame.draw.rect(self.screen, COLOR_PLAYER, cannon)

    def draw_enemy(self, r: pygame.Rect, color: Tuple[int, int, int], t: float):
        w, h = r.width, r.height
        # Head, wide middle and lower body
        pygame.draw.rect(self.screen, color, (r.left + w // 10, r.top, w - w // 5, h * 2 // 5))
        pygame.draw.rect(self.screen, color, (r.left, r.top + h // 6, w, h // 2))
        pygame.draw.rect(self.screen, color, (r.left + w // 6, r.top + h * 2 // 3, w * 2 // 3, h // 5))
        # Eyes, blinking once a second
        eye = max(2, w // 8)
        for ex in (r.left + w // 4, r.right - w // 4 - eye):
            pygame.draw.rect(self.screen, COLOR_EYE, (ex, r.top + h // 4, eye, eye))
            pupil_h = eye // 2 if int(t / 1000) % 2 == 0 else max(1, eye // 4)
            pygame.draw.rect(self.screen, COLOR_PUPIL, (ex + eye // 4, r.top + h // 4 + eye // 4, eye // 2, pupil_h))
        # Legs alternate every half second
        walk = int(t / 500) % 2
        leg = max(2, w // 10)
        for i in range(5):
            lx = r.left + 2 + i * (w - leg - 4) // 4
            ly = r.bottom - leg + (2 if (i + walk) % 2 else 0)
            pygame.draw.rect(self.screen, color, (lx, ly, leg, leg))
        # Antennae
        for ax in (r.left + w // 3, r.right - w // 3):
            pygame.draw.rect(self.screen, color, (ax, r.top - 3, 2, 5))
            pygame.draw.rect(self.screen, COLOR_ANTENNA_TIP, (ax - 1, r.top - 5, 3, 3))

    def draw_bonus_craft(self, r: pygame.Rect, t: float):
        body = pygame.Rect(r.left, r.top + r.height // 6, r.width, r.height * 2 // 3)
        pygame.draw.ellipse(self.screen, COLOR_BONUS, body)
        dome = pygame.Rect(0, 0, r.width * 2 // 3, r.height // 2)
        dome.center = (r.centerx, r.top + r.height // 3)
        pygame.draw.ellipse(self.screen, COLOR_BONUS_DOME, dome)
        if int(t / 300) % 2 == 0:
            for i in range(5):
                lx = r.left + r.width * (i + 1) // 6
                pygame.draw.circle(self.screen, COLOR_EYE, (lx, r.top + int(r.height * 0.7)), 3)

    def draw_hud(self, snap: Snapshot):
        pad = 20
        lines = [
            f"Score: {snap.score}",
            f"Lives: {snap.lives}",
            f"Wave: {snap.wave}",
            f"Enemies: {snap.enemies_alive}",
        ]
        for i, text in enumerate(lines):
            txt = self.font.render(text, True, COLOR_UI)
            self.screen.blit(txt, (pad, pad + i * 26))
        speed = self.smallfont.render(f"Speed: x{snap.speed_multiplier:.1f}", True, COLOR_HIGHLIGHT)
        self.screen.blit(speed, (pad, pad + len(lines) * 26))

    def _center_text(self, font: pygame.font.Font, text: str, color, y: int):
        s = font.render(text, True, color)
        self.screen.blit(s, (self.config.width // 2 - s.get_width() // 2, y))

    def draw_menu(self):
        self._center_text(self.bigfont, "SPACE INVADERS", COLOR_UI, 180)
        self._center_text(self.font, "Press Enter to Start", COLOR_HIGHLIGHT, 330)
        tips = [
            "Left/Right or A/D - Move",
            "Space - Shoot",
            "P or Esc - Pause",
            "Esc in Menu - Quit",
            "F1 - Log formation state",
        ]
        for i, tip in enumerate(tips):
            self._center_text(self.font, tip, COLOR_DIM, 400 + i * 24)

    def _overlay(self, alpha: int):
        overlay = pygame.Surface((self.config.width, self.config.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, alpha))
        self.screen.blit(overlay, (0, 0))

    def draw_paused(self):
        self._overlay(120)
        mid = self.config.height // 2
        self._center_text(self.bigfont, "Paused", COLOR_UI, mid - 40)
        self._center_text(self.font, "Press P or Enter to continue", COLOR_HIGHLIGHT, mid + 10)

    def draw_game_over(self, snap: Snapshot):
        self._overlay(180)
        self._center_text(self.bigfont, "GAME OVER", COLOR_GAME_OVER, 230)
        self._center_text(self.font, f"Final Score: {snap.score}", COLOR_UI, 290)
        self._center_text(self.font, f"Wave: {snap.wave}", COLOR_UI, 320)
        self._center_text(self.font, "Press Enter to Restart", COLOR_DIM, 390)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="spaceinvader", description=TITLE)
    parser.add_argument("--seed", type=int, default=None, help="seed for enemy fire and bonus craft")
    parser.add_argument("--mute", action="store_true", help="disable sound")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.debug)
    Game(seed=args.seed, sound=not args.mute).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
