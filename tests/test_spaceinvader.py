from collections import defaultdict

import pygame
import pytest

import spaceinvader
from invaders import EventKind, FrameEvents, Phase
from invaders.utils import Rect


def keys(*down):
    pressed = defaultdict(bool)
    for k in down:
        pressed[k] = True
    return pressed


def test_movement_keys_are_held_queries():
    kb = spaceinvader.KeyboardInput()
    for _ in range(3):
        state = kb.poll(keys(pygame.K_LEFT, pygame.K_d))
        assert state.move_left and state.move_right


def test_fire_triggers_once_per_press():
    kb = spaceinvader.KeyboardInput()
    assert kb.poll(keys(pygame.K_SPACE)).fire
    assert not kb.poll(keys(pygame.K_SPACE)).fire
    assert not kb.poll(keys()).fire
    assert kb.poll(keys(pygame.K_SPACE)).fire


def test_confirm_accepts_either_enter_key():
    kb = spaceinvader.KeyboardInput()
    assert kb.poll(keys(pygame.K_RETURN)).confirm
    assert not kb.poll(keys(pygame.K_RETURN)).confirm
    kb.reset()
    assert kb.poll(keys(pygame.K_KP_ENTER)).confirm


@pytest.mark.parametrize("kind,value,name", [
    (EventKind.PLAYER_FIRED, None, "player_fired"),
    (EventKind.ENEMY_KILLED, (0, 0), "enemy_killed"),
    (EventKind.BONUS_KILLED, None, "bonus_killed"),
    (EventKind.SPEED_STAGE_CHANGED, 3, "stage_3"),
    (EventKind.SPEED_STAGE_CHANGED, 1, None),
    (EventKind.PHASE_CHANGED, Phase.PLAYING, "game_start"),
    (EventKind.PHASE_CHANGED, Phase.GAME_OVER, "game_over"),
    (EventKind.PHASE_CHANGED, Phase.TITLE, None),
])
def test_sound_for_event(kind, value, name):
    assert spaceinvader.SoundManager.sound_name(kind, value) == name


def test_muted_sound_manager_ignores_events():
    sound = spaceinvader.SoundManager(enabled=False)
    events = FrameEvents()
    events.emit(EventKind.PLAYER_FIRED)
    events.emit(EventKind.PHASE_CHANGED, Phase.GAME_OVER)
    sound.handle(events)
    assert sound.sounds == {}


def test_enemy_color_reddens_when_fast():
    base = (255, 204, 0)
    assert spaceinvader.enemy_color(base, 1.0) == base
    assert spaceinvader.enemy_color(base, 1.5) == base
    r, g, b = spaceinvader.enemy_color(base, 3.0)
    assert r == 255
    assert g == 180
    assert b == 0


def test_to_pygame_rect():
    r = spaceinvader.to_pygame_rect(Rect(10.4, 20.6, 4, 12))
    assert (r.x, r.y, r.width, r.height) == (10, 21, 4, 12)


def test_parse_args():
    args = spaceinvader.parse_args(["--seed", "7", "--mute"])
    assert args.seed == 7
    assert args.mute
    assert not args.debug
