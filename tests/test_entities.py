import itertools
import random

import pytest

from invaders import BonusCraft, Enemy, Player, Projectile


# ============================
# Player
# ============================
def test_player_starts_centred_on_bottom_row(config):
    p = Player(config)
    assert p.x == (800 - 40) / 2
    assert p.y == 600 - 20 - 20
    assert p.lives == 3


@pytest.mark.parametrize("dt", [0.0, 0.016, 0.1, 1.0, 10.0])
@pytest.mark.parametrize("left,right", list(itertools.product([False, True], repeat=2)))
def test_player_stays_on_playfield(config, dt, left, right):
    p = Player(config)
    for _ in range(20):
        p.update(dt, left, right)
        assert 0 <= p.x <= config.width - p.width


def test_player_moves_by_speed_times_dt(config):
    p = Player(config)
    x0 = p.x
    p.update(0.1, False, True)
    assert p.x == pytest.approx(x0 + 30.0)
    p.update(0.1, True, False)
    assert p.x == pytest.approx(x0)


def test_both_directions_cancel(config):
    p = Player(config)
    x0 = p.x
    p.update(0.5, True, True)
    assert p.x == x0


def test_shoot_within_cooldown_fires_once(config):
    p = Player(config)
    shots = [p.shoot(1000.0), p.shoot(1000.0 + config.player_cooldown_ms - 1)]
    assert sum(s is not None for s in shots) == 1
    assert p.shoot(1000.0 + config.player_cooldown_ms) is not None


def test_shot_is_centred_above_player(config):
    p = Player(config)
    b = p.shoot(500.0)
    assert b.is_player_owned
    assert b.speed < 0
    assert b.x + b.width / 2 == pytest.approx(p.x + p.width / 2)
    assert b.y + b.height == pytest.approx(p.y)
    assert p.last_shot_time == 500.0


def test_can_shoot(config):
    p = Player(config)
    p.last_shot_time = 1000.0
    assert not p.can_shoot(1199.0)
    assert p.can_shoot(1200.0)


def test_hit_and_resets(config):
    p = Player(config)
    p.x = 0
    p.last_shot_time = 4000.0
    p.hit()
    assert p.lives == 2

    p.reset_position()
    assert p.lives == 2
    assert p.x == (800 - 40) / 2
    assert p.last_shot_time == 0

    p.hit()
    p.hit()
    p.reset()
    assert p.lives == config.player_lives


# ============================
# Projectile
# ============================
def test_projectile_moves_and_leaves_field(config):
    up = Projectile(100, 5, -400, True, config)
    up.update(0.01)
    assert up.y == pytest.approx(1.0)
    assert not up.is_out_of_bounds()
    up.update(0.05)
    assert up.y < -up.height
    assert up.is_out_of_bounds()

    down = Projectile(100, 590, 400, False, config)
    down.update(0.05)
    assert down.is_out_of_bounds()


# ============================
# Enemy
# ============================
def test_enemy_shoots_down_from_its_centre(config):
    e = Enemy(100, 200, 2, 3, config)
    b = e.shoot()
    assert not b.is_player_owned
    assert b.speed > 0
    assert b.x + b.width / 2 == pytest.approx(e.x + e.width / 2)
    assert b.y == e.y + e.height


def test_enemy_color_follows_row(config):
    assert Enemy(0, 0, 0, 0, config).color == config.row_colors[0]
    assert Enemy(0, 0, 4, 0, config).color == config.row_colors[4]


def test_enemy_destroy(config):
    e = Enemy(0, 0, 0, 0, config)
    e.destroy()
    assert not e.alive


# ============================
# BonusCraft
# ============================
def test_bonus_craft_crosses_left_to_right(config):
    craft = BonusCraft(config, direction=1)
    assert craft.x == -craft.width
    assert craft.y == config.bonus_y
    crossing = (config.width + craft.width) / craft.speed  # 8.5s
    steps = int(crossing / 0.5)
    for _ in range(steps - 1):
        craft.update(0.5)
        assert craft.active
    craft.update(0.5)
    assert not craft.active


def test_bonus_craft_crosses_right_to_left(config):
    craft = BonusCraft(config, direction=-1)
    assert craft.x == config.width
    craft.update(8.0)
    assert craft.active
    craft.update(0.5)
    assert not craft.active


@pytest.mark.parametrize("direction", [1, -1])
def test_bonus_craft_leaves_after_frame_sized_steps(config, direction):
    craft = BonusCraft(config, direction=direction)
    # 510 frames at 60 fps is exactly (800 + 50) / 100 seconds
    for _ in range(509):
        craft.update(1 / 60)
        assert craft.active
    craft.update(1 / 60)
    assert not craft.active


def test_bonus_craft_random_side(config):
    rng = random.Random(3)
    directions = {BonusCraft(config, rng=rng).direction for _ in range(50)}
    assert directions == {1, -1}


def test_bonus_craft_stops_once_destroyed(config):
    craft = BonusCraft(config, direction=1)
    craft.destroy()
    x = craft.x
    craft.update(1.0)
    assert craft.x == x
    assert not craft.active


def test_bonus_craft_rejects_bad_direction(config):
    with pytest.raises(ValueError):
        BonusCraft(config, direction=0)
