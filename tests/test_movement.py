import math

import pytest

from cubecaster.entities import CELL_HEIGHT, MOVE_SPEED, RAD_PER_DEG, TWO_PI, Vec2
from cubecaster.gamemap import build_game_map, place_player
from cubecaster.movement import (
    collision,
    limit_player_in_map,
    player_move,
    update_player,
)
from cubecaster.parser import LevelFile
from cubecaster.raycast import HORIZONTAL, VERTICAL, distance, get_offset

ROOM = ["11111", "1N001", "10001", "11111"]


@pytest.fixture
def world():
    level = LevelFile(north="n", south="s", west="w", east="e", rows=ROOM)
    game_map = build_game_map(level)
    player = place_player(game_map)
    return game_map, player


def test_idle_update_keeps_state(world):
    game_map, player = world
    pos, angle = Vec2(player.pos.x, player.pos.y), player.angle
    update_player(player, game_map)
    assert player.pos == pos
    assert player.angle == angle


def test_forward_moves_one_step(world):
    game_map, player = world
    start = Vec2(player.pos.x, player.pos.y)
    player.moving_forward = True
    update_player(player, game_map)
    assert distance(start, player.pos) == pytest.approx(MOVE_SPEED)
    assert player.pos.y > start.y


def test_backward_undoes_forward(world):
    game_map, player = world
    start = Vec2(player.pos.x, player.pos.y)
    player.moving_forward = True
    update_player(player, game_map)
    player.moving_forward = False
    player.moving_backward = True
    update_player(player, game_map)
    assert player.pos.x == pytest.approx(start.x)
    assert player.pos.y == pytest.approx(start.y)


def test_turning_right_adds_step(world):
    game_map, player = world
    start = player.angle
    player.turning_right = True
    update_player(player, game_map)
    assert player.angle == pytest.approx(start + RAD_PER_DEG * 2.5)


def test_turning_left_wraps_below_zero(world):
    game_map, player = world
    player.angle = 0.0
    player.turning_left = True
    update_player(player, game_map)
    assert player.angle == pytest.approx(TWO_PI - RAD_PER_DEG * 2.5)


def test_turning_right_wraps_past_full_turn(world):
    game_map, player = world
    player.angle = TWO_PI - RAD_PER_DEG
    player.turning_right = True
    update_player(player, game_map)
    assert 0 <= player.angle < TWO_PI


def test_limit_player_in_map(world):
    game_map, player = world
    player.pos = Vec2(-50.0, 1e9)
    limit_player_in_map(player, game_map)
    assert player.pos.x == 20.0
    assert player.pos.y == game_map.height * CELL_HEIGHT - 20.0


def test_collision_keeps_margin_from_east_outside(world):
    game_map, player = world
    player.pos = Vec2(580.0, 250.0)
    result = collision(player, game_map, Vec2(590.0, 250.0))
    assert get_offset(result, 0.0, VERTICAL) == pytest.approx(20.0)
    assert result.y == 250.0


def test_collision_keeps_margin_from_west_outside(world):
    game_map, player = world
    player.pos = Vec2(120.0, 250.0)
    result = collision(player, game_map, Vec2(110.0, 250.0))
    assert get_offset(result, math.pi, VERTICAL) == pytest.approx(20.0)


def test_collision_keeps_margin_from_top_outside(world):
    game_map, player = world
    player.pos = Vec2(250.0, 120.0)
    result = collision(player, game_map, Vec2(250.0, 110.0))
    assert get_offset(result, 3 * math.pi / 2, HORIZONTAL) == pytest.approx(20.0)
    assert result.x == 250.0


def test_collision_away_from_edges_is_unchanged(world):
    game_map, player = world
    pos = Vec2(255.0, 245.0)
    assert collision(player, game_map, pos) == pos


def test_player_move_not_pressed(world):
    game_map, player = world
    start = Vec2(player.pos.x, player.pos.y)
    player_move(player, game_map, False, 0.5)
    assert player.pos == start


def test_player_move_blocked_by_outside(world):
    game_map, player = world
    player.pos = Vec2(595.0, 250.0)
    player_move(player, game_map, True, 0.0)
    assert player.pos == Vec2(595.0, 250.0)


def test_player_move_normalises_angle(world):
    game_map, player = world
    start = Vec2(player.pos.x, player.pos.y)
    player_move(player, game_map, True, -math.pi / 2)
    negative = player.pos
    player.pos = start
    player_move(player, game_map, True, 3 * math.pi / 2)
    assert player.pos.x == pytest.approx(negative.x)
    assert player.pos.y == pytest.approx(negative.y)
    assert player.pos.y < start.y