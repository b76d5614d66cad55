"""Player movement, turning and collision with the outside of the map."""

from __future__ import annotations

import math

from cubecaster.entities import (
    CELL_HEIGHT,
    CELL_WIDTH,
    MOVE_SPEED,
    OUTSIDE,
    RAD_PER_DEG,
    THREE_HALF_PI,
    TWO_PI,
    Player,
    Vec2,
)
from cubecaster.gamemap import GameMap
from cubecaster.raycast import HORIZONTAL, VERTICAL, get_offset

MARGIN = 20.0
TURN_STEP = RAD_PER_DEG * 2.5


def collision(player: Player, game_map: GameMap, pos: Vec2) -> Vec2:
    """Push ``pos`` back so it keeps a margin from neighbouring outside cells."""
    col = int(pos.x / CELL_WIDTH)
    row = int(pos.y / CELL_HEIGHT)
    x, y = pos.x, pos.y
    if (player.pos.x < pos.x and get_offset(pos, 0.0, VERTICAL) < MARGIN
            and game_map.cell(row, col + 1) == OUTSIDE):
        x -= MARGIN - get_offset(pos, 0.0, VERTICAL)
    elif (player.pos.x >= pos.x and get_offset(pos, math.pi, VERTICAL) < MARGIN
            and game_map.cell(row, col - 1) == OUTSIDE):
        x += MARGIN - get_offset(pos, math.pi, VERTICAL)
    if (player.pos.y < pos.y and get_offset(pos, math.pi / 2, HORIZONTAL) < MARGIN
            and game_map.cell(row + 1, col) == OUTSIDE):
        y -= MARGIN - get_offset(pos, math.pi / 2, HORIZONTAL)
    elif (player.pos.y >= pos.y and get_offset(pos, THREE_HALF_PI, HORIZONTAL) < MARGIN
            and game_map.cell(row - 1, col) == OUTSIDE):
        y += MARGIN - get_offset(pos, THREE_HALF_PI, HORIZONTAL)
    return Vec2(x, y)


def player_move(player: Player, game_map: GameMap, pressed: bool, rad: float) -> None:
    """Step the player one move in direction ``rad`` if ``pressed``."""
    if not pressed:
        return
    if rad <= 0:
        rad += TWO_PI
    if rad >= TWO_PI:
        rad -= TWO_PI
    moved = Vec2(
        player.pos.x + math.cos(rad) * MOVE_SPEED,
        player.pos.y + math.sin(rad) * MOVE_SPEED,
    )
    moved = collision(player, game_map, moved)
    if game_map.cell(int(moved.y / CELL_HEIGHT), int(moved.x / CELL_WIDTH)) != OUTSIDE:
        player.pos = moved


def limit_player_in_map(player: Player, game_map: GameMap) -> None:
    """Clamp the player's position to the map, keeping a margin from its edges."""
    max_x = game_map.width * CELL_WIDTH - MARGIN
    max_y = game_map.height * CELL_HEIGHT - MARGIN
    x, y = player.pos.x, player.pos.y
    y = max(y, MARGIN)
    y = min(y, max_y)
    x = min(x, max_x)
    x = max(x, MARGIN)
    player.pos = Vec2(x, y)


def update_player(player: Player, game_map: GameMap) -> None:
    """Apply one frame of the held movement and turning keys."""
    moves = (
        (player.moving_forward, 0.0),
        (player.strafing_right, math.pi / 2),
        (player.moving_backward, -math.pi),
        (player.strafing_left, -math.pi / 2),
    )
    for pressed, offset in moves:
        player_move(player, game_map, pressed, player.angle + offset)
    if player.turning_right:
        player.angle += TURN_STEP
        if player.angle >= TWO_PI:
            player.angle -= TWO_PI
    if player.turning_left:
        player.angle -= TURN_STEP
        if player.angle < 0:
            player.angle += TWO_PI
    limit_player_in_map(player, game_map)
    if player.angle < 0:
        player.angle += TWO_PI