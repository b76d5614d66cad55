"""The playable grid: a walled map padded with outside cells, and player placement."""

from __future__ import annotations

import math
from dataclasses import dataclass

from cubecaster.entities import (
    CELL_HEIGHT,
    CELL_WIDTH,
    EAST,
    EMPTY,
    NORTH,
    OUTSIDE,
    SOUTH,
    THREE_HALF_PI,
    TWO_PI,
    WALL,
    WEST,
    Player,
    Vec2,
)
from cubecaster.parser import ERR_PLAYER, ERR_UNDEFINED, LevelError, LevelFile

ERR_NO_WALL = "cub3D: Map must be surrounded by walls"

_PLAYER_ANGLES = {
    NORTH: math.pi / 2,
    EAST: TWO_PI,
    SOUTH: THREE_HALF_PI,
    WEST: math.pi,
}


@dataclass
class GameMap:
    """A rectangular grid of cells; ``M`` marks space that lies outside the walls."""

    grid: list[list[str]]

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def cell(self, row: int, col: int) -> str:
        """Return the cell at ``row``, ``col``; anything off the grid is outside."""
        if 0 <= row < len(self.grid) and 0 <= col < len(self.grid[row]):
            return self.grid[row][col]
        return OUTSIDE


def _flood_fill(grid: list[list[str]], row: int, col: int) -> None:
    """Mark the space region containing ``row``, ``col`` as outside.

    Raises if the region touches a floor cell or anything other than a wall.
    """
    stack = [(row, col)]
    while stack:
        r, c = stack.pop()
        if r < 0 or c < 0 or r >= len(grid) or c >= len(grid[r]):
            continue
        cell = grid[r][c]
        if cell in (WALL, OUTSIDE):
            continue
        if cell == " ":
            grid[r][c] = OUTSIDE
        elif cell == EMPTY:
            raise LevelError(ERR_NO_WALL)
        else:
            raise LevelError(ERR_UNDEFINED)
        # Pushed in reverse so that left, up, right, down are explored in that order.
        stack.extend(((r + 1, c), (r, c + 1), (r - 1, c), (r, c - 1)))


def build_game_map(level: LevelFile) -> GameMap:
    """Pad the level's rows with a ring of spaces and check the walls are closed."""
    width = level.map_width + 2
    blank = [" "] * width
    grid = [list(blank)]
    grid.extend(list((" " + row).ljust(width)) for row in level.rows)
    grid.append(list(blank))
    for r, row in enumerate(grid):
        for c, cell in enumerate(row):
            if cell == " ":
                _flood_fill(grid, r, c)
    return GameMap(grid)


def place_player(game_map: GameMap) -> Player:
    """Create the player at the start cell, facing its direction, and clear the cell."""
    for r, row in enumerate(game_map.grid):
        for c, cell in enumerate(row):
            if cell in _PLAYER_ANGLES:
                row[c] = EMPTY
                pos = Vec2(
                    float(c * CELL_WIDTH + CELL_WIDTH // 2),
                    float(r * CELL_HEIGHT + CELL_HEIGHT // 2),
                )
                return Player(pos=pos, angle=_PLAYER_ANGLES[cell])
    raise LevelError(ERR_PLAYER)