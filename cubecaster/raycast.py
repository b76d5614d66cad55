"""Grid ray casting: find the first wall face a ray meets."""

from __future__ import annotations

import math

from cubecaster.entities import (
    CELL_HEIGHT,
    CELL_WIDTH,
    EAST,
    EMPTY,
    NORTH,
    OUTSIDE,
    PERSPECTIVE,
    RAD_PER_DEG,
    RAY_COUNT,
    SOUTH,
    THREE_HALF_PI,
    WALL,
    WEST,
    Ray,
    Vec2,
)
from cubecaster.gamemap import GameMap

VERTICAL = "v"
HORIZONTAL = "h"
FLT_MAX = 3.4028234663852886e38

_HALF_PI = math.pi / 2


def distance(a: Vec2, b: Vec2) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a.x - b.x, a.y - b.y)


def _faces_west(rad: float) -> bool:
    return _HALF_PI < rad <= THREE_HALF_PI


def _faces_down(rad: float) -> bool:
    return 0.0 < rad <= math.pi


def get_offset(pos: Vec2, rad: float, v_h: str) -> float:
    """Distance from ``pos`` to the next grid line the ray crosses on one axis."""
    if v_h == HORIZONTAL:
        if _faces_down(rad):
            return CELL_HEIGHT - math.fmod(pos.y, CELL_HEIGHT)
        return math.fmod(pos.y, CELL_HEIGHT)
    if v_h == VERTICAL:
        if _faces_west(rad):
            return math.fmod(pos.x, CELL_WIDTH)
        return CELL_WIDTH - math.fmod(pos.x, CELL_WIDTH)
    return 0.0


def inside_map(game_map: GameMap, point: Vec2) -> bool:
    """Tell whether a point lies within the map's world bounds."""
    max_x = game_map.width * CELL_WIDTH
    max_y = game_map.height * CELL_HEIGHT
    return 1 <= point.x < max_x and 1 <= point.y <= max_y - 1


def ret_add(point: Vec2, add: Vec2, rad: float) -> Vec2:
    """Step ``point`` by the magnitudes in ``add`` in the direction of ``rad``."""
    x = point.x - add.x if _HALF_PI < rad < THREE_HALF_PI else point.x + add.x
    y = point.y + add.y if 0 < rad < math.pi else point.y - add.y
    return Vec2(x, y)


def hits_wall(game_map: GameMap, point: Vec2, rad: float, v_h: str) -> str:
    """Return the face hit at a grid-line crossing, or ``'0'`` if the cell is open."""
    col = int(point.x) // CELL_WIDTH
    row = int(point.y) // CELL_HEIGHT
    if v_h == VERTICAL and _faces_west(rad):
        col -= 1
    elif v_h == HORIZONTAL and not _faces_down(rad):
        row -= 1
    if game_map.cell(row, col) in (WALL, OUTSIDE):
        if v_h == VERTICAL:
            return WEST if _faces_west(rad) else EAST
        if v_h == HORIZONTAL:
            return NORTH if _faces_down(rad) else SOUTH
    return EMPTY


def _march(game_map: GameMap, origin: Vec2, rad: float, v_h: str, first: Vec2,
           step: Vec2) -> tuple[Vec2, str]:
    point = Vec2(origin.x, origin.y)
    delta = first
    hit = EMPTY
    while True:
        point = ret_add(point, delta, rad)
        if not inside_map(game_map, point):
            return point, hit
        hit = hits_wall(game_map, point, rad, v_h)
        if hit != EMPTY:
            return point, hit
        delta = step


def _vertical_hit(game_map: GameMap, origin: Vec2, rad: float,
                  tan_a: float) -> tuple[Vec2, str]:
    if rad == 0 or rad == math.pi:
        return Vec2(FLT_MAX, origin.y), EMPTY
    dx = get_offset(origin, rad, VERTICAL)
    first = Vec2(dx, abs(dx * tan_a))
    step = Vec2(float(CELL_WIDTH), abs(CELL_WIDTH * tan_a))
    return _march(game_map, origin, rad, VERTICAL, first, step)


def _run(rise: float, tan_a: float) -> float:
    return abs(rise / tan_a) if tan_a else math.inf


def _horizontal_hit(game_map: GameMap, origin: Vec2, rad: float,
                    tan_a: float) -> tuple[Vec2, str]:
    if rad == _HALF_PI or rad == THREE_HALF_PI:
        return Vec2(origin.x, FLT_MAX), EMPTY
    dy = get_offset(origin, rad, HORIZONTAL)
    first = Vec2(_run(dy, tan_a), dy)
    step = Vec2(_run(CELL_HEIGHT, tan_a), float(CELL_HEIGHT))
    return _march(game_map, origin, rad, HORIZONTAL, first, step)


def cast_ray(game_map: GameMap, origin: Vec2, ray: Ray) -> Ray:
    """Cast ``ray`` from ``origin`` along its relative angle and record the nearest hit.

    The stored distance is corrected for the fish-eye effect by the ray's
    perspective angle.
    """
    rad = ray.relative_angle
    tan_a = math.tan(rad)
    hor_pos, hor_hit = _horizontal_hit(game_map, origin, rad, tan_a)
    vert_pos, vert_hit = _vertical_hit(game_map, origin, rad, tan_a)
    hor_dis = distance(origin, hor_pos)
    vert_dis = distance(origin, vert_pos)
    if hor_dis > vert_dis:
        ray.pos, ray.distance, ray.hit, ray.side = vert_pos, vert_dis, vert_hit, VERTICAL
    else:
        ray.pos, ray.distance, ray.hit, ray.side = hor_pos, hor_dis, hor_hit, HORIZONTAL
    ray.distance *= math.cos(ray.perspective_angle)
    return ray


def initialize_rays(count: int = RAY_COUNT) -> list[Ray]:
    """Spread ``count`` rays evenly across the field of view, left to right."""
    spacing = PERSPECTIVE / count
    return [
        Ray(perspective_angle=((i + 1) * spacing - PERSPECTIVE / 2.0) * RAD_PER_DEG)
        for i in range(count)
    ]