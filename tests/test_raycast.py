import math

import pytest

from cubecaster.entities import (
    CELL_HEIGHT,
    CELL_WIDTH,
    EAST,
    EMPTY,
    NORTH,
    PERSPECTIVE,
    RAY_COUNT,
    SOUTH,
    WEST,
    Ray,
    Vec2,
)
from cubecaster.gamemap import build_game_map, place_player
from cubecaster.parser import LevelFile
from cubecaster.raycast import (
    HORIZONTAL,
    VERTICAL,
    cast_ray,
    distance,
    get_offset,
    hits_wall,
    initialize_rays,
    inside_map,
    ret_add,
)


@pytest.fixture
def cell_room():
    level = LevelFile(north="n", south="s", west="w", east="e", rows=["111", "1N1", "111"])
    game_map = build_game_map(level)
    player = place_player(game_map)
    return game_map, player


def test_distance_pythagorean():
    assert distance(Vec2(0.0, 0.0), Vec2(3.0, 4.0)) == pytest.approx(5.0)


def test_distance_symmetric_and_zero_to_self():
    a, b = Vec2(12.5, -3.0), Vec2(-7.0, 40.25)
    assert distance(a, b) == distance(b, a)
    assert distance(a, a) == 0


def test_horizontal_offsets_are_complementary():
    pos = Vec2(130.0, 170.0)
    down = get_offset(pos, math.pi / 2, HORIZONTAL)
    up = get_offset(pos, 3 * math.pi / 2, HORIZONTAL)
    assert down + up == pytest.approx(CELL_HEIGHT)
    assert 0 < down <= CELL_HEIGHT


def test_vertical_offsets_are_complementary():
    pos = Vec2(130.0, 170.0)
    east = get_offset(pos, 0.5, VERTICAL)
    west = get_offset(pos, math.pi, VERTICAL)
    assert east + west == pytest.approx(CELL_WIDTH)


def test_offset_on_grid_line_is_full_cell():
    assert get_offset(Vec2(200.0, 150.0), 0.5, VERTICAL) == CELL_WIDTH


def test_offset_unknown_axis_is_zero():
    assert get_offset(Vec2(130.0, 170.0), 1.0, "x") == 0


def test_inside_map(cell_room):
    game_map, _ = cell_room
    assert inside_map(game_map, Vec2(250.0, 250.0))
    assert not inside_map(game_map, Vec2(0.5, 250.0))
    assert not inside_map(game_map, Vec2(game_map.width * CELL_WIDTH, 250.0))
    assert not inside_map(game_map, Vec2(250.0, game_map.height * CELL_HEIGHT))


@pytest.mark.parametrize(
    "rad, sx, sy",
    [(0.3, 1, 1), (2.0, -1, 1), (4.0, -1, -1), (5.5, 1, -1)],
)
def test_ret_add_direction(rad, sx, sy):
    start = Vec2(100.0, 100.0)
    step = Vec2(10.0, 20.0)
    moved = ret_add(start, step, rad)
    assert moved == Vec2(start.x + sx * step.x, start.y + sy * step.y)
    assert start == Vec2(100.0, 100.0)


@pytest.mark.parametrize(
    "point, rad, side, face",
    [
        (Vec2(300.0, 250.0), 0.1, VERTICAL, EAST),
        (Vec2(200.0, 250.0), math.pi - 0.1, VERTICAL, WEST),
        (Vec2(250.0, 300.0), 1.0, HORIZONTAL, NORTH),
        (Vec2(250.0, 200.0), 4.0, HORIZONTAL, SOUTH),
    ],
)
def test_hits_wall_faces(cell_room, point, rad, side, face):
    game_map, _ = cell_room
    assert hits_wall(game_map, point, rad, side) == face


def test_hits_wall_open_cell(cell_room):
    game_map, _ = cell_room
    assert hits_wall(game_map, Vec2(250.0, 250.0), 0.1, VERTICAL) == EMPTY


@pytest.mark.parametrize(
    "rad, side, face",
    [
        (0.1, VERTICAL, EAST),
        (math.pi - 0.1, VERTICAL, WEST),
        (math.pi / 2 - 0.1, HORIZONTAL, NORTH),
        (3 * math.pi / 2 + 0.1, HORIZONTAL, SOUTH),
    ],
)
def test_cast_ray_finds_nearest_face(cell_room, rad, side, face):
    game_map, player = cell_room
    ray = Ray(relative_angle=rad)
    result = cast_ray(game_map, player.pos, ray)
    assert result is ray
    assert ray.side == side
    assert ray.hit == face
    assert 0 < ray.distance < CELL_WIDTH


def test_cast_ray_perspective_correction(cell_room):
    game_map, player = cell_room
    straight = cast_ray(game_map, player.pos, Ray(relative_angle=0.3))
    tilt = 0.4
    corrected = cast_ray(game_map, player.pos, Ray(relative_angle=0.3, perspective_angle=tilt))
    assert corrected.distance == pytest.approx(straight.distance * math.cos(tilt))
    assert corrected.pos == straight.pos


def test_initialize_rays_default_spread():
    rays = initialize_rays()
    assert len(rays) == RAY_COUNT
    assert rays[RAY_COUNT // 2 - 1].perspective_angle == pytest.approx(0.0)
    assert rays[-1].perspective_angle == pytest.approx(math.radians(PERSPECTIVE / 2))


def test_initialize_rays_uniform_increasing():
    count = 8
    rays = initialize_rays(count)
    angles = [ray.perspective_angle for ray in rays]
    gaps = [b - a for a, b in zip(angles, angles[1:])]
    assert len(rays) == count
    assert all(gap == pytest.approx(math.radians(PERSPECTIVE / count)) for gap in gaps)