"""Drawing a frame: the shaded floor and ceiling, then one textured wall slice per ray."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from cubecaster.colors import Color, blackout
from cubecaster.entities import (
    CELL_HEIGHT,
    CELL_WIDTH,
    EAST,
    NORTH,
    RAD_PER_DEG,
    SOUTH,
    THREE_HALF_PI,
    TWO_PI,
    WALL_SIZE,
    WEST,
    Player,
    Ray,
)
from cubecaster.gamemap import GameMap
from cubecaster.image import Image
from cubecaster.raycast import VERTICAL, cast_ray

FACES = (NORTH, SOUTH, EAST, WEST)
MAX_SLICE = 15000.0
SHADOW_DISTANCE = 420.0
CEILING_FLOOR_FADE = 0.32
SIDE_FADE = 0.42
ANGLE_NUDGE = RAD_PER_DEG * 0.00042

_HALF_PI = math.pi / 2


@dataclass
class WallTextures:
    """The texture drawn on each of the four wall faces."""

    north: Image
    south: Image
    east: Image
    west: Image

    def for_hit(self, hit: str) -> Image:
        """Return the texture for a wall face letter."""
        faces = {NORTH: self.north, SOUTH: self.south, EAST: self.east, WEST: self.west}
        try:
            return faces[hit]
        except KeyError:
            raise ValueError(f"no wall face {hit!r}") from None


def _pack(red: np.ndarray, green: np.ndarray, blue: np.ndarray) -> np.ndarray:
    return (red.astype(np.uint32) << 16) | (green.astype(np.uint32) << 8) | blue.astype(np.uint32)


def paint_floor_ceiling(frame: Image, floor: Color, ceiling: Color, shadow: bool) -> None:
    """Fill the top half with the ceiling colour and the bottom half with the floor.

    With ``shadow`` the colours fade towards the horizon and the screen sides.
    """
    width, height = frame.width, frame.height
    if not width or not height:
        return
    half_h = height // 2
    if not shadow:
        frame.pixels[:half_h] = ceiling.hex
        frame.pixels[half_h:] = floor.hex
        return
    half_w = width // 2
    columns = np.arange(width)
    steps = np.where(columns <= half_w, columns, width - columns).astype(np.float64)
    ratio = 1.0 - (steps / (width / 2.0) + SIDE_FADE)
    intensity = np.clip(1.0 - ratio, 0.0, 1.0)
    for y in range(height):
        if y < half_h:
            base, step = ceiling, half_h - y
        else:
            base, step = floor, y - half_h
        row = blackout(base, 1.0 - step / (height / 2.0) + CEILING_FLOOR_FADE)
        frame.pixels[y] = _pack(
            row.r * intensity, row.g * intensity, row.b * intensity
        )


def set_relative_ray_angle(ray: Ray, player_angle: float) -> None:
    """Turn the ray's angle within the view into a world angle in [0, 2*pi)."""
    angle = ray.perspective_angle + player_angle
    if angle < 0:
        angle += TWO_PI
    if angle >= TWO_PI:
        angle -= TWO_PI
    if math.fmod(angle, _HALF_PI / 2) == 0:
        angle += ANGLE_NUDGE
    ray.relative_angle = angle


def texture_column(textures: WallTextures, ray: Ray) -> tuple[Image, float]:
    """Pick the texture for the ray's hit and the texture column where it landed."""
    image = textures.for_hit(ray.hit)
    rad = ray.relative_angle
    if ray.side == VERTICAL:
        offset = math.fmod(ray.pos.y, CELL_HEIGHT)
        if _HALF_PI < rad <= THREE_HALF_PI:
            return image, (CELL_WIDTH - offset) * image.width / CELL_HEIGHT
        return image, offset * image.width / CELL_HEIGHT
    offset = math.fmod(ray.pos.x, CELL_WIDTH)
    if 0 < rad <= math.pi:
        return image, (CELL_WIDTH - offset) * image.width / CELL_WIDTH
    return image, offset * image.width / CELL_WIDTH


def _draw_slice(frame: Image, x: int, ray: Ray, texture: Image, pix_x: float,
                shadow: bool) -> None:
    if not 0 <= x < frame.width:
        return
    height = frame.height
    if ray.distance == 0:
        size = MAX_SLICE
    else:
        size = min(height / ray.distance * WALL_SIZE, MAX_SLICE)
    if not size > 0:
        return
    top = (height - size) / 2
    ratio = texture.height / size
    steps = np.arange(math.ceil(size), dtype=np.float64)
    rows = top + steps
    visible = (rows >= 0) & (rows < height)
    steps = steps[visible]
    rows = rows[visible].astype(np.intp)
    tex_rows = (steps * ratio).astype(np.intp)
    tex_col = int(pix_x)
    colors = np.zeros(len(steps), dtype=np.uint32)
    if 0 <= tex_col < texture.width:
        inside = tex_rows < texture.height
        colors[inside] = texture.pixels[tex_rows[inside], tex_col]
    if shadow:
        intensity = min(max(1.0 - ray.distance / SHADOW_DISTANCE, 0.0), 1.0)
        colors = _pack(
            ((colors >> 16) & 0xFF) * intensity,
            ((colors >> 8) & 0xFF) * intensity,
            (colors & 0xFF) * intensity,
        )
    frame.pixels[rows, x] = colors


def render_scene(frame: Image, game_map: GameMap, player: Player, rays: Sequence[Ray],
                 textures: WallTextures, shadow: bool) -> None:
    """Cast every ray from the player and draw its wall slice into its column."""
    for x, ray in enumerate(rays):
        set_relative_ray_angle(ray, player.angle)
        cast_ray(game_map, player.pos, ray)
        if ray.hit not in FACES:
            continue
        texture, pix_x = texture_column(textures, ray)
        _draw_slice(frame, x, ray, texture, pix_x, shadow)