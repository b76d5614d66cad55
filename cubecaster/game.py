"""The game state, its keyboard controls, the frame loop and the command entry point."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from enum import IntEnum

from cubecaster.colors import Color
from cubecaster.entities import RAY_COUNT, WINDOW_HEIGHT, WINDOW_WIDTH, Player
from cubecaster.gamemap import GameMap, build_game_map, place_player
from cubecaster.image import ERR_CREATE_IMAGE, Image
from cubecaster.movement import update_player
from cubecaster.parser import ERR_INVALID_INPUT, LevelError, parse_level_file
from cubecaster.raycast import initialize_rays
from cubecaster.render import WallTextures, paint_floor_ceiling, render_scene

TITLE = "cub3D"
DOOR_TEXTURE = os.path.join(".", "textures", "door.xpm")


class Key(IntEnum):
    """Key codes the game reacts to."""

    A = 0
    S = 1
    D = 2
    H = 4
    G = 5
    W = 13
    ESC = 53
    LEFT = 123
    RIGHT = 124


_HELD_KEYS = {
    Key.LEFT: "turning_left",
    Key.RIGHT: "turning_right",
    Key.W: "moving_forward",
    Key.A: "strafing_left",
    Key.S: "moving_backward",
    Key.D: "strafing_right",
}


def _load_texture(path: str | None) -> Image:
    try:
        return Image.load(path or "")
    except OSError as exc:
        raise LevelError(ERR_CREATE_IMAGE) from exc


def _as_key(code: int) -> Key | None:
    try:
        return Key(code)
    except ValueError:
        return None


class Game:
    """A loaded level with its player, rays, textures and frame buffer."""

    def __init__(self, game_map: GameMap, player: Player, textures: WallTextures,
                 floor: Color, ceiling: Color, door: Image | None = None) -> None:
        self.game_map = game_map
        self.player = player
        self.textures = textures
        self.door = door
        self.floor = floor
        self.ceiling = ceiling
        self.rays = initialize_rays(RAY_COUNT)
        self.frame = Image(WINDOW_WIDTH, WINDOW_HEIGHT)
        self.shadow = False
        self.running = True

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> "Game":
        """Load and validate a ``.cub`` level and its textures."""
        level = parse_level_file(path)
        game_map = build_game_map(level)
        player = place_player(game_map)
        north = _load_texture(level.north)
        south = _load_texture(level.south)
        west = _load_texture(level.west)
        east = _load_texture(level.east)
        door = _load_texture(DOOR_TEXTURE)
        textures = WallTextures(north=north, south=south, east=east, west=west)
        return cls(game_map, player, textures, level.floor, level.ceiling, door)

    def key_down(self, key: int) -> None:
        """React to a key being pressed."""
        key = _as_key(key)
        if key is None:
            return
        if key in _HELD_KEYS:
            setattr(self.player, _HELD_KEYS[key], True)
        elif key is Key.ESC:
            self.running = False
        elif key is Key.G:
            self.shadow = not self.shadow
        elif key is Key.H:
            print(self.status())

    def key_up(self, key: int) -> None:
        """React to a key being released."""
        key = _as_key(key)
        if key in _HELD_KEYS:
            setattr(self.player, _HELD_KEYS[key], False)

    def status(self) -> str:
        """Describe the player's position, angle and the distance straight ahead."""
        centre = self.rays[len(self.rays) // 2].distance if self.rays else 0.0
        return "\n".join((
            f"player x: {self.player.pos.x:f}",
            f"player y: {self.player.pos.y:f}",
            f"player angle: {self.player.angle:f}",
            f"ray dist: {centre:f}",
        ))

    def tick(self) -> Image:
        """Advance one frame and draw it; return the frame buffer."""
        update_player(self.player, self.game_map)
        paint_floor_ceiling(self.frame, self.floor, self.ceiling, self.shadow)
        render_scene(self.frame, self.game_map, self.player, self.rays,
                     self.textures, self.shadow)
        return self.frame


def run(path: str | os.PathLike[str]) -> None:
    """Load a level and play it in a window until it is closed or Escape is pressed."""
    game = Game.from_file(path)
    import pygame

    key_map = {
        pygame.K_w: Key.W,
        pygame.K_a: Key.A,
        pygame.K_s: Key.S,
        pygame.K_d: Key.D,
        pygame.K_g: Key.G,
        pygame.K_h: Key.H,
        pygame.K_ESCAPE: Key.ESC,
        pygame.K_LEFT: Key.LEFT,
        pygame.K_RIGHT: Key.RIGHT,
    }
    pygame.init()
    try:
        size = (game.frame.width, game.frame.height)
        screen = pygame.display.set_mode(size)
        pygame.display.set_caption(TITLE)
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type == pygame.KEYDOWN and event.key in key_map:
                    game.key_down(key_map[event.key])
                elif event.type == pygame.KEYUP and event.key in key_map:
                    game.key_up(key_map[event.key])
            if not game.running:
                break
            frame = game.tick()
            surface = pygame.image.frombuffer(frame.to_rgb_bytes(), size, "RGB")
            screen.blit(surface, (0, 0))
            pygame.display.flip()
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point: play the level file named by the single argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print(ERR_INVALID_INPUT, file=sys.stderr)
        return 1
    try:
        run(args[0])
    except LevelError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0