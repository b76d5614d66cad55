"""Core game entities and the fixed dimensions of the world and the screen."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

WINDOW_WIDTH = 1920
WINDOW_HEIGHT = 1080

CELL_WIDTH = 100
CELL_HEIGHT = 100

MOVE_SPEED = 6
WALL_SIZE = 150

PERSPECTIVE = 60.0
RAY_COUNT = 1920

TWO_PI = 2.0 * math.pi
THREE_HALF_PI = 3.0 * math.pi / 2.0
RAD_PER_DEG = math.pi / 180.0

NORTH = "N"
SOUTH = "S"
WEST = "W"
EAST = "E"
WALL = "1"
EMPTY = "0"
OUTSIDE = "M"


@dataclass
class Vec2:
    """A point or offset on the map plane, in world units."""

    x: float = 0.0
    y: float = 0.0


@dataclass
class Player:
    """The player's position, facing angle and the movement keys held down."""

    pos: Vec2 = field(default_factory=Vec2)
    angle: float = 0.0
    moving_forward: bool = False
    moving_backward: bool = False
    strafing_left: bool = False
    strafing_right: bool = False
    turning_left: bool = False
    turning_right: bool = False

    def release_all(self) -> None:
        """Mark every movement and turning key as released."""
        self.moving_forward = False
        self.moving_backward = False
        self.strafing_left = False
        self.strafing_right = False
        self.turning_left = False
        self.turning_right = False


@dataclass
class Ray:
    """One screen column's ray and the wall hit it found."""

    pos: Vec2 = field(default_factory=Vec2)
    distance: float = 0.0
    perspective_angle: float = 0.0
    relative_angle: float = 0.0
    side: str = ""
    hit: str = ""