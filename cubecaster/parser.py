"""Reading and validating ``.cub`` level description files."""

from __future__ import annotations

import os
import re
from collections import Counter
from dataclasses import dataclass, field

from cubecaster.colors import Color, rgb_to_color

ERR_INVALID_INPUT = "cub3D: Invalid input"
ERR_UNDEFINED = "cub3D: Map has undefined elements"
ERR_TOO_SMALL = "cub3D: Map is too small"
ERR_ELEMENT_COUNT = "cub3D: Wrong number of elements"
ERR_ELEMENT_MISSING = "cub3D: Missing elements"
ERR_COLOR_COUNT = "cub3D: Wrong number of colors"
ERR_COLOR_INVALID = "cub3D: Invalid colors"
ERR_PLAYER = "cub3D: Player starting position is undefined"
ERR_EXTENSION = "cub3D: File extension must be .cub"

ELEMENT_KEYS = ("NO", "SO", "WE", "EA", "F", "C")
_TEXTURE_FIELDS = {"NO": "north", "SO": "south", "WE": "west", "EA": "east"}
_MAP_CELLS = frozenset("01 ")
_PLAYER_CELLS = frozenset("NSWE")
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


class LevelError(Exception):
    """A level file that cannot be read or does not describe a valid level."""


@dataclass
class LevelFile:
    """The contents of a level file: textures, colours and map rows."""

    north: str | None = None
    south: str | None = None
    west: str | None = None
    east: str | None = None
    floor: Color = field(default_factory=lambda: Color(0, 0, 0, 0))
    ceiling: Color = field(default_factory=lambda: Color(0, 0, 0, 0))
    rows: list[str] = field(default_factory=list)

    @property
    def map_height(self) -> int:
        return len(self.rows)

    @property
    def map_width(self) -> int:
        return max((len(row) for row in self.rows), default=0)


def extension_is_cub(file_name: str | os.PathLike[str]) -> bool:
    """Tell whether a file name has a name part followed by ``.cub``."""
    name = os.fspath(file_name)
    return len(name) > 4 and name.endswith(".cub")


def read_level_text(path: str | os.PathLike[str]) -> str:
    """Read a whole level file as text."""
    try:
        with open(path, encoding="utf-8", errors="surrogateescape") as handle:
            return handle.read()
    except OSError as exc:
        raise LevelError(f"cub3D: {exc.strerror or exc}") from exc


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def parse_color(text: str) -> Color:
    """Parse ``R,G,B`` with each channel in 0..255; empty fields are skipped."""
    parts = [part for part in text.split(",") if part]
    if len(parts) != 3:
        raise LevelError(ERR_COLOR_COUNT)
    channels = [_atoi(part) for part in parts]
    if not all(0 <= value < 256 for value in channels):
        raise LevelError(ERR_COLOR_INVALID)
    return rgb_to_color(*channels)


def _element_key(line: str) -> str | None:
    for key in ELEMENT_KEYS:
        if line.startswith(key):
            return key
    return None


def set_element(level: LevelFile, line: str, counts: Counter) -> None:
    """Store one texture or colour line in ``level`` and count it in ``counts``."""
    key = _element_key(line)
    if key is None:
        raise LevelError(ERR_UNDEFINED)
    counts[key] += 1
    if key in _TEXTURE_FIELDS:
        setattr(level, _TEXTURE_FIELDS[key], line[2:].strip(" "))
    elif key == "F":
        level.floor = parse_color(line[1:])
    else:
        level.ceiling = parse_color(line[1:])


def validate_elements(level: LevelFile, has_map: bool, counts: Counter) -> None:
    """Check that each element appeared exactly once and every texture is named."""
    if sum(counts.values()) != len(ELEMENT_KEYS):
        raise LevelError(ERR_ELEMENT_COUNT)
    if not has_map:
        raise LevelError(ERR_INVALID_INPUT)
    if any(counts[key] != 1 for key in ELEMENT_KEYS):
        raise LevelError(ERR_ELEMENT_COUNT)
    if not all((level.north, level.south, level.west, level.east)):
        raise LevelError(ERR_ELEMENT_MISSING)


def _read_elements(level: LevelFile, content: list[str]) -> int:
    """Consume the element lines and return the index where the map starts."""
    counts: Counter = Counter()
    for position, line in enumerate(content):
        if _element_key(line) is None:
            raise LevelError(ERR_UNDEFINED)
        set_element(level, line, counts)
        if sum(counts.values()) == len(ELEMENT_KEYS):
            break
    else:
        position = len(content)
    validate_elements(level, position != len(content), counts)
    return position + 1


def _read_map(lines: list[str]) -> list[str]:
    players = 0
    for line in lines:
        for cell in line:
            if cell in _PLAYER_CELLS:
                players += 1
            elif cell not in _MAP_CELLS:
                raise LevelError(ERR_UNDEFINED)
    if players != 1:
        raise LevelError(ERR_PLAYER)
    width = max((len(line) for line in lines), default=0)
    if len(lines) < 3 or width < 3:
        raise LevelError(ERR_TOO_SMALL)
    return list(lines)


def separate_content(text: str) -> LevelFile:
    """Split level text into its elements and map, validating both."""
    content = [line for line in text.split("\n") if line]
    level = LevelFile()
    map_start = _read_elements(level, content)
    level.rows = _read_map(content[map_start:])
    return level


def parse_level_file(path: str | os.PathLike[str]) -> LevelFile:
    """Read and validate a ``.cub`` level file."""
    if not extension_is_cub(path):
        raise LevelError(ERR_EXTENSION)
    return separate_content(read_level_text(path))