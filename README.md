# cubecaster

A small first-person raycasting engine. It reads a maze from a `.cub` level
file, checks that the level is well formed, and lets you walk through it in a
1920x1080 window with textured walls and a floor and ceiling in flat colours,
optionally shaded.

## Installing

```
pip install .
```

This brings in `numpy`, `pillow` and `pygame`.

## Running

```
cubecaster path/to/level.cub
```

The command takes exactly one argument, the level file. With any other number
of arguments it prints `cub3D: Invalid input` on standard error and exits
with status 1. If the file cannot be read, does not end in `.cub`, is not a
valid level, or one of its textures cannot be loaded, an error starting with
`cub3D:` is printed on standard error and the exit status is 1.

### Controls

| Key          | Action                                                          |
|--------------|-----------------------------------------------------------------|
| W / S        | move forward / backward                                         |
| A / D        | strafe left / right                                             |
| Left / Right | turn                                                            |
| G            | toggle shading (darkens walls with distance, fades floor and ceiling) |
| H            | print player position, angle and the distance of the centre ray |
| Esc          | quit                                                            |

Closing the window quits too. The player is kept a short distance away from
the space outside the walls and cannot leave the map.

## Level files

A level has six element lines, in any order, followed by the map:

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png
F 120,90,60
C 180,200,255

111111
100001
10N001
111111
```

- `NO`, `SO`, `WE`, `EA` name the wall texture for each face. Any image file
  Pillow can open will do (XPM, PNG, ...).
- `F` and `C` give floor and ceiling colours as three comma-separated numbers
  from 0 to 255.
- Each element must appear exactly once, at the start of its line. Empty
  lines are ignored.
- The map uses `1` for walls, `0` for floor, spaces for nothing, and exactly
  one of `N`, `S`, `E`, `W` for the player's start and facing direction.
- The map must be at least 3 rows high and 3 columns wide, and every floor
  cell must be enclosed by walls: no floor cell may touch a space or the edge
  of the map.

When a game is loaded, `./textures/door.xpm`, relative to the working
directory, must also exist and be loadable; loading fails otherwise. It is
loaded but not drawn.

## Using it as a library

```python
from cubecaster.parser import parse_level_file
from cubecaster.gamemap import build_game_map, place_player

level = parse_level_file("maze.cub")
grid = build_game_map(level)
player = place_player(grid)
print(player.pos, player.angle)
```

- `cubecaster.parser` reads and validates level files (`parse_level_file`,
  `separate_content`, `parse_color`); problems are raised as `LevelError`.
- `cubecaster.gamemap` builds the padded `GameMap` and places the `Player`.
- `cubecaster.raycast` casts rays against the grid (`cast_ray`,
  `initialize_rays`).
- `cubecaster.movement` applies held keys to the player (`update_player`).
- `cubecaster.render` draws into an `Image` (`paint_floor_ceiling`,
  `render_scene`).
- `cubecaster.game.Game.from_file` sets up a complete game; `Game.key_down`
  and `Game.key_up` take `Key` codes, `Game.status` returns the text that H
  prints, and `Game.tick` advances one frame and returns the frame buffer as
  an `Image`. `Image.to_rgb_bytes` gives its pixels as RGB bytes, so frames
  can be rendered without opening a window.

## What it does not do

There is no mouse control, no minimap and no doors in the map; the only map
cells are walls, floor, spaces and the start position.

## Tests

```
pip install .[test]
pytest
```