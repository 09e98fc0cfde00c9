# cubscape

A small first-person maze explorer. It reads a `.cub` scene file that
names the wall textures, the floor and ceiling colours and a grid map,
then opens a window in which you walk through the maze in a raycast 3D
view. An extended mode adds doors, a round minimap and beating hearts.

## Installing

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Running

```
cubscape path/to/level.cub
cubscape --bonus path/to/level.cub
```

Exactly one scene path must be given; it must end in `.cub` and be
readable. `--bonus` turns on the extended mode.

Any problem with the arguments or the scene (a missing or repeated
identifier, a bad colour, an unreadable texture, an open wall, the wrong
number of players, a window larger than the screen) is written to standard
error as a line `Error` followed by a line with the message, and the
command exits with status 1. On a good start a welcome banner is printed
and the window opens at 1280x720.

## Scene files

A scene starts with six identifiers, in any order, each exactly once.
Blank lines may come between them; any other line is an error.

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

- `NO`, `SO`, `WE`, `EA` name the wall textures. Each path must end in
  `.xpm`, be readable, and the image must be 64x64 pixels. Images are
  read with Pillow.
- `F` (floor) and `C` (ceiling) hold three values from 0 to 255,
  separated by exactly two commas; only digits, spaces and commas are
  allowed.

The map follows the identifiers:

```
1111111
1000001
10100N1
1000001
1111111
```

- `1` is a wall, `0` is open floor, a space is outside the maze.
- `N`, `S`, `E` or `W` marks the single starting square and the
  direction the player faces.
- Tabs in map lines count as four spaces.
- The map needs at least two lines. The first and last lines may hold
  only walls and spaces, every floor square must be closed in by walls,
  and no empty line may appear inside the map.

### Extended mode

With `--bonus`, `D` marks a closed door:

```
1111111
1000001
1111D11
10N0001
1111111
```

A closed door blocks both rays and movement; an open one lets both
through. Press `E` while looking at a closed door within reach to open
it, or at an open door a short distance ahead to close it (not while
standing in it). Walls and closed doors also block movement in this mode;
in the plain mode a step is refused only when it would leave the map.

The extended mode also loads, relative to the current directory:

- `textures/door.xpm`, 64x64, drawn on closed doors;
- `textures/small_heart.xpm` and `textures/big_heart.xpm`, drawn as three
  beating hearts in the top-right corner (white pixels are transparent).

## Controls

| Key                 | Action                              |
|---------------------|-------------------------------------|
| `W` / `Z`           | move forward                        |
| `S`                 | move backward                       |
| `A` / `Q`           | strafe left                         |
| `D`                 | strafe right                        |
| Left / Right arrows | turn                                |
| `E`                 | open or close a door (`--bonus`)    |
| Escape              | quit                                |

Closing the window quits as well.

## Using it as a library

- `cubscape.scene.load_scene(path, bonus, settings)` and
  `cubscape.scene.parse_scene(text, bonus, settings)` return a validated
  `Scene` (its `header`, `game_map` and `player`). They raise
  `cubscape.errors.CubError`, or its subclasses `MapError` and
  `TextureError`; `cubscape.errors.report_error` prints one in the
  command's format.
- `cubscape.settings.Settings` is a frozen dataclass of screen size,
  scale, speeds, field of view, minimap and heart parameters and the
  extended-mode image paths.
- `cubscape.raycast.Raycaster(settings, game_map, bonus).cast(player, door)`
  casts one ray per screen column and returns a list of `RayHit`.
- `cubscape.render.Renderer(scene, settings, textures, bonus).render(frame, player, door)`
  draws a frame into a `cubscape.framebuffer.FrameBuffer`; the textures
  come from `cubscape.render.TextureSet.load(scene.header, settings, bonus)`.
  `FrameBuffer.to_rgb()` gives the pixels as a `(height, width, 3)` array.
- `cubscape.controls` holds the key bindings (`KeyState`), `move_player`,
  `rotate_player`, `toggle_door` and `apply_keys`.
- `cubscape.app.Game(scene, settings, bonus)` ties input, movement and
  rendering together; `tick()` returns the frame drawn on that turn, if
  any. `cubscape.app.main(argv)` is the command-line entry.

```python
from cubscape.scene import parse_scene
from cubscape.settings import Settings

with open("level.cub", encoding="utf-8") as handle:
    scene = parse_scene(handle.read(), bonus=False, settings=Settings())
print(scene.game_map.max_x, scene.game_map.max_y)
```

## What it does not do

There is no mouse look, no sound, no enemies or shooting, and no saving
of progress; the hearts are decoration only. Screen size and other
parameters can be changed only through `Settings` when using the package
as a library, not from the command line.