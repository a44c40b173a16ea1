# raycub

A small first-person maze explorer. A scene is described in a `.cub` file:
four wall textures, optional animated door textures, floor and ceiling
colours, and a grid map. The scene is drawn with a grid raycaster into a
1280×720 pygame window.

## Installing

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Running

```
raycub maps/example.cub
```

The command takes exactly one argument: the path to a `.cub` file. If the
argument is missing, the file is malformed or a texture cannot be read, it
prints `Error` and a message on the next line, and exits with status 1.

### Controls

| Key            | Action                             |
|----------------|------------------------------------|
| `W` / `S`      | move forward / backward            |
| `A` / `D`      | strafe left / right                |
| `←` / `→`      | turn by 7 degrees                  |
| mouse          | turn (the pointer is re-centred)   |
| `Space`        | open or close the door ahead       |
| `M`            | toggle the minimap                 |
| `Esc`          | quit                               |

Movement slides along walls. A door can be used when it is within reach in
front of the player; opening and closing are animated over several frames.

## The `.cub` format

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
DT ./textures/door0.xpm ./textures/door1.xpm
F 220,100,0
C 225,30,0

111111
1000D1
10N001
111111
```

- The file name must end in `.cub`.
- `NO`, `SO`, `WE` and `EA` give the wall textures as `<ID> <path>.xpm`. Each
  may appear only once, and the path may not contain spaces.
- `DT` lists up to four door animation frames (`.xpm` files). It is required
  only if the map contains doors.
- `F` and `C` give the floor and ceiling colours as `R,G,B`, each component
  between 0 and 255.
- All textures and both colours must come before the map. The map starts at
  the first line beginning with a space, `0` or `1`, and runs to the end of
  the file.
- The map may contain `0` (floor), `1` (wall), space, `D` (door) and exactly
  one player start: `N`, `S`, `E` or `W`, which also sets the facing
  direction. Every floor cell and the start cell must be enclosed by walls.
  A door must lie between two walls, horizontally or vertically. Tabs are not
  allowed, and there may be no blank lines inside the map.

Textures are read by a built-in XPM reader that understands `#RRGGBB`
colours, X11 colour names and `None` (transparent).

## Using it as a library

```python
from raycub.cubfile import parse_file
from raycub.engine import World
from raycub.graphics import Canvas, Textures, render_frame

config = parse_file("maps/example.cub")   # raises raycub.config.ConfigError
world = World(config)
world.move_forward()
world.rotate(15)
for ray in world.cast_all():
    print(ray.map_x, ray.map_y, ray.wall_distance, ray.height)

canvas = Canvas()
render_frame(canvas, world, Textures.from_config(config), show_map=True)
pixel = canvas.get_pixel(640, 360)        # 0xAARRGGBB
```

- `raycub.cubfile.parse_lines` parses a scene from any iterable of lines.
- `raycub.engine.World` also offers `move_backward`, `move_left`,
  `move_right`, `open_door(now_ms)` and `update_doors(now_ms)`.
- `raycub.app.Game` ties a world, its textures and a canvas together and
  takes input through `handle_key(key, now_ms)`, `handle_mouse(x, y)` and
  `step(now_ms)`, which returns the rendered `Canvas`; `raycub.app.run`
  plays a `Config` in a window.
- `raycub.xpm.load_xpm` and `raycub.xpm.parse_xpm_text` read XPM images into
  `XpmImage` objects.
- `raycub.colors.lookup_color` resolves X11 colour names such as
  `"navy blue"` to `0xRRGGBB` values.

## Limits

The window size is fixed at 1280×720 and there is no sound, no enemies or
sprites, and no way to save a game: the package only explores a single
scene loaded from a `.cub` file.