"""Software rendering of the scene: textured walls, background and minimap."""

from __future__ import annotations

import math
import sys
from array import array
from dataclasses import dataclass, field

from raycub.config import Config, ConfigError
from raycub.engine import HEIGHT, WIDTH, Ray, Side, World, to_radians
from raycub.xpm import XpmError, XpmImage, load_xpm

_TYPECODE = "I" if array("I").itemsize == 4 else "L"
_MASK = 0xFFFFFFFF
_OPAQUE = 0xFF000000

# Byte layout produced by Canvas.to_bytes, as named by image libraries.
PIXEL_FORMAT = "BGRA" if sys.byteorder == "little" else "ARGB"

WALL_COLOR = 0xFFFFFF
CLOSED_DOOR_COLOR = 0xFF0000
OPEN_DOOR_COLOR = 0x00FF00
FLOOR_TILE_COLOR = 0x000000
MOVING_DOOR_COLOR = 0xFFAA00
FOV_COLOR = 0xFFFF00
PLAYER_COLOR = 0xFF8800
MINIMAP_FOV = 66

ERR_TEXTURE = ".xpm file doesn't exist."

_MOVING_DOOR = "23456789stuvwxyz"


class Canvas:
    """A fixed-size frame of 0xAARRGGBB pixels."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("canvas size must be positive")
        self.width = width
        self.height = height
        self._data = array(_TYPECODE, [0]) * (width * height)

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; coordinates outside the canvas are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self._data[y * self.width + x] = color & _MASK

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel at (``x``, ``y``)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return self._data[y * self.width + x]

    def fill_background(self, ceiling: int, floor: int) -> None:
        """Paint the upper half with ``ceiling`` and the lower half with ``floor``."""
        half = (self.height // 2) * self.width
        self._data[:half] = array(_TYPECODE, [ceiling & _MASK]) * half
        self._data[half:2 * half] = array(_TYPECODE, [floor & _MASK]) * half

    def to_bytes(self) -> bytes:
        """Return the pixels as opaque bytes in :data:`PIXEL_FORMAT` order."""
        return array(_TYPECODE, (p | _OPAQUE for p in self._data)).tobytes()


def _load_texture(path: str | None) -> XpmImage:
    if path is None:
        raise ConfigError(ERR_TEXTURE)
    try:
        return load_xpm(path)
    except XpmError as exc:
        raise ConfigError(ERR_TEXTURE) from exc


@dataclass
class Textures:
    """Wall textures for the four sides and the door animation frames."""

    north: XpmImage
    south: XpmImage
    west: XpmImage
    east: XpmImage
    doors: list[XpmImage] = field(default_factory=list)

    @classmethod
    def from_config(cls, config: Config) -> Textures:
        """Load every texture named by ``config``."""
        doors = [_load_texture(path) for path in config.door_textures or []]
        return cls(
            north=_load_texture(config.no_texture),
            south=_load_texture(config.so_texture),
            west=_load_texture(config.we_texture),
            east=_load_texture(config.ea_texture),
            doors=doors,
        )

    def door_frame(self, tile: str) -> XpmImage | None:
        """Return the door image for a door tile, or None without door textures."""
        if not self.doors:
            return None
        if tile == "D":
            return self.doors[0]
        base = "2" if "2" <= tile <= "9" else "s"
        return self.doors[abs(ord(base) - ord(tile)) % len(self.doors)]

    def for_hit(self, world: World, ray: Ray) -> XpmImage:
        """Choose the texture for the tile and side a ray hit."""
        tile = world.tile(ray.map_x, ray.map_y)
        if tile is not None and tile not in "01":
            frame = self.door_frame(tile)
            if frame is not None:
                return frame
        if ray.side == Side.HORIZONTAL:
            return self.east if ray.x_step < 0 else self.west
        return self.south if ray.y_step < 0 else self.north


def sample_texture(image: XpmImage, x: float, y: float) -> int:
    """Return the texel at truncated (``x``, ``y``), or black outside the image."""
    col, row = int(x), int(y)
    if 0 <= col < image.width and 0 <= row < image.height:
        return image.pixels[row][col]
    return 0


def _texture_column(textures: Textures, ray: Ray) -> float:
    if ray.side == Side.HORIZONTAL:
        frac = ray.wall_y - math.floor(ray.wall_y)
        if ray.x_step < 0:
            return abs(1 - frac) * textures.east.width
        return frac * textures.west.width
    frac = ray.wall_x - math.floor(ray.wall_x)
    if ray.y_step < 0:
        return frac * textures.south.width
    return abs(1 - frac) * textures.north.width


def draw_wall_column(canvas: Canvas, textures: Textures, world: World,
                     column: int, ray: Ray) -> None:
    """Draw the textured wall slice of one screen column."""
    height = ray.height
    if height <= 0:
        return
    sprite_x = _texture_column(textures, ray)
    texture = textures.for_hit(world, ray)
    step = texture.height / height
    start = -(height // 2) + canvas.height // 2
    end = height // 2 + canvas.height // 2
    first = max(0, -start)
    last = min(end, height, canvas.height - start)
    for y in range(first, last):
        canvas.put_pixel(column, start + y, sample_texture(texture, sprite_x, y * step))


def minimap_scaling(config: Config) -> int:
    """Return the size in pixels of one map cell on the minimap."""
    largest = max(config.width, config.height)
    if largest <= 0:
        return 0
    span = HEIGHT // 3 if largest == config.height else WIDTH // 3
    return int(span / largest)


def _round(value: float) -> int:
    return math.floor(value + 0.5) if value >= 0 else math.ceil(value - 0.5)


def _tile_color(tile: str) -> int | None:
    if tile == "1":
        return WALL_COLOR
    if tile == "D":
        return CLOSED_DOOR_COLOR
    if tile == "d":
        return OPEN_DOOR_COLOR
    if tile == "0":
        return FLOOR_TILE_COLOR
    if tile in _MOVING_DOOR:
        return MOVING_DOOR_COLOR
    return None


def _trace(canvas: Canvas, x: float, y: float, dx: float, dy: float,
           count: int, color: int) -> None:
    length = math.hypot(dx, dy)
    if length == 0:
        return
    dx /= length
    dy /= length
    for _ in range(count):
        canvas.put_pixel(_round(x), _round(y), color)
        x += dx
        y += dy


def _rotated(vx: float, vy: float, angle: float) -> tuple[float, float]:
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    return vx * cos_a - vy * sin_a, vx * sin_a + vy * cos_a


def _draw_fov(canvas: Canvas, world: World, scaling: int) -> None:
    p = world.player
    p.fov = MINIMAP_FOV
    angle = to_radians(-(p.fov / 2))
    step = to_radians(p.fov / WIDTH)
    for _ in range(WIDTH):
        dx, dy = _rotated(p.vx, p.vy, angle)
        _trace(canvas, p.x * scaling, p.y * scaling, dx, dy, scaling * 2, FOV_COLOR)
        angle += step


def _draw_player(canvas: Canvas, world: World, scaling: int) -> None:
    p = world.player
    for degrees in range(360):
        dx, dy = _rotated(p.vx, p.vy, to_radians(degrees))
        _trace(canvas, p.x * scaling, p.y * scaling, dx, dy, scaling // 4, PLAYER_COLOR)


def draw_minimap(canvas: Canvas, world: World, scaling: int) -> None:
    """Draw the map cells, the player's field of view and the player."""
    for y, row in enumerate(world.map):
        for x, tile in enumerate(row):
            color = _tile_color(tile)
            if color is None:
                continue
            for i in range(scaling):
                for j in range(scaling):
                    canvas.put_pixel(x * scaling + j, y * scaling + i, color)
    _draw_fov(canvas, world, scaling)
    _draw_player(canvas, world, scaling)


def render_frame(canvas: Canvas, world: World, textures: Textures,
                 show_map: bool) -> None:
    """Render one full frame of ``world`` into ``canvas``."""
    canvas.fill_background(world.config.ceiling_color, world.config.floor_color)
    for column, ray in enumerate(world.cast_all()):
        draw_wall_column(canvas, textures, world, column, ray)
    if show_map:
        draw_minimap(canvas, world, minimap_scaling(world.config))