"""World state and geometry: ray casting, movement and door animation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum

from raycub.config import Config

WIDTH = 1280
HEIGHT = 720

RENDER_SET = "123456789stuvwxyzD"
DOOR_SET = "1Dd"

MOVE_SPEED = 0.15
MOVE_MARGIN = 0.7
DOOR_FRAME_MS = 200
DOOR_REACH = 2.0
DOOR_MIN_DISTANCE = 0.7

_NO_DELTA = 1e30
_OPENING = "23456789"
_CLOSING = "stuvwxyz"
_SOLID = "123456789" + _CLOSING + "D"


def to_radians(degrees: float) -> float:
    """Convert an angle from degrees to radians."""
    return degrees * math.pi / 180


class Side(IntEnum):
    """Which kind of grid line a ray crossed when it hit."""

    HORIZONTAL = 0  # crossed a vertical grid line (x step)
    VERTICAL = 1  # crossed a horizontal grid line (y step)


@dataclass
class Player:
    """Position, facing vector and field of view of the player."""

    x: float
    y: float
    vx: float
    vy: float
    fov: float = 90.0
    rotation: int = 0
    view_distance: int = 10


def player_from_config(config: Config) -> Player:
    """Place the player at the centre of its start cell, facing its direction."""
    vx, vy = 0.0, 0.0
    if config.player_direction == "N":
        vy = -1.0
    elif config.player_direction == "S":
        vy = 1.0
    elif config.player_direction == "W":
        vx = -1.0
    else:
        vx = 1.0
    return Player(config.player_x + 0.5, config.player_y + 0.5, vx, vy)


@dataclass(frozen=True)
class Ray:
    """Result of casting one ray through the map."""

    map_x: int
    map_y: int
    side: Side
    x_step: int
    y_step: int
    vector_x: float
    vector_y: float
    wall_distance: float
    wall_x: float
    wall_y: float
    tile: str | None

    @property
    def height(self) -> int:
        """Height on screen, in pixels, of the wall slice this ray hit."""
        if self.wall_distance <= 0:
            return HEIGHT * 1000
        return int(HEIGHT / self.wall_distance)


class World:
    """A running scene: the mutable map, the player and door animation state."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self.map: list[list[str]] = [list(row) for row in (config.map or [])]
        self.player = player_from_config(config)
        self.is_animating = False
        self.door_time = 0.0
        start = self._cell(self.player.x, self.player.y)
        if self.tile(*start) is not None:
            self.map[start[1]][start[0]] = "0"

    @staticmethod
    def _cell(x: float, y: float) -> tuple[int, int]:
        return int(x), int(y)

    def tile(self, x: int, y: int) -> str | None:
        """Return the map character at column ``x`` of row ``y``, or None outside."""
        if y < 0 or y >= len(self.map):
            return None
        row = self.map[y]
        if x < 0 or x >= len(row):
            return None
        return row[x]

    def is_wall_set(self, x: int, y: int, chars: str) -> bool:
        """Return True if the tile at (``x``, ``y``) is one of ``chars``."""
        tile = self.tile(x, y)
        return tile is not None and tile in chars

    def blocks(self, margin: float, new_x: float, new_y: float) -> bool:
        """Return True if a solid tile near the player lies within ``margin``."""
        px, py = self._cell(self.player.x, self.player.y)
        for i in (-1, 0, 1):
            for j in (-1, 0, 1):
                tile = self.tile(px + i, py + j)
                if tile is None or tile not in _SOLID:
                    continue
                if (abs(px + i + 0.5 - new_x) < margin
                        and abs(py + j + 0.5 - new_y) < margin):
                    return True
        return False

    def cast_ray(self, column: int, chars: str = RENDER_SET) -> Ray:
        """Cast the ray for screen ``column`` until it meets one of ``chars``."""
        p = self.player
        half = math.tan(to_radians(p.fov) / 2)
        plane_x = -p.vy * half
        plane_y = p.vx * half
        camera = 2 * column / WIDTH - 1
        vector_x = p.vx + plane_x * camera
        vector_y = p.vy + plane_y * camera
        delta_x = abs(1 / vector_x) if vector_x != 0 else _NO_DELTA
        delta_y = abs(1 / vector_y) if vector_y != 0 else _NO_DELTA
        map_x, map_y = self._cell(p.x, p.y)
        if vector_x < 0:
            x_step, side_x = -1, (p.x - map_x) * delta_x
        else:
            x_step, side_x = 1, (map_x + 1.0 - p.x) * delta_x
        if vector_y < 0:
            y_step, side_y = -1, (p.y - map_y) * delta_y
        else:
            y_step, side_y = 1, (map_y + 1.0 - p.y) * delta_y

        while True:
            if side_x < side_y:
                side_x += delta_x
                map_x += x_step
                side = Side.HORIZONTAL
            else:
                side_y += delta_y
                map_y += y_step
                side = Side.VERTICAL
            tile = self.tile(map_x, map_y)
            if tile is None or tile in chars:
                break

        distance = side_x - delta_x if side is Side.HORIZONTAL else side_y - delta_y
        return Ray(
            map_x=map_x,
            map_y=map_y,
            side=side,
            x_step=x_step,
            y_step=y_step,
            vector_x=vector_x,
            vector_y=vector_y,
            wall_distance=distance,
            wall_x=p.x + distance * vector_x,
            wall_y=p.y + distance * vector_y,
            tile=tile,
        )

    def cast_all(self) -> list[Ray]:
        """Cast one ray for every screen column."""
        return [self.cast_ray(column, RENDER_SET) for column in range(WIDTH)]

    def _move(self, dx: float, dy: float) -> None:
        p = self.player
        new_x = p.x + dx * MOVE_SPEED
        new_y = p.y + dy * MOVE_SPEED
        if not self.blocks(MOVE_MARGIN, new_x, p.y):
            p.x = new_x
        if not self.blocks(MOVE_MARGIN, p.x, new_y):
            p.y = new_y

    def move_forward(self) -> None:
        """Step along the facing vector, sliding along walls."""
        self._move(self.player.vx, self.player.vy)

    def move_backward(self) -> None:
        """Step against the facing vector."""
        self._move(-self.player.vx, -self.player.vy)

    def move_left(self) -> None:
        """Strafe to the left of the facing vector."""
        self._move(self.player.vy, -self.player.vx)

    def move_right(self) -> None:
        """Strafe to the right of the facing vector."""
        self._move(-self.player.vy, self.player.vx)

    def rotate(self, degrees: float) -> None:
        """Turn the facing vector by a whole number of degrees (truncated)."""
        angle = to_radians(int(degrees))
        p = self.player
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        p.vx, p.vy = p.vx * cos_a - p.vy * sin_a, p.vx * sin_a + p.vy * cos_a

    def open_door(self, now_ms: float) -> bool:
        """Start opening or closing the door in front of the player, if close."""
        ray = self.cast_ray(WIDTH // 2, DOOR_SET)
        dis_x = abs(ray.map_x + 0.5 - self.player.x)
        dis_y = abs(ray.map_y + 0.5 - self.player.y)
        if not (dis_x < DOOR_REACH and dis_y < DOOR_REACH
                and max(dis_x, dis_y) >= DOOR_MIN_DISTANCE):
            return False
        tile = self.tile(ray.map_x, ray.map_y)
        if tile == "D":
            replacement = _OPENING[0]
        elif tile == "d":
            replacement = _CLOSING[0]
        else:
            return False
        self.door_time = now_ms
        self.is_animating = True
        self.map[ray.map_y][ray.map_x] = replacement
        return True

    def advance_doors(self) -> None:
        """Move every animating door one frame further."""
        for row in self.map:
            for index, ch in enumerate(row):
                if ch == "9":
                    row[index] = "d"
                elif ch == "z":
                    row[index] = "D"
                elif ch in _OPENING or ch in _CLOSING:
                    row[index] = chr(ord(ch) + 1)

    def has_moving_doors(self) -> bool:
        """Return True while any door is opening or closing."""
        return any(ch in _OPENING or ch in _CLOSING for row in self.map for ch in row)

    def update_doors(self, now_ms: float) -> bool:
        """Advance door animation when a frame is due; return True if it moved."""
        if not self.is_animating:
            return False
        if not self.has_moving_doors():
            self.is_animating = False
            return False
        if now_ms - self.door_time > DOOR_FRAME_MS:
            self.advance_doors()
            self.door_time = now_ms
            return True
        return False