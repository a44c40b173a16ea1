"""Validation of the map part of a scene."""

from __future__ import annotations

from raycub.config import Config, ConfigError

PLAYER_CHARS = "NSEW"
VALID_MAP_CHARS = " 01NSEWD"
PAD_CHAR = "2"

ERR_MULTIPLAYER = "Map must hold a single player."
ERR_NOPLAYER = "Map holds no player."
ERR_TABMAP = "Map must not contain tabs."
ERR_INVALIDMAPCHAR = "Map contains an invalid character."
ERR_DOORFILE = "Map has doors but no door texture was given."
ERR_DOOR = "A door must stand between two walls."
ERR_WALLS = "Map is not surrounded by walls"
ERR_PLAYERSTUCK = "Player is stuck between walls."


def _at(rows: list[str], row: int, col: int) -> str | None:
    if row < 0 or row >= len(rows) or col < 0 or col >= len(rows[row]):
        return None
    return rows[row][col]


def check_door(config: Config, rows: list[str], row: int, col: int) -> None:
    """Check that the door at (``row``, ``col``) sits between two walls."""
    if config.door_textures is None:
        raise ConfigError(ERR_DOORFILE)
    if row <= 0 or row + 1 >= len(rows) or col <= 0 or col + 1 >= len(rows[row]):
        raise ConfigError(ERR_DOOR)
    line = rows[row]
    if line[col - 1] == "1" and line[col + 1] == "1":
        return
    if _at(rows, row - 1, col) == "1" and _at(rows, row + 1, col) == "1":
        return
    raise ConfigError(ERR_DOOR)


def scan_map(config: Config) -> None:
    """Check map characters and doors, and record the player's cell."""
    rows = config.map or []
    players = 0
    for i, line in enumerate(rows):
        if "\t" in line:
            raise ConfigError(ERR_TABMAP)
        for j, ch in enumerate(line):
            if ch in PLAYER_CHARS:
                players += 1
                if players > 1:
                    raise ConfigError(ERR_MULTIPLAYER)
                config.player_direction = ch
                config.player_x = j
                config.player_y = i
            if ch not in VALID_MAP_CHARS:
                raise ConfigError(ERR_INVALIDMAPCHAR)
            # A door is checked from the cell just before it.
            if j + 1 < len(line) and line[j + 1] == "D":
                check_door(config, rows, i, j + 1)
    if players == 0:
        raise ConfigError(ERR_NOPLAYER)


def pad_map(config: Config, rows: list[str]) -> list[str]:
    """Return ``rows`` padded to equal width; record width and height."""
    config.width = max((len(line) for line in rows), default=0)
    config.height = len(rows)
    return [line.ljust(config.width, PAD_CHAR) for line in rows]


def check_walls(padded: list[str], config: Config) -> None:
    """Check that every floor cell and the player's cell is enclosed."""
    for i, line in enumerate(padded):
        for j, tile in enumerate(line):
            if tile != "0" and tile != config.player_direction:
                continue
            neighbours = (
                _at(padded, i - 1, j),
                _at(padded, i + 1, j),
                _at(padded, i, j - 1),
                _at(padded, i, j + 1),
            )
            if any(n is None or n == PAD_CHAR for n in neighbours):
                raise ConfigError(ERR_WALLS)


def check_player_stuck(config: Config) -> None:
    """Raise if the player's cell is walled in on all four sides."""
    rows = config.map or []
    x, y = config.player_x, config.player_y
    around = (_at(rows, y + 1, x), _at(rows, y - 1, x), _at(rows, y, x + 1), _at(rows, y, x - 1))
    if all(tile == "1" for tile in around):
        raise ConfigError(ERR_PLAYERSTUCK)


def validate_map(config: Config) -> None:
    """Run every map check on ``config.map``."""
    scan_map(config)
    check_walls(pad_map(config, config.map or []), config)