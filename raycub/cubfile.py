"""Reading of ``.cub`` scene files."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from raycub.config import Config, ConfigError
from raycub.mapcheck import validate_map
from raycub.textutil import (
    has_spaces,
    is_only_whitespace,
    parse_int,
    split_words,
    trim_chars,
)

VALID_ID = "NOSWEADT \t"
MAP_START = " 01"
MAX_DOOR_TEXTURES = 4
_DIGITS = "0123456789"
_TRIM = " \n\t"

ERR_ARGDIR = "Argument is a directory."
ERR_CUBEXT = "Scene file must have a .cub extension."
ERR_OPEN = "Cannot open the scene file."
ERR_MULTI = "Element defined more than once."
ERR_XPMSYNTAX = "Texture must be given as '<ID> <path>.xpm'."
ERR_XPMDIR = "Texture path is a directory."
ERR_XPMSPACE = "Texture path must not contain spaces."
ERR_4DOOR = "At most 4 door textures are allowed."
ERR_RGBCHAR = "Colour contains an invalid character."
ERR_RGBCOUNT = "RGB must have 3 values"
ERR_RGBRANGE = "RGB must be between 0 and 255"
ERR_MISSINGTEXT = "Missing texture, colour or map."
ERR_EMPTYMAP = "Map must not contain empty lines."


def check_path(path: str | Path) -> None:
    """Check that ``path`` is not a directory and ends in ``.cub``."""
    if Path(path).is_dir():
        raise ConfigError(ERR_ARGDIR)
    if not str(path).endswith(".cub"):
        raise ConfigError(ERR_CUBEXT)


def is_valid_xpm(name: str) -> bool:
    """Return True if ``name`` is longer than ``.xpm`` and ends with it."""
    return len(name) >= 5 and name.endswith(".xpm")


def rgb_to_int(r: int, g: int, b: int) -> int:
    """Pack three channels into 0xRRGGBB."""
    return (r << 16) | (g << 8) | b


def _skip_id(text: str) -> int:
    for index, ch in enumerate(text):
        if ch not in VALID_ID:
            return index
    return len(text)


def _texture_path(config: Config, attr: str, line: str) -> str:
    texture = trim_chars(line, _TRIM)
    if getattr(config, attr) is not None:
        raise ConfigError(ERR_MULTI)
    if not has_spaces(texture):
        raise ConfigError(ERR_XPMSYNTAX)
    path = texture[_skip_id(texture):]
    if path and Path(path).is_dir():
        raise ConfigError(ERR_XPMDIR)
    if not texture.endswith(".xpm"):
        raise ConfigError(ERR_XPMSYNTAX)
    if has_spaces(path):
        raise ConfigError(ERR_XPMSPACE)
    return path


def _door_paths(config: Config, line: str) -> list[str]:
    if config.door_textures is not None:
        raise ConfigError(ERR_MULTI)
    paths: list[str] = []
    for index, piece in enumerate(split_words(line[_skip_id(line):], " ")):
        if index >= MAX_DOOR_TEXTURES:
            raise ConfigError(ERR_4DOOR)
        piece = trim_chars(piece, _TRIM)
        if not is_valid_xpm(piece) or has_spaces(piece):
            raise ConfigError(ERR_XPMSYNTAX)
        paths.append(piece)
    return paths


def parse_color(config: Config, current: int, text: str) -> int:
    """Parse an ``F``/``C`` line into 0xRRGGBB; ``current`` must be unset (-1)."""
    if current != -1:
        raise ConfigError(ERR_MULTI)
    rgb = trim_chars(text, _TRIM)
    start = next(
        (i for i, ch in enumerate(rgb) if ch in _DIGITS or ch == "-"), len(rgb)
    )
    rgb = rgb[start:]
    if any(ch not in _DIGITS and ch not in " ,-" for ch in rgb):
        raise ConfigError(ERR_RGBCHAR)
    parts = split_words(rgb, ",")
    if len(parts) != 3:
        raise ConfigError(ERR_RGBCOUNT)
    r, g, b = (parse_int(part) for part in parts)
    if not all(0 <= channel <= 255 for channel in (r, g, b)):
        raise ConfigError(ERR_RGBRANGE)
    return rgb_to_int(r, g, b)


_TEXTURE_IDS = (
    ("NO", "no_texture"),
    ("SO", "so_texture"),
    ("WE", "we_texture"),
    ("EA", "ea_texture"),
)


def apply_info_line(config: Config, line: str) -> None:
    """Apply one texture or colour line to ``config``; other lines are ignored."""
    for prefix, attr in _TEXTURE_IDS:
        if line.startswith(prefix):
            setattr(config, attr, _texture_path(config, attr, line))
            return
    if line.startswith("DT"):
        config.door_textures = _door_paths(config, line)
    elif line.startswith("F"):
        config.floor_color = parse_color(config, config.floor_color, line)
    elif line.startswith("C"):
        config.ceiling_color = parse_color(config, config.ceiling_color, line)


def _is_map_line(line: str) -> bool:
    return bool(line) and line[0] in MAP_START


def _read_map(first: str, rest: list[str]) -> list[str]:
    seen_blank = False
    for line in rest:
        if is_only_whitespace(line):
            seen_blank = True
        elif seen_blank:
            raise ConfigError(ERR_EMPTYMAP)
    return [trim_chars(line, "\n") for line in [first, *rest] if _is_map_line(line)]


def parse_lines(lines: Iterable[str]) -> Config:
    """Build and validate a :class:`Config` from the lines of a scene file."""
    config = Config()
    it = iter(lines)
    for line in it:
        if _is_map_line(line):
            if config.is_incomplete():
                raise ConfigError(ERR_MISSINGTEXT)
            config.map = _read_map(line, list(it))
            validate_map(config)
            break
        if not is_only_whitespace(line):
            apply_info_line(config, line)
    if config.is_incomplete() or config.map is None:
        raise ConfigError(ERR_MISSINGTEXT)
    return config


def parse_file(path: str | Path) -> Config:
    """Check, read and validate the scene file at ``path``."""
    check_path(path)
    try:
        handle = open(path, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(ERR_OPEN) from exc
    with handle:
        return parse_lines(handle)