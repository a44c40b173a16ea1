"""Scene configuration read from a ``.cub`` file, and the error it raises."""

from __future__ import annotations

from dataclasses import dataclass

_SUCCESS_MESSAGE = "FREED ALL "


class ConfigError(Exception):
    """Raised when a scene file or its map is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def exit_code(self) -> int:
        """Process exit status that goes with this error."""
        return 0 if _SUCCESS_MESSAGE.startswith(self.message) else 1


@dataclass
class Config:
    """Everything a scene file describes: textures, colours, map and player."""

    no_texture: str | None = None
    so_texture: str | None = None
    we_texture: str | None = None
    ea_texture: str | None = None
    door_textures: list[str] | None = None
    floor_color: int = -1
    ceiling_color: int = -1
    player_x: int = 0
    player_y: int = 0
    player_direction: str = " "
    width: int = 0
    height: int = 0
    map: list[str] | None = None

    def is_incomplete(self) -> bool:
        """Return True while a wall texture or a colour is still missing."""
        textures = (self.no_texture, self.so_texture, self.we_texture, self.ea_texture)
        return (
            any(texture is None for texture in textures)
            or self.floor_color == -1
            or self.ceiling_color == -1
        )