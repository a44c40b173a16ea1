"""The interactive game: input handling, the frame loop and the command."""

from __future__ import annotations

import sys
import time
from collections.abc import Sequence

from raycub.config import Config, ConfigError
from raycub.cubfile import parse_file
from raycub.engine import HEIGHT, WIDTH, World
from raycub.graphics import PIXEL_FORMAT, Canvas, Textures, render_frame

ERR_NOARG = "Usage: cub3D <scene.cub>"
WINDOW_TITLE = "cub3D"
ROTATE_STEP = 7
MOUSE_DEADZONE = 10
MOUSE_SENSITIVITY = 0.07
FRAME_RATE = 60


class Game:
    """A scene being played: world, textures, frame buffer and input flags."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self.world = World(config)
        self.textures = Textures.from_config(config)
        self.canvas = Canvas()
        self.show_map = True
        self.is_using_mouse = False
        self.is_key_pressed = False
        self.running = True

    def handle_key(self, key: str, now_ms: float) -> bool:
        """React to a key press named like "w" or "escape"; return True if used."""
        key = key.lower()
        world = self.world
        if key == "escape":
            self.running = False
            return True
        if key == "w":
            world.move_forward()
        elif key == "s":
            world.move_backward()
        elif key == "a":
            world.move_left()
        elif key == "d":
            world.move_right()
        elif key == "left":
            world.rotate(-ROTATE_STEP)
        elif key == "right":
            world.rotate(ROTATE_STEP)
        elif key == "m":
            self.show_map = not self.show_map
        elif key == "space":
            world.open_door(now_ms)
        else:
            return False
        self.is_key_pressed = True
        return True

    def handle_mouse(self, x: float, y: float) -> bool:
        """Turn by the pointer's offset from the window centre.

        Returns True when the view turned, after which the pointer should be
        put back in the centre.
        """
        offset = x - WIDTH * 0.5
        if abs(offset) <= MOUSE_DEADZONE:
            return False
        self.is_using_mouse = True
        self.world.rotate(int(offset) * MOUSE_SENSITIVITY)
        return True

    def step(self, now_ms: float) -> Canvas:
        """Advance door animation and render one frame."""
        self.world.update_doors(now_ms)
        self.is_using_mouse = False
        self.is_key_pressed = False
        render_frame(self.canvas, self.world, self.textures, self.show_map)
        return self.canvas


def run(config: Config) -> None:
    """Open a window and play ``config`` until it is closed."""
    import pygame

    game = Game(config)
    pygame.init()
    try:
        screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        clock = pygame.time.Clock()
        centre = (WIDTH // 2, HEIGHT // 2)
        while game.running:
            now = time.monotonic() * 1000
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type == pygame.KEYDOWN:
                    game.handle_key(pygame.key.name(event.key), now)
                elif event.type == pygame.MOUSEMOTION:
                    if game.handle_mouse(*event.pos):
                        pygame.mouse.set_pos(centre)
            if not game.running:
                break
            canvas = game.step(now)
            frame = pygame.image.frombuffer(
                canvas.to_bytes(), (canvas.width, canvas.height), PIXEL_FORMAT
            )
            screen.blit(frame, (0, 0))
            pygame.display.flip()
            clock.tick(FRAME_RATE)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Load the scene named on the command line and play it."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        if len(args) != 1:
            raise ConfigError(ERR_NOARG)
        run(parse_file(args[0]))
    except ConfigError as exc:
        print("Error")
        print(exc.message)
        return exc.exit_code
    return 0


if __name__ == "__main__":
    sys.exit(main())