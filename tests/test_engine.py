import math

import pytest

from raycub.config import Config
from raycub.engine import (
    DOOR_FRAME_MS,
    MOVE_MARGIN,
    MOVE_SPEED,
    WIDTH,
    Side,
    World,
    player_from_config,
    to_radians,
)

ROOM = ["11111", "10001", "10N01", "10001", "11111"]
DOOR_ROOM = ["11111", "11D11", "10N01", "10001", "11111"]
FAR_DOOR_ROOM = ["11111", "11D11", "10001", "10001", "10N01", "11111"]


def _config(rows, direction="N", doors=None):
    for y, row in enumerate(rows):
        x = row.find(direction)
        if x != -1:
            return Config(
                map=list(rows),
                player_x=x,
                player_y=y,
                player_direction=direction,
                door_textures=doors,
            )
    raise AssertionError("no player in test map")


def test_to_radians_half_turn():
    assert to_radians(180) == pytest.approx(math.pi)


@pytest.mark.parametrize(
    "direction, expected",
    [("N", (0, -1)), ("S", (0, 1)), ("W", (-1, 0)), ("E", (1, 0))],
)
def test_player_from_config_directions(direction, expected):
    rows = [row.replace("N", direction) for row in ROOM]
    player = player_from_config(_config(rows, direction))
    assert (player.vx, player.vy) == expected
    assert (player.x, player.y) == (2.5, 2.5)


def test_world_clears_player_cell():
    world = World(_config(ROOM))
    assert world.tile(2, 2) == "0"
    assert world.tile(-1, 0) is None
    assert world.tile(0, 99) is None


def test_is_wall_set():
    world = World(_config(ROOM))
    assert world.is_wall_set(0, 0, "1")
    assert not world.is_wall_set(1, 1, "1")
    assert not world.is_wall_set(-5, 0, "1")


def test_center_ray_hits_north_wall():
    world = World(_config(ROOM))
    ray = world.cast_ray(WIDTH // 2, "1")
    assert (ray.map_x, ray.map_y) == (2, 0)
    assert ray.side is Side.VERTICAL
    assert ray.tile == "1"
    assert ray.wall_distance == pytest.approx(world.player.y - 1)
    assert ray.wall_y == pytest.approx(1.0)
    assert ray.height > 0


def test_cast_all_covers_every_column_with_walls():
    world = World(_config(ROOM))
    rays = world.cast_all()
    assert len(rays) == WIDTH
    assert all(ray.tile == "1" for ray in rays)
    assert all(ray.wall_distance > 0 for ray in rays)


def test_move_forward_and_backward():
    world = World(_config(ROOM))
    world.move_forward()
    assert world.player.y == pytest.approx(2.5 - MOVE_SPEED)
    world.move_backward()
    assert world.player.y == pytest.approx(2.5)
    assert world.player.x == pytest.approx(2.5)


def test_strafe_left_and_right():
    world = World(_config(ROOM))
    world.move_left()
    assert world.player.x == pytest.approx(2.5 - MOVE_SPEED)
    world.move_right()
    world.move_right()
    assert world.player.x == pytest.approx(2.5 + MOVE_SPEED)
    assert world.player.y == pytest.approx(2.5)


def test_walls_stop_movement():
    world = World(_config(ROOM))
    for _ in range(50):
        world.move_forward()
    assert world.player.y >= 1 + MOVE_MARGIN - 0.5 - 1e-9
    assert world.blocks(MOVE_MARGIN, world.player.x, world.player.y - MOVE_SPEED)


def test_rotate_quarter_turn_faces_east():
    world = World(_config(ROOM))
    world.rotate(90)
    east = player_from_config(_config([r.replace("N", "E") for r in ROOM], "E"))
    assert world.player.vx == pytest.approx(east.vx)
    assert world.player.vy == pytest.approx(east.vy, abs=1e-12)


def test_rotate_truncates_and_keeps_length():
    world = World(_config(ROOM))
    world.rotate(0.9)
    assert (world.player.vx, world.player.vy) == (0, -1)
    world.rotate(37)
    assert math.hypot(world.player.vx, world.player.vy) == pytest.approx(1.0)


def test_closed_door_blocks_player():
    world = World(_config(DOOR_ROOM, doors=["a.xpm"]))
    for _ in range(20):
        world.move_forward()
    assert world.player.y >= 1.5 + MOVE_MARGIN - 1e-9


def test_door_opens_and_finishes():
    world = World(_config(DOOR_ROOM, doors=["a.xpm"]))
    assert not world.has_moving_doors()
    assert world.open_door(1000)
    assert world.tile(2, 1) == "2"
    assert world.is_animating
    assert world.has_moving_doors()
    for _ in range(8):
        world.advance_doors()
    assert world.tile(2, 1) == "d"
    assert not world.has_moving_doors()


def test_open_door_closes_again():
    world = World(_config(DOOR_ROOM, doors=["a.xpm"]))
    world.map[1][2] = "d"
    assert world.open_door(0)
    assert world.tile(2, 1) == "s"
    for _ in range(8):
        world.advance_doors()
    assert world.tile(2, 1) == "D"


def test_door_out_of_reach():
    world = World(_config(FAR_DOOR_ROOM, doors=["a.xpm"]))
    assert not world.open_door(0)
    assert world.tile(2, 1) == "D"
    assert not world.is_animating


def test_update_doors_waits_for_frame_time():
    world = World(_config(DOOR_ROOM, doors=["a.xpm"]))
    world.open_door(1000)
    assert not world.update_doors(1000 + DOOR_FRAME_MS)
    assert world.tile(2, 1) == "2"
    assert world.update_doors(1001 + DOOR_FRAME_MS)
    assert world.tile(2, 1) == "3"


def test_update_doors_stops_animation_when_done():
    world = World(_config(DOOR_ROOM, doors=["a.xpm"]))
    world.open_door(0)
    for _ in range(8):
        world.advance_doors()
    assert not world.update_doors(10_000)
    assert not world.is_animating