import pytest

from raycub.app import ERR_NOARG, Game, main
from raycub.config import Config, ConfigError
from raycub.cubfile import ERR_CUBEXT, ERR_OPEN
from raycub.engine import WIDTH

CEILING, FLOOR = 0x0C0B0A, 0x0A0B0C
CORRIDOR = ["111", "101", "101", "101", "101", "101", "1N1", "111"]
DOOR_MAP = ["111", "1D1", "101", "1N1", "111"]


def write_xpm(path, color):
    path.write_text(
        '/* XPM */\nstatic char *img[] = {\n"2 2 1 1",\n'
        f'"a c #{color:06X}",\n"aa",\n"aa"\n}};\n'
    )
    return str(path)


@pytest.fixture
def make_config(tmp_path):
    paths = {
        name: write_xpm(tmp_path / f"{name}.xpm", color)
        for name, color in (("n", 0x110000), ("s", 0x002200), ("w", 0x000033),
                            ("e", 0x444444), ("door", 0x550055))
    }

    def build(rows=CORRIDOR, doors=False):
        config = Config(
            no_texture=paths["n"], so_texture=paths["s"], we_texture=paths["w"],
            ea_texture=paths["e"],
            door_textures=[paths["door"]] if doors else None,
            floor_color=FLOOR, ceiling_color=CEILING, map=list(rows),
        )
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                if ch in "NSEW":
                    config.player_x, config.player_y = x, y
                    config.player_direction = ch
        config.width = max(len(row) for row in rows)
        config.height = len(rows)
        return config

    return build


def test_toggle_minimap(make_config):
    game = Game(make_config())
    assert game.handle_key("m", 0) is True
    assert game.show_map is False
    assert game.is_key_pressed is True


def test_unknown_key_is_ignored(make_config):
    game = Game(make_config())
    assert game.handle_key("q", 0) is False
    assert game.is_key_pressed is False


def test_escape_stops(make_config):
    game = Game(make_config())
    assert game.handle_key("escape", 0) is True
    assert game.running is False


def test_forward_and_backward(make_config):
    game = Game(make_config())
    game.handle_key("w", 0)
    assert game.world.player.y < 6.5
    assert game.world.player.x == pytest.approx(1.5)
    other = Game(make_config())
    other.handle_key("s", 0)
    assert other.world.player.y > 6.5


def test_left_then_right_restores_direction(make_config):
    game = Game(make_config())
    game.handle_key("left", 0)
    game.handle_key("right", 0)
    assert game.world.player.vx == pytest.approx(0.0, abs=1e-9)
    assert game.world.player.vy == pytest.approx(-1.0)


def test_mouse_inside_deadzone(make_config):
    game = Game(make_config())
    assert game.handle_mouse(WIDTH // 2 + 5, 0) is False
    assert game.is_using_mouse is False
    assert game.world.player.vy == pytest.approx(-1.0)


def test_mouse_turn_matches_key_turn(make_config):
    by_mouse = Game(make_config())
    by_key = Game(make_config())
    assert by_mouse.handle_mouse(WIDTH // 2 + 100, 0) is True
    by_key.handle_key("right", 0)
    assert by_mouse.is_using_mouse is True
    assert by_mouse.world.player.vx == pytest.approx(by_key.world.player.vx)
    assert by_mouse.world.player.vy == pytest.approx(by_key.world.player.vy)


def test_space_opens_door_and_step_animates(make_config):
    game = Game(make_config(DOOR_MAP, doors=True))
    game.handle_key("w", 0)
    assert game.handle_key("space", 1000.0) is True
    assert game.world.tile(1, 1) == "2"
    assert game.world.is_animating is True
    game.step(1100.0)
    assert game.world.tile(1, 1) == "2"
    game.step(1300.0)
    assert game.world.tile(1, 1) == "3"


def test_step_renders_and_resets_flags(make_config):
    game = Game(make_config())
    game.show_map = False
    game.handle_mouse(WIDTH // 2 + 100, 0)
    canvas = game.step(0.0)
    assert game.is_using_mouse is False
    assert canvas.get_pixel(WIDTH // 2, 0) == CEILING


def test_game_with_missing_texture(tmp_path):
    missing = str(tmp_path / "missing.xpm")
    config = Config(no_texture=missing, so_texture=missing, we_texture=missing,
                    ea_texture=missing, floor_color=0, ceiling_color=0,
                    map=list(CORRIDOR), player_x=1, player_y=6,
                    player_direction="N")
    with pytest.raises(ConfigError):
        Game(config)


def test_main_without_argument(capsys):
    assert main([]) == 1
    assert capsys.readouterr().out == f"Error\n{ERR_NOARG}\n"


def test_main_bad_extension(tmp_path, capsys):
    assert main([str(tmp_path / "scene.txt")]) == 1
    assert ERR_CUBEXT in capsys.readouterr().out


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.cub")]) == 1
    assert ERR_OPEN in capsys.readouterr().out