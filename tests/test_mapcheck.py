import pytest

from raycub.config import Config, ConfigError
from raycub.mapcheck import (
    PAD_CHAR,
    check_door,
    check_player_stuck,
    check_walls,
    pad_map,
    scan_map,
    validate_map,
)

CLOSED = ["111111", "100001", "10N001", "111111"]


def _config(rows, doors=None):
    return Config(map=list(rows), door_textures=doors)


def test_scan_finds_player():
    config = _config(CLOSED)
    scan_map(config)
    assert config.player_direction == "N"
    assert config.player_x == CLOSED[2].index("N")
    assert config.player_y == 2


def test_two_players_rejected():
    with pytest.raises(ConfigError):
        scan_map(_config(["1111", "1NS1", "1111"]))


def test_no_player_rejected():
    with pytest.raises(ConfigError):
        scan_map(_config(["111", "101", "111"]))


def test_invalid_character_rejected():
    with pytest.raises(ConfigError):
        scan_map(_config(["1111", "1NX1", "1111"]))


def test_tab_rejected():
    with pytest.raises(ConfigError):
        scan_map(_config(["1111", "1N\t1", "1111"]))


def test_door_needs_texture():
    with pytest.raises(ConfigError):
        scan_map(_config(["11111", "1N0D1", "11111"]))


def test_horizontal_door_between_walls():
    rows = ["11111", "10N01", "11D11", "10001", "11111"]
    config = _config(rows, doors=["d.xpm"])
    scan_map(config)
    assert config.player_direction == "N"


def test_vertical_door_between_walls():
    rows = ["11111", "1N101", "10D01", "10101", "11111"]
    check_door(_config(rows, doors=["d.xpm"]), rows, 2, 2)
    assert rows[1][2] == "1" and rows[3][2] == "1"


def test_door_in_open_space_rejected():
    rows = ["11111", "1N001", "10D01", "10001", "11111"]
    with pytest.raises(ConfigError):
        check_door(_config(rows, doors=["d.xpm"]), rows, 2, 2)


def test_door_on_edge_rejected():
    rows = ["1D11", "1N01", "1111"]
    with pytest.raises(ConfigError):
        check_door(_config(rows, doors=["d.xpm"]), rows, 0, 1)


def test_check_door_without_textures():
    rows = ["11111", "11D11", "11111"]
    with pytest.raises(ConfigError):
        check_door(_config(rows), rows, 1, 2)


def test_pad_map_equal_width():
    config = Config()
    rows = ["111", "1", "11111"]
    padded = pad_map(config, rows)
    assert config.width == 5
    assert config.height == len(rows)
    assert all(len(line) == config.width for line in padded)
    for original, line in zip(rows, padded):
        assert line.startswith(original)
        assert set(line[len(original):]) <= {PAD_CHAR}


def test_pad_map_keeps_input():
    rows = ["10", "1"]
    pad_map(Config(), rows)
    assert rows == ["10", "1"]


def test_walls_closed_map_passes():
    config = _config(CLOSED)
    scan_map(config)
    padded = pad_map(config, config.map)
    check_walls(padded, config)
    assert padded == CLOSED


def test_walls_open_edge_rejected():
    config = _config(["111", "0N1", "111"])
    scan_map(config)
    with pytest.raises(ConfigError):
        check_walls(pad_map(config, config.map), config)


def test_walls_padding_is_void():
    config = _config(["1111", "1N01", "10", "1111"])
    scan_map(config)
    with pytest.raises(ConfigError):
        check_walls(pad_map(config, config.map), config)


def test_player_stuck():
    config = _config(["111", "1N1", "111"])
    scan_map(config)
    with pytest.raises(ConfigError):
        check_player_stuck(config)


def test_player_not_stuck():
    config = _config(CLOSED)
    scan_map(config)
    check_player_stuck(config)
    assert config.map[config.player_y][config.player_x] == "N"


def test_validate_map_records_size():
    config = _config(CLOSED)
    validate_map(config)
    assert config.width == len(CLOSED[0])
    assert config.height == len(CLOSED)
    assert config.map == CLOSED


def test_validate_map_rejects_open_map():
    with pytest.raises(ConfigError):
        validate_map(_config(["1111", "1N00", "1111"]))