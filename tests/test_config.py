import pytest

from platformer import config
from platformer.config import Text, Tile, builtin_level


@pytest.mark.parametrize("index, columns", [(0, 72), (1, 78), (2, 86)])
def test_builtin_level_dimensions(index, columns):
    rows = builtin_level(index)
    assert len(rows) == 12
    assert all(len(row) == columns for row in rows)


@pytest.mark.parametrize("index", range(config.LEVEL_COUNT))
def test_builtin_levels_hold_one_player_and_one_exit(index):
    text = "".join(builtin_level(index))
    assert text.count(Tile.PLAYER.value) == 1
    assert text.count(Tile.EXIT.value) == 1


@pytest.mark.parametrize("index", range(config.LEVEL_COUNT))
def test_builtin_levels_use_only_known_tiles(index):
    known = {tile.value for tile in Tile}
    assert set("".join(builtin_level(index))) <= known


@pytest.mark.parametrize("index", range(config.LEVEL_COUNT))
def test_builtin_levels_player_start(index):
    rows = builtin_level(index)
    assert rows[10][8] == Tile.PLAYER.value


def test_first_level_has_one_enemy():
    assert "".join(builtin_level(0)).count(Tile.ENEMY.value) == 1


@pytest.mark.parametrize("index", range(config.LEVEL_COUNT))
def test_bottom_row_is_solid(index):
    bottom = builtin_level(index)[-1]
    assert set(bottom) <= {Tile.WALL.value, Tile.WALL_DARK.value}


@pytest.mark.parametrize("index", [-1, config.LEVEL_COUNT, 10])
def test_builtin_level_rejects_bad_index(index):
    with pytest.raises(IndexError):
        builtin_level(index)


def test_tile_characters():
    assert Tile.WALL.value == "#"
    assert Tile.AIR.value == "-"
    assert Tile("E") is Tile.EXIT


def test_text_defaults():
    text = Text("Hello")
    assert text.position == (0.50, 0.50)
    assert text.size == 32.0
    assert text.spacing == 4.0
    assert text.color == config.WHITE