import pytest

from platformer.config import Tile, builtin_level
from platformer.geometry import Vec2
from platformer.level import (
    Level,
    LevelLoadError,
    decode_rle,
    parse_rll,
    read_rll_file,
)


def make_level(rows):
    level = Level()
    level.load_rows(rows)
    return level


def test_decode_rle_expands_counts():
    assert decode_rle("3-2#") == "---##"


def test_decode_rle_single_chars_without_count():
    assert decode_rle("#-E") == "#-E"


def test_decode_rle_bar_is_newline_and_ignores_count():
    assert decode_rle("2#5|-") == "##\n-"


def test_decode_rle_drops_trailing_digits():
    assert decode_rle("#12") == "#"


def test_decode_rle_zero_count():
    assert decode_rle("0#-") == "-"


def test_parse_rll_splits_on_blank_and_comment_lines():
    text = "; first\n2#|\n2-\n\n; second\n3^\n"
    assert parse_rll(text) == ["2#|2-", "3^"]


def test_parse_rll_empty_raises():
    with pytest.raises(LevelLoadError):
        parse_rll("; only a comment\n\n")


def test_read_rll_file_missing(tmp_path):
    with pytest.raises(LevelLoadError):
        read_rll_file(tmp_path / "missing.rll")


def test_read_rll_file_reads_levels(tmp_path):
    path = tmp_path / "levels.rll"
    path.write_text("3#\n;\n2-\n")
    assert read_rll_file(path) == ["3#", "2-"]


def test_load_from_rll_pads_short_rows(tmp_path):
    path = tmp_path / "levels.rll"
    path.write_text("#|3#|2-\n")
    level = Level()
    level.load_from_rll(path, 0)
    assert (level.rows, level.columns) == (3, 3)
    assert [level.get_cell(0, c) for c in range(3)] == ["#", "-", "-"]
    assert level.get_cell(2, 2) == "-"


def test_load_from_rll_invalid_index(tmp_path):
    path = tmp_path / "levels.rll"
    path.write_text("3#\n")
    with pytest.raises(LevelLoadError):
        Level().load_from_rll(path, 1)
    with pytest.raises(LevelLoadError):
        Level().load_from_rll(path, -1)


def test_load_falls_back_to_builtin(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    level = Level()
    level.load(0)
    assert (level.rows, level.columns) == (12, 72)
    rows = builtin_level(0)
    assert all(
        level.get_cell(r, c) == rows[r][c]
        for r in range(level.rows)
        for c in range(level.columns)
    )


def test_load_prefers_level_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "levels.rll").write_text("4#|@3-\n")
    level = Level()
    level.load(0)
    assert (level.rows, level.columns) == (2, 4)
    assert level.get_cell(1, 0) == Tile.PLAYER


def test_load_rows_rejects_empty():
    with pytest.raises(LevelLoadError):
        Level().load_rows([])
    with pytest.raises(LevelLoadError):
        Level().load_rows(["", ""])


def test_unload_clears_dimensions():
    level = make_level(["##", "--"])
    level.unload()
    assert (level.rows, level.columns) == (0, 0)
    assert not level.is_inside(0, 0)


def test_is_inside_bounds():
    level = make_level(["---", "---"])
    assert level.is_inside(1, 2)
    assert not level.is_inside(2, 0)
    assert not level.is_inside(0, 3)
    assert not level.is_inside(-1, 0)


@pytest.mark.parametrize(
    "pos, expected",
    [
        (Vec2(1.0, 1.0), True),
        (Vec2(0.5, 1.0), True),
        (Vec2(0.0, 1.0), False),
        (Vec2(2.0, 1.0), False),
        (Vec2(1.0, 0.0), False),
        (Vec2(1.5, 0.5), True),
    ],
)
def test_is_colliding_with_wall(pos, expected):
    level = make_level(["----", "-#--", "----"])
    assert level.is_colliding(pos, Tile.WALL) is expected


def test_is_colliding_with_plain_character():
    level = make_level(["-^-"])
    assert level.is_colliding(Vec2(1.0, 0.0), "^")
    assert not level.is_colliding(Vec2(1.0, 0.0), "#")


def test_find_collider_returns_tile_cell():
    level = make_level(["----", "-*--", "----"])
    assert level.find_collider(Vec2(0.5, 0.5), Tile.COIN) == (1, 1)


def test_find_collider_falls_back_to_cell_under_position():
    level = make_level(["----", "-*--", "----"])
    assert level.find_collider(Vec2(2.5, 0.5), Tile.SPIKE) == (0, 2)


def test_set_and_get_cell_round_trip():
    level = make_level(["---"])
    level.set_cell(0, 1, Tile.EXIT)
    assert level.get_cell(0, 1) == "E"
    assert level.is_colliding(Vec2(1.0, 0.0), Tile.EXIT)


def test_cell_access_outside_raises():
    level = make_level(["---"])
    with pytest.raises(IndexError):
        level.get_cell(1, 0)
    with pytest.raises(IndexError):
        level.set_cell(0, -1, Tile.WALL)


def test_pop_tiles_returns_positions_and_clears():
    level = make_level(["&-&", "-&-"])
    assert level.pop_tiles(Tile.ENEMY) == [(0, 0), (0, 2), (1, 1)]
    assert all(
        level.get_cell(r, c) == Tile.AIR for r in range(2) for c in range(3)
    )
    assert level.pop_tiles(Tile.ENEMY) == []