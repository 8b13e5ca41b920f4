"""Level grids: loading, run-length decoding and tile collision queries."""

from __future__ import annotations

import math
from collections.abc import Iterable
from pathlib import Path

from .config import Tile, builtin_level
from .geometry import Rect, Vec2

LEVELS_FILE = Path("data") / "levels.rll"


class LevelLoadError(RuntimeError):
    """Raised when a level cannot be read or decoded."""


def decode_rle(text: str) -> str:
    """Expand a run-length encoded level; ``|`` stands for a line break."""
    parts: list[str] = []
    number = ""
    for char in text:
        if char.isdigit():
            number += char
            continue
        count = int(number) if number else 1
        parts.append("\n" if char == "|" else char * count)
        number = ""
    return "".join(parts)


def _lines(text: str) -> list[str]:
    """Split text into lines the way a line reader would, without a trailing empty line."""
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines


def parse_rll(text: str) -> list[str]:
    """Split the contents of a level file into encoded levels.

    Levels are separated by empty lines or lines starting with ``;``.
    """
    levels: list[str] = []
    current = ""
    for line in _lines(text):
        if not line or line.startswith(";"):
            if current:
                levels.append(current)
                current = ""
            continue
        current += line
    if current:
        levels.append(current)
    if not levels:
        raise LevelLoadError("No levels found in file")
    return levels


def read_rll_file(path: str | Path) -> list[str]:
    """Read a level file and return the encoded levels it holds."""
    try:
        text = Path(path).read_text()
    except OSError as error:
        raise LevelLoadError(f"Could not open level file: {path}") from error
    return parse_rll(text)


def _tile_char(tile: str) -> str:
    return tile.value if isinstance(tile, Tile) else tile


class Level:
    """A rectangular grid of tile characters."""

    def __init__(self) -> None:
        self._cells: list[list[str]] = []
        self.rows = 0
        self.columns = 0

    def load(self, index: int) -> None:
        """Load a level from the level file, falling back to the built-in one."""
        try:
            self.load_from_rll(LEVELS_FILE, index)
        except LevelLoadError:
            self.unload()
            self.load_rows(builtin_level(index))

    def load_from_rll(self, path: str | Path, index: int) -> None:
        """Load the level with the given index from a run-length encoded file."""
        levels = read_rll_file(path)
        if not 0 <= index < len(levels):
            raise LevelLoadError("Invalid level index")
        self.load_rows(_lines(decode_rle(levels[index])))

    def load_rows(self, rows: Iterable[str]) -> None:
        """Replace the grid with the given rows, padding short ones with air."""
        self.unload()
        rows = list(rows)
        width = max((len(row) for row in rows), default=0)
        if not rows or width == 0:
            raise LevelLoadError("Invalid level dimensions")
        self._cells = [list(row.ljust(width, Tile.AIR.value)) for row in rows]
        self.rows = len(rows)
        self.columns = width

    def unload(self) -> None:
        """Drop the grid."""
        self._cells = []
        self.rows = 0
        self.columns = 0

    def is_inside(self, row: int, column: int) -> bool:
        """Tell whether the cell lies within the grid."""
        return 0 <= row < self.rows and 0 <= column < self.columns

    def _colliding_cells(self, pos: Vec2, look_for: str):
        hitbox = Rect(pos.x, pos.y, 1.0, 1.0)
        look_for = _tile_char(look_for)
        base_row = math.floor(pos.y)
        base_column = math.floor(pos.x)
        for row in range(base_row - 1, base_row + 2):
            for column in range(base_column - 1, base_column + 2):
                if not self.is_inside(row, column):
                    continue
                if self._cells[row][column] != look_for:
                    continue
                if hitbox.overlaps(Rect(float(column), float(row), 1.0, 1.0)):
                    yield row, column

    def is_colliding(self, pos: Vec2, look_for: str) -> bool:
        """Tell whether a unit box at pos overlaps a tile of the given kind."""
        return next(self._colliding_cells(pos, look_for), None) is not None

    def find_collider(self, pos: Vec2, look_for: str) -> tuple[int, int]:
        """Return (row, column) of the first overlapping tile of the given kind.

        Without one, the cell under pos is returned.
        """
        found = next(self._colliding_cells(pos, look_for), None)
        if found is not None:
            return found
        return math.floor(pos.y), math.floor(pos.x)

    def get_cell(self, row: int, column: int) -> str:
        """Return the tile character at the cell."""
        if not self.is_inside(row, column):
            raise IndexError(f"cell ({row}, {column}) is outside the level")
        return self._cells[row][column]

    def set_cell(self, row: int, column: int, tile: str) -> None:
        """Put a tile character into the cell."""
        if not self.is_inside(row, column):
            raise IndexError(f"cell ({row}, {column}) is outside the level")
        self._cells[row][column] = _tile_char(tile)

    def pop_tiles(self, tile: str) -> list[tuple[int, int]]:
        """Replace every tile of the given kind with air and return their (row, column)."""
        tile = _tile_char(tile)
        found = [
            (row, column)
            for row, cells in enumerate(self._cells)
            for column, cell in enumerate(cells)
            if cell == tile
        ]
        for row, column in found:
            self._cells[row][column] = Tile.AIR.value
        return found