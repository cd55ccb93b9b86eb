import logging
from enum import IntEnum

import numpy as np


logger = logging.getLogger(__name__)


class TileKind(IntEnum):
    EMPTY = 0
    WALL = 1
    DOOR = 2
    KEY = 3
    MAIZE = 4
    POWER_PELLET = 5
    STAR = 6
    SUPER_PELLET = 7
    FRUIT = 8


CHAR_TO_TILE = {
    "#": TileKind.WALL,
    ".": TileKind.EMPTY,
    "K": TileKind.KEY,
    "M": TileKind.MAIZE,
    "P": TileKind.POWER_PELLET,
    "S": TileKind.STAR,
    "U": TileKind.SUPER_PELLET,
    "F": TileKind.FRUIT,
    "D": TileKind.DOOR,
}

COLLECTIBLES = {
    TileKind.MAIZE,
    TileKind.KEY,
    TileKind.POWER_PELLET,
    TileKind.STAR,
    TileKind.SUPER_PELLET,
    TileKind.FRUIT,
}

PLAYER_PASSABLE = {TileKind.EMPTY} | COLLECTIBLES
GHOST_BLOCKING = {TileKind.WALL, TileKind.DOOR}


def player_can_enter(kind, powered_up):
    if kind in PLAYER_PASSABLE:
        return True
    return kind == TileKind.DOOR and powered_up


def ghost_can_enter(kind):
    return kind not in GHOST_BLOCKING


class TileMap:
    """Fixed-size grid of TileKind values addressed as (column, row).

    Cells live in a numpy int8 array indexed [row, column]. Out-of-range
    coordinates are a caller bug: get/set raise IndexError, so callers
    check in_bounds first.
    """

    def __init__(self, width, height):
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)
        self.load_error = ""

    def in_bounds(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x, y):
        if not self.in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} map")
        return TileKind(int(self.grid[y, x]))

    def set(self, x, y, kind):
        if not self.in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} map")
        self.grid[y, x] = int(kind)

    def any(self, kind):
        return bool((self.grid == int(kind)).any())

    def count(self, kind):
        return int((self.grid == int(kind)).sum())

    def cells(self, kind):
        ys, xs = np.nonzero(self.grid == int(kind))
        return [(int(x), int(y)) for x, y in zip(xs, ys)]

    def clear(self):
        self.grid.fill(int(TileKind.EMPTY))

    def load(self, lines):
        # Short rows and missing rows stay Empty; overflow is ignored.
        self.clear()
        for y, row in enumerate(lines):
            if y >= self.height:
                break
            row = row.rstrip("\r\n")
            for x, ch in enumerate(row[: self.width]):
                self.grid[y, x] = int(CHAR_TO_TILE.get(ch, TileKind.EMPTY))

    def load_file(self, path):
        self.load_error = ""
        try:
            with open(path, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except (OSError, UnicodeDecodeError) as exc:
            self.clear()
            self.load_error = f"Unable to open map file {path}: {exc}"
            logger.warning(self.load_error)
            return False
        self.load(lines)
        return True

    def to_lists(self):
        return self.grid.tolist()
