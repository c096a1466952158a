"""Tile-based world generated from per-tile seeds."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterator

from .rng import Random

EMPTY = -1


class Block(IntEnum):
    """Colours (signed ARGB) that identify kinds of terrain."""

    GROUND = -9395396
    TREE = -15063505
    LEAVES = -10625393
    DIAMOND = -1835162
    CAVE = -16711423
    CAVE_FLOOR = -13949659


_SOLID_COLORS = frozenset(
    {
        Block.TREE,
        Block.LEAVES,
        -22963,
        -5547189,
        -16727297,
        -13548733,
        -14468804,
        -13228249,
        -16777216,
        -11582653,
        Block.DIAMOND,
    }
)

_RANDOM_BLOCKS = (Block.GROUND, Block.TREE) + (Block.GROUND,) * 37

CAVE_SIZE = 5
CAVE_MARGIN = 5


def is_solid(color: int) -> bool:
    """Whether a player cannot walk through a pixel of this colour."""
    return int(color) in _SOLID_COLORS


class World:
    """A grid of tiles, each tile_size pixels square, with per-pixel edits."""

    def __init__(self, tile_size: int = 20, tiles_x: int = 256, tiles_y: int = 256) -> None:
        if tile_size < 1 or tiles_x < 1 or tiles_y < 1:
            raise ValueError("world dimensions must be positive")
        self.tile_size = tile_size
        self.tiles_x = tiles_x
        self.tiles_y = tiles_y
        self.darkness_scale = 1.0
        self.cave = False
        self.tiles: list[int] = []
        self._edits: dict[tuple[int, int], int] = {}
        self.create_world()

    @property
    def width(self) -> int:
        return self.tiles_x * self.tile_size

    @property
    def height(self) -> int:
        return self.tiles_y * self.tile_size

    def create_world(self) -> None:
        """Generate terrain, trees and a cave; deterministic for a given size."""
        tiles_x, tiles_y = self.tiles_x, self.tiles_y
        tiles = [EMPTY] * (tiles_x * tiles_y)
        stride = self.width // self.tile_size + 1
        rng = Random()

        for tile_y in range(tiles_y):
            for tile_x in range(tiles_x):
                rng.set_seed(tile_y * stride + tile_x)
                if tiles[tile_y * tiles_x + tile_x] != EMPTY:
                    continue

                choice = _RANDOM_BLOCKS[rng.uint(0, len(_RANDOM_BLOCKS) - 1)]
                if choice == Block.TREE:
                    trunk_height = rng.uint(1, 2)
                    trunk_width = rng.uint(2, 3)
                    leaves_height = rng.uint(2, 4)
                    leaves_width = rng.uint(1, 2)
                    total_height = trunk_height + leaves_height
                    if tile_x + leaves_width < tiles_x and tile_y + total_height < tiles_y:
                        for y in range(trunk_height):
                            for x in range(trunk_width):
                                tiles[(tile_y + y) * tiles_x + tile_x + x] = Block.LEAVES
                        for y in range(leaves_height):
                            for x in range(leaves_width):
                                row = tile_y + trunk_height + y
                                tiles[row * tiles_x + tile_x + x] = Block.TREE
                        continue

                tiles[tile_y * tiles_x + tile_x] = choice

        cave_x = rng.uint(CAVE_MARGIN, tiles_x - CAVE_MARGIN)
        cave_y = rng.uint(CAVE_MARGIN, tiles_y - CAVE_MARGIN)
        for y in range(CAVE_SIZE):
            for x in range(CAVE_SIZE):
                tiles[(cave_y + y) * tiles_x + cave_x + x] = Block.CAVE

        self.tiles = [int(color) for color in tiles]
        self._edits.clear()

    def tile_at(self, tile_x: int, tile_y: int) -> int:
        """Base colour of a tile."""
        if not (0 <= tile_x < self.tiles_x and 0 <= tile_y < self.tiles_y):
            raise IndexError(f"tile ({tile_x}, {tile_y}) outside world")
        return self.tiles[tile_y * self.tiles_x + tile_x]

    def _check_pixel(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside world")

    def pixel(self, x: int, y: int) -> int:
        """Colour of the pixel at (x, y)."""
        self._check_pixel(x, y)
        edited = self._edits.get((x, y))
        if edited is not None:
            return edited
        return self.tiles[(y // self.tile_size) * self.tiles_x + x // self.tile_size]

    def set_pixel(self, x: int, y: int, color: int) -> None:
        self._check_pixel(x, y)
        self._edits[(x, y)] = int(color)

    def _region(self, x: int, y: int) -> Iterator[tuple[int, int]]:
        for py in range(y, y + self.tile_size):
            for px in range(x, x + self.tile_size):
                yield px, py

    def fill_tile(self, x: int, y: int, color: int) -> None:
        """Paint a tile-sized square whose top-left pixel is (x, y)."""
        size = self.tile_size
        self._check_pixel(x, y)
        self._check_pixel(x + size - 1, y + size - 1)
        color = int(color)
        if x % size == 0 and y % size == 0:
            self.tiles[(y // size) * self.tiles_x + x // size] = color
            for point in [p for p in self._edits if x <= p[0] < x + size and y <= p[1] < y + size]:
                del self._edits[point]
            return
        for point in self._region(x, y):
            self._edits[point] = color