from typing import Iterator, List, NamedTuple, Tuple

from .tiles import WALL, Tile

NO_REGION = -1

Coord2D = Tuple[int, int]

# Compass steps as (dx, dy); N is towards row 0.
DIRECTIONS = {
    "N": (0, -1),
    "S": (0, 1),
    "E": (1, 0),
    "W": (-1, 0),
}
CARDINALS = ("N", "S", "E", "W")


class Bounds(NamedTuple):
    height: int
    width: int


def step(pos: Coord2D, direction: str, distance: int = 1) -> Coord2D:
    dx, dy = DIRECTIONS[direction]
    return (pos[0] + dx * distance, pos[1] + dy * distance)


def neighbours4(x: int, y: int) -> List[Coord2D]:
    return [(x, y - 1), (x, y + 1), (x + 1, y), (x - 1, y)]


class RegionCounter:
    """Monotonic region id source shared by room placement and maze growth."""

    __slots__ = ("count",)

    def __init__(self):
        self.count = 0

    def allocate(self) -> int:
        region = self.count
        self.count += 1
        return region


class TileGrid:
    """Row-major tile states (``tiles[y][x]``) plus a parallel region map."""

    __slots__ = ("bounds", "tiles", "regions")

    def __init__(self, height: int, width: int):
        self.bounds = Bounds(height, width)
        self.tiles: List[List[Tile]] = [[WALL for _ in range(width)] for _ in range(height)]
        self.regions: List[List[int]] = [[NO_REGION for _ in range(width)] for _ in range(height)]

    @property
    def width(self) -> int:
        return self.bounds.width

    @property
    def height(self) -> int:
        return self.bounds.height

    def in_bounds(self, pos: Coord2D) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, pos: Coord2D) -> Tile:
        x, y = pos
        return self.tiles[y][x]

    def region(self, pos: Coord2D) -> int:
        x, y = pos
        return self.regions[y][x]

    def is_wall(self, pos: Coord2D) -> bool:
        return self.in_bounds(pos) and self.tiles[pos[1]][pos[0]] == WALL

    def carve(self, pos: Coord2D, tile: Tile, region: int = NO_REGION) -> None:
        x, y = pos
        self.tiles[y][x] = tile
        self.regions[y][x] = NO_REGION if tile == WALL else region

    def count_exits(self, pos: Coord2D) -> int:
        """Number of in-bounds non-wall 4-neighbours."""
        count = 0
        for nx, ny in neighbours4(*pos):
            if 0 <= nx < self.width and 0 <= ny < self.height and self.tiles[ny][nx] != WALL:
                count += 1
        return count

    def cells(self) -> Iterator[Coord2D]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def open_cells(self) -> Iterator[Coord2D]:
        for x, y in self.cells():
            if self.tiles[y][x] != WALL:
                yield x, y

    def snapshot(self) -> Tuple[Tuple[Tile, ...], ...]:
        return tuple(tuple(row) for row in self.tiles)


__all__ = [
    "Bounds",
    "CARDINALS",
    "Coord2D",
    "DIRECTIONS",
    "NO_REGION",
    "RegionCounter",
    "TileGrid",
    "neighbours4",
    "step",
]
