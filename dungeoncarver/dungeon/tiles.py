from dataclasses import dataclass
from enum import Enum


class Tile(str, Enum):
    """Closed set of tile states the generator reasons about."""

    WALL = "W"
    FLOOR = "F"
    PATH = "P"
    DOOR = "D"


# Tile constants centralized for modular imports
WALL = Tile.WALL
FLOOR = Tile.FLOOR
PATH = Tile.PATH
DOOR = Tile.DOOR

WALKABLE = frozenset({FLOOR, PATH, DOOR})


@dataclass(frozen=True)
class TileSymbols:
    """Caller supplied display values, passed through untouched."""

    wall: str = "#"
    floor: str = "."
    path: str = " "
    door: str = "+"

    def symbol_for(self, tile: Tile) -> str:
        if tile == FLOOR:
            return self.floor
        if tile == PATH:
            return self.path
        if tile == DOOR:
            return self.door
        return self.wall

    def to_dict(self):
        return {"wall": self.wall, "floor": self.floor, "path": self.path, "door": self.door}


def tile_to_type(tile: Tile) -> str:
    return tile.name.lower()


__all__ = ["Tile", "TileSymbols", "WALL", "FLOOR", "PATH", "DOOR", "WALKABLE", "tile_to_type"]
