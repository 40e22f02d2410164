"""Dungeon result (rooms-and-mazes layout)

Generation phases (see ``generator.Generator``):
    * Scatter non-overlapping rectangular rooms (rejection sampling).
    * Fill the remaining odd lattice with perfect mazes, one region per tree.
    * Open DOOR junctions in wall cells touching two or more regions until a
      single region remains.
    * Fill dead ends until every open cell has at least two exits.

Public contract consumed by the API and CLI:
    generate_dungeon(GeneratorOptions(...)) or generate_dungeon(seed="abc", width=31)
    Attributes: grid[y][x] (Tile), regions[y][x], rooms, bounds, options, metrics,
    unmerged_regions
    Tiles: Tile.WALL, Tile.FLOOR (room), Tile.PATH (corridor), Tile.DOOR (junction)

The structure is frozen once returned; renderers only read it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .colour import contrast_colour
from .config import GeneratorOptions
from .connectivity import is_fully_traversable
from .grid import Bounds, Coord2D
from .rooms import Room
from .tiles import DOOR, WALKABLE, Tile, TileSymbols, tile_to_type


@dataclass(frozen=True)
class Dungeon:
    options: GeneratorOptions
    bounds: Bounds
    grid: Tuple[Tuple[Tile, ...], ...]
    regions: Tuple[Tuple[int, ...], ...]
    rooms: Tuple[Room, ...]
    unmerged_regions: Tuple[int, ...] = ()
    # Read-only view; cached results are shared between API requests
    metrics: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), compare=False)

    @property
    def seed(self) -> str:
        return self.options.seed

    @property
    def width(self) -> int:
        return self.bounds.width

    @property
    def height(self) -> int:
        return self.bounds.height

    @property
    def fully_connected(self) -> bool:
        """False when region merging ran out of connectors."""
        return not self.unmerged_regions

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> Tile:
        return self.grid[y][x]

    def is_walkable(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.grid[y][x] in WALKABLE

    def is_traversable(self) -> bool:
        """Flood fill check: every open cell reachable from every other."""
        return is_fully_traversable(self.grid)

    def rooms_at(self, x: int, y: int) -> List[Room]:
        return [r for r in self.rooms if r.contains_position((x, y))]

    def room_at(self, x: int, y: int) -> Optional[Room]:
        for r in self.rooms:
            if r.contains_position((x, y)):
                return r
        return None

    def doors(self) -> List[Coord2D]:
        return [(x, y) for y, row in enumerate(self.grid) for x, t in enumerate(row) if t == DOOR]

    def count(self, tile: Tile) -> int:
        return sum(1 for row in self.grid for t in row if t == tile)

    def symbol_rows(self, symbols: Optional[TileSymbols] = None) -> List[str]:
        symbols = symbols or self.options.tiles
        return ["".join(symbols.symbol_for(t) for t in row) for row in self.grid]

    def to_dict(self) -> Dict[str, Any]:
        symbols = self.options.tiles
        return {
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
            "options": {
                "room_tries": self.options.room_tries,
                "extra_room_size": self.options.extra_room_size,
                "winding_percent": self.options.winding_percent,
                "start_index": self.options.start_index,
            },
            "tiles": symbols.to_dict(),
            "grid": [[symbols.symbol_for(t) for t in row] for row in self.grid],
            "types": [[tile_to_type(t) for t in row] for row in self.grid],
            "rooms": [dict(r.to_dict(), text_colour=contrast_colour(r.colour)) for r in self.rooms],
            "doors": [list(d) for d in self.doors()],
            "fully_connected": self.fully_connected,
            "unmerged_regions": list(self.unmerged_regions),
            "metrics": {k: dict(v) if isinstance(v, Mapping) else v for k, v in self.metrics.items()},
        }


def generate_dungeon(options: Optional[GeneratorOptions] = None, **overrides) -> Dungeon:
    """Run every generation phase and return the frozen result."""
    from .generator import Generator

    if options is None:
        options = GeneratorOptions(**overrides)
    elif overrides:
        raise TypeError("pass either a GeneratorOptions or keyword options, not both")
    return Generator(options).run()


__all__ = ["Dungeon", "generate_dungeon"]
