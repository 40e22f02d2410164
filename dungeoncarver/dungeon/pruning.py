"""Dead-end pruning for the carved corridor network."""

from __future__ import annotations

from typing import List, Tuple

from .grid import Coord2D, TileGrid, neighbours4
from .tiles import WALL


def remove_dead_ends(grid: TileGrid) -> Tuple[int, int]:
    """Fill every non-wall cell with at most one exit, repeating to a fixpoint.

    Filling one dead end can expose the cell behind it. Each pass only
    revisits the neighbours of cells filled by the previous pass; the result
    is the same as rescanning the whole grid until nothing changes.
    Returns (cells_removed, passes).
    """
    removed = 0
    passes = 0
    pending: List[Coord2D] = find_dead_ends(grid)
    while pending:
        passes += 1
        exposed: List[Coord2D] = []
        for pos in pending:
            if grid.tile(pos) == WALL or grid.count_exits(pos) > 1:
                continue
            grid.carve(pos, WALL)
            removed += 1
            for nb in neighbours4(*pos):
                if grid.in_bounds(nb) and grid.tile(nb) != WALL:
                    exposed.append(nb)
        pending = exposed
    return removed, passes


def find_dead_ends(grid: TileGrid) -> List[Coord2D]:
    return [(x, y) for x, y in grid.open_cells() if grid.count_exits((x, y)) <= 1]


__all__ = ["find_dead_ends", "remove_dead_ends"]
