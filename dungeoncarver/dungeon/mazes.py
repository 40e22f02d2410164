"""Maze growth: fills the space left between rooms with corridor trees.

Seeds are taken from the odd lattice (odd x, odd y) so corridors stay one
tile wide with a wall between parallel passages. Each seed grows a perfect
maze with an explicit stack (randomized depth-first carving).
"""

from __future__ import annotations

import random
from typing import Dict, List, Optional

from .grid import CARDINALS, Coord2D, RegionCounter, TileGrid, step
from .tiles import PATH


def can_carve(grid: TileGrid, pos: Coord2D, direction: str) -> bool:
    """True when the next two cells are wall and the third is still in bounds.

    The three-step lookahead leaves at least one wall between the new passage
    and the grid edge or any other carved area.
    """
    if not grid.in_bounds(step(pos, direction, 3)):
        return False
    return grid.is_wall(step(pos, direction, 1)) and grid.is_wall(step(pos, direction, 2))


def grow_maze(
    grid: TileGrid,
    rng: random.Random,
    start: Coord2D,
    winding_percent: int,
    region: int,
    stats: Optional[Dict[str, int]] = None,
) -> int:
    """Carve one maze tree from ``start``; returns the number of cells carved."""
    grid.carve(start, PATH, region)
    carved = 1
    cells: List[Coord2D] = [start]
    last_dir: Optional[str] = None
    while cells:
        cell = cells[-1]
        unmade = [d for d in CARDINALS if can_carve(grid, cell, d)]
        if not unmade:
            # Dead branch; backtrack.
            cells.pop()
            last_dir = None
            continue
        # Higher winding_percent means fewer straight continuations.
        if last_dir in unmade and int(rng.random() * 101) > winding_percent:
            direction = last_dir
        else:
            direction = unmade.pop(int(rng.random() * len(unmade)))
        if stats is not None:
            stats["maze_carves"] += 1
            if direction == last_dir:
                stats["maze_straight_carves"] += 1
        grid.carve(step(cell, direction, 1), PATH, region)
        tip = step(cell, direction, 2)
        grid.carve(tip, PATH, region)
        carved += 2
        cells.append(tip)
        last_dir = direction
    return carved


def grow_mazes(
    grid: TileGrid,
    rng: random.Random,
    winding_percent: int,
    regions: RegionCounter,
    stats: Optional[Dict[str, int]] = None,
) -> int:
    """Grow a maze from every lattice cell that is still wall; returns trees grown."""
    trees = 0
    for y in range(1, grid.height - 1, 2):
        for x in range(1, grid.width - 1, 2):
            if not grid.is_wall((x, y)):
                continue
            grow_maze(grid, rng, (x, y), winding_percent, regions.allocate(), stats)
            trees += 1
    return trees


__all__ = ["can_carve", "grow_maze", "grow_mazes"]
