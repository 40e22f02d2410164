"""Region merging and connectivity checks.

Rooms and maze trees are carved as separate regions. ``connect_regions``
opens doors in wall cells that touch two or more regions until everything is
one region (or no connector is left), tracking merges with a union-find.
Regions that already touch are unioned up front (``merge_touching_regions``)
so they never consume a connector draw.
"""

from __future__ import annotations

import random
from collections import deque
from typing import Dict, Iterable, List, NamedTuple, Sequence, Set, Tuple

from .grid import NO_REGION, Coord2D, TileGrid, neighbours4
from .tiles import DOOR, WALL, Tile


class Connector(NamedTuple):
    pos: Coord2D
    regions: Tuple[int, ...]


class ConnectResult(NamedTuple):
    junctions: List[Coord2D]
    unmerged: List[int]
    connectors_found: int
    premerged: int


class RegionMerger:
    """Union-find over region ids; ``find`` always returns the live representative."""

    def __init__(self, region_count: int):
        self.parent = list(range(region_count))
        self.open: Set[int] = set(range(region_count))

    def find(self, region: int) -> int:
        parent = self.parent
        while parent[region] != region:
            parent[region] = parent[parent[region]]
            region = parent[region]
        return region

    def union(self, dest: int, source: int) -> bool:
        rd, rs = self.find(dest), self.find(source)
        if rd == rs:
            return False
        self.parent[rs] = rd
        self.open.discard(rs)
        return True

    def resolve(self, regions: Iterable[int]) -> List[int]:
        """Current representatives, de-duplicated, first-seen order kept."""
        out: List[int] = []
        for r in regions:
            rep = self.find(r)
            if rep not in out:
                out.append(rep)
        return out


def find_connectors(grid: TileGrid) -> List[Connector]:
    """Interior wall cells bordering two or more distinct regions (row-major)."""
    connectors: List[Connector] = []
    for y in range(1, grid.height - 1):
        for x in range(1, grid.width - 1):
            if grid.tiles[y][x] != WALL:
                continue
            seen: List[int] = []
            for nx, ny in neighbours4(x, y):
                region = grid.regions[ny][nx]
                if region != NO_REGION and region not in seen:
                    seen.append(region)
            if len(seen) >= 2:
                connectors.append(Connector((x, y), tuple(seen)))
    return connectors


def merge_touching_regions(grid: TileGrid, merger: RegionMerger) -> int:
    """Union regions whose cells are already orthogonally adjacent.

    A corridor can be carved flush against a room; those two regions are
    connected without any junction. This runs before the first connector is
    drawn, which departs from a connector-only merge. Connectors between
    touching regions drop out of the candidate list, so the later random picks
    differ from a merge that would spend a door on them. Returns the number
    of unions made.
    """
    merged = 0
    for y in range(grid.height):
        for x in range(grid.width):
            here = grid.regions[y][x]
            if here == NO_REGION:
                continue
            for nx, ny in ((x + 1, y), (x, y + 1)):
                if nx < grid.width and ny < grid.height:
                    there = grid.regions[ny][nx]
                    if there != NO_REGION and merger.union(here, there):
                        merged += 1
    return merged


def connect_regions(grid: TileGrid, rng: random.Random, region_count: int) -> ConnectResult:
    connectors = find_connectors(grid)
    merger = RegionMerger(region_count)
    premerged = merge_touching_regions(grid, merger)
    candidates = [c for c in connectors if len(merger.resolve(c.regions)) > 1]
    junctions: List[Coord2D] = []

    while len(merger.open) > 1 and candidates:
        connector = candidates[int(rng.random() * len(candidates))]
        regions = merger.resolve(connector.regions)
        dest, sources = regions[0], regions[1:]
        grid.carve(connector.pos, DOOR, dest)
        junctions.append(connector.pos)
        for source in sources:
            merger.union(dest, source)

        cx, cy = connector.pos

        def still_needed(c: Connector) -> bool:
            # No junctions right next to each other.
            if abs(cx - c.pos[0]) + abs(cy - c.pos[1]) < 2:
                return False
            return len(merger.resolve(c.regions)) > 1

        candidates = [c for c in candidates if still_needed(c)]

    unmerged = sorted(merger.open) if len(merger.open) > 1 else []
    return ConnectResult(junctions, unmerged, len(connectors), premerged)


def _open_cells(tiles: Sequence[Sequence[Tile]]) -> List[Coord2D]:
    return [(x, y) for y, row in enumerate(tiles) for x, t in enumerate(row) if t != WALL]


def flood_fill(tiles: Sequence[Sequence[Tile]], start: Coord2D) -> Set[Coord2D]:
    """Non-wall cells reachable from ``start`` over 4-neighbour steps.

    ``tiles`` is any row-major tile matrix (``TileGrid.tiles`` or ``Dungeon.grid``).
    """
    height = len(tiles)
    width = len(tiles[0]) if height else 0
    sx, sy = start
    if not (0 <= sx < width and 0 <= sy < height) or tiles[sy][sx] == WALL:
        return set()
    q = deque([start])
    visited = {start}
    while q:
        x, y = q.popleft()
        for nx, ny in neighbours4(x, y):
            if (nx, ny) in visited or not (0 <= nx < width and 0 <= ny < height):
                continue
            if tiles[ny][nx] != WALL:
                visited.add((nx, ny))
                q.append((nx, ny))
    return visited


def is_fully_traversable(tiles: Sequence[Sequence[Tile]]) -> bool:
    cells = _open_cells(tiles)
    if not cells:
        return True
    reached = flood_fill(tiles, cells[0])
    return len(reached) == len(cells)


def region_sizes(grid: TileGrid) -> Dict[int, int]:
    sizes: Dict[int, int] = {}
    for x, y in grid.open_cells():
        region = grid.regions[y][x]
        sizes[region] = sizes.get(region, 0) + 1
    return sizes


__all__ = [
    "ConnectResult",
    "Connector",
    "RegionMerger",
    "connect_regions",
    "find_connectors",
    "flood_fill",
    "is_fully_traversable",
    "merge_touching_regions",
    "region_sizes",
]
