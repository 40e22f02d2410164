import random

from dungeoncarver.dungeon import generate_dungeon
from dungeoncarver.dungeon.connectivity import (
    Connector,
    RegionMerger,
    connect_regions,
    find_connectors,
    flood_fill,
    is_fully_traversable,
    merge_touching_regions,
    region_sizes,
)
from dungeoncarver.dungeon.grid import TileGrid
from dungeoncarver.dungeon.tiles import DOOR, FLOOR, PATH, WALL

from tests.dungeon_test_utils import bfs_reachable, open_cells


def _three_islands():
    # . # _ # _   with one wall between each pair
    grid = TileGrid(5, 7)
    grid.carve((1, 2), FLOOR, 0)
    grid.carve((3, 2), PATH, 1)
    grid.carve((5, 2), PATH, 2)
    return grid


def test_region_merger_tracks_representatives():
    m = RegionMerger(4)
    assert m.union(0, 1)
    assert m.find(1) == 0
    assert m.open == {0, 2, 3}
    assert not m.union(1, 0)
    assert m.resolve([1, 0, 2]) == [0, 2]
    assert m.union(2, 0)
    assert m.find(1) == 2
    assert m.open == {2, 3}


def test_find_connectors_lists_regions_in_neighbour_order():
    grid = _three_islands()
    assert find_connectors(grid) == [
        Connector((2, 2), (1, 0)),
        Connector((4, 2), (2, 1)),
    ]


def test_connect_regions_opens_doors_until_single_region():
    grid = _three_islands()
    result = connect_regions(grid, random.Random("doors"), 3)
    assert sorted(result.junctions) == [(2, 2), (4, 2)]
    assert result.unmerged == []
    assert result.connectors_found == 2
    assert result.premerged == 0
    assert grid.tile((2, 2)) == DOOR and grid.tile((4, 2)) == DOOR
    assert is_fully_traversable(grid.tiles)


def test_connect_regions_reports_unreachable_regions():
    grid = TileGrid(7, 7)
    grid.carve((1, 1), FLOOR, 0)
    grid.carve((5, 5), PATH, 1)
    result = connect_regions(grid, random.Random("apart"), 2)
    assert result.junctions == []
    assert result.unmerged == [0, 1]
    assert result.connectors_found == 0


def test_touching_regions_merge_without_door():
    grid = TileGrid(5, 5)
    grid.carve((1, 1), FLOOR, 0)
    grid.carve((2, 1), PATH, 1)
    result = connect_regions(grid, random.Random("touch"), 2)
    assert result.premerged == 1
    assert result.unmerged == []
    assert result.junctions == []
    m = RegionMerger(2)
    assert merge_touching_regions(grid, m) == 1


def test_no_adjacent_junctions():
    for seed in ("j1", "j2", "j3"):
        d = generate_dungeon(seed=seed, width=41, height=41, room_tries=80)
        doors = set(d.doors())
        for x, y in doors:
            assert (x + 1, y) not in doors
            assert (x, y + 1) not in doors


def test_flood_fill_and_traversable():
    W, F = WALL, FLOOR
    single = [[W, W, W], [W, F, W], [W, W, W]]
    assert flood_fill(single, (1, 1)) == {(1, 1)}
    assert flood_fill(single, (0, 0)) == set()
    assert is_fully_traversable(single)
    split = [[F, W, F]]
    assert not is_fully_traversable(split)
    assert is_fully_traversable([[W, W], [W, W]])


def test_fully_connected_dungeons_are_traversable():
    for seed in ("alpha", "beta", "gamma", "delta", "test"):
        d = generate_dungeon(seed=seed, width=41, height=41, room_tries=60)
        assert d.metrics["regions_unmerged"] == len(d.unmerged_regions)
        assert d.fully_connected, f"seed {seed} left regions {d.unmerged_regions}"
        assert d.is_traversable()
        cells = open_cells(d.grid)
        assert cells
        assert len(bfs_reachable(d.grid, cells[0])) == len(cells)


def test_region_sizes_counts_open_cells():
    grid = _three_islands()
    grid.carve((3, 1), PATH, 1)
    assert region_sizes(grid) == {0: 1, 1: 2, 2: 1}
