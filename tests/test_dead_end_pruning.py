from dungeoncarver.dungeon import WALL, generate_dungeon
from dungeoncarver.dungeon.grid import TileGrid
from dungeoncarver.dungeon.pruning import find_dead_ends, remove_dead_ends
from dungeoncarver.dungeon.tiles import PATH

from tests.dungeon_test_utils import exits, make_generator, open_cells


def test_corridor_fills_completely():
    grid = TileGrid(3, 5)
    for x in (1, 2, 3):
        grid.carve((x, 1), PATH, 0)
    removed, passes = remove_dead_ends(grid)
    assert removed == 3
    assert passes == 2
    assert list(grid.open_cells()) == []


def test_loop_survives_and_spur_is_removed():
    grid = TileGrid(6, 5)
    ring = [(1, 1), (2, 1), (3, 1), (1, 2), (3, 2), (1, 3), (2, 3), (3, 3)]
    for pos in ring:
        grid.carve(pos, PATH, 0)
    grid.carve((2, 4), PATH, 0)
    assert find_dead_ends(grid) == [(2, 4)]
    removed, _ = remove_dead_ends(grid)
    assert removed == 1
    assert sorted(grid.open_cells()) == sorted(ring)


def test_generated_dungeon_has_no_dead_ends():
    for seed in ("test", "crypt", "keep"):
        d = generate_dungeon(seed=seed, width=41, height=41, room_tries=60, winding_percent=40)
        for x, y in open_cells(d.grid):
            assert exits(d.grid, x, y) >= 2, f"dead end at {(x, y)} for seed {seed}"


def test_pruning_is_idempotent():
    g = make_generator(seed="again", width=31, height=31, room_tries=40)
    g.run()
    before = g.grid.snapshot()
    assert g.remove_dead_ends() == 0
    assert g.grid.snapshot() == before
    assert find_dead_ends(g.grid) == []


def test_pure_maze_prunes_to_walls():
    d = generate_dungeon(seed="maze", width=21, height=21, room_tries=0)
    assert d.rooms == ()
    assert d.count(WALL) == 21 * 21
    assert d.fully_connected
    assert d.metrics["dead_ends_removed"] > 0
