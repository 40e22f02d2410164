import random
import re

from dungeoncarver.dungeon.grid import RegionCounter, TileGrid
from dungeoncarver.dungeon.rooms import Room, place_rooms
from dungeoncarver.dungeon.tiles import FLOOR, WALL


def _room(x, y, w, h, index=0):
    return Room(x, y, w, h, index, "#336699")


def test_overlap_counts_touching_rooms():
    a = _room(2, 2, 3, 3)
    assert a.overlap(_room(5, 2, 3, 3))  # shares the x=5 boundary
    assert a.overlap(_room(3, 3, 1, 1))
    assert not a.overlap(_room(6, 2, 3, 3))
    assert not a.overlap(_room(2, 6, 3, 3))


def test_center_area_and_distance():
    r = _room(2, 3, 5, 4)
    assert r.center == (4, 5)
    assert r.area == 20
    assert _room(0, 0, 2, 2).distance_to(_room(3, 4, 2, 2)) == 5.0


def test_tiles_column_major_and_contains():
    r = _room(1, 1, 2, 3)
    assert r.tiles() == [(1, 1), (1, 2), (1, 3), (2, 1), (2, 2), (2, 3)]
    assert r.contains_position((1, 1))
    assert r.contains_position((2, 3))
    assert not r.contains_position((3, 1))
    assert not r.contains_position((1, 4))


def test_edges_exclude_corners():
    r = _room(0, 0, 4, 3)
    edges = r.edges()
    assert sorted(edges) == sorted(
        [("N", 1, 0), ("S", 1, 2), ("N", 2, 0), ("S", 2, 2), ("W", 0, 1), ("E", 3, 1)]
    )
    corner_cells = {(x, y) for _, x, y in r.corners()}
    assert corner_cells == {(0, 0), (3, 0), (0, 2), (3, 2)}
    assert not corner_cells & {(x, y) for _, x, y in edges}


def test_to_dict_shape():
    d = _room(2, 3, 5, 4, index=9).to_dict()
    assert d == {"index": 9, "x": 2, "y": 3, "width": 5, "height": 4, "colour": "#336699", "center": [4, 5]}


def test_place_rooms_no_overlap_and_margin():
    grid = TileGrid(41, 41)
    rooms, overlap, out_of_bounds = place_rooms(grid, random.Random("rooms"), 200, 2, 0, RegionCounter())
    assert rooms
    assert len(rooms) + overlap + out_of_bounds == 200
    for i, a in enumerate(rooms):
        assert a.x >= 2 and a.y >= 2
        assert a.x + a.width <= grid.width - 2
        assert a.y + a.height <= grid.height - 2
        for b in rooms[i + 1 :]:
            assert not a.overlap(b)


def test_place_rooms_carves_floor_with_own_region():
    grid = TileGrid(31, 31)
    rooms, _, _ = place_rooms(grid, random.Random("carve"), 30, 0, 0, RegionCounter())
    for region, room in enumerate(rooms):
        for pos in room.tiles():
            assert grid.tile(pos) == FLOOR
            assert grid.region(pos) == region
    floor_cells = sum(room.area for room in rooms)
    assert sum(1 for _ in grid.open_cells()) == floor_cells


def test_place_rooms_indices_start_at_offset():
    grid = TileGrid(41, 41)
    rooms, _, _ = place_rooms(grid, random.Random("idx"), 60, 1, 7, RegionCounter())
    assert [r.index for r in rooms] == list(range(7, 7 + len(rooms)))
    for r in rooms:
        assert re.match(r"^#[0-9a-f]{6}$", r.colour)


def test_place_rooms_zero_tries():
    grid = TileGrid(21, 21)
    regions = RegionCounter()
    rooms, overlap, out_of_bounds = place_rooms(grid, random.Random("none"), 0, 0, 0, regions)
    assert rooms == [] and overlap == 0 and out_of_bounds == 0
    assert regions.count == 0
    assert all(t == WALL for row in grid.tiles for t in row)


def test_place_rooms_rejects_rooms_that_cannot_fit():
    # Most candidates are wider than a 5x5 grid allows
    grid = TileGrid(5, 5)
    rooms, overlap, out_of_bounds = place_rooms(grid, random.Random("tight"), 50, 10, 0, RegionCounter())
    assert out_of_bounds > 0
    assert len(rooms) + overlap + out_of_bounds == 50


def test_place_rooms_draws_are_reproducible():
    first = place_rooms(TileGrid(41, 41), random.Random("same"), 80, 3, 0, RegionCounter())
    second = place_rooms(TileGrid(41, 41), random.Random("same"), 80, 3, 0, RegionCounter())
    assert first == second


def test_rooms_keep_gap_to_border_on_every_side():
    for n in range(50):
        grid = TileGrid(41, 41)
        rooms, _, _ = place_rooms(grid, random.Random(f"gap{n}"), 100, 0, 0, RegionCounter())
        for r in rooms:
            assert 2 <= r.x and r.x + r.width <= grid.width - 2
            assert 2 <= r.y and r.y + r.height <= grid.height - 2
        # columns and rows next to the border stay solid
        for i in range(grid.width):
            for edge in (1, grid.width - 2):
                assert grid.tile((edge, i)) == WALL
                assert grid.tile((i, edge)) == WALL


def test_room_touching_inner_border_column_is_rejected():
    # 7x7: a 2-wide room may start at x=2 or 3 but not 4
    grid = TileGrid(7, 7)
    rooms, _, out_of_bounds = place_rooms(grid, random.Random("edge"), 200, 0, 0, RegionCounter())
    assert out_of_bounds > 0
    for r in rooms:
        assert r.x + r.width <= 5 and r.y + r.height <= 5
