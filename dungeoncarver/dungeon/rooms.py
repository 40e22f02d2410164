import math
import random
from dataclasses import dataclass
from typing import List, Tuple

from .colour import random_hex_colour
from .grid import Coord2D, RegionCounter, TileGrid
from .tiles import FLOOR

MIN_ROOM_SIZE = 2


@dataclass(frozen=True)
class Room:
    x: int
    y: int
    width: int
    height: int
    index: int
    colour: str

    def overlap(self, other: "Room") -> bool:
        # Inclusive on every side: touching rooms count as overlapping so a
        # wall always separates accepted rooms.
        return (
            self.x <= other.x + other.width
            and self.x + self.width >= other.x
            and self.y <= other.y + other.height
            and self.y + self.height >= other.y
        )

    @property
    def center(self) -> Coord2D:
        return (self.x + self.width // 2, self.y + self.height // 2)

    @property
    def area(self) -> int:
        return self.width * self.height

    def distance_to(self, other: "Room") -> float:
        (x1, y1), (x2, y2) = self.center, other.center
        return math.hypot(x1 - x2, y1 - y2)

    def tiles(self) -> List[Coord2D]:
        return [(ix, iy) for ix in range(self.x, self.x + self.width) for iy in range(self.y, self.y + self.height)]

    def contains_position(self, pos: Coord2D) -> bool:
        px, py = pos
        return self.x <= px < self.x + self.width and self.y <= py < self.y + self.height

    def edges(self) -> List[Tuple[str, int, int]]:
        """Perimeter cells excluding corners, tagged with the side they face."""
        out = []
        right = self.x + self.width - 1
        bottom = self.y + self.height - 1
        for ix in range(self.x + 1, right):
            out.append(("N", ix, self.y))
            out.append(("S", ix, bottom))
        for iy in range(self.y + 1, bottom):
            out.append(("W", self.x, iy))
            out.append(("E", right, iy))
        return out

    def corners(self) -> List[Tuple[str, int, int]]:
        right = self.x + self.width - 1
        bottom = self.y + self.height - 1
        return [
            ("NW", self.x, self.y),
            ("NE", right, self.y),
            ("SW", self.x, bottom),
            ("SE", right, bottom),
        ]

    def to_dict(self):
        return {
            "index": self.index,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "colour": self.colour,
            "center": list(self.center),
        }


def place_rooms(
    grid: TileGrid,
    rng: random.Random,
    tries: int,
    extra_size: int,
    start_index: int,
    regions: RegionCounter,
):
    """Scatter non-overlapping rooms onto the grid by rejection sampling.

    Every try consumes the same draws (size, rectangularity, orientation, x,
    y, colour) whether or not the candidate is kept, so the random stream stays
    aligned across runs. Returns (rooms, rejected_overlap, rejected_bounds).
    """
    width, height = grid.width, grid.height
    rooms: List[Room] = []
    rejected_overlap = 0
    rejected_bounds = 0
    index = start_index
    for _ in range(tries):
        size = max(MIN_ROOM_SIZE, int(rng.random() * (1 + 2 * extra_size) + 1))
        rectangularity = int(rng.random() * (1 + size / 2))
        room_w = room_h = size
        if rng.random() < 0.5:
            room_w += rectangularity
        else:
            room_h += rectangularity
        span_x = width - room_w - 2
        span_y = height - room_h - 2
        x = int(rng.random() * span_x + 2)
        y = int(rng.random() * span_y + 2)
        candidate = Room(x, y, room_w, room_h, index, random_hex_colour(rng))
        # Keep one wall column/row between the room and the border wall on
        # every side: the room must end by W - 2 / H - 2.
        if span_x <= 0 or span_y <= 0 or x + room_w > width - 2 or y + room_h > height - 2:
            rejected_bounds += 1
            continue
        if _room_overlaps(candidate, rooms):
            rejected_overlap += 1
            continue
        rooms.append(candidate)
        region = regions.allocate()
        for pos in candidate.tiles():
            if grid.in_bounds(pos):
                grid.carve(pos, FLOOR, region)
        index += 1
    return rooms, rejected_overlap, rejected_bounds


def _room_overlaps(room: Room, existing: List[Room]) -> bool:
    return any(room.overlap(other) for other in existing)


__all__ = ["MIN_ROOM_SIZE", "Room", "place_rooms"]
