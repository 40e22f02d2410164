"""Public dungeon package interface."""

from .colour import contrast_colour, random_hex_colour
from .config import ConfigError, GeneratorOptions, defaults_from_env, options_from_mapping
from .dungeon import Dungeon, generate_dungeon
from .generator import Generator
from .grid import NO_REGION, Bounds, TileGrid
from .rooms import Room
from .tiles import DOOR, FLOOR, PATH, WALL, Tile, TileSymbols  # noqa: F401

__all__ = [
    "Bounds",
    "ConfigError",
    "Dungeon",
    "Generator",
    "GeneratorOptions",
    "NO_REGION",
    "Room",
    "Tile",
    "TileGrid",
    "TileSymbols",
    "WALL",
    "FLOOR",
    "PATH",
    "DOOR",
    "contrast_colour",
    "defaults_from_env",
    "generate_dungeon",
    "options_from_mapping",
    "random_hex_colour",
]
