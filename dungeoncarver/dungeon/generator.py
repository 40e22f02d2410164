"""Pipeline orchestration for dungeon generation.

One ``Generator`` owns the grid, the room list and the seeded random source
for a single run. ``run()`` executes the phases in a fixed order (rooms,
mazes, region merging, dead-end pruning); that order is what makes a seed
reproducible. Phases are public so tests can inspect intermediate states.
"""
from __future__ import annotations

import os
import random
import time
from types import MappingProxyType
from typing import Dict, List

from ..logging_utils import get_logger
from .config import GeneratorOptions
from .connectivity import connect_regions
from .dungeon import Dungeon
from .grid import RegionCounter, TileGrid
from .mazes import grow_mazes
from .metrics import init_metrics
from .pruning import remove_dead_ends
from .rooms import Room, place_rooms

log = get_logger("dungeon")


def timing_enabled() -> bool:
    return os.getenv("DUNGEON_ENABLE_GENERATION_METRICS", "1").lower() not in {"0", "false", "no", ""}


class Generator:
    def __init__(self, options: GeneratorOptions):
        self.options = options.validate()
        # Local RNG so outside random usage never perturbs generation
        self.rng = random.Random(options.seed)
        self.grid = TileGrid(options.height, options.width)
        self.regions = RegionCounter()
        self.rooms: List[Room] = []
        self.unmerged_regions: List[int] = []
        self.metrics: Dict = init_metrics()
        self.enable_timing = timing_enabled()

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------
    def place_rooms(self) -> List[Room]:
        opts = self.options
        rooms, overlap, out_of_bounds = place_rooms(
            self.grid, self.rng, opts.room_tries, opts.extra_room_size, opts.start_index, self.regions
        )
        self.rooms = rooms
        self.metrics["rooms_attempted"] = opts.room_tries
        self.metrics["rooms_placed"] = len(rooms)
        self.metrics["rooms_rejected_overlap"] = overlap
        self.metrics["rooms_rejected_bounds"] = out_of_bounds
        log.debug(event="rooms_placed", seed=opts.seed, placed=len(rooms), tries=opts.room_tries)
        return rooms

    def grow_mazes(self) -> int:
        trees = grow_mazes(self.grid, self.rng, self.options.winding_percent, self.regions, self.metrics)
        self.metrics["maze_regions"] = trees
        log.debug(event="mazes_grown", seed=self.options.seed, trees=trees, carves=self.metrics["maze_carves"])
        return trees

    def connect_regions(self) -> List[int]:
        self.metrics["regions_created"] = self.regions.count
        result = connect_regions(self.grid, self.rng, self.regions.count)
        self.unmerged_regions = result.unmerged
        self.metrics["connectors_found"] = result.connectors_found
        self.metrics["regions_premerged"] = result.premerged
        self.metrics["junctions_carved"] = len(result.junctions)
        self.metrics["regions_unmerged"] = len(result.unmerged)
        if result.unmerged:
            log.warn(
                event="regions_unmerged",
                seed=self.options.seed,
                regions=len(result.unmerged),
                connectors=result.connectors_found,
            )
        return result.unmerged

    def remove_dead_ends(self) -> int:
        removed, passes = remove_dead_ends(self.grid)
        self.metrics["dead_ends_removed"] += removed
        self.metrics["prune_passes"] += passes
        return removed

    # ------------------------------------------------------------------
    def run(self) -> Dungeon:
        """Execute ordered generation phases with per-phase timing."""
        start = time.perf_counter()
        phase_times: Dict[str, int] = {}

        def _phase(label, fn):
            ps = time.perf_counter()
            r = fn()
            phase_times[label] = int((time.perf_counter() - ps) * 1000)
            return r

        _phase("place_rooms", self.place_rooms)
        _phase("grow_mazes", self.grow_mazes)
        _phase("connect_regions", self.connect_regions)
        _phase("remove_dead_ends", self.remove_dead_ends)

        if self.enable_timing:
            self.metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
            self.metrics["phase_ms"] = phase_times
        log.info(
            event="dungeon_generated",
            seed=self.options.seed,
            width=self.options.width,
            height=self.options.height,
            rooms=len(self.rooms),
            junctions=self.metrics["junctions_carved"],
            connected=not self.unmerged_regions,
        )
        return self.freeze()

    def freeze(self) -> Dungeon:
        return Dungeon(
            options=self.options,
            bounds=self.grid.bounds,
            grid=self.grid.snapshot(),
            regions=tuple(tuple(row) for row in self.grid.regions),
            rooms=tuple(self.rooms),
            unmerged_regions=tuple(self.unmerged_regions),
            metrics=MappingProxyType(
                {k: MappingProxyType(dict(v)) if isinstance(v, dict) else v for k, v in self.metrics.items()}
            ),
        )


__all__ = ["Generator", "timing_enabled"]
