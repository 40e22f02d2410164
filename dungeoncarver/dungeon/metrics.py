from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'rooms_attempted': 0,
        'rooms_placed': 0,
        'rooms_rejected_overlap': 0,
        'rooms_rejected_bounds': 0,
        'regions_created': 0,
        'maze_regions': 0,
        'maze_carves': 0,
        'maze_straight_carves': 0,
        'connectors_found': 0,
        'regions_premerged': 0,
        'junctions_carved': 0,
        'regions_unmerged': 0,
        'dead_ends_removed': 0,
        'prune_passes': 0,
        'runtime_ms': 0.0,
    }
