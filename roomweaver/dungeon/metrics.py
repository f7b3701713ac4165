from typing import Dict


def init_metrics() -> Dict[str, int | float | bool | dict]:
    return {
        'rooms_requested': 0,
        'rooms_placed': 0,
        'rooms_dropped': 0,
        'placement_exhausted': False,
        'direction_rotations': 0,
        'candidate_edges': 0,
        'degenerate_triangles': 0,
        'stitched_edges': 0,
        'mst_edges': 0,
        'extra_edges': 0,
        'corridors_straight': 0,
        'corridors_l_shaped': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
