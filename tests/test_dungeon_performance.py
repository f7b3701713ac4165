import time

import pytest

from roomweaver.dungeon import Dungeon, DungeonConfig

# Simple performance guardrail. Not a strict micro-benchmark; aims to catch large regressions.
# Adjust thresholds if CI hardware differs significantly.


@pytest.mark.performance
def test_default_size_generation_seeds():
    seeds = [10101, 20202, 30303]
    max_seconds_per = 3.0  # generous threshold; tune as needed
    timings = []
    for s in seeds:
        start = time.perf_counter()
        d = Dungeon(DungeonConfig(seed=s))
        elapsed = time.perf_counter() - start
        timings.append(elapsed)
        assert d.rooms
        assert elapsed < max_seconds_per, f"Seed {s} took {elapsed:.3f}s (> {max_seconds_per}s)"
    avg = sum(timings) / len(timings)
    assert avg < max_seconds_per * 0.85, f"Average generation {avg:.3f}s too high"


@pytest.mark.performance
def test_phase_timings_recorded():
    d = Dungeon(DungeonConfig(seed=4040))
    phases = d.metrics["phase_ms"]
    assert set(phases) == {"place_rooms", "triangulate", "spanning_tree", "carve_corridors"}
    assert d.metrics["runtime_ms"] >= max(phases.values())
