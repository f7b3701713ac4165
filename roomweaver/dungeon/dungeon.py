"""Dungeon layout generator.

High-level generation phases:
    * Place rooms: the first pooled size at the grid midpoint, every other one
      by a directional edge-to-centre scan that keeps a straight line of sight
      and a spacing margin around each placement.
    * Triangulate the room centres (Bowyer-Watson) to get candidate links.
    * Reduce the candidates to a minimum spanning tree (Kruskal), then reinject
      a few random leftover links so the layout has cycles.
    * Carve straight or L-shaped corridors for every selected link, recording
      at most one door per room side.

Public contract consumed elsewhere:
    Dungeon(DungeonConfig(...)) OR Dungeon(seed=..., size=(W, H))
    Attributes: config, seed, rooms, corridors, edges, room_links, grid, metrics
    dungeon.generate() clears and rebuilds every output from the current config.
"""

from __future__ import annotations

import random
import time
from typing import Any, Dict, List, Tuple

from ..logging_utils import get_logger
from .config import RANDOM_SEED, DungeonConfig
from .corridors import Corridor, carve_corridors, room_index_pairs, select_extra_edges
from .geometry import Edge
from .grid import OccupancyGrid
from .metrics import init_metrics
from .rooms import Room, place_rooms
from .spanning_tree import minimum_spanning_tree, stitch_components
from .triangulation import triangulate

log = get_logger("roomweaver.dungeon")


class InvalidConfigError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = list(errors)


class Dungeon:
    def __init__(
        self,
        config: DungeonConfig | None = None,
        *,
        seed: int | None = None,
        size: Tuple[int, ...] | None = None,
    ):
        # Accept either a config object or the (seed, size) keyword style
        if config is None:
            config = DungeonConfig()
            if seed is not None:
                config.seed = seed
        elif seed is not None:
            config.seed = seed
        if size is not None and len(size) >= 2:
            config.width, config.height = size[0], size[1]
        self.config = config
        self.seed: int | None = None
        self.rooms: List[Room] = []
        self.corridors: List[Corridor] = []
        self.edges: List[Edge] = []
        self.room_links: List[Tuple[int, int]] = []
        self.grid = OccupancyGrid(config.width, config.height)
        self.metrics: Dict[str, Any] = {}
        self.generate()

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def resolve_seed(self) -> int:
        if self.config.seed is None or self.config.seed == RANDOM_SEED:
            return random.randint(0, 2**31 - 1)
        return self.config.seed

    def generate(self) -> "Dungeon":
        """Discard previous output and run every phase from scratch."""
        errors = self.config.validate()
        if errors:
            log.warn(event="invalid_config", errors=len(errors), first=errors[0])
            raise InvalidConfigError(errors)

        cfg = self.config
        self.seed = self.resolve_seed()
        # Private RNG: nothing else may draw from it during the run
        rng = random.Random(self.seed)
        self.grid = OccupancyGrid(cfg.width, cfg.height)
        self.rooms = []
        self.corridors = []
        self.edges = []
        self.room_links = []
        metrics = init_metrics() if cfg.enable_metrics else None

        start = time.perf_counter()
        phase_times: Dict[str, int] = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = int((time.perf_counter() - ps) * 1000)
            return r

        self.rooms = _phase("place_rooms", place_rooms, self.grid, cfg, rng, metrics)
        centers = [room.center for room in self.rooms]
        candidates = _phase("triangulate", triangulate, centers, metrics)
        stitched = stitch_components(centers, candidates)
        candidates = candidates + stitched
        tree = _phase("spanning_tree", minimum_spanning_tree, candidates)
        extras = select_extra_edges(candidates, tree, cfg.additional_edges, rng)
        self.edges = tree + extras
        self.room_links = room_index_pairs(self.edges, self.rooms)
        self.corridors = _phase(
            "carve_corridors",
            carve_corridors,
            self.grid,
            self.rooms,
            self.room_links,
            cfg.min_door_dist_to_corner,
            rng,
            metrics,
        )

        if metrics is not None:
            metrics["candidate_edges"] = len(candidates)
            metrics["stitched_edges"] = len(stitched)
            metrics["mst_edges"] = len(tree)
            metrics["extra_edges"] = len(extras)
            metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
            metrics["phase_ms"] = phase_times
            self.metrics = metrics
        else:
            self.metrics = {}

        log.debug(
            event="dungeon_generated",
            seed=self.seed,
            rooms=len(self.rooms),
            corridors=len(self.corridors),
            edges=len(self.edges),
        )
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "width": self.config.width,
            "height": self.config.height,
            "rooms": [r.to_dict() for r in self.rooms],
            "corridors": [c.to_dict() for c in self.corridors],
            "edges": [e.to_dict() for e in self.edges],
            "room_links": [list(pair) for pair in self.room_links],
            "metrics": self.metrics,
        }


__all__ = ["Dungeon", "InvalidConfigError"]
