"""Corridor synthesis for the selected room links.

Three geometric cases, tried in order for every link:
    * A: the rooms' X intervals overlap -> one vertical 1-wide corridor.
    * B: the rooms' Y intervals overlap -> one horizontal 1-wide corridor.
    * C: otherwise, or when the overlap is too narrow once both ends are inset
      by the corner margin -> an L of two segments between recorded doors.

Only case C records doors; a side that already has a door reuses it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .geometry import Edge, Point, Side, normalize_rect
from .grid import OccupancyGrid
from .rooms import Room

STRAIGHT = "straight"
L_SHAPED = "l_shaped"


@dataclass
class Corridor:
    start: Point
    end: Point
    kind: str = STRAIGHT

    def rect(self) -> Tuple[Point, Point]:
        """Normalised ``(pos, size)`` of the carved rectangle."""
        return normalize_rect(self.start, Point(self.end.x - self.start.x, self.end.y - self.start.y))

    def cells(self):
        pos, size = self.rect()
        for ix in range(pos.x, pos.x + size.x):
            for iy in range(pos.y, pos.y + size.y):
                yield ix, iy

    def to_dict(self):
        return {"start": list(self.start), "end": list(self.end), "kind": self.kind}


def select_extra_edges(candidates: Sequence[Edge], tree: Sequence[Edge], count: int, rng) -> List[Edge]:
    """Pick up to ``count`` random non-tree candidate edges (each removed from the pool once chosen)."""
    tree_set = set(tree)
    pool = [e for e in candidates if e not in tree_set]
    extras: List[Edge] = []
    for _ in range(count):
        if not pool:
            break
        edge = pool[rng.randint(0, len(pool) - 1)]
        pool = [e for e in pool if e != edge]
        extras.append(edge)
    return extras


def room_index_pairs(edges: Sequence[Edge], rooms: Sequence[Room]) -> List[Tuple[int, int]]:
    index = {}
    for i, room in enumerate(rooms):
        index.setdefault(room.center, i)
    return [(index[e.p1], index[e.p2]) for e in edges]


def _inset(lo: int, hi: int, margin: int) -> Optional[Tuple[int, int]]:
    lo, hi = lo + margin, hi - margin
    if lo <= hi:
        return lo, hi
    return None


def _door_coordinate(start: int, length: int, margin: int, rng) -> int:
    bounds = _inset(start, start + length - 1, margin)
    if bounds is None:
        # Margin wider than the side: fall back to its central cell.
        return start + (length - 1) // 2
    return rng.randint(*bounds)


def _ensure_door(room: Room, side: Side, margin: int, rng) -> int:
    value = room.door(side)
    if value is None:
        if side in (Side.LEFT, Side.RIGHT):
            value = _door_coordinate(room.pos.y, room.size.y, margin, rng)
        else:
            value = _door_coordinate(room.pos.x, room.size.x, margin, rng)
        room.set_door(side, value)
    return value


def _straight_vertical(grid, r1: Room, r2: Room, margin: int, rng) -> Optional[Corridor]:
    lo = max(r1.pos.x, r2.pos.x)
    hi = min(r1.pos.x + r1.size.x, r2.pos.x + r2.size.x) - 1
    bounds = _inset(lo, hi, margin)
    if bounds is None:
        return None
    x = rng.randint(*bounds)
    grid.place(Point(x, r1.pos.y), Point(1, r2.pos.y - r1.pos.y))
    below = r1.pos.y < r2.pos.y
    start = Point(x, r1.pos.y + (r1.size.y if below else 0))
    end = Point(x + 1, r2.pos.y + (0 if below else r2.size.y))
    return Corridor(start, end, STRAIGHT)


def _straight_horizontal(grid, r1: Room, r2: Room, margin: int, rng) -> Optional[Corridor]:
    lo = max(r1.pos.y, r2.pos.y)
    hi = min(r1.pos.y + r1.size.y, r2.pos.y + r2.size.y) - 1
    bounds = _inset(lo, hi, margin)
    if bounds is None:
        return None
    y = rng.randint(*bounds)
    grid.place(Point(r1.pos.x, y), Point(r2.pos.x - r1.pos.x, 1))
    right = r1.pos.x < r2.pos.x
    start = Point(r1.pos.x + (r1.size.x if right else 0), y)
    end = Point(r2.pos.x + (0 if right else r2.size.x), y + 1)
    return Corridor(start, end, STRAIGHT)


def _l_shaped(grid, r1: Room, r2: Room, margin: int, rng) -> List[Corridor]:
    if r1.pos.x > r2.pos.x:
        start_x, side1 = r1.pos.x, Side.LEFT
    else:
        start_x, side1 = r1.pos.x + r1.size.x, Side.RIGHT
    start = Point(start_x, _ensure_door(r1, side1, margin, rng))

    if r2.pos.y > r1.pos.y:
        end_y, side2 = r2.pos.y, Side.UP
    else:
        end_y, side2 = r2.pos.y + r2.size.y, Side.DOWN
    end = Point(_ensure_door(r2, side2, margin, rng), end_y)

    horizontal = Point(end.x - start.x, 1)
    vertical = Point(1, start.y - end.y)
    if vertical.y >= 0:
        # Extend to include the elbow cell on the door row.
        vertical = Point(1, vertical.y + 1)

    grid.place(start, horizontal)
    grid.place(end, vertical)
    return [
        Corridor(start, start.add(horizontal), L_SHAPED),
        Corridor(end, end.add(vertical), L_SHAPED),
    ]


def carve_corridors(
    grid: OccupancyGrid,
    rooms: List[Room],
    links: Sequence[Tuple[int, int]],
    min_door_dist: int,
    rng,
    metrics: Optional[Dict] = None,
) -> List[Corridor]:
    """Carve one corridor (or an L of two) per link, mutating ``grid`` and room doors."""
    corridors: List[Corridor] = []
    straight = l_shaped = 0
    for a, b in links:
        if rng.randint(0, 1):
            a, b = b, a
        r1, r2 = rooms[a], rooms[b]

        corridor = None
        if r1.pos.x + r1.size.x > r2.pos.x and r2.pos.x + r2.size.x > r1.pos.x:
            corridor = _straight_vertical(grid, r1, r2, min_door_dist, rng)
        elif r1.pos.y + r1.size.y > r2.pos.y and r2.pos.y + r2.size.y > r1.pos.y:
            corridor = _straight_horizontal(grid, r1, r2, min_door_dist, rng)

        if corridor is not None:
            corridors.append(corridor)
            straight += 1
            continue
        corridors.extend(_l_shaped(grid, r1, r2, min_door_dist, rng))
        l_shaped += 1

    if metrics is not None:
        metrics["corridors_straight"] = straight
        metrics["corridors_l_shaped"] = l_shaped
    return corridors


__all__ = ["Corridor", "carve_corridors", "select_extra_edges", "room_index_pairs", "STRAIGHT", "L_SHAPED"]
