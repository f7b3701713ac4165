from dataclasses import dataclass, field
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

from .config import DungeonConfig
from .geometry import Point, Side
from .grid import OccupancyGrid


def _no_doors() -> Dict[Side, Optional[int]]:
    return {side: None for side in Side}


@dataclass
class Room:
    pos: Point
    size: Point
    # One door coordinate per side: Y for LEFT/RIGHT, X for UP/DOWN.
    doors: Dict[Side, Optional[int]] = field(default_factory=_no_doors)

    def __post_init__(self):
        self.pos = Point(*self.pos)
        self.size = Point(*self.size)

    @property
    def center(self) -> Point:
        return Point(self.pos.x + self.size.x // 2, self.pos.y + self.size.y // 2)

    @property
    def x_range(self) -> Tuple[int, int]:
        return self.pos.x, self.pos.x + self.size.x

    @property
    def y_range(self) -> Tuple[int, int]:
        return self.pos.y, self.pos.y + self.size.y

    def cells(self) -> Iterator[Tuple[int, int]]:
        for ix in range(self.pos.x, self.pos.x + self.size.x):
            for iy in range(self.pos.y, self.pos.y + self.size.y):
                yield ix, iy

    def overlaps(self, other: "Room") -> bool:
        return (
            self.pos.x < other.pos.x + other.size.x
            and other.pos.x < self.pos.x + self.size.x
            and self.pos.y < other.pos.y + other.size.y
            and other.pos.y < self.pos.y + self.size.y
        )

    def door(self, side: Side) -> Optional[int]:
        return self.doors[side]

    def set_door(self, side: Side, value: int) -> None:
        self.doors[side] = value

    def door_cell(self, side: Side) -> Optional[Tuple[int, int]]:
        """Grid cell just outside the room where the door on ``side`` opens."""
        value = self.doors[side]
        if value is None:
            return None
        if side == Side.LEFT:
            return self.pos.x - 1, value
        if side == Side.RIGHT:
            return self.pos.x + self.size.x, value
        if side == Side.UP:
            return value, self.pos.y - 1
        return value, self.pos.y + self.size.y

    def to_dict(self):
        return {
            "pos": list(self.pos),
            "size": list(self.size),
            "doors": {side.name.lower(): value for side, value in self.doors.items()},
        }


class _Scan(NamedTuple):
    mirror_x: bool
    mirror_y: bool
    transpose: bool
    offset: Point


def _scan_for(side: Side, config: DungeonConfig) -> _Scan:
    d = config.minimal_directional_room_distance
    if side == Side.UP:
        return _Scan(False, False, False, Point(0, d))
    if side == Side.DOWN:
        return _Scan(False, True, False, Point(0, -d))
    if side == Side.LEFT:
        return _Scan(False, False, True, Point(d, 0))
    return _Scan(True, False, True, Point(-d, 0))


def _sight_size(scan: _Scan, pos: Point, room: Point, grid: OccupancyGrid) -> Point:
    """Rectangle from the raw position to the far grid edge along the scan axis."""
    if scan.transpose:
        if scan.mirror_x:
            return Point(-pos.x, room.y)
        return Point(grid.width - pos.x - 1, room.y)
    if scan.mirror_y:
        return Point(room.x, -pos.y)
    return Point(room.x, grid.height - pos.y - 1)


def find_candidates(grid: OccupancyGrid, room: Point, side: Side, config: DungeonConfig) -> List[Point]:
    """Final positions in the first row (nearest the ``side`` edge) that satisfy every constraint."""
    scan = _scan_for(side, config)
    margin = config.minimal_room_distance
    inflated = Point(room.x + margin * 2, room.y + margin * 2)
    primary_extent, secondary_extent = (grid.width, grid.height) if scan.transpose else (grid.height, grid.width)
    for primary in range(primary_extent):
        found: List[Point] = []
        for secondary in range(secondary_extent):
            x, y = (primary, secondary) if scan.transpose else (secondary, primary)
            if scan.mirror_x:
                x = grid.width - 1 - x
            if scan.mirror_y:
                y = grid.height - 1 - y
            pos = Point(x, y)
            target = pos.add(scan.offset)
            if (
                grid.can_place(pos, room)
                and grid.can_place(Point(target.x - margin, target.y - margin), inflated)
                and grid.can_place(target, room)
                and grid.can_place(pos, _sight_size(scan, pos, room, grid))
            ):
                found.append(target)
        if found:
            return found
    return []


def place_rooms(grid: OccupancyGrid, config: DungeonConfig, rng, metrics=None) -> List[Room]:
    """Place rooms by directional scans from the grid edges toward the centre.

    The first pooled size goes to the grid midpoint unconditionally. Every
    other size tries up to four edges in cyclic order starting from a random
    one; the first edge with a feasible row wins. A size that fits nowhere
    ends placement and the remaining pool is discarded.
    """
    lo, hi = config.room_size_min, config.room_size_max
    pool = [Point(rng.randint(lo, hi), rng.randint(lo, hi)) for _ in range(config.room_pool_size)]
    rooms: List[Room] = []
    if metrics is not None:
        metrics["rooms_requested"] = len(pool)
    if not pool:
        return rooms

    first = pool.pop()
    center = Point(grid.width // 2, grid.height // 2)
    grid.place(center, first)
    rooms.append(Room(center, first))

    rotations = 0
    while pool:
        room = pool.pop()
        side = Side(rng.randint(Side.UP, Side.RIGHT))
        placed = False
        for _attempt in range(4):
            candidates = find_candidates(grid, room, side, config)
            if candidates:
                pos = candidates[rng.randint(0, len(candidates) - 1)]
                grid.place(pos, room)
                rooms.append(Room(pos, room))
                placed = True
                break
            side = side.next()
            rotations += 1
        if not placed:
            if metrics is not None:
                metrics["rooms_dropped"] = len(pool) + 1
                metrics["placement_exhausted"] = True
            break

    if metrics is not None:
        metrics["rooms_placed"] = len(rooms)
        metrics["direction_rotations"] = rotations
    return rooms


__all__ = ["Room", "place_rooms", "find_candidates"]
