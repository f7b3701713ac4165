"""Boolean occupancy grid used while placing rooms and carving corridors.

Cells are stored column-major (``cells[x][y]``) like the tile grids elsewhere
in the package. Rectangle queries go through a summed-area table that is
rebuilt lazily after writes, which keeps the placement scan cheap.
"""

from __future__ import annotations

from typing import List, Optional

from .geometry import Point, normalize_rect


class OccupancyGrid:
    __slots__ = ("width", "height", "cells", "_sums")

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.cells: List[List[bool]] = [[False for _ in range(height)] for _ in range(width)]
        self._sums: Optional[List[List[int]]] = None

    @property
    def size(self) -> Point:
        return Point(self.width, self.height)

    def occupied(self, point: Point) -> bool:
        x, y = point
        return self.cells[x][y]

    def set(self, point: Point, value: bool) -> None:
        x, y = point
        self.cells[x][y] = bool(value)
        self._sums = None

    def in_bounds(self, point: Point) -> bool:
        x, y = point
        return 0 <= x < self.width and 0 <= y < self.height

    def _summed_area(self) -> List[List[int]]:
        if self._sums is None:
            w, h = self.width, self.height
            sums = [[0] * (h + 1) for _ in range(w + 1)]
            for x in range(w):
                column = self.cells[x]
                prev = sums[x]
                cur = sums[x + 1]
                running = 0
                for y in range(h):
                    running += column[y]
                    cur[y + 1] = prev[y + 1] + running
            self._sums = sums
        return self._sums

    def count_in(self, pos: Point, size: Point) -> int:
        """Occupied cells inside an already normalised, in-bounds rectangle."""
        s = self._summed_area()
        x0, y0 = pos
        x1, y1 = x0 + size.x, y0 + size.y
        return s[x1][y1] - s[x0][y1] - s[x1][y0] + s[x0][y0]

    def can_place(self, pos: Point, size: Point) -> bool:
        pos, size = normalize_rect(pos, size)
        # The far row and column act as the map border: touching them is rejected.
        if self.width <= pos.x + size.x or self.height <= pos.y + size.y:
            return False
        if pos.x < 0 or pos.y < 0:
            return False
        if size.x == 0 or size.y == 0:
            return True
        return self.count_in(pos, size) == 0

    def place(self, pos: Point, size: Point) -> None:
        pos, size = normalize_rect(pos, size)
        for x in range(pos.x, pos.x + size.x):
            column = self.cells[x]
            for y in range(pos.y, pos.y + size.y):
                column[y] = True
        self._sums = None

    def count_occupied(self) -> int:
        return sum(sum(col) for col in self.cells)

    def rows(self) -> List[List[bool]]:
        """Row-major copy (``rows[y][x]``) for display code."""
        return [[self.cells[x][y] for x in range(self.width)] for y in range(self.height)]


def can_place(grid: OccupancyGrid, pos: Point, size: Point) -> bool:
    return grid.can_place(pos, size)


def place(grid: OccupancyGrid, pos: Point, size: Point) -> None:
    grid.place(pos, size)


__all__ = ["OccupancyGrid", "can_place", "place"]
