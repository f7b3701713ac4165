"""Integer grid geometry shared by every generation phase."""

from __future__ import annotations

import math
from enum import IntEnum
from typing import NamedTuple, Tuple


class Point(NamedTuple):
    x: int
    y: int

    def add(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def sub(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)


class Side(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    def next(self) -> "Side":
        return Side((self + 1) % 4)


def distance(a: Point, b: Point) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


class Edge:
    """Unordered pair of points; ``Edge(a, b) == Edge(b, a)``."""

    __slots__ = ("p1", "p2")

    def __init__(self, p1: Point, p2: Point):
        self.p1 = Point(*p1)
        self.p2 = Point(*p2)

    def __eq__(self, other):
        if not isinstance(other, Edge):
            return NotImplemented
        return (self.p1 == other.p1 and self.p2 == other.p2) or (self.p1 == other.p2 and self.p2 == other.p1)

    def __hash__(self):
        return hash(frozenset((self.p1, self.p2)))

    def __repr__(self):
        return f"Edge({tuple(self.p1)}, {tuple(self.p2)})"

    def length(self) -> float:
        return distance(self.p1, self.p2)

    def to_dict(self):
        return {"p1": list(self.p1), "p2": list(self.p2)}


def normalize_rect(pos: Point, size: Point) -> Tuple[Point, Point]:
    """Turn a negative extent ("grow backward from pos") into a positive one."""
    x, y = pos
    w, h = size
    if w < 0:
        w = -w
        x -= w
    if h < 0:
        h = -h
        y -= h
    return Point(x, y), Point(w, h)


__all__ = ["Point", "Side", "Edge", "distance", "normalize_rect"]
