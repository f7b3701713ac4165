"""Kruskal minimum spanning tree over candidate edges.

Node ids are assigned in first-encounter order over the edge list and the sort
is stable, so the accepted edge order is reproducible for a given input.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from .geometry import Edge, Point, distance


class DisjointSet:
    def __init__(self, n: int):
        self.parent = list(range(n))

    def find(self, a: int) -> int:
        root = a
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[a] != root:
            self.parent[a], a = root, self.parent[a]
        return root

    def union(self, a: int, b: int) -> bool:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        self.parent[ra] = rb
        return True


def _index_nodes(edges: Sequence[Edge]) -> Dict[Point, int]:
    ids: Dict[Point, int] = {}
    for e in edges:
        for p in (e.p1, e.p2):
            if p not in ids:
                ids[p] = len(ids)
    return ids


def minimum_spanning_tree(edges: Sequence[Edge]) -> List[Edge]:
    ids = _index_nodes(edges)
    ordered = sorted(edges, key=lambda e: e.length())
    dsu = DisjointSet(len(ids))
    tree: List[Edge] = []
    for e in ordered:
        # Cycle edges stay in the caller's candidate pool for reinjection.
        if dsu.union(ids[e.p1], ids[e.p2]):
            tree.append(Edge(e.p1, e.p2))
    return tree


def components(points: Sequence[Point], edges: Sequence[Edge]) -> int:
    """Number of connected components among ``points`` using ``edges``."""
    ids = {Point(*p): i for i, p in enumerate(points)}
    dsu = DisjointSet(len(ids))
    for e in edges:
        if e.p1 in ids and e.p2 in ids:
            dsu.union(ids[e.p1], ids[e.p2])
    return len({dsu.find(i) for i in range(len(ids))})


def stitch_components(points: Sequence[Point], edges: Sequence[Edge]) -> List[Edge]:
    """Shortest cross-component edges that make ``edges`` span every point.

    Empty whenever the candidate graph is already connected. Needed for two
    rooms, collinear centres, and hull points the super-triangle cut away.
    """
    points = [Point(*p) for p in points]
    ids = {p: i for i, p in enumerate(points)}
    dsu = DisjointSet(len(points))
    for e in edges:
        if e.p1 in ids and e.p2 in ids:
            dsu.union(ids[e.p1], ids[e.p2])
    pairs = [
        (distance(points[i], points[j]), i, j) for i in range(len(points)) for j in range(i + 1, len(points))
    ]
    pairs.sort(key=lambda t: t[0])
    added: List[Edge] = []
    for _d, i, j in pairs:
        if dsu.union(i, j):
            added.append(Edge(points[i], points[j]))
    return added


__all__ = ["DisjointSet", "minimum_spanning_tree", "components", "stitch_components"]
