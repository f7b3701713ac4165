"""Bowyer-Watson Delaunay triangulation over room centres.

The result is only used as a candidate connectivity graph, so the edge list is
returned as-is: three edges per surviving triangle, shared edges duplicated.

Circumcircle containment is boundary-inclusive (``distance <= radius``). That
tie-break decides which of two co-circular triangulations survives and so must
stay non-strict.
"""

from __future__ import annotations

import math
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from .geometry import Edge, Point

# Below this magnitude the circumcentre denominator is treated as zero
# (collinear or nearly collinear vertices).
DEGENERACY_EPSILON = 1e-9


class Triangle(NamedTuple):
    p1: Point
    p2: Point
    p3: Point

    def edges(self) -> Tuple[Edge, Edge, Edge]:
        return Edge(self.p1, self.p2), Edge(self.p2, self.p3), Edge(self.p3, self.p1)

    def circumcircle(self) -> Optional[Tuple[float, float, float]]:
        """Return ``(cx, cy, radius)`` or ``None`` for a degenerate triangle."""
        (ax, ay), (bx, by), (cx, cy) = self.p1, self.p2, self.p3
        ab = ax * ax + ay * ay
        cd = bx * bx + by * by
        ef = cx * cx + cy * cy
        den_x = ax * (cy - by) + bx * (ay - cy) + cx * (by - ay)
        den_y = ay * (cx - bx) + by * (ax - cx) + cy * (bx - ax)
        if abs(den_x) < DEGENERACY_EPSILON or abs(den_y) < DEGENERACY_EPSILON:
            return None
        circum_x = (ab * (cy - by) + cd * (ay - cy) + ef * (by - ay)) / den_x / 2.0
        circum_y = (ab * (cx - bx) + cd * (ax - cx) + ef * (bx - ax)) / den_y / 2.0
        radius = math.hypot(ax - circum_x, ay - circum_y)
        return circum_x, circum_y, radius

    def circumcircle_contains(self, point: Point, metrics: Optional[Dict] = None) -> bool:
        circle = self.circumcircle()
        if circle is None:
            # Unbounded circle: the sliver is always dissolved by the next insertion.
            if metrics is not None:
                metrics["degenerate_triangles"] = metrics.get("degenerate_triangles", 0) + 1
            return True
        cx, cy, radius = circle
        return math.hypot(point.x - cx, point.y - cy) <= radius

    def contains_vertex(self, point: Point) -> bool:
        return point == self.p1 or point == self.p2 or point == self.p3


def super_triangle(points: Sequence[Point]) -> Triangle:
    min_x = min(p.x for p in points)
    min_y = min(p.y for p in points)
    max_x = max(p.x for p in points)
    max_y = max(p.y for p in points)
    delta_max = max(max_x - min_x, max_y - min_y)
    mid_x = (min_x + max_x) // 2
    mid_y = (min_y + max_y) // 2
    return Triangle(
        Point(mid_x - 20 * delta_max, mid_y - delta_max),
        Point(mid_x, mid_y + 20 * delta_max),
        Point(mid_x + 20 * delta_max, mid_y - delta_max),
    )


def triangulate(points: Sequence[Point], metrics: Optional[Dict] = None) -> List[Edge]:
    points = [Point(*p) for p in points]
    if len(points) < 3:
        return []
    sup = super_triangle(points)
    triangles: List[Triangle] = [sup]

    for p in points:
        bad = [t for t in triangles if t.circumcircle_contains(p, metrics)]
        if not bad:
            continue
        polygon: List[Edge] = []
        for t in bad:
            polygon.extend(t.edges())
        triangles = [t for t in triangles if t not in bad]

        # Edges seen more than once are interior to the cavity.
        counts: Dict[Edge, int] = {}
        for e in polygon:
            counts[e] = counts.get(e, 0) + 1
        boundary = [e for e in polygon if counts[e] == 1]

        for e in boundary:
            triangles.append(Triangle(e.p1, e.p2, p))

    triangles = [
        t
        for t in triangles
        if not (t.contains_vertex(sup.p1) or t.contains_vertex(sup.p2) or t.contains_vertex(sup.p3))
    ]

    edges: List[Edge] = []
    for t in triangles:
        edges.extend(t.edges())
    return edges


__all__ = ["Triangle", "triangulate", "super_triangle", "DEGENERACY_EPSILON"]
