#!/usr/bin/env python3
"""
sim/geometry.py
===============
Planar geometry kernel shared by :mod:`sim.sensors` and :mod:`sim.car`.

Everything here is a pure function of its arguments.  Degenerate input
(zero-length or parallel segments, polygons with fewer than two points)
yields "no intersection" rather than an exception.
"""

from __future__ import annotations

import math
from typing import Iterator, NamedTuple, Optional, Sequence, Tuple

EPSILON: float = 1e-9
"""Determinant magnitude below which two segments count as parallel."""


class Point(NamedTuple):
    """Plane coordinate (screen convention: y grows downwards)."""
    x: float
    y: float


Segment = Tuple[Point, Point]
Polygon = Sequence[Point]


class Intersection(NamedTuple):
    """Crossing of two segments.

    Attributes
    ----------
    x, y : float
        Crossing point.
    offset : float
        Parametric position along the *first* segment, in ``[0, 1]``.
    """
    x: float
    y: float
    offset: float

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def heading_offset(angle: float, length: float) -> Tuple[float, float]:
    """Displacement of *length* along heading *angle*.

    Angle 0 points up the screen (negative y); increasing the angle turns
    the heading to the left.  Kinematics, hull corners and sensor rays all
    go through this helper so they agree on the convention.
    """
    return -math.sin(angle) * length, -math.cos(angle) * length


def intersect(seg_a: Segment, seg_b: Segment) -> Optional[Intersection]:
    """Return where *seg_a* crosses *seg_b*, or ``None``.

    Solves ``A + t·(B - A) = C + u·(D - C)``.  Parallel, collinear and
    zero-length segments have a vanishing determinant and never intersect.
    """
    (ax, ay), (bx, by) = seg_a
    (cx, cy), (dx, dy) = seg_b

    bottom = (dy - cy) * (bx - ax) - (dx - cx) * (by - ay)
    if abs(bottom) < EPSILON:
        return None

    t_top = (dx - cx) * (ay - cy) - (dy - cy) * (ax - cx)
    u_top = (cy - ay) * (ax - bx) - (cx - ax) * (ay - by)
    t = t_top / bottom
    u = u_top / bottom
    if not (0.0 <= t <= 1.0 and 0.0 <= u <= 1.0):
        return None

    return Intersection(x=lerp(ax, bx, t), y=lerp(ay, by, t), offset=t)


def polygon_edges(poly: Polygon) -> Iterator[Segment]:
    """Yield every edge of *poly*, including the closing edge.

    A two-point polygon yields its segment twice (forward and back), which
    lets road borders go through the same polygon test as vehicle hulls.
    """
    n = len(poly)
    if n < 2:
        return
    for i in range(n):
        yield poly[i], poly[(i + 1) % n]


def polygons_intersect(poly_a: Polygon, poly_b: Polygon) -> bool:
    """True iff any edge of *poly_a* crosses any edge of *poly_b*.

    Containment without an edge crossing is not detected; hulls move a few
    units per tick so an overlap always starts with a crossing.
    """
    edges_b = list(polygon_edges(poly_b))
    for edge_a in polygon_edges(poly_a):
        for edge_b in edges_b:
            if intersect(edge_a, edge_b) is not None:
                return True
    return False
