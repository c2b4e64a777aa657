#!/usr/bin/env python3
"""
sim/road.py
===========
Straight multi-lane road running the full height of the simulated space.

The road is bounded by two vertical border segments; they are the only
static obstacles sensors and the damage test look at.
"""

from __future__ import annotations

from typing import Any, Dict, List

from sim.geometry import Point, Segment, lerp

INFINITY: float = 1_000_000.0
"""Half-length of the border segments, standing in for an endless track."""


class Road:
    """Vertical road centred on *x*.

    Parameters
    ----------
    x : float
        Centre line x-coordinate.
    width : float
        Total width across all lanes; must be positive.
    lane_count : int
        Number of lanes; at least one.
    """

    def __init__(self, x: float, width: float, lane_count: int = 3) -> None:
        if width <= 0:
            raise ValueError(f"road width must be positive, got {width!r}")
        if lane_count < 1:
            raise ValueError(f"lane_count must be >= 1, got {lane_count!r}")

        self.x = float(x)
        self.width = float(width)
        self.lane_count = int(lane_count)

        self.left = self.x - self.width / 2
        self.right = self.x + self.width / 2
        self.top = -INFINITY
        self.bottom = INFINITY

        top_left = Point(self.left, self.top)
        top_right = Point(self.right, self.top)
        bottom_left = Point(self.left, self.bottom)
        bottom_right = Point(self.right, self.bottom)
        self.borders: List[Segment] = [
            (top_left, bottom_left),
            (top_right, bottom_right),
        ]

    @property
    def lane_width(self) -> float:
        return self.width / self.lane_count

    def lane_center(self, lane_index: int) -> float:
        """x-coordinate of the centre of lane *lane_index* (clamped)."""
        lane = min(max(int(lane_index), 0), self.lane_count - 1)
        return self.left + self.lane_width / 2 + self.lane_width * lane

    def lane_boundaries(self) -> List[float]:
        """x of every lane line, outer edges included (``lane_count + 1``)."""
        return [
            lerp(self.left, self.right, i / self.lane_count)
            for i in range(self.lane_count + 1)
        ]

    def as_dict(self) -> Dict[str, Any]:
        """Read-only road description for the renderer."""
        return {
            "x": self.x,
            "width": self.width,
            "lane_count": self.lane_count,
            "left": self.left,
            "right": self.right,
            "top": self.top,
            "bottom": self.bottom,
            "lane_lines": self.lane_boundaries(),
        }

    def __repr__(self) -> str:
        return (f"Road(x={self.x!r}, width={self.width!r}, "
                f"lane_count={self.lane_count!r})")
