#!/usr/bin/env python3
"""
sim/sensors.py
==============
Ray-fan range sensor attached to a :class:`~sim.car.Car`.

Each tick the fan is rebuilt around the car's current position and
heading, then every ray is tested against the road borders and the hulls
of the other vehicles.  A reading is the nearest hit along the ray, or
``None`` when the ray is clear.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from sim.geometry import (
    Intersection,
    Point,
    Polygon,
    Segment,
    heading_offset,
    intersect,
    lerp,
    polygon_edges,
)
from sim.tuning import SensorTuning

Reading = Optional[Intersection]


class Sensors:
    """Fan of ``ray_count`` rays spread symmetrically around the heading.

    Parameters
    ----------
    car : Any
        Owner; only ``x``, ``y`` and ``angle`` are read.
    tuning : SensorTuning or None
        Ray count, range and spread; defaults when *None*.
    """

    def __init__(self, car: Any, tuning: Optional[SensorTuning] = None) -> None:
        tuning = tuning or SensorTuning()
        if tuning.ray_count < 1:
            raise ValueError(f"ray_count must be >= 1, got {tuning.ray_count!r}")
        if tuning.ray_length <= 0:
            raise ValueError(f"ray_length must be positive, got {tuning.ray_length!r}")

        self.car = car
        self.ray_count = int(tuning.ray_count)
        self.ray_length = float(tuning.ray_length)
        self.ray_spread = float(tuning.ray_spread)

        self.rays: List[Segment] = []
        self.readings: List[Reading] = []

    # ── per-tick update ───────────────────────────────────────────────────

    def update(self, road_borders: Sequence[Segment],
               hulls: Sequence[Polygon]) -> None:
        """Rebuild the rays and replace all readings for this tick."""
        self._cast_rays()
        self.readings = [
            self._get_reading(ray, road_borders, hulls) for ray in self.rays
        ]

    def _cast_rays(self) -> None:
        start = Point(self.car.x, self.car.y)
        rays: List[Segment] = []
        for i in range(self.ray_count):
            t = 0.5 if self.ray_count == 1 else i / (self.ray_count - 1)
            ray_angle = lerp(self.ray_spread / 2, -self.ray_spread / 2, t) + self.car.angle
            dx, dy = heading_offset(ray_angle, self.ray_length)
            rays.append((start, Point(start.x + dx, start.y + dy)))
        self.rays = rays

    @staticmethod
    def _get_reading(ray: Segment, road_borders: Sequence[Segment],
                     hulls: Sequence[Polygon]) -> Reading:
        """Nearest hit along *ray*; the first one found wins exact ties."""
        nearest: Reading = None
        for border in road_borders:
            touch = intersect(ray, border)
            if touch is not None and (nearest is None or touch.offset < nearest.offset):
                nearest = touch
        for hull in hulls:
            for edge in polygon_edges(hull):
                touch = intersect(ray, edge)
                if touch is not None and (nearest is None or touch.offset < nearest.offset):
                    nearest = touch
        return nearest

    # ── derived views ─────────────────────────────────────────────────────

    def activations(self) -> List[float]:
        """Policy input: 0 for a clear ray, rising to 1 as the hit closes in."""
        return [0.0 if r is None else 1.0 - r.offset for r in self.readings]

    def distances(self) -> List[Optional[float]]:
        """Distance to each hit in world units, ``None`` when clear."""
        return [None if r is None else r.offset * self.ray_length
                for r in self.readings]

    def as_dict(self) -> dict:
        return {
            "rays": [(tuple(a), tuple(b)) for a, b in self.rays],
            "readings": [None if r is None else (r.x, r.y, r.offset)
                         for r in self.readings],
            "ray_length": self.ray_length,
        }
