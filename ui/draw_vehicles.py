#!/usr/bin/env python3
"""Vehicle hulls and sensor rays (mixin)."""

from __future__ import annotations

from typing import Any, Mapping

import pygame

from .helpers import draw_alpha_polygon


class VehicleRenderer:
    """Mixin that draws cars from ``Car.as_dict()`` render states."""

    def draw_vehicle(
        self,
        surface: pygame.Surface,
        vehicle: Mapping[str, Any],
        alpha: int = 255,
        outline: bool = False,
    ) -> None:
        points = [self._to_screen(p) for p in vehicle["hull"]]
        color = self.DAMAGED_COLOR if vehicle["damaged"] else vehicle["color"]
        if alpha >= 255:
            pygame.draw.polygon(surface, color, points)
        else:
            draw_alpha_polygon(surface, (*color, alpha), points)
        if outline:
            pygame.draw.polygon(surface, self.LEADER_OUTLINE_COLOR, points, 1)

        # windshield marks the front edge (hull corners 0 and 1)
        if not vehicle["damaged"] and alpha >= 255:
            fr, fl, rl, rr = points
            inset = [
                _towards(fr, rr, 0.15), _towards(fl, rl, 0.15),
                _towards(fl, rl, 0.3), _towards(fr, rr, 0.3),
            ]
            r, g, b = color
            glass = (max(0, r - 60), max(0, g - 60), max(0, b - 60))
            pygame.draw.polygon(surface, glass, inset)

    def draw_sensors(self, surface: pygame.Surface, vehicle: Mapping[str, Any]) -> None:
        """Yellow from the car to the first hit, black from the hit onwards."""
        rays = vehicle.get("rays") or []
        readings = vehicle.get("readings") or []
        for ray, reading in zip(rays, readings):
            start = self._to_screen(ray[0])
            end = self._to_screen(ray[1])
            hit = end if reading is None else self._to_screen(reading[:2])
            pygame.draw.line(surface, self.RAY_COLOR, start, hit, self.RAY_WIDTH)
            if reading is not None:
                pygame.draw.line(surface, self.RAY_BLOCKED_COLOR, hit, end, self.RAY_WIDTH)


def _towards(a, b, t: float):
    return a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t
