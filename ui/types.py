"""
ui/types.py
===========
Lightweight data containers used across every UI module.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

ColorRGB = Tuple[int, int, int]
ColorRGBA = Tuple[int, int, int, int]


@dataclass
class Camera:
    """Viewport mapping world coordinates to screen pixels.

    The camera only scrolls vertically: world x maps straight onto the road
    viewport and the followed car sits at ``anchor`` of the screen height.
    """
    screen_w: int
    screen_h: int
    world_y: float = 0.0
    anchor: float = 0.7

    def follow(self, wy: float) -> None:
        self.world_y = wy

    def world_to_screen(self, wx: float, wy: float) -> Tuple[float, float]:
        return wx, wy - self.world_y + self.screen_h * self.anchor

    def screen_to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        return sx, sy - self.screen_h * self.anchor + self.world_y

    def visible_y_range(self) -> Tuple[float, float]:
        """World y-span currently on screen (top, bottom)."""
        _, top = self.screen_to_world(0, 0)
        _, bottom = self.screen_to_world(0, self.screen_h)
        return top, bottom
