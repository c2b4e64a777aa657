"""
ui/draw_road.py
===============
Road surface and lane markings (mixin).

Renders only the visible slice of the (effectively endless) road: the
outer edges are solid, the lane lines between them dashed and scrolling
with the camera.
"""

from __future__ import annotations

from typing import Any, Mapping

import pygame

from .helpers import draw_dashed_vline


class RoadRenderer:
    """Mixin that draws the road described by ``Road.as_dict()``."""

    def draw_road(self, surface: pygame.Surface, road: Mapping[str, Any]) -> None:
        top_y, _ = self.camera.visible_y_range()
        left, _ = self._to_screen((road["left"], top_y))
        right, _ = self._to_screen((road["right"], top_y))
        rect = pygame.Rect(int(left), 0, int(right - left), self.camera.screen_h)
        pygame.draw.rect(surface, self.ROAD_COLOR, rect)

    def draw_lane_markings(self, surface: pygame.Surface, road: Mapping[str, Any]) -> None:
        lines = road["lane_lines"]
        top_y, _ = self.camera.visible_y_range()
        screen_h = self.camera.screen_h
        for i, lx in enumerate(lines):
            sx, _ = self._to_screen((lx, top_y))
            if 0 < i < len(lines) - 1:
                draw_dashed_vline(
                    surface, self.LANE_LINE_COLOR, sx, 0, screen_h,
                    self.DASH_LEN, self.DASH_GAP,
                    width=self.LANE_LINE_WIDTH, phase=top_y,
                )
            else:
                pygame.draw.line(surface, self.LANE_LINE_COLOR,
                                 (sx, 0), (sx, screen_h), self.LANE_LINE_WIDTH)
