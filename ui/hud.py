#!/usr/bin/env python3
"""HUD panel, legend, splash screen, and pause banner (mixin)."""

from __future__ import annotations

from typing import Any, Mapping, Optional

import pygame

from .helpers import render_text


class HudRenderer:
    """Mixin that draws every overlay / HUD element."""

    # ------------------------------------------------------------------ #
    #  Main HUD panel                                                      #
    # ------------------------------------------------------------------ #

    def draw_hud(
        self,
        surface: pygame.Surface,
        state: Mapping[str, Any],
        leader: Optional[Mapping[str, Any]],
    ) -> None:
        if self.font_small is None or self.font_tiny is None:
            return

        panel_rect = pygame.Rect(self.road_width, 0, self.hud_width, self.height)
        pygame.draw.rect(surface, self.HUD_BG_COLOR, panel_rect)
        pygame.draw.line(surface, self.HUD_BORDER_COLOR,
                         panel_rect.topleft, panel_rect.bottomleft, 1)

        x = panel_rect.x + 14
        y = 14
        row = self.HUD_ROW_HEIGHT

        render_text(surface, self.font_small, f"MODE {self.mode.upper()}", (x, y))
        y += row + 4
        render_text(surface, self.font_tiny, f"TICK {state['tick']}", (x, y), (180, 180, 180))
        y += row
        render_text(surface, self.font_tiny,
                    f"ALIVE {state['alive']}   DAMAGED {state['damaged']}",
                    (x, y), (180, 180, 180))
        y += row
        render_text(surface, self.font_tiny, f"TRAFFIC {len(state['traffic'])}",
                    (x, y), (180, 180, 180))
        y += row + 8

        if leader is None:
            return

        status_color = self.WARNING_COLOR if leader["damaged"] else self.GO_COLOR
        render_text(surface, self.font_small, f"ID {leader['id']}", (x, y), leader["color"])
        y += row + 2
        render_text(surface, self.font_tiny,
                    "DAMAGED" if leader["damaged"] else "ALIVE", (x, y), status_color)
        y += row
        render_text(surface, self.font_tiny, f"SPEED {leader['speed']:>5.2f}",
                    (x, y), (240, 240, 240))
        y += row
        render_text(surface, self.font_tiny,
                    f"POS   {leader['x']:>7.1f} {leader['y']:>9.1f}",
                    (x, y), (240, 240, 240))
        y += row
        render_text(surface, self.font_tiny, f"ANGLE {leader['angle']:>6.3f}",
                    (x, y), (240, 240, 240))
        y += row + 8

        activations = self._get(leader, "activations", default=[])
        if activations:
            render_text(surface, self.font_tiny, "SENSORS", (x, y), (180, 180, 180))
            y += row
            for i, value in enumerate(activations):
                bar = pygame.Rect(x + 28, y + 4, self.ACTIVATION_BAR_W, self.ACTIVATION_BAR_H)
                pygame.draw.rect(surface, self.HUD_BORDER_COLOR, bar)
                fill = bar.copy()
                fill.w = int(bar.w * max(0.0, min(1.0, value)))
                pygame.draw.rect(surface, self.RAY_COLOR, fill)
                render_text(surface, self.font_tiny, f"{i}", (x, y), (140, 140, 140))
                render_text(surface, self.font_tiny, f"{value:.2f}",
                            (bar.right + 8, y), (200, 200, 200))
                y += row

    # ------------------------------------------------------------------ #
    #  Legend / splash / pause                                             #
    # ------------------------------------------------------------------ #

    def _draw_legend(self, surface: pygame.Surface) -> None:
        if self.font_tiny is None:
            return
        x = self.road_width + 14
        y = self.height - 14 - len(self.LEGEND_ITEMS) * self.HUD_ROW_HEIGHT
        for label, color in self.LEGEND_ITEMS:
            pygame.draw.rect(surface, color, pygame.Rect(x, y + 4, 10, 10))
            pygame.draw.rect(surface, (200, 200, 200), pygame.Rect(x, y + 4, 10, 10), 1)
            render_text(surface, self.font_tiny, label, (x + 18, y), (180, 180, 180))
            y += self.HUD_ROW_HEIGHT

    def _draw_splash(self, surface: pygame.Surface) -> None:
        if self.font_title is None or self.font_small is None:
            return
        centre_x = self.width // 2
        render_text(surface, self.font_title, "LANE SIM",
                    (centre_x, self.height // 2 - 40), anchor="center")
        lines = (
            "ARROWS drive   SPACE pause   R reset",
            "S sensors   L legend   F12 screenshot",
            "press any key",
        )
        for i, line in enumerate(lines):
            render_text(surface, self.font_small, line,
                        (centre_x, self.height // 2 + 10 + i * 22),
                        (180, 180, 180), anchor="center")

    def _draw_pause_banner(self, surface: pygame.Surface) -> None:
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 100))
        surface.blit(overlay, (0, 0))
        if self.font_title:
            text = self.font_title.render("PAUSED", True, (220, 220, 220))
            surface.blit(text, text.get_rect(center=(self.width // 2, self.height // 2)))
