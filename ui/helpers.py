"""
ui/helpers.py
=============
Pure drawing utilities shared across UI modules: alpha polygons,
dashed lines and text, plus the :class:`ViewHelpers` mixin.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Tuple

import pygame

from .types import Camera

# ── Alpha drawing helpers ────────────────────────────────────────────────────

def draw_alpha_polygon(
    target: pygame.Surface,
    color: Tuple[int, ...],
    points: Sequence[Tuple[float, float]],
) -> None:
    """Draw a semi-transparent filled polygon."""
    if len(points) < 3:
        return
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    left, top = int(min(xs)), int(min(ys))
    w = int(max(xs)) - left + 2
    h = int(max(ys)) - top + 2
    tmp = pygame.Surface((w, h), pygame.SRCALPHA)
    pygame.draw.polygon(tmp, color, [(x - left, y - top) for x, y in points])
    target.blit(tmp, (left, top))


def draw_dashed_vline(
    target: pygame.Surface,
    color: Tuple[int, ...],
    x: float,
    y0: float,
    y1: float,
    dash: int,
    gap: int,
    width: int = 1,
    phase: float = 0.0,
) -> None:
    """Vertical dashed line from *y0* to *y1*; *phase* scrolls the pattern."""
    period = dash + gap
    y = y0 - (phase % period)
    while y < y1:
        start = max(y, y0)
        end = min(y + dash, y1)
        if end > start:
            pygame.draw.line(target, color, (x, start), (x, end), width)
        y += period


# ── Text helper ──────────────────────────────────────────────────────────────

def render_text(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: Tuple[int, int],
    color: Tuple[int, ...] = (230, 230, 235),
    anchor: str = "topleft",
) -> pygame.Rect:
    """Render text with flexible *anchor* ('topleft', 'center', 'midright' …)."""
    img = font.render(text, True, color)
    rect = img.get_rect(**{anchor: pos})
    surface.blit(img, rect)
    return rect


class ViewHelpers:
    """Mixin with small static utilities used by every renderer."""

    camera: Camera

    @staticmethod
    def _load_font(size: int, bold: bool = False) -> pygame.font.Font:
        for name in ("Consolas", "Menlo", "DejaVu Sans Mono"):
            path = pygame.font.match_font(name, bold=bold)
            if path:
                return pygame.font.Font(path, size)
        return pygame.font.Font(None, size + 4)

    def _to_screen(self, point: Sequence[float]) -> Tuple[float, float]:
        return self.camera.world_to_screen(point[0], point[1])

    @staticmethod
    def _get(data: Mapping[str, Any], key: str, default: Optional[Any] = None) -> Any:
        return data.get(key, default) if isinstance(data, Mapping) else default
