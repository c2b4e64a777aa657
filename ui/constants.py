#!/usr/bin/env python3
"""Visual constants shared across all renderers."""

from __future__ import annotations

from typing import Sequence, Tuple

from .types import ColorRGB


class ViewConstants:
    """Mixin providing every visual / layout constant."""

    BG_COLOR: ColorRGB = (15, 15, 15)
    ROAD_COLOR: ColorRGB = (170, 170, 170)
    LANE_LINE_COLOR: ColorRGB = (255, 255, 255)
    HUD_BG_COLOR: ColorRGB = (22, 22, 22)
    HUD_BORDER_COLOR: ColorRGB = (42, 42, 42)
    DAMAGED_COLOR: ColorRGB = (120, 120, 120)
    RAY_COLOR: ColorRGB = (255, 220, 0)
    RAY_BLOCKED_COLOR: ColorRGB = (0, 0, 0)
    LEADER_OUTLINE_COLOR: ColorRGB = (255, 255, 255)
    WARNING_COLOR: ColorRGB = (255, 60, 60)
    GO_COLOR: ColorRGB = (0, 255, 127)

    LANE_LINE_WIDTH = 5
    DASH_LEN = 20
    DASH_GAP = 20
    RAY_WIDTH = 2
    FOLLOWER_ALPHA = 70
    """Alpha of non-leading controlled cars in a population run."""

    HUD_ROW_HEIGHT = 18
    ACTIVATION_BAR_W = 120
    ACTIVATION_BAR_H = 8

    LEGEND_ITEMS: Sequence[Tuple[str, ColorRGB]] = (
        ("RAY", (255, 220, 0)),
        ("HIT", (0, 0, 0)),
        ("DAMAGED", (120, 120, 120)),
    )

    SCREENSHOT_DIR = "screenshots"
