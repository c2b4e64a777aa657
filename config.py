#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables and command-line flags
(see :mod:`main`).  It imports nothing from the project packages, so any
module can import it.
"""

from typing import Tuple

# ── Road ─────────────────────────────────────────────────────────────────────
ROAD_WIDTH_RATIO: float = 0.9
"""Road width as a fraction of the window width."""
DEFAULT_LANE_COUNT: int = 3

# ── Simulation defaults ──────────────────────────────────────────────────────
DEFAULT_MODE: str = "keys"
DEFAULT_CAR_COUNT: int = 1
DEFAULT_START_LANE: int = 1
DEFAULT_START_Y: float = 100.0
DEFAULT_RANDOM_SEED: int = 0
DEFAULT_HEADLESS_TICKS: int = 0

# (lane index, y) of every traffic car in the default layout; traffic
# starts ahead of the player (smaller y).
DEFAULT_TRAFFIC_LAYOUT: Tuple[Tuple[int, float], ...] = (
    (1, -100.0),
    (0, -300.0),
    (2, -300.0),
    (0, -500.0),
    (1, -500.0),
    (1, -700.0),
    (2, -700.0),
)

# Random traffic envelope (distances ahead of the start line)
TRAFFIC_SPAWN_MIN_AHEAD: float = 150.0
TRAFFIC_SPAWN_MAX_AHEAD: float = 2500.0
TRAFFIC_SPAWN_MIN_GAP: float = 120.0
TRAFFIC_SPAWN_MAX_ATTEMPTS: int = 300

# ── UI defaults ──────────────────────────────────────────────────────────────
WINDOW_WIDTH: int = 260
WINDOW_HEIGHT: int = 720
HUD_WIDTH: int = 300
TARGET_FPS: int = 60
CAMERA_ANCHOR: float = 0.7
"""Vertical screen fraction at which the followed car is drawn."""

# ── Policy model path (relative to project root) ─────────────────────────────
MODEL_REL_PATH: str = "ml/generated/policy_model.pkl"
