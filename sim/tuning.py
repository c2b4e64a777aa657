#!/usr/bin/env python3
"""
sim/tuning.py
=============
Tunable physics and sensor parameters.  Every constant lives in a frozen
dataclass so experiments can swap tunings without touching code.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class VehicleTuning:
    """Immutable bag of longitudinal / rotational constants for one car.

    Units are world units (pixels) per tick; angles are radians.
    """

    # ── Footprint ─────────────────────────────────────────────────────────
    width: float = 30.0
    """Hull width across the axle."""

    height: float = 50.0
    """Hull length along the heading."""

    # ── Longitudinal control ──────────────────────────────────────────────
    acceleration: float = 0.2
    """Speed gained per tick while forward (lost while reverse) is held."""

    friction: float = 0.05
    """Speed bled towards zero every tick."""

    max_speed: float = 3.0
    """Forward speed cap; reverse is capped at half of it."""

    # ── Steering ──────────────────────────────────────────────────────────
    turn_rate: float = 0.03
    """Heading change per tick while a steering control is held."""


@dataclass(frozen=True)
class SensorTuning:
    """Ray fan configuration of a :class:`~sim.sensors.Sensors` array."""

    ray_count: int = 5
    """Number of rays; also the length of the policy input vector."""

    ray_length: float = 150.0
    """Range of each individual ray."""

    ray_spread: float = math.pi / 2
    """Total angular width of the fan, centred on the heading."""


# Traffic drives slower than the player so it can be caught up with.
TRAFFIC_TUNING = VehicleTuning(max_speed=2.0)
