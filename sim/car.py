#!/usr/bin/env python3
"""
sim/car.py
==========
A single vehicle: kinematics, hull polygon and damage assessment.

Per tick, while the car is intact:

1. apply the control snapshot to the speed and clamp it;
2. bleed friction towards zero;
3. steer (only while moving; reversing flips the steering sense);
4. move along the heading;
5. rebuild the hull;
6. test the hull against the road borders and the traffic hulls.

A damaged car stays where it crashed.  Its sensors keep reading against
the frozen hull so a wreck still "sees" its surroundings, and an attached
policy keeps receiving activations.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from sim.controls import (
    ControlSnapshot,
    ControlType,
    Controls,
    PolicyControls,
    make_controls,
)
from sim.geometry import Point, Polygon, Segment, heading_offset, polygons_intersect
from sim.sensors import Sensors
from sim.tuning import SensorTuning, VehicleTuning

log = logging.getLogger("car")

Policy = Callable[[Sequence[float]], Sequence[float]]

# Render palette, cycled by index
VEHICLE_COLORS: Tuple[Tuple[int, int, int], ...] = (
    ( 86, 168, 255),
    (255,  88,  88),
    (100, 226, 170),
    (246, 191,  90),
    (180, 120, 255),
    (255, 160, 100),
)


class Car:
    """
    One vehicle on the road.

    Parameters
    ----------
    car_id : str
        Unique identifier, e.g. ``"CAR_000"``.
    x, y : float
        Centre of the car in world coordinates.
    control_type : ControlType
        ``KEYS`` (manual), ``DUMMY`` (constant forward traffic) or ``AI``.
    tuning : VehicleTuning or None
        Footprint and dynamics; defaults when *None*.
    sensor_tuning : SensorTuning or None
        Ray fan configuration.  Every car except ``DUMMY`` traffic gets
        sensors.
    policy : callable or None
        Maps sensor activations to ``[forward, left, right, reverse]``.
        Drives the car only when *control_type* is ``AI``.
    controls : Controls or None
        Explicit control source; built from *control_type* when *None*.
    color_index : int
        Index into :data:`VEHICLE_COLORS`.
    """

    def __init__(
        self,
        car_id: str,
        x: float,
        y: float,
        control_type: ControlType = ControlType.KEYS,
        tuning: Optional[VehicleTuning] = None,
        sensor_tuning: Optional[SensorTuning] = None,
        policy: Optional[Policy] = None,
        controls: Optional[Controls] = None,
        color_index: int = 0,
    ) -> None:
        tuning = tuning or VehicleTuning()
        if tuning.width <= 0 or tuning.height <= 0:
            raise ValueError(
                f"car dimensions must be positive, got {tuning.width!r}x{tuning.height!r}"
            )
        if tuning.max_speed <= 0:
            raise ValueError(f"max_speed must be positive, got {tuning.max_speed!r}")

        self.id = car_id
        self.x = float(x)
        self.y = float(y)
        self.width = float(tuning.width)
        self.height = float(tuning.height)
        self.tuning = tuning
        self.sensor_tuning = sensor_tuning

        self.angle = 0.0
        self.speed = 0.0
        self.acceleration = tuning.acceleration
        self.friction = tuning.friction
        self.max_speed = tuning.max_speed
        self.turn_rate = tuning.turn_rate

        self.control_type = control_type
        self.controls = controls or make_controls(control_type)
        self.policy = policy
        self.sensors: Optional[Sensors] = (
            None if control_type is ControlType.DUMMY
            else Sensors(self, sensor_tuning)
        )
        self.color_index = color_index
        self.color = VEHICLE_COLORS[color_index % len(VEHICLE_COLORS)]

        self.damaged = False
        self.damaged_at_tick: Optional[int] = None
        self.ticks = 0
        self.hull: List[Point] = self._create_hull()

    @property
    def max_reverse_speed(self) -> float:
        return self.max_speed / 2.0

    @property
    def autonomous(self) -> bool:
        """True when the attached policy drives the car."""
        return (self.policy is not None
                and self.control_type is ControlType.AI
                and isinstance(self.controls, PolicyControls))

    # ── tick ──────────────────────────────────────────────────────────────

    def update(self, road_borders: Sequence[Segment],
               traffic: Sequence["Car"]) -> None:
        """Advance one tick against *road_borders* and *traffic* hulls."""
        self.ticks += 1
        hulls = [other.hull for other in traffic if other is not self]
        if not self.damaged:
            self._move(self.controls.snapshot())
            self.hull = self._create_hull()
            if self._assess_damage(road_borders, hulls):
                self.damaged = True
                self.damaged_at_tick = self.ticks
                log.info("%s damaged at (%.1f, %.1f) tick=%d speed=%.2f",
                         self.id, self.x, self.y, self.ticks, self.speed)
        if self.sensors is not None:
            self.sensors.update(road_borders, hulls)
            if self.autonomous:
                outputs = self.policy(self.sensors.activations())
                self.controls.apply_outputs(outputs)

    # ── kinematics ────────────────────────────────────────────────────────

    def _move(self, controls: ControlSnapshot) -> None:
        if controls.forward:
            self.speed += self.acceleration
        if controls.reverse:
            self.speed -= self.acceleration

        if self.speed > self.max_speed:
            self.speed = self.max_speed
        if self.speed < -self.max_reverse_speed:
            self.speed = -self.max_reverse_speed

        if self.speed > 0:
            self.speed = max(0.0, self.speed - self.friction)
        elif self.speed < 0:
            self.speed = min(0.0, self.speed + self.friction)
        # stops the car creeping after a short tap
        if abs(self.speed) < self.friction:
            self.speed = 0.0

        if self.speed != 0:
            flip = 1 if self.speed > 0 else -1
            if controls.left:
                self.angle += self.turn_rate * flip
            if controls.right:
                self.angle -= self.turn_rate * flip

        dx, dy = heading_offset(self.angle, self.speed)
        self.x += dx
        self.y += dy

    def _create_hull(self) -> List[Point]:
        """Corners in order front-right, front-left, rear-left, rear-right."""
        rad = math.hypot(self.width, self.height) / 2
        alpha = math.atan2(self.width, self.height)
        corners = []
        for theta in (
            self.angle - alpha,
            self.angle + alpha,
            math.pi + self.angle - alpha,
            math.pi + self.angle + alpha,
        ):
            dx, dy = heading_offset(theta, rad)
            corners.append(Point(self.x + dx, self.y + dy))
        return corners

    # ── damage ────────────────────────────────────────────────────────────

    def _assess_damage(self, road_borders: Sequence[Segment],
                       hulls: Sequence[Polygon]) -> bool:
        for border in road_borders:
            if polygons_intersect(self.hull, border):
                return True
        for hull in hulls:
            if polygons_intersect(self.hull, hull):
                return True
        return False

    # ── serialisation ─────────────────────────────────────────────────────

    def as_dict(self) -> Dict[str, Any]:
        """Read-only render state."""
        state: Dict[str, Any] = {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "angle": self.angle,
            "speed": self.speed,
            "width": self.width,
            "height": self.height,
            "damaged": self.damaged,
            "hull": [tuple(p) for p in self.hull],
            "color": self.color,
            "control_type": self.control_type.value,
        }
        if self.sensors is not None:
            state.update(self.sensors.as_dict())
            state["activations"] = self.sensors.activations()
        return state

    def __repr__(self) -> str:
        return (f"Car({self.id!r}, x={self.x:.1f}, y={self.y:.1f}, "
                f"angle={self.angle:.3f}, speed={self.speed:.2f}, "
                f"damaged={self.damaged})")
