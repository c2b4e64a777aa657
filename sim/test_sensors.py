#!/usr/bin/env python3
"""
Tests for the ray-fan sensor: ray layout and nearest-hit readings.
"""

from __future__ import annotations

import math
import unittest
from types import SimpleNamespace

from sim.geometry import Point
from sim.sensors import Sensors
from sim.tuning import SensorTuning


def _owner(x: float = 0.0, y: float = 0.0, angle: float = 0.0) -> SimpleNamespace:
    return SimpleNamespace(x=x, y=y, angle=angle)


def _wall(y: float) -> tuple:
    """Horizontal segment across the straight-ahead ray at height *y*."""
    return (Point(-50.0, y), Point(50.0, y))


class SensorReadingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.sensors = Sensors(_owner(), SensorTuning(ray_count=1, ray_length=100.0))

    def test_single_ray_points_along_heading(self) -> None:
        self.sensors.update([], [])
        start, end = self.sensors.rays[0]
        self.assertEqual(start, Point(0.0, 0.0))
        self.assertAlmostEqual(end.x, 0.0)
        self.assertAlmostEqual(end.y, -100.0)

    def test_rays_follow_the_owner_heading(self) -> None:
        sensors = Sensors(_owner(angle=math.pi / 2), SensorTuning(ray_count=1, ray_length=100.0))
        sensors.update([], [])
        _, end = sensors.rays[0]
        self.assertAlmostEqual(end.x, -100.0)
        self.assertAlmostEqual(end.y, 0.0)

    def test_clear_ray_reads_none(self) -> None:
        self.sensors.update([], [])
        self.assertEqual(self.sensors.readings, [None])
        self.assertEqual(self.sensors.activations(), [0.0])
        self.assertEqual(self.sensors.distances(), [None])

    def test_offset_is_distance_over_ray_length(self) -> None:
        self.sensors.update([_wall(-30.0)], [])
        reading = self.sensors.readings[0]
        self.assertAlmostEqual(reading.offset, 0.3)
        self.assertAlmostEqual(self.sensors.activations()[0], 0.7)
        self.assertAlmostEqual(self.sensors.distances()[0], 30.0)

    def test_nearest_obstacle_wins(self) -> None:
        self.sensors.update([_wall(-70.0), _wall(-30.0)], [])
        self.assertAlmostEqual(self.sensors.readings[0].offset, 0.3)
        self.sensors.update([_wall(-30.0), _wall(-70.0)], [])
        self.assertAlmostEqual(self.sensors.readings[0].offset, 0.3)

    def test_nearest_across_borders_and_hulls(self) -> None:
        hull = [Point(-10, -80), Point(10, -80), Point(10, -70), Point(-10, -70)]
        self.sensors.update([], [hull])
        self.assertAlmostEqual(self.sensors.readings[0].offset, 0.7)
        self.sensors.update([_wall(-30.0)], [hull])
        self.assertAlmostEqual(self.sensors.readings[0].offset, 0.3)

    def test_obstacle_beyond_range_is_ignored(self) -> None:
        self.sensors.update([_wall(-120.0)], [])
        self.assertEqual(self.sensors.readings, [None])

    def test_update_replaces_previous_readings(self) -> None:
        self.sensors.update([_wall(-30.0)], [])
        self.sensors.update([], [])
        self.assertEqual(self.sensors.readings, [None])


class SensorFanTests(unittest.TestCase):
    def test_readings_match_ray_count(self) -> None:
        sensors = Sensors(_owner())
        sensors.update([_wall(-40.0)], [])
        self.assertEqual(len(sensors.rays), 5)
        self.assertEqual(len(sensors.readings), 5)
        self.assertEqual(len(sensors.activations()), 5)

    def test_first_ray_points_left(self) -> None:
        sensors = Sensors(_owner(), SensorTuning(ray_count=3, ray_length=100.0))
        sensors.update([], [])
        self.assertLess(sensors.rays[0][1].x, 0.0)
        self.assertAlmostEqual(sensors.rays[1][1].x, 0.0)
        self.assertGreater(sensors.rays[2][1].x, 0.0)

    def test_edge_rays_span_the_spread(self) -> None:
        sensors = Sensors(_owner(), SensorTuning(ray_count=3, ray_length=100.0,
                                                 ray_spread=math.pi / 2))
        sensors.update([], [])
        _, left_end = sensors.rays[0]
        self.assertAlmostEqual(left_end.x, -100.0 * math.sin(math.pi / 4))
        self.assertAlmostEqual(left_end.y, -100.0 * math.cos(math.pi / 4))

    def test_invalid_tuning_fails_fast(self) -> None:
        with self.assertRaises(ValueError):
            Sensors(_owner(), SensorTuning(ray_count=0))
        with self.assertRaises(ValueError):
            Sensors(_owner(), SensorTuning(ray_length=0.0))

    def test_as_dict(self) -> None:
        sensors = Sensors(_owner(), SensorTuning(ray_count=1, ray_length=100.0))
        sensors.update([_wall(-30.0)], [])
        data = sensors.as_dict()
        self.assertEqual(data["ray_length"], 100.0)
        self.assertEqual(len(data["rays"]), 1)
        x, y, offset = data["readings"][0]
        self.assertAlmostEqual(y, -30.0)
        self.assertAlmostEqual(offset, 0.3)


if __name__ == "__main__":
    unittest.main()
