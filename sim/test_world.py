#!/usr/bin/env python3
"""
Tests for the world tick loop, spawning and reset.
"""

from __future__ import annotations

import unittest

import config
from sim.car import Car
from sim.controls import ControlType, Direction
from sim.road import Road
from sim.tuning import TRAFFIC_TUNING
from sim.world import World


def _road() -> Road:
    return Road(0.0, 300.0, lane_count=3)


def _traffic_car(x: float, y: float, name: str = "traffic") -> Car:
    return Car(name, x, y, ControlType.DUMMY, tuning=TRAFFIC_TUNING)


class TickOrderTests(unittest.TestCase):
    def test_traffic_moves_each_tick(self) -> None:
        traffic = _traffic_car(0.0, -100.0)
        world = World(road=_road(), traffic=[traffic])
        world.tick()
        self.assertAlmostEqual(traffic.y, -100.15)
        self.assertEqual(world.tick_count, 1)

    def test_cars_sense_traffic_after_it_moved(self) -> None:
        traffic = _traffic_car(0.0, -100.0)
        world = World(road=_road(), traffic=[traffic])
        player = world.spawn_cars(1, ControlType.KEYS, lane=1, y=0.0)[0]
        world.tick()
        centre = player.sensors.readings[2]
        self.assertIsNotNone(centre)
        self.assertAlmostEqual(centre.offset * player.sensors.ray_length, 75.15, places=6)

    def test_traffic_never_takes_damage_from_cars(self) -> None:
        traffic = _traffic_car(5.0, -60.0)
        world = World(road=_road(), traffic=[traffic])
        player = world.spawn_cars(1, ControlType.KEYS, lane=1, y=100.0)[0]
        player.controls.press(Direction.FORWARD)
        for _ in range(400):
            world.tick()
            if world.is_finished():
                break
        self.assertTrue(player.damaged)
        self.assertFalse(traffic.damaged)
        self.assertEqual(world.damaged_count, 1)

    def test_controlled_cars_ignore_each_other(self) -> None:
        world = World(road=_road(), traffic=[])
        cars = world.spawn_cars(3, ControlType.KEYS, lane=1, y=0.0)
        for car in cars:
            car.controls.press(Direction.FORWARD)
        world.run(20)
        self.assertEqual(world.damaged_count, 0)
        self.assertEqual(len({round(car.y, 9) for car in cars}), 1)


class SpawnTests(unittest.TestCase):
    def test_spawn_cars_ids_and_lane(self) -> None:
        world = World(road=_road(), traffic=[])
        cars = world.spawn_cars(2, ControlType.AI,
                                policy_factory=lambda idx: (lambda a: [idx, 0, 0, 0]))
        self.assertEqual([car.id for car in cars], ["CAR_000", "CAR_001"])
        for car in cars:
            self.assertAlmostEqual(car.x, world.road.lane_center(config.DEFAULT_START_LANE))
            self.assertEqual(car.y, config.DEFAULT_START_Y)
        self.assertIsNot(cars[0].policy, cars[1].policy)

        more = world.spawn_cars(1, ControlType.KEYS)
        self.assertEqual(more[0].id, "CAR_002")
        self.assertEqual(len(world.cars), 3)

    def test_default_traffic_layout(self) -> None:
        world = World(road=_road())
        self.assertEqual(len(world.traffic), len(config.DEFAULT_TRAFFIC_LAYOUT))
        for car, (lane, y) in zip(world.traffic, config.DEFAULT_TRAFFIC_LAYOUT):
            self.assertEqual(car.control_type, ControlType.DUMMY)
            self.assertAlmostEqual(car.x, world.road.lane_center(lane))
            self.assertEqual(car.y, y)
            self.assertEqual(car.max_speed, TRAFFIC_TUNING.max_speed)

    def test_random_traffic_is_seeded(self) -> None:
        a = World(road=_road(), seed=7)
        b = World(road=_road(), seed=7)
        a.spawn_random_traffic(10)
        b.spawn_random_traffic(10)
        self.assertEqual([(c.x, c.y) for c in a.traffic],
                         [(c.x, c.y) for c in b.traffic])

    def test_random_traffic_respects_gap_and_range(self) -> None:
        world = World(road=_road(), seed=11)
        traffic = world.spawn_random_traffic(12, start_y=100.0, min_ahead=150.0,
                                             max_ahead=2500.0, min_gap=120.0)
        self.assertEqual(len(traffic), 12)
        ys = [car.y for car in traffic]
        self.assertEqual(ys, sorted(ys, reverse=True))
        for car in traffic:
            self.assertLessEqual(car.y, 100.0 - 150.0)
            self.assertGreaterEqual(car.y, 100.0 - 2500.0)
        for i, first in enumerate(traffic):
            for second in traffic[i + 1:]:
                if first.x == second.x:
                    self.assertGreaterEqual(abs(first.y - second.y), 120.0)

    def test_crowded_random_traffic_still_honours_count(self) -> None:
        world = World(road=_road(), seed=1)
        traffic = world.spawn_random_traffic(30, min_ahead=100.0, max_ahead=400.0,
                                             min_gap=200.0)
        self.assertEqual(len(traffic), 30)


class QueryTests(unittest.TestCase):
    def test_leading_car_prefers_alive_cars(self) -> None:
        a = Car("a", 0.0, 50.0)
        b = Car("b", 0.0, 10.0)
        world = World(road=_road(), cars=[a, b], traffic=[])
        self.assertIs(world.leading_car(), b)
        b.damaged = True
        self.assertIs(world.leading_car(), a)
        self.assertFalse(world.is_finished())
        a.damaged = True
        self.assertIs(world.leading_car(), b)
        self.assertTrue(world.is_finished())

    def test_empty_world(self) -> None:
        world = World(road=_road(), traffic=[])
        self.assertIsNone(world.leading_car())
        self.assertFalse(world.is_finished())
        self.assertIsNone(world.as_dict()["leader_id"])

    def test_leader_logged_only_when_it_changes(self) -> None:
        world = World(road=_road(), traffic=[])
        world.spawn_cars(1, ControlType.KEYS)
        with self.assertLogs("world", level="DEBUG") as logs:
            world.run(5)
        leader_lines = [line for line in logs.output if "leader" in line]
        self.assertEqual(len(leader_lines), 1)

    def test_as_dict(self) -> None:
        world = World(road=_road())
        world.spawn_cars(1, ControlType.KEYS)
        world.tick()
        state = world.as_dict()
        self.assertEqual(state["tick"], 1)
        self.assertEqual(state["leader_id"], "CAR_000")
        self.assertEqual(state["alive"], 1)
        self.assertEqual(len(state["traffic"]), len(config.DEFAULT_TRAFFIC_LAYOUT))
        self.assertEqual(len(world.all_cars()), 1 + len(config.DEFAULT_TRAFFIC_LAYOUT))


class ResetTests(unittest.TestCase):
    def test_reset_replays_spawns(self) -> None:
        world = World(road=_road(), seed=3)
        world.spawn_cars(2, ControlType.KEYS, y=100.0)
        world.spawn_random_traffic(5)
        first_traffic = [(c.x, c.y) for c in world.traffic]
        for car in world.cars:
            car.controls.press(Direction.FORWARD)
        world.run(10)

        world.reset()
        self.assertEqual(world.tick_count, 0)
        self.assertEqual([car.id for car in world.cars], ["CAR_000", "CAR_001"])
        for car in world.cars:
            self.assertEqual((car.y, car.speed, car.damaged), (100.0, 0.0, False))
            self.assertFalse(car.controls.forward)
        self.assertEqual([(c.x, c.y) for c in world.traffic], first_traffic)

    def test_reset_keeps_explicit_empty_traffic(self) -> None:
        world = World(road=_road(), traffic=[])
        world.spawn_cars(1, ControlType.KEYS)
        world.run(5)
        world.reset()
        self.assertEqual(world.traffic, [])
        self.assertEqual(len(world.cars), 1)

    def test_reset_rebuilds_constructor_vehicles(self) -> None:
        player = Car("p", 0.0, 0.0)
        traffic = _traffic_car(5.0, -200.0)
        world = World(road=_road(), cars=[player], traffic=[traffic])
        world.spawn_cars(1, ControlType.KEYS, y=100.0)
        player.controls.press(Direction.FORWARD)
        world.run(10)
        self.assertLess(player.y, 0.0)

        world.reset()
        self.assertEqual([car.id for car in world.cars], ["p", "CAR_001"])
        rebuilt = world.cars[0]
        self.assertIsNot(rebuilt, player)
        self.assertEqual((rebuilt.x, rebuilt.y, rebuilt.speed), (0.0, 0.0, 0.0))
        self.assertEqual(rebuilt.control_type, ControlType.KEYS)
        self.assertFalse(rebuilt.controls.forward)
        self.assertEqual([(c.id, c.x, c.y) for c in world.traffic],
                         [("traffic", 5.0, -200.0)])
        self.assertEqual(world.traffic[0].max_speed, TRAFFIC_TUNING.max_speed)

    def test_reset_restores_default_traffic(self) -> None:
        world = World(road=_road())
        world.run(5)
        world.reset()
        self.assertEqual([c.y for c in world.traffic],
                         [y for _, y in config.DEFAULT_TRAFFIC_LAYOUT])


if __name__ == "__main__":
    unittest.main()
