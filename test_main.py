#!/usr/bin/env python3
"""
Tests for world construction and argument handling in main.py.
"""

import os
import unittest
from unittest import mock

import config
import main
from ml.policy import NeuralNetwork, RulePolicy
from sim.controls import ControlType, ManualControls


class BuildWorldTests(unittest.TestCase):
    def test_keys_mode(self) -> None:
        world = main.build_world("keys")
        self.assertEqual(len(world.cars), 1)
        self.assertIsInstance(world.cars[0].controls, ManualControls)
        self.assertEqual(len(world.traffic), len(config.DEFAULT_TRAFFIC_LAYOUT))

    def test_ai_mode_gets_independent_networks(self) -> None:
        world = main.build_world("ai", cars=3, seed=4)
        self.assertEqual(len(world.cars), 3)
        for car in world.cars:
            self.assertEqual(car.control_type, ControlType.AI)
            self.assertIsInstance(car.policy, NeuralNetwork)
        self.assertIsNot(world.cars[0].policy, world.cars[1].policy)

    def test_rules_mode_with_random_traffic(self) -> None:
        world = main.build_world("RULES", cars=2, traffic=6, seed=2)
        self.assertEqual(len(world.traffic), 6)
        self.assertTrue(all(isinstance(car.policy, RulePolicy) for car in world.cars))

    def test_unknown_mode(self) -> None:
        with self.assertRaises(ValueError):
            main.build_world("autopilot")

    def test_model_mode_without_model(self) -> None:
        with self.assertRaises(FileNotFoundError):
            main.build_world("model", model_path="/nonexistent/policy_model.pkl")

    def test_headless_run(self) -> None:
        world = main.build_world("rules", cars=1)
        main.run_headless(world, 5)
        self.assertEqual(world.tick_count, 5)


class ArgumentTests(unittest.TestCase):
    def test_defaults(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            args = main.parse_args([])
        self.assertEqual(args.mode, config.DEFAULT_MODE)
        self.assertEqual(args.cars, config.DEFAULT_CAR_COUNT)
        self.assertEqual(args.headless_ticks, config.DEFAULT_HEADLESS_TICKS)

    def test_environment_overrides_defaults(self) -> None:
        env = {"LANESIM_MODE": "ai", "LANESIM_CARS": "7"}
        with mock.patch.dict(os.environ, env, clear=True):
            args = main.parse_args([])
        self.assertEqual(args.mode, "ai")
        self.assertEqual(args.cars, 7)

    def test_flags_override_environment(self) -> None:
        with mock.patch.dict(os.environ, {"LANESIM_CARS": "7"}, clear=True):
            args = main.parse_args(["--cars", "2"])
        self.assertEqual(args.cars, 2)

    def test_bad_environment_value_is_ignored(self) -> None:
        with mock.patch.dict(os.environ, {"LANESIM_SEED": "abc"}, clear=True):
            with self.assertLogs("main", level="WARNING"):
                args = main.parse_args([])
        self.assertEqual(args.seed, config.DEFAULT_RANDOM_SEED)

    def test_main_reports_bad_mode(self) -> None:
        with mock.patch.dict(os.environ, {"LANESIM_MODE": "bogus"}, clear=True), \
                mock.patch.object(main, "setup_logging"):
            self.assertEqual(main.main(["--headless-ticks", "1"]), 2)


if __name__ == "__main__":
    unittest.main()
