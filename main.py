#!/usr/bin/env python3
"""
main.py
=======
Entry point: build a road world and drive it in a Pygame window, or run
it headless for a fixed number of ticks.

Modes
-----
  python main.py                       -- drive one car with the arrow keys
  python main.py --mode ai --cars 50   -- population of random networks
  python main.py --mode rules          -- rule-based autopilot
  python main.py --mode model --model ml/generated/policy_model.pkl
  python main.py --headless-ticks 500  -- no window, log a summary

Defaults come from :mod:`config` and can be overridden with ``LANESIM_*``
environment variables (``LANESIM_MODE``, ``LANESIM_CARS``,
``LANESIM_TRAFFIC``, ``LANESIM_SEED``, ``LANESIM_MODEL``).
"""

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

import config
from logging_setup import setup_logging
from ml.policy import ModelPolicy, NeuralNetwork, RulePolicy
from sim.controls import ControlType
from sim.world import World

log = logging.getLogger("main")

MODES = ("keys", "ai", "rules", "model")
PROJECT_ROOT = os.path.abspath(os.path.dirname(__file__))


def _env(name: str, default):
    """``LANESIM_<name>`` from the environment, cast to *default*'s type."""
    raw = os.environ.get(f"LANESIM_{name}")
    if raw is None or raw == "":
        return default
    try:
        return type(default)(raw)
    except ValueError:
        log.warning("ignoring LANESIM_%s=%r (expected %s)", name, raw,
                    type(default).__name__)
        return default


def build_world(
    mode: str = config.DEFAULT_MODE,
    cars: int = config.DEFAULT_CAR_COUNT,
    traffic: int = 0,
    seed: int = config.DEFAULT_RANDOM_SEED,
    model_path: Optional[str] = None,
) -> World:
    """Create a world populated for *mode*.

    *traffic* > 0 replaces the default traffic layout with that many
    randomly placed cars.
    """
    mode = mode.lower()
    if mode not in MODES:
        raise ValueError(f"unknown mode {mode!r}; expected one of {MODES}")

    world = World(seed=seed)
    if traffic > 0:
        world.spawn_random_traffic(traffic)

    ray_count = world.sensor_tuning.ray_count
    if mode == "keys":
        world.spawn_cars(1, ControlType.KEYS)
    elif mode == "ai":
        world.spawn_cars(
            cars, ControlType.AI,
            policy_factory=lambda idx: NeuralNetwork.random(ray_count, seed=seed + idx),
        )
    elif mode == "rules":
        rule = RulePolicy()
        world.spawn_cars(cars, ControlType.AI, policy_factory=lambda idx: rule)
    else:
        path = model_path or os.path.join(PROJECT_ROOT, config.MODEL_REL_PATH)
        policy = ModelPolicy.from_path(path)
        world.spawn_cars(cars, ControlType.AI, policy_factory=lambda idx: policy)
    return world


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Multi-lane road driving simulation")
    parser.add_argument("--mode", choices=MODES,
                        default=_env("MODE", config.DEFAULT_MODE))
    parser.add_argument("--cars", type=int,
                        default=_env("CARS", config.DEFAULT_CAR_COUNT),
                        help="controlled cars (ignored in keys mode)")
    parser.add_argument("--traffic", type=int, default=_env("TRAFFIC", 0),
                        help="random traffic cars (0 = default layout)")
    parser.add_argument("--seed", type=int,
                        default=_env("SEED", config.DEFAULT_RANDOM_SEED))
    parser.add_argument("--model", default=_env("MODEL", ""),
                        help="joblib policy model for --mode model")
    parser.add_argument("--headless-ticks", type=int,
                        default=config.DEFAULT_HEADLESS_TICKS,
                        help="run without a window for this many ticks")
    parser.add_argument("--debug", action="store_true", help="DEBUG logging")
    return parser.parse_args(argv)


def run_headless(world: World, ticks: int) -> None:
    log.info("running %d headless ticks", ticks)
    for _ in range(ticks):
        world.tick()
        if world.is_finished():
            log.info("every car damaged after %d ticks", world.tick_count)
            break
    leader = world.leading_car()
    log.info("done: tick=%d alive=%d damaged=%d leader=%r",
             world.tick_count, len(world.alive_cars()), world.damaged_count, leader)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.INFO)
    log.info("starting mode=%s cars=%d traffic=%d seed=%d",
             args.mode, args.cars, args.traffic, args.seed)

    try:
        world = build_world(args.mode, args.cars, args.traffic, args.seed,
                            args.model or None)
    except (ValueError, FileNotFoundError) as exc:
        log.error("cannot build world: %s", exc)
        return 2

    try:
        if args.headless_ticks > 0:
            run_headless(world, args.headless_ticks)
        else:
            from ui.pygame_view import run_pygame_view
            run_pygame_view(world, mode=args.mode)
    except KeyboardInterrupt:
        log.info("Shutting down...")
    return 0


if __name__ == "__main__":
    sys.exit(main())
