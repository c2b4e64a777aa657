#!/usr/bin/env python3
"""
Headless demo: runs a scripted world without a window so you can watch the
simulation in the log.

A rule-driven car and a random-network car share the road with the
default traffic; every ``--every`` ticks their state is logged.

Usage:
    python3 demo.py --ticks 600 --every 60
"""

import argparse
import logging

from logging_setup import setup_logging
from ml.policy import NeuralNetwork, RulePolicy
from sim.controls import ControlType
from sim.world import World

log = logging.getLogger("demo")


def build_demo_world(seed: int = 0) -> World:
    world = World(seed=seed)
    ray_count = world.sensor_tuning.ray_count
    world.spawn_cars(1, ControlType.AI, policy_factory=lambda idx: RulePolicy())
    world.spawn_cars(
        1, ControlType.AI,
        policy_factory=lambda idx: NeuralNetwork.random(ray_count, seed=seed + idx),
    )
    return world


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--ticks", type=int, default=600)
    parser.add_argument("--every", type=int, default=60)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    setup_logging(logging.INFO)
    world = build_demo_world(args.seed)

    for _ in range(args.ticks):
        world.tick()
        if world.tick_count % max(1, args.every) == 0:
            for car in world.cars:
                log.info("tick=%4d %s y=%8.1f x=%6.1f speed=%5.2f damaged=%s",
                         world.tick_count, car.id, car.y, car.x,
                         car.speed, car.damaged)
        if world.is_finished():
            break

    log.info("demo finished after %d ticks: %d alive, %d damaged",
             world.tick_count, len(world.alive_cars()), world.damaged_count)


if __name__ == "__main__":
    main()
