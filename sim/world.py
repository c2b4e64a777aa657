#!/usr/bin/env python3
"""
sim/world.py
============
Road world and its per-tick physics loop.

The world owns one :class:`~sim.road.Road`, a list of controlled cars and
a list of traffic cars.  One :meth:`World.tick` advances every vehicle in
a fixed order so runs are reproducible:

1. traffic moves, checked against the road borders only;
2. each controlled car moves, takes damage and senses against the
   borders and the (already moved) traffic.

Controlled cars never see each other; a population of autonomous cars can
share one road without interfering.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Type

import config
from sim.car import Car, Policy
from sim.controls import Controls, ControlType
from sim.road import Road
from sim.tuning import TRAFFIC_TUNING, SensorTuning, VehicleTuning

log = logging.getLogger("world")

PolicyFactory = Callable[[int], Optional[Policy]]
StartArgs = Tuple[Dict[str, Any], Type[Controls]]


class World:
    """Road, controlled cars and traffic advanced in lock-step.

    Parameters
    ----------
    road : Road or None
        Uses a three-lane road sized for the default window when *None*.
    cars : list of Car or None
        Controlled cars (player, autonomous population).
    traffic : list of Car or None
        Traffic cars; :meth:`default_traffic` when *None*.
    seed : int or None
        Seed for random traffic placement.
    tuning, traffic_tuning : VehicleTuning or None
        Dynamics for spawned controlled / traffic cars.
    sensor_tuning : SensorTuning or None
        Ray fan for spawned controlled cars.
    """

    def __init__(
        self,
        road: Optional[Road] = None,
        cars: Optional[List[Car]] = None,
        traffic: Optional[List[Car]] = None,
        seed: Optional[int] = None,
        tuning: Optional[VehicleTuning] = None,
        traffic_tuning: Optional[VehicleTuning] = None,
        sensor_tuning: Optional[SensorTuning] = None,
    ) -> None:
        self.road = road or Road(
            config.WINDOW_WIDTH / 2,
            config.WINDOW_WIDTH * config.ROAD_WIDTH_RATIO,
            lane_count=config.DEFAULT_LANE_COUNT,
        )
        self.tuning = tuning or VehicleTuning()
        self.traffic_tuning = traffic_tuning or TRAFFIC_TUNING
        self.sensor_tuning = sensor_tuning or SensorTuning()
        self.seed = seed
        self._rng = random.Random(seed)

        self.cars: List[Car] = list(cars) if cars is not None else []
        self.traffic: List[Car] = (
            list(traffic) if traffic is not None else self.default_traffic()
        )
        # start state of explicitly supplied vehicles, rebuilt by reset()
        self._initial_cars = [self._start_args(car) for car in self.cars]
        self._initial_traffic: Optional[List[StartArgs]] = (
            None if traffic is None else [self._start_args(car) for car in self.traffic]
        )
        self._leader_id: Optional[str] = None
        self.tick_count = 0
        self._damaged_logged = 0
        self._spawn_log: List[Tuple[Any, ...]] = []
        self._random_traffic: Optional[Tuple[Any, ...]] = None

    # ── spawning ──────────────────────────────────────────────────────────

    def spawn_cars(
        self,
        count: int,
        control_type: ControlType = ControlType.AI,
        policy_factory: Optional[PolicyFactory] = None,
        lane: int = config.DEFAULT_START_LANE,
        y: float = config.DEFAULT_START_Y,
    ) -> List[Car]:
        """Add *count* identical cars side by side on the start line.

        ``policy_factory(idx)`` builds each car's policy, so a population
        can carry independent policies.
        """
        self._spawn_log.append((count, control_type, policy_factory, lane, y))
        spawned = []
        start = len(self.cars)
        for idx in range(start, start + max(0, int(count))):
            policy = policy_factory(idx) if policy_factory else None
            spawned.append(Car(
                car_id=f"CAR_{idx:03d}",
                x=self.road.lane_center(lane),
                y=y,
                control_type=control_type,
                tuning=self.tuning,
                sensor_tuning=self.sensor_tuning,
                policy=policy,
                color_index=idx,
            ))
        self.cars.extend(spawned)
        log.info("spawned %d %s cars in lane %d", len(spawned), control_type.value, lane)
        return spawned

    def _make_traffic_car(self, idx: int, lane: int, y: float) -> Car:
        return Car(
            car_id=f"TRAFFIC_{idx:03d}",
            x=self.road.lane_center(lane),
            y=y,
            control_type=ControlType.DUMMY,
            tuning=self.traffic_tuning,
            color_index=idx + 1,
        )

    def default_traffic(
        self,
        layout: Sequence[Tuple[int, float]] = config.DEFAULT_TRAFFIC_LAYOUT,
    ) -> List[Car]:
        """Traffic cars at fixed ``(lane, y)`` slots."""
        return [self._make_traffic_car(idx, lane, y)
                for idx, (lane, y) in enumerate(layout)]

    def spawn_random_traffic(
        self,
        count: int,
        start_y: float = config.DEFAULT_START_Y,
        min_ahead: float = config.TRAFFIC_SPAWN_MIN_AHEAD,
        max_ahead: float = config.TRAFFIC_SPAWN_MAX_AHEAD,
        min_gap: float = config.TRAFFIC_SPAWN_MIN_GAP,
    ) -> List[Car]:
        """Replace the traffic with *count* cars at random lanes ahead.

        Placements closer than *min_gap* (same lane) to an existing car are
        retried; after too many attempts the remaining cars fall back to a
        deterministic staircase so *count* is always honoured.
        """
        self._random_traffic = (count, start_y, min_ahead, max_ahead, min_gap)
        slots: List[Tuple[int, float]] = []
        for idx in range(max(0, int(count))):
            slot: Optional[Tuple[int, float]] = None
            for _ in range(config.TRAFFIC_SPAWN_MAX_ATTEMPTS):
                lane = self._rng.randrange(self.road.lane_count)
                y = start_y - self._rng.uniform(min_ahead, max_ahead)
                if self._slot_is_clear(slots, lane, y, min_gap):
                    slot = (lane, y)
                    break
            if slot is None:
                slot = (idx % self.road.lane_count,
                        start_y - max_ahead - min_gap * (idx + 1))
                log.debug("traffic spawn fallback idx=%d slot=%s", idx, slot)
            slots.append(slot)

        slots.sort(key=lambda s: -s[1])
        self.traffic = [self._make_traffic_car(idx, lane, y)
                        for idx, (lane, y) in enumerate(slots)]
        log.info("spawned %d random traffic cars (seed=%s)", len(self.traffic), self.seed)
        return self.traffic

    @staticmethod
    def _slot_is_clear(slots: Sequence[Tuple[int, float]], lane: int,
                       y: float, min_gap: float) -> bool:
        for other_lane, other_y in slots:
            if other_lane == lane and abs(other_y - y) < min_gap:
                return False
        return True

    @staticmethod
    def _start_args(car: Car) -> StartArgs:
        kwargs = {
            "car_id": car.id,
            "x": car.x,
            "y": car.y,
            "control_type": car.control_type,
            "tuning": car.tuning,
            "sensor_tuning": car.sensor_tuning,
            "policy": car.policy,
            "color_index": car.color_index,
        }
        return kwargs, type(car.controls)

    @staticmethod
    def _rebuild(args: StartArgs) -> Car:
        kwargs, controls_cls = args
        return Car(controls=controls_cls(), **kwargs)

    # ── physics tick ──────────────────────────────────────────────────────

    def tick(self) -> None:
        """Advance every vehicle by one tick."""
        borders = self.road.borders
        for car in self.traffic:
            car.update(borders, [])
        for car in self.cars:
            car.update(borders, self.traffic)
        self.tick_count += 1

        damaged = self.damaged_count
        if damaged != self._damaged_logged:
            log.info("tick=%d damaged %d/%d", self.tick_count, damaged, len(self.cars))
            self._damaged_logged = damaged
        leader = self.leading_car()
        leader_id = leader.id if leader else None
        if leader_id != self._leader_id:
            log.debug("tick=%d leader %s -> %s", self.tick_count, self._leader_id, leader_id)
            self._leader_id = leader_id

    def run(self, ticks: int) -> None:
        for _ in range(max(0, int(ticks))):
            self.tick()

    # ── queries ───────────────────────────────────────────────────────────

    def all_cars(self) -> List[Car]:
        return list(self.cars) + list(self.traffic)

    def alive_cars(self) -> List[Car]:
        return [car for car in self.cars if not car.damaged]

    @property
    def damaged_count(self) -> int:
        return sum(1 for car in self.cars if car.damaged)

    def is_finished(self) -> bool:
        """True once every controlled car is damaged."""
        return bool(self.cars) and not self.alive_cars()

    def leading_car(self) -> Optional[Car]:
        """Alive car furthest up the road; any car once all are damaged."""
        candidates = self.alive_cars() or self.cars
        if not candidates:
            return None
        return min(candidates, key=lambda car: car.y)

    def reset(self) -> None:
        """Restart the scenario from scratch.

        Cars and traffic handed to the constructor are rebuilt at their
        starting positions, then every spawn call is replayed.  Random
        traffic is drawn again from the reseeded generator.
        """
        self._rng = random.Random(self.seed)
        spawn_log, self._spawn_log = self._spawn_log, []
        self.cars = [self._rebuild(args) for args in self._initial_cars]
        for count, control_type, policy_factory, lane, y in spawn_log:
            self.spawn_cars(count, control_type, policy_factory, lane=lane, y=y)
        if self._random_traffic is not None:
            self.spawn_random_traffic(*self._random_traffic)
        elif self._initial_traffic is not None:
            self.traffic = [self._rebuild(args) for args in self._initial_traffic]
        else:
            self.traffic = self.default_traffic()
        self.tick_count = 0
        self._damaged_logged = 0
        self._leader_id = None
        log.info("world reset (%d cars, %d traffic)", len(self.cars), len(self.traffic))

    def as_dict(self) -> Dict[str, Any]:
        """Read-only snapshot for the renderer and HUD."""
        leader = self.leading_car()
        return {
            "tick": self.tick_count,
            "road": self.road.as_dict(),
            "cars": [car.as_dict() for car in self.cars],
            "traffic": [car.as_dict() for car in self.traffic],
            "leader_id": leader.id if leader else None,
            "alive": len(self.alive_cars()),
            "damaged": self.damaged_count,
        }
