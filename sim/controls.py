#!/usr/bin/env python3
"""
sim/controls.py
===============
Control sources feeding the four driving signals of a car.

A car reads one immutable :class:`ControlSnapshot` per tick.  Where the
signals come from is up to the source:

* :class:`ManualControls`   – press / release events from an input device,
  delivered through an :class:`InputQueue` between ticks;
* :class:`ConstantForwardControls` – always accelerating (traffic);
* :class:`PolicyControls`   – overwritten by a policy's output every tick.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Sequence, Tuple

log = logging.getLogger("controls")

POLICY_THRESHOLD: float = 0.5
"""Policy outputs at or above this value switch a signal on."""


class Direction(Enum):
    """Logical input directions."""
    FORWARD = "forward"
    LEFT = "left"
    RIGHT = "right"
    REVERSE = "reverse"


class ControlType(Enum):
    """Who drives the car."""
    KEYS = "KEYS"
    DUMMY = "DUMMY"
    AI = "AI"


@dataclass(frozen=True)
class ControlSnapshot:
    """The four signals as seen by one tick of the kinematics."""
    forward: bool = False
    left: bool = False
    right: bool = False
    reverse: bool = False


class Controls:
    """Base control source holding the four mutable signals."""

    control_type: ControlType = ControlType.KEYS

    def __init__(self) -> None:
        self.forward = False
        self.left = False
        self.right = False
        self.reverse = False

    def snapshot(self) -> ControlSnapshot:
        return ControlSnapshot(
            forward=self.forward,
            left=self.left,
            right=self.right,
            reverse=self.reverse,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.snapshot()!r})"


class ManualControls(Controls):
    """Signals toggled by discrete press / release events.

    Holding a key produces repeated press events; they are idempotent
    because each event sets the signal rather than toggling it.
    """

    control_type = ControlType.KEYS

    def press(self, direction: Direction) -> None:
        setattr(self, direction.value, True)

    def release(self, direction: Direction) -> None:
        setattr(self, direction.value, False)

    def release_all(self) -> None:
        for direction in Direction:
            self.release(direction)


class ConstantForwardControls(Controls):
    """Forward held forever; used for uniform traffic."""

    control_type = ControlType.DUMMY

    def __init__(self) -> None:
        super().__init__()
        self.forward = True


class PolicyControls(Controls):
    """Signals overwritten from a policy's ``[forward, left, right, reverse]``."""

    control_type = ControlType.AI

    def apply_outputs(self, outputs: Sequence[float]) -> None:
        values = list(outputs)
        if len(values) != 4:
            raise ValueError(
                f"policy must return 4 outputs [forward, left, right, reverse], "
                f"got {len(values)}"
            )
        self.forward, self.left, self.right, self.reverse = (
            float(v) >= POLICY_THRESHOLD for v in values
        )


def make_controls(control_type: ControlType) -> Controls:
    """Build the control source matching *control_type*."""
    if control_type is ControlType.KEYS:
        return ManualControls()
    if control_type is ControlType.DUMMY:
        return ConstantForwardControls()
    if control_type is ControlType.AI:
        return PolicyControls()
    raise ValueError(f"unknown control type: {control_type!r}")


# ── input event queue ─────────────────────────────────────────────────────────

class InputQueue:
    """Thread-safe FIFO of press / release events from an input device.

    The device side calls :meth:`push` whenever a key changes state; the
    simulation calls :meth:`drain_into` once between ticks, so a tick never
    observes a change half-way through.
    """

    def __init__(self) -> None:
        self._events: Deque[Tuple[Direction, bool]] = deque()
        self._lock = threading.Lock()

    def push(self, direction: Direction, pressed: bool) -> None:
        with self._lock:
            self._events.append((direction, bool(pressed)))

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def drain_into(self, controls: ManualControls) -> int:
        """Apply every pending event to *controls*; return how many."""
        with self._lock:
            events = list(self._events)
            self._events.clear()
        for direction, pressed in events:
            if pressed:
                controls.press(direction)
            else:
                controls.release(direction)
        if events:
            log.debug("applied %d input events -> %r", len(events), controls.snapshot())
        return len(events)
