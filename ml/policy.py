"""
ml/policy.py
============
Driving policies: callables mapping sensor activations to controls.

Every policy takes the activation vector produced by
:meth:`sim.sensors.Sensors.activations` (one value per ray, 0 = clear,
1 = touching) and returns four values positionally mapped to
``[forward, left, right, reverse]``.  The simulation thresholds them, so
binary and continuous outputs both work.

Implementations
---------------
NeuralNetwork
    Dense feed-forward network with a binary step activation.
RulePolicy
    Hand-written steering rule; useful as a baseline and in demos.
ModelPolicy
    Any fitted estimator with ``predict`` loaded through ``joblib``.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Protocol, Sequence

import joblib
import numpy as np

log = logging.getLogger("policy")

OUTPUT_NAMES = ("forward", "left", "right", "reverse")
HIDDEN_NEURONS = 6


class Policy(Protocol):
    """Capability interface: activations in, four control values out."""

    def __call__(self, activations: Sequence[float]) -> Sequence[float]:
        ...


# ── Feed-forward network ──────────────────────────────────────────────────────

class Level:
    """One fully connected layer: ``outputs[j] = w[:, j] · x > bias[j]``."""

    def __init__(self, weights: np.ndarray, biases: np.ndarray) -> None:
        weights = np.asarray(weights, dtype=float)
        biases = np.asarray(biases, dtype=float)
        if weights.ndim != 2 or weights.shape[1] != biases.shape[0]:
            raise ValueError(
                f"weights {weights.shape} do not match biases {biases.shape}"
            )
        self.weights = weights
        self.biases = biases

    @property
    def input_count(self) -> int:
        return self.weights.shape[0]

    @property
    def output_count(self) -> int:
        return self.weights.shape[1]

    @classmethod
    def random(cls, input_count: int, output_count: int,
               rng: np.random.Generator) -> "Level":
        """Weights and biases drawn uniformly from ``[-1, 1]``."""
        return cls(
            weights=rng.uniform(-1.0, 1.0, size=(input_count, output_count)),
            biases=rng.uniform(-1.0, 1.0, size=output_count),
        )

    def feed_forward(self, inputs: np.ndarray) -> np.ndarray:
        return (inputs @ self.weights > self.biases).astype(float)


class NeuralNetwork:
    """Stack of :class:`Level` objects, ``[ray_count, 6, 4]`` by default.

    Parameters
    ----------
    levels : list of Level
        Consecutive layers; each one's output count must match the next
        one's input count and the last must have four outputs.
    """

    def __init__(self, levels: Sequence[Level]) -> None:
        levels = list(levels)
        if not levels:
            raise ValueError("a network needs at least one level")
        for prev, nxt in zip(levels, levels[1:]):
            if prev.output_count != nxt.input_count:
                raise ValueError(
                    f"level sizes do not chain: {prev.output_count} -> {nxt.input_count}"
                )
        if levels[-1].output_count != len(OUTPUT_NAMES):
            raise ValueError(
                f"last level must have {len(OUTPUT_NAMES)} outputs, "
                f"got {levels[-1].output_count}"
            )
        self.levels = levels

    @classmethod
    def random(cls, ray_count: int, hidden: Sequence[int] = (HIDDEN_NEURONS,),
               seed: Optional[int] = None) -> "NeuralNetwork":
        """Randomly initialised network for *ray_count* inputs."""
        sizes = [int(ray_count), *[int(h) for h in hidden], len(OUTPUT_NAMES)]
        if any(size < 1 for size in sizes):
            raise ValueError(f"layer sizes must be positive, got {sizes}")
        rng = np.random.default_rng(seed)
        return cls([Level.random(a, b, rng) for a, b in zip(sizes, sizes[1:])])

    @property
    def input_count(self) -> int:
        return self.levels[0].input_count

    @property
    def layer_sizes(self) -> List[int]:
        return [self.input_count] + [level.output_count for level in self.levels]

    def feed_forward(self, activations: Sequence[float]) -> List[float]:
        outputs = np.asarray(activations, dtype=float)
        if outputs.shape != (self.input_count,):
            raise ValueError(
                f"expected {self.input_count} activations, got {outputs.shape[0]}"
            )
        for level in self.levels:
            outputs = level.feed_forward(outputs)
        return outputs.tolist()

    __call__ = feed_forward

    def __repr__(self) -> str:
        return f"NeuralNetwork({self.layer_sizes})"


# ── Rule-based baseline ───────────────────────────────────────────────────────

class RulePolicy:
    """Drive forward, steer away from the closer side, brake when boxed in.

    Parameters
    ----------
    steer_margin : float
        Minimum activation difference between the two halves of the fan
        before steering.
    brake_at : float
        Centre-ray activation at or above which the car stops accelerating
        and reverses.
    """

    def __init__(self, steer_margin: float = 0.05, brake_at: float = 0.8) -> None:
        self.steer_margin = steer_margin
        self.brake_at = brake_at

    def __call__(self, activations: Sequence[float]) -> List[float]:
        values = [float(a) for a in activations]
        n = len(values)
        if n == 0:
            return [1.0, 0.0, 0.0, 0.0]
        # ray 0 points left of the heading, ray n-1 right
        half = n // 2
        left_threat = max(values[:half], default=0.0)
        right_threat = max(values[n - half:], default=0.0)
        centre = values[half] if n % 2 else max(values[half - 1], values[half])

        brake = centre >= self.brake_at
        steer_left = right_threat - left_threat > self.steer_margin
        steer_right = left_threat - right_threat > self.steer_margin
        return [
            0.0 if brake else 1.0,
            1.0 if steer_left else 0.0,
            1.0 if steer_right else 0.0,
            1.0 if brake else 0.0,
        ]

    def __repr__(self) -> str:
        return f"RulePolicy(steer_margin={self.steer_margin}, brake_at={self.brake_at})"


# ── Fitted estimator ──────────────────────────────────────────────────────────

_MODEL_CACHE: Dict[str, Any] = {}


def get_model(model_path: str) -> Any:
    """Load (and cache) the estimator stored at *model_path*."""
    key = os.path.abspath(model_path)
    if key not in _MODEL_CACHE:
        if not os.path.exists(key):
            raise FileNotFoundError(f"policy model not found: {model_path}")
        _MODEL_CACHE[key] = joblib.load(key)
        log.info("loaded policy model %s", model_path)
    return _MODEL_CACHE[key]


class ModelPolicy:
    """Policy backed by an estimator predicting four outputs per sample.

    Parameters
    ----------
    model : Any
        Fitted estimator exposing ``predict(X) -> (n_samples, 4)``.
        Use :meth:`from_path` to load one saved with ``joblib.dump``.
    """

    def __init__(self, model: Any) -> None:
        if not hasattr(model, "predict"):
            raise TypeError(f"{type(model).__name__} has no predict()")
        self.model = model

    @classmethod
    def from_path(cls, model_path: str) -> "ModelPolicy":
        return cls(get_model(model_path))

    def __call__(self, activations: Sequence[float]) -> List[float]:
        features = np.asarray(activations, dtype=float).reshape(1, -1)
        prediction = np.asarray(self.model.predict(features), dtype=float).reshape(-1)
        return prediction.tolist()

    def __repr__(self) -> str:
        return f"ModelPolicy({type(self.model).__name__})"
