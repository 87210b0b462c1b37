from __future__ import annotations

from dataclasses import dataclass
from math import exp
from typing import List

import numpy as np

Lightness = float

MIN_COUNT = 3
MAX_COUNT = 15

SIGMOID_DOMAIN = (-6.0, 6.0)
LIGHTNESS_FLOOR = 0.05
LIGHTNESS_SPAN = 0.9  # floor + span = 0.95
LIGHTNESS_CEILING = 0.98

CHROMA_PEAK = 0.5  # fixed; the UI no longer exposes it
MOUNTAIN_SIGMA = 0.3


def sigmoid(x: float, steepness: float = 1.0) -> float:
    z = steepness * x
    if z >= 0.0:
        return 1.0 / (1.0 + exp(-z))
    # exp(-z) overflows for very negative z
    e = exp(z)
    return e / (1.0 + e)


def mountain_curve(x: float, peak: float = CHROMA_PEAK, height: float = 1.0) -> float:
    """Unnormalised Gaussian bump, equal to `height` at `peak`."""
    return height * exp(-((x - peak) ** 2) / (2.0 * MOUNTAIN_SIGMA**2))


def clamp_count(count: int) -> int:
    return max(MIN_COUNT, min(int(count), MAX_COUNT))


def _lightness_at(x: float, steepness: float) -> Lightness:
    return LIGHTNESS_FLOOR + sigmoid(x, steepness) * LIGHTNESS_SPAN


def lightness_ramp(n: int, steepness: float = 1.0) -> List[Lightness]:
    """
    n lightness values from the sigmoid over [-6, 6], without the count clamp.
    n == 1 yields the single value at the left end of the domain.
    """
    if n < 1:
        raise ValueError("n must be ≥ 1")
    lo, hi = SIGMOID_DOMAIN
    step = (hi - lo) / (n - 1) if n > 1 else 0.0
    return [min(_lightness_at(lo + step * i, steepness), LIGHTNESS_CEILING) for i in range(n)]


def generate_lightness_values(count: int, steepness: float = 1.0) -> List[Lightness]:
    """
    Sigmoid-distributed lightness values in [0.05, 0.98].
    `count` is clamped to [3, 15] first, so asking for 1 still gives 3.
    """
    return lightness_ramp(clamp_count(count), steepness)


def chroma_multiplier(position: float, chroma_height: float) -> float:
    """
    Blend between a flat profile (1.0 everywhere) and the full mountain.
    chroma_height is used as given; values outside [0, 1] overshoot.
    """
    if chroma_height == 0:
        return 1.0
    bump = mountain_curve(position, CHROMA_PEAK, 1.0)
    return (1.0 - chroma_height) * 1.0 + chroma_height * bump


@dataclass(frozen=True)
class CurveSeries:
    positions: np.ndarray
    lightness: np.ndarray
    chroma: np.ndarray

    def to_dict(self) -> dict[str, list[float]]:
        return {
            "positions": self.positions.tolist(),
            "lightness": self.lightness.tolist(),
            "chroma": self.chroma.tolist(),
        }


def curve_series(
    steepness: float, chroma_height: float, *, points: int = 100
) -> CurveSeries:
    """
    Lightness and chroma-multiplier curves sampled at points+1 positions in
    [0, 1] for the parameter chart. The lightness curve is not capped at 0.98.
    """
    if points < 1:
        raise ValueError("points must be ≥ 1")
    t = np.linspace(0.0, 1.0, points + 1)
    lo, hi = SIGMOID_DOMAIN
    x = lo + (hi - lo) * t
    lightness = LIGHTNESS_FLOOR + LIGHTNESS_SPAN / (1.0 + np.exp(-steepness * x))
    if chroma_height == 0:
        chroma = np.ones_like(t)
    else:
        bump = np.exp(-((t - CHROMA_PEAK) ** 2) / (2.0 * MOUNTAIN_SIGMA**2))
        chroma = (1.0 - chroma_height) + chroma_height * bump
    return CurveSeries(positions=t, lightness=lightness, chroma=chroma)


__all__ = [
    "CurveSeries",
    "chroma_multiplier",
    "clamp_count",
    "curve_series",
    "generate_lightness_values",
    "lightness_ramp",
    "mountain_curve",
    "sigmoid",
]
