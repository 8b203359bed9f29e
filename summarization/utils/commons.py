"""
Point normalisation helpers.

Both helpers are pure: they return new NumericPoint tuples and never mutate
their input. A constant coordinate (zero range) maps to 0.0 instead of
dividing by zero.
"""

from typing import Sequence, Tuple

import numpy as np

from summarization.models.schemas import NumericPoint


def _rescale(values: np.ndarray) -> np.ndarray:
    if values.size == 0:
        return values
    low = float(np.min(values))
    span = float(np.max(values)) - low
    if span <= 0:
        return np.zeros_like(values)
    return (values - low) / span


def normalize_points(points: Sequence[NumericPoint]) -> Tuple[NumericPoint, ...]:
    """Linearly rescale both x and y of `points` to [0, 1]."""
    xs = _rescale(np.array([point.x for point in points], dtype=np.float64))
    ys = _rescale(np.array([point.y for point in points], dtype=np.float64))
    return tuple(NumericPoint(x=float(x), y=float(y)) for x, y in zip(xs, ys))


def normalize_points_y(points: Sequence[NumericPoint]) -> Tuple[NumericPoint, ...]:
    """Linearly rescale y of `points` to [0, 1], keeping x unchanged."""
    ys = _rescale(np.array([point.y for point in points], dtype=np.float64))
    return tuple(NumericPoint(x=point.x, y=float(y)) for point, y in zip(points, ys))
