"""
Trend library: linear fitting, centered smoothing and additive decomposition.

All routines operate on NumericPoint sequences, are pure (inputs are never
mutated) and deterministic (identical inputs give bit-identical outputs).

Functions:
    - create_linear_model: ordinary least squares y = gradient * x + intercept
    - centered_moving_average: symmetric window smoothing, edges dropped
    - additive_decompose: observed = trend + seasonal + residual

Dependencies:
    - numpy: vectorised sums, convolution and phase grouping
"""

from typing import Dict, Sequence, Tuple

import numpy as np

from summarization.core.exceptions import InsufficientDataError, InvalidInputError
from summarization.models.schemas import Decomposition, LinearModel, NumericPoint


# =============================================================================
# Helpers
# =============================================================================


def _to_arrays(points: Sequence[NumericPoint]) -> Tuple[np.ndarray, np.ndarray]:
    xs = np.array([point.x for point in points], dtype=np.float64)
    ys = np.array([point.y for point in points], dtype=np.float64)

    if not (np.all(np.isfinite(xs)) and np.all(np.isfinite(ys))):
        raise InvalidInputError("Trend input contains NaN or infinite values")

    return xs, ys


def _to_points(xs: np.ndarray, ys: np.ndarray) -> Tuple[NumericPoint, ...]:
    return tuple(NumericPoint(x=float(x), y=float(y)) for x, y in zip(xs, ys))


# =============================================================================
# Linear Model
# =============================================================================


def create_linear_model(points: Sequence[NumericPoint]) -> LinearModel:
    """
    Fit a least-squares line through `points`.

    Uses the centred closed form, which stays accurate when x values are large
    (e.g. day numbers since the epoch):

        gradient  = sum((x - x_mean) * (y - y_mean)) / sum((x - x_mean)^2)
        intercept = y_mean - gradient * x_mean

    Args:
        points: Points to fit. Order does not matter.

    Returns:
        LinearModel with the fitted gradient and intercept.

    Raises:
        InsufficientDataError: Fewer than 2 distinct x values.
        InvalidInputError: NaN or infinite coordinates.

    Example:
        >>> points = [NumericPoint(x=x, y=2 * x + 3) for x in range(5)]
        >>> create_linear_model(points)
        LinearModel(gradient=2.0, intercept=3.0)
    """
    xs, ys = _to_arrays(points)

    if np.unique(xs).size < 2:
        raise InsufficientDataError(
            f"Linear model needs at least 2 distinct x values, got {np.unique(xs).size}"
        )

    x_mean = float(np.mean(xs))
    y_mean = float(np.mean(ys))
    dx = xs - x_mean

    gradient = float(np.sum(dx * (ys - y_mean)) / np.sum(dx * dx))
    intercept = y_mean - gradient * x_mean

    return LinearModel(gradient=gradient, intercept=intercept)


# =============================================================================
# Smoothing and Decomposition
# =============================================================================


def centered_moving_average(
    points: Sequence[NumericPoint],
    window: int,
) -> Tuple[NumericPoint, ...]:
    """
    Smooth `points` with a centred moving average.

    Each output point averages the input point with `window // 2` neighbours on
    each side, so the effective width is `2 * (window // 2) + 1`. Points without
    a full window at either edge are dropped; nothing is extrapolated.

    Args:
        points: Chronologically ordered points.
        window: Nominal window length (>= 1).

    Returns:
        Smoothed points, shorter than the input by `2 * (window // 2)`.
        Empty when the input is shorter than one full window.

    Raises:
        InvalidInputError: Non-positive window or NaN coordinates.
    """
    if window < 1:
        raise InvalidInputError(f"Moving average window must be >= 1, got {window}")

    xs, ys = _to_arrays(points)
    half = window // 2
    width = 2 * half + 1

    if len(ys) < width:
        return ()

    kernel = np.full(width, 1.0 / width)
    smoothed = np.convolve(ys, kernel, mode='valid')

    return _to_points(xs[half:len(xs) - half], smoothed)


def additive_decompose(points: Sequence[NumericPoint], period: int) -> Decomposition:
    """
    Classical additive decomposition observed = trend + seasonal + residual.

    Steps:
        1. trend: centered_moving_average(points, period)
        2. detrend retained points: y - trend
        3. seasonal: mean detrended value per phase (round(x) mod period),
           broadcast back to every input point of that phase (0.0 for phases
           with no retained point)
        4. residual: y - trend - seasonal on retained points

    Args:
        points: Chronologically ordered points, x in whole-period units (days).
        period: Seasonal cycle length, e.g. 7 for weekly seasonality.

    Returns:
        Decomposition; trend and residual cover the retained points only.

    Raises:
        InvalidInputError: Non-positive period or NaN coordinates.
        InsufficientDataError: Fewer points than one full window.
    """
    if period < 1:
        raise InvalidInputError(f"Decomposition period must be >= 1, got {period}")

    trend = centered_moving_average(points, period)
    if not trend:
        raise InsufficientDataError(
            f"Decomposition with period {period} needs at least "
            f"{2 * (period // 2) + 1} points, got {len(points)}"
        )

    xs, ys = _to_arrays(points)
    half = period // 2
    retained = slice(half, len(xs) - half)

    phases = np.rint(xs).astype(np.int64) % period
    trend_values = np.array([point.y for point in trend], dtype=np.float64)
    detrended = ys[retained] - trend_values
    retained_phases = phases[retained]

    seasonal_by_phase: Dict[int, float] = {}
    for phase in np.unique(retained_phases):
        seasonal_by_phase[int(phase)] = float(np.mean(detrended[retained_phases == phase]))

    seasonal_values = np.array(
        [seasonal_by_phase.get(int(phase), 0.0) for phase in phases],
        dtype=np.float64,
    )
    residual_values = ys[retained] - trend_values - seasonal_values[retained]

    return Decomposition(
        trend=trend,
        seasonal=_to_points(xs, seasonal_values),
        residual=_to_points(xs[retained], residual_values),
    )
