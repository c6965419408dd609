"""
Domain Service - Base Forecasters

Three independent next-period estimators over a daily quantity series:
exponential smoothing, ordinary least squares regression and a trailing
moving average. They only look at index order, never at calendar dates.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

MOVING_AVERAGE_WINDOW = 14


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties going towards +infinity."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True, slots=True)
class RegressionResult:
    slope: float
    intercept: float
    prediction: int


def exponential_smoothing(values: Sequence[float], alpha: float = 0.3) -> int:
    """Exponential smoothing with a naive end-to-end trend term.

    ``S[0] = x[0]``, ``S[i] = alpha * x[i] + (1 - alpha) * S[i-1]`` and the
    prediction is ``max(0, round(S[-1] + (x[-1] - x[0]) / n))``.
    """

    n = len(values)
    if n == 0:
        return 0

    smoothed = float(values[0])
    for value in values[1:]:
        smoothed = alpha * value + (1 - alpha) * smoothed

    trend = (values[-1] - values[0]) / n
    return max(0, round_half_up(smoothed + trend))


def linear_regression(values: Sequence[float]) -> RegressionResult:
    """Closed-form OLS fit of ``y = slope * i + intercept`` for ``i = 0..n-1``.

    The prediction is one step past the observed range (``i = n``).
    """

    n = len(values)
    if n == 0:
        return RegressionResult(slope=0.0, intercept=0.0, prediction=0)

    x = np.arange(n, dtype=float)
    y = np.asarray(values, dtype=float)

    sum_x = float(x.sum())
    sum_y = float(y.sum())
    sum_xy = float((x * y).sum())
    sum_x2 = float((x * x).sum())

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        # single point: no trend can be fitted
        slope = 0.0
    else:
        slope = (n * sum_xy - sum_x * sum_y) / denominator

    intercept = (sum_y - slope * sum_x) / n
    prediction = max(0, round_half_up(slope * n + intercept))

    return RegressionResult(slope=slope, intercept=intercept, prediction=prediction)


def moving_average(
    values: Sequence[float], window: int = MOVING_AVERAGE_WINDOW
) -> float:
    """Arithmetic mean of the last ``min(window, n)`` observations."""

    if len(values) == 0 or window <= 0:
        return 0.0
    recent = np.asarray(values[-window:], dtype=float)
    return float(recent.mean())
