"""
Domain Service - Seasonality Detector

Coarse weekly adjustment factor: a linear extrapolation of the trend
between the first and last weekly averages, not a seasonal decomposition.
The constants below are tunable; they are kept for parity with the
historical forecasts.
"""

from __future__ import annotations

from typing import List, Sequence

from src.domain.entities.sales import SaleObservation

MIN_OBSERVATIONS = 14
WINDOW_SIZE = 7
MAX_WINDOWS = 4
PROJECTION_WEEKS = 4
MIN_FACTOR = 0.5
MAX_FACTOR = 2.0
NEUTRAL_FACTOR = 1.0


def weekly_averages(observations: Sequence[SaleObservation]) -> List[float]:
    """Mean quantity of up to ``MAX_WINDOWS`` consecutive blocks of 7 events."""

    window_count = min(MAX_WINDOWS, len(observations) // WINDOW_SIZE)
    averages: List[float] = []
    for index in range(window_count):
        start = index * WINDOW_SIZE
        block = observations[start : start + WINDOW_SIZE]
        averages.append(sum(obs.quantity for obs in block) / len(block))
    return averages


def detect_seasonality(observations: Sequence[SaleObservation]) -> float:
    """Return a multiplicative factor in ``[MIN_FACTOR, MAX_FACTOR]``.

    ``observations`` are the raw, date-sorted sale events (before same-day
    aggregation). Fewer than 14 events or fewer than two weekly windows
    yield the neutral factor.
    """

    if len(observations) < MIN_OBSERVATIONS:
        return NEUTRAL_FACTOR

    averages = weekly_averages(observations)
    if len(averages) < 2:
        return NEUTRAL_FACTOR

    trend = (averages[-1] - averages[0]) / len(averages)
    factor = 1 + trend * PROJECTION_WEEKS
    return max(MIN_FACTOR, min(MAX_FACTOR, factor))
