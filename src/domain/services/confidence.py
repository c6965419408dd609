"""
Domain Service - Confidence Scorer

Heuristic 0-1 score built from data consistency, prediction
reasonableness and history volume. It is not a calibrated interval.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from src.domain.entities.forecast import MAX_CONFIDENCE, MIN_CONFIDENCE

RECENT_WINDOW = 7
VOLUME_TARGET_DAYS = 30

CONSISTENCY_WEIGHT = 0.4
REASONABLENESS_WEIGHT = 0.4
VOLUME_WEIGHT = 0.2


def consistency_score(values: Sequence[float]) -> float:
    """``max(0, 1 - CV)``; a zero mean counts as the worst case (CV = 1)."""

    data = np.asarray(values, dtype=float)
    mean = float(data.mean())
    if mean > 0:
        cv = float(data.std()) / mean
    else:
        cv = 1.0
    return max(0.0, 1.0 - cv)


def reasonableness_score(values: Sequence[float], prediction: float) -> float:
    """How far the prediction sits from the mean of the last 7 values."""

    recent = values[-RECENT_WINDOW:]
    recent_avg = sum(recent) / min(RECENT_WINDOW, len(values))
    denominator = recent_avg if recent_avg != 0 else 1.0
    deviation = abs(prediction - recent_avg) / denominator
    return max(0.0, 1.0 - deviation / 2)


def volume_score(length: int) -> float:
    return min(1.0, length / VOLUME_TARGET_DAYS)


def score_confidence(values: Sequence[float], prediction: float) -> float:
    """Weighted composite clamped to ``[MIN_CONFIDENCE, MAX_CONFIDENCE]``."""

    if len(values) == 0:
        return MIN_CONFIDENCE

    confidence = (
        consistency_score(values) * CONSISTENCY_WEIGHT
        + reasonableness_score(values, prediction) * REASONABLENESS_WEIGHT
        + volume_score(len(values)) * VOLUME_WEIGHT
    )
    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, confidence))
