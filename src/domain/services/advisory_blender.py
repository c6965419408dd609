"""
Domain Service - Advisory Blender

Merges an optional second-opinion prediction into the ensemble output.
An absent or invalid suggestion leaves the forecast untouched.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any, Optional

from src.domain.entities.forecast import MAX_CONFIDENCE, EnsembleForecast
from src.domain.services.base_forecasters import round_half_up

ADVISORY_WEIGHT = 0.3
CONFIDENCE_BOOST = 1.1
MIN_OBSERVATIONS = 20


def is_eligible(forecast: EnsembleForecast, min_observations: int = MIN_OBSERVATIONS) -> bool:
    """Advisory enhancement is only attempted on histories of 21+ events."""
    return forecast.observation_count > min_observations


def valid_suggestion(value: Any) -> Optional[float]:
    """Return the suggestion as a float, or ``None`` if it is unusable."""

    if value is None or isinstance(value, bool) or not isinstance(value, Real):
        return None
    number = float(value)
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def apply_advisory(
    forecast: EnsembleForecast,
    suggestion: Any,
    *,
    advisory_weight: float = ADVISORY_WEIGHT,
    confidence_boost: float = CONFIDENCE_BOOST,
) -> EnsembleForecast:
    """Blend ``suggestion`` into ``forecast``.

    ``round((1 - w) * ensemble + w * advisory)`` with the confidence
    boosted by ``confidence_boost`` and capped at 0.95. The same object is
    returned when the suggestion is absent or invalid.
    """

    advisory = valid_suggestion(suggestion)
    if advisory is None:
        return forecast

    blended = round_half_up(
        forecast.predicted_demand * (1 - advisory_weight) + advisory * advisory_weight
    )
    confidence = min(MAX_CONFIDENCE, forecast.confidence_score * confidence_boost)
    return forecast.with_advisory(
        predicted_demand=max(0, blended),
        confidence_score=confidence,
        advisory=advisory,
    )
