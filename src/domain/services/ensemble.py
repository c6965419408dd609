"""Domain service combining the base learners into a horizon forecast."""

from __future__ import annotations

from src.domain.entities.forecast import BaseForecasts, ForecastConfig
from src.domain.services.base_forecasters import round_half_up


def weighted_blend(base: BaseForecasts, config: ForecastConfig) -> float:
    """Next-period estimate as the fixed-weight mix of the base learners."""
    return (
        base.exponential_smoothing * config.es_weight
        + base.linear_regression * config.lr_weight
        + base.moving_average * config.ma_weight
    )


def combine(base: BaseForecasts, config: ForecastConfig) -> int:
    """Scale the seasonally adjusted blend to the forecast horizon.

    ``max(0, round(blend * seasonality * horizon_days))``
    """

    adjusted = weighted_blend(base, config) * base.seasonality_factor
    return max(0, round_half_up(adjusted * config.horizon_days))
