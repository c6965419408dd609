"""
Domain Service - Demand Forecast Engine

Runs the statistical ensemble for one product:

  series builder -> base forecasters + seasonality -> ensemble
  combiner -> confidence scorer

The engine is stateless and free of I/O; every call recomputes the
forecast from the observations it is given.
"""

from __future__ import annotations

from typing import Iterable, Optional

import structlog

from src.domain.entities.forecast import BaseForecasts, EnsembleForecast, ForecastConfig
from src.domain.entities.sales import SaleObservation
from src.domain.services.base_forecasters import (
    MOVING_AVERAGE_WINDOW,
    exponential_smoothing,
    linear_regression,
    moving_average,
)
from src.domain.services.config_validator import validate_forecast_config
from src.domain.services.confidence import score_confidence
from src.domain.services.ensemble import combine
from src.domain.services.seasonality import detect_seasonality
from src.domain.services.series_builder import build_daily_series, normalize_observations

logger = structlog.get_logger(__name__)

ADVISORY_CONTEXT_DAYS = 21


class DemandForecastEngine:
    """Short-horizon ensemble forecaster."""

    def __init__(
        self,
        config: Optional[ForecastConfig] = None,
        *,
        moving_average_window: int = MOVING_AVERAGE_WINDOW,
        advisory_context_days: int = ADVISORY_CONTEXT_DAYS,
    ):
        self.config = validate_forecast_config(config or ForecastConfig())
        self.moving_average_window = moving_average_window
        self.advisory_context_days = advisory_context_days

    def forecast(
        self, product_id: str, observations: Iterable[SaleObservation]
    ) -> EnsembleForecast:
        """Forecast demand over the configured horizon.

        Raises:
            InvalidSaleObservationError: If any observation is invalid.
        """

        events = normalize_observations(observations)
        series = build_daily_series(events)
        if series is None:
            logger.debug("forecast.engine.no_data", product_id=product_id)
            return EnsembleForecast.empty(product_id)

        values = series.quantities
        base = BaseForecasts(
            exponential_smoothing=exponential_smoothing(values, self.config.alpha),
            linear_regression=linear_regression(values).prediction,
            moving_average=moving_average(values, self.moving_average_window),
            seasonality_factor=detect_seasonality(events),
        )

        prediction = combine(base, self.config)
        confidence = score_confidence(values, prediction)

        logger.debug(
            "forecast.engine.completed",
            product_id=product_id,
            series_length=len(series),
            observations=len(events),
            exponential_smoothing=base.exponential_smoothing,
            linear_regression=base.linear_regression,
            moving_average=base.moving_average,
            seasonality_factor=base.seasonality_factor,
            prediction=prediction,
            confidence=confidence,
        )

        return EnsembleForecast(
            product_id=product_id,
            predicted_demand=prediction,
            confidence_score=confidence,
            observation_count=len(events),
            series_length=len(series),
            components=base,
            recent_quantities=series.tail(self.advisory_context_days),
        )
