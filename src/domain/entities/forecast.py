"""
Forecast domain entities.

Value objects describing the ensemble configuration, the per-component
outputs of the base forecasters and the forecast records produced for
each product.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import List, Optional

DEFAULT_ALPHA = 0.3
DEFAULT_ES_WEIGHT = 0.30
DEFAULT_LR_WEIGHT = 0.30
DEFAULT_MA_WEIGHT = 0.40
DEFAULT_HORIZON_DAYS = 30

MIN_CONFIDENCE = 0.3
MAX_CONFIDENCE = 0.95


@dataclass(frozen=True, slots=True)
class ForecastConfig:
    """Immutable ensemble configuration.

    Use ``src.domain.services.config_validator.validate_forecast_config``
    before handing a config built from user input to the engine.
    """

    alpha: float = DEFAULT_ALPHA
    es_weight: float = DEFAULT_ES_WEIGHT
    lr_weight: float = DEFAULT_LR_WEIGHT
    ma_weight: float = DEFAULT_MA_WEIGHT
    horizon_days: int = DEFAULT_HORIZON_DAYS

    @property
    def weights(self) -> dict:
        return {
            "exponential_smoothing": self.es_weight,
            "linear_regression": self.lr_weight,
            "moving_average": self.ma_weight,
        }


@dataclass(frozen=True, slots=True)
class BaseForecasts:
    """Next-period estimates of the base learners plus the seasonal factor."""

    exponential_smoothing: float = 0.0
    linear_regression: float = 0.0
    moving_average: float = 0.0
    seasonality_factor: float = 1.0


@dataclass(frozen=True, slots=True)
class EnsembleForecast:
    """Horizon-level forecast for one product before it is dated."""

    product_id: str
    predicted_demand: int
    confidence_score: float
    observation_count: int = 0
    series_length: int = 0
    components: BaseForecasts = field(default_factory=BaseForecasts)
    recent_quantities: List[int] = field(default_factory=list)
    advisory_applied: bool = False
    advisory_prediction: Optional[float] = None

    @classmethod
    def empty(cls, product_id: str) -> "EnsembleForecast":
        """Forecast used when a product has no sales history."""
        return cls(
            product_id=product_id,
            predicted_demand=0,
            confidence_score=MIN_CONFIDENCE,
        )

    def with_advisory(
        self, predicted_demand: int, confidence_score: float, advisory: float
    ) -> "EnsembleForecast":
        return replace(
            self,
            predicted_demand=predicted_demand,
            confidence_score=confidence_score,
            advisory_applied=True,
            advisory_prediction=advisory,
        )


@dataclass(frozen=True, slots=True)
class ForecastResult:
    """Forecast record handed back to the caller."""

    product_id: str
    predicted_demand: int
    confidence_score: float
    forecast_date: date
    reorder_suggestion: int
    advisory_applied: bool = False
    components: BaseForecasts = field(default_factory=BaseForecasts)


@dataclass(frozen=True, slots=True)
class AdvisoryRequest:
    """Summary submitted to the external advisory service."""

    product_id: str
    product_name: str
    recent_quantities: List[int]
    ensemble_prediction: int
    ensemble_confidence: float
