"""
Domain Entities Package

This package contains the core domain entities and business logic.
"""

from .errors import DomainError, ForecastConfigurationError, InvalidSaleObservationError
from .forecast import (
    MAX_CONFIDENCE,
    MIN_CONFIDENCE,
    AdvisoryRequest,
    BaseForecasts,
    EnsembleForecast,
    ForecastConfig,
    ForecastResult,
)
from .health import AdvisoryCheck, EngineCheck, ServiceStatus, SystemHealth
from .sales import DailySeries, SaleObservation

__all__ = [
    "SaleObservation",
    "DailySeries",
    "ForecastConfig",
    "BaseForecasts",
    "EnsembleForecast",
    "ForecastResult",
    "AdvisoryRequest",
    "MIN_CONFIDENCE",
    "MAX_CONFIDENCE",
    "SystemHealth",
    "EngineCheck",
    "ServiceStatus",
    "AdvisoryCheck",
    "DomainError",
    "InvalidSaleObservationError",
    "ForecastConfigurationError",
]
