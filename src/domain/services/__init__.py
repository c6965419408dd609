"""
Domain Services Package

Pure forecasting logic: series construction, base learners, seasonality,
ensemble combination, confidence scoring and advisory blending.
"""

from .advisory_blender import apply_advisory, is_eligible
from .config_validator import validate_forecast_config
from .forecast_engine import DemandForecastEngine
from .reorder import suggest_reorder_quantity
from .series_builder import build_daily_series, normalize_observations

__all__ = [
    "DemandForecastEngine",
    "apply_advisory",
    "is_eligible",
    "validate_forecast_config",
    "suggest_reorder_quantity",
    "build_daily_series",
    "normalize_observations",
]
