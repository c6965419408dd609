"""Domain service helpers for validating ensemble configurations."""

import math
from typing import List

from src.domain.entities.errors import ForecastConfigurationError
from src.domain.entities.forecast import ForecastConfig

WEIGHT_TOLERANCE = 1e-6


def validate_forecast_config(config: ForecastConfig) -> ForecastConfig:
    """Validate the ensemble parameters and return the config unchanged.

    Raises:
        ForecastConfigurationError: If one or more validation rules fail.
    """

    errors: List[str] = []

    if not 0.0 < config.alpha <= 1.0:
        errors.append("Smoothing alpha must be greater than 0 and at most 1.")

    for name, weight in config.weights.items():
        if weight < 0:
            errors.append(f"Weight for {name} must not be negative.")

    total = sum(config.weights.values())
    if not math.isclose(total, 1.0, abs_tol=WEIGHT_TOLERANCE):
        errors.append(f"Ensemble weights must sum to 1 (got {total:.6f}).")

    if config.horizon_days <= 0:
        errors.append("Forecast horizon must be greater than 0 days.")

    if errors:
        raise ForecastConfigurationError(
            "Invalid forecast configuration", {"errors": errors}
        )

    return config
