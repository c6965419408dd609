"""
Use Cases Package - Application Layer

This package contains use cases that implement the business logic
of the application. Use cases orchestrate the flow of data to and from
the entities and implement the business rules of the application.
"""

from .forecast_use_cases import (
    ForecastGenerationError,
    GenerateForecastsUseCase,
    GetForecastConfigUseCase,
    NoSalesHistoryError,
)
from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase

__all__ = [
    "GenerateForecastsUseCase",
    "GetForecastConfigUseCase",
    "ForecastGenerationError",
    "NoSalesHistoryError",
    "GetHealthStatusUseCase",
    "GetApplicationInfoUseCase",
]
