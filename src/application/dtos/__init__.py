"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .forecast_dto import (
    ForecastBatchResponseDTO,
    ForecastComponentsDTO,
    ForecastConfigDTO,
    ForecastRequestDTO,
    ForecastResultDTO,
    ProductSalesDTO,
    SaleObservationDTO,
)
from .health_dto import (
    AdvisoryCheckDTO,
    AdvisoryInfoDTO,
    ApplicationInfoDTO,
    EngineCheckDTO,
    ForecastInfoDTO,
    SystemHealthDTO,
)

__all__ = [
    "SaleObservationDTO",
    "ProductSalesDTO",
    "ForecastRequestDTO",
    "ForecastComponentsDTO",
    "ForecastResultDTO",
    "ForecastBatchResponseDTO",
    "ForecastConfigDTO",
    "SystemHealthDTO",
    "EngineCheckDTO",
    "AdvisoryCheckDTO",
    "ForecastInfoDTO",
    "AdvisoryInfoDTO",
    "ApplicationInfoDTO",
]
