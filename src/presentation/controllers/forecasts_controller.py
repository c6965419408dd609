"""
Presentation Layer - Forecasts Controller

Exposes endpoints to run the demand forecast over a batch of products
and to inspect the active ensemble configuration.
"""

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status

from src.application.dtos.forecast_dto import (
    ForecastBatchResponseDTO,
    ForecastConfigDTO,
    ForecastRequestDTO,
)
from src.application.use_cases.forecast_use_cases import (
    ForecastGenerationError,
    GenerateForecastsUseCase,
    GetForecastConfigUseCase,
    NoSalesHistoryError,
)
from src.domain.entities.errors import DomainError, InvalidSaleObservationError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/forecasts", tags=["Forecasts"])


@router.post(
    "",
    response_model=ForecastBatchResponseDTO,
    summary="Generate 30-day demand forecasts",
    description="""
    Run the ensemble forecaster (exponential smoothing, linear regression and
    moving average with a weekly trend adjustment) over each product's sales
    history. Products without sales inside the lookback window are listed in
    `skipped_products` instead of receiving a forecast.
    """,
)
@inject
async def generate_forecasts(
    payload: ForecastRequestDTO,
    generate_use_case: GenerateForecastsUseCase = Depends(
        Provide["generate_forecasts_use_case"]
    ),
) -> ForecastBatchResponseDTO:
    try:
        return await generate_use_case.execute(payload)
    except NoSalesHistoryError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except InvalidSaleObservationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": exc.message, "details": exc.details},
        )
    except (DomainError, ForecastGenerationError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except Exception as exc:
        logger.error(
            "forecast.unexpected_error",
            products=len(payload.products),
            error=str(exc),
            exc_info=exc,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.get(
    "/config",
    response_model=ForecastConfigDTO,
    summary="Active ensemble configuration",
)
@inject
async def get_forecast_config(
    config_use_case: GetForecastConfigUseCase = Depends(
        Provide["get_forecast_config_use_case"]
    ),
) -> ForecastConfigDTO:
    return await config_use_case.execute()
