"""
Application Use Cases - Demand Forecasting

Orchestrates a forecast run over many products:
  * Lookback filtering of each product's sales history
  * Statistical ensemble per product (pure, synchronous)
  * Optional advisory enhancement, concurrently and isolated per product
  * Dating of the forecast and reorder suggestion
"""

from __future__ import annotations

import asyncio
from datetime import date, datetime, timedelta, timezone
from typing import Callable, List, Optional, Tuple

import structlog

from src.application.dtos.forecast_dto import (
    ForecastBatchResponseDTO,
    ForecastConfigDTO,
    ForecastRequestDTO,
    ForecastResultDTO,
    ProductSalesDTO,
)
from src.domain.entities.forecast import AdvisoryRequest, EnsembleForecast, ForecastResult
from src.domain.entities.sales import SaleObservation
from src.domain.ports.demand_advisor import IDemandAdvisor
from src.domain.services.advisory_blender import apply_advisory, is_eligible
from src.domain.services.forecast_engine import DemandForecastEngine
from src.domain.services.reorder import suggest_reorder_quantity

logger = structlog.get_logger(__name__)

ALGORITHMS = [
    "Exponential Smoothing",
    "Linear Regression (OLS)",
    "Moving Average",
    "Weekly trend adjustment",
    "Advisory enhancement (optional)",
]


class ForecastGenerationError(Exception):
    """Base exception for forecast run failures."""

    pass


class NoSalesHistoryError(ForecastGenerationError):
    """Raised when none of the requested products has sales history."""

    pass


def _today_utc() -> date:
    return datetime.now(timezone.utc).date()


class GenerateForecastsUseCase:
    """Generates 30-day demand forecasts for a batch of products."""

    def __init__(
        self,
        engine: DemandForecastEngine,
        demand_advisor: IDemandAdvisor,
        *,
        lookback_days: int = 90,
        default_reorder_level: int = 10,
        reorder_safety_factor: float = 1.2,
        advisory_timeout: float = 15.0,
        advisory_min_observations: int = 20,
        advisory_weight: float = 0.3,
        advisory_confidence_boost: float = 1.1,
        today: Optional[Callable[[], date]] = None,
    ):
        self.engine = engine
        self.demand_advisor = demand_advisor
        self.lookback_days = lookback_days
        self.default_reorder_level = default_reorder_level
        self.reorder_safety_factor = reorder_safety_factor
        self.advisory_timeout = advisory_timeout
        self.advisory_min_observations = advisory_min_observations
        self.advisory_weight = advisory_weight
        self.advisory_confidence_boost = advisory_confidence_boost
        self._today = today or _today_utc

    async def execute(self, request: ForecastRequestDTO) -> ForecastBatchResponseDTO:
        """Run the forecast for every product in ``request``.

        Raises:
            NoSalesHistoryError: When no product has sales in the window.
            InvalidSaleObservationError: When an observation is invalid.
        """

        as_of = request.as_of or self._today()
        horizon_days = self.engine.config.horizon_days

        logger.info(
            "forecast.batch.start",
            products=len(request.products),
            as_of=as_of.isoformat(),
            lookback_days=self.lookback_days,
            advisory_available=self.demand_advisor.available,
        )

        candidates: List[Tuple[ProductSalesDTO, List[SaleObservation]]] = []
        skipped: List[str] = []
        for product in request.products:
            observations = self._observations_in_window(product, as_of)
            if observations:
                candidates.append((product, observations))
            else:
                skipped.append(product.product_id)

        if not candidates:
            logger.warning("forecast.batch.no_history", products=len(request.products))
            raise NoSalesHistoryError(
                "No historical sales data available for forecasting"
            )

        ensembles = [
            self.engine.forecast(product.product_id, observations)
            for product, observations in candidates
        ]

        enhanced = await asyncio.gather(
            *(
                self._enhance(forecast, product.name or product.product_id)
                for forecast, (product, _) in zip(ensembles, candidates)
            )
        )

        forecast_date = as_of + timedelta(days=horizon_days)
        results = [
            self._to_result(forecast, product, forecast_date)
            for forecast, (product, _) in zip(enhanced, candidates)
        ]

        logger.info(
            "forecast.batch.completed",
            generated=len(results),
            skipped=len(skipped),
            advisory_applied=sum(1 for result in results if result.advisory_applied),
        )

        return ForecastBatchResponseDTO(
            generated_at=datetime.now(timezone.utc),
            as_of=as_of,
            horizon_days=horizon_days,
            forecasts=[ForecastResultDTO.from_domain(result) for result in results],
            skipped_products=skipped,
            ensemble_weights=self.engine.config.weights,
            algorithms=ALGORITHMS,
        )

    def _observations_in_window(
        self, product: ProductSalesDTO, as_of: date
    ) -> List[SaleObservation]:
        cutoff = as_of - timedelta(days=self.lookback_days) if self.lookback_days else None
        observations = []
        for sale in product.sales:
            if sale.sale_date > as_of:
                continue
            if cutoff is not None and sale.sale_date < cutoff:
                continue
            observations.append(
                SaleObservation(
                    product_id=product.product_id,
                    sale_date=sale.sale_date,
                    quantity=sale.quantity,
                )
            )
        return observations

    async def _enhance(
        self, forecast: EnsembleForecast, product_name: str
    ) -> EnsembleForecast:
        if not self.demand_advisor.available:
            return forecast
        if not is_eligible(forecast, self.advisory_min_observations):
            return forecast

        request = AdvisoryRequest(
            product_id=forecast.product_id,
            product_name=product_name,
            recent_quantities=list(forecast.recent_quantities),
            ensemble_prediction=forecast.predicted_demand,
            ensemble_confidence=forecast.confidence_score,
        )

        try:
            suggestion = await asyncio.wait_for(
                self.demand_advisor.suggest(request), timeout=self.advisory_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(
                "advisory.timeout",
                product_id=forecast.product_id,
                timeout=self.advisory_timeout,
            )
            return forecast
        except Exception as exc:
            logger.warning(
                "advisory.failed",
                product_id=forecast.product_id,
                error=str(exc),
            )
            return forecast

        enhanced = apply_advisory(
            forecast,
            suggestion,
            advisory_weight=self.advisory_weight,
            confidence_boost=self.advisory_confidence_boost,
        )
        if enhanced is forecast:
            logger.info(
                "advisory.skipped",
                product_id=forecast.product_id,
                suggestion=repr(suggestion),
            )
        else:
            logger.info(
                "advisory.applied",
                product_id=forecast.product_id,
                ensemble_prediction=forecast.predicted_demand,
                advisory_prediction=enhanced.advisory_prediction,
                final_prediction=enhanced.predicted_demand,
            )
        return enhanced

    def _to_result(
        self, forecast: EnsembleForecast, product: ProductSalesDTO, forecast_date: date
    ) -> ForecastResult:
        reorder = suggest_reorder_quantity(
            forecast.predicted_demand,
            product.reorder_level,
            default_reorder_level=self.default_reorder_level,
            safety_factor=self.reorder_safety_factor,
        )
        logger.info(
            "forecast.product.completed",
            product_id=forecast.product_id,
            predicted_demand=forecast.predicted_demand,
            confidence=round(forecast.confidence_score, 3),
            reorder_suggestion=reorder,
        )
        return ForecastResult(
            product_id=forecast.product_id,
            predicted_demand=forecast.predicted_demand,
            confidence_score=forecast.confidence_score,
            forecast_date=forecast_date,
            reorder_suggestion=reorder,
            advisory_applied=forecast.advisory_applied,
            components=forecast.components,
        )


class GetForecastConfigUseCase:
    """Returns the active ensemble configuration."""

    def __init__(
        self,
        engine: DemandForecastEngine,
        demand_advisor: IDemandAdvisor,
        lookback_days: int = 90,
    ) -> None:
        self._engine = engine
        self._demand_advisor = demand_advisor
        self._lookback_days = lookback_days

    async def execute(self) -> ForecastConfigDTO:
        return ForecastConfigDTO.from_domain(
            self._engine.config,
            lookback_days=self._lookback_days,
            advisory_enabled=self._demand_advisor.available,
        )
