"""
Application DTOs - Forecast

Data Transfer Objects for demand forecast requests and responses.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.domain.entities.forecast import BaseForecasts, ForecastConfig, ForecastResult


class SaleObservationDTO(BaseModel):
    """One sale event of the product's history."""

    model_config = ConfigDict(populate_by_name=True)

    sale_date: date = Field(alias="date", description="ISO-8601 calendar date")
    quantity: int = Field(ge=0, description="Units sold (non-negative)")

    @field_validator("sale_date", mode="before")
    @classmethod
    def _truncate_timestamps(cls, value: Any) -> Any:
        # Ledger exports carry full timestamps; only the calendar day counts
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and ("T" in value or " " in value.strip()):
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
        return value


class ProductSalesDTO(BaseModel):
    """Sales history for a single product."""

    product_id: str = Field(min_length=1, description="Product identifier")
    name: Optional[str] = Field(default=None, description="Product display name")
    reorder_level: Optional[int] = Field(
        default=None, ge=0, description="Minimum stock threshold for the product"
    )
    sales: List[SaleObservationDTO] = Field(default_factory=list)


class ForecastRequestDTO(BaseModel):
    """Payload of a forecast run over one or more products."""

    as_of: Optional[date] = Field(
        default=None,
        description="Reference date of the run (defaults to today, UTC)",
    )
    products: List[ProductSalesDTO] = Field(min_length=1)

    model_config = {
        "json_schema_extra": {
            "example": {
                "as_of": "2025-03-31",
                "products": [
                    {
                        "product_id": "8f5e8c1a",
                        "name": "Espresso beans 1kg",
                        "reorder_level": 15,
                        "sales": [
                            {"date": "2025-03-01", "quantity": 4},
                            {"date": "2025-03-02", "quantity": 6},
                        ],
                    }
                ],
            }
        }
    }


class ForecastComponentsDTO(BaseModel):
    """Outputs of the individual base learners."""

    exponential_smoothing: float
    linear_regression: float
    moving_average: float
    seasonality_factor: float

    @classmethod
    def from_domain(cls, base: BaseForecasts) -> "ForecastComponentsDTO":
        return cls(
            exponential_smoothing=base.exponential_smoothing,
            linear_regression=base.linear_regression,
            moving_average=base.moving_average,
            seasonality_factor=base.seasonality_factor,
        )


class ForecastResultDTO(BaseModel):
    """Forecast for one product."""

    product_id: str
    predicted_demand: int = Field(ge=0, description="Units over the horizon")
    confidence_score: float = Field(ge=0.3, le=0.95)
    forecast_date: date = Field(description="Date the forecast horizon ends")
    reorder_suggestion: int = Field(ge=0)
    advisory_applied: bool = False
    components: ForecastComponentsDTO

    @classmethod
    def from_domain(cls, result: ForecastResult) -> "ForecastResultDTO":
        return cls(
            product_id=result.product_id,
            predicted_demand=result.predicted_demand,
            confidence_score=result.confidence_score,
            forecast_date=result.forecast_date,
            reorder_suggestion=result.reorder_suggestion,
            advisory_applied=result.advisory_applied,
            components=ForecastComponentsDTO.from_domain(result.components),
        )


class ForecastBatchResponseDTO(BaseModel):
    """Response of a forecast run."""

    generated_at: datetime
    as_of: date
    horizon_days: int
    forecasts: List[ForecastResultDTO] = Field(default_factory=list)
    skipped_products: List[str] = Field(
        default_factory=list,
        description="Products without sales inside the lookback window",
    )
    ensemble_weights: Dict[str, float] = Field(default_factory=dict)
    algorithms: List[str] = Field(default_factory=list)


class ForecastConfigDTO(BaseModel):
    """Active ensemble configuration."""

    alpha: float
    es_weight: float
    lr_weight: float
    ma_weight: float
    horizon_days: int
    lookback_days: int
    advisory_enabled: bool

    @classmethod
    def from_domain(
        cls, config: ForecastConfig, lookback_days: int, advisory_enabled: bool
    ) -> "ForecastConfigDTO":
        return cls(
            alpha=config.alpha,
            es_weight=config.es_weight,
            lr_weight=config.lr_weight,
            ma_weight=config.ma_weight,
            horizon_days=config.horizon_days,
            lookback_days=lookback_days,
            advisory_enabled=advisory_enabled,
        )
