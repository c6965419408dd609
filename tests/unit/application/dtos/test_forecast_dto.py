from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from src.application.dtos.forecast_dto import (
    ForecastConfigDTO,
    ForecastRequestDTO,
    ForecastResultDTO,
    SaleObservationDTO,
)
from src.domain.entities.forecast import BaseForecasts, ForecastConfig, ForecastResult


def test_sale_observation_accepts_date_alias_and_timestamps() -> None:
    assert SaleObservationDTO(date="2025-03-01", quantity=2).sale_date == date(2025, 3, 1)
    assert SaleObservationDTO.model_validate(
        {"date": "2025-03-01T22:10:00Z", "quantity": 1}
    ).sale_date == date(2025, 3, 1)


@pytest.mark.parametrize(
    "payload",
    [
        {"date": "2025-03-01", "quantity": -1},
        {"date": "not-a-date", "quantity": 1},
        {"date": "2025-03-01T99:00", "quantity": 1},
        {"quantity": 1},
    ],
)
def test_sale_observation_rejects_invalid_payloads(payload) -> None:
    with pytest.raises(ValidationError):
        SaleObservationDTO.model_validate(payload)


def test_forecast_request_requires_products() -> None:
    with pytest.raises(ValidationError):
        ForecastRequestDTO.model_validate({"products": []})


def test_forecast_request_parses_products() -> None:
    request = ForecastRequestDTO.model_validate(
        {
            "as_of": "2025-03-31",
            "products": [
                {
                    "product_id": "p-1",
                    "reorder_level": 15,
                    "sales": [{"date": "2025-03-30", "quantity": 4}],
                }
            ],
        }
    )

    assert request.as_of == date(2025, 3, 31)
    assert request.products[0].name is None
    assert request.products[0].sales[0].quantity == 4


def test_forecast_result_dto_from_domain() -> None:
    result = ForecastResult(
        product_id="p-1",
        predicted_demand=150,
        confidence_score=0.6,
        forecast_date=date(2025, 4, 30),
        reorder_suggestion=180,
        components=BaseForecasts(5, 5, 5.0, 1.0),
    )

    dto = ForecastResultDTO.from_domain(result)

    assert dto.predicted_demand == 150
    assert dto.reorder_suggestion == 180
    assert dto.components.moving_average == 5.0
    assert dto.model_dump(mode="json")["forecast_date"] == "2025-04-30"


def test_forecast_config_dto_from_domain() -> None:
    dto = ForecastConfigDTO.from_domain(
        ForecastConfig(), lookback_days=90, advisory_enabled=False
    )

    assert dto.alpha == 0.3
    assert dto.ma_weight == 0.4
    assert dto.lookback_days == 90
    assert dto.advisory_enabled is False
