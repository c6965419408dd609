from __future__ import annotations

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from src.main.app import create_app
from src.main.container import get_container


@pytest.fixture()
def advisor(advisor_factory):
    return advisor_factory(available=False)


@pytest.fixture()
def client(advisor, monkeypatch):
    monkeypatch.delenv("ADVISORY_API_KEY", raising=False)
    monkeypatch.delenv("LOVABLE_API_KEY", raising=False)
    app = create_app()
    container = get_container()
    container.demand_advisor.override(providers.Object(advisor))

    with TestClient(app) as test_client:
        yield test_client


def _body(sales_payload_factory, **products) -> dict:
    return {
        "as_of": "2025-01-30",
        "products": [
            {"product_id": product_id, "name": product_id.title(), "sales": sales}
            for product_id, sales in products.items()
        ],
    }


def test_generate_forecasts(client, sales_payload_factory):
    response = client.post(
        "/forecasts",
        json=_body(sales_payload_factory, beans=sales_payload_factory([5] * 30)),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["as_of"] == "2025-01-30"
    assert body["horizon_days"] == 30
    forecast = body["forecasts"][0]
    assert forecast["product_id"] == "beans"
    assert forecast["predicted_demand"] == 150
    assert forecast["reorder_suggestion"] == 180
    assert forecast["forecast_date"] == "2025-03-01"
    assert forecast["advisory_applied"] is False
    assert 0.3 <= forecast["confidence_score"] <= 0.95
    assert body["ensemble_weights"] == {
        "exponential_smoothing": 0.3,
        "linear_regression": 0.3,
        "moving_average": 0.4,
    }


def test_generate_forecasts_with_advisory(client, advisor, sales_payload_factory):
    advisor.available = True
    advisor.suggestion = 250.0

    response = client.post(
        "/forecasts",
        json=_body(sales_payload_factory, beans=sales_payload_factory([5] * 30)),
    )

    forecast = response.json()["forecasts"][0]
    assert forecast["predicted_demand"] == 180
    assert forecast["advisory_applied"] is True
    assert advisor.requests[0].product_name == "Beans"


def test_generate_forecasts_skips_empty_products(client, sales_payload_factory):
    response = client.post(
        "/forecasts",
        json=_body(
            sales_payload_factory, beans=sales_payload_factory([5] * 30), milk=[]
        ),
    )

    assert response.status_code == 200
    assert response.json()["skipped_products"] == ["milk"]


def test_generate_forecasts_without_history_returns_400(client, sales_payload_factory):
    response = client.post("/forecasts", json=_body(sales_payload_factory, beans=[]))

    assert response.status_code == 400
    assert "No historical sales data" in response.json()["detail"]


def test_generate_forecasts_rejects_negative_quantity(client, sales_payload_factory):
    sales = sales_payload_factory([5, -1])

    response = client.post("/forecasts", json=_body(sales_payload_factory, beans=sales))

    assert response.status_code == 422


def test_generate_forecasts_rejects_empty_product_list(client):
    response = client.post("/forecasts", json={"products": []})

    assert response.status_code == 422


def test_get_forecast_config(client):
    response = client.get("/forecasts/config")

    assert response.status_code == 200
    body = response.json()
    assert body["alpha"] == 0.3
    assert body["horizon_days"] == 30
    assert body["lookback_days"] == 90
    assert body["advisory_enabled"] is False
