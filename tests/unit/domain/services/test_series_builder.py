from __future__ import annotations

from datetime import date, datetime

import pytest

from src.domain.entities.errors import InvalidSaleObservationError
from src.domain.entities.sales import SaleObservation
from src.domain.services.series_builder import (
    build_daily_series,
    normalize_observations,
)


def _obs(day, quantity, product_id="sku-1") -> SaleObservation:
    return SaleObservation(product_id=product_id, sale_date=day, quantity=quantity)


def test_build_daily_series_returns_none_for_empty_input() -> None:
    assert build_daily_series([]) is None


def test_build_daily_series_fills_gaps_with_zero() -> None:
    series = build_daily_series(
        [_obs(date(2025, 1, 1), 3), _obs(date(2025, 1, 5), 7)]
    )

    assert series is not None
    assert series.quantities == [3, 0, 0, 0, 7]
    assert series.start_date == date(2025, 1, 1)
    assert series.end_date == date(2025, 1, 5)
    assert len(series) == 5


def test_build_daily_series_sums_same_day_sales_and_sorts() -> None:
    series = build_daily_series(
        [
            _obs(date(2025, 1, 3), 1),
            _obs(date(2025, 1, 1), 2),
            _obs(date(2025, 1, 1), 4),
        ]
    )

    assert series.quantities == [6, 0, 1]


def test_build_daily_series_single_observation() -> None:
    series = build_daily_series([_obs(date(2025, 2, 1), 9)])

    assert series.quantities == [9]
    assert series.end_date == series.start_date


def test_normalize_parses_iso_strings_and_timestamps() -> None:
    normalized = normalize_observations(
        [
            _obs("2025-01-02T10:15:00Z", 1),
            _obs("2025-01-01", 2),
            _obs(datetime(2025, 1, 3, 23, 59), 3),
        ]
    )

    assert [obs.sale_date for obs in normalized] == [
        date(2025, 1, 1),
        date(2025, 1, 2),
        date(2025, 1, 3),
    ]


def test_normalize_keeps_ledger_order_for_same_day_events() -> None:
    normalized = normalize_observations(
        [_obs(date(2025, 1, 2), 5), _obs(date(2025, 1, 1), 8), _obs(date(2025, 1, 1), 1)]
    )

    assert [obs.quantity for obs in normalized] == [8, 1, 5]


@pytest.mark.parametrize("quantity", [-1, 1.5, "3", True, None])
def test_normalize_rejects_invalid_quantities(quantity) -> None:
    with pytest.raises(InvalidSaleObservationError) as exc:
        normalize_observations([_obs(date(2025, 1, 1), quantity)])

    assert "quantity" in exc.value.details


@pytest.mark.parametrize("value", ["yesterday", "", None, 20250101])
def test_normalize_rejects_unparseable_dates(value) -> None:
    with pytest.raises(InvalidSaleObservationError) as exc:
        normalize_observations([_obs(value, 1)])

    assert "date" in exc.value.details


def test_normalize_rejects_mixed_products() -> None:
    with pytest.raises(InvalidSaleObservationError) as exc:
        normalize_observations(
            [_obs(date(2025, 1, 1), 1, "a"), _obs(date(2025, 1, 2), 1, "b")]
        )

    assert exc.value.details["product_ids"] == ["a", "b"]


def test_zero_quantity_is_accepted() -> None:
    series = build_daily_series([_obs(date(2025, 1, 1), 0), _obs(date(2025, 1, 2), 0)])

    assert series.quantities == [0, 0]
