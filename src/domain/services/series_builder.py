"""
Domain Service - Series Builder

Turns raw per-sale rows into a gap-filled daily quantity series.
"""

from __future__ import annotations

from datetime import date, datetime
from numbers import Integral
from typing import Any, Iterable, List, Optional

import pandas as pd

from src.domain.entities.errors import InvalidSaleObservationError
from src.domain.entities.sales import DailySeries, SaleObservation


def _parse_sale_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
        except ValueError as exc:
            raise InvalidSaleObservationError(
                f"Unparseable sale date: {value!r}", {"date": value}
            ) from exc
    raise InvalidSaleObservationError(
        f"Unparseable sale date: {value!r}", {"date": repr(value)}
    )


def _validate_quantity(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidSaleObservationError(
            f"Quantity must be an integer, got {value!r}", {"quantity": repr(value)}
        )
    if value < 0:
        raise InvalidSaleObservationError(
            f"Quantity must be non-negative, got {value}", {"quantity": int(value)}
        )
    return int(value)


def normalize_observations(
    observations: Iterable[SaleObservation],
) -> List[SaleObservation]:
    """Validate observations and return them sorted by date.

    Every returned observation carries a ``date`` instance. Mixing
    several products in one call is rejected.

    Raises:
        InvalidSaleObservationError: On a negative/non-integer quantity,
            an unparseable date or mixed product ids.
    """

    normalized: List[SaleObservation] = []
    product_ids = set()

    for observation in observations:
        product_ids.add(observation.product_id)
        normalized.append(
            SaleObservation(
                product_id=observation.product_id,
                sale_date=_parse_sale_date(observation.sale_date),
                quantity=_validate_quantity(observation.quantity),
            )
        )

    if len(product_ids) > 1:
        raise InvalidSaleObservationError(
            "Observations for a single product expected",
            {"product_ids": sorted(str(pid) for pid in product_ids)},
        )

    # sorted() is stable, same-day events keep their ledger order
    return sorted(normalized, key=lambda obs: obs.sale_date)


def build_daily_series(
    observations: Iterable[SaleObservation],
) -> Optional[DailySeries]:
    """Aggregate observations per day and zero-fill the gaps.

    Returns:
        The daily series, or ``None`` when there are no observations.
    """

    normalized = normalize_observations(observations)
    if not normalized:
        return None

    df = pd.DataFrame(
        {
            "date": pd.to_datetime([obs.sale_date for obs in normalized]),
            "quantity": [obs.quantity for obs in normalized],
        }
    )
    daily = df.groupby("date")["quantity"].sum()

    start = normalized[0].sale_date
    end = normalized[-1].sale_date
    index = pd.date_range(start=start, end=end, freq="D")
    filled = daily.reindex(index, fill_value=0)

    return DailySeries(
        product_id=normalized[0].product_id,
        start_date=start,
        quantities=[int(qty) for qty in filled.tolist()],
    )
