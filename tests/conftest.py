from __future__ import annotations

import sys
from dataclasses import dataclass, field
from datetime import date, timedelta
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.domain.entities.forecast import AdvisoryRequest  # noqa: E402
from src.domain.entities.sales import SaleObservation  # noqa: E402

START_DATE = date(2025, 1, 1)


def make_observations(
    quantities: Sequence[int],
    product_id: str = "sku-1",
    start: date = START_DATE,
) -> List[SaleObservation]:
    """One observation per consecutive day starting at ``start``."""
    return [
        SaleObservation(
            product_id=product_id,
            sale_date=start + timedelta(days=offset),
            quantity=quantity,
        )
        for offset, quantity in enumerate(quantities)
    ]


def make_sales_payload(
    quantities: Sequence[int], start: date = START_DATE
) -> List[dict]:
    return [
        {"date": (start + timedelta(days=offset)).isoformat(), "quantity": quantity}
        for offset, quantity in enumerate(quantities)
    ]


@dataclass
class StubDemandAdvisor:
    """Advisor returning a fixed suggestion and recording the requests."""

    suggestion: Optional[object] = None
    available: bool = True
    error: Optional[Exception] = None
    hook: Optional[Callable[[AdvisoryRequest], object]] = None
    requests: List[AdvisoryRequest] = field(default_factory=list)

    async def suggest(self, request: AdvisoryRequest):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.hook is not None:
            return await self.hook(request)
        return self.suggestion


@pytest.fixture()
def flat_observations() -> List[SaleObservation]:
    return make_observations([5] * 30)


@pytest.fixture()
def unavailable_advisor() -> StubDemandAdvisor:
    return StubDemandAdvisor(available=False)


@pytest.fixture()
def observation_factory() -> Callable[..., List[SaleObservation]]:
    return make_observations


@pytest.fixture()
def sales_payload_factory() -> Callable[..., List[dict]]:
    return make_sales_payload


@pytest.fixture()
def advisor_factory() -> Callable[..., StubDemandAdvisor]:
    return StubDemandAdvisor
