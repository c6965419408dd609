"""Domain entities for sales history."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, List


@dataclass(frozen=True, slots=True)
class SaleObservation:
    """A single sale event recorded by the sales ledger.

    ``sale_date`` is normally a calendar ``date``; ISO-8601 strings are
    accepted as well and are validated by the series builder.
    """

    product_id: str
    sale_date: Any
    quantity: int


@dataclass(slots=True)
class DailySeries:
    """Gap-free daily quantities from the first to the last observed sale."""

    product_id: str
    start_date: date
    quantities: List[int] = field(default_factory=list)

    @property
    def end_date(self) -> date:
        return self.start_date + timedelta(days=max(len(self.quantities) - 1, 0))

    def __len__(self) -> int:
        return len(self.quantities)

    def tail(self, size: int) -> List[int]:
        """Return the last ``size`` quantities (all of them if shorter)."""
        if size <= 0:
            return []
        return self.quantities[-size:]
