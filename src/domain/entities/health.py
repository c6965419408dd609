"""
Health domain entities.

Results of the two checks behind /health: the engine self-check, which
forecasts a known flat series, and the reachability check of the
advisory service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ServiceStatus(str, Enum):
    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"


@dataclass(slots=True)
class EngineCheck:
    """Outcome of forecasting the flat self-check series.

    ``actual_prediction`` is ``None`` when the engine raised.
    """

    status: ServiceStatus
    horizon_days: int
    expected_prediction: int
    actual_prediction: Optional[int] = None
    error: Optional[str] = None
    latency_ms: Optional[float] = None
    checked_at: datetime = field(default_factory=_utcnow)


@dataclass(slots=True)
class AdvisoryCheck:
    """Reachability of the advisory service."""

    status: ServiceStatus
    url: str
    status_code: Optional[int] = None
    error: Optional[str] = None
    latency_ms: Optional[float] = None
    checked_at: datetime = field(default_factory=_utcnow)

    @property
    def reachable(self) -> bool:
        return self.status is ServiceStatus.UP


@dataclass(slots=True)
class SystemHealth:
    """Overall status; ``advisory`` is ``None`` when the advisor is disabled."""

    status: ServiceStatus
    engine: EngineCheck
    advisory: Optional[AdvisoryCheck] = None
