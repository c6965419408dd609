"""DTOs for the /health and /info responses."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.domain.entities.health import (
    AdvisoryCheck,
    EngineCheck,
    ServiceStatus,
    SystemHealth,
)


class EngineCheckDTO(BaseModel):
    """Result of forecasting the flat self-check series."""

    status: ServiceStatus
    horizon_days: int = Field(gt=0)
    expected_prediction: int = Field(
        ge=0, description="Closed-form demand for the flat series"
    )
    actual_prediction: Optional[int] = Field(
        default=None, description="Engine output; null when the engine raised"
    )
    error: Optional[str] = None
    latency_ms: Optional[float] = None
    checked_at: datetime

    @classmethod
    def from_domain(cls, check: EngineCheck) -> "EngineCheckDTO":
        return cls(
            status=check.status,
            horizon_days=check.horizon_days,
            expected_prediction=check.expected_prediction,
            actual_prediction=check.actual_prediction,
            error=check.error,
            latency_ms=check.latency_ms,
            checked_at=check.checked_at,
        )


class AdvisoryCheckDTO(BaseModel):
    """Reachability of the advisory service."""

    status: ServiceStatus
    reachable: bool
    url: str = Field(description="Last URL requested")
    status_code: Optional[int] = None
    error: Optional[str] = None
    latency_ms: Optional[float] = None
    checked_at: datetime

    @classmethod
    def from_domain(cls, check: AdvisoryCheck) -> "AdvisoryCheckDTO":
        return cls(
            status=check.status,
            reachable=check.reachable,
            url=check.url,
            status_code=check.status_code,
            error=check.error,
            latency_ms=check.latency_ms,
            checked_at=check.checked_at,
        )


class SystemHealthDTO(BaseModel):
    """DTO representing the /health response payload."""

    status: ServiceStatus = Field(description="Overall system status")
    forecast_engine: EngineCheckDTO
    advisory: Optional[AdvisoryCheckDTO] = Field(
        default=None, description="Absent when the advisor is disabled"
    )

    @classmethod
    def from_domain(cls, health: SystemHealth) -> "SystemHealthDTO":
        return cls(
            status=health.status,
            forecast_engine=EngineCheckDTO.from_domain(health.engine),
            advisory=(
                AdvisoryCheckDTO.from_domain(health.advisory)
                if health.advisory is not None
                else None
            ),
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "degraded",
                "forecast_engine": {
                    "status": "up",
                    "horizon_days": 30,
                    "expected_prediction": 150,
                    "actual_prediction": 150,
                    "error": None,
                    "latency_ms": 3.2,
                    "checked_at": "2025-03-01T12:00:00Z",
                },
                "advisory": {
                    "status": "down",
                    "reachable": False,
                    "url": "https://llm.example.com/",
                    "status_code": 502,
                    "error": None,
                    "latency_ms": 41.7,
                    "checked_at": "2025-03-01T12:00:00Z",
                },
            }
        }
    }


class ForecastInfoDTO(BaseModel):
    horizon_days: int
    lookback_days: int


class AdvisoryInfoDTO(BaseModel):
    enabled: bool
    api_url: str = Field(description="Configured URL with credentials removed")
    reachable: Optional[bool] = Field(
        default=None, description="Null when the advisor is disabled"
    )


class ApplicationInfoDTO(BaseModel):
    """DTO representing metadata returned by /info."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float = Field(ge=0)
    status: ServiceStatus = Field(description="Overall system status")
    forecast: ForecastInfoDTO
    advisory: AdvisoryInfoDTO

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Stockcast",
                "description": "Demand forecasting service for inventory planning",
                "version": "1.0.0",
                "environment": "development",
                "git_commit": "abcdef1",
                "build_time": "2025-03-01T11:30:00Z",
                "started_at": "2025-03-01T12:00:00Z",
                "uptime_seconds": 3600.5,
                "status": "up",
                "forecast": {"horizon_days": 30, "lookback_days": 90},
                "advisory": {
                    "enabled": True,
                    "api_url": "https://llm.example.com/v1/chat/completions",
                    "reachable": True,
                },
            }
        }
    }
