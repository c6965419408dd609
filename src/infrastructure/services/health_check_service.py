"""Infrastructure implementation for system health checks."""

from __future__ import annotations

import asyncio
from datetime import date, timedelta
from time import perf_counter
from typing import Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

import httpx

from src.domain.entities.health import (
    AdvisoryCheck,
    EngineCheck,
    ServiceStatus,
    SystemHealth,
)
from src.domain.entities.sales import SaleObservation
from src.domain.ports.health_check import IHealthCheckService
from src.domain.services.forecast_engine import DemandForecastEngine

SELF_CHECK_PRODUCT = "health-self-check"
SELF_CHECK_QUANTITY = 5
SELF_CHECK_DAYS = 30
_SELF_CHECK_START = date(2000, 1, 1)

# tried in order; the first one answering below 500 marks the service reachable
ADVISORY_PATHS = ("/v1/models", "/")


def _elapsed_ms(start: float) -> float:
    return (perf_counter() - start) * 1000


class HealthCheckService(IHealthCheckService):
    """Forecast a known series and check that the advisory service answers."""

    def __init__(
        self,
        engine: DemandForecastEngine,
        advisory_enabled: bool,
        advisory_url: str,
        *,
        http_timeout: float = 5.0,
    ) -> None:
        self._engine = engine
        self._advisory_enabled = advisory_enabled
        self._advisory_url = advisory_url
        self._http_timeout = http_timeout

    async def evaluate(self) -> SystemHealth:
        advisory_task = (
            asyncio.create_task(self._check_advisory())
            if self._advisory_enabled
            else None
        )
        engine = self._check_engine()
        advisory = await advisory_task if advisory_task is not None else None

        return SystemHealth(
            status=self._aggregate_status(engine, advisory),
            engine=engine,
            advisory=advisory,
        )

    @staticmethod
    def _aggregate_status(
        engine: EngineCheck, advisory: Optional[AdvisoryCheck]
    ) -> ServiceStatus:
        if engine.status is ServiceStatus.DOWN:
            return ServiceStatus.DOWN
        # forecasts still work without the advisory service
        if engine.status is ServiceStatus.DEGRADED or (
            advisory is not None and not advisory.reachable
        ):
            return ServiceStatus.DEGRADED
        return ServiceStatus.UP

    def _check_engine(self) -> EngineCheck:
        """A flat series of 5 units/day must forecast exactly 5 × horizon."""

        horizon = self._engine.config.horizon_days
        expected = SELF_CHECK_QUANTITY * horizon
        observations = [
            SaleObservation(
                product_id=SELF_CHECK_PRODUCT,
                sale_date=_SELF_CHECK_START + timedelta(days=offset),
                quantity=SELF_CHECK_QUANTITY,
            )
            for offset in range(SELF_CHECK_DAYS)
        ]

        start = perf_counter()
        try:
            forecast = self._engine.forecast(SELF_CHECK_PRODUCT, observations)
        except Exception as exc:
            return EngineCheck(
                status=ServiceStatus.DOWN,
                horizon_days=horizon,
                expected_prediction=expected,
                error=str(exc),
                latency_ms=_elapsed_ms(start),
            )

        actual = forecast.predicted_demand
        return EngineCheck(
            status=ServiceStatus.UP if actual == expected else ServiceStatus.DEGRADED,
            horizon_days=horizon,
            expected_prediction=expected,
            actual_prediction=actual,
            latency_ms=_elapsed_ms(start),
        )

    async def _check_advisory(self) -> AdvisoryCheck:
        root = self._service_root(self._advisory_url)
        if not root:
            return AdvisoryCheck(
                status=ServiceStatus.DOWN,
                url=self._advisory_url,
                error="Advisory URL not configured",
            )

        result: Optional[AdvisoryCheck] = None
        for path in ADVISORY_PATHS:
            result = await self._request_status(self._normalize_url(root, path))
            if result.reachable:
                break
        return result

    async def _request_status(self, url: str) -> AdvisoryCheck:
        start = perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self._http_timeout) as client:
                response = await client.get(url)
        except httpx.RequestError as exc:
            return AdvisoryCheck(
                status=ServiceStatus.DOWN,
                url=url,
                error=f"HTTP request failed: {exc}",
                latency_ms=_elapsed_ms(start),
            )

        # 401/403/404 still prove the host answers
        status_code = response.status_code
        return AdvisoryCheck(
            status=ServiceStatus.DOWN if status_code >= 500 else ServiceStatus.UP,
            url=url,
            status_code=status_code,
            latency_ms=_elapsed_ms(start),
        )

    @staticmethod
    def _service_root(url: str) -> str:
        if not url:
            return url
        parsed = urlsplit(url)
        if not parsed.scheme or not parsed.netloc:
            return ""
        return urlunsplit((parsed.scheme, parsed.netloc, "", "", ""))

    @staticmethod
    def _normalize_url(base_url: str, path: str) -> str:
        base = base_url if base_url.endswith("/") else f"{base_url}/"
        return urljoin(base, path.lstrip("/"))
