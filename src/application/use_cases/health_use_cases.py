"""Use cases for health and application info endpoints."""

from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from src.application.dtos.health_dto import (
    AdvisoryInfoDTO,
    ApplicationInfoDTO,
    ForecastInfoDTO,
    SystemHealthDTO,
)
from src.application.models import SystemInfo
from src.domain.ports.health_check import IHealthCheckService


def redact_credentials(url: str) -> str:
    """Drop ``user:password@`` from a URL so it can be shown on /info."""
    parsed = urlsplit(url)
    if not (parsed.username or parsed.password):
        return url
    netloc = parsed.hostname or ""
    if parsed.port:
        netloc = f"{netloc}:{parsed.port}"
    return urlunsplit((parsed.scheme, netloc, parsed.path, parsed.query, parsed.fragment))


class GetHealthStatusUseCase:
    def __init__(self, health_check_service: IHealthCheckService) -> None:
        self._health_check_service = health_check_service

    async def execute(self) -> SystemHealthDTO:
        system_health = await self._health_check_service.evaluate()
        return SystemHealthDTO.from_domain(system_health)


class GetApplicationInfoUseCase:
    """Build metadata, forecast settings and a fresh health summary."""

    def __init__(
        self,
        health_check_service: IHealthCheckService,
        system_info: SystemInfo,
    ) -> None:
        self._health_check_service = health_check_service
        self._info = system_info

    async def execute(self, started_at: Optional[datetime]) -> ApplicationInfoDTO:
        health = await self._health_check_service.evaluate()

        now = datetime.now(timezone.utc)
        started = started_at or now

        return ApplicationInfoDTO(
            name=self._info.title,
            description=self._info.description,
            version=self._info.version,
            environment=self._info.environment,
            git_commit=self._info.git_commit,
            build_time=self._info.build_time,
            started_at=started,
            uptime_seconds=max(0.0, (now - started).total_seconds()),
            status=health.status,
            forecast=ForecastInfoDTO(
                horizon_days=self._info.forecast_horizon_days,
                lookback_days=self._info.forecast_lookback_days,
            ),
            advisory=AdvisoryInfoDTO(
                enabled=self._info.advisory_enabled,
                api_url=redact_credentials(self._info.advisory_api_url),
                reachable=health.advisory.reachable if health.advisory else None,
            ),
        )
