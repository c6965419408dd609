"""Port for the service health checks."""

from __future__ import annotations

from typing import Protocol

from src.domain.entities.health import SystemHealth


class IHealthCheckService(Protocol):
    """Reports the state of the forecast engine and its optional advisor."""

    async def evaluate(self) -> SystemHealth:
        """Check the engine and the advisory service, then aggregate the status."""
        ...
