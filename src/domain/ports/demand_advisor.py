"""Domain port for the optional demand advisory service."""

from __future__ import annotations

from typing import Optional, Protocol

from src.domain.entities.forecast import AdvisoryRequest


class IDemandAdvisor(Protocol):
    """Second-opinion provider consulted after the statistical ensemble."""

    available: bool

    async def suggest(self, request: AdvisoryRequest) -> Optional[float]:
        """Return an alternative horizon prediction, or ``None`` if unavailable.

        Implementations should not raise; callers still guard against it.
        """
        ...
